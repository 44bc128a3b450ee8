"""Enrollment and progress storage.

``ProgressRepository`` is the contract the progress and analytics services
depend on; ``CassandraProgressRepository`` implements it.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from src.progress.models import Enrollment, ProgressRecord


if TYPE_CHECKING:
    from cassandra.cluster import Session


class ProgressRepository(Protocol):
    async def create_enrollment(self, enrollment: Enrollment) -> bool:
        """Insert the enrollment; False when (user, course) is already enrolled."""
        ...

    async def get_enrollment(self, enrollment_id: UUID) -> Enrollment | None: ...

    async def list_user_enrollments(self, user_id: UUID) -> list[Enrollment]: ...

    async def list_course_enrollments(self, course_id: UUID) -> list[Enrollment]: ...

    async def update_enrollment_progress(self, enrollment: Enrollment) -> None: ...

    async def get_progress(
        self, enrollment_id: UUID, content_id: UUID
    ) -> ProgressRecord | None: ...

    async def save_progress(self, record: ProgressRecord) -> None: ...

    async def list_progress(self, enrollment_id: UUID) -> list[ProgressRecord]: ...


class CassandraProgressRepository:
    """Progress repository backed by Cassandra."""

    def __init__(self, session: "Session", keyspace: str):
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        ks = self.keyspace

        # Enrollments
        self._claim_enrollment = self.session.prepare(f"""
            INSERT INTO {ks}.enrollments_by_user
            (user_id, course_id, enrollment_id, enrolled_at)
            VALUES (?, ?, ?, ?) IF NOT EXISTS
        """)
        self._insert_enrollment = self.session.prepare(f"""
            INSERT INTO {ks}.enrollments
            (id, user_id, course_id, progress_percentage,
             current_week_id, current_content_id, enrolled_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """)
        self._insert_enrollment_by_course = self.session.prepare(f"""
            INSERT INTO {ks}.enrollments_by_course
            (course_id, enrolled_at, enrollment_id, user_id)
            VALUES (?, ?, ?, ?)
        """)
        self._get_enrollment = self.session.prepare(
            f"SELECT * FROM {ks}.enrollments WHERE id = ?"
        )
        self._get_user_enrollment_ids = self.session.prepare(
            f"SELECT enrollment_id FROM {ks}.enrollments_by_user WHERE user_id = ?"
        )
        self._get_course_enrollment_ids = self.session.prepare(
            f"SELECT enrollment_id FROM {ks}.enrollments_by_course WHERE course_id = ?"
        )
        self._update_enrollment_progress = self.session.prepare(f"""
            UPDATE {ks}.enrollments
            SET progress_percentage = ?, current_week_id = ?, current_content_id = ?
            WHERE id = ?
        """)

        # Progress records
        self._get_progress = self.session.prepare(f"""
            SELECT * FROM {ks}.progress_records
            WHERE enrollment_id = ? AND content_id = ?
        """)
        self._upsert_progress = self.session.prepare(f"""
            INSERT INTO {ks}.progress_records
            (enrollment_id, content_id, completed, score, completed_at)
            VALUES (?, ?, ?, ?, ?)
        """)
        self._list_progress = self.session.prepare(
            f"SELECT * FROM {ks}.progress_records WHERE enrollment_id = ?"
        )

    # ==========================================================================
    # Enrollments
    # ==========================================================================

    async def create_enrollment(self, enrollment: Enrollment) -> bool:
        claimed = await self.session.aexecute(
            self._claim_enrollment,
            [
                enrollment.user_id,
                enrollment.course_id,
                enrollment.id,
                enrollment.enrolled_at,
            ],
        )
        if not claimed.was_applied:
            return False

        await self.session.aexecute(
            self._insert_enrollment,
            [
                enrollment.id,
                enrollment.user_id,
                enrollment.course_id,
                enrollment.progress_percentage,
                enrollment.current_week_id,
                enrollment.current_content_id,
                enrollment.enrolled_at,
            ],
        )
        await self.session.aexecute(
            self._insert_enrollment_by_course,
            [
                enrollment.course_id,
                enrollment.enrolled_at,
                enrollment.id,
                enrollment.user_id,
            ],
        )
        return True

    async def get_enrollment(self, enrollment_id: UUID) -> Enrollment | None:
        result = await self.session.aexecute(self._get_enrollment, [enrollment_id])
        row = result.one()
        return Enrollment.from_row(row) if row else None

    async def _load_enrollments(self, rows) -> list[Enrollment]:
        enrollments = []
        for row in rows:
            enrollment = await self.get_enrollment(row.enrollment_id)
            if enrollment:
                enrollments.append(enrollment)
        return enrollments

    async def list_user_enrollments(self, user_id: UUID) -> list[Enrollment]:
        rows = await self.session.aexecute(self._get_user_enrollment_ids, [user_id])
        return await self._load_enrollments(rows)

    async def list_course_enrollments(self, course_id: UUID) -> list[Enrollment]:
        rows = await self.session.aexecute(
            self._get_course_enrollment_ids, [course_id]
        )
        return await self._load_enrollments(rows)

    async def update_enrollment_progress(self, enrollment: Enrollment) -> None:
        await self.session.aexecute(
            self._update_enrollment_progress,
            [
                enrollment.progress_percentage,
                enrollment.current_week_id,
                enrollment.current_content_id,
                enrollment.id,
            ],
        )

    # ==========================================================================
    # Progress records
    # ==========================================================================

    async def get_progress(
        self, enrollment_id: UUID, content_id: UUID
    ) -> ProgressRecord | None:
        result = await self.session.aexecute(
            self._get_progress, [enrollment_id, content_id]
        )
        row = result.one()
        return ProgressRecord.from_row(row) if row else None

    async def save_progress(self, record: ProgressRecord) -> None:
        await self.session.aexecute(
            self._upsert_progress,
            [
                record.enrollment_id,
                record.content_id,
                record.completed,
                record.score,
                record.completed_at,
            ],
        )

    async def list_progress(self, enrollment_id: UUID) -> list[ProgressRecord]:
        rows = await self.session.aexecute(self._list_progress, [enrollment_id])
        return [ProgressRecord.from_row(row) for row in rows]
