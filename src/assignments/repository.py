"""Assignment and submission storage."""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from src.assignments.models import Assignment, Submission


if TYPE_CHECKING:
    from cassandra.cluster import Session


class AssignmentRepository(Protocol):
    async def create_assignment(self, assignment: Assignment) -> None: ...

    async def get_assignment(self, assignment_id: UUID) -> Assignment | None: ...

    async def list_course_assignments(self, course_id: UUID) -> list[Assignment]: ...

    async def create_submission(self, submission: Submission) -> bool:
        """Insert the submission; False when the user already submitted."""
        ...

    async def get_submission(self, submission_id: UUID) -> Submission | None: ...

    async def list_user_submissions(self, user_id: UUID) -> list[Submission]: ...

    async def list_assignment_submissions(
        self, assignment_id: UUID
    ) -> list[Submission]: ...

    async def save_grade(self, submission: Submission) -> None: ...


class CassandraAssignmentRepository:
    """Assignment repository backed by Cassandra."""

    def __init__(self, session: "Session", keyspace: str):
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        ks = self.keyspace

        self._insert_assignment = self.session.prepare(f"""
            INSERT INTO {ks}.assignments
            (id, course_id, title, description, due_date, total_points, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """)
        self._insert_assignment_by_course = self.session.prepare(f"""
            INSERT INTO {ks}.assignments_by_course (course_id, due_date, assignment_id)
            VALUES (?, ?, ?)
        """)
        self._get_assignment = self.session.prepare(
            f"SELECT * FROM {ks}.assignments WHERE id = ?"
        )
        self._list_course_assignment_ids = self.session.prepare(
            f"SELECT assignment_id FROM {ks}.assignments_by_course WHERE course_id = ?"
        )

        self._claim_submission = self.session.prepare(f"""
            INSERT INTO {ks}.submissions_by_user (user_id, assignment_id, submission_id)
            VALUES (?, ?, ?) IF NOT EXISTS
        """)
        self._insert_submission = self.session.prepare(f"""
            INSERT INTO {ks}.submissions
            (id, assignment_id, user_id, status, grade, feedback, submitted_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """)
        self._insert_submission_by_assignment = self.session.prepare(f"""
            INSERT INTO {ks}.submissions_by_assignment
            (assignment_id, submission_id, user_id)
            VALUES (?, ?, ?)
        """)
        self._get_submission = self.session.prepare(
            f"SELECT * FROM {ks}.submissions WHERE id = ?"
        )
        self._list_user_submission_ids = self.session.prepare(
            f"SELECT submission_id FROM {ks}.submissions_by_user WHERE user_id = ?"
        )
        self._list_assignment_submission_ids = self.session.prepare(f"""
            SELECT submission_id FROM {ks}.submissions_by_assignment
            WHERE assignment_id = ?
        """)
        self._update_grade = self.session.prepare(f"""
            UPDATE {ks}.submissions SET status = ?, grade = ?, feedback = ?
            WHERE id = ?
        """)

    # ==========================================================================
    # Assignments
    # ==========================================================================

    async def create_assignment(self, assignment: Assignment) -> None:
        await self.session.aexecute(
            self._insert_assignment,
            [
                assignment.id,
                assignment.course_id,
                assignment.title,
                assignment.description,
                assignment.due_date,
                assignment.total_points,
                assignment.created_at,
            ],
        )
        await self.session.aexecute(
            self._insert_assignment_by_course,
            [assignment.course_id, assignment.due_date, assignment.id],
        )

    async def get_assignment(self, assignment_id: UUID) -> Assignment | None:
        result = await self.session.aexecute(self._get_assignment, [assignment_id])
        row = result.one()
        return Assignment.from_row(row) if row else None

    async def list_course_assignments(self, course_id: UUID) -> list[Assignment]:
        rows = await self.session.aexecute(
            self._list_course_assignment_ids, [course_id]
        )
        assignments = []
        for row in rows:
            assignment = await self.get_assignment(row.assignment_id)
            if assignment:
                assignments.append(assignment)
        return assignments

    # ==========================================================================
    # Submissions
    # ==========================================================================

    async def create_submission(self, submission: Submission) -> bool:
        claimed = await self.session.aexecute(
            self._claim_submission,
            [submission.user_id, submission.assignment_id, submission.id],
        )
        if not claimed.was_applied:
            return False

        await self.session.aexecute(
            self._insert_submission,
            [
                submission.id,
                submission.assignment_id,
                submission.user_id,
                submission.status,
                submission.grade,
                submission.feedback,
                submission.submitted_at,
            ],
        )
        await self.session.aexecute(
            self._insert_submission_by_assignment,
            [submission.assignment_id, submission.id, submission.user_id],
        )
        return True

    async def get_submission(self, submission_id: UUID) -> Submission | None:
        result = await self.session.aexecute(self._get_submission, [submission_id])
        row = result.one()
        return Submission.from_row(row) if row else None

    async def _load_submissions(self, rows) -> list[Submission]:
        submissions = []
        for row in rows:
            submission = await self.get_submission(row.submission_id)
            if submission:
                submissions.append(submission)
        return submissions

    async def list_user_submissions(self, user_id: UUID) -> list[Submission]:
        rows = await self.session.aexecute(self._list_user_submission_ids, [user_id])
        return await self._load_submissions(rows)

    async def list_assignment_submissions(
        self, assignment_id: UUID
    ) -> list[Submission]:
        rows = await self.session.aexecute(
            self._list_assignment_submission_ids, [assignment_id]
        )
        return await self._load_submissions(rows)

    async def save_grade(self, submission: Submission) -> None:
        await self.session.aexecute(
            self._update_grade,
            [submission.status, submission.grade, submission.feedback, submission.id],
        )
