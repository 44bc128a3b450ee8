"""Tests for enrollments and completion tracking."""

from uuid import UUID, uuid4

import pytest

from src.auth.permissions import UserRole
from src.courses.schemas import CreateContentRequest, CreateCourseRequest, CreateWeekRequest
from src.courses.service import CourseService
from src.main import Repositories
from src.progress.service import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    CrossCourseContentError,
    EnrollmentNotFoundError,
    InvalidScoreError,
    NotCourseOwnerError,
    NotEnrollmentOwnerError,
    ProgressAccessDeniedError,
    ProgressService,
)


async def build_course(
    catalog: CourseService, instructor_id: UUID, items: int
) -> tuple[UUID, list[UUID]]:
    """A one-week course with ``items`` quiz items; returns (course, contents)."""
    course = await catalog.create_course(
        CreateCourseRequest(title="Course", description="Description"), instructor_id
    )
    if items == 0:
        return course.id, []

    week = await catalog.create_week(
        course.id,
        CreateWeekRequest(week_number=1, title="Week 1", order=1),
        instructor_id,
    )
    content_ids = []
    for order in range(items):
        item = await catalog.create_content(
            week.id,
            CreateContentRequest(title=f"Quiz {order}", content_type="quiz", order=order),
            instructor_id,
        )
        content_ids.append(item.id)
    return course.id, content_ids


class TestEnroll:
    """ProgressService.enroll."""

    @pytest.mark.asyncio
    async def test_new_enrollment_starts_at_zero(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, _ = await build_course(course_service, instructor_id, items=2)

        enrollment = await progress_service.enroll(student_id, course_id)

        assert enrollment.progress_percentage == 0
        assert enrollment.current_week_id is None
        assert enrollment.current_content_id is None

    @pytest.mark.asyncio
    async def test_unknown_course(
        self, progress_service: ProgressService, student_id: UUID
    ) -> None:
        with pytest.raises(CourseNotFoundError):
            await progress_service.enroll(student_id, uuid4())

    @pytest.mark.asyncio
    async def test_second_enrollment_rejected(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, _ = await build_course(course_service, instructor_id, items=1)
        await progress_service.enroll(student_id, course_id)

        with pytest.raises(AlreadyEnrolledError):
            await progress_service.enroll(student_id, course_id)

        assert len(await progress_service.list_my_enrollments(student_id)) == 1

    @pytest.mark.asyncio
    async def test_course_enrollments_for_owner_only(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, _ = await build_course(course_service, instructor_id, items=1)
        await progress_service.enroll(student_id, course_id)

        listed = await progress_service.list_course_enrollments(instructor_id, course_id)
        assert [e.user_id for e in listed] == [student_id]

        with pytest.raises(NotCourseOwnerError):
            await progress_service.list_course_enrollments(uuid4(), course_id)


class TestRecordCompletion:
    """ProgressService.record_completion and the cached percentage."""

    @pytest.mark.asyncio
    async def test_empty_course_stays_at_zero(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, _ = await build_course(course_service, instructor_id, items=0)
        enrollment = await progress_service.enroll(student_id, course_id)

        assert enrollment.progress_percentage == 0
        assert await course_service.count_course_content(course_id) == 0

    @pytest.mark.asyncio
    async def test_three_of_four_then_all(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, contents = await build_course(course_service, instructor_id, items=4)
        enrollment = await progress_service.enroll(student_id, course_id)

        for content_id in contents[:3]:
            await progress_service.record_completion(
                student_id, enrollment.id, content_id
            )
        after_three = await progress_service.get_enrollment(enrollment.id)

        await progress_service.record_completion(
            student_id, enrollment.id, contents[3]
        )
        after_four = await progress_service.get_enrollment(enrollment.id)

        assert after_three.progress_percentage == 75
        assert after_four.progress_percentage == 100
        assert after_four.current_content_id == contents[3]
        assert after_four.current_week_id is not None

    @pytest.mark.asyncio
    async def test_repeat_completion_counts_once(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, contents = await build_course(course_service, instructor_id, items=2)
        enrollment = await progress_service.enroll(student_id, course_id)

        for _ in range(3):
            await progress_service.record_completion(
                student_id, enrollment.id, contents[0]
            )

        stored = await progress_service.get_enrollment(enrollment.id)
        records = await progress_service.list_enrollment_progress(
            student_id, UserRole.STUDENT, enrollment.id
        )
        assert stored.progress_percentage == 50
        assert len(records) == 1

    @pytest.mark.asyncio
    async def test_latest_score_wins(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, contents = await build_course(course_service, instructor_id, items=1)
        enrollment = await progress_service.enroll(student_id, course_id)

        await progress_service.record_completion(
            student_id, enrollment.id, contents[0], score=90
        )
        await progress_service.record_completion(
            student_id, enrollment.id, contents[0], score=40
        )
        record = await progress_service.record_completion(
            student_id, enrollment.id, contents[0]
        )

        # No score given keeps the previous one
        assert record.score == 40
        assert record.completed is True

    @pytest.mark.asyncio
    async def test_cross_course_content_changes_nothing(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        repositories,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_a, _ = await build_course(course_service, instructor_id, items=2)
        _, contents_b = await build_course(course_service, instructor_id, items=1)
        enrollment = await progress_service.enroll(student_id, course_a)

        with pytest.raises(CrossCourseContentError):
            await progress_service.record_completion(
                student_id, enrollment.id, contents_b[0], score=100
            )

        stored = await progress_service.get_enrollment(enrollment.id)
        assert stored.progress_percentage == 0
        assert stored.current_content_id is None
        assert repositories.progress.records == {}

    @pytest.mark.asyncio
    async def test_unknown_content_rejected(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, _ = await build_course(course_service, instructor_id, items=1)
        enrollment = await progress_service.enroll(student_id, course_id)

        with pytest.raises(CrossCourseContentError):
            await progress_service.record_completion(student_id, enrollment.id, uuid4())

    @pytest.mark.asyncio
    async def test_content_without_week_rejected(
        self,
        repositories: Repositories,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        """Content whose week is gone belongs to no course and writes nothing."""
        course_id, contents = await build_course(course_service, instructor_id, items=2)
        enrollment = await progress_service.enroll(student_id, course_id)
        await progress_service.record_completion(student_id, enrollment.id, contents[0])
        repositories.courses.content[contents[1]].week_id = uuid4()

        with pytest.raises(CrossCourseContentError):
            await progress_service.record_completion(
                student_id, enrollment.id, contents[1], score=90
            )

        assert len(repositories.progress.records) == 1
        stored = await progress_service.get_enrollment(enrollment.id)
        assert stored.progress_percentage == 50

    @pytest.mark.asyncio
    async def test_other_students_enrollment(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, contents = await build_course(course_service, instructor_id, items=1)
        enrollment = await progress_service.enroll(student_id, course_id)

        with pytest.raises(NotEnrollmentOwnerError):
            await progress_service.record_completion(uuid4(), enrollment.id, contents[0])

    @pytest.mark.asyncio
    async def test_unknown_enrollment(
        self, progress_service: ProgressService, student_id: UUID
    ) -> None:
        with pytest.raises(EnrollmentNotFoundError):
            await progress_service.record_completion(student_id, uuid4(), uuid4())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("score", [-1, 100.5, 101])
    async def test_score_out_of_range(
        self, progress_service: ProgressService, student_id: UUID, score: float
    ) -> None:
        with pytest.raises(InvalidScoreError):
            await progress_service.record_completion(
                student_id, uuid4(), uuid4(), score=score
            )


class TestProgressReads:
    """ProgressService.list_enrollment_progress access rules."""

    @pytest.mark.asyncio
    async def test_readers(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
    ) -> None:
        course_id, contents = await build_course(course_service, instructor_id, items=1)
        enrollment = await progress_service.enroll(student_id, course_id)
        await progress_service.record_completion(
            student_id, enrollment.id, contents[0], score=80
        )

        own = await progress_service.list_enrollment_progress(
            student_id, UserRole.STUDENT, enrollment.id
        )
        owner = await progress_service.list_enrollment_progress(
            instructor_id, UserRole.INSTRUCTOR, enrollment.id
        )

        assert [r.score for r in own] == [80]
        assert [r.content_id for r in owner] == [contents[0]]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [UserRole.STUDENT, UserRole.INSTRUCTOR])
    async def test_strangers_denied(
        self,
        progress_service: ProgressService,
        course_service: CourseService,
        instructor_id: UUID,
        student_id: UUID,
        role: UserRole,
    ) -> None:
        course_id, _ = await build_course(course_service, instructor_id, items=1)
        enrollment = await progress_service.enroll(student_id, course_id)

        with pytest.raises(ProgressAccessDeniedError):
            await progress_service.list_enrollment_progress(
                uuid4(), role, enrollment.id
            )
