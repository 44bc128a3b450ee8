"""Progress tracking service.

Business logic for:
- Course enrollment (one per student and course)
- Completion events with optional quiz score
- Progress percentage recalculation
- Progress reads for the student and the course instructor
"""

from uuid import UUID

import structlog

from src.auth.permissions import UserRole, can_view_enrollment_progress, owns_course
from src.courses.service import CourseService
from src.progress.calculator import completion_percentage
from src.progress.models import Enrollment, ProgressRecord
from src.progress.repository import ProgressRepository
from src.utils import utcnow


logger = structlog.get_logger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ProgressError(Exception):
    """Base progress error."""

    def __init__(self, message: str, code: str = "progress_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CourseNotFoundError(ProgressError):
    def __init__(self, message: str = "Course not found"):
        super().__init__(message, "course_not_found")


class EnrollmentNotFoundError(ProgressError):
    def __init__(self, message: str = "Enrollment not found"):
        super().__init__(message, "enrollment_not_found")


class AlreadyEnrolledError(ProgressError):
    def __init__(self, message: str = "You are already enrolled in this course"):
        super().__init__(message, "already_enrolled")


class NotEnrollmentOwnerError(ProgressError):
    def __init__(self, message: str = "This is not your enrollment"):
        super().__init__(message, "not_enrollment_owner")


class ProgressAccessDeniedError(ProgressError):
    def __init__(self, message: str = "You cannot view this progress"):
        super().__init__(message, "access_denied")


class NotCourseOwnerError(ProgressError):
    def __init__(self, message: str = "You do not own this course"):
        super().__init__(message, "not_course_owner")


class CrossCourseContentError(ProgressError):
    """Content item does not resolve to the enrollment's course."""

    def __init__(
        self, message: str = "Content item does not belong to the enrolled course"
    ):
        super().__init__(message, "cross_course_content")


class InvalidScoreError(ProgressError):
    def __init__(self, message: str = "Score must be between 0 and 100"):
        super().__init__(message, "invalid_score")


# ==============================================================================
# Progress Service
# ==============================================================================


class ProgressService:
    """Service for enrollments and progress tracking.

    The content catalog is only read, never written.
    """

    def __init__(self, repository: ProgressRepository, catalog: CourseService):
        self.repository = repository
        self.catalog = catalog

    # ==========================================================================
    # Enrollment Operations
    # ==========================================================================

    async def enroll(self, user_id: UUID, course_id: UUID) -> Enrollment:
        """Enroll a student in a course.

        Raises:
            CourseNotFoundError: Unknown course
            AlreadyEnrolledError: The student already holds an enrollment
        """
        if not await self.catalog.find_course(course_id):
            raise CourseNotFoundError

        enrollment = Enrollment(user_id=user_id, course_id=course_id)
        if not await self.repository.create_enrollment(enrollment):
            raise AlreadyEnrolledError

        logger.info(
            "user_enrolled",
            user_id=str(user_id),
            course_id=str(course_id),
            enrollment_id=str(enrollment.id),
        )
        return enrollment

    async def list_my_enrollments(self, user_id: UUID) -> list[Enrollment]:
        """Enrollments of a student, newest first."""
        enrollments = await self.repository.list_user_enrollments(user_id)
        return sorted(enrollments, key=lambda e: e.enrolled_at, reverse=True)

    async def list_course_enrollments(
        self, user_id: UUID, course_id: UUID
    ) -> list[Enrollment]:
        """Enrollments of a course, for its owning instructor only."""
        course = await self.catalog.find_course(course_id)
        if not course:
            raise CourseNotFoundError
        if not owns_course(user_id, course.instructor_id):
            raise NotCourseOwnerError

        enrollments = await self.repository.list_course_enrollments(course_id)
        return sorted(enrollments, key=lambda e: e.enrolled_at, reverse=True)

    async def get_enrollment(self, enrollment_id: UUID) -> Enrollment:
        enrollment = await self.repository.get_enrollment(enrollment_id)
        if not enrollment:
            raise EnrollmentNotFoundError
        return enrollment

    # ==========================================================================
    # Completion
    # ==========================================================================

    async def record_completion(
        self,
        user_id: UUID,
        enrollment_id: UUID,
        content_id: UUID,
        score: float | None = None,
    ) -> ProgressRecord:
        """Mark a content item complete and recompute the enrollment progress.

        Retakes overwrite the stored score (latest attempt wins); omitting the
        score keeps the previous one. All checks run before any write. The
        record upsert and the enrollment update are two separate writes with
        no rollback.

        Raises:
            InvalidScoreError: Score outside 0..100
            EnrollmentNotFoundError: Unknown enrollment
            NotEnrollmentOwnerError: Enrollment belongs to another student
            CrossCourseContentError: Content is unknown, orphaned from its
                week, or part of another course
        """
        if score is not None and not MIN_SCORE <= score <= MAX_SCORE:
            raise InvalidScoreError

        enrollment = await self.get_enrollment(enrollment_id)
        if str(enrollment.user_id) != str(user_id):
            raise NotEnrollmentOwnerError

        item = await self.catalog.find_content(content_id)
        week = await self.catalog.find_week(item.week_id) if item else None
        if week is None or week.course_id != enrollment.course_id:
            logger.warning(
                "cross_course_content_rejected",
                enrollment_id=str(enrollment.id),
                content_id=str(content_id),
            )
            raise CrossCourseContentError

        record = await self.repository.get_progress(enrollment.id, content_id)
        previous_score = record.score if record else None
        record = ProgressRecord(
            enrollment_id=enrollment.id,
            content_id=content_id,
            completed=True,
            score=score if score is not None else previous_score,
            completed_at=utcnow(),
        )
        await self.repository.save_progress(record)

        await self._recalculate(enrollment, week_id=week.id, content_id=content_id)

        logger.info(
            "progress_recorded",
            enrollment_id=str(enrollment.id),
            content_id=str(content_id),
            score=record.score,
            progress_percentage=enrollment.progress_percentage,
        )
        return record

    async def _recalculate(
        self, enrollment: Enrollment, week_id: UUID, content_id: UUID
    ) -> None:
        """Rewrite the cached percentage and move the "current" pointers."""
        total = await self.catalog.count_course_content(enrollment.course_id)
        records = await self.repository.list_progress(enrollment.id)
        done = sum(1 for r in records if r.completed)

        enrollment.progress_percentage = completion_percentage(done, total)
        enrollment.current_week_id = week_id
        enrollment.current_content_id = content_id
        await self.repository.update_enrollment_progress(enrollment)

    # ==========================================================================
    # Reads
    # ==========================================================================

    async def list_enrollment_progress(
        self, user_id: UUID, role: UserRole, enrollment_id: UUID
    ) -> list[ProgressRecord]:
        """Progress records of an enrollment.

        Readable by the enrolled student and by the instructor owning the
        course.
        """
        enrollment = await self.get_enrollment(enrollment_id)
        course = await self.catalog.find_course(enrollment.course_id)
        owner_id = course.instructor_id if course else None

        if not can_view_enrollment_progress(
            role, user_id, enrollment.user_id, owner_id
        ):
            raise ProgressAccessDeniedError

        return await self.repository.list_progress(enrollment.id)
