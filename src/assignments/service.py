"""Assignments service layer.

Business logic for:
- Assignments of a course, created by the owning instructor
- Student submissions (one per assignment)
- Grading by the owning instructor
"""

from uuid import UUID

import structlog

from src.assignments.models import Assignment, Submission, SubmissionStatus
from src.assignments.repository import AssignmentRepository
from src.assignments.schemas import CreateAssignmentRequest, GradeSubmissionRequest
from src.auth.permissions import owns_course
from src.courses.service import CourseService
from src.utils import utcnow


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class AssignmentError(Exception):
    """Base assignment error."""

    def __init__(self, message: str, code: str = "assignment_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CourseNotFoundError(AssignmentError):
    def __init__(self, message: str = "Course not found"):
        super().__init__(message, "course_not_found")


class AssignmentNotFoundError(AssignmentError):
    def __init__(self, message: str = "Assignment not found"):
        super().__init__(message, "assignment_not_found")


class SubmissionNotFoundError(AssignmentError):
    def __init__(self, message: str = "Submission not found"):
        super().__init__(message, "submission_not_found")


class AlreadySubmittedError(AssignmentError):
    def __init__(self, message: str = "You have already submitted this assignment"):
        super().__init__(message, "already_submitted")


class NotCourseOwnerError(AssignmentError):
    def __init__(self, message: str = "You do not own the course for this assignment"):
        super().__init__(message, "not_course_owner")


class InvalidGradeError(AssignmentError):
    def __init__(self, message: str = "Grade is out of range"):
        super().__init__(message, "invalid_grade")


# ==============================================================================
# Assignment Service
# ==============================================================================


class AssignmentService:
    """Service for assignments and submissions."""

    def __init__(self, repository: AssignmentRepository, catalog: CourseService):
        self.repository = repository
        self.catalog = catalog

    async def _course_owner(self, course_id: UUID) -> UUID | None:
        course = await self.catalog.find_course(course_id)
        if not course:
            raise CourseNotFoundError
        return course.instructor_id

    # ==========================================================================
    # Assignments
    # ==========================================================================

    async def create_assignment(
        self, data: CreateAssignmentRequest, user_id: UUID
    ) -> Assignment:
        if not owns_course(user_id, await self._course_owner(data.course_id)):
            raise NotCourseOwnerError("You do not own this course")

        assignment = Assignment(
            course_id=data.course_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            total_points=data.total_points,
        )
        await self.repository.create_assignment(assignment)

        logger.info(
            "assignment_created",
            assignment_id=str(assignment.id),
            course_id=str(assignment.course_id),
        )
        return assignment

    async def list_course_assignments(self, course_id: UUID) -> list[Assignment]:
        """Assignments of a course sorted by due date."""
        await self._course_owner(course_id)
        assignments = await self.repository.list_course_assignments(course_id)
        return sorted(assignments, key=lambda a: a.due_date)

    async def get_assignment(self, assignment_id: UUID) -> Assignment:
        assignment = await self.repository.get_assignment(assignment_id)
        if not assignment:
            raise AssignmentNotFoundError
        return assignment

    # ==========================================================================
    # Submissions
    # ==========================================================================

    async def submit(self, user_id: UUID, assignment_id: UUID) -> Submission:
        """Submit an assignment; resubmission is not allowed."""
        assignment = await self.get_assignment(assignment_id)

        submission = Submission(
            assignment_id=assignment.id,
            user_id=user_id,
            status=SubmissionStatus.SUBMITTED.value,
            submitted_at=utcnow(),
        )
        if not await self.repository.create_submission(submission):
            raise AlreadySubmittedError

        logger.info(
            "assignment_submitted",
            submission_id=str(submission.id),
            assignment_id=str(assignment.id),
        )
        return submission

    async def list_my_submissions(self, user_id: UUID) -> list[Submission]:
        """Submissions of a student, most recent first."""
        submissions = await self.repository.list_user_submissions(user_id)
        return sorted(
            submissions,
            key=lambda s: s.submitted_at.timestamp() if s.submitted_at else 0.0,
            reverse=True,
        )

    async def list_assignment_submissions(
        self, user_id: UUID, assignment_id: UUID
    ) -> list[Submission]:
        """Submissions of an assignment, for the owning instructor."""
        assignment = await self.get_assignment(assignment_id)
        if not owns_course(user_id, await self._course_owner(assignment.course_id)):
            raise NotCourseOwnerError
        return await self.repository.list_assignment_submissions(assignment.id)

    async def grade(
        self, user_id: UUID, submission_id: UUID, data: GradeSubmissionRequest
    ) -> Submission:
        """Grade a submission and move it to Graded.

        Raises:
            SubmissionNotFoundError: Unknown submission
            NotCourseOwnerError: Caller does not own the assignment's course
            InvalidGradeError: Grade outside ``0..total_points``
        """
        submission = await self.repository.get_submission(submission_id)
        if not submission:
            raise SubmissionNotFoundError

        assignment = await self.repository.get_assignment(submission.assignment_id)
        owner_id = None
        if assignment:
            course = await self.catalog.find_course(assignment.course_id)
            owner_id = course.instructor_id if course else None
        if not owns_course(user_id, owner_id):
            raise NotCourseOwnerError

        if not 0 <= data.grade <= assignment.total_points:
            raise InvalidGradeError(
                f"Grade must be between 0 and {assignment.total_points}"
            )

        submission.grade = data.grade
        submission.feedback = data.feedback or ""
        submission.status = SubmissionStatus.GRADED.value
        await self.repository.save_grade(submission)

        logger.info(
            "submission_graded",
            submission_id=str(submission.id),
            grade=submission.grade,
        )
        return submission
