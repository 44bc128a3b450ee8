"""Content catalog service layer.

Business logic for:
- Courses: create, read, update by the owning instructor
- Weeks and content items ordered by ``order``
- Quiz questions
- Read-only lookups used by progress and analytics
"""

from uuid import UUID

import structlog

from src.auth.permissions import owns_course
from src.courses.models import ContentItem, Course, QuizQuestion, Week
from src.courses.repository import CourseRepository
from src.courses.schemas import (
    CourseResponse,
    CreateContentRequest,
    CreateCourseRequest,
    CreateQuestionRequest,
    CreateWeekRequest,
    UpdateContentRequest,
    UpdateCourseRequest,
)
from src.utils import utcnow


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class CourseError(Exception):
    """Base course error."""

    def __init__(self, message: str, code: str = "course_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CourseNotFoundError(CourseError):
    def __init__(self, message: str = "Course not found"):
        super().__init__(message, "course_not_found")


class WeekNotFoundError(CourseError):
    def __init__(self, message: str = "Week not found"):
        super().__init__(message, "week_not_found")


class ContentNotFoundError(CourseError):
    def __init__(self, message: str = "Content item not found"):
        super().__init__(message, "content_not_found")


class NotCourseOwnerError(CourseError):
    """Acting instructor does not own the course."""

    def __init__(self, message: str = "You do not own this course"):
        super().__init__(message, "not_course_owner")


class NotAQuizError(CourseError):
    def __init__(self, message: str = "Content item is not a quiz"):
        super().__init__(message, "not_a_quiz")


class QuizBodyTextError(CourseError):
    def __init__(
        self,
        message: str = "Cannot add text content to a quiz item; use quiz questions",
    ):
        super().__init__(message, "quiz_body_text")


# ==============================================================================
# Course Service
# ==============================================================================


class CourseService:
    """Service for the Course -> Week -> ContentItem -> QuizQuestion tree."""

    def __init__(self, repository: CourseRepository):
        self.repository = repository

    # ==========================================================================
    # Courses
    # ==========================================================================

    async def create_course(
        self, data: CreateCourseRequest, instructor_id: UUID
    ) -> Course:
        course = Course(
            title=data.title,
            description=data.description,
            thumbnail=data.thumbnail,
            instructor_id=instructor_id,
        )
        await self.repository.create_course(course)

        logger.info(
            "course_created", course_id=str(course.id), instructor_id=str(instructor_id)
        )
        return course

    async def get_course(self, course_id: UUID) -> Course:
        course = await self.repository.get_course(course_id)
        if not course:
            raise CourseNotFoundError
        return course

    async def list_courses(self) -> list[Course]:
        courses = await self.repository.list_courses()
        return sorted(courses, key=lambda c: c.created_at)

    async def list_instructor_courses(self, instructor_id: UUID) -> list[Course]:
        return await self.repository.list_courses_by_instructor(instructor_id)

    async def update_course(
        self, course_id: UUID, data: UpdateCourseRequest, user_id: UUID
    ) -> Course:
        """Update the provided fields of a course owned by ``user_id``."""
        course = await self.get_course(course_id)
        self._ensure_owner(user_id, course.instructor_id)

        if data.title is not None:
            course.title = data.title.strip()
        if data.description is not None:
            course.description = data.description
        if data.thumbnail is not None:
            course.thumbnail = data.thumbnail
        course.updated_at = utcnow()

        await self.repository.update_course(course)
        logger.info("course_updated", course_id=str(course.id))
        return course

    # ==========================================================================
    # Weeks
    # ==========================================================================

    async def list_weeks(self, course_id: UUID) -> list[Week]:
        await self.get_course(course_id)
        weeks = await self.repository.list_weeks(course_id)
        return sorted(weeks, key=lambda w: w.order)

    async def create_week(
        self, course_id: UUID, data: CreateWeekRequest, user_id: UUID
    ) -> Week:
        course = await self.get_course(course_id)
        self._ensure_owner(user_id, course.instructor_id)

        week = Week(
            course_id=course.id,
            week_number=data.week_number,
            title=data.title,
            order=data.order,
        )
        await self.repository.create_week(week)

        logger.info("week_created", course_id=str(course.id), week_id=str(week.id))
        return week

    async def get_week(self, week_id: UUID) -> Week:
        week = await self.repository.get_week(week_id)
        if not week:
            raise WeekNotFoundError
        return week

    # ==========================================================================
    # Content
    # ==========================================================================

    async def list_week_content(self, week_id: UUID) -> list[ContentItem]:
        await self.get_week(week_id)
        items = await self.repository.list_week_content(week_id)
        return sorted(items, key=lambda i: i.order)

    async def create_content(
        self, week_id: UUID, data: CreateContentRequest, user_id: UUID
    ) -> ContentItem:
        week = await self.get_week(week_id)
        course = await self.repository.get_course(week.course_id)
        self._ensure_owner(user_id, course.instructor_id if course else None)

        item = ContentItem(
            week_id=week.id,
            course_id=week.course_id,
            title=data.title,
            content_type=data.content_type.value,
            content=data.content,
            order=data.order,
        )
        await self.repository.create_content(item)

        logger.info(
            "content_created",
            week_id=str(week.id),
            content_id=str(item.id),
            content_type=item.content_type,
        )
        return item

    async def update_content(
        self, content_id: UUID, data: UpdateContentRequest, user_id: UUID
    ) -> ContentItem:
        """Update title and body of a content item.

        Raises:
            ContentNotFoundError: Unknown content item
            NotCourseOwnerError: Caller does not own the course (or the item is
                orphaned from its week)
            QuizBodyTextError: Body text given for a quiz item
        """
        item = await self.get_content(content_id)
        self._ensure_owner(user_id, await self.get_course_owner_for_content(item.id))

        if item.is_quiz and data.content is not None:
            raise QuizBodyTextError

        if data.title is not None:
            item.title = data.title.strip()
        if data.content is not None:
            item.content = data.content

        await self.repository.update_content(item)
        logger.info("content_updated", content_id=str(item.id))
        return item

    async def get_content(self, content_id: UUID) -> ContentItem:
        item = await self.repository.get_content(content_id)
        if not item:
            raise ContentNotFoundError
        return item

    # ==========================================================================
    # Questions
    # ==========================================================================

    async def list_questions(self, content_id: UUID) -> list[QuizQuestion]:
        item = await self.get_content(content_id)
        if not item.is_quiz:
            raise NotAQuizError
        return await self.repository.list_questions(item.id)

    async def create_question(
        self, content_id: UUID, data: CreateQuestionRequest, user_id: UUID
    ) -> QuizQuestion:
        item = await self.get_content(content_id)
        if not item.is_quiz:
            raise NotAQuizError
        self._ensure_owner(user_id, await self.get_course_owner_for_content(item.id))

        question = QuizQuestion(
            content_id=item.id,
            question_text=data.question_text,
            options=data.options,
            correct_answer=data.correct_answer,
            points=data.points,
            tags=data.tags,
        )
        await self.repository.create_question(question)

        logger.info(
            "question_created", content_id=str(item.id), question_id=str(question.id)
        )
        return question

    # ==========================================================================
    # Read contracts for progress and analytics
    # ==========================================================================

    async def count_course_content(self, course_id: UUID) -> int:
        return await self.repository.count_course_content(course_id)

    async def find_content(self, content_id: UUID) -> ContentItem | None:
        return await self.repository.get_content(content_id)

    async def find_week(self, week_id: UUID | None) -> Week | None:
        if week_id is None:
            return None
        return await self.repository.get_week(week_id)

    async def find_course(self, course_id: UUID) -> Course | None:
        return await self.repository.get_course(course_id)

    async def get_course_owner_for_content(self, content_id: UUID) -> UUID | None:
        """Resolve content -> week -> course -> instructor id.

        Returns None when any link of the chain is missing.
        """
        item = await self.repository.get_content(content_id)
        if not item:
            return None
        week = await self.find_week(item.week_id)
        if not week:
            return None
        course = await self.repository.get_course(week.course_id)
        return course.instructor_id if course else None

    async def list_tagged_questions(self, content_id: UUID) -> list[QuizQuestion]:
        """Questions of a quiz that carry at least one tag."""
        questions = await self.repository.list_questions(content_id)
        return [q for q in questions if q.tags]

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _ensure_owner(user_id: UUID, course_owner_id: UUID | None) -> None:
        if not owns_course(user_id, course_owner_id):
            raise NotCourseOwnerError

    def to_response(self, course: Course) -> CourseResponse:
        return CourseResponse.model_validate(course)
