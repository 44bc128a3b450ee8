"""Tests for the content catalog service."""

from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.courses.models import DEFAULT_THUMBNAIL
from src.courses.schemas import (
    CreateContentRequest,
    CreateCourseRequest,
    CreateQuestionRequest,
    CreateWeekRequest,
    UpdateContentRequest,
    UpdateCourseRequest,
)
from src.courses.service import (
    ContentNotFoundError,
    CourseNotFoundError,
    CourseService,
    NotAQuizError,
    NotCourseOwnerError,
    QuizBodyTextError,
    WeekNotFoundError,
)


async def _course(service: CourseService, owner: UUID, title: str = "Web Dev"):
    return await service.create_course(
        CreateCourseRequest(title=title, description="Learn the web"), owner
    )


async def _week(service: CourseService, course_id: UUID, owner: UUID, order: int = 1):
    return await service.create_week(
        course_id,
        CreateWeekRequest(week_number=order, title=f"Week {order}", order=order),
        owner,
    )


async def _quiz(service: CourseService, week_id: UUID, owner: UUID):
    return await service.create_content(
        week_id,
        CreateContentRequest(title="Quiz", content_type="quiz", order=1, is_quiz=True),
        owner,
    )


class TestCourses:
    """Course creation, reads and updates."""

    @pytest.mark.asyncio
    async def test_create_defaults_thumbnail(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)

        assert course.instructor_id == instructor_id
        assert course.thumbnail == DEFAULT_THUMBNAIL
        assert course.updated_at is None

    @pytest.mark.asyncio
    async def test_get_unknown_course(self, course_service: CourseService) -> None:
        with pytest.raises(CourseNotFoundError):
            await course_service.get_course(uuid4())

    @pytest.mark.asyncio
    async def test_instructor_courses_only_owned(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        mine = await _course(course_service, instructor_id, "Mine")
        await _course(course_service, uuid4(), "Theirs")

        courses = await course_service.list_instructor_courses(instructor_id)

        assert [c.id for c in courses] == [mine.id]

    @pytest.mark.asyncio
    async def test_update_by_owner(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)

        updated = await course_service.update_course(
            course.id, UpdateCourseRequest(title="  Web Dev II "), instructor_id
        )

        assert updated.title == "Web Dev II"
        assert updated.description == "Learn the web"
        assert updated.updated_at is not None

    @pytest.mark.asyncio
    async def test_update_by_other_instructor(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)

        with pytest.raises(NotCourseOwnerError):
            await course_service.update_course(
                course.id, UpdateCourseRequest(title="Hijacked"), uuid4()
            )

        assert (await course_service.get_course(course.id)).title == "Web Dev"


class TestWeeksAndContent:
    """Weeks and content items of a course."""

    @pytest.mark.asyncio
    async def test_weeks_sorted_by_order(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        for order in (3, 1, 2):
            await _week(course_service, course.id, instructor_id, order)

        weeks = await course_service.list_weeks(course.id)

        assert [w.order for w in weeks] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_weeks_of_unknown_course(self, course_service: CourseService) -> None:
        with pytest.raises(CourseNotFoundError):
            await course_service.list_weeks(uuid4())

    @pytest.mark.asyncio
    async def test_week_requires_owner(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        with pytest.raises(NotCourseOwnerError):
            await _week(course_service, course.id, uuid4())

    @pytest.mark.asyncio
    async def test_content_sorted_and_linked(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        for order in (2, 1):
            await course_service.create_content(
                week.id,
                CreateContentRequest(
                    title=f"Lesson {order}",
                    content_type="text",
                    content="Body",
                    order=order,
                ),
                instructor_id,
            )

        items = await course_service.list_week_content(week.id)

        assert [i.title for i in items] == ["Lesson 1", "Lesson 2"]
        assert all(i.course_id == course.id for i in items)
        assert await course_service.count_course_content(course.id) == 2

    @pytest.mark.asyncio
    async def test_content_of_unknown_week(self, course_service: CourseService) -> None:
        with pytest.raises(WeekNotFoundError):
            await course_service.list_week_content(uuid4())

    @pytest.mark.asyncio
    async def test_quiz_has_no_body(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        quiz = await _quiz(course_service, week.id, instructor_id)

        assert quiz.is_quiz is True
        assert quiz.content is None

        with pytest.raises(QuizBodyTextError):
            await course_service.update_content(
                quiz.id, UpdateContentRequest(content="Some text"), instructor_id
            )

    @pytest.mark.asyncio
    async def test_update_content_title(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        quiz = await _quiz(course_service, week.id, instructor_id)

        updated = await course_service.update_content(
            quiz.id, UpdateContentRequest(title="Final quiz"), instructor_id
        )

        assert updated.title == "Final quiz"

    @pytest.mark.asyncio
    async def test_update_unknown_content(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        with pytest.raises(ContentNotFoundError):
            await course_service.update_content(
                uuid4(), UpdateContentRequest(title="x"), instructor_id
            )

    @pytest.mark.asyncio
    async def test_orphaned_content_has_no_owner(
        self, course_service: CourseService, repositories, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        quiz = await _quiz(course_service, week.id, instructor_id)
        del repositories.courses.weeks[week.id]

        assert await course_service.get_course_owner_for_content(quiz.id) is None
        with pytest.raises(NotCourseOwnerError):
            await course_service.update_content(
                quiz.id, UpdateContentRequest(title="x"), instructor_id
            )


class TestQuestions:
    """Quiz questions."""

    @pytest.mark.asyncio
    async def test_add_and_list_questions(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        quiz = await _quiz(course_service, week.id, instructor_id)

        await course_service.create_question(
            quiz.id,
            CreateQuestionRequest(
                question_text="What is the DOM?",
                options=["A tree", "A list"],
                correct_answer=0,
                tags=[" dom ", "js", "  "],
            ),
            instructor_id,
        )
        await course_service.create_question(
            quiz.id,
            CreateQuestionRequest(
                question_text="Untagged", options=["a", "b"], correct_answer=1
            ),
            instructor_id,
        )

        questions = await course_service.list_questions(quiz.id)
        tagged = await course_service.list_tagged_questions(quiz.id)

        assert len(questions) == 2
        assert questions[0].tags == ["dom", "js"]
        assert questions[0].points == 10
        assert [q.question_text for q in tagged] == ["What is the DOM?"]

    @pytest.mark.asyncio
    async def test_questions_only_on_quizzes(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        video = await course_service.create_content(
            week.id,
            CreateContentRequest(
                title="Intro",
                content_type="video",
                content="https://videos.example.com/1",
                order=1,
            ),
            instructor_id,
        )

        with pytest.raises(NotAQuizError):
            await course_service.list_questions(video.id)
        with pytest.raises(NotAQuizError):
            await course_service.create_question(
                video.id,
                CreateQuestionRequest(
                    question_text="?", options=["a", "b"], correct_answer=0
                ),
                instructor_id,
            )

    @pytest.mark.asyncio
    async def test_question_requires_owner(
        self, course_service: CourseService, instructor_id: UUID
    ) -> None:
        course = await _course(course_service, instructor_id)
        week = await _week(course_service, course.id, instructor_id)
        quiz = await _quiz(course_service, week.id, instructor_id)

        with pytest.raises(NotCourseOwnerError):
            await course_service.create_question(
                quiz.id,
                CreateQuestionRequest(
                    question_text="?", options=["a", "b"], correct_answer=0
                ),
                uuid4(),
            )


class TestContentSchemas:
    """Validation of content and question requests."""

    def test_quiz_with_body_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CreateContentRequest(
                title="Quiz", content_type="quiz", content="text", order=1
            )

    def test_is_quiz_flag_must_match_type(self) -> None:
        with pytest.raises(ValidationError):
            CreateContentRequest(
                title="Text", content_type="text", content="x", order=1, is_quiz=True
            )

    def test_unknown_content_type(self) -> None:
        with pytest.raises(ValidationError):
            CreateContentRequest(title="Audio", content_type="audio", order=1)

    @pytest.mark.parametrize("correct_answer", [2, -1])
    def test_correct_answer_out_of_range(self, correct_answer: int) -> None:
        with pytest.raises(ValidationError):
            CreateQuestionRequest(
                question_text="?", options=["a", "b"], correct_answer=correct_answer
            )

    def test_needs_two_options(self) -> None:
        with pytest.raises(ValidationError):
            CreateQuestionRequest(question_text="?", options=["a"], correct_answer=0)
