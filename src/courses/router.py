"""Content catalog API endpoints.

Provides routes for:
- Courses: create, list, read, update
- Weeks of a course
- Content items of a week
- Quiz questions of a content item
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.auth.dependencies import CurrentUser, InstructorUser
from src.courses.dependencies import CourseServiceDep, handle_course_error
from src.courses.schemas import (
    ContentResponse,
    CourseResponse,
    CreateContentRequest,
    CreateCourseRequest,
    CreateQuestionRequest,
    CreateWeekRequest,
    QuestionResponse,
    UpdateContentRequest,
    UpdateCourseRequest,
    WeekResponse,
)
from src.courses.service import CourseError


# ==============================================================================
# Courses Router
# ==============================================================================

router_courses = APIRouter(prefix="/v1/courses", tags=["courses"])


@router_courses.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new course",
)
async def create_course(
    data: CreateCourseRequest,
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> CourseResponse:
    """Create a course owned by the current instructor."""
    course = await course_service.create_course(data, UUID(str(user.id)))
    return course_service.to_response(course)


@router_courses.get(
    "",
    response_model=list[CourseResponse],
    summary="List all courses",
)
async def list_courses(
    course_service: CourseServiceDep,
    user: CurrentUser,
) -> list[CourseResponse]:
    courses = await course_service.list_courses()
    return [course_service.to_response(c) for c in courses]


@router_courses.get(
    "/my",
    response_model=list[CourseResponse],
    summary="List my courses",
)
async def list_my_courses(
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> list[CourseResponse]:
    """List courses owned by the current instructor, newest first."""
    courses = await course_service.list_instructor_courses(UUID(str(user.id)))
    return [course_service.to_response(c) for c in courses]


@router_courses.get(
    "/{course_id}",
    response_model=CourseResponse,
    summary="Get course",
)
async def get_course(
    course_id: UUID,
    course_service: CourseServiceDep,
    user: CurrentUser,
) -> CourseResponse:
    try:
        course = await course_service.get_course(course_id)
    except CourseError as e:
        raise handle_course_error(e) from e
    return course_service.to_response(course)


@router_courses.put(
    "/{course_id}",
    response_model=CourseResponse,
    summary="Update course",
    responses={403: {"description": "Not the course owner"}},
)
async def update_course(
    course_id: UUID,
    data: UpdateCourseRequest,
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> CourseResponse:
    try:
        course = await course_service.update_course(
            course_id, data, UUID(str(user.id))
        )
    except CourseError as e:
        raise handle_course_error(e) from e
    return course_service.to_response(course)


@router_courses.get(
    "/{course_id}/weeks",
    response_model=list[WeekResponse],
    summary="List weeks of a course",
)
async def list_weeks(
    course_id: UUID,
    course_service: CourseServiceDep,
    user: CurrentUser,
) -> list[WeekResponse]:
    """List weeks sorted by their order."""
    try:
        weeks = await course_service.list_weeks(course_id)
    except CourseError as e:
        raise handle_course_error(e) from e
    return [WeekResponse.model_validate(w) for w in weeks]


@router_courses.post(
    "/{course_id}/weeks",
    response_model=WeekResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create week",
)
async def create_week(
    course_id: UUID,
    data: CreateWeekRequest,
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> WeekResponse:
    try:
        week = await course_service.create_week(course_id, data, UUID(str(user.id)))
    except CourseError as e:
        raise handle_course_error(e) from e
    return WeekResponse.model_validate(week)


# ==============================================================================
# Weeks Router
# ==============================================================================

router_weeks = APIRouter(prefix="/v1/weeks", tags=["weeks"])


@router_weeks.get(
    "/{week_id}/content",
    response_model=list[ContentResponse],
    summary="List content of a week",
)
async def list_week_content(
    week_id: UUID,
    course_service: CourseServiceDep,
    user: CurrentUser,
) -> list[ContentResponse]:
    """List content items sorted by their order."""
    try:
        items = await course_service.list_week_content(week_id)
    except CourseError as e:
        raise handle_course_error(e) from e
    return [ContentResponse.model_validate(i) for i in items]


@router_weeks.post(
    "/{week_id}/content",
    response_model=ContentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create content item",
)
async def create_content(
    week_id: UUID,
    data: CreateContentRequest,
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> ContentResponse:
    """Create a content item; the caller must own the week's course."""
    try:
        item = await course_service.create_content(week_id, data, UUID(str(user.id)))
    except CourseError as e:
        raise handle_course_error(e) from e
    return ContentResponse.model_validate(item)


# ==============================================================================
# Content Router
# ==============================================================================

router_content = APIRouter(prefix="/v1/content", tags=["content"])


@router_content.put(
    "/{content_id}",
    response_model=ContentResponse,
    summary="Update content item",
)
async def update_content(
    content_id: UUID,
    data: UpdateContentRequest,
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> ContentResponse:
    """Update title and body. Quiz items reject body text."""
    try:
        item = await course_service.update_content(
            content_id, data, UUID(str(user.id))
        )
    except CourseError as e:
        raise handle_course_error(e) from e
    return ContentResponse.model_validate(item)


@router_content.get(
    "/{content_id}/questions",
    response_model=list[QuestionResponse],
    summary="List quiz questions",
)
async def list_questions(
    content_id: UUID,
    course_service: CourseServiceDep,
    user: CurrentUser,
) -> list[QuestionResponse]:
    try:
        questions = await course_service.list_questions(content_id)
    except CourseError as e:
        raise handle_course_error(e) from e
    return [QuestionResponse.model_validate(q) for q in questions]


@router_content.post(
    "/{content_id}/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create quiz question",
)
async def create_question(
    content_id: UUID,
    data: CreateQuestionRequest,
    course_service: CourseServiceDep,
    user: InstructorUser,
) -> QuestionResponse:
    try:
        question = await course_service.create_question(
            content_id, data, UUID(str(user.id))
        )
    except CourseError as e:
        raise handle_course_error(e) from e
    return QuestionResponse.model_validate(question)
