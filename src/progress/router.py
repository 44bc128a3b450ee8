"""Enrollment and progress API endpoints.

Provides routes for:
- Course enrollment
- Completion events (mark content complete, optional quiz score)
- Progress queries for students and course instructors
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.auth.dependencies import CurrentUser, InstructorUser, StudentUser

from .dependencies import ProgressServiceDep, handle_progress_error
from .schemas import (
    EnrollmentResponse,
    EnrollRequest,
    ProgressRecordResponse,
    RecordCompletionRequest,
)
from .service import ProgressError


router = APIRouter(prefix="/v1/progress", tags=["progress"])
enrollments_router = APIRouter(prefix="/v1/enrollments", tags=["enrollments"])
course_enrollments_router = APIRouter(prefix="/v1/courses", tags=["enrollments"])


# ==============================================================================
# Enrollment Endpoints
# ==============================================================================


@enrollments_router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll in course",
    responses={
        404: {"description": "Course not found"},
        409: {"description": "Already enrolled"},
    },
)
async def enroll(
    data: EnrollRequest,
    user: StudentUser,
    progress_service: ProgressServiceDep,
) -> EnrollmentResponse:
    try:
        enrollment = await progress_service.enroll(UUID(str(user.id)), data.course_id)
    except ProgressError as e:
        raise handle_progress_error(e) from e
    return EnrollmentResponse.from_entity(enrollment)


@enrollments_router.get(
    "/my",
    response_model=list[EnrollmentResponse],
    summary="List my enrollments",
)
async def list_my_enrollments(
    user: StudentUser,
    progress_service: ProgressServiceDep,
) -> list[EnrollmentResponse]:
    """List the current student's enrollments, newest first."""
    enrollments = await progress_service.list_my_enrollments(UUID(str(user.id)))
    return [EnrollmentResponse.from_entity(e) for e in enrollments]


@enrollments_router.get(
    "/{enrollment_id}/progress",
    response_model=list[ProgressRecordResponse],
    summary="List progress of an enrollment",
    responses={403: {"description": "Not the student or the course instructor"}},
)
async def list_enrollment_progress(
    enrollment_id: UUID,
    user: CurrentUser,
    progress_service: ProgressServiceDep,
) -> list[ProgressRecordResponse]:
    try:
        records = await progress_service.list_enrollment_progress(
            UUID(str(user.id)), user.role, enrollment_id
        )
    except ProgressError as e:
        raise handle_progress_error(e) from e
    return [ProgressRecordResponse.from_entity(r) for r in records]


@course_enrollments_router.get(
    "/{course_id}/enrollments",
    response_model=list[EnrollmentResponse],
    summary="List enrollments of a course",
)
async def list_course_enrollments(
    course_id: UUID,
    user: InstructorUser,
    progress_service: ProgressServiceDep,
) -> list[EnrollmentResponse]:
    """List enrollments of a course owned by the current instructor."""
    try:
        enrollments = await progress_service.list_course_enrollments(
            UUID(str(user.id)), course_id
        )
    except ProgressError as e:
        raise handle_progress_error(e) from e
    return [EnrollmentResponse.from_entity(e) for e in enrollments]


# ==============================================================================
# Completion Endpoints
# ==============================================================================


@router.post(
    "",
    response_model=ProgressRecordResponse,
    summary="Mark content complete",
    responses={
        400: {"description": "Content not part of the enrolled course"},
        403: {"description": "Not your enrollment"},
        404: {"description": "Enrollment not found"},
    },
)
async def record_completion(
    data: RecordCompletionRequest,
    user: StudentUser,
    progress_service: ProgressServiceDep,
) -> ProgressRecordResponse:
    """Mark a content item complete and recompute the course percentage.

    Completing an item again overwrites its score when one is given.
    """
    try:
        record = await progress_service.record_completion(
            UUID(str(user.id)),
            data.enrollment_id,
            data.content_id,
            score=data.score,
        )
    except ProgressError as e:
        raise handle_progress_error(e) from e
    return ProgressRecordResponse.from_entity(record)
