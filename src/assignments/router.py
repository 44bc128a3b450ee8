"""Assignment and submission API endpoints.

Provides routes for:
- Assignments: create, list by course
- Submissions: submit, list mine, list per assignment, grade
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.auth.dependencies import CurrentUser, InstructorUser, StudentUser

from .dependencies import AssignmentServiceDep, handle_assignment_error
from .schemas import (
    AssignmentResponse,
    CreateAssignmentRequest,
    GradeSubmissionRequest,
    SubmissionResponse,
    SubmitAssignmentRequest,
)
from .service import AssignmentError


router = APIRouter(prefix="/v1/assignments", tags=["assignments"])
submissions_router = APIRouter(prefix="/v1/submissions", tags=["submissions"])
course_assignments_router = APIRouter(prefix="/v1/courses", tags=["assignments"])


# ==============================================================================
# Assignments
# ==============================================================================


@router.post(
    "",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create assignment",
)
async def create_assignment(
    data: CreateAssignmentRequest,
    user: InstructorUser,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    try:
        assignment = await assignment_service.create_assignment(
            data, UUID(str(user.id))
        )
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return AssignmentResponse.model_validate(assignment)


@course_assignments_router.get(
    "/{course_id}/assignments",
    response_model=list[AssignmentResponse],
    summary="List assignments of a course",
)
async def list_course_assignments(
    course_id: UUID,
    user: CurrentUser,
    assignment_service: AssignmentServiceDep,
) -> list[AssignmentResponse]:
    """List assignments sorted by due date."""
    try:
        assignments = await assignment_service.list_course_assignments(course_id)
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get(
    "/{assignment_id}/submissions",
    response_model=list[SubmissionResponse],
    summary="List submissions of an assignment",
)
async def list_assignment_submissions(
    assignment_id: UUID,
    user: InstructorUser,
    assignment_service: AssignmentServiceDep,
) -> list[SubmissionResponse]:
    try:
        submissions = await assignment_service.list_assignment_submissions(
            UUID(str(user.id)), assignment_id
        )
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return [SubmissionResponse.model_validate(s) for s in submissions]


# ==============================================================================
# Submissions
# ==============================================================================


@submissions_router.post(
    "",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit assignment",
    responses={409: {"description": "Already submitted"}},
)
async def submit_assignment(
    data: SubmitAssignmentRequest,
    user: StudentUser,
    assignment_service: AssignmentServiceDep,
) -> SubmissionResponse:
    try:
        submission = await assignment_service.submit(
            UUID(str(user.id)), data.assignment_id
        )
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return SubmissionResponse.model_validate(submission)


@submissions_router.get(
    "/my",
    response_model=list[SubmissionResponse],
    summary="List my submissions",
)
async def list_my_submissions(
    user: StudentUser,
    assignment_service: AssignmentServiceDep,
) -> list[SubmissionResponse]:
    submissions = await assignment_service.list_my_submissions(UUID(str(user.id)))
    return [SubmissionResponse.model_validate(s) for s in submissions]


@submissions_router.put(
    "/{submission_id}/grade",
    response_model=SubmissionResponse,
    summary="Grade submission",
)
async def grade_submission(
    submission_id: UUID,
    data: GradeSubmissionRequest,
    user: InstructorUser,
    assignment_service: AssignmentServiceDep,
) -> SubmissionResponse:
    """Grade a submission of a course owned by the current instructor."""
    try:
        submission = await assignment_service.grade(
            UUID(str(user.id)), submission_id, data
        )
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return SubmissionResponse.model_validate(submission)
