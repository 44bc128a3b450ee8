"""FastAPI dependencies for assignments."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import AssignmentError, AssignmentService


async def get_assignment_service(request: Request) -> AssignmentService:
    """Get assignment service from app state."""
    app_state = request.app.state
    if not getattr(app_state, "assignment_service", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Assignment service not available",
        )
    return app_state.assignment_service


AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]


def handle_assignment_error(error: AssignmentError) -> HTTPException:
    """Convert assignment errors to HTTP exceptions."""
    status_map = {
        "course_not_found": status.HTTP_404_NOT_FOUND,
        "assignment_not_found": status.HTTP_404_NOT_FOUND,
        "submission_not_found": status.HTTP_404_NOT_FOUND,
        "already_submitted": status.HTTP_409_CONFLICT,
        "not_course_owner": status.HTTP_403_FORBIDDEN,
        "invalid_grade": status.HTTP_400_BAD_REQUEST,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )
