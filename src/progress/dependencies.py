"""FastAPI dependencies for progress tracking.

Provides dependency injection for:
- Progress service
- Error handlers
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import (
    ProgressError,
    ProgressService,
)


async def get_progress_service(request: Request) -> ProgressService:
    """Get progress service from app state.

    Args:
        request: FastAPI request

    Returns:
        ProgressService instance
    """
    app_state = request.app.state
    if not getattr(app_state, "progress_service", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Progress service not available",
        )
    return app_state.progress_service


# Type alias for dependency injection
ProgressServiceDep = Annotated[ProgressService, Depends(get_progress_service)]


def handle_progress_error(error: ProgressError) -> HTTPException:
    """Convert progress errors to HTTP exceptions.

    Args:
        error: Progress error

    Returns:
        HTTPException with appropriate status code
    """
    status_map = {
        "course_not_found": status.HTTP_404_NOT_FOUND,
        "enrollment_not_found": status.HTTP_404_NOT_FOUND,
        "already_enrolled": status.HTTP_409_CONFLICT,
        "not_enrollment_owner": status.HTTP_403_FORBIDDEN,
        "not_course_owner": status.HTTP_403_FORBIDDEN,
        "access_denied": status.HTTP_403_FORBIDDEN,
        "cross_course_content": status.HTTP_400_BAD_REQUEST,
        "invalid_score": status.HTTP_400_BAD_REQUEST,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(
        status_code=status_code,
        detail=error.message,
    )
