"""FastAPI dependencies for the content catalog.

Provides dependency injection for:
- Course service
- Error handlers
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import CourseError, CourseService


async def get_course_service(request: Request) -> CourseService:
    """Get course service from app state."""
    app_state = request.app.state
    if not getattr(app_state, "course_service", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Course service not available",
        )
    return app_state.course_service


CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]


def handle_course_error(error: CourseError) -> HTTPException:
    """Convert course errors to HTTP exceptions."""
    status_map = {
        "course_not_found": status.HTTP_404_NOT_FOUND,
        "week_not_found": status.HTTP_404_NOT_FOUND,
        "content_not_found": status.HTTP_404_NOT_FOUND,
        "not_course_owner": status.HTTP_403_FORBIDDEN,
        "not_a_quiz": status.HTTP_400_BAD_REQUEST,
        "quiz_body_text": status.HTTP_400_BAD_REQUEST,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )
