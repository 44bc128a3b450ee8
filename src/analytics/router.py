"""Student analytics API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.analytics.schemas import StudentSummaryResponse
from src.analytics.service import AnalyticsService
from src.auth.dependencies import StudentUser


router = APIRouter(prefix="/v1/analytics", tags=["analytics"])


async def get_analytics_service(request: Request) -> AnalyticsService:
    """Get analytics service from app state."""
    app_state = request.app.state
    if not getattr(app_state, "analytics_service", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analytics service not available",
        )
    return app_state.analytics_service


AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]


@router.get(
    "/student/summary",
    response_model=StudentSummaryResponse,
    summary="Student analytics summary",
)
async def student_summary(
    user: StudentUser,
    analytics_service: AnalyticsServiceDep,
) -> StudentSummaryResponse:
    """Courses enrolled, average quiz score, weak areas and grade distribution."""
    return await analytics_service.student_weak_areas(UUID(str(user.id)))
