"""Pydantic schemas for assignments and submissions."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .models import DEFAULT_TOTAL_POINTS, SubmissionStatus


# ==============================================================================
# Assignment Schemas
# ==============================================================================


class CreateAssignmentRequest(BaseModel):
    """Assignment creation request."""

    course_id: UUID = Field(
        ..., validation_alias=AliasChoices("course_id", "courseId")
    )
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    due_date: datetime
    total_points: int = Field(DEFAULT_TOTAL_POINTS, gt=0)


class AssignmentResponse(BaseModel):
    """Assignment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    course_id: UUID
    title: str
    description: str | None = None
    due_date: datetime
    total_points: int
    created_at: datetime


# ==============================================================================
# Submission Schemas
# ==============================================================================


class SubmitAssignmentRequest(BaseModel):
    """Submit an assignment."""

    assignment_id: UUID = Field(
        ..., validation_alias=AliasChoices("assignment_id", "assignmentId")
    )


class GradeSubmissionRequest(BaseModel):
    """Grade a submission.

    ``grade`` must be a JSON number; the upper bound is the assignment's
    ``total_points`` and is checked by the service.
    """

    grade: float = Field(..., ge=0, strict=True)
    feedback: str | None = Field(None, max_length=5000)


class SubmissionResponse(BaseModel):
    """Submission response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    assignment_id: UUID
    user_id: UUID
    status: SubmissionStatus
    grade: float | None = None
    feedback: str | None = None
    submitted_at: datetime | None = None
