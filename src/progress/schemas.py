"""Pydantic schemas for enrollments and progress.

Request and response models for:
- Course enrollment
- Completion events
- Progress queries
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .models import Enrollment, ProgressRecord


# ==============================================================================
# Enrollment Schemas
# ==============================================================================


class EnrollRequest(BaseModel):
    """Request to enroll in a course."""

    course_id: UUID = Field(
        ...,
        validation_alias=AliasChoices("course_id", "courseId"),
        description="Course UUID",
    )


class EnrollmentResponse(BaseModel):
    """Enrollment with its cached progress."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    course_id: UUID
    progress_percentage: int = Field(ge=0, le=100, description="0-100 percentage")
    current_week_id: UUID | None = None
    current_content_id: UUID | None = None
    enrolled_at: datetime

    @classmethod
    def from_entity(cls, entity: Enrollment) -> "EnrollmentResponse":
        """Create response from entity."""
        return cls.model_validate(entity)


# ==============================================================================
# Completion Schemas
# ==============================================================================


class RecordCompletionRequest(BaseModel):
    """Mark a content item complete, optionally with a quiz score."""

    enrollment_id: UUID = Field(
        ...,
        validation_alias=AliasChoices("enrollment_id", "enrollmentId"),
    )
    content_id: UUID = Field(
        ...,
        validation_alias=AliasChoices("content_id", "contentItemId", "contentId"),
    )
    score: float | None = Field(None, ge=0, le=100, description="Quiz score 0-100")


class ProgressRecordResponse(BaseModel):
    """Completion marker of one content item."""

    model_config = ConfigDict(from_attributes=True)

    enrollment_id: UUID
    content_id: UUID
    completed: bool
    score: float | None = None
    completed_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: ProgressRecord) -> "ProgressRecordResponse":
        """Create response from entity."""
        return cls.model_validate(entity)
