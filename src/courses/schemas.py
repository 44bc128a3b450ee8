"""Pydantic schemas for the content catalog.

Request and response models for:
- Courses
- Weeks
- Content items
- Quiz questions
"""

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.courses.models import ContentType


# ==============================================================================
# Course Schemas
# ==============================================================================


class CreateCourseRequest(BaseModel):
    """Course creation request."""

    title: str = Field(..., min_length=1, max_length=200, description="Course title")
    description: str = Field(
        ..., min_length=1, max_length=5000, description="Course description"
    )
    thumbnail: str | None = Field(
        None, max_length=500, description="Thumbnail image URL"
    )


class UpdateCourseRequest(BaseModel):
    """Course update request. Omitted fields are left unchanged."""

    title: str | None = Field(
        None, min_length=1, max_length=200, description="Course title"
    )
    description: str | None = Field(
        None, min_length=1, max_length=5000, description="Course description"
    )
    thumbnail: str | None = Field(
        None, max_length=500, description="Thumbnail image URL"
    )


class CourseResponse(BaseModel):
    """Course response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    thumbnail: str
    instructor_id: UUID
    created_at: datetime
    updated_at: datetime | None = None


# ==============================================================================
# Week Schemas
# ==============================================================================


class CreateWeekRequest(BaseModel):
    """Week creation request."""

    week_number: int = Field(..., ge=0, description="Display label")
    title: str = Field(..., min_length=1, max_length=200, description="Week title")
    order: int = Field(..., description="Position within the course")


class WeekResponse(BaseModel):
    """Week response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    course_id: UUID
    week_number: int
    title: str
    order: int


# ==============================================================================
# Content Schemas
# ==============================================================================


class CreateContentRequest(BaseModel):
    """Content item creation request.

    ``is_quiz`` is derived from ``content_type``; it is accepted only to
    reject contradicting input.
    """

    title: str = Field(..., min_length=1, max_length=200, description="Title")
    content_type: ContentType = Field(..., description="text, video or quiz")
    content: str | None = Field(None, description="Body text or video URL")
    order: int = Field(..., description="Position within the week")
    is_quiz: bool = Field(False, description="Must match content_type")

    @model_validator(mode="after")
    def validate_content_by_type(self) -> Self:
        if self.content_type == ContentType.QUIZ and self.content:
            raise ValueError("Quiz content must not have text in the content field")
        if self.content_type != ContentType.QUIZ and self.is_quiz:
            raise ValueError("is_quiz can only be true if content_type is quiz")
        return self


class UpdateContentRequest(BaseModel):
    """Content item update request. Only title and body are editable."""

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = None


class ContentResponse(BaseModel):
    """Content item response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    week_id: UUID
    course_id: UUID
    title: str
    content_type: ContentType
    content: str | None = None
    order: int
    is_quiz: bool


# ==============================================================================
# Quiz Question Schemas
# ==============================================================================


class CreateQuestionRequest(BaseModel):
    """Quiz question creation request."""

    question_text: str = Field(..., min_length=1, description="Question text")
    options: list[str] = Field(..., min_length=2, description="Answer options")
    correct_answer: int = Field(..., ge=0, description="Index of the correct option")
    points: int = Field(10, ge=0, description="Point value")
    tags: list[str] = Field(default_factory=list, description="Topic tags")

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip() for tag in v if tag.strip()]

    @model_validator(mode="after")
    def validate_correct_answer(self) -> Self:
        if self.correct_answer >= len(self.options):
            raise ValueError("correct_answer must be a valid index into options")
        return self


class QuestionResponse(BaseModel):
    """Quiz question response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content_id: UUID
    question_text: str
    options: list[str]
    correct_answer: int
    points: int
    tags: list[str]
