"""Pydantic schemas for student analytics.

Responses are serialized with camelCase keys (``coursesEnrolled``,
``averageScore``, ``areasForImprovement``, ``gradeDistribution``).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GradeBucket(BaseModel):
    """One slice of the grade distribution."""

    name: str
    value: int = Field(ge=0)


class StudentSummaryResponse(BaseModel):
    """Weak-area summary of a student."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    courses_enrolled: int = Field(0, ge=0)
    average_score: int | None = Field(
        None, description="Rounded mean of scored quiz attempts"
    )
    areas_for_improvement: list[str] = Field(
        default_factory=list, description="Top tags of low-scoring quizzes"
    )
    grade_distribution: list[GradeBucket] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "StudentSummaryResponse":
        """Summary of a student with no enrollments."""
        return cls()
