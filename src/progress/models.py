"""Database models for enrollments and progress.

Cassandra table definitions for:
- enrollments: Enrollment by id, carries the cached progress percentage
- enrollments_by_user: One row per (user, course), the uniqueness guard
  (lightweight transaction on insert) and the "my enrollments" lookup
- enrollments_by_course: Enrollments of a course
- progress_records: One row per (enrollment, content item)

Architecture: Dual-write pattern for efficient queries by both
course_id and user_id perspectives.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from src.utils import ensure_utc_aware, utcnow


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

ENROLLMENTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.enrollments (
    id UUID PRIMARY KEY,
    user_id UUID,
    course_id UUID,
    progress_percentage INT,
    current_week_id UUID,
    current_content_id UUID,
    enrolled_at TIMESTAMP
)
"""

# Partition per user so "my enrollments" is a single-partition read
ENROLLMENTS_BY_USER_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.enrollments_by_user (
    user_id UUID,
    course_id UUID,
    enrollment_id UUID,
    enrolled_at TIMESTAMP,
    PRIMARY KEY (user_id, course_id)
)
"""

ENROLLMENTS_BY_COURSE_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.enrollments_by_course (
    course_id UUID,
    enrolled_at TIMESTAMP,
    enrollment_id UUID,
    user_id UUID,
    PRIMARY KEY (course_id, enrolled_at, enrollment_id)
) WITH CLUSTERING ORDER BY (enrolled_at DESC, enrollment_id ASC)
"""

PROGRESS_RECORDS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.progress_records (
    enrollment_id UUID,
    content_id UUID,
    completed BOOLEAN,
    score DOUBLE,
    completed_at TIMESTAMP,
    PRIMARY KEY (enrollment_id, content_id)
)
"""

PROGRESS_TABLES_CQL = [
    ENROLLMENTS_TABLE_CQL,
    ENROLLMENTS_BY_USER_TABLE_CQL,
    ENROLLMENTS_BY_COURSE_TABLE_CQL,
    PROGRESS_RECORDS_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


class Enrollment:
    """A student's enrollment in a course.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Enrolled student
        course_id: Course
        progress_percentage: Cached 0-100 completion, rewritten on every
            completion event
        current_week_id: Week of the last completed item
        current_content_id: Last completed item
        enrolled_at: Enrollment timestamp
    """

    def __init__(
        self,
        id: UUID | None = None,
        user_id: UUID | None = None,
        course_id: UUID | None = None,
        progress_percentage: int = 0,
        current_week_id: UUID | None = None,
        current_content_id: UUID | None = None,
        enrolled_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.user_id = user_id
        self.course_id = course_id
        self.progress_percentage = progress_percentage
        self.current_week_id = current_week_id
        self.current_content_id = current_content_id
        self.enrolled_at = ensure_utc_aware(enrolled_at) or utcnow()

    @classmethod
    def from_row(cls, row: Any) -> "Enrollment":
        """Create Enrollment instance from Cassandra row."""
        return cls(
            id=row.id,
            user_id=row.user_id,
            course_id=row.course_id,
            progress_percentage=row.progress_percentage or 0,
            current_week_id=row.current_week_id,
            current_content_id=row.current_content_id,
            enrolled_at=row.enrolled_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "course_id": self.course_id,
            "progress_percentage": self.progress_percentage,
            "current_week_id": self.current_week_id,
            "current_content_id": self.current_content_id,
            "enrolled_at": self.enrolled_at,
        }

    def __repr__(self) -> str:
        return f"<Enrollment {self.user_id} in {self.course_id}: {self.progress_percentage}%>"


class ProgressRecord:
    """Completion marker for one content item of one enrollment."""

    def __init__(
        self,
        enrollment_id: UUID,
        content_id: UUID,
        completed: bool = False,
        score: float | None = None,
        completed_at: datetime | None = None,
    ):
        self.enrollment_id = enrollment_id
        self.content_id = content_id
        self.completed = completed
        self.score = score
        self.completed_at = ensure_utc_aware(completed_at)

    @classmethod
    def from_row(cls, row: Any) -> "ProgressRecord":
        """Create ProgressRecord instance from Cassandra row."""
        return cls(
            enrollment_id=row.enrollment_id,
            content_id=row.content_id,
            completed=bool(row.completed),
            score=row.score,
            completed_at=row.completed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enrollment_id": self.enrollment_id,
            "content_id": self.content_id,
            "completed": self.completed,
            "score": self.score,
            "completed_at": self.completed_at,
        }

    def __repr__(self) -> str:
        return f"<ProgressRecord {self.content_id} completed={self.completed}>"
