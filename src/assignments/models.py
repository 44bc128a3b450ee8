"""Database models for assignments and submissions.

Cassandra table definitions for:
- assignments / assignments_by_course: Assignments by id and by due date
- submissions: Submission by id
- submissions_by_user: One row per (user, assignment), the uniqueness guard
- submissions_by_assignment: Submissions of an assignment, for grading
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from src.utils import ensure_utc_aware, utcnow


DEFAULT_TOTAL_POINTS = 100


class SubmissionStatus(str, Enum):
    """Submission lifecycle."""

    PENDING = "Pending"
    SUBMITTED = "Submitted"
    GRADED = "Graded"


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

ASSIGNMENTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.assignments (
    id UUID PRIMARY KEY,
    course_id UUID,
    title TEXT,
    description TEXT,
    due_date TIMESTAMP,
    total_points INT,
    created_at TIMESTAMP
)
"""

ASSIGNMENTS_BY_COURSE_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.assignments_by_course (
    course_id UUID,
    due_date TIMESTAMP,
    assignment_id UUID,
    PRIMARY KEY (course_id, due_date, assignment_id)
) WITH CLUSTERING ORDER BY (due_date ASC, assignment_id ASC)
"""

SUBMISSIONS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.submissions (
    id UUID PRIMARY KEY,
    assignment_id UUID,
    user_id UUID,
    status TEXT,
    grade DOUBLE,
    feedback TEXT,
    submitted_at TIMESTAMP
)
"""

SUBMISSIONS_BY_USER_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.submissions_by_user (
    user_id UUID,
    assignment_id UUID,
    submission_id UUID,
    PRIMARY KEY (user_id, assignment_id)
)
"""

SUBMISSIONS_BY_ASSIGNMENT_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.submissions_by_assignment (
    assignment_id UUID,
    submission_id UUID,
    user_id UUID,
    PRIMARY KEY (assignment_id, submission_id)
)
"""

ASSIGNMENTS_TABLES_CQL = [
    ASSIGNMENTS_TABLE_CQL,
    ASSIGNMENTS_BY_COURSE_TABLE_CQL,
    SUBMISSIONS_TABLE_CQL,
    SUBMISSIONS_BY_USER_TABLE_CQL,
    SUBMISSIONS_BY_ASSIGNMENT_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


class Assignment:
    """Course assignment.

    Attributes:
        id: Unique identifier (UUID)
        course_id: Owning course
        title: Assignment title
        description: Optional instructions
        due_date: Due date
        total_points: Maximum grade (default 100)
        created_at: Creation timestamp
    """

    def __init__(
        self,
        id: UUID | None = None,
        course_id: UUID | None = None,
        title: str = "",
        description: str | None = None,
        due_date: datetime | None = None,
        total_points: int = DEFAULT_TOTAL_POINTS,
        created_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.course_id = course_id
        self.title = title.strip()
        self.description = description
        self.due_date = ensure_utc_aware(due_date)
        self.total_points = total_points
        self.created_at = ensure_utc_aware(created_at) or utcnow()

    @classmethod
    def from_row(cls, row: Any) -> "Assignment":
        """Create Assignment instance from Cassandra row."""
        return cls(
            id=row.id,
            course_id=row.course_id,
            title=row.title,
            description=row.description,
            due_date=row.due_date,
            total_points=(
                row.total_points
                if row.total_points is not None
                else DEFAULT_TOTAL_POINTS
            ),
            created_at=row.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date,
            "total_points": self.total_points,
            "created_at": self.created_at,
        }

    def __repr__(self) -> str:
        return f"<Assignment {self.title}>"


class Submission:
    """A student's submission for an assignment.

    ``grade`` and ``feedback`` are set only when the status moves to Graded.
    """

    def __init__(
        self,
        id: UUID | None = None,
        assignment_id: UUID | None = None,
        user_id: UUID | None = None,
        status: str = SubmissionStatus.PENDING.value,
        grade: float | None = None,
        feedback: str | None = None,
        submitted_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.assignment_id = assignment_id
        self.user_id = user_id
        self.status = status
        self.grade = grade
        self.feedback = feedback
        self.submitted_at = ensure_utc_aware(submitted_at)

    @property
    def is_graded(self) -> bool:
        return self.status == SubmissionStatus.GRADED.value

    @classmethod
    def from_row(cls, row: Any) -> "Submission":
        """Create Submission instance from Cassandra row."""
        return cls(
            id=row.id,
            assignment_id=row.assignment_id,
            user_id=row.user_id,
            status=row.status,
            grade=row.grade,
            feedback=row.feedback,
            submitted_at=row.submitted_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "assignment_id": self.assignment_id,
            "user_id": self.user_id,
            "status": self.status,
            "grade": self.grade,
            "feedback": self.feedback,
            "submitted_at": self.submitted_at,
        }

    def __repr__(self) -> str:
        return f"<Submission {self.assignment_id} by {self.user_id} ({self.status})>"
