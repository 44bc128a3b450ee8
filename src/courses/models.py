"""Database models for the content catalog.

Cassandra table definitions for:
- courses: Main course table
- courses_by_instructor: Courses owned by an instructor, newest first
- weeks / weeks_by_course: Weeks by id and ordered within a course
- content_items / content_by_week: Content items by id and ordered within a week
- content_by_course: Content ids per course (for progress totals)
- quiz_questions_by_content: Questions of a quiz content item

Architecture: Course -> Week -> ContentItem tree. Each level is ordered by an
explicit integer ``order`` (stored as ``position``, ``order`` is reserved in
CQL). Content items carry a denormalised ``course_id`` for the per-course
lookup table; ownership still resolves through the week.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from src.utils import ensure_utc_aware, utcnow


DEFAULT_THUMBNAIL = "https://placehold.co/600x400/3498db/ffffff?text=Course"
DEFAULT_QUESTION_POINTS = 10


class ContentType(str, Enum):
    """Content item type."""

    TEXT = "text"
    VIDEO = "video"
    QUIZ = "quiz"


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

COURSE_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.courses (
    id UUID PRIMARY KEY,
    title TEXT,
    description TEXT,
    thumbnail TEXT,
    instructor_id UUID,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
)
"""

COURSES_BY_INSTRUCTOR_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.courses_by_instructor (
    instructor_id UUID,
    created_at TIMESTAMP,
    course_id UUID,
    PRIMARY KEY (instructor_id, created_at, course_id)
) WITH CLUSTERING ORDER BY (created_at DESC, course_id ASC)
"""

WEEK_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.weeks (
    id UUID PRIMARY KEY,
    course_id UUID,
    week_number INT,
    title TEXT,
    position INT
)
"""

WEEKS_BY_COURSE_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.weeks_by_course (
    course_id UUID,
    position INT,
    week_id UUID,
    week_number INT,
    title TEXT,
    PRIMARY KEY (course_id, position, week_id)
) WITH CLUSTERING ORDER BY (position ASC, week_id ASC)
"""

CONTENT_ITEM_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.content_items (
    id UUID PRIMARY KEY,
    week_id UUID,
    course_id UUID,
    title TEXT,
    content_type TEXT,
    content TEXT,
    position INT
)
"""

CONTENT_BY_WEEK_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.content_by_week (
    week_id UUID,
    position INT,
    content_id UUID,
    course_id UUID,
    title TEXT,
    content_type TEXT,
    content TEXT,
    PRIMARY KEY (week_id, position, content_id)
) WITH CLUSTERING ORDER BY (position ASC, content_id ASC)
"""

CONTENT_BY_COURSE_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.content_by_course (
    course_id UUID,
    content_id UUID,
    week_id UUID,
    content_type TEXT,
    PRIMARY KEY (course_id, content_id)
)
"""

QUIZ_QUESTIONS_BY_CONTENT_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.quiz_questions_by_content (
    content_id UUID,
    created_at TIMESTAMP,
    id UUID,
    question_text TEXT,
    options LIST<TEXT>,
    correct_answer INT,
    points INT,
    tags LIST<TEXT>,
    PRIMARY KEY (content_id, created_at, id)
) WITH CLUSTERING ORDER BY (created_at ASC, id ASC)
"""

# All CQL statements for table setup
COURSES_TABLES_CQL = [
    COURSE_TABLE_CQL,
    COURSES_BY_INSTRUCTOR_TABLE_CQL,
    WEEK_TABLE_CQL,
    WEEKS_BY_COURSE_TABLE_CQL,
    CONTENT_ITEM_TABLE_CQL,
    CONTENT_BY_WEEK_TABLE_CQL,
    CONTENT_BY_COURSE_TABLE_CQL,
    QUIZ_QUESTIONS_BY_CONTENT_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


class Course:
    """Course entity owned by a single instructor.

    Attributes:
        id: Unique identifier (UUID)
        title: Course title
        description: Course description
        thumbnail: Cover image URL
        instructor_id: Owning instructor
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    def __init__(
        self,
        id: UUID | None = None,
        title: str = "",
        description: str = "",
        thumbnail: str | None = None,
        instructor_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.title = title.strip()
        self.description = description
        self.thumbnail = thumbnail or DEFAULT_THUMBNAIL
        self.instructor_id = instructor_id
        self.created_at = ensure_utc_aware(created_at) or utcnow()
        self.updated_at = ensure_utc_aware(updated_at)

    @classmethod
    def from_row(cls, row: Any) -> "Course":
        """Create Course instance from Cassandra row."""
        return cls(
            id=row.id,
            title=row.title,
            description=row.description or "",
            thumbnail=row.thumbnail,
            instructor_id=row.instructor_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "instructor_id": self.instructor_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<Course {self.title}>"


class Week:
    """A week of a course.

    ``week_number`` is a display label; ``order`` drives sequence.
    """

    def __init__(
        self,
        id: UUID | None = None,
        course_id: UUID | None = None,
        week_number: int = 1,
        title: str = "",
        order: int = 0,
    ):
        self.id = id or uuid4()
        self.course_id = course_id
        self.week_number = week_number
        self.title = title.strip()
        self.order = order

    @classmethod
    def from_row(cls, row: Any) -> "Week":
        """Create from a ``weeks`` or ``weeks_by_course`` row."""
        return cls(
            id=getattr(row, "id", None) or row.week_id,
            course_id=row.course_id,
            week_number=row.week_number,
            title=row.title,
            order=row.position,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "course_id": self.course_id,
            "week_number": self.week_number,
            "title": self.title,
            "order": self.order,
        }

    def __repr__(self) -> str:
        return f"<Week {self.week_number}: {self.title}>"


class ContentItem:
    """Smallest unit of course material.

    Quiz items never carry body text: ``content`` is forced to None when
    ``content_type`` is quiz.
    """

    def __init__(
        self,
        id: UUID | None = None,
        week_id: UUID | None = None,
        course_id: UUID | None = None,
        title: str = "",
        content_type: str = ContentType.TEXT.value,
        content: str | None = None,
        order: int = 0,
    ):
        self.id = id or uuid4()
        self.week_id = week_id
        self.course_id = course_id
        self.title = title.strip()
        self.content_type = content_type
        self.content = None if content_type == ContentType.QUIZ.value else content
        self.order = order

    @property
    def is_quiz(self) -> bool:
        return self.content_type == ContentType.QUIZ.value

    @classmethod
    def from_row(cls, row: Any) -> "ContentItem":
        """Create from a ``content_items`` or ``content_by_week`` row."""
        return cls(
            id=getattr(row, "id", None) or row.content_id,
            week_id=row.week_id,
            course_id=row.course_id,
            title=row.title,
            content_type=row.content_type,
            content=row.content,
            order=row.position,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week_id": self.week_id,
            "course_id": self.course_id,
            "title": self.title,
            "content_type": self.content_type,
            "content": self.content,
            "order": self.order,
            "is_quiz": self.is_quiz,
        }

    def __repr__(self) -> str:
        return f"<ContentItem {self.content_type}: {self.title}>"


class QuizQuestion:
    """Multiple choice question of a quiz content item.

    Attributes:
        content_id: Parent quiz content item
        question_text: The question
        options: Option strings, at least two
        correct_answer: Zero-based index into ``options``
        points: Point value (default 10)
        tags: Topic tags, used by analytics
    """

    def __init__(
        self,
        id: UUID | None = None,
        content_id: UUID | None = None,
        question_text: str = "",
        options: list[str] | None = None,
        correct_answer: int = 0,
        points: int = DEFAULT_QUESTION_POINTS,
        tags: list[str] | None = None,
        created_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.content_id = content_id
        self.question_text = question_text
        self.options = list(options or [])
        self.correct_answer = correct_answer
        self.points = points
        self.tags = list(tags or [])
        self.created_at = ensure_utc_aware(created_at) or utcnow()

    @classmethod
    def from_row(cls, row: Any) -> "QuizQuestion":
        """Create QuizQuestion instance from Cassandra row."""
        return cls(
            id=row.id,
            content_id=row.content_id,
            question_text=row.question_text,
            # Cassandra returns None for empty collections
            options=row.options or [],
            correct_answer=row.correct_answer,
            points=row.points if row.points is not None else DEFAULT_QUESTION_POINTS,
            tags=row.tags or [],
            created_at=row.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content_id": self.content_id,
            "question_text": self.question_text,
            "options": self.options,
            "correct_answer": self.correct_answer,
            "points": self.points,
            "tags": self.tags,
        }

    def __repr__(self) -> str:
        return f"<QuizQuestion {self.question_text[:30]}>"
