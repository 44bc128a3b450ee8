"""Content catalog storage.

``CourseRepository`` is the contract used by the course service and, read
only, by the progress and analytics services. ``CassandraCourseRepository``
implements it on top of the tables in ``src.courses.models``.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from src.courses.models import ContentItem, Course, QuizQuestion, Week


if TYPE_CHECKING:
    from cassandra.cluster import Session


class CourseRepository(Protocol):
    # Courses
    async def create_course(self, course: Course) -> None: ...

    async def update_course(self, course: Course) -> None: ...

    async def get_course(self, course_id: UUID) -> Course | None: ...

    async def list_courses(self) -> list[Course]: ...

    async def list_courses_by_instructor(self, instructor_id: UUID) -> list[Course]: ...

    # Weeks
    async def create_week(self, week: Week) -> None: ...

    async def get_week(self, week_id: UUID) -> Week | None: ...

    async def list_weeks(self, course_id: UUID) -> list[Week]:
        """Weeks of a course ordered by ``order``."""
        ...

    # Content
    async def create_content(self, item: ContentItem) -> None: ...

    async def update_content(self, item: ContentItem) -> None: ...

    async def get_content(self, content_id: UUID) -> ContentItem | None: ...

    async def list_week_content(self, week_id: UUID) -> list[ContentItem]:
        """Content of a week ordered by ``order``."""
        ...

    async def count_course_content(self, course_id: UUID) -> int: ...

    # Questions
    async def create_question(self, question: QuizQuestion) -> None: ...

    async def list_questions(self, content_id: UUID) -> list[QuizQuestion]: ...


class CassandraCourseRepository:
    """Course repository backed by Cassandra."""

    def __init__(self, session: "Session", keyspace: str):
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        ks = self.keyspace

        # Courses
        self._insert_course = self.session.prepare(f"""
            INSERT INTO {ks}.courses
            (id, title, description, thumbnail, instructor_id, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """)
        self._insert_course_by_instructor = self.session.prepare(f"""
            INSERT INTO {ks}.courses_by_instructor (instructor_id, created_at, course_id)
            VALUES (?, ?, ?)
        """)
        self._update_course = self.session.prepare(f"""
            UPDATE {ks}.courses
            SET title = ?, description = ?, thumbnail = ?, updated_at = ?
            WHERE id = ?
        """)
        self._get_course = self.session.prepare(
            f"SELECT * FROM {ks}.courses WHERE id = ?"
        )
        self._list_courses = self.session.prepare(f"SELECT * FROM {ks}.courses")
        self._list_course_ids_by_instructor = self.session.prepare(
            f"SELECT course_id FROM {ks}.courses_by_instructor WHERE instructor_id = ?"
        )

        # Weeks
        self._insert_week = self.session.prepare(f"""
            INSERT INTO {ks}.weeks (id, course_id, week_number, title, position)
            VALUES (?, ?, ?, ?, ?)
        """)
        self._insert_week_by_course = self.session.prepare(f"""
            INSERT INTO {ks}.weeks_by_course
            (course_id, position, week_id, week_number, title)
            VALUES (?, ?, ?, ?, ?)
        """)
        self._get_week = self.session.prepare(f"SELECT * FROM {ks}.weeks WHERE id = ?")
        self._list_weeks = self.session.prepare(
            f"SELECT * FROM {ks}.weeks_by_course WHERE course_id = ?"
        )

        # Content
        self._insert_content = self.session.prepare(f"""
            INSERT INTO {ks}.content_items
            (id, week_id, course_id, title, content_type, content, position)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """)
        self._insert_content_by_week = self.session.prepare(f"""
            INSERT INTO {ks}.content_by_week
            (week_id, position, content_id, course_id, title, content_type, content)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """)
        self._insert_content_by_course = self.session.prepare(f"""
            INSERT INTO {ks}.content_by_course (course_id, content_id, week_id, content_type)
            VALUES (?, ?, ?, ?)
        """)
        self._update_content = self.session.prepare(f"""
            UPDATE {ks}.content_items SET title = ?, content = ? WHERE id = ?
        """)
        self._update_content_by_week = self.session.prepare(f"""
            UPDATE {ks}.content_by_week SET title = ?, content = ?
            WHERE week_id = ? AND position = ? AND content_id = ?
        """)
        self._get_content = self.session.prepare(
            f"SELECT * FROM {ks}.content_items WHERE id = ?"
        )
        self._list_week_content = self.session.prepare(
            f"SELECT * FROM {ks}.content_by_week WHERE week_id = ?"
        )
        self._count_course_content = self.session.prepare(
            f"SELECT COUNT(*) FROM {ks}.content_by_course WHERE course_id = ?"
        )

        # Questions
        self._insert_question = self.session.prepare(f"""
            INSERT INTO {ks}.quiz_questions_by_content
            (content_id, created_at, id, question_text, options, correct_answer, points, tags)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """)
        self._list_questions = self.session.prepare(
            f"SELECT * FROM {ks}.quiz_questions_by_content WHERE content_id = ?"
        )

    # ==========================================================================
    # Courses
    # ==========================================================================

    async def create_course(self, course: Course) -> None:
        await self.session.aexecute(
            self._insert_course,
            [
                course.id,
                course.title,
                course.description,
                course.thumbnail,
                course.instructor_id,
                course.created_at,
                course.updated_at,
            ],
        )
        await self.session.aexecute(
            self._insert_course_by_instructor,
            [course.instructor_id, course.created_at, course.id],
        )

    async def update_course(self, course: Course) -> None:
        await self.session.aexecute(
            self._update_course,
            [
                course.title,
                course.description,
                course.thumbnail,
                course.updated_at,
                course.id,
            ],
        )

    async def get_course(self, course_id: UUID) -> Course | None:
        result = await self.session.aexecute(self._get_course, [course_id])
        row = result.one()
        return Course.from_row(row) if row else None

    async def list_courses(self) -> list[Course]:
        result = await self.session.aexecute(self._list_courses)
        return [Course.from_row(row) for row in result]

    async def list_courses_by_instructor(self, instructor_id: UUID) -> list[Course]:
        result = await self.session.aexecute(
            self._list_course_ids_by_instructor, [instructor_id]
        )
        courses = []
        for row in result:
            course = await self.get_course(row.course_id)
            if course:
                courses.append(course)
        return courses

    # ==========================================================================
    # Weeks
    # ==========================================================================

    async def create_week(self, week: Week) -> None:
        await self.session.aexecute(
            self._insert_week,
            [week.id, week.course_id, week.week_number, week.title, week.order],
        )
        await self.session.aexecute(
            self._insert_week_by_course,
            [week.course_id, week.order, week.id, week.week_number, week.title],
        )

    async def get_week(self, week_id: UUID) -> Week | None:
        result = await self.session.aexecute(self._get_week, [week_id])
        row = result.one()
        return Week.from_row(row) if row else None

    async def list_weeks(self, course_id: UUID) -> list[Week]:
        result = await self.session.aexecute(self._list_weeks, [course_id])
        return [Week.from_row(row) for row in result]

    # ==========================================================================
    # Content
    # ==========================================================================

    async def create_content(self, item: ContentItem) -> None:
        await self.session.aexecute(
            self._insert_content,
            [
                item.id,
                item.week_id,
                item.course_id,
                item.title,
                item.content_type,
                item.content,
                item.order,
            ],
        )
        await self.session.aexecute(
            self._insert_content_by_week,
            [
                item.week_id,
                item.order,
                item.id,
                item.course_id,
                item.title,
                item.content_type,
                item.content,
            ],
        )
        await self.session.aexecute(
            self._insert_content_by_course,
            [item.course_id, item.id, item.week_id, item.content_type],
        )

    async def update_content(self, item: ContentItem) -> None:
        await self.session.aexecute(
            self._update_content, [item.title, item.content, item.id]
        )
        await self.session.aexecute(
            self._update_content_by_week,
            [item.title, item.content, item.week_id, item.order, item.id],
        )

    async def get_content(self, content_id: UUID) -> ContentItem | None:
        result = await self.session.aexecute(self._get_content, [content_id])
        row = result.one()
        return ContentItem.from_row(row) if row else None

    async def list_week_content(self, week_id: UUID) -> list[ContentItem]:
        result = await self.session.aexecute(self._list_week_content, [week_id])
        return [ContentItem.from_row(row) for row in result]

    async def count_course_content(self, course_id: UUID) -> int:
        result = await self.session.aexecute(self._count_course_content, [course_id])
        row = result.one()
        return row.count if row else 0

    # ==========================================================================
    # Questions
    # ==========================================================================

    async def create_question(self, question: QuizQuestion) -> None:
        await self.session.aexecute(
            self._insert_question,
            [
                question.content_id,
                question.created_at,
                question.id,
                question.question_text,
                question.options,
                question.correct_answer,
                question.points,
                question.tags,
            ],
        )

    async def list_questions(self, content_id: UUID) -> list[QuizQuestion]:
        result = await self.session.aexecute(self._list_questions, [content_id])
        return [QuizQuestion.from_row(row) for row in result]
