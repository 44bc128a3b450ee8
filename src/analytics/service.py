"""Student analytics service.

Builds the student summary: enrolled courses, average quiz score, weak
areas (tags of quizzes scored below the threshold) and grade distribution.
Reads from the progress, catalog and assignment stores; never writes.
"""

from uuid import UUID

import structlog

from src.analytics.schemas import GradeBucket, StudentSummaryResponse
from src.analytics.weak_areas import (
    QuizAttempt,
    grade_bucket,
    grade_distribution,
    low_scoring,
    rank_tags,
)
from src.assignments.repository import AssignmentRepository
from src.courses.service import CourseService
from src.progress.calculator import average_score
from src.progress.repository import ProgressRepository


logger = structlog.get_logger(__name__)


class AnalyticsService:
    """On-demand analytics over progress records and submissions."""

    def __init__(
        self,
        progress: ProgressRepository,
        catalog: CourseService,
        assignments: AssignmentRepository,
        low_score_threshold: int = 70,
        max_weak_areas: int = 5,
    ):
        self.progress = progress
        self.catalog = catalog
        self.assignments = assignments
        self.low_score_threshold = low_score_threshold
        self.max_weak_areas = max_weak_areas

    async def _quiz_attempts(self, student_id: UUID) -> tuple[int, list[QuizAttempt]]:
        """Enrollment count and completed, scored quiz attempts.

        Attempts are ordered by enrollment date, then completion time, which
        fixes the first-seen order used to break tag ties.
        """
        enrollments = sorted(
            await self.progress.list_user_enrollments(student_id),
            key=lambda e: e.enrolled_at,
        )

        attempts: list[QuizAttempt] = []
        for enrollment in enrollments:
            records = sorted(
                await self.progress.list_progress(enrollment.id),
                key=lambda r: r.completed_at.timestamp() if r.completed_at else 0.0,
            )
            for record in records:
                if not record.completed or record.score is None:
                    continue
                item = await self.catalog.find_content(record.content_id)
                if item is None or not item.is_quiz:
                    continue
                attempts.append(QuizAttempt(record.content_id, record.score))

        return len(enrollments), attempts

    async def _grade_distribution(self, student_id: UUID) -> list[GradeBucket]:
        buckets = []
        for submission in await self.assignments.list_user_submissions(student_id):
            assignment = await self.assignments.get_assignment(submission.assignment_id)
            total_points = assignment.total_points if assignment else 0
            buckets.append(
                grade_bucket(submission.grade, total_points, submission.is_graded)
            )
        return [GradeBucket(**entry) for entry in grade_distribution(buckets)]

    async def student_weak_areas(self, student_id: UUID) -> StudentSummaryResponse:
        """Summary for one student.

        A student with no enrollments gets the empty summary (0 courses,
        null average, no weak areas, no grade distribution).
        """
        courses_enrolled, attempts = await self._quiz_attempts(student_id)
        if courses_enrolled == 0:
            return StudentSummaryResponse.empty()

        tag_lists = []
        for content_id in low_scoring(attempts, self.low_score_threshold):
            questions = await self.catalog.list_tagged_questions(content_id)
            tag_lists.extend(q.tags for q in questions)

        summary = StudentSummaryResponse(
            courses_enrolled=courses_enrolled,
            average_score=average_score(a.score for a in attempts),
            areas_for_improvement=rank_tags(tag_lists, self.max_weak_areas),
            grade_distribution=await self._grade_distribution(student_id),
        )

        logger.debug(
            "student_summary_computed",
            student_id=str(student_id),
            quiz_attempts=len(attempts),
            weak_areas=len(summary.areas_for_improvement),
        )
        return summary
