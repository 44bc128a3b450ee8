"""Seed the database with demo courses, users and progress.

Everything is created through the domain services, so the usual rules
(ownership, one enrollment per course, cached percentages) hold for the demo
data too. Users that already exist are left untouched and the run stops.

Usage:
    python -m scripts.seed
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog

from src.assignments.schemas import (
    CreateAssignmentRequest,
    GradeSubmissionRequest,
)
from src.assignments.service import AssignmentService
from src.auth.schemas import RegisterRequest
from src.auth.service import AuthService, UserExistsError
from src.config.settings import get_settings
from src.core.context import RequestContext
from src.core.database import init_async_cassandra, shutdown_async_cassandra
from src.courses.schemas import (
    CreateContentRequest,
    CreateCourseRequest,
    CreateQuestionRequest,
    CreateWeekRequest,
)
from src.courses.service import CourseService
from src.main import Repositories, cassandra_repositories
from src.progress.service import ProgressService
from src.utils import utcnow


logger = structlog.get_logger(__name__)

DEMO_PASSWORD = "password123"

USERS = [
    ("Dr. Evelyn Reed", "evelyn@email.com", "instructor"),
    ("Prof. Kenji Tanaka", "kenji@email.com", "instructor"),
    ("Bharath Kumar", "bharath@email.com", "student"),
    ("Aisha Khan", "aisha@email.com", "student"),
]

# instructor email -> course title, description, weeks
# each week: title, [(title, type, body or questions)]
COURSES = {
    "evelyn@email.com": [
        (
            "Full-Stack Web Development Bootcamp",
            "Master HTML, CSS, JavaScript and React from scratch.",
            [
                (
                    "HTML & CSS Foundations",
                    [
                        ("HTML Structure", "text", "Tags, attributes, documents."),
                        ("CSS Styling", "text", "Selectors, box model, layouts."),
                        (
                            "Week 1 Quiz",
                            "quiz",
                            [
                                (
                                    "What does CSS stand for?",
                                    ["Creative Style Sheets", "Cascading Style Sheets"],
                                    1,
                                    ["css"],
                                ),
                                (
                                    "Which tag defines an unordered list?",
                                    ["<ol>", "<ul>", "<li>"],
                                    1,
                                    ["html"],
                                ),
                            ],
                        ),
                    ],
                ),
                (
                    "JavaScript Fundamentals",
                    [
                        ("Variables & Data Types", "text", "let, const, primitives."),
                        ("DOM Manipulation", "text", "Selecting elements, events."),
                        (
                            "Week 2 Quiz",
                            "quiz",
                            [
                                (
                                    "Which is NOT a JavaScript data type?",
                                    ["String", "Boolean", "Character"],
                                    2,
                                    ["javascript"],
                                ),
                                (
                                    'How do you select the element with id="demo"?',
                                    [
                                        'document.select("#demo")',
                                        'document.getElementById("demo")',
                                    ],
                                    1,
                                    ["dom", "javascript"],
                                ),
                            ],
                        ),
                    ],
                ),
            ],
        ),
    ],
    "kenji@email.com": [
        (
            "Introduction to Machine Learning",
            "Regression, classification, clustering and model evaluation.",
            [
                (
                    "ML Concepts & Regression",
                    [
                        ("What is Machine Learning?", "text", "Supervised vs not."),
                        (
                            "Week 1 Quiz",
                            "quiz",
                            [
                                (
                                    "Which task predicts a continuous value?",
                                    ["Classification", "Regression", "Clustering"],
                                    1,
                                    ["regression"],
                                ),
                            ],
                        ),
                    ],
                ),
            ],
        ),
    ],
}


async def seed(repositories: Repositories) -> dict[str, int]:
    """Create the demo data and return counts per kind."""
    auth = AuthService(repositories.users)
    catalog = CourseService(repositories.courses)
    progress = ProgressService(repositories.progress, catalog)
    assignments = AssignmentService(repositories.assignments, catalog)
    counts = dict.fromkeys(("users", "courses", "content", "enrollments"), 0)

    users = {}
    for name, email, role in USERS:
        users[email] = await auth.register(
            RegisterRequest(name=name, email=email, password=DEMO_PASSWORD, role=role)
        )
        counts["users"] += 1

    # course title -> content ids in creation order
    contents: dict[str, list] = {}
    courses = {}
    for instructor_email, course_specs in COURSES.items():
        instructor_id = users[instructor_email].id
        for title, description, weeks in course_specs:
            course = await catalog.create_course(
                CreateCourseRequest(title=title, description=description),
                instructor_id,
            )
            courses[title] = course
            contents[title] = []
            counts["courses"] += 1

            for number, (week_title, items) in enumerate(weeks, start=1):
                week = await catalog.create_week(
                    course.id,
                    CreateWeekRequest(week_number=number, title=week_title, order=number),
                    instructor_id,
                )
                for order, (item_title, content_type, body) in enumerate(items, 1):
                    is_quiz = content_type == "quiz"
                    item = await catalog.create_content(
                        week.id,
                        CreateContentRequest(
                            title=item_title,
                            content_type=content_type,
                            content=None if is_quiz else body,
                            order=order,
                        ),
                        instructor_id,
                    )
                    contents[title].append(item.id)
                    counts["content"] += 1
                    if not is_quiz:
                        continue
                    for text, options, correct, tags in body:
                        await catalog.create_question(
                            item.id,
                            CreateQuestionRequest(
                                question_text=text,
                                options=options,
                                correct_answer=correct,
                                tags=tags,
                            ),
                            instructor_id,
                        )

    web_dev = "Full-Stack Web Development Bootcamp"
    bharath = users["bharath@email.com"].id
    aisha = users["aisha@email.com"].id

    # Bharath: first week done with a good quiz, weak second quiz
    enrollment = await progress.enroll(bharath, courses[web_dev].id)
    web_items = contents[web_dev]
    scores = {2: 80, 5: 45}
    for index in (0, 1, 2, 3, 5):
        await progress.record_completion(
            bharath, enrollment.id, web_items[index], score=scores.get(index)
        )
    await progress.enroll(bharath, courses["Introduction to Machine Learning"].id)

    # Aisha: just started
    enrollment = await progress.enroll(aisha, courses[web_dev].id)
    await progress.record_completion(aisha, enrollment.id, web_items[0])
    counts["enrollments"] = 3

    evelyn = users["evelyn@email.com"].id
    portfolio = await assignments.create_assignment(
        CreateAssignmentRequest(
            course_id=courses[web_dev].id,
            title="HTML Portfolio Page",
            description="Create a single-page portfolio using HTML & CSS.",
            due_date=utcnow() + timedelta(days=7),
            total_points=50,
        ),
        evelyn,
    )
    await assignments.create_assignment(
        CreateAssignmentRequest(
            course_id=courses[web_dev].id,
            title="JavaScript To-Do App",
            description="Build a functional to-do list application.",
            due_date=utcnow() + timedelta(days=14),
        ),
        evelyn,
    )
    submission = await assignments.submit(aisha, portfolio.id)
    await assignments.grade(
        evelyn,
        submission.id,
        GradeSubmissionRequest(
            grade=45.0, feedback="Good structure, needs more styling."
        ),
    )
    await assignments.submit(bharath, portfolio.id)

    return counts


async def run_seed() -> None:
    settings = get_settings()
    logger.info("seed_starting", keyspace=settings.cassandra_keyspace)

    session = await init_async_cassandra()
    with RequestContext(request_id="seed"):
        try:
            counts = await seed(
                cassandra_repositories(session, settings.cassandra_keyspace)
            )
        except UserExistsError:
            logger.warning("seed_skipped", reason="demo users already exist")
            return
        finally:
            await shutdown_async_cassandra()

        logger.info("seed_completed", **counts)


if __name__ == "__main__":
    asyncio.run(run_seed())
