"""Shared fixtures: in-memory storage, services, HTTP client and tokens."""

import os
import tempfile


# Settings are cached on first use, so the environment goes in before any
# application import.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="lms-test-logs-"))
os.environ.setdefault("LOG_REQUESTS", "false")

from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.analytics.service import AnalyticsService  # noqa: E402
from src.assignments.service import AssignmentService  # noqa: E402
from src.auth.permissions import UserRole  # noqa: E402
from src.auth.security import create_access_token  # noqa: E402
from src.courses.service import CourseService  # noqa: E402
from src.main import Repositories, create_app  # noqa: E402
from src.progress.service import ProgressService  # noqa: E402
from tests.fakes import in_memory_repositories  # noqa: E402


# ==============================================================================
# Storage and services
# ==============================================================================


@pytest.fixture
def repositories() -> Repositories:
    return in_memory_repositories()


@pytest.fixture
def course_service(repositories: Repositories) -> CourseService:
    return CourseService(repositories.courses)


@pytest.fixture
def progress_service(
    repositories: Repositories, course_service: CourseService
) -> ProgressService:
    return ProgressService(repositories.progress, course_service)


@pytest.fixture
def assignment_service(
    repositories: Repositories, course_service: CourseService
) -> AssignmentService:
    return AssignmentService(repositories.assignments, course_service)


@pytest.fixture
def analytics_service(
    repositories: Repositories, course_service: CourseService
) -> AnalyticsService:
    return AnalyticsService(
        progress=repositories.progress,
        catalog=course_service,
        assignments=repositories.assignments,
    )


# ==============================================================================
# HTTP
# ==============================================================================


@pytest.fixture
def client(repositories: Repositories) -> TestClient:
    """Client for an app wired to the in-memory repositories."""
    return TestClient(create_app(repositories=repositories))


@pytest.fixture
def instructor_id() -> UUID:
    return uuid4()


@pytest.fixture
def student_id() -> UUID:
    return uuid4()


@pytest.fixture
def instructor_headers(instructor_id: UUID) -> dict[str, str]:
    token = create_access_token(
        instructor_id, "instructor@test.com", UserRole.INSTRUCTOR
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student_id: UUID) -> dict[str, str]:
    token = create_access_token(student_id, "student@test.com", UserRole.STUDENT)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_student_headers() -> dict[str, str]:
    token = create_access_token(uuid4(), "other@test.com", UserRole.STUDENT)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_instructor_headers() -> dict[str, str]:
    token = create_access_token(uuid4(), "other-instructor@test.com", "instructor")
    return {"Authorization": f"Bearer {token}"}
