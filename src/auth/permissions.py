"""Role-based access control.

Two closed roles:
- STUDENT: enrolls in courses, records progress, submits assignments
- INSTRUCTOR: authors and owns courses, grades submissions

Role-dependent decisions go through ``match`` over ``UserRole`` so that adding
a role surfaces every decision site (``assert_never`` in the fallthrough).
"""

from enum import Enum
from typing import assert_never
from uuid import UUID


class UserRole(str, Enum):
    """User roles. Fixed at registration."""

    STUDENT = "student"
    INSTRUCTOR = "instructor"


def parse_role(role: UserRole | str) -> UserRole:
    """Coerce a role string (e.g. from a token) to ``UserRole``.

    Raises:
        ValueError: If the role is unknown
    """
    return role if isinstance(role, UserRole) else UserRole(role)


def is_student(role: UserRole | str) -> bool:
    """Check if role is STUDENT."""
    return parse_role(role) == UserRole.STUDENT


def is_instructor(role: UserRole | str) -> bool:
    """Check if role is INSTRUCTOR."""
    return parse_role(role) == UserRole.INSTRUCTOR


def owns_course(user_id: UUID | str, course_owner_id: UUID | str | None) -> bool:
    """Check ownership of a course by comparing ids.

    ``course_owner_id`` is None when the owner could not be resolved (e.g.
    orphaned content), which never grants ownership.
    """
    if course_owner_id is None:
        return False
    return str(user_id) == str(course_owner_id)


def can_view_enrollment_progress(
    role: UserRole | str,
    user_id: UUID | str,
    enrollment_user_id: UUID | str,
    course_owner_id: UUID | str | None,
) -> bool:
    """Check read access to an enrollment's progress records.

    Students may only read their own enrollment; instructors may read (never
    mutate) enrollments of courses they own.
    """
    match parse_role(role):
        case UserRole.STUDENT:
            return str(user_id) == str(enrollment_user_id)
        case UserRole.INSTRUCTOR:
            return owns_course(user_id, course_owner_id)
        case unreachable:
            assert_never(unreachable)
