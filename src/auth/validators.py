"""Validation utilities for user input.

Provides validation for:
- Password strength
- Display names
"""

import re
from typing import NamedTuple


PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
NAME_MIN_LENGTH = 2


class ValidationResult(NamedTuple):
    """Result of a validation check."""

    valid: bool
    message: str | None = None


def validate_password(password: str) -> ValidationResult:
    """Validate password strength.

    Requirements:
    - Between 8 and 128 characters
    - At least one letter
    - At least one digit

    Examples:
        >>> validate_password("password123")
        ValidationResult(valid=True, message=None)
        >>> validate_password("short1")
        ValidationResult(valid=False, message='Password must be at least 8 characters')
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationResult(
            False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )

    if len(password) > PASSWORD_MAX_LENGTH:
        return ValidationResult(
            False, f"Password must be at most {PASSWORD_MAX_LENGTH} characters"
        )

    if not re.search(r"[A-Za-z]", password):
        return ValidationResult(False, "Password must contain at least one letter")

    if not re.search(r"\d", password):
        return ValidationResult(False, "Password must contain at least one digit")

    return ValidationResult(True)


def normalize_name(name: str) -> str:
    """Collapse internal whitespace and strip a display name."""
    return " ".join(name.split())


def validate_name(name: str) -> ValidationResult:
    """Validate a display name after normalization."""
    normalized = normalize_name(name)
    if len(normalized) < NAME_MIN_LENGTH:
        return ValidationResult(
            False, f"Name must be at least {NAME_MIN_LENGTH} characters"
        )
    return ValidationResult(True)
