"""Assignments and submissions module."""

from .models import (
    ASSIGNMENTS_TABLES_CQL,
    Assignment,
    Submission,
    SubmissionStatus,
)


__all__ = [
    "ASSIGNMENTS_TABLES_CQL",
    "Assignment",
    "Submission",
    "SubmissionStatus",
]
