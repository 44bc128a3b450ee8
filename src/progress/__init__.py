"""Enrollment and progress tracking module.

Provides:
- Course enrollment (one per student and course)
- Content completion with optional quiz score
- Cached course progress percentage
"""

from .models import (
    PROGRESS_TABLES_CQL,
    Enrollment,
    ProgressRecord,
)


__all__ = [
    "PROGRESS_TABLES_CQL",
    "Enrollment",
    "ProgressRecord",
]
