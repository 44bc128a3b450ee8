"""Utility modules for the LMS API."""

from src.utils.timezone import ensure_utc_aware, utcnow


__all__ = ["ensure_utc_aware", "utcnow"]
