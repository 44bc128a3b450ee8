"""Pure progress arithmetic.

Rounding is half-up (2.5 -> 3), not Python's round-half-to-even.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(66.66)
        67
    """
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def completion_percentage(done: int, total: int) -> int:
    """Percentage of completed items, 0 when the course has no content.

    Computed exactly on integers: ``floor(done * 100 / total + 1/2)``.

    Examples:
        >>> completion_percentage(3, 4)
        75
        >>> completion_percentage(1, 8)
        13
        >>> completion_percentage(0, 0)
        0
    """
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


def average_score(scores: Iterable[float]) -> int | None:
    """Mean of ``scores`` rounded half-up, or None when there are none."""
    values = [Decimal(str(s)) for s in scores]
    if not values:
        return None
    return round_half_up(sum(values) / len(values))
