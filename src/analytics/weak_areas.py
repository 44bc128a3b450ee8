"""Pure weak-area and grade arithmetic.

No I/O: the analytics service gathers the inputs and these functions do the
counting, so the ranking rules can be tested on plain values.
"""

from collections.abc import Iterable
from dataclasses import dataclass


GRADE_A_RATIO = 0.9
GRADE_B_RATIO = 0.8
GRADE_BUCKETS = ("A", "B", "C", "Pending")


@dataclass(frozen=True)
class QuizAttempt:
    """A completed, scored quiz of the student."""

    content_id: object
    score: float


def low_scoring(attempts: Iterable[QuizAttempt], threshold: float) -> list[object]:
    """Content ids of attempts scored strictly below ``threshold``.

    Order of first appearance is kept; duplicates are dropped.
    """
    seen: dict[object, None] = {}
    for attempt in attempts:
        if attempt.score < threshold:
            seen.setdefault(attempt.content_id, None)
    return list(seen)


def rank_tags(tag_lists: Iterable[Iterable[str]], limit: int) -> list[str]:
    """Most frequent tags first, ties in first-seen order, at most ``limit``.

    Examples:
        >>> rank_tags([["js", "dom"], ["css"], ["dom"]], limit=5)
        ['dom', 'js', 'css']
    """
    counts: dict[str, int] = {}
    for tags in tag_lists:
        for tag in tags:
            counts[tag] = counts.get(tag, 0) + 1

    # sorted() is stable, dict order is first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [tag for tag, _ in ranked[:limit]]


def grade_bucket(grade: float | None, total_points: int, graded: bool) -> str:
    """Letter bucket of a submission: A (>= 90%), B (>= 80%), C, or Pending."""
    if not graded or grade is None:
        return "Pending"
    ratio = grade / total_points if total_points > 0 else 0.0
    if ratio >= GRADE_A_RATIO:
        return "A"
    if ratio >= GRADE_B_RATIO:
        return "B"
    return "C"


def grade_distribution(buckets: Iterable[str]) -> list[dict[str, int | str]]:
    """Count buckets into ``[{"name": "A", "value": n}, ...]``, all four listed."""
    counts = dict.fromkeys(GRADE_BUCKETS, 0)
    for bucket in buckets:
        counts[bucket] += 1
    return [{"name": name, "value": value} for name, value in counts.items()]
