"""Ranking and filtering policy for scored candidates."""

from __future__ import annotations

from collections.abc import Iterable

from .models import MatchResult

DEFAULT_MIN_SCORE = 0.3
DEFAULT_RESULT_LIMIT = 20


def rank_results(
    results: Iterable[MatchResult],
    *,
    min_score: float = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_RESULT_LIMIT,
) -> list[MatchResult]:
    """Keep results strictly above ``min_score``, best first, at most ``limit``.

    ``sorted`` is stable, so equal scores keep their fetch order.
    """
    eligible = [result for result in results if result.overall > min_score]
    ranked = sorted(eligible, key=lambda result: result.overall, reverse=True)
    return ranked[: max(limit, 0)]
