"""Domain modules for the matching engine."""

from .explanation import build_explanation
from .ranking import rank_results
from .scoring import FACTOR_WEIGHTS, calculate_factor_scores, score_candidate

__all__ = [
    "FACTOR_WEIGHTS",
    "build_explanation",
    "calculate_factor_scores",
    "rank_results",
    "score_candidate",
]
