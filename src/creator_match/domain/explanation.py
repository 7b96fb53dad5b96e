"""Narrative explanations for persisted match results."""

from __future__ import annotations

from types import MappingProxyType

from .models import Explanation, MatchResult

STRENGTH_THRESHOLD = 0.7
WEAKNESS_THRESHOLD = 0.4

FACTOR_DISPLAY_NAMES = MappingProxyType(
    {
        "category_match": "Content Category Match",
        "audience_match": "Audience Alignment",
        "budget_fit": "Budget Compatibility",
        "location_match": "Geographic Relevance",
        "engagement_quality": "Engagement Quality",
        "past_performance": "Historical Performance",
        "regional_fit": "Regional Market Fit",
    }
)


def _percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def build_explanation(result: MatchResult) -> Explanation:
    """Summarise a match result as strengths, weaknesses and a prose paragraph."""
    strengths: list[str] = []
    weaknesses: list[str] = []
    for name, value in result.factors.as_dict().items():
        label = f"{FACTOR_DISPLAY_NAMES[name]}: {_percent(value)}"
        if value > STRENGTH_THRESHOLD:
            strengths.append(label)
        elif value < WEAKNESS_THRESHOLD:
            weaknesses.append(label)

    parts = [f"This candidate scored {_percent(result.overall)} compatibility."]
    if strengths:
        parts.append(f"Strong points: {', '.join(strengths)}.")
    if weaknesses:
        parts.append(f"Areas for consideration: {', '.join(weaknesses)}.")

    return Explanation(
        campaign_id=result.campaign_id,
        candidate_id=result.candidate_id,
        overall=result.overall,
        reasons=result.reasons,
        factors=result.factors,
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        text=" ".join(parts),
    )
