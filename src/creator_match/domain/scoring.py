"""Scoring engine: combine factor scores into a weighted overall score with reasons.

Usage example:
    from datetime import UTC, datetime

    from creator_match.domain.models import CandidateProfile, MatchingCriteria
    from creator_match.domain.scoring import score_candidate

    result = score_candidate(
        CandidateProfile(candidate_id="k1", followers_count=25_000, engagement_rate=0.08),
        MatchingCriteria(campaign_id="c1", budget=10_000_000, categories=("beauty",)),
        now=datetime.now(UTC),
    )
    assert 0.0 <= result.overall <= 1.0
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from types import MappingProxyType

from . import factors
from .models import CandidateProfile, FactorScores, MatchingCriteria, MatchResult
from .regional_profiles import DEFAULT_REGIONAL_PROFILE, RegionalProfile

DEFAULT_ALGORITHM_VERSION = "CREATOR_MATCH_V1"

FACTOR_WEIGHTS = MappingProxyType(
    {
        "category_match": 0.25,
        "audience_match": 0.20,
        "budget_fit": 0.15,
        "location_match": 0.10,
        "engagement_quality": 0.15,
        "past_performance": 0.10,
        "regional_fit": 0.05,
    }
)

if not math.isclose(sum(FACTOR_WEIGHTS.values()), 1.0):
    raise RuntimeError("Factor weights must sum to 1.0")

REASON_THRESHOLD = 0.7

FACTOR_REASONS = MappingProxyType(
    {
        "category_match": "Excellent content category match",
        "audience_match": "Strong audience demographic alignment",
        "budget_fit": "Cost-effective within budget",
        "location_match": "Based in a targeted location",
        "engagement_quality": "High engagement quality",
        "past_performance": "Proven track record",
        "regional_fit": "Strong regional market presence",
    }
)
VERIFIED_REASON = "Verified creator profile"


def calculate_factor_scores(
    candidate: CandidateProfile,
    criteria: MatchingCriteria,
    profile: RegionalProfile = DEFAULT_REGIONAL_PROFILE,
) -> FactorScores:
    """Run all seven factor calculators for one candidate."""
    return FactorScores(
        category_match=factors.category_match(candidate, criteria),
        audience_match=factors.audience_match(candidate, criteria),
        budget_fit=factors.budget_fit(candidate, criteria),
        location_match=factors.location_match(candidate, criteria),
        engagement_quality=factors.engagement_quality(candidate),
        past_performance=factors.past_performance(candidate),
        regional_fit=factors.regional_fit(candidate, profile),
    )


def weighted_overall(scores: FactorScores) -> float:
    """Fixed-weight linear combination of factor scores, kept within [0, 1]."""
    values = scores.as_dict()
    total = sum(values[name] * weight for name, weight in FACTOR_WEIGHTS.items())
    return max(0.0, min(1.0, total))


def generate_reasons(scores: FactorScores, candidate: CandidateProfile) -> tuple[str, ...]:
    """Qualitative reasons for strong factors; low scores produce no reason."""
    reasons = [
        FACTOR_REASONS[name]
        for name, value in scores.as_dict().items()
        if value > REASON_THRESHOLD
    ]
    if candidate.is_verified:
        reasons.append(VERIFIED_REASON)
    return tuple(reasons)


def score_candidate(
    candidate: CandidateProfile,
    criteria: MatchingCriteria,
    *,
    profile: RegionalProfile = DEFAULT_REGIONAL_PROFILE,
    algorithm_version: str = DEFAULT_ALGORITHM_VERSION,
    now: datetime | None = None,
) -> MatchResult:
    """Score one candidate against one campaign's criteria."""
    scores = calculate_factor_scores(candidate, criteria, profile)
    return MatchResult(
        campaign_id=criteria.campaign_id,
        candidate_id=candidate.candidate_id,
        overall=weighted_overall(scores),
        reasons=generate_reasons(scores, candidate),
        factors=scores,
        algorithm_version=algorithm_version,
        created_at=now or datetime.now(UTC),
    )
