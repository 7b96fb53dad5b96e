"""Factor calculators: one normalised [0, 1] sub-score per matching dimension.

Every calculator is a pure function of its inputs and maps missing, zero or empty data
to a named neutral score instead of raising, so one malformed candidate record cannot
abort scoring of the rest of the pool.

Usage example:
    from creator_match.domain.factors import budget_fit
    from creator_match.domain.models import CandidateProfile, MatchingCriteria

    criteria = MatchingCriteria(campaign_id="c1", budget=1000.0)
    assert budget_fit(CandidateProfile(candidate_id="k1", average_rate=200.0), criteria) == 1.0
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import CandidateProfile, MatchingCriteria
from .regional_profiles import DEFAULT_REGIONAL_PROFILE, RegionalProfile

NEUTRAL_CATEGORY_SCORE = 0.5
NEUTRAL_AUDIENCE_SCORE = 0.5
UNKNOWN_RATE_BUDGET_SCORE = 0.7
NEUTRAL_LOCATION_SCORE = 0.5
LOCATION_MATCH_SCORE = 1.0
LOCATION_MISMATCH_SCORE = 0.3
NEUTRAL_PERFORMANCE_SCORE = 0.5
REGIONAL_BASE_SCORE = 0.5
REGIONAL_PLACE_BONUS = 0.3
REGIONAL_SCRIPT_BONUS = 0.2

# (max rate/budget ratio, score), checked in order
BUDGET_RATIO_BANDS: tuple[tuple[float, float], ...] = (
    (0.3, 1.0),
    (0.5, 0.8),
    (0.8, 0.6),
    (1.0, 0.4),
)
OVER_BUDGET_SCORE = 0.1

# (min engagement rate, score), checked in order
ENGAGEMENT_RATE_BANDS: tuple[tuple[float, float], ...] = (
    (0.08, 1.0),
    (0.05, 0.8),
    (0.03, 0.6),
    (0.01, 0.4),
)
LOW_ENGAGEMENT_SCORE = 0.2
MICRO_FOLLOWER_LIMIT = 10_000
MEGA_FOLLOWER_LIMIT = 100_000
MICRO_BOOST = 1.1
MEGA_PENALTY = 0.9

EXPECTED_REACH_RATIO = 0.1
EXPECTED_VIEW_ENGAGEMENT_RATIO = 0.05

GENDER_ANY = "all"


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _fuzzy_equal(left: str, right: str) -> bool:
    """Case-insensitive substring match in either direction."""
    a = left.strip().lower()
    b = right.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def overlap_ratio(wanted: Sequence[str] | None, offered: Sequence[str] | None) -> float:
    """Fraction of ``wanted`` items that fuzzy-match any ``offered`` item."""
    if not wanted or not offered:
        return 0.0
    matches = [item for item in wanted if any(_fuzzy_equal(item, other) for other in offered)]
    return len(matches) / len(wanted)


def category_match(candidate: CandidateProfile, criteria: MatchingCriteria) -> float:
    """Share of required categories covered by the candidate's content categories."""
    if not criteria.categories:
        return NEUTRAL_CATEGORY_SCORE
    return overlap_ratio(criteria.categories, candidate.content_categories)


def audience_match(candidate: CandidateProfile, criteria: MatchingCriteria) -> float:
    """Average of the age, gender and interest sub-matches where both sides have data."""
    target = criteria.target_audience
    audience = candidate.audience
    total = 0.0
    applied = 0

    if target.age_groups and audience.age_groups:
        total += overlap_ratio(target.age_groups, audience.age_groups)
        applied += 1

    if target.gender and audience.gender:
        wanted = target.gender.strip().lower()
        if wanted == GENDER_ANY or wanted == audience.gender.strip().lower():
            total += 1.0
        applied += 1

    if target.interests and audience.interests:
        total += overlap_ratio(target.interests, audience.interests)
        applied += 1

    if applied == 0:
        return NEUTRAL_AUDIENCE_SCORE
    return total / applied


def budget_fit(candidate: CandidateProfile, criteria: MatchingCriteria) -> float:
    """Step score of the candidate's average rate relative to the campaign budget."""
    if candidate.average_rate <= 0:
        return UNKNOWN_RATE_BUDGET_SCORE
    if criteria.budget <= 0:
        return OVER_BUDGET_SCORE
    ratio = candidate.average_rate / criteria.budget
    for max_ratio, score in BUDGET_RATIO_BANDS:
        if ratio <= max_ratio:
            return score
    return OVER_BUDGET_SCORE


def location_match(candidate: CandidateProfile, criteria: MatchingCriteria) -> float:
    """1.0 when any requested location matches the candidate's location."""
    if not criteria.locations:
        return NEUTRAL_LOCATION_SCORE
    if not candidate.location.strip():
        return LOCATION_MISMATCH_SCORE
    if any(_fuzzy_equal(candidate.location, loc) for loc in criteria.locations if loc.strip()):
        return LOCATION_MATCH_SCORE
    return LOCATION_MISMATCH_SCORE


def engagement_band(engagement_rate: float) -> float:
    """Score an engagement rate before any follower-count multiplier."""
    for min_rate, score in ENGAGEMENT_RATE_BANDS:
        if engagement_rate >= min_rate:
            return score
    return LOW_ENGAGEMENT_SCORE


def engagement_quality(candidate: CandidateProfile) -> float:
    """Engagement band adjusted for micro (boost) and mega (penalty) audiences."""
    score = engagement_band(candidate.engagement_rate)
    if candidate.followers_count < MICRO_FOLLOWER_LIMIT:
        score *= MICRO_BOOST
    elif candidate.followers_count > MEGA_FOLLOWER_LIMIT:
        score *= MEGA_PENALTY
    return min(score, 1.0)


def past_performance(candidate: CandidateProfile) -> float:
    """Reach and engagement of recent content relative to audience size."""
    history = candidate.analytics
    if not history:
        return NEUTRAL_PERFORMANCE_SCORE

    avg_views = sum(max(snap.total_views, 0) for snap in history) / len(history)
    avg_engagement = sum(max(snap.total_engagement, 0) for snap in history) / len(history)

    expected_views = candidate.followers_count * EXPECTED_REACH_RATIO
    if expected_views > 0:
        views_score = min(avg_views / expected_views, 1.0)
    else:
        views_score = 1.0 if avg_views > 0 else 0.0

    if avg_views > 0:
        engagement_score = min(avg_engagement / (avg_views * EXPECTED_VIEW_ENGAGEMENT_RATIO), 1.0)
    else:
        engagement_score = 0.0

    return _clamp((views_score + engagement_score) / 2)


def regional_fit(
    candidate: CandidateProfile, profile: RegionalProfile = DEFAULT_REGIONAL_PROFILE
) -> float:
    """Regional/cultural affinity from location place names and bio script."""
    score = REGIONAL_BASE_SCORE
    if profile.matches_place(candidate.location):
        score += REGIONAL_PLACE_BONUS
    if profile.matches_script(candidate.bio.lower()):
        score += REGIONAL_SCRIPT_BONUS
    return min(score, 1.0)
