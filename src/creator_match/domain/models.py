"""Domain data model for candidate/campaign matching.

Usage example:
    from creator_match.domain.models import AudienceDescriptor, CandidateProfile, MatchingCriteria

    criteria = MatchingCriteria(
        campaign_id="campaign_123",
        budget=10_000_000,
        target_audience=AudienceDescriptor(gender="female"),
        categories=("beauty",),
        locations=("Ho Chi Minh City",),
    )
    candidate = CandidateProfile(candidate_id="creator_1", followers_count=25_000)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

MAX_ANALYTICS_WINDOW = 30
DEFAULT_MIN_FOLLOWERS = 1000


def _empty_requirements() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(frozen=True)
class AudienceDescriptor:
    """Audience demographics; ``None`` means the side supplied no data."""

    age_groups: tuple[str, ...] | None = None
    gender: str | None = None
    interests: tuple[str, ...] | None = None


@dataclass(frozen=True)
class MatchingCriteria:
    """Campaign-side matching request, immutable for the duration of a scoring run."""

    campaign_id: str
    budget: float
    target_audience: AudienceDescriptor = field(default_factory=AudienceDescriptor)
    categories: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    min_followers: int = DEFAULT_MIN_FOLLOWERS
    requirements: Mapping[str, object] = field(default_factory=_empty_requirements)


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """One recent performance snapshot for a candidate."""

    total_views: int = 0
    total_engagement: int = 0
    recorded_at: datetime | None = None


@dataclass(frozen=True)
class CandidateProfile:
    """Read-only snapshot of a candidate as returned by the repository.

    ``average_rate`` of 0 means the price is unknown, not free.
    """

    candidate_id: str
    followers_count: int = 0
    engagement_rate: float = 0.0
    content_categories: tuple[str, ...] = ()
    audience: AudienceDescriptor = field(default_factory=AudienceDescriptor)
    location: str = ""
    average_rate: float = 0.0
    bio: str = ""
    is_verified: bool = False
    analytics: tuple[AnalyticsSnapshot, ...] = ()

    def __post_init__(self) -> None:
        if self.followers_count < 0:
            object.__setattr__(self, "followers_count", 0)
        if self.engagement_rate < 0:
            object.__setattr__(self, "engagement_rate", 0.0)
        if self.average_rate < 0:
            object.__setattr__(self, "average_rate", 0.0)
        if len(self.analytics) > MAX_ANALYTICS_WINDOW:
            object.__setattr__(self, "analytics", self.analytics[:MAX_ANALYTICS_WINDOW])


@dataclass(frozen=True)
class FactorScores:
    """The seven normalised sub-scores for one candidate/criteria pair."""

    category_match: float
    audience_match: float
    budget_fit: float
    location_match: float
    engagement_quality: float
    past_performance: float
    regional_fit: float

    def as_dict(self) -> dict[str, float]:
        """Return factor scores keyed by name, in canonical factor order."""
        return {
            "category_match": self.category_match,
            "audience_match": self.audience_match,
            "budget_fit": self.budget_fit,
            "location_match": self.location_match,
            "engagement_quality": self.engagement_quality,
            "past_performance": self.past_performance,
            "regional_fit": self.regional_fit,
        }


@dataclass(frozen=True)
class MatchResult:
    """Scored, explained outcome for one candidate against one campaign."""

    campaign_id: str
    candidate_id: str
    overall: float
    reasons: tuple[str, ...]
    factors: FactorScores
    algorithm_version: str
    created_at: datetime


@dataclass(frozen=True)
class Explanation:
    """Narrative breakdown of a persisted match result."""

    campaign_id: str
    candidate_id: str
    overall: float
    reasons: tuple[str, ...]
    factors: FactorScores
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    text: str
