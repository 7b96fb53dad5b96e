"""Tests for domain model invariants."""

import dataclasses

import pytest

from creator_match.domain.models import (
    MAX_ANALYTICS_WINDOW,
    AnalyticsSnapshot,
    CandidateProfile,
    MatchingCriteria,
)
from creator_match.domain.regional_profiles import DEFAULT_REGIONAL_PROFILE, RegionalProfile


class TestCandidateProfile:
    """Snapshot normalisation."""

    def test_negative_numbers_are_clamped(self) -> None:
        candidate = CandidateProfile(
            candidate_id="k1", followers_count=-10, engagement_rate=-0.5, average_rate=-1.0
        )

        assert candidate.followers_count == 0
        assert candidate.engagement_rate == 0.0
        assert candidate.average_rate == 0.0

    def test_analytics_window_is_bounded(self) -> None:
        history = tuple(AnalyticsSnapshot(total_views=i) for i in range(45))

        candidate = CandidateProfile(candidate_id="k1", analytics=history)

        assert len(candidate.analytics) == MAX_ANALYTICS_WINDOW
        assert candidate.analytics[0].total_views == 0

    def test_is_immutable(self) -> None:
        candidate = CandidateProfile(candidate_id="k1")

        with pytest.raises(dataclasses.FrozenInstanceError):
            candidate.followers_count = 5  # type: ignore[misc]


class TestMatchingCriteria:
    """Criteria defaults."""

    def test_requirements_are_read_only(self) -> None:
        criteria = MatchingCriteria(campaign_id="c1", budget=100.0)

        assert criteria.min_followers == 1000
        with pytest.raises(TypeError):
            criteria.requirements["minFollowers"] = 5  # type: ignore[index]


class TestRegionalProfile:
    """Place and script matching."""

    def test_default_profile_matches_vietnamese_places(self) -> None:
        assert DEFAULT_REGIONAL_PROFILE.matches_place("Da Nang, Vietnam")
        assert not DEFAULT_REGIONAL_PROFILE.matches_place("")

    def test_place_names_are_normalised(self) -> None:
        profile = RegionalProfile(name="x", place_names=(" Seoul ", ""), script_pattern="")

        assert profile.place_names == ("seoul",)
        assert profile.matches_place("SEOUL")
        assert not profile.matches_script("anything")
