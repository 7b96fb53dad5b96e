"""Tests for weighted scoring and reason generation."""

from datetime import datetime

import pytest

from creator_match.domain.models import CandidateProfile, FactorScores, MatchingCriteria
from creator_match.domain.scoring import (
    FACTOR_REASONS,
    FACTOR_WEIGHTS,
    VERIFIED_REASON,
    generate_reasons,
    score_candidate,
    weighted_overall,
)
from tests.support.results import flat_factors


class TestWeights:
    """Fixed factor weights."""

    def test_weights_sum_to_one(self) -> None:
        assert sum(FACTOR_WEIGHTS.values()) == pytest.approx(1.0)

    def test_weights_cover_every_factor(self) -> None:
        assert set(FACTOR_WEIGHTS) == set(flat_factors().as_dict())

    def test_weights_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            FACTOR_WEIGHTS["category_match"] = 1.0  # type: ignore[index]


class TestWeightedOverall:
    """Linear combination of factor scores."""

    def test_uniform_scores_keep_their_value(self) -> None:
        assert weighted_overall(flat_factors(0.5)) == pytest.approx(0.5)

    def test_single_factor_contributes_its_weight(self) -> None:
        scores = FactorScores(
            category_match=1.0,
            audience_match=0.0,
            budget_fit=0.0,
            location_match=0.0,
            engagement_quality=0.0,
            past_performance=0.0,
            regional_fit=0.0,
        )

        assert weighted_overall(scores) == pytest.approx(0.25)


class TestGenerateReasons:
    """Reasons for factors strictly above 0.7, plus verification."""

    def test_threshold_is_exclusive(self) -> None:
        candidate = CandidateProfile(candidate_id="k1")

        assert generate_reasons(flat_factors(0.7), candidate) == ()

    def test_strong_factors_in_canonical_order(self) -> None:
        scores = FactorScores(
            category_match=0.9,
            audience_match=0.2,
            budget_fit=1.0,
            location_match=0.3,
            engagement_quality=0.5,
            past_performance=0.71,
            regional_fit=0.5,
        )

        reasons = generate_reasons(scores, CandidateProfile(candidate_id="k1"))

        assert reasons == (
            FACTOR_REASONS["category_match"],
            FACTOR_REASONS["budget_fit"],
            FACTOR_REASONS["past_performance"],
        )

    def test_verified_candidate_gets_reason(self) -> None:
        candidate = CandidateProfile(candidate_id="k1", is_verified=True)

        assert generate_reasons(flat_factors(0.1), candidate) == (VERIFIED_REASON,)


class TestScoreCandidate:
    """End-to-end scoring of one candidate."""

    def test_strong_candidate_scores_high(
        self,
        strong_candidate: CandidateProfile,
        beauty_campaign: MatchingCriteria,
        fixed_now: datetime,
    ) -> None:
        result = score_candidate(strong_candidate, beauty_campaign, now=fixed_now)

        assert result.overall > 0.6
        assert result.overall == pytest.approx(1.0)
        assert result.campaign_id == "campaign_123"
        assert result.candidate_id == "creator_strong"
        assert result.created_at == fixed_now
        assert result.algorithm_version == "CREATOR_MATCH_V1"
        assert "Excellent content category match" in result.reasons
        assert result.reasons[-1] == VERIFIED_REASON

    def test_sparse_candidate_scores_within_bounds(
        self, beauty_campaign: MatchingCriteria, fixed_now: datetime
    ) -> None:
        result = score_candidate(
            CandidateProfile(candidate_id="sparse"),
            beauty_campaign,
            algorithm_version="TEST_V2",
            now=fixed_now,
        )

        assert 0.0 <= result.overall <= 1.0
        assert result.factors.category_match == 0.0
        assert result.factors.budget_fit == 0.7
        assert result.algorithm_version == "TEST_V2"
        assert result.reasons == ()

    def test_scoring_is_deterministic(
        self,
        strong_candidate: CandidateProfile,
        beauty_campaign: MatchingCriteria,
        fixed_now: datetime,
    ) -> None:
        first = score_candidate(strong_candidate, beauty_campaign, now=fixed_now)
        second = score_candidate(strong_candidate, beauty_campaign, now=fixed_now)

        assert first == second


class TestUnknownRateScenario:
    """Beauty campaign against a candidate with no published rate."""

    def test_factor_values_and_overall(self, fixed_now: datetime) -> None:
        criteria = MatchingCriteria(
            campaign_id="campaign_hcmc",
            budget=10_000_000,
            categories=("beauty",),
            locations=("Ho Chi Minh City",),
        )
        candidate = CandidateProfile(
            candidate_id="creator_unpriced",
            followers_count=25_000,
            engagement_rate=0.08,
            content_categories=("beauty", "skincare"),
            location="Ho Chi Minh City",
            average_rate=0.0,
        )

        result = score_candidate(candidate, criteria, now=fixed_now)

        assert result.factors.category_match == 1.0
        assert result.factors.location_match == 1.0
        assert result.factors.budget_fit == 0.7
        assert result.factors.engagement_quality == 1.0
        assert result.overall > 0.6
