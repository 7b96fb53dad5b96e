"""Recommendation service: fetch, score, rank, persist and explain.

Usage example:
    >>> from creator_match.application.recommendations import RecommendationEngine
    >>> from creator_match.config import MatchingConfig
    >>> engine = RecommendationEngine(
    ...     candidates=...,  # Injected CandidateRepository from the composition root
    ...     results=...,  # Injected ResultStore
    ...     config=MatchingConfig.from_env(),
    ... )
    >>> ranked = engine.generate_recommendations(criteria)
    >>> explanation = engine.explain_recommendation("campaign_123", ranked[0].candidate_id)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import UTC, datetime

from ..config import MatchingConfig
from ..domain.explanation import build_explanation
from ..domain.models import CandidateProfile, Explanation, MatchingCriteria, MatchResult
from ..domain.ranking import rank_results
from ..domain.regional_profiles import DEFAULT_REGIONAL_PROFILE, RegionalProfile
from ..domain.scoring import score_candidate
from ..exceptions import (
    DependencyUnavailableError,
    RecommendationNotFoundError,
    ScoringRunCancelledError,
)
from ..observability import get_logger
from ..protocols import CandidateRepository, ProgressReporter, ResultStore
from .cancellation import CancellationToken

logger = get_logger("creator_match.recommendations")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RecommendationEngine:
    """Stateless matching engine over injected repository and result store.

    The engine owns no connections; callers construct the adapters once, pass them in
    and tear them down. Concurrent runs for different campaigns share nothing but the
    adapters.
    """

    def __init__(
        self,
        *,
        candidates: CandidateRepository,
        results: ResultStore,
        config: MatchingConfig,
        regional_profile: RegionalProfile = DEFAULT_REGIONAL_PROFILE,
        progress: ProgressReporter | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._candidates = candidates
        self._results = results
        self._config = config
        self._regional_profile = regional_profile
        self._progress = progress
        self._clock = clock

    @property
    def config(self) -> MatchingConfig:
        return self._config

    def generate_recommendations(
        self,
        criteria: MatchingCriteria,
        *,
        cancellation: CancellationToken | None = None,
    ) -> list[MatchResult]:
        """Score every eligible candidate, persist the ranked list and return it.

        Raises:
            DependencyUnavailableError: Repository fetch or result write failed.
            ScoringRunCancelledError: The run was cancelled before persistence.
        """
        token = cancellation
        if token is None and self._config.run_timeout_seconds is not None:
            token = CancellationToken(timeout_seconds=self._config.run_timeout_seconds)

        campaign_id = criteria.campaign_id
        logger.info("Generating recommendations for campaign %s", campaign_id)
        self._raise_if_cancelled(token, campaign_id)

        try:
            pool = self._candidates.fetch_eligible_candidates(criteria.min_followers)
        except DependencyUnavailableError:
            raise
        except Exception as exc:
            logger.error("Candidate fetch failed for campaign %s: %s", campaign_id, exc)
            raise DependencyUnavailableError.for_candidate_fetch(exc) from exc

        if not pool:
            logger.info("No eligible candidates for campaign %s", campaign_id)
            return []

        scored = self._score_pool(pool, criteria, token)
        ranked = rank_results(
            scored,
            min_score=self._config.min_score,
            limit=self._config.max_results,
        )

        self._raise_if_cancelled(token, campaign_id)
        if ranked:
            try:
                self._results.persist_results(campaign_id, ranked)
            except Exception as exc:
                logger.error("Persisting results failed for campaign %s: %s", campaign_id, exc)
                raise DependencyUnavailableError.for_result_write(exc) from exc

        logger.info(
            "Generated %s recommendations for campaign %s (%s scored)",
            len(ranked),
            campaign_id,
            len(scored),
        )
        return ranked

    def explain_recommendation(self, campaign_id: str, candidate_id: str) -> Explanation:
        """Build a narrative explanation for the newest persisted result of a pair.

        Raises:
            RecommendationNotFoundError: No result was persisted for the pair.
            DependencyUnavailableError: The result store could not be read.
        """
        try:
            result = self._results.find_result(campaign_id, candidate_id)
        except Exception as exc:
            raise DependencyUnavailableError.for_result_read(exc) from exc
        if result is None:
            raise RecommendationNotFoundError(campaign_id, candidate_id)
        return build_explanation(result)

    def _score_pool(
        self,
        pool: Sequence[CandidateProfile],
        criteria: MatchingCriteria,
        token: CancellationToken | None,
    ) -> list[MatchResult]:
        now = self._clock()

        def score(candidate: CandidateProfile) -> MatchResult:
            return score_candidate(
                candidate,
                criteria,
                profile=self._regional_profile,
                algorithm_version=self._config.algorithm_version,
                now=now,
            )

        if self._progress is not None:
            self._progress.start("Scoring candidates", len(pool))
        try:
            if self._config.max_workers <= 1:
                scored: list[MatchResult] = []
                for candidate in pool:
                    scored.append(score(candidate))
                    self._advance(token, criteria.campaign_id)
                return scored

            with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
                futures: list[Future[MatchResult]] = [
                    executor.submit(score, candidate) for candidate in pool
                ]
                try:
                    scored = []
                    for future in futures:
                        scored.append(future.result())
                        self._advance(token, criteria.campaign_id)
                except ScoringRunCancelledError:
                    for future in futures:
                        future.cancel()
                    raise
                return scored
        finally:
            if self._progress is not None:
                self._progress.finish()

    def _advance(self, token: CancellationToken | None, campaign_id: str) -> None:
        if self._progress is not None:
            self._progress.advance(1)
        self._raise_if_cancelled(token, campaign_id)

    def _raise_if_cancelled(self, token: CancellationToken | None, campaign_id: str) -> None:
        if token is None:
            return
        reason = token.reason()
        if reason is not None:
            logger.warning("Scoring run for campaign %s cancelled: %s", campaign_id, reason)
            raise ScoringRunCancelledError(campaign_id, reason)
