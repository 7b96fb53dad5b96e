"""Centralised, injectable configuration for the creator match engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import MatchingConfigFile
from .domain.models import DEFAULT_MIN_FOLLOWERS
from .domain.ranking import DEFAULT_MIN_SCORE, DEFAULT_RESULT_LIMIT
from .domain.scoring import DEFAULT_ALGORITHM_VERSION
from .observability import DEFAULT_LOG_LEVEL, UnknownLogLevelError, parse_log_level


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class NonNegativeIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be zero or a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a non-negative integer.")


class ScoreEnvVarError(ValueError):
    """Raised when an environment variable must be a score between 0 and 1."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a number between 0 and 1.")


class PositiveNumberEnvVarError(ValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


class LogLevelEnvVarError(ValueError):
    """Raised when an environment variable must name a logging level."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a logging level such as INFO or WARNING.")


@dataclass(frozen=True)
class MatchingConfig:
    """Immutable configuration object for the matching engine and its adapters.

    Load from environment with `MatchingConfig.from_env()` or construct directly for testing.
    """

    # Candidate source
    candidate_source: str = "file"
    candidates_path: str = "data/candidates.json"
    profile_service_url: str = ""
    http_timeout_seconds: float = 10.0
    http_max_retries: int = 3

    # Result store
    results_path: str = "data/results/match_results.csv"

    # Scoring policy
    min_followers: int = DEFAULT_MIN_FOLLOWERS
    min_score: float = DEFAULT_MIN_SCORE
    max_results: int = DEFAULT_RESULT_LIMIT
    max_workers: int = 4
    run_timeout_seconds: float | None = None
    algorithm_version: str = DEFAULT_ALGORITHM_VERSION

    # Regional fit
    regional_profile_path: str = ""
    regional_profile_name: str = ""

    # Observability
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            MatchingConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            candidate_source=os.getenv("MATCH_CANDIDATE_SOURCE", "file").strip().lower()
            or "file",
            candidates_path=os.getenv("MATCH_CANDIDATES_PATH", "data/candidates.json").strip()
            or "data/candidates.json",
            profile_service_url=os.getenv("MATCH_PROFILE_SERVICE_URL", "").strip(),
            http_timeout_seconds=_parse_positive_float(
                os.getenv("MATCH_HTTP_TIMEOUT_SECONDS", "10"),
                env_name="MATCH_HTTP_TIMEOUT_SECONDS",
            ),
            http_max_retries=_parse_non_negative_int(
                os.getenv("MATCH_HTTP_MAX_RETRIES", "3"), env_name="MATCH_HTTP_MAX_RETRIES"
            ),
            results_path=os.getenv(
                "MATCH_RESULTS_PATH", "data/results/match_results.csv"
            ).strip()
            or "data/results/match_results.csv",
            min_followers=_parse_non_negative_int(
                os.getenv("MATCH_MIN_FOLLOWERS", str(DEFAULT_MIN_FOLLOWERS)),
                env_name="MATCH_MIN_FOLLOWERS",
            ),
            min_score=_parse_score(
                os.getenv("MATCH_SCORE_THRESHOLD", str(DEFAULT_MIN_SCORE)),
                env_name="MATCH_SCORE_THRESHOLD",
            ),
            max_results=_parse_positive_int(
                os.getenv("MATCH_MAX_RESULTS", str(DEFAULT_RESULT_LIMIT)),
                env_name="MATCH_MAX_RESULTS",
            ),
            max_workers=_parse_positive_int(
                os.getenv("MATCH_MAX_WORKERS", "4"), env_name="MATCH_MAX_WORKERS"
            ),
            run_timeout_seconds=_parse_optional_positive_float(
                os.getenv("MATCH_RUN_TIMEOUT_SECONDS", ""),
                env_name="MATCH_RUN_TIMEOUT_SECONDS",
            ),
            algorithm_version=os.getenv(
                "MATCH_ALGORITHM_VERSION", DEFAULT_ALGORITHM_VERSION
            ).strip()
            or DEFAULT_ALGORITHM_VERSION,
            regional_profile_path=os.getenv("MATCH_REGIONAL_PROFILE_PATH", "").strip(),
            regional_profile_name=os.getenv("MATCH_REGIONAL_PROFILE_NAME", "").strip(),
            log_level=_parse_log_level(
                os.getenv("MATCH_LOG_LEVEL", DEFAULT_LOG_LEVEL), env_name="MATCH_LOG_LEVEL"
            ),
        )

    def with_overrides(
        self,
        *,
        min_score: float | None = None,
        max_results: int | None = None,
        min_followers: int | None = None,
        max_workers: int | None = None,
        run_timeout_seconds: float | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            min_score=self.min_score if min_score is None else min_score,
            max_results=self.max_results if max_results is None else max_results,
            min_followers=self.min_followers if min_followers is None else min_followers,
            max_workers=self.max_workers if max_workers is None else max_workers,
            run_timeout_seconds=self.run_timeout_seconds
            if run_timeout_seconds is None
            else run_timeout_seconds,
        )

    def with_file_overrides(self, file_config: MatchingConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            candidate_source=self.candidate_source
            if file_config.candidate_source is None
            else file_config.candidate_source,
            candidates_path=self.candidates_path
            if file_config.candidates_path is None
            else file_config.candidates_path,
            profile_service_url=self.profile_service_url
            if file_config.profile_service_url is None
            else file_config.profile_service_url,
            results_path=self.results_path
            if file_config.results_path is None
            else file_config.results_path,
            min_followers=self.min_followers
            if file_config.min_followers is None
            else file_config.min_followers,
            min_score=self.min_score if file_config.min_score is None else file_config.min_score,
            max_results=self.max_results
            if file_config.max_results is None
            else file_config.max_results,
            max_workers=self.max_workers
            if file_config.max_workers is None
            else file_config.max_workers,
            run_timeout_seconds=self.run_timeout_seconds
            if file_config.run_timeout_seconds is None
            else file_config.run_timeout_seconds,
            algorithm_version=self.algorithm_version
            if file_config.algorithm_version is None
            else file_config.algorithm_version,
            regional_profile_path=self.regional_profile_path
            if file_config.regional_profile_path is None
            else file_config.regional_profile_path,
            regional_profile_name=self.regional_profile_name
            if file_config.regional_profile_name is None
            else file_config.regional_profile_name,
        )


def _parse_positive_int(value: str, *, env_name: str) -> int:
    """Parse a positive integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_non_negative_int(value: str, *, env_name: str) -> int:
    """Parse a non-negative integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise NonNegativeIntegerEnvVarError(env_name) from exc
    if parsed < 0:
        raise NonNegativeIntegerEnvVarError(env_name)
    return parsed


def _parse_score(value: str, *, env_name: str) -> float:
    """Parse a score in [0, 1] from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise ScoreEnvVarError(env_name) from exc
    if parsed < 0.0 or parsed > 1.0:
        raise ScoreEnvVarError(env_name)
    return parsed


def _parse_positive_float(value: str, *, env_name: str) -> float:
    """Parse a positive number from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed <= 0.0:
        raise PositiveNumberEnvVarError(env_name)
    return parsed


def _parse_optional_positive_float(value: str, *, env_name: str) -> float | None:
    """Parse an optional positive number from an environment variable."""
    if not value.strip():
        return None
    return _parse_positive_float(value, env_name=env_name)


def _parse_log_level(value: str, *, env_name: str) -> str:
    """Parse a logging level name from an environment variable."""
    if not value.strip():
        return DEFAULT_LOG_LEVEL
    try:
        parse_log_level(value)
    except UnknownLogLevelError as exc:
        raise LogLevelEnvVarError(env_name) from exc
    return value.strip().upper()
