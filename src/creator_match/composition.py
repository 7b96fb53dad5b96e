"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from pathlib import Path

from .application.recommendations import RecommendationEngine
from .application.regional_profiles import load_regional_profile
from .cli import CliDependencies, create_app
from .config import MatchingConfig
from .exceptions import CandidateSourceError, ProfileServiceNotConfiguredError
from .infrastructure import (
    CsvResultStore,
    FileCandidateRepository,
    HttpCandidateRepository,
    LocalFileSystem,
    RequestsSession,
    RetryPolicy,
)
from .protocols import CandidateRepository, FileSystem, ProgressReporter


def build_candidate_repository(
    *, config: MatchingConfig, fs: FileSystem
) -> tuple[CandidateRepository, RequestsSession | None]:
    """Return the configured candidate repository and the HTTP session it owns, if any."""
    if config.candidate_source == "file":
        return FileCandidateRepository(path=Path(config.candidates_path), fs=fs), None
    if config.candidate_source == "api":
        if not config.profile_service_url:
            raise ProfileServiceNotConfiguredError()
        session = RequestsSession(retry_policy=RetryPolicy(max_retries=config.http_max_retries))
        repository = HttpCandidateRepository(
            url=config.profile_service_url,
            session=session,
            timeout_seconds=config.http_timeout_seconds,
        )
        return repository, session
    raise CandidateSourceError(config.candidate_source)


def build_cli_dependencies(
    *,
    config: MatchingConfig,
    progress: ProgressReporter | None,
) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Matching configuration (adapter selection and scoring policy).
        progress: Optional reporter advanced once per scored candidate.
    """
    fs = LocalFileSystem()
    candidates, session = build_candidate_repository(config=config, fs=fs)
    engine = RecommendationEngine(
        candidates=candidates,
        results=CsvResultStore(path=Path(config.results_path), fs=fs),
        config=config,
        regional_profile=load_regional_profile(
            path=config.regional_profile_path,
            profile_name=config.regional_profile_name,
            fs=fs,
        ),
        progress=progress,
    )
    if session is None:
        return CliDependencies(fs=fs, engine=engine)
    return CliDependencies(fs=fs, engine=engine, close=session.close)


app = create_app(build_cli_dependencies, config_fs=LocalFileSystem())
