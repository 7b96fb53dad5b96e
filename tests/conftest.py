"""Pytest fixtures shared across the test suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import os
import socket
from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from creator_match.domain.models import (
    AnalyticsSnapshot,
    AudienceDescriptor,
    CandidateProfile,
    MatchingCriteria,
)
from creator_match.observability import DEFAULT_LOG_LEVEL, set_log_level
from tests.fakes import InMemoryFileSystem
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    _ = (self, kwargs)
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Tests that need HTTP should use FakeHttpSession or a fake requests session.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture(autouse=True)
def isolate_match_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep MATCH_* variables (developer shells, loaded .env files) out of tests."""
    names = (
        "MATCH_CANDIDATE_SOURCE",
        "MATCH_CANDIDATES_PATH",
        "MATCH_PROFILE_SERVICE_URL",
        "MATCH_HTTP_TIMEOUT_SECONDS",
        "MATCH_HTTP_MAX_RETRIES",
        "MATCH_RESULTS_PATH",
        "MATCH_MIN_FOLLOWERS",
        "MATCH_SCORE_THRESHOLD",
        "MATCH_MAX_RESULTS",
        "MATCH_MAX_WORKERS",
        "MATCH_RUN_TIMEOUT_SECONDS",
        "MATCH_ALGORITHM_VERSION",
        "MATCH_REGIONAL_PROFILE_PATH",
        "MATCH_REGIONAL_PROFILE_NAME",
        "MATCH_LOG_LEVEL",
    )
    for name in names:
        monkeypatch.delenv(name, raising=False)
    yield
    for name in names:
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def restore_log_level() -> Iterator[None]:
    """Reset engine logger verbosity changed by a test."""
    yield
    set_log_level(DEFAULT_LOG_LEVEL)


@pytest.fixture
def in_memory_fs() -> InMemoryFileSystem:
    """Provide an in-memory filesystem for tests."""
    return InMemoryFileSystem()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed UTC timestamp for deterministic results."""
    return datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def beauty_campaign() -> MatchingCriteria:
    """Campaign targeting young female beauty audiences in Ho Chi Minh City."""
    return MatchingCriteria(
        campaign_id="campaign_123",
        budget=10_000_000,
        target_audience=AudienceDescriptor(
            age_groups=("18-25",),
            gender="female",
            interests=("beauty", "fashion"),
        ),
        categories=("beauty", "skincare"),
        locations=("Ho Chi Minh City",),
        min_followers=10_000,
    )


@pytest.fixture
def strong_candidate() -> CandidateProfile:
    """A candidate that aligns with the beauty campaign on most factors."""
    return CandidateProfile(
        candidate_id="creator_strong",
        followers_count=25_000,
        engagement_rate=0.08,
        content_categories=("beauty", "skincare"),
        audience=AudienceDescriptor(
            age_groups=("18-25",),
            gender="female",
            interests=("beauty", "fashion"),
        ),
        location="Ho Chi Minh City, Vietnam",
        average_rate=2_000_000,
        bio="Chia sẻ bí quyết làm đẹp",
        is_verified=True,
        analytics=(
            AnalyticsSnapshot(total_views=5_000, total_engagement=400),
            AnalyticsSnapshot(total_views=3_000, total_engagement=200),
        ),
    )
