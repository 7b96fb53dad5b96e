"""Tests for MatchingConfig behaviour."""

from pathlib import Path

import pytest

from creator_match.config import (
    LogLevelEnvVarError,
    MatchingConfig,
    NonNegativeIntegerEnvVarError,
    PositiveIntegerEnvVarError,
    PositiveNumberEnvVarError,
    ScoreEnvVarError,
)
from creator_match.config_file import MatchingConfigFile


def _missing_dotenv(tmp_path: Path) -> str:
    return str(tmp_path / "absent.env")


def test_defaults_match_engine_policy(tmp_path: Path) -> None:
    config = MatchingConfig.from_env(_missing_dotenv(tmp_path))

    assert config == MatchingConfig()
    assert config.min_followers == 1000
    assert config.min_score == 0.3
    assert config.max_results == 20
    assert config.run_timeout_seconds is None
    assert config.algorithm_version == "CREATOR_MATCH_V1"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MATCH_CANDIDATE_SOURCE", " API ")
    monkeypatch.setenv("MATCH_PROFILE_SERVICE_URL", "https://profiles.example.test/candidates")
    monkeypatch.setenv("MATCH_HTTP_MAX_RETRIES", "0")
    monkeypatch.setenv("MATCH_MIN_FOLLOWERS", "5000")
    monkeypatch.setenv("MATCH_SCORE_THRESHOLD", "0.45")
    monkeypatch.setenv("MATCH_MAX_RESULTS", "5")
    monkeypatch.setenv("MATCH_MAX_WORKERS", "2")
    monkeypatch.setenv("MATCH_RUN_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("MATCH_REGIONAL_PROFILE_NAME", "thailand")

    config = MatchingConfig.from_env(_missing_dotenv(tmp_path))

    assert config.candidate_source == "api"
    assert config.profile_service_url == "https://profiles.example.test/candidates"
    assert config.http_max_retries == 0
    assert config.min_followers == 5000
    assert config.min_score == 0.45
    assert config.max_results == 5
    assert config.max_workers == 2
    assert config.run_timeout_seconds == 2.5
    assert config.regional_profile_name == "thailand"


def test_from_env_reads_dotenv_file(tmp_path: Path) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text("MATCH_RESULTS_PATH=out/results.csv\n", encoding="utf-8")

    config = MatchingConfig.from_env(str(dotenv))

    assert config.results_path == "out/results.csv"


@pytest.mark.parametrize(
    ("name", "value", "error"),
    [
        ("MATCH_MAX_RESULTS", "0", PositiveIntegerEnvVarError),
        ("MATCH_MAX_WORKERS", "many", PositiveIntegerEnvVarError),
        ("MATCH_MIN_FOLLOWERS", "-1", NonNegativeIntegerEnvVarError),
        ("MATCH_SCORE_THRESHOLD", "1.5", ScoreEnvVarError),
        ("MATCH_HTTP_TIMEOUT_SECONDS", "0", PositiveNumberEnvVarError),
        ("MATCH_RUN_TIMEOUT_SECONDS", "-2", PositiveNumberEnvVarError),
    ],
)
def test_from_env_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    name: str,
    value: str,
    error: type[ValueError],
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(error, match=name):
        MatchingConfig.from_env(_missing_dotenv(tmp_path))


def test_with_overrides_only_replaces_given_fields() -> None:
    base = MatchingConfig(results_path="custom.csv", max_workers=8)

    updated = base.with_overrides(min_score=0.6, max_results=3)

    assert updated.min_score == 0.6
    assert updated.max_results == 3
    assert updated.max_workers == 8
    assert updated.results_path == "custom.csv"
    assert base.min_score == 0.3


def test_with_file_overrides_applies_non_null_values() -> None:
    base = MatchingConfig(candidates_path="env.json", min_score=0.4)

    updated = base.with_file_overrides(
        MatchingConfigFile(candidates_path="file.json", max_workers=1)
    )

    assert updated.candidates_path == "file.json"
    assert updated.max_workers == 1
    assert updated.min_score == 0.4


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MATCH_LOG_LEVEL", " warning ")

    config = MatchingConfig.from_env(_missing_dotenv(tmp_path))

    assert config.log_level == "WARNING"


def test_blank_log_level_uses_default(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MATCH_LOG_LEVEL", "  ")

    assert MatchingConfig.from_env(_missing_dotenv(tmp_path)).log_level == "INFO"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MATCH_LOG_LEVEL", "chatty")

    with pytest.raises(LogLevelEnvVarError, match="MATCH_LOG_LEVEL"):
        MatchingConfig.from_env(_missing_dotenv(tmp_path))
