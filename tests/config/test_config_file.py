"""Tests for config-file schema parsing and fail-fast validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from creator_match.config_file import load_matching_config_file
from creator_match.exceptions import (
    ConfigFileNotFoundError,
    ConfigFileParseError,
    ConfigFileValidationError,
)
from tests.fakes import InMemoryFileSystem

PATH = Path("config/matching.toml")


def _fs_with(content: str) -> InMemoryFileSystem:
    fs = InMemoryFileSystem()
    fs.write_text(content.strip(), PATH)
    return fs


def test_parses_valid_toml() -> None:
    fs = _fs_with(
        """
schema_version = 1

[matching]
candidate_source = " File "
candidates_path = "data/creators.json"
results_path = "data/results/matches.csv"
min_followers = 5000
min_score = 0.4
max_results = 10
max_workers = 2
run_timeout_seconds = 30
regional_profile_name = "vietnam"
"""
    )

    config = load_matching_config_file(path=PATH, fs=fs)

    assert config.candidate_source == "file"
    assert config.candidates_path == "data/creators.json"
    assert config.min_followers == 5000
    assert config.min_score == 0.4
    assert config.max_results == 10
    assert config.run_timeout_seconds == 30.0
    assert config.profile_service_url is None


def test_missing_file() -> None:
    with pytest.raises(ConfigFileNotFoundError):
        load_matching_config_file(path=PATH, fs=InMemoryFileSystem())


def test_invalid_toml() -> None:
    with pytest.raises(ConfigFileParseError):
        load_matching_config_file(path=PATH, fs=_fs_with("schema_version = "))


def test_unknown_key_is_rejected() -> None:
    fs = _fs_with(
        """
schema_version = 1

[matching]
min_scor = 0.4
"""
    )

    with pytest.raises(ConfigFileValidationError, match="matching.min_scor"):
        load_matching_config_file(path=PATH, fs=fs)


@pytest.mark.parametrize(
    ("line", "field"),
    [
        ('candidate_source = "ftp"', "candidate_source"),
        ("min_score = 1.5", "min_score"),
        ("max_results = 0", "max_results"),
        ("min_followers = -1", "min_followers"),
        ("run_timeout_seconds = 0", "run_timeout_seconds"),
        ('results_path = "  "', "results_path"),
    ],
)
def test_invalid_values_name_the_field(line: str, field: str) -> None:
    fs = _fs_with(f"schema_version = 1\n\n[matching]\n{line}\n")

    with pytest.raises(ConfigFileValidationError, match=f"matching.{field}"):
        load_matching_config_file(path=PATH, fs=fs)


def test_unsupported_schema_version() -> None:
    fs = _fs_with("schema_version = 2\n\n[matching]\n")

    with pytest.raises(ConfigFileValidationError, match="schema_version"):
        load_matching_config_file(path=PATH, fs=fs)
