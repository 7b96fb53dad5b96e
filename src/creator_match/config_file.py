"""Typed parsing and validation for matching engine config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class MatchingConfigFile:
    """Validated matching config values loaded from a TOML file."""

    candidate_source: str | None = None
    candidates_path: str | None = None
    profile_service_url: str | None = None
    results_path: str | None = None
    min_followers: int | None = None
    min_score: float | None = None
    max_results: int | None = None
    max_workers: int | None = None
    run_timeout_seconds: float | None = None
    algorithm_version: str | None = None
    regional_profile_path: str | None = None
    regional_profile_name: str | None = None


class _MatchingSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    candidate_source: str | None = None
    candidates_path: str | None = None
    profile_service_url: str | None = None
    results_path: str | None = None
    min_followers: int | None = None
    min_score: float | None = None
    max_results: int | None = None
    max_workers: int | None = None
    run_timeout_seconds: float | None = None
    algorithm_version: str | None = None
    regional_profile_path: str | None = None
    regional_profile_name: str | None = None

    @field_validator("candidate_source")
    @classmethod
    def _validate_source_type(cls, value: str | None) -> str | None:
        if value is None:
            return None
        source = value.strip().lower()
        if source not in {"api", "file"}:
            raise ValueError
        return source

    @field_validator(
        "candidates_path",
        "profile_service_url",
        "results_path",
        "algorithm_version",
        "regional_profile_path",
        "regional_profile_name",
    )
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("max_results", "max_workers")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("min_followers")
    @classmethod
    def _validate_non_negative_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0:
            raise ValueError
        return value

    @field_validator("min_score")
    @classmethod
    def _validate_score_range(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value < 0.0 or value > 1.0:
            raise ValueError
        return value

    @field_validator("run_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0.0:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    matching: _MatchingSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_matching_config_file(*, path: Path, fs: FileSystem) -> MatchingConfigFile:
    """Load and validate a matching TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.matching
    return MatchingConfigFile(
        candidate_source=section.candidate_source,
        candidates_path=section.candidates_path,
        profile_service_url=section.profile_service_url,
        results_path=section.results_path,
        min_followers=section.min_followers,
        min_score=section.min_score,
        max_results=section.max_results,
        max_workers=section.max_workers,
        run_timeout_seconds=section.run_timeout_seconds,
        algorithm_version=section.algorithm_version,
        regional_profile_path=section.regional_profile_path,
        regional_profile_name=section.regional_profile_name,
    )
