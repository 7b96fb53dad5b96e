"""Loading and strict validation for regional profile catalogues."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.regional_profiles import (
    DEFAULT_REGIONAL_PROFILE,
    RegionalProfile,
    RegionalProfileCatalog,
)
from ..exceptions import (
    RegionalProfileFileNotFoundError,
    RegionalProfileSelectionError,
    RegionalProfileValidationError,
)
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _RegionalProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    place_names: tuple[str, ...]
    script_pattern: str = ""

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("place_names")
    @classmethod
    def _validate_place_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not place.strip() for place in value):
            raise ValueError
        return tuple(place.strip().lower() for place in value)

    @field_validator("script_pattern")
    @classmethod
    def _validate_script_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression: {exc}") from exc
        return value


class _RegionalProfileCatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    default_profile: str
    profiles: tuple[_RegionalProfileModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_profiles(self) -> _RegionalProfileCatalogModel:
        if not self.profiles:
            raise ValueError
        names = [profile.name for profile in self.profiles]
        if len(set(names)) != len(names):
            raise ValueError
        if self.default_profile.strip() not in set(names):
            raise ValueError
        return self


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_regional_profile_catalog(*, path: Path, fs: FileSystem) -> RegionalProfileCatalog:
    """Load and validate a regional profile catalogue from JSON."""
    if not fs.exists(path):
        raise RegionalProfileFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _RegionalProfileCatalogModel.model_validate_json(payload)
    except ValidationError as exc:
        raise RegionalProfileValidationError(str(path), _format_validation_error(exc)) from exc

    return RegionalProfileCatalog(
        schema_version=model.schema_version,
        default_profile=model.default_profile.strip(),
        profiles=tuple(
            RegionalProfile(
                name=profile.name,
                place_names=profile.place_names,
                script_pattern=profile.script_pattern,
            )
            for profile in model.profiles
        ),
    )


def resolve_regional_profile(
    catalog: RegionalProfileCatalog,
    profile_name: str | None = None,
) -> RegionalProfile:
    """Resolve one profile by name, defaulting to the catalogue default profile."""
    target = (profile_name or catalog.default_profile).strip() or catalog.default_profile
    for profile in catalog.profiles:
        if profile.name == target:
            return profile
    raise RegionalProfileSelectionError(target, (profile.name for profile in catalog.profiles))


def load_regional_profile(
    *, path: str, profile_name: str, fs: FileSystem
) -> RegionalProfile:
    """Return the configured regional profile, or the built-in default when no path is set."""
    if not path:
        return DEFAULT_REGIONAL_PROFILE
    catalog = load_regional_profile_catalog(path=Path(path), fs=fs)
    return resolve_regional_profile(catalog, profile_name or None)
