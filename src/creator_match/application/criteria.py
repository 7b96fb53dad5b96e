"""Boundary validation for matching criteria payloads.

Usage example:
    from creator_match.application.criteria import parse_matching_criteria

    criteria = parse_matching_criteria(
        {
            "campaignId": "campaign_123",
            "budget": "10000000",
            "targetAudience": {"ageGroups": ["18-25"], "gender": "female"},
            "requirements": {"minFollowers": 10000},
            "categories": ["beauty", "skincare"],
            "locations": ["Ho Chi Minh City"],
        }
    )
    assert criteria.min_followers == 10000
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..domain.models import DEFAULT_MIN_FOLLOWERS, AudienceDescriptor, MatchingCriteria
from ..exceptions import CriteriaValidationError

REQUIRED_FIELDS: tuple[str, ...] = ("campaignId", "budget", "targetAudience", "requirements")


class _AudienceModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    ageGroups: tuple[str, ...] | None = None
    gender: str | None = None
    interests: tuple[str, ...] | None = None


class _CriteriaModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    campaignId: str
    budget: float
    targetAudience: _AudienceModel
    requirements: dict[str, object]
    categories: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()

    @field_validator("campaignId")
    @classmethod
    def _validate_campaign_id(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("campaignId must not be blank")
        return text

    @field_validator("budget")
    @classmethod
    def _validate_budget(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("budget must be positive")
        return value

    @field_validator("categories", "locations")
    @classmethod
    def _strip_items(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(text for text in (item.strip() for item in value) if text)


class _MinFollowersModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    minFollowers: int | None = None

    @field_validator("minFollowers")
    @classmethod
    def _validate_min_followers(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError("minFollowers must not be negative")
        return value


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _clean_tuple(values: tuple[str, ...] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    cleaned = tuple(text for text in (item.strip() for item in values) if text)
    return cleaned or None


def _first_error(exc: ValidationError) -> tuple[str, str]:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    return location, str(first.get("msg", "invalid value"))


def parse_matching_criteria(
    payload: Mapping[str, object],
    *,
    default_min_followers: int = DEFAULT_MIN_FOLLOWERS,
) -> MatchingCriteria:
    """Validate a request payload and build immutable matching criteria.

    Raises:
        CriteriaValidationError: When a mandatory field is missing or malformed.
    """
    missing = [name for name in REQUIRED_FIELDS if _is_missing(payload.get(name))]
    if missing:
        raise CriteriaValidationError.missing_fields(missing)

    try:
        model = _CriteriaModel.model_validate(dict(payload))
    except ValidationError as exc:
        location, message = _first_error(exc)
        if location.startswith("budget"):
            raise CriteriaValidationError.invalid_budget(payload.get("budget")) from exc
        raise CriteriaValidationError.invalid_field(location, message) from exc

    try:
        thresholds = _MinFollowersModel.model_validate(model.requirements)
    except ValidationError as exc:
        location, message = _first_error(exc)
        raise CriteriaValidationError.invalid_field(f"requirements.{location}", message) from exc

    audience = model.targetAudience
    gender = (audience.gender or "").strip()
    return MatchingCriteria(
        campaign_id=model.campaignId,
        budget=model.budget,
        target_audience=AudienceDescriptor(
            age_groups=_clean_tuple(audience.ageGroups),
            gender=gender or None,
            interests=_clean_tuple(audience.interests),
        ),
        categories=model.categories,
        locations=model.locations,
        min_followers=thresholds.minFollowers
        if thresholds.minFollowers is not None
        else default_min_followers,
        requirements=MappingProxyType(dict(model.requirements)),
    )
