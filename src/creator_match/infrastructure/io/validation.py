"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TypedDict

from pydantic import TypeAdapter, ValidationError

from ...domain.models import (
    MAX_ANALYTICS_WINDOW,
    AnalyticsSnapshot,
    AudienceDescriptor,
    CandidateProfile,
)


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class AudienceInput(TypedDict, total=False):
    ageGroups: list[str] | None
    gender: str | None
    interests: list[str] | None


class AnalyticsInput(TypedDict, total=False):
    totalViews: float | None
    totalEngagement: float | None
    createdAt: datetime | None


class CandidateInput(TypedDict, total=False):
    id: str
    followersCount: float | None
    engagementRate: float | None
    contentCategories: list[str] | None
    audienceDemographics: AudienceInput | None
    location: str | None
    averageRate: float | None
    bio: str | None
    isVerified: bool | None
    analytics: list[AnalyticsInput] | None


class CandidateDocumentInput(TypedDict):
    candidates: list[object]


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def _as_str(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_str_tuple(values: list[str] | None) -> tuple[str, ...]:
    if not values:
        return ()
    return tuple(text for text in (item.strip() for item in values) if text)


def _as_optional_tuple(values: list[str] | None) -> tuple[str, ...] | None:
    cleaned = _as_str_tuple(values)
    return cleaned or None


def _as_non_negative(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return max(float(value), 0.0)


def _parse_audience(payload: AudienceInput | None) -> AudienceDescriptor:
    if not payload:
        return AudienceDescriptor()
    gender = _as_str(payload.get("gender"))
    return AudienceDescriptor(
        age_groups=_as_optional_tuple(payload.get("ageGroups")),
        gender=gender or None,
        interests=_as_optional_tuple(payload.get("interests")),
    )


def _snapshot_sort_key(snapshot: AnalyticsSnapshot) -> datetime:
    if snapshot.recorded_at is None:
        return datetime.min.replace(tzinfo=UTC)
    if snapshot.recorded_at.tzinfo is None:
        return snapshot.recorded_at.replace(tzinfo=UTC)
    return snapshot.recorded_at


def _parse_analytics(items: list[AnalyticsInput] | None) -> tuple[AnalyticsSnapshot, ...]:
    if not items:
        return ()
    snapshots = [
        AnalyticsSnapshot(
            total_views=int(_as_non_negative(item.get("totalViews"))),
            total_engagement=int(_as_non_negative(item.get("totalEngagement"))),
            recorded_at=item.get("createdAt"),
        )
        for item in items
    ]
    snapshots.sort(key=_snapshot_sort_key, reverse=True)
    return tuple(snapshots[:MAX_ANALYTICS_WINDOW])


def parse_candidate(payload: object) -> CandidateProfile:
    """Validate one candidate record and map missing values to neutral defaults."""
    data = validate_as(CandidateInput, payload)
    candidate_id = _as_str(data.get("id"))
    if not candidate_id:
        raise IncomingDataError("Candidate record is missing an id.")
    return CandidateProfile(
        candidate_id=candidate_id,
        followers_count=int(_as_non_negative(data.get("followersCount"))),
        engagement_rate=_as_non_negative(data.get("engagementRate")),
        content_categories=_as_str_tuple(data.get("contentCategories")),
        audience=_parse_audience(data.get("audienceDemographics")),
        location=_as_str(data.get("location")),
        average_rate=_as_non_negative(data.get("averageRate")),
        bio=data.get("bio") or "",
        is_verified=bool(data.get("isVerified")),
        analytics=_parse_analytics(data.get("analytics")),
    )


def extract_candidate_records(payload: object) -> list[object]:
    """Return the raw records of a ``{"candidates": [...]}`` document."""
    document = validate_as(CandidateDocumentInput, payload)
    return document["candidates"]
