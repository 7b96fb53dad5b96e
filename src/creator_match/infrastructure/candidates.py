"""Candidate repository adapters backed by a JSON export or the profile service.

Both adapters read the same document shape::

    {"candidates": [{"id": "...", "followersCount": 25000, "analytics": [...]}, ...]}

Records that fail validation are skipped with a warning so one malformed profile
cannot abort a scoring run.
"""

from __future__ import annotations

from pathlib import Path
from typing import override

from ..domain.models import DEFAULT_MIN_FOLLOWERS, CandidateProfile
from ..exceptions import CandidatePayloadError
from ..observability import get_logger
from ..protocols import CandidateRepository, FileSystem, HttpSession
from .io.validation import (
    IncomingDataError,
    extract_candidate_records,
    parse_candidate,
    validate_json_as,
)

logger = get_logger("creator_match.infrastructure.candidates")


def load_eligible_candidates(
    payload: object, *, source: str, min_followers: int
) -> list[CandidateProfile]:
    """Parse a candidate document and keep profiles with enough followers."""
    try:
        records = extract_candidate_records(payload)
    except IncomingDataError as exc:
        raise CandidatePayloadError(source, "expected an object with a 'candidates' list") from exc

    eligible: list[CandidateProfile] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            candidate = parse_candidate(record)
        except IncomingDataError:
            skipped += 1
            logger.warning("Skipping malformed candidate record #%s from %s", index, source)
            continue
        if candidate.followers_count >= min_followers:
            eligible.append(candidate)

    logger.info(
        "Loaded %s eligible candidates from %s (%s records, %s skipped)",
        len(eligible),
        source,
        len(records),
        skipped,
    )
    return eligible


class FileCandidateRepository(CandidateRepository):
    """Reads candidates from a JSON export on disk."""

    def __init__(self, *, path: Path, fs: FileSystem) -> None:
        self._path = Path(path)
        self._fs = fs

    @override
    def fetch_eligible_candidates(
        self, min_followers: int = DEFAULT_MIN_FOLLOWERS
    ) -> list[CandidateProfile]:
        payload = self._fs.read_json(self._path)
        return load_eligible_candidates(
            payload, source=str(self._path), min_followers=min_followers
        )


class HttpCandidateRepository(CandidateRepository):
    """Fetches candidates from the profile service over HTTP."""

    def __init__(self, *, url: str, session: HttpSession, timeout_seconds: float = 10.0) -> None:
        self._url = url
        self._session = session
        self._timeout_seconds = timeout_seconds

    @override
    def fetch_eligible_candidates(
        self, min_followers: int = DEFAULT_MIN_FOLLOWERS
    ) -> list[CandidateProfile]:
        text = self._session.get_text(self._url, timeout_seconds=self._timeout_seconds)
        try:
            payload = validate_json_as(dict[str, object], text)
        except IncomingDataError as exc:
            raise CandidatePayloadError(self._url, "response is not a JSON object") from exc
        return load_eligible_candidates(payload, source=self._url, min_followers=min_followers)
