"""Append-only CSV result store.

Every scoring run appends one row per ranked candidate; rows are never updated. A batch
is written by rewriting the table to a temporary file and renaming it into place, so a
failed write leaves the previous table untouched.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import override

import pandas as pd

from ..domain.models import FactorScores, MatchResult
from ..observability import get_logger
from ..protocols import FileSystem, ResultStore

logger = get_logger("creator_match.infrastructure.results")

FACTOR_COLUMNS: tuple[str, ...] = (
    "category_match",
    "audience_match",
    "budget_fit",
    "location_match",
    "engagement_quality",
    "past_performance",
    "regional_fit",
)

RESULT_COLUMNS: tuple[str, ...] = (
    "campaign_id",
    "candidate_id",
    "overall_score",
    *FACTOR_COLUMNS,
    "reasons",
    "algorithm_version",
    "created_at",
)


class ResultTableSchemaError(RuntimeError):
    """Raised when a persisted result table is missing expected columns."""

    def __init__(self, path: Path, missing: Sequence[str]) -> None:
        super().__init__(f"Result table {path} is missing columns: {', '.join(missing)}")


def result_to_row(result: MatchResult) -> dict[str, str]:
    """Serialise a match result into a flat CSV row."""
    row = {
        "campaign_id": result.campaign_id,
        "candidate_id": result.candidate_id,
        "overall_score": repr(result.overall),
    }
    for name, value in result.factors.as_dict().items():
        row[name] = repr(value)
    row["reasons"] = json.dumps(list(result.reasons), ensure_ascii=False)
    row["algorithm_version"] = result.algorithm_version
    row["created_at"] = result.created_at.isoformat()
    return row


def row_to_result(row: dict[str, str]) -> MatchResult:
    """Rebuild a match result from a persisted CSV row."""
    reasons_raw = row.get("reasons") or "[]"
    return MatchResult(
        campaign_id=row["campaign_id"],
        candidate_id=row["candidate_id"],
        overall=float(row["overall_score"]),
        reasons=tuple(str(reason) for reason in json.loads(reasons_raw)),
        factors=FactorScores(**{name: float(row[name]) for name in FACTOR_COLUMNS}),
        algorithm_version=row["algorithm_version"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class CsvResultStore(ResultStore):
    """Result store persisting match results as rows of a CSV table."""

    def __init__(self, *, path: Path, fs: FileSystem) -> None:
        self._path = Path(path)
        self._fs = fs
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_table(self) -> pd.DataFrame:
        if not self._fs.exists(self._path):
            return pd.DataFrame(columns=list(RESULT_COLUMNS))
        df = self._fs.read_csv(self._path)
        missing = [column for column in RESULT_COLUMNS if column not in df.columns]
        if missing:
            raise ResultTableSchemaError(self._path, missing)
        return df

    @override
    def persist_results(self, campaign_id: str, results: Sequence[MatchResult]) -> None:
        if not results:
            return
        batch = pd.DataFrame(
            [result_to_row(result) for result in results], columns=list(RESULT_COLUMNS)
        )
        batch["campaign_id"] = campaign_id
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        with self._lock:
            existing = self._read_table()
            combined = batch if existing.empty else pd.concat([existing, batch], ignore_index=True)
            self._fs.mkdir(self._path.parent, parents=True)
            self._fs.write_csv(combined, tmp_path)
            self._fs.rename(tmp_path, self._path)
        logger.info("Persisted %s results for campaign %s", len(batch), campaign_id)

    @override
    def find_result(self, campaign_id: str, candidate_id: str) -> MatchResult | None:
        with self._lock:
            df = self._read_table()
        matches = df[(df["campaign_id"] == campaign_id) & (df["candidate_id"] == candidate_id)]
        if matches.empty:
            return None
        # Stable sort keeps write order for equal timestamps; last row is the newest.
        ordered = matches.assign(
            _created=pd.to_datetime(matches["created_at"], utc=True, format="ISO8601")
        ).sort_values("_created", kind="stable")
        latest = ordered.drop(columns=["_created"]).iloc[-1]
        return row_to_result({str(key): str(value) for key, value in latest.to_dict().items()})
