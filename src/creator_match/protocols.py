"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that engine components depend on,
enabling isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .domain.models import DEFAULT_MIN_FOLLOWERS, CandidateProfile, MatchResult

if TYPE_CHECKING:
    import pandas as pd


@runtime_checkable
class CandidateRepository(Protocol):
    """Source of eligible candidate profiles."""

    def fetch_eligible_candidates(
        self, min_followers: int = DEFAULT_MIN_FOLLOWERS
    ) -> list[CandidateProfile]:
        """Return candidates with at least ``min_followers`` followers.

        Raises:
            Any exception when the backing store is unreachable; the engine wraps it
            as DependencyUnavailableError.
        """
        ...


@runtime_checkable
class ResultStore(Protocol):
    """Append-only store of persisted match results."""

    def persist_results(self, campaign_id: str, results: Sequence[MatchResult]) -> None:
        """Append one immutable record per result for the campaign."""
        ...

    def find_result(self, campaign_id: str, candidate_id: str) -> MatchResult | None:
        """Return the most recent result for the pair, or None if absent."""
        ...


@runtime_checkable
class HttpSession(Protocol):
    """Abstract HTTP session for fetching remote documents."""

    def get_text(self, url: str, *, timeout_seconds: float) -> str:
        """Fetch text content from a URL."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading/writing engine data."""

    def read_csv(self, path: Path) -> pd.DataFrame:
        """Read CSV file into a DataFrame of strings, keeping NA-like tokens verbatim."""
        ...

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        """Write DataFrame to CSV file."""
        ...

    def read_json(self, path: Path) -> dict[str, object]:
        """Read JSON file."""
        ...

    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        """Write JSON file."""
        ...

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def write_text(self, content: str, path: Path) -> None:
        """Write text file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    def rename(self, src: Path, dest: Path) -> None:
        """Rename a file, replacing the destination."""
        ...

    def mkdir(self, path: Path, parents: bool = True) -> None:
        """Create directory."""
        ...


@runtime_checkable
class RetryPolicy(Protocol):
    """Abstract retry policy for transient failures."""

    max_retries: int
    retry_statuses: tuple[int, ...]
    retry_exceptions: tuple[type[Exception], ...]

    def compute_backoff(self, attempt: int) -> float:
        """Return a delay for the next retry attempt."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """CLI-owned progress reporting interface."""

    def start(self, label: str, total: int | None) -> None:
        """Start a progress session."""
        ...

    def advance(self, count: int) -> None:
        """Advance progress by count."""
        ...

    def finish(self) -> None:
        """Finish a progress session."""
        ...
