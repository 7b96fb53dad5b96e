"""Custom exceptions for the creator match engine.

These exceptions provide clear error handling and enable testing of error paths.
"""

from __future__ import annotations

from collections.abc import Iterable


class MatchingError(Exception):
    """Base exception for all matching engine errors."""

    pass


class CriteriaValidationError(MatchingError, ValueError):
    """Raised when matching criteria are malformed or incomplete.

    Recoverable at the caller boundary; the message names the offending fields.
    """

    @classmethod
    def missing_fields(cls, fields: Iterable[str]) -> CriteriaValidationError:
        return cls(f"Missing required fields: {', '.join(fields)}")

    @classmethod
    def invalid_budget(cls, value: object) -> CriteriaValidationError:
        return cls(f"budget must be a positive number (got {value!r}).")

    @classmethod
    def invalid_field(cls, location: str, message: str) -> CriteriaValidationError:
        return cls(f"Invalid criteria field {location}: {message}")


class RecommendationNotFoundError(MatchingError, LookupError):
    """Raised when no persisted result exists for a campaign/candidate pair."""

    def __init__(self, campaign_id: str, candidate_id: str) -> None:
        self.campaign_id = campaign_id
        self.candidate_id = candidate_id
        super().__init__(
            f"No recommendation found for campaign '{campaign_id}' "
            f"and candidate '{candidate_id}'."
        )


class DependencyUnavailableError(MatchingError):
    """Raised when the candidate repository or result store cannot be reached."""

    def __init__(self, dependency: str, detail: str) -> None:
        self.dependency = dependency
        super().__init__(f"{dependency} unavailable: {detail}")

    @classmethod
    def for_candidate_fetch(cls, exc: BaseException) -> DependencyUnavailableError:
        return cls("Candidate repository", str(exc) or type(exc).__name__)

    @classmethod
    def for_result_write(cls, exc: BaseException) -> DependencyUnavailableError:
        return cls("Result store", str(exc) or type(exc).__name__)

    @classmethod
    def for_result_read(cls, exc: BaseException) -> DependencyUnavailableError:
        return cls("Result store", str(exc) or type(exc).__name__)


class ScoringRunCancelledError(MatchingError):
    """Raised when a scoring run is cancelled before its results are persisted."""

    def __init__(self, campaign_id: str, reason: str) -> None:
        self.campaign_id = campaign_id
        self.reason = reason
        super().__init__(f"Scoring run for campaign '{campaign_id}' cancelled: {reason}.")


class CandidatePayloadError(MatchingError, ValueError):
    """Raised when a candidate document cannot be parsed."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"Invalid candidate payload from {source}: {detail}")


class ProfileServiceNotConfiguredError(MatchingError, ValueError):
    """Raised when the API candidate source is selected without a service URL."""

    def __init__(self) -> None:
        super().__init__(
            "MATCH_PROFILE_SERVICE_URL must be set when MATCH_CANDIDATE_SOURCE=api."
        )


class CandidateSourceError(MatchingError, ValueError):
    """Raised when an unsupported candidate source type is configured."""

    def __init__(self, source_type: str) -> None:
        super().__init__(f"Unsupported candidate source '{source_type}' (expected file or api).")


class ConfigFileNotFoundError(MatchingError, FileNotFoundError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(MatchingError, ValueError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(MatchingError, ValueError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is invalid: {detail}")


class RegionalProfileFileNotFoundError(MatchingError, FileNotFoundError):
    """Raised when the regional profile catalogue is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Regional profile file not found: {path}. "
            "Set MATCH_REGIONAL_PROFILE_PATH to a valid file or leave it empty."
        )


class RegionalProfileValidationError(MatchingError, ValueError):
    """Raised when the regional profile catalogue fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Regional profile file {path} is invalid: {detail}")


class RegionalProfileSelectionError(MatchingError, ValueError):
    """Raised when a requested regional profile name is not in the catalogue."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        super().__init__(
            f"Unknown regional profile '{name}'. Available: {', '.join(sorted(available))}."
        )
