"""Engine loggers under the ``creator_match`` namespace.

Records go to stderr with UTC timestamps so ``recommend --json`` keeps stdout clean.
The verbosity of every engine logger, including ones created after the call, is set
in one place with ``set_log_level`` (the CLI applies ``MATCH_LOG_LEVEL``).

Usage example:
    from creator_match.observability import get_logger, set_log_level

    logger = get_logger("creator_match.recommendations")
    set_log_level("WARNING")
    logger.info("Scored %s candidates for campaign %s", 12, "campaign_123")  # suppressed
"""

from __future__ import annotations

import logging
import time

ENGINE_NAMESPACE = "creator_match"
DEFAULT_LOG_LEVEL = "INFO"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_engine_loggers: dict[str, logging.Logger] = {}
_engine_level = logging.INFO


class UnknownLogLevelError(ValueError):
    """Raised when a log level name is not one the logging module knows."""

    def __init__(self, level: str) -> None:
        super().__init__(f"Unknown log level: {level!r}.")


def parse_log_level(level: str) -> int:
    """Return the numeric level for a name such as ``"warning"``."""
    numeric = logging.getLevelNamesMapping().get(level.strip().upper())
    if numeric is None:
        raise UnknownLogLevelError(level)
    return numeric


def _qualify(name: str) -> str:
    if name == ENGINE_NAMESPACE or name.startswith(f"{ENGINE_NAMESPACE}."):
        return name
    return f"{ENGINE_NAMESPACE}.{name}"


def get_logger(name: str) -> logging.Logger:
    """Return an engine logger with a single UTC stream handler.

    Names outside the engine namespace are prefixed with ``creator_match.``.
    """
    logger = logging.getLogger(_qualify(name))
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(_engine_level)
    _engine_loggers[logger.name] = logger
    return logger


def set_log_level(level: str) -> None:
    """Apply ``level`` to every engine logger."""
    global _engine_level
    _engine_level = parse_log_level(level)
    for logger in _engine_loggers.values():
        logger.setLevel(_engine_level)
