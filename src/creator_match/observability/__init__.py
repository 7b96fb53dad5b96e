"""Observability helpers."""

from .logging import (
    DEFAULT_LOG_LEVEL,
    UnknownLogLevelError,
    get_logger,
    parse_log_level,
    set_log_level,
)

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "UnknownLogLevelError",
    "get_logger",
    "parse_log_level",
    "set_log_level",
]
