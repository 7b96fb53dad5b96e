"""Cooperative cancellation for in-flight scoring runs."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class CancellationToken:
    """Thread-safe cancellation flag with an optional deadline.

    The engine polls ``reason()`` between stages; it never interrupts a factor
    calculation mid-flight.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._event = threading.Event()
        self._clock = clock
        self._deadline = clock() + timeout_seconds if timeout_seconds is not None else None
        self._reason = ""

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Request cancellation; later checks report ``reason``."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def reason(self) -> str | None:
        """Return why the run should stop, or None to keep going."""
        if self._event.is_set():
            return self._reason
        if self._deadline is not None and self._clock() >= self._deadline:
            return "deadline exceeded"
        return None

    @property
    def cancelled(self) -> bool:
        return self.reason() is not None
