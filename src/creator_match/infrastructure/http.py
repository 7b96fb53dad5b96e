"""HTTP session implementation for infrastructure.

Usage example:
    import requests

    from creator_match.infrastructure.http import RequestsSession
    from creator_match.infrastructure.resilience import RetryPolicy

    session = RequestsSession(session=requests.Session(), retry_policy=RetryPolicy())
    text = session.get_text("https://profiles.example.com/candidates", timeout_seconds=10)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import override

import requests

from ..observability import get_logger
from ..protocols import HttpSession, RetryPolicy
from .resilience import RetryPolicy as RetryPolicyImpl

logger = get_logger("creator_match.infrastructure.http")


def _response_details(response: requests.Response) -> str:
    """Return a compact status/body summary for error reporting."""
    try:
        body = response.text
    except (UnicodeDecodeError, ValueError, requests.RequestException):
        body = "<unreadable>"
    body = " ".join(body.split())
    if len(body) > 300:
        body = body[:300] + "..."
    return f"status={response.status_code}, body={body}"


class RequestsSession(HttpSession):
    """Requests-backed session that retries transient failures with backoff."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session = session or requests.Session()
        self._retry_policy = retry_policy or RetryPolicyImpl()
        self._sleep = sleep

    @override
    def get_text(self, url: str, *, timeout_seconds: float) -> str:
        attempt = 0
        while True:
            try:
                response = self._session.get(url, timeout=timeout_seconds)
            except self._retry_policy.retry_exceptions:
                if attempt < self._retry_policy.max_retries:
                    self._sleep(self._retry_policy.compute_backoff(attempt))
                    attempt += 1
                    continue
                raise

            if response.status_code in self._retry_policy.retry_statuses:
                if attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "Transient response from %s (%s), retrying", url, response.status_code
                    )
                    self._sleep(self._retry_policy.compute_backoff(attempt))
                    attempt += 1
                    continue
                logger.warning("Giving up on %s: %s", url, _response_details(response))

            response.raise_for_status()
            return response.text

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
