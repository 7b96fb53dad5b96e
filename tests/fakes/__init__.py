"""Exports for test fakes."""

from .filesystem import InMemoryFileSystem
from .http import FakeHttpSession, ScriptedRequestsSession, make_response
from .progress import FakeProgressReporter
from .repositories import (
    FakeCandidateRepository,
    InMemoryResultStore,
    OfflineCandidateRepository,
    OfflineResultStore,
)

__all__ = [
    "FakeCandidateRepository",
    "FakeHttpSession",
    "FakeProgressReporter",
    "InMemoryFileSystem",
    "InMemoryResultStore",
    "OfflineCandidateRepository",
    "OfflineResultStore",
    "ScriptedRequestsSession",
    "make_response",
]
