"""Concrete infrastructure implementations and shared helpers."""

from .candidates import FileCandidateRepository, HttpCandidateRepository
from .filesystem import LocalFileSystem
from .http import RequestsSession
from .resilience import RetryPolicy
from .results import CsvResultStore

__all__ = [
    "CsvResultStore",
    "FileCandidateRepository",
    "HttpCandidateRepository",
    "LocalFileSystem",
    "RequestsSession",
    "RetryPolicy",
]
