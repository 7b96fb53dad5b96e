"""Rich progress bar for scoring runs started from the CLI."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import override

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .protocols import ProgressReporter


def _build_progress() -> Progress:
    return Progress(
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=Console(stderr=True),
        transient=True,
    )


@dataclass
class CliProgressReporter(ProgressReporter):
    """Shows candidates scored so far; safe to advance from worker threads."""

    _progress: Progress = field(default_factory=_build_progress)
    _task_id: TaskID | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock)

    @override
    def start(self, label: str, total: int | None) -> None:
        with self._lock:
            if self._task_id is None:
                self._progress.start()
            else:
                self._progress.remove_task(self._task_id)
            self._task_id = self._progress.add_task(label, total=total)

    @override
    def advance(self, count: int) -> None:
        with self._lock:
            if self._task_id is not None:
                self._progress.advance(self._task_id, count)

    @override
    def finish(self) -> None:
        with self._lock:
            if self._task_id is None:
                return
            self._progress.remove_task(self._task_id)
            self._task_id = None
            self._progress.stop()
