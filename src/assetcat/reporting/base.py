from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, Optional

__all__ = [
    "TaskStatus",
    "TaskRecord",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "task",
    "SUMMARY_STATS",
]

# Task metadata keys echoed in completion lines.
SUMMARY_STATS = ("catalogs", "failed", "namespaces", "images")


class TaskStatus(Enum):
    RUNNING = auto()
    SUCCESS = auto()
    FAILED = auto()
    SKIPPED = auto()


@dataclass(slots=True)
class TaskRecord:
    task_id: str
    name: str
    total: Optional[int] = None
    completed: int = 0
    status: TaskStatus = TaskStatus.RUNNING
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def finish(self, status: TaskStatus, **final_meta: Any) -> float:
        self.status = status
        self.end_time = time.time()
        self.meta.update(final_meta)
        return self.end_time - self.start_time

    def stats_part(self) -> str:
        stats = [
            f"{key}={self.meta[key]}" for key in SUMMARY_STATS if key in self.meta
        ]
        return f" [{' '.join(stats)}]" if stats else ""

    def count_part(self) -> str:
        if self.total is None:
            return ""
        return f" {self.completed}/{self.total}"


_VERBOSITY: int = 0  # set by the CLI (-v repeats)


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    """Sink for progress, status lines and the warnings raised while
    generating accessors.

    Warnings carry structured ``fields`` (``code``, ``scope``, ``names`` ...)
    so machine-readable backends can forward them unchanged.
    """

    supports_progress: bool = False

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:  # noqa: D401
        raise NotImplementedError

    def advance(
        self, task_id: str, step: int = 1, **meta: Any
    ) -> None:  # noqa: D401
        raise NotImplementedError

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:  # noqa: D401
        raise NotImplementedError

    def status(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        pass

    def error(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def warning(self, message: str, **fields: Any) -> None:
        self.status(message, **fields)

    def section(self, title: str) -> None:  # noqa: D401
        raise NotImplementedError

    def flush(self) -> None:  # noqa: D401
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


@contextmanager
def task(
    task_id: str,
    name: str,
    total: int | None = None,
    *,
    reporter: Reporter | None = None,
    **meta: Any,
) -> Iterator[Dict[str, Any]]:
    """Run a block as one reporter task.

    Yields a dict; whatever the block stores in it is passed to ``end_task``
    as final stats. An exception ends the task as failed and propagates.
    """
    rep = reporter or get_reporter()
    rep.start_task(task_id, name, total, **meta)
    stats: Dict[str, Any] = {}
    try:
        yield stats
    except Exception:
        rep.end_task(task_id, TaskStatus.FAILED, **stats)
        raise
    rep.end_task(task_id, TaskStatus.SUCCESS, **stats)
