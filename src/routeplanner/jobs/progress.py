"""Append-only progress log shared between the import worker and status readers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LogChunk:
    """Lines after a reader's cursor, plus the cursor to pass next time."""

    next_cursor: int
    lines: tuple[str, ...] = field(default_factory=tuple)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ProgressLog:
    """Thread-safe list of ``[HH:MM:SS] message`` lines read by cursor.

    Readers never see lines skipped or reordered: a cursor is an index into
    the list and the list only grows until ``reset``.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _local_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._lines: list[str] = []

    def log(self, message: str) -> None:
        line = f"[{self._clock():%H:%M:%S}] {message}"
        with self._lock:
            self._lines.append(line)
        log.info(message)

    def chunk(self, cursor: int) -> LogChunk:
        with self._lock:
            total = len(self._lines)
            start = min(max(cursor, 0), total)
            return LogChunk(next_cursor=total, lines=tuple(self._lines[start:]))

    def snapshot(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    def reset(self) -> None:
        with self._lock:
            self._lines.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
