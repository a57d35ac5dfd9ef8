"""Background import jobs and their progress log."""

from __future__ import annotations

from .progress import LogChunk, ProgressLog
from .service import ImportJobService, ImportRunner, ImportStartResult, ImportStatusSnapshot

__all__ = [
    "ImportJobService",
    "ImportRunner",
    "ImportStartResult",
    "ImportStatusSnapshot",
    "LogChunk",
    "ProgressLog",
]
