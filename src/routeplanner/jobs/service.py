"""Single-flight background import with pollable status.

One worker thread consumes import requests from a FIFO queue. Whether a request
is accepted is decided under the service lock before it is queued, so at most
one import is queued or running at any time. Status readers only take the lock
for a snapshot and never wait for the worker.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

from routeplanner.domain.errors import (
    ImportCancelledError,
    ImportInProgressError,
    PathNotDetectedError,
)

from .progress import LogChunk, ProgressLog

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path
    from types import TracebackType

    from routeplanner.domain.ingest_pipeline import ImportSummary

log = logging.getLogger(__name__)

ALREADY_RUNNING_MESSAGE = "Import is already running."
CLEARING_MESSAGE = "Store is being cleared."
STOPPED_MESSAGE = "Import service is stopped."
STARTED_MESSAGE = "Import started."
CANCELLED_MESSAGE = "Import cancelled"


class ImportRunner(Protocol):
    def __call__(
        self,
        path: Path | None = None,
        *,
        cancel: threading.Event | None = None,
        progress: ProgressLog | None = None,
    ) -> ImportSummary: ...


@dataclass(slots=True, frozen=True)
class ImportStartResult:
    started: bool
    message: str


@dataclass(slots=True, frozen=True, kw_only=True)
class ImportStatusSnapshot:
    is_running: bool
    needs_manual_input: bool
    last_error: str | None
    last_summary: ImportSummary | None
    logs: LogChunk


@dataclass(slots=True, frozen=True)
class _ImportRequest:
    path: Path | None


class ImportJobService:
    def __init__(
        self,
        *,
        run_import: ImportRunner,
        clear_store: Callable[[], None],
        progress: ProgressLog | None = None,
        name: str = "routeplanner-import",
    ) -> None:
        self.progress = progress or ProgressLog()
        self._run_import = run_import
        self._clear_store = clear_store
        self._name = name
        self._queue: queue.Queue[_ImportRequest | None] = queue.Queue()
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._idle = threading.Event()
        self._idle.set()
        self._worker: threading.Thread | None = None
        self._stopped = False

        self._is_running = False
        self._clearing = False
        self._needs_manual_input = False
        self._last_error: str | None = None
        self._last_summary: ImportSummary | None = None

    # Requests -----------------------------------------------------------------

    def start_full_import(self, path: Path | None = None) -> ImportStartResult:
        with self._lock:
            if self._stopped:
                return ImportStartResult(started=False, message=STOPPED_MESSAGE)
            if self._is_running:
                return ImportStartResult(started=False, message=ALREADY_RUNNING_MESSAGE)
            if self._clearing:
                return ImportStartResult(started=False, message=CLEARING_MESSAGE)

            self._is_running = True
            self._needs_manual_input = False
            self._last_error = None
            self._last_summary = None
            self._cancel.clear()
            self._idle.clear()
            self.progress.reset()
            self.progress.log("Queued full import")
            self._ensure_worker()
            self._queue.put(_ImportRequest(path))
        return ImportStartResult(started=True, message=STARTED_MESSAGE)

    def get_status(self, cursor: int = 0) -> ImportStatusSnapshot:
        with self._lock:
            return ImportStatusSnapshot(
                is_running=self._is_running,
                needs_manual_input=self._needs_manual_input,
                last_error=self._last_error,
                last_summary=self._last_summary,
                logs=self.progress.chunk(cursor),
            )

    def clear_store(self) -> None:
        """Purge the store; rejected while an import is queued or running."""

        with self._lock:
            if self._is_running:
                raise ImportInProgressError("Cannot clear the store while an import is running.")
            if self._clearing:
                raise ImportInProgressError("The store is already being cleared.")
            self._clearing = True
            self._needs_manual_input = False
            self._last_error = None
            self._last_summary = None
            self.progress.reset()
            self.progress.log("Clear store requested")

        try:
            self._clear_store()
        finally:
            with self._lock:
                self._clearing = False
        self.progress.log("Store cleared")

    def cancel(self) -> bool:
        """Ask the running import to stop before its next stage."""

        with self._lock:
            if not self._is_running:
                return False
            self.progress.log("Cancellation requested")
            self._cancel.set()
        return True

    # Lifecycle ----------------------------------------------------------------

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        return self._idle.wait(timeout)

    def stop(self, timeout: float | None = None) -> None:
        """Stop accepting work and let the worker finish what it has."""

        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            worker = self._worker
            if worker is not None:
                self._queue.put(None)
        if worker is not None:
            worker.join(timeout)

    def __enter__(self) -> ImportJobService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.cancel()
        self.stop()
        return False

    # Worker -------------------------------------------------------------------

    def _ensure_worker(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(target=self._work, name=self._name, daemon=True)
        self._worker.start()

    def _work(self) -> None:
        while True:
            request = self._queue.get()
            try:
                if request is None:
                    return
                self._execute(request)
            finally:
                self._queue.task_done()

    def _execute(self, request: _ImportRequest) -> None:
        try:
            summary = self._run_import(request.path, cancel=self._cancel, progress=self.progress)
        except PathNotDetectedError as exc:
            self.progress.log(str(exc))
            with self._lock:
                self._needs_manual_input = True
                self._last_error = str(exc)
        except ImportCancelledError as exc:
            self.progress.log(f"{CANCELLED_MESSAGE} before stage '{exc.stage}'")
            with self._lock:
                self._last_error = CANCELLED_MESSAGE
        except Exception as exc:
            log.exception("Background import failed")
            self.progress.log(f"ERROR: {exc}")
            with self._lock:
                self._last_error = str(exc)
                self._needs_manual_input = False
        else:
            with self._lock:
                self._last_summary = summary
                self._last_error = None
                self._needs_manual_input = False
        finally:
            with self._lock:
                self._is_running = False
                self._idle.set()
