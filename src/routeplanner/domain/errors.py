"""Domain error hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path
    from uuid import UUID


class RoutePlannerError(RuntimeError):
    """Base class for errors raised by the route planner."""


class PathNotDetectedError(RoutePlannerError):
    """Raised when no import directory was given and none could be detected."""

    def __init__(self) -> None:
        super().__init__(
            "Import directory was not detected. Pass an explicit path or set "
            "ROUTEPLANNER_IMPORT_DIR."
        )


class ImportSourceError(RoutePlannerError):
    """Raised when the import directory or a required feed file is missing."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class FeedFormatError(ImportSourceError):
    """Raised when a feed file is not valid JSON or does not match its schema."""


class ImportCancelledError(RoutePlannerError):
    """Raised by the import pipeline when cancellation was requested."""

    def __init__(self, stage: str) -> None:
        super().__init__(f"Import cancelled before stage '{stage}'")
        self.stage = stage


class ImportInProgressError(RoutePlannerError):
    """Raised when an operation conflicts with a running import."""


class CompanyNotFoundError(RoutePlannerError):
    def __init__(self, reference: UUID | str) -> None:
        super().__init__(f"Target company not found: {reference}")
        self.reference = reference


class AliasNotFoundError(RoutePlannerError):
    def __init__(self, alias_key: str) -> None:
        super().__init__(f"Alias source company not found: {alias_key!r}")
        self.alias_key = alias_key
