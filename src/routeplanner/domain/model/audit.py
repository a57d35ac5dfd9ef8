"""Import run audit trail."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from routeplanner.domain.model.base import Entity


@dataclass(eq=False, kw_only=True)
class ImportLog(Entity):
    kind: str
    started_at: datetime
    ended_at: datetime | None = None
    success: bool = False
    message: str = ""

    def finish(self, *, success: bool, message: str) -> None:
        self.success = success
        self.message = message
        self.ended_at = datetime.now(UTC)
