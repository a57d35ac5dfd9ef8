"""Shared context structures for the import pipeline."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Protocol

from routeplanner.domain.errors import ImportCancelledError
from routeplanner.domain.matching import DEFAULT_RADIUS_KM
from routeplanner.domain.reconciliation import MergePolicy

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    from routeplanner.domain.ports import CatalogUnitOfWork

log = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """Receives human-readable progress lines."""

    def log(self, message: str) -> None: ...


@dataclass(slots=True)
class ImportCounters:
    """What the stages of one run changed."""

    cities_added: int = 0
    companies_added: int = 0
    aliases_added: int = 0
    cargo_types_added: int = 0
    rules_added: int = 0
    links_added: int = 0
    depots_skipped: int = 0
    records_skipped: int = 0
    merges: int = 0
    companies_removed: int = 0


@dataclass(slots=True, frozen=True, kw_only=True)
class ImportSummary:
    """Store totals after a completed import."""

    city_count: int
    company_count: int
    city_company_link_count: int
    cargo_type_count: int
    rule_count: int
    unmapped_company_count: int

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    def describe(self) -> str:
        return (
            f"{self.city_count} cities, {self.company_count} companies "
            f"({self.unmapped_company_count} unmapped), "
            f"{self.city_company_link_count} city links, "
            f"{self.cargo_type_count} cargo types, {self.rule_count} rules"
        )


@dataclass(slots=True, kw_only=True)
class ImportContext:
    """Mutable context shared across import stages.

    Each stage opens its own unit of work from ``uow_factory`` and commits it,
    so a failure or cancellation keeps the work of earlier stages.
    """

    uow_factory: Callable[[], CatalogUnitOfWork]
    progress: ProgressSink | None = None
    cancel: threading.Event | None = None
    depot_radius_km: float = DEFAULT_RADIUS_KM
    merge_policy: MergePolicy = field(default_factory=MergePolicy)
    counters: ImportCounters = field(default_factory=ImportCounters)

    def report(self, message: str) -> None:
        if self.progress is None:
            log.info(message)
        else:
            self.progress.log(message)

    def raise_if_cancelled(self, stage: str) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise ImportCancelledError(stage)
