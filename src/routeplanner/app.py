"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import UUID

from routeplanner.adapters.feeds import load_import_bundle
from routeplanner.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from routeplanner.config import get_import_config
from routeplanner.domain.errors import CompanyNotFoundError
from routeplanner.domain.ingest_pipeline import run_full_import as run_import_pipeline
from routeplanner.domain.ports.unit_of_work import CatalogUnitOfWork
from routeplanner.domain.reconciliation import list_unmapped
from routeplanner.domain.reconciliation import apply_mapping as apply_company_mapping
from routeplanner.domain.routing import RouteRecommender
from routeplanner.jobs import ImportJobService

if TYPE_CHECKING:
    import threading
    from pathlib import Path

    from routeplanner.domain.ingest_pipeline import ImportSummary, ProgressSink
    from routeplanner.domain.ports import FeedLoader
    from routeplanner.domain.reconciliation import MappingSuggestion, MergeOutcome
    from routeplanner.domain.routing import SuggestionResult
    from routeplanner.jobs import ProgressLog

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _uow_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    _ensure_started()
    return SqlAlchemyUnitOfWork


def run_full_import(
    path: Path | None = None,
    *,
    cancel: threading.Event | None = None,
    progress: ProgressSink | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    load_feeds: FeedLoader | None = None,
) -> ImportSummary:
    """Import the feeds of ``path`` (or the detected import directory)."""

    config = get_import_config()
    effective_uow = _uow_factory(unit_of_work_factory)
    log.info(
        "Starting full import: path=%s, depot_radius_km=%s",
        path or "<detect>",
        config.depot_radius_km,
    )
    summary = run_import_pipeline(
        uow_factory=effective_uow,
        load_feeds=load_feeds or load_import_bundle,
        path=path,
        detect_path=config.detect_import_dir,
        progress=progress,
        cancel=cancel,
        depot_radius_km=config.depot_radius_km,
    )
    log.info("Finished full import: %s", summary.describe())
    return summary


def clear_store(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> None:
    """Delete every catalog row in one transaction.

    This does not check for a running import. Callers sharing the store with an
    ``ImportJobService`` go through its ``clear_store`` which refuses while busy.
    """

    with _uow_factory(unit_of_work_factory)() as uow:
        uow.purge()
        uow.commit()
    log.info("Store cleared")


def list_unmapped_suggestions(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> list[MappingSuggestion]:
    with _uow_factory(unit_of_work_factory)() as uow:
        return list_unmapped(uow.repositories)


def resolve_company_id(
    reference: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> UUID:
    """Accept a company UUID or a company key and return the company id."""

    try:
        return UUID(reference)
    except ValueError:
        pass
    with _uow_factory(unit_of_work_factory)() as uow:
        company = uow.repositories.companies.get_by_key(reference.strip())
    if company is None:
        raise CompanyNotFoundError(reference)
    return company.id


def apply_mapping(
    alias_key: str,
    target_company_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MergeOutcome | None:
    with _uow_factory(unit_of_work_factory)() as uow:
        outcome = apply_company_mapping(uow.repositories, alias_key, target_company_id)
        uow.commit()
    return outcome


def suggest_routes(
    start: str,
    target: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SuggestionResult:
    with _uow_factory(unit_of_work_factory)() as uow:
        return RouteRecommender(uow.repositories).suggest(start, target)


def build_import_job_service(
    *,
    progress: ProgressLog | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    load_feeds: FeedLoader | None = None,
) -> ImportJobService:
    """Wire a background import service to the configured store."""

    effective_uow = _uow_factory(unit_of_work_factory)

    def run_import(
        path: Path | None = None,
        *,
        cancel: threading.Event | None = None,
        progress: ProgressLog | None = None,
    ) -> ImportSummary:
        return run_full_import(
            path,
            cancel=cancel,
            progress=progress,
            unit_of_work_factory=effective_uow,
            load_feeds=load_feeds,
        )

    def clear() -> None:
        clear_store(unit_of_work_factory=effective_uow)

    return ImportJobService(run_import=run_import, clear_store=clear, progress=progress)
