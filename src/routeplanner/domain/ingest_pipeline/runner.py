"""Entry point for a full import run: audit row, path resolution, stages, summary."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from routeplanner.domain.errors import PathNotDetectedError
from routeplanner.domain.matching import DEFAULT_RADIUS_KM
from routeplanner.domain.model import ImportLog
from routeplanner.domain.reconciliation import MergePolicy

from .context import ImportContext, ImportSummary
from .orchestrator import ImportPipeline
from .stages import DefinitionStage, MapFeedStage, ReconcileStage

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable
    from pathlib import Path
    from uuid import UUID

    from routeplanner.domain.ports import CatalogUnitOfWork, FeedLoader

    from .context import ProgressSink

log = logging.getLogger(__name__)

IMPORT_KIND = "full"


def default_pipeline() -> ImportPipeline:
    return ImportPipeline(stages=(MapFeedStage(), DefinitionStage(), ReconcileStage()))


def resolve_import_dir(requested: Path | None, detected: Path | None) -> Path:
    """Explicit path first, then the detected one."""

    if requested is not None and str(requested).strip():
        return requested
    if detected is not None and str(detected).strip():
        return detected
    raise PathNotDetectedError


def run_full_import(  # noqa: PLR0913
    *,
    uow_factory: Callable[[], CatalogUnitOfWork],
    load_feeds: FeedLoader,
    path: Path | None = None,
    detect_path: Callable[[], Path | None] | None = None,
    progress: ProgressSink | None = None,
    cancel: threading.Event | None = None,
    depot_radius_km: float = DEFAULT_RADIUS_KM,
    policy: MergePolicy | None = None,
    pipeline: ImportPipeline | None = None,
) -> ImportSummary:
    """Run every import stage and return the resulting store totals.

    The run is recorded in an ``ImportLog`` row when the store accepts it; a
    failure to write that row never stops the import.
    """

    context = ImportContext(
        uow_factory=uow_factory,
        progress=progress,
        cancel=cancel,
        depot_radius_km=depot_radius_km,
        merge_policy=policy or MergePolicy(),
    )
    audit_id = _open_audit(context)
    try:
        context.report("Detect import directory")
        detected = None if path is not None or detect_path is None else detect_path()
        source_dir = resolve_import_dir(path, detected)
        context.report(f"Reading feeds from {source_dir}")
        bundle = load_feeds(source_dir)
        (pipeline or default_pipeline()).run(bundle, context=context)
        summary = build_summary(uow_factory)
    except Exception as exc:
        _close_audit(context, audit_id, success=False, message=f"{type(exc).__name__}: {exc}")
        raise

    _close_audit(context, audit_id, success=True, message=summary.describe())
    context.report(f"Import complete: {summary.describe()}")
    return summary


def build_summary(uow_factory: Callable[[], CatalogUnitOfWork]) -> ImportSummary:
    with uow_factory() as uow:
        repositories = uow.repositories
        return ImportSummary(
            city_count=repositories.cities.count(),
            company_count=repositories.companies.count(),
            city_company_link_count=repositories.city_companies.count(),
            cargo_type_count=repositories.cargo_types.count(),
            rule_count=repositories.cargo_rules.count(),
            unmapped_company_count=repositories.companies.count_unmapped(),
        )


def _open_audit(context: ImportContext) -> UUID | None:
    entry = ImportLog(kind=IMPORT_KIND, started_at=datetime.now(UTC))
    try:
        with context.uow_factory() as uow:
            uow.repositories.import_logs.add(entry)
            uow.commit()
    except Exception as exc:  # noqa: BLE001
        log.warning("ImportLog pre-write failed; continuing without ImportLog row", exc_info=True)
        context.report(f"WARN: Could not write ImportLog row ({exc}). Continuing import.")
        return None
    return entry.id


def _close_audit(
    context: ImportContext, audit_id: UUID | None, *, success: bool, message: str
) -> None:
    if audit_id is None:
        return
    try:
        with context.uow_factory() as uow:
            entry = uow.repositories.import_logs.get(audit_id)
            if entry is None:
                return
            entry.finish(success=success, message=message)
            uow.commit()
    except Exception:  # noqa: BLE001
        log.warning("Could not close ImportLog row %s", audit_id, exc_info=True)
