"""Import pipeline: stages that turn feed records into catalog rows."""

from __future__ import annotations

from .context import ImportContext, ImportCounters, ImportSummary, ProgressSink
from .orchestrator import ImportPipeline, PipelineStage
from .runner import build_summary, default_pipeline, resolve_import_dir, run_full_import
from .stages import DefinitionStage, MapFeedStage, ReconcileStage

__all__ = [
    "DefinitionStage",
    "ImportContext",
    "ImportCounters",
    "ImportPipeline",
    "ImportSummary",
    "MapFeedStage",
    "PipelineStage",
    "ProgressSink",
    "ReconcileStage",
    "build_summary",
    "default_pipeline",
    "resolve_import_dir",
    "run_full_import",
]
