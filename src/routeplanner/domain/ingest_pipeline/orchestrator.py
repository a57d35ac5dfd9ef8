"""Stage-based orchestrator for the import pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from routeplanner.domain.feeds import ImportBundle

    from .context import ImportContext


class PipelineStage(Protocol):
    """Contract implemented by each import stage."""

    name: str

    def run(self, bundle: ImportBundle, *, context: ImportContext) -> None: ...


@dataclass(slots=True)
class ImportPipeline:
    """Compose and execute the ordered import stages.

    Cancellation is checked before every stage; a stage that has started runs
    to completion and commits.
    """

    stages: Sequence[PipelineStage] = field(default_factory=tuple)

    def with_stage(self, stage: PipelineStage) -> ImportPipeline:
        """Return a new pipeline appending ``stage`` at the end."""

        return ImportPipeline(stages=(*self.stages, stage))

    def extend(self, stages: Iterable[PipelineStage]) -> ImportPipeline:
        return ImportPipeline(stages=(*self.stages, *tuple(stages)))

    def run(self, bundle: ImportBundle, *, context: ImportContext) -> None:
        for stage in self.stages:
            context.raise_if_cancelled(stage.name)
            stage.run(bundle, context=context)
