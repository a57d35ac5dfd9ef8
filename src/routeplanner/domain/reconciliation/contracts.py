"""Reconciliation contract components.

This module intentionally holds only value objects passed between the engine,
the merge executor and callers:
- the acceptance policy
- ranked candidates and the merge decisions derived from them
- listing rows for interactive mapping
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from routeplanner.domain.model import Company


@dataclass(slots=True, frozen=True, kw_only=True)
class MergePolicy:
    """Thresholds for accepting the best candidate of an unmapped company.

    A candidate is accepted when any one of the three signals clears its bar.
    """

    min_score: float = 0.85
    min_distance_budget: int = 2
    distance_fraction: float = 0.15
    min_overlap: float = 0.6

    def distance_budget(self, source: str, target: str) -> int:
        longest = max(len(source), len(target))
        return max(self.min_distance_budget, math.ceil(self.distance_fraction * longest))

    def accepts(self, candidate: MatchCandidate, *, source: str) -> bool:
        return (
            candidate.score >= self.min_score
            or candidate.distance <= self.distance_budget(source, candidate.simplified)
            or candidate.overlap >= self.min_overlap
        )


@dataclass(slots=True, frozen=True, kw_only=True)
class MatchCandidate:
    """One authoritative company scored against an unmapped key."""

    company: Company
    simplified: str
    score: float
    distance: int
    overlap: float


@dataclass(slots=True, frozen=True, kw_only=True)
class MergeDecision:
    """Merge ``source`` (unmapped) into ``target`` (authoritative)."""

    source_id: UUID
    target_id: UUID
    source_key: str
    target_key: str
    score: float
    distance: int
    overlap: float


@dataclass(slots=True, frozen=True, kw_only=True)
class MergeOutcome:
    source_id: UUID
    target_id: UUID
    aliases_repointed: int = 0
    links_moved: int = 0
    links_dropped: int = 0
    source_removed: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class MappingCandidate:
    company_id: UUID
    key: str
    score: float


@dataclass(slots=True, frozen=True, kw_only=True)
class MappingSuggestion:
    """An unmapped company with its closest mapped companies, best first."""

    alias_key: str
    display_name: str
    candidates: tuple[MappingCandidate, ...] = field(default_factory=tuple)

    @property
    def candidate_keys(self) -> list[str]:
        return [candidate.key for candidate in self.candidates]
