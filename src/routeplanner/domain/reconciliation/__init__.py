"""Company identity reconciliation: merge planning, execution and manual mapping."""

from __future__ import annotations

from .contracts import (
    MappingCandidate,
    MappingSuggestion,
    MatchCandidate,
    MergeDecision,
    MergeOutcome,
    MergePolicy,
)
from .engine import rank_candidates, reconcile
from .merge import apply_mapping, merge_into
from .suggestions import list_unmapped

__all__ = [
    "MappingCandidate",
    "MappingSuggestion",
    "MatchCandidate",
    "MergeDecision",
    "MergeOutcome",
    "MergePolicy",
    "apply_mapping",
    "list_unmapped",
    "merge_into",
    "rank_candidates",
    "reconcile",
]
