"""Decide which unmapped companies are the same as an authoritative one.

The engine is pure: it reads company keys and returns a merge plan. Executing
the plan against a store lives in ``merge``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from routeplanner.domain.matching import distance, score, simplify, token_overlap

from .contracts import MatchCandidate, MergeDecision, MergePolicy

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from routeplanner.domain.model import Company

log = logging.getLogger(__name__)

_DEFAULT_POLICY = MergePolicy()


def rank_candidates(source_key: str, targets: Sequence[Company]) -> list[MatchCandidate]:
    """Score every target against ``source_key``; best first.

    Ordering is score descending, then distance ascending. The sort is stable,
    so equal candidates keep the order of ``targets``.
    """

    simplified_source = simplify(source_key)
    candidates: list[MatchCandidate] = []
    for target in targets:
        simplified_target = simplify(target.key)
        candidates.append(
            MatchCandidate(
                company=target,
                simplified=simplified_target,
                score=score(simplified_source, simplified_target),
                distance=distance(simplified_source, simplified_target),
                overlap=token_overlap(simplified_source, simplified_target),
            )
        )
    candidates.sort(key=lambda candidate: (-candidate.score, candidate.distance))
    return candidates


def reconcile(
    authoritative: Iterable[Company],
    unmapped: Iterable[Company],
    *,
    policy: MergePolicy = _DEFAULT_POLICY,
) -> list[MergeDecision]:
    """Produce one merge decision per unmapped company that has an acceptable match.

    Both inputs are ordered by key first, which makes the plan independent of
    the order the caller supplied them in.
    """

    targets = sorted(authoritative, key=lambda company: company.key)
    decisions: list[MergeDecision] = []
    for source in sorted(unmapped, key=lambda company: company.key):
        simplified_source = simplify(source.key)
        if not simplified_source:
            continue
        candidates = rank_candidates(
            source.key, [target for target in targets if target.id != source.id]
        )
        if not candidates:
            continue
        best = candidates[0]
        if not policy.accepts(best, source=simplified_source):
            log.debug(
                "No acceptable match for %s (best %s score=%.3f distance=%d overlap=%.3f)",
                source.key,
                best.company.key,
                best.score,
                best.distance,
                best.overlap,
            )
            continue
        decisions.append(
            MergeDecision(
                source_id=source.id,
                target_id=best.company.id,
                source_key=source.key,
                target_key=best.company.key,
                score=best.score,
                distance=best.distance,
                overlap=best.overlap,
            )
        )
    return decisions
