"""Candidate listing for interactive mapping of unmapped companies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from routeplanner.domain.matching import score, simplify

from .contracts import MappingCandidate, MappingSuggestion

if TYPE_CHECKING:
    from routeplanner.domain.ports import CatalogRepositories

DEFAULT_CANDIDATE_LIMIT = 5


def list_unmapped(
    repositories: CatalogRepositories,
    *,
    limit: int = DEFAULT_CANDIDATE_LIMIT,
) -> list[MappingSuggestion]:
    """One suggestion per unmapped company, in key order.

    Candidates are the mapped companies with the highest similarity of
    simplified keys; no threshold is applied.
    """

    mapped = repositories.companies.list(unmapped=False)
    suggestions: list[MappingSuggestion] = []
    for company in repositories.companies.list(unmapped=True):
        simplified = simplify(company.key)
        scored = [
            MappingCandidate(
                company_id=other.id,
                key=other.key,
                score=score(simplified, simplify(other.key)),
            )
            for other in mapped
        ]
        scored.sort(key=lambda candidate: -candidate.score)
        suggestions.append(
            MappingSuggestion(
                alias_key=company.key,
                display_name=company.display,
                candidates=tuple(scored[:limit]),
            )
        )
    return suggestions
