"""Haul recommendations between two cities.

A haul is a (start company, cargo, target company) triple where the start
company ships the cargo out of the start city and the target company accepts
it in the target city.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from routeplanner.domain.matching import score
from routeplanner.domain.model import CargoDirection

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from routeplanner.domain.model import City, CompanyCargoRule
    from routeplanner.domain.ports import CatalogRepositories

log = logging.getLogger(__name__)

CITY_MATCH_THRESHOLD = 0.92
HINT_LIMIT = 5


@dataclass(slots=True, frozen=True)
class RouteSuggestion:
    start_company: str
    cargo_type: str
    target_company: str

    def sort_key(self) -> tuple[str, ...]:
        # case-insensitive first, raw values only break ties between case variants
        return (
            self.start_company.upper(),
            self.cargo_type.upper(),
            self.target_company.upper(),
            self.start_company,
            self.cargo_type,
            self.target_company,
        )


@dataclass(slots=True, kw_only=True)
class SuggestionResult:
    """Outcome of a query.

    ``start_city``/``target_city`` hold the resolved city names. A result with
    both set and no suggestions means the cities are known but no haul exists;
    an unset side comes with hints instead.
    """

    suggestions: list[RouteSuggestion] = field(default_factory=list["RouteSuggestion"])
    start_hints: list[str] = field(default_factory=list[str])
    target_hints: list[str] = field(default_factory=list[str])
    start_city: str | None = None
    target_city: str | None = None

    @property
    def resolved(self) -> bool:
        return self.start_city is not None and self.target_city is not None


class RouteRecommender:
    def __init__(
        self,
        repositories: CatalogRepositories,
        *,
        city_threshold: float = CITY_MATCH_THRESHOLD,
        hint_limit: int = HINT_LIMIT,
    ) -> None:
        self.repositories = repositories
        self.city_threshold = city_threshold
        self.hint_limit = hint_limit

    def suggest(self, start: str, target: str) -> SuggestionResult:
        cities = self.repositories.cities.list()
        start_city = self.resolve_city(cities, start)
        target_city = self.resolve_city(cities, target)

        if start_city is None or target_city is None:
            return SuggestionResult(
                start_hints=self.city_hints(cities, start) if start_city is None else [],
                target_hints=self.city_hints(cities, target) if target_city is None else [],
                start_city=start_city.name if start_city else None,
                target_city=target_city.name if target_city else None,
            )

        links = self.repositories.city_companies
        start_ids = list(dict.fromkeys(links.company_ids_for_city(start_city.id)))
        target_ids = list(dict.fromkeys(links.company_ids_for_city(target_city.id)))
        result = SuggestionResult(start_city=start_city.name, target_city=target_city.name)
        if not start_ids or not target_ids:
            log.debug("No companies in %s or %s", start_city.name, target_city.name)
            return result

        result.suggestions = self._join(start_ids, target_ids)
        return result

    def resolve_city(self, cities: Sequence[City], raw: str | None) -> City | None:
        """Exact case-insensitive match first, then the best fuzzy match above threshold."""

        if raw is None or not raw.strip():
            return None
        wanted = raw.strip().lower()
        for city in cities:
            if city.name.lower() == wanted:
                return city

        best: City | None = None
        best_score = -1.0
        for city in cities:
            city_score = score(raw, city.name)
            if city_score > best_score:
                best = city
                best_score = city_score
        if best is not None and best_score >= self.city_threshold:
            return best
        return None

    def city_hints(self, cities: Sequence[City], raw: str | None) -> list[str]:
        if raw is None or not raw.strip():
            return []
        ranked = sorted(cities, key=lambda city: -score(raw, city.name))
        return [city.name for city in ranked[: self.hint_limit]]

    def _join(self, start_ids: list[UUID], target_ids: list[UUID]) -> list[RouteSuggestion]:
        rules = self.repositories.cargo_rules
        out_rules = _group_by_company(
            rules.list_for_companies(start_ids, direction=CargoDirection.OUT)
        )
        in_rules = _group_by_company(
            rules.list_for_companies(target_ids, direction=CargoDirection.IN)
        )

        names: dict[UUID, str] = {}
        cargo_names: dict[UUID, str] = {}
        suggestions: set[RouteSuggestion] = set()
        for start_id in start_ids:
            shipped = {rule.cargo_type_id for rule in out_rules.get(start_id, ())}
            if not shipped:
                continue
            for target_id in target_ids:
                for rule in in_rules.get(target_id, ()):
                    if rule.cargo_type_id not in shipped:
                        continue
                    suggestions.add(
                        RouteSuggestion(
                            self._company_name(start_id, names),
                            self._cargo_name(rule.cargo_type_id, cargo_names),
                            self._company_name(target_id, names),
                        )
                    )
        return sorted(suggestions, key=RouteSuggestion.sort_key)

    def _company_name(self, company_id: UUID, cache: dict[UUID, str]) -> str:
        if company_id not in cache:
            company = self.repositories.companies.get(company_id)
            cache[company_id] = company.display if company else ""
        return cache[company_id]

    def _cargo_name(self, cargo_type_id: UUID, cache: dict[UUID, str]) -> str:
        if cargo_type_id not in cache:
            cargo = self.repositories.cargo_types.get(cargo_type_id)
            cache[cargo_type_id] = cargo.display if cargo else ""
        return cache[cargo_type_id]


def _group_by_company(rules: list[CompanyCargoRule]) -> dict[UUID, list[CompanyCargoRule]]:
    grouped: dict[UUID, list[CompanyCargoRule]] = {}
    for rule in rules:
        grouped.setdefault(rule.company_id, []).append(rule)
    return grouped
