"""Import stages: map feed, definitions and reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from routeplanner.domain.matching import nearest_city, normalize
from routeplanner.domain.model import (
    AliasSource,
    CargoType,
    City,
    CityCompany,
    CityCompanySource,
    Company,
    CompanyAlias,
    CompanyCargoRule,
)
from routeplanner.domain.reconciliation import merge_into, reconcile

if TYPE_CHECKING:
    from uuid import UUID

    from routeplanner.domain.feeds import ImportBundle
    from routeplanner.domain.ports import CatalogRepositories

    from .context import ImportContext, ImportCounters

log = logging.getLogger(__name__)


def city_lookup_key(name: str) -> str:
    return name.strip().lower()


@dataclass(slots=True)
class _CatalogIndex:
    """Per-stage lookups over rows already in the store or added in this stage."""

    repositories: CatalogRepositories
    counters: ImportCounters
    cities: dict[str, City] = field(default_factory=dict[str, City])
    links: set[tuple[UUID, UUID]] = field(default_factory=set[tuple["UUID", "UUID"]])

    @classmethod
    def load(cls, repositories: CatalogRepositories, counters: ImportCounters) -> _CatalogIndex:
        index = cls(repositories, counters)
        for city in repositories.cities.list():
            index.cities.setdefault(city_lookup_key(city.name), city)
        return index

    def ensure_city(self, name: str) -> City | None:
        key = city_lookup_key(name)
        if not key:
            return None
        city = self.cities.get(key)
        if city is None:
            city = City(name=name.strip())
            self.repositories.cities.add(city)
            self.cities[key] = city
            self.counters.cities_added += 1
        return city

    def find_company(self, key: str) -> Company | None:
        """Company with ``key``, else the company an alias with that key points at."""

        company = self.repositories.companies.get_by_key(key)
        if company is not None:
            return company
        alias = self.repositories.aliases.get_by_key(key)
        if alias is None:
            return None
        return self.repositories.companies.get(alias.company_id)

    def create_company(
        self, key: str, *, display_name: str, is_unmapped: bool, alias_source: AliasSource
    ) -> Company:
        company = Company(key=key, display_name=display_name, is_unmapped=is_unmapped)
        self.repositories.companies.add(company)
        self.counters.companies_added += 1
        if self.repositories.aliases.get_by_key(key) is None:
            self.repositories.aliases.add(
                CompanyAlias(alias_key=key, company_id=company.id, source=alias_source)
            )
            self.counters.aliases_added += 1
        return company

    def link(self, city: City, company: Company, source: CityCompanySource) -> None:
        pair = (city.id, company.id)
        if pair in self.links:
            return
        self.links.add(pair)
        if self.repositories.city_companies.exists(city_id=city.id, company_id=company.id):
            return
        self.repositories.city_companies.add(
            CityCompany(city_id=city.id, company_id=company.id, source=source)
        )
        self.counters.links_added += 1


@dataclass(slots=True)
class MapFeedStage:
    """Cities and depots from the map export; depots become unmapped companies."""

    name: str = "map_feed"

    def run(self, bundle: ImportBundle, *, context: ImportContext) -> None:
        feed = bundle.map_feed
        context.report(
            f"Importing map feed: {len(feed.cities)} cities, {len(feed.depots)} depots"
        )
        with context.uow_factory() as uow:
            index = _CatalogIndex.load(uow.repositories, context.counters)
            for city_point in feed.cities:
                index.ensure_city(city_point.name)

            for depot in feed.depots:
                key = normalize(depot.name)
                if not key:
                    context.counters.depots_skipped += 1
                    continue
                point = nearest_city(depot.lat, depot.lon, feed.cities, context.depot_radius_km)
                city = index.ensure_city(point.name) if point is not None else None
                if city is None:
                    log.debug("No city within %.1f km of depot %s", context.depot_radius_km, key)
                    context.counters.depots_skipped += 1
                    continue
                company = index.find_company(key) or index.create_company(
                    key,
                    display_name=depot.name.strip(),
                    is_unmapped=True,
                    alias_source=AliasSource.MAP_FEED,
                )
                index.link(city, company, CityCompanySource.MAP_FEED)
            uow.commit()


@dataclass(slots=True)
class DefinitionStage:
    """Authoritative companies, cargo types, cargo rules and city links."""

    name: str = "definitions"

    def run(self, bundle: ImportBundle, *, context: ImportContext) -> None:
        feed = bundle.definitions
        counters = context.counters
        context.report(
            f"Importing definitions: {len(feed.company_keys)} companies, "
            f"{len(feed.cargo_keys)} cargo types, {len(feed.rules)} rules"
        )
        with context.uow_factory() as uow:
            repositories = uow.repositories
            index = _CatalogIndex.load(repositories, counters)
            for link in feed.city_links:
                index.ensure_city(link.city_name)

            companies: dict[str, Company] = {}
            for key in _company_keys(bundle):
                company = repositories.companies.get_by_key(key)
                if company is None:
                    company = index.create_company(
                        key,
                        display_name=key,
                        is_unmapped=False,
                        alias_source=AliasSource.DEFINITIONS,
                    )
                else:
                    company.is_unmapped = False
                    if not company.display_name:
                        company.display_name = key
                companies[key] = company

            cargo_types: dict[str, CargoType] = {}
            for key in dict.fromkeys(feed.cargo_keys):
                cargo = repositories.cargo_types.get_by_key(key)
                if cargo is None:
                    cargo = CargoType(key=key, display_name=key)
                    repositories.cargo_types.add(cargo)
                    counters.cargo_types_added += 1
                cargo_types[key] = cargo

            seen_rules: set[tuple[UUID, UUID, str]] = set()
            for record in feed.rules:
                company = companies.get(record.company_key)
                cargo = cargo_types.get(record.cargo_key)
                if company is None or cargo is None:
                    counters.records_skipped += 1
                    continue
                triple = (company.id, cargo.id, record.direction)
                if triple in seen_rules:
                    continue
                seen_rules.add(triple)
                if repositories.cargo_rules.exists(
                    company_id=company.id, cargo_type_id=cargo.id, direction=record.direction
                ):
                    continue
                repositories.cargo_rules.add(
                    CompanyCargoRule(
                        company_id=company.id, cargo_type_id=cargo.id, direction=record.direction
                    )
                )
                counters.rules_added += 1

            for link in feed.city_links:
                city = index.cities.get(city_lookup_key(link.city_name))
                company = companies.get(link.company_key)
                if city is None or company is None:
                    counters.records_skipped += 1
                    continue
                index.link(city, company, CityCompanySource.MAP_FEED)
            uow.commit()


@dataclass(slots=True)
class ReconcileStage:
    """Fold unmapped companies into their best authoritative match."""

    name: str = "reconcile"

    def run(self, bundle: ImportBundle, *, context: ImportContext) -> None:
        _ = bundle
        with context.uow_factory() as uow:
            repositories = uow.repositories
            decisions = reconcile(
                repositories.companies.list(unmapped=False),
                repositories.companies.list(unmapped=True),
                policy=context.merge_policy,
            )
            context.report(f"Reconciling companies: {len(decisions)} merges planned")
            for decision in decisions:
                outcome = merge_into(
                    repositories,
                    decision.source_id,
                    decision.target_id,
                    provenance=AliasSource.RECONCILE,
                )
                if outcome is None:
                    continue
                context.counters.merges += 1
                if outcome.source_removed:
                    context.counters.companies_removed += 1
                context.report(
                    f"Reconciled alias '{decision.source_key}' -> '{decision.target_key}' "
                    f"(score={decision.score:.2f}, distance={decision.distance})"
                )
            uow.commit()


def _company_keys(bundle: ImportBundle) -> list[str]:
    feed = bundle.definitions
    keys = [
        *feed.company_keys,
        *(rule.company_key for rule in feed.rules),
        *(link.company_key for link in feed.city_links),
    ]
    return [key for key in dict.fromkeys(keys) if key]
