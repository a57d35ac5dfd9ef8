"""Translate validated feed payloads into domain feed records."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from routeplanner.domain.feeds import (
    CargoRuleRecord,
    CityPoint,
    CompanyCityLink,
    DefinitionFeed,
    DepotPoint,
    MapFeed,
)
from routeplanner.domain.model import CargoDirection

if TYPE_CHECKING:
    from .schema import DefinitionsPayload, MapExportPayload

log = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def company_key(raw: str) -> str:
    return raw.strip().lower()


def cargo_key(raw: str) -> str:
    """Lowercased key; dotted identifiers such as ``cargo.steel`` keep their last segment."""

    key = raw.strip().lower()
    if "." in key:
        key = key.rsplit(".", 1)[-1]
    return key


def city_name(raw: str) -> str:
    return _WHITESPACE.sub(" ", raw.replace("_", " ")).strip()


def translate_map_export(payload: MapExportPayload) -> MapFeed:
    cities = [
        CityPoint(name=city_name(city.name), lat=city.lat, lon=city.lon)
        for city in payload.cities
        if city_name(city.name)
    ]
    depots = [
        DepotPoint(name=depot.name, lat=depot.lat, lon=depot.lon)
        for depot in payload.depots
        if depot.name
    ]
    return MapFeed(cities=cities, depots=depots)


def translate_definitions(payload: DefinitionsPayload) -> DefinitionFeed:
    feed = DefinitionFeed(
        cargo_keys=[key for key in (cargo_key(raw) for raw in payload.cargo) if key],
        company_keys=[key for key in (company_key(raw) for raw in payload.companies) if key],
    )
    for rule in payload.rules:
        record = CargoRuleRecord(
            company_key=company_key(rule.company),
            cargo_key=cargo_key(rule.cargo),
            direction=CargoDirection(rule.direction),
        )
        if not record.company_key or not record.cargo_key:
            log.debug("Skipping incomplete cargo rule %r", rule)
            continue
        feed.rules.append(record)
    for link in payload.city_links:
        record = CompanyCityLink(
            company_key=company_key(link.company), city_name=city_name(link.city)
        )
        if not record.company_key or not record.city_name:
            log.debug("Skipping incomplete city link %r", link)
            continue
        feed.city_links.append(record)
    return feed
