"""Validated feed records handed from the feed adapter to the import stages.

The adapter has already lowercased company and cargo keys and cleaned up city
names; the stages only normalize company keys further.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from routeplanner.domain.model import CargoDirection


@dataclass(slots=True, frozen=True, kw_only=True)
class CityPoint:
    name: str
    lat: float
    lon: float


@dataclass(slots=True, frozen=True, kw_only=True)
class DepotPoint:
    name: str
    lat: float
    lon: float


@dataclass(slots=True, kw_only=True)
class MapFeed:
    cities: list[CityPoint] = field(default_factory=list["CityPoint"])
    depots: list[DepotPoint] = field(default_factory=list["DepotPoint"])


@dataclass(slots=True, frozen=True, kw_only=True)
class CargoRuleRecord:
    company_key: str
    cargo_key: str
    direction: CargoDirection


@dataclass(slots=True, frozen=True, kw_only=True)
class CompanyCityLink:
    company_key: str
    city_name: str


@dataclass(slots=True, kw_only=True)
class DefinitionFeed:
    cargo_keys: list[str] = field(default_factory=list[str])
    company_keys: list[str] = field(default_factory=list[str])
    rules: list[CargoRuleRecord] = field(default_factory=list["CargoRuleRecord"])
    city_links: list[CompanyCityLink] = field(default_factory=list["CompanyCityLink"])


@dataclass(slots=True, kw_only=True)
class ImportBundle:
    """Everything read from one import directory."""

    source_dir: Path
    map_feed: MapFeed
    definitions: DefinitionFeed
