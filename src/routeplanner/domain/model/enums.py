"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CargoDirection(StrEnum):
    IN = "in"
    OUT = "out"


class CityCompanySource(StrEnum):
    MAP_FEED = "map_feed"
    MANUAL = "manual"


class AliasSource(StrEnum):
    """Provenance tags written on ``CompanyAlias.source``."""

    MAP_FEED = "map_feed"
    DEFINITIONS = "definitions"
    RECONCILE = "reconcile"
    MANUAL = "manual"
