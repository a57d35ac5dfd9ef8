"""Domain model for the route planner catalog."""

from __future__ import annotations

from .audit import ImportLog
from .base import Entity, new_id
from .catalog import CargoType, City, CityCompany, Company, CompanyAlias, CompanyCargoRule
from .enums import AliasSource, CargoDirection, CityCompanySource

__all__ = [
    "AliasSource",
    "CargoDirection",
    "CargoType",
    "City",
    "CityCompany",
    "CityCompanySource",
    "Company",
    "CompanyAlias",
    "CompanyCargoRule",
    "Entity",
    "ImportLog",
    "new_id",
]
