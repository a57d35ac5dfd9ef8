"""Domain port definitions for adapters."""

from __future__ import annotations

from .feeds import FeedLoader
from .persistence import (
    CargoTypeRepository,
    CityCompanyRepository,
    CityRepository,
    CompanyAliasRepository,
    CompanyCargoRuleRepository,
    CompanyRepository,
    ImportLogRepository,
    Repository,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CargoTypeRepository",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "CityCompanyRepository",
    "CityRepository",
    "CompanyAliasRepository",
    "CompanyCargoRuleRepository",
    "CompanyRepository",
    "FeedLoader",
    "ImportLogRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
