"""SQLAlchemy adapter package for the route planner."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCargoTypeRepository,
    SqlAlchemyCityCompanyRepository,
    SqlAlchemyCityRepository,
    SqlAlchemyCompanyAliasRepository,
    SqlAlchemyCompanyCargoRuleRepository,
    SqlAlchemyCompanyRepository,
    SqlAlchemyImportLogRepository,
)
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCargoTypeRepository",
    "SqlAlchemyCityCompanyRepository",
    "SqlAlchemyCityRepository",
    "SqlAlchemyCompanyAliasRepository",
    "SqlAlchemyCompanyCargoRuleRepository",
    "SqlAlchemyCompanyRepository",
    "SqlAlchemyImportLogRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
