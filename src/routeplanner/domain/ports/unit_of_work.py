"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from routeplanner.domain.ports.persistence import (
        CargoTypeRepository,
        CityCompanyRepository,
        CityRepository,
        CompanyAliasRepository,
        CompanyCargoRuleRepository,
        CompanyRepository,
        ImportLogRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def purge(self) -> None:
        """Delete every catalog row (not committed until ``commit``)."""
        ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Repositories for the company/city/cargo catalog."""

    cities: CityRepository
    companies: CompanyRepository
    aliases: CompanyAliasRepository
    cargo_types: CargoTypeRepository
    cargo_rules: CompanyCargoRuleRepository
    city_companies: CityCompanyRepository
    import_logs: ImportLogRepository


type CatalogUnitOfWork = UnitOfWork[CatalogRepositories]
