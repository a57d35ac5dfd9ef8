"""Ports for persisting catalog rows.

Repositories expose additions, equality lookups, existence checks and counts.
Anything smarter (fuzzy lookups, joins across relations) is done in the domain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection
    from uuid import UUID

    from routeplanner.domain.model import (
        CargoDirection,
        CargoType,
        City,
        CityCompany,
        Company,
        CompanyAlias,
        CompanyCargoRule,
        ImportLog,
    )


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent store."""

    def add(self, entity: TEntity) -> None: ...

    def count(self) -> int: ...


@runtime_checkable
class CityRepository(Repository["City"], Protocol):
    def get(self, city_id: UUID) -> City | None: ...

    def find_by_name(self, name: str) -> City | None:
        """Case-insensitive exact lookup."""
        ...

    def list(self) -> list[City]: ...


@runtime_checkable
class CompanyRepository(Repository["Company"], Protocol):
    def get(self, company_id: UUID) -> Company | None: ...

    def get_by_key(self, key: str) -> Company | None: ...

    def list(self, *, unmapped: bool | None = None) -> list[Company]:
        """All companies, optionally filtered on ``is_unmapped``, ordered by key."""
        ...

    def count_unmapped(self) -> int: ...

    def remove(self, company: Company) -> None: ...


@runtime_checkable
class CompanyAliasRepository(Repository["CompanyAlias"], Protocol):
    def get_by_key(self, alias_key: str) -> CompanyAlias | None: ...

    def list_for_company(self, company_id: UUID) -> list[CompanyAlias]: ...


@runtime_checkable
class CargoTypeRepository(Repository["CargoType"], Protocol):
    def get(self, cargo_type_id: UUID) -> CargoType | None: ...

    def get_by_key(self, key: str) -> CargoType | None: ...


@runtime_checkable
class CompanyCargoRuleRepository(Repository["CompanyCargoRule"], Protocol):
    def exists(
        self, *, company_id: UUID, cargo_type_id: UUID, direction: CargoDirection
    ) -> bool: ...

    def count_for_company(self, company_id: UUID) -> int: ...

    def list_for_companies(
        self, company_ids: Collection[UUID], *, direction: CargoDirection
    ) -> list[CompanyCargoRule]: ...


@runtime_checkable
class CityCompanyRepository(Repository["CityCompany"], Protocol):
    def exists(self, *, city_id: UUID, company_id: UUID) -> bool: ...

    def list_for_company(self, company_id: UUID) -> list[CityCompany]: ...

    def company_ids_for_city(self, city_id: UUID) -> list[UUID]: ...

    def remove(self, link: CityCompany) -> None: ...


@runtime_checkable
class ImportLogRepository(Protocol):
    def add(self, entity: ImportLog) -> None: ...

    def get(self, log_id: UUID) -> ImportLog | None: ...
