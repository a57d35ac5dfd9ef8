"""Cities, companies, cargo and the relations between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from routeplanner.domain.model.base import Entity
from routeplanner.domain.model.enums import CargoDirection, CityCompanySource

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class City(Entity):
    name: str


@dataclass(eq=False, kw_only=True)
class Company(Entity):
    """A cargo depot operator.

    ``key`` is the normalized identifier derived from upstream data and never
    changes once assigned. ``is_unmapped`` marks companies known only from the
    map feed that have not been linked to a definition-sourced company yet.
    """

    key: str
    display_name: str | None = None
    is_unmapped: bool = False

    @property
    def display(self) -> str:
        return self.display_name or self.key


@dataclass(eq=False, kw_only=True)
class CompanyAlias(Entity):
    """Any key ever observed for a company, pointing at its current canonical row."""

    alias_key: str
    company_id: UUID
    source: str

    def repoint(self, company_id: UUID, *, source: str) -> None:
        self.company_id = company_id
        self.source = source


@dataclass(eq=False, kw_only=True)
class CargoType(Entity):
    key: str
    display_name: str | None = None

    @property
    def display(self) -> str:
        return self.display_name or self.key


@dataclass(eq=False, kw_only=True)
class CompanyCargoRule(Entity):
    company_id: UUID
    cargo_type_id: UUID
    direction: CargoDirection


@dataclass(eq=False, kw_only=True)
class CityCompany(Entity):
    city_id: UUID
    company_id: UUID
    source: CityCompanySource = CityCompanySource.MAP_FEED
