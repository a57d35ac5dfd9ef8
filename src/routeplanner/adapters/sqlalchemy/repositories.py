"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from routeplanner.adapters.sqlalchemy.mappings import (
    cargo_type_table,
    city_company_table,
    city_table,
    company_alias_table,
    company_cargo_rule_table,
    company_table,
)
from routeplanner.domain.model import (
    CargoType,
    City,
    CityCompany,
    Company,
    CompanyAlias,
    CompanyCargoRule,
    ImportLog,
)

if TYPE_CHECKING:
    from collections.abc import Collection
    from uuid import UUID

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from routeplanner.domain.model import CargoDirection


class _SqlAlchemyRepository[TEntity]:
    """Shared add/count for one mapped table."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return int(self.session.execute(stmt).scalar_one())


class _ParentRowRepository[TEntity](_SqlAlchemyRepository[TEntity]):
    """Rows referenced by foreign keys.

    Nothing ties the mappers together with ``relationship()``, so the flush
    order between tables is not derived from the foreign keys. Parent rows are
    flushed on add and pending changes are flushed before a delete.
    """

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)
        self.session.flush()

    def remove(self, entity: TEntity) -> None:
        self.session.flush()
        self.session.delete(entity)
        self.session.flush()


class SqlAlchemyCityRepository(_ParentRowRepository[City]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, City, city_table)

    def get(self, city_id: UUID) -> City | None:
        return self.session.get(City, city_id)

    def find_by_name(self, name: str) -> City | None:
        stmt = (
            select(City)
            .where(func.lower(city_table.c.name) == name.strip().lower())
            .order_by(city_table.c.name)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list(self) -> list[City]:
        stmt = select(City).order_by(city_table.c.name)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyCompanyRepository(_ParentRowRepository[Company]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Company, company_table)

    def get(self, company_id: UUID) -> Company | None:
        return self.session.get(Company, company_id)

    def get_by_key(self, key: str) -> Company | None:
        stmt = select(Company).where(company_table.c.key == key)
        return self.session.execute(stmt).scalar_one_or_none()

    def list(self, *, unmapped: bool | None = None) -> list[Company]:
        stmt = select(Company).order_by(company_table.c.key)
        if unmapped is not None:
            stmt = stmt.where(company_table.c.is_unmapped == unmapped)
        return list(self.session.execute(stmt).scalars())

    def count_unmapped(self) -> int:
        stmt = (
            select(func.count())
            .select_from(company_table)
            .where(company_table.c.is_unmapped.is_(True))
        )
        return int(self.session.execute(stmt).scalar_one())


class SqlAlchemyCompanyAliasRepository(_SqlAlchemyRepository[CompanyAlias]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, CompanyAlias, company_alias_table)

    def get_by_key(self, alias_key: str) -> CompanyAlias | None:
        stmt = select(CompanyAlias).where(company_alias_table.c.alias_key == alias_key)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_company(self, company_id: UUID) -> list[CompanyAlias]:
        stmt = (
            select(CompanyAlias)
            .where(company_alias_table.c.company_id == company_id)
            .order_by(company_alias_table.c.alias_key)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyCargoTypeRepository(_ParentRowRepository[CargoType]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, CargoType, cargo_type_table)

    def get(self, cargo_type_id: UUID) -> CargoType | None:
        return self.session.get(CargoType, cargo_type_id)

    def get_by_key(self, key: str) -> CargoType | None:
        stmt = select(CargoType).where(cargo_type_table.c.key == key)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyCompanyCargoRuleRepository(_SqlAlchemyRepository[CompanyCargoRule]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, CompanyCargoRule, company_cargo_rule_table)

    def exists(self, *, company_id: UUID, cargo_type_id: UUID, direction: CargoDirection) -> bool:
        stmt = (
            select(company_cargo_rule_table.c.id)
            .where(company_cargo_rule_table.c.company_id == company_id)
            .where(company_cargo_rule_table.c.cargo_type_id == cargo_type_id)
            .where(company_cargo_rule_table.c.direction == direction)
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def count_for_company(self, company_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(company_cargo_rule_table)
            .where(company_cargo_rule_table.c.company_id == company_id)
        )
        return int(self.session.execute(stmt).scalar_one())

    def list_for_companies(
        self, company_ids: Collection[UUID], *, direction: CargoDirection
    ) -> list[CompanyCargoRule]:
        if not company_ids:
            return []
        stmt = (
            select(CompanyCargoRule)
            .where(company_cargo_rule_table.c.company_id.in_(list(company_ids)))
            .where(company_cargo_rule_table.c.direction == direction)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyCityCompanyRepository(_SqlAlchemyRepository[CityCompany]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, CityCompany, city_company_table)

    def exists(self, *, city_id: UUID, company_id: UUID) -> bool:
        stmt = (
            select(city_company_table.c.id)
            .where(city_company_table.c.city_id == city_id)
            .where(city_company_table.c.company_id == company_id)
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def list_for_company(self, company_id: UUID) -> list[CityCompany]:
        stmt = select(CityCompany).where(city_company_table.c.company_id == company_id)
        return list(self.session.execute(stmt).scalars())

    def company_ids_for_city(self, city_id: UUID) -> list[UUID]:
        stmt = (
            select(city_company_table.c.company_id)
            .where(city_company_table.c.city_id == city_id)
            .distinct()
        )
        return list(self.session.execute(stmt).scalars())

    def remove(self, link: CityCompany) -> None:
        self.session.delete(link)


class SqlAlchemyImportLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: ImportLog) -> None:
        self.session.add(entity)

    def get(self, log_id: UUID) -> ImportLog | None:
        return self.session.get(ImportLog, log_id)
