"""SQLAlchemy mapping metadata for the route planner catalog."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from routeplanner.domain.model import (
    CargoDirection,
    CargoType,
    City,
    CityCompany,
    CityCompanySource,
    Company,
    CompanyAlias,
    CompanyCargoRule,
    ImportLog,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables ---------------------------------------------------------------
# Foreign keys carry no ON DELETE rules; merges re-point or remove dependants.

city_table = Table(
    "city",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, index=True),
)

company_table = Table(
    "company",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("key", String, nullable=False, unique=True),
    Column("display_name", String, nullable=True),
    Column("is_unmapped", Boolean, nullable=False, default=False),
)

company_alias_table = Table(
    "company_alias",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("alias_key", String, nullable=False, unique=True),
    Column(
        "company_id", UUIDColumnType, ForeignKey("company.id"), nullable=False, index=True
    ),
    Column("source", String, nullable=False),
)

cargo_type_table = Table(
    "cargo_type",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("key", String, nullable=False, unique=True),
    Column("display_name", String, nullable=True),
)

company_cargo_rule_table = Table(
    "company_cargo_rule",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "company_id", UUIDColumnType, ForeignKey("company.id"), nullable=False, index=True
    ),
    Column("cargo_type_id", UUIDColumnType, ForeignKey("cargo_type.id"), nullable=False),
    Column("direction", Enum(CargoDirection, native_enum=False), nullable=False),
    UniqueConstraint("company_id", "cargo_type_id", "direction"),
)

city_company_table = Table(
    "city_company",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("city_id", UUIDColumnType, ForeignKey("city.id"), nullable=False),
    Column(
        "company_id", UUIDColumnType, ForeignKey("company.id"), nullable=False, index=True
    ),
    Column("source", Enum(CityCompanySource, native_enum=False), nullable=False),
    UniqueConstraint("city_id", "company_id"),
)

import_log_table = Table(
    "import_log",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("kind", String, nullable=False),
    Column("started_at", UTCDateTime(), nullable=False),
    Column("ended_at", UTCDateTime(), nullable=True),
    Column("success", Boolean, nullable=False, default=False),
    Column("message", Text, nullable=False, default=""),
)

# Dependants first, so deleting in this order never orphans a row.
PURGE_ORDER: tuple[Table, ...] = (
    city_company_table,
    company_cargo_rule_table,
    company_alias_table,
    company_table,
    cargo_type_table,
    city_table,
    import_log_table,
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(City, city_table)
    mapper_registry.map_imperatively(Company, company_table)
    mapper_registry.map_imperatively(CompanyAlias, company_alias_table)
    mapper_registry.map_imperatively(CargoType, cargo_type_table)
    mapper_registry.map_imperatively(CompanyCargoRule, company_cargo_rule_table)
    mapper_registry.map_imperatively(CityCompany, city_company_table)
    mapper_registry.map_imperatively(ImportLog, import_log_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
