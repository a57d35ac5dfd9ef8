"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import text

from routeplanner.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
from routeplanner.domain.model import CargoDirection, CityCompanySource, ImportLog
from tests.helpers.catalog import add_cargo, add_city, add_company, add_rule, link

if TYPE_CHECKING:
    from collections.abc import Callable


def test_city_lookup_is_case_insensitive(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        rostock = add_city(uow.repositories, "Rostock")
        add_city(uow.repositories, "Berlin")

        assert uow.repositories.cities.find_by_name("  ROSTOCK ") is rostock
        assert uow.repositories.cities.find_by_name("Hamburg") is None
        assert uow.repositories.cities.get(rostock.id) is rostock
        assert [city.name for city in uow.repositories.cities.list()] == ["Berlin", "Rostock"]


def test_company_listing_filters_by_mapping_state(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        companies = uow.repositories.companies
        add_company(uow.repositories, "zulu")
        add_company(uow.repositories, "alpha", unmapped=True)
        add_company(uow.repositories, "mike", unmapped=True)

        assert [company.key for company in companies.list()] == ["alpha", "mike", "zulu"]
        assert [company.key for company in companies.list(unmapped=True)] == ["alpha", "mike"]
        assert [company.key for company in companies.list(unmapped=False)] == ["zulu"]
        assert companies.count_unmapped() == 2
        assert companies.get_by_key("mike") is not None
        assert companies.get_by_key("november") is None


def test_aliases_listed_per_company(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        company = add_company(uow.repositories, "bau_mart")
        other = add_company(uow.repositories, "kieswerk")

        aliases = uow.repositories.aliases.list_for_company(company.id)

        assert [alias.alias_key for alias in aliases] == ["bau_mart"]
        assert uow.repositories.aliases.get_by_key("kieswerk") is not None
        assert uow.repositories.aliases.list_for_company(other.id)[0].company_id == other.id


def test_cargo_rules_filtered_by_company_and_direction(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        repos = uow.repositories
        steel = add_cargo(repos, "steel")
        lumber = add_cargo(repos, "lumber")
        a = add_company(repos, "a")
        b = add_company(repos, "b")
        add_rule(repos, a, steel, CargoDirection.OUT)
        add_rule(repos, a, lumber, CargoDirection.IN)
        add_rule(repos, b, steel, CargoDirection.OUT)
        uow.commit()

        rules = repos.cargo_rules
        assert rules.exists(company_id=a.id, cargo_type_id=steel.id, direction=CargoDirection.OUT)
        assert not rules.exists(
            company_id=a.id, cargo_type_id=steel.id, direction=CargoDirection.IN
        )
        assert rules.count_for_company(a.id) == 2
        outgoing = rules.list_for_companies([a.id, b.id], direction=CargoDirection.OUT)
        assert {(rule.company_id, rule.cargo_type_id) for rule in outgoing} == {
            (a.id, steel.id),
            (b.id, steel.id),
        }
        assert rules.list_for_companies([], direction=CargoDirection.IN) == []
        assert repos.cargo_types.get_by_key("lumber") is lumber


def test_enums_are_stored_by_name(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        repos = uow.repositories
        city = add_city(repos, "Rostock")
        company = add_company(repos, "a")
        add_rule(repos, company, add_cargo(repos, "steel"), CargoDirection.OUT)
        link(repos, city, company, CityCompanySource.MANUAL)
        uow.commit()

        direction = uow.session.execute(text("SELECT direction FROM company_cargo_rule"))
        source = uow.session.execute(text("SELECT source FROM city_company"))
        assert direction.scalar_one() == "OUT"
        assert source.scalar_one() == "MANUAL"


def test_city_links(sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork]) -> None:
    with sqlite_unit_of_work() as uow:
        repos = uow.repositories
        rostock = add_city(repos, "Rostock")
        berlin = add_city(repos, "Berlin")
        company = add_company(repos, "a")
        entry = link(repos, rostock, company)
        link(repos, berlin, company)

        assert repos.city_companies.exists(city_id=rostock.id, company_id=company.id)
        assert repos.city_companies.company_ids_for_city(rostock.id) == [company.id]
        assert len(repos.city_companies.list_for_company(company.id)) == 2

        repos.city_companies.remove(entry)

        assert not repos.city_companies.exists(city_id=rostock.id, company_id=company.id)
        assert repos.city_companies.count() == 1


def test_import_log_round_trip_keeps_utc(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    started = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)
    with sqlite_unit_of_work() as uow:
        entry = ImportLog(kind="full", started_at=started)
        uow.repositories.import_logs.add(entry)
        uow.commit()
        entry_id = entry.id

    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.import_logs.get(entry_id)
        assert stored is not None
        assert stored.started_at == started
        assert stored.started_at.tzinfo is not None
        assert stored.ended_at is None
        assert stored.success is False
