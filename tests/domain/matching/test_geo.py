from __future__ import annotations

import pytest

from routeplanner.domain.feeds import CityPoint
from routeplanner.domain.matching import haversine_km, nearest_city

ROSTOCK = CityPoint(name="Rostock", lat=54.0924, lon=12.0991)
BERLIN = CityPoint(name="Berlin", lat=52.5200, lon=13.4050)


def test_haversine_known_distance() -> None:
    assert haversine_km(ROSTOCK.lat, ROSTOCK.lon, BERLIN.lat, BERLIN.lon) == pytest.approx(
        195, abs=3
    )
    assert haversine_km(1.0, 2.0, 1.0, 2.0) == 0.0


def test_nearest_city_within_radius() -> None:
    assert nearest_city(54.10, 12.11, [BERLIN, ROSTOCK]) is ROSTOCK


def test_nearest_city_outside_radius_is_none() -> None:
    assert nearest_city(10.0, 10.0, [BERLIN, ROSTOCK]) is None
    assert nearest_city(54.10, 12.11, [ROSTOCK], radius_km=0.1) is None


def test_nearest_city_empty_candidates() -> None:
    assert nearest_city(54.10, 12.11, []) is None


def test_ties_go_to_first_candidate() -> None:
    twin = CityPoint(name="Rostock Twin", lat=ROSTOCK.lat, lon=ROSTOCK.lon)

    assert nearest_city(ROSTOCK.lat, ROSTOCK.lon, [ROSTOCK, twin]) is ROSTOCK
    assert nearest_city(ROSTOCK.lat, ROSTOCK.lon, [twin, ROSTOCK]) is twin
