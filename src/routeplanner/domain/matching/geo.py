"""Nearest-city lookup for depot coordinates."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from routeplanner.domain.feeds import CityPoint

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 25.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def nearest_city(
    lat: float,
    lon: float,
    cities: Iterable[CityPoint],
    radius_km: float = DEFAULT_RADIUS_KM,
) -> CityPoint | None:
    """Return the closest city within ``radius_km``, or ``None``.

    Ties keep the first city in input order.
    """

    best: CityPoint | None = None
    best_distance = math.inf
    for city in cities:
        km = haversine_km(lat, lon, city.lat, city.lon)
        if km < best_distance:
            best = city
            best_distance = km
    if best is None or best_distance > radius_km:
        return None
    return best
