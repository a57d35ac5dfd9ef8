"""Pure string and geometry helpers used to identify companies and cities."""

from __future__ import annotations

from .fuzzy import distance, score, token_overlap, tokens
from .geo import DEFAULT_RADIUS_KM, EARTH_RADIUS_KM, haversine_km, nearest_city
from .normalize import GENERIC_SUFFIXES, normalize, simplify

__all__ = [
    "DEFAULT_RADIUS_KM",
    "EARTH_RADIUS_KM",
    "GENERIC_SUFFIXES",
    "distance",
    "haversine_km",
    "nearest_city",
    "normalize",
    "score",
    "simplify",
    "token_overlap",
    "tokens",
]
