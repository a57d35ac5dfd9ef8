"""Route recommendation between cities."""

from __future__ import annotations

from .recommend import (
    CITY_MATCH_THRESHOLD,
    HINT_LIMIT,
    RouteRecommender,
    RouteSuggestion,
    SuggestionResult,
)

__all__ = [
    "CITY_MATCH_THRESHOLD",
    "HINT_LIMIT",
    "RouteRecommender",
    "RouteSuggestion",
    "SuggestionResult",
]
