"""Bounded, deterministic string similarity.

``score`` combines the normalized Levenshtein ratio with token-set overlap and
always lies in ``[0, 1]``. Comparisons are case-insensitive.
"""

from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_TOKEN_SEPARATORS = re.compile(r"[^a-z0-9]+")


def score(a: str | None, b: str | None) -> float:
    left = (a or "").lower()
    right = (b or "").lower()
    if left == right:
        return 1.0
    if not left.strip() or not right.strip():
        return 0.0

    longest = max(len(left), len(right))
    ratio = 1.0 - Levenshtein.distance(left, right) / longest
    return max(ratio, token_overlap(left, right))


def distance(a: str | None, b: str | None) -> int:
    """Levenshtein edit distance between the lowercased inputs."""

    return Levenshtein.distance((a or "").lower(), (b or "").lower())


def token_overlap(a: str | None, b: str | None) -> float:
    """Jaccard similarity of the token sets of ``a`` and ``b``."""

    left = tokens(a)
    right = tokens(b)
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def tokens(value: str | None) -> frozenset[str]:
    if not value:
        return frozenset()
    split = _CAMEL_BOUNDARY.sub(r"\1_\2", value).lower()
    return frozenset(part for part in _TOKEN_SEPARATORS.split(split) if part)
