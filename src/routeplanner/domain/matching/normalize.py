"""Canonical key derivation for company identifiers.

Keys are lowercase ``[a-z0-9_]`` strings with single underscores between words
and without trailing generic location words such as ``_depot`` or ``_market``.
"""

from __future__ import annotations

import re

GENERIC_SUFFIXES: tuple[str, ...] = (
    "depot",
    "factory",
    "warehouse",
    "storage",
    "market",
    "quarry",
    "site",
    "plant",
    "terminal",
)
# A suffix is only dropped when what remains is still distinctive on its own.
MIN_STEM_LENGTH = 4

_NON_KEY_CHARS = re.compile(r"[^a-z0-9 _]")
_UNDERSCORE_RUNS = re.compile(r"_+")


def normalize(raw: str | None) -> str:
    """Return the canonical key for ``raw``.

    >>> normalize("  Rostock Depot ")
    'rostock'
    >>> normalize("big_market")
    'big_market'
    """

    if raw is None:
        return ""
    text = raw.strip().lower()
    if not text:
        return ""

    text = _NON_KEY_CHARS.sub(" ", text)
    text = "_".join(text.split())
    text = _UNDERSCORE_RUNS.sub("_", text).strip("_")

    text = _strip_suffixes(text)
    if text in GENERIC_SUFFIXES:
        return ""
    return text


def simplify(raw: str | None) -> str:
    """Normalized key with the word separators removed."""

    return normalize(raw).replace("_", "")


def _strip_suffixes(text: str) -> str:
    changed = True
    while changed:
        changed = False
        for suffix in GENERIC_SUFFIXES:
            tail = f"_{suffix}"
            if not text.endswith(tail):
                continue
            stem = text[: -len(tail)]
            if _alnum_count(stem) >= MIN_STEM_LENGTH:
                text = stem
                changed = True
                break
    return text


def _alnum_count(text: str) -> int:
    return sum(1 for ch in text if ch.isalnum())
