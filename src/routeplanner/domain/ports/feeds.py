"""Port for reading feed files from an import directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from routeplanner.domain.feeds import ImportBundle


class FeedLoader(Protocol):
    """Read and validate the feeds found in ``source_dir``.

    Implementations raise ``ImportSourceError`` for missing inputs and
    ``FeedFormatError`` for malformed ones.
    """

    def __call__(self, source_dir: Path) -> ImportBundle: ...
