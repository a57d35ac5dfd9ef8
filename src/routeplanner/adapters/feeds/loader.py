"""Read the feed files of an import directory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from routeplanner.domain.errors import FeedFormatError, ImportSourceError
from routeplanner.domain.feeds import ImportBundle, MapFeed

from .schema import (
    DEFINITIONS_FILENAME,
    MAP_EXPORT_FILENAME,
    DefinitionsPayload,
    MapExportPayload,
)
from .translator import translate_definitions, translate_map_export

if TYPE_CHECKING:
    from pathlib import Path

log = logging.getLogger(__name__)


def load_import_bundle(source_dir: Path) -> ImportBundle:
    """Load ``map_export.json`` (optional) and ``definitions.json`` (required)."""

    if not source_dir.is_dir():
        raise ImportSourceError(f"Import directory does not exist: {source_dir}", path=source_dir)

    definitions_path = source_dir / DEFINITIONS_FILENAME
    if not definitions_path.is_file():
        raise ImportSourceError(
            f"Invalid import directory. Missing required '{DEFINITIONS_FILENAME}' in "
            f"'{source_dir}'.",
            path=definitions_path,
        )

    map_path = source_dir / MAP_EXPORT_FILENAME
    if map_path.is_file():
        map_feed = translate_map_export(_read(map_path, MapExportPayload))
    else:
        log.info("No %s in %s; continuing without map data", MAP_EXPORT_FILENAME, source_dir)
        map_feed = MapFeed()

    definitions = translate_definitions(_read(definitions_path, DefinitionsPayload))
    return ImportBundle(source_dir=source_dir, map_feed=map_feed, definitions=definitions)


def _read[TModel: BaseModel](path: Path, model: type[TModel]) -> TModel:
    try:
        return model.model_validate_json(path.read_bytes())
    except ValidationError as exc:
        raise FeedFormatError(f"Malformed feed file {path.name}: {exc}", path=path) from exc
