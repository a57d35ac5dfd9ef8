"""Feed file adapter: JSON feeds of an extracted import directory."""

from __future__ import annotations

from .loader import load_import_bundle
from .schema import DEFINITIONS_FILENAME, MAP_EXPORT_FILENAME, DefinitionsPayload, MapExportPayload
from .translator import (
    cargo_key,
    city_name,
    company_key,
    translate_definitions,
    translate_map_export,
)

__all__ = [
    "DEFINITIONS_FILENAME",
    "MAP_EXPORT_FILENAME",
    "DefinitionsPayload",
    "MapExportPayload",
    "cargo_key",
    "city_name",
    "company_key",
    "load_import_bundle",
    "translate_definitions",
    "translate_map_export",
]
