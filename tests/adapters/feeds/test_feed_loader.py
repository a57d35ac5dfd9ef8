from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from routeplanner.adapters.feeds import load_import_bundle
from routeplanner.domain.errors import FeedFormatError, ImportSourceError
from tests.helpers.catalog import SAMPLE_DEFINITIONS, SAMPLE_MAP_EXPORT, write_feeds

if TYPE_CHECKING:
    from pathlib import Path


def test_loads_both_feeds(tmp_path: Path) -> None:
    source = write_feeds(tmp_path, definitions=SAMPLE_DEFINITIONS, map_export=SAMPLE_MAP_EXPORT)

    bundle = load_import_bundle(source)

    assert bundle.source_dir == source
    assert [city.name for city in bundle.map_feed.cities] == ["Rostock", "Berlin"]
    assert len(bundle.map_feed.depots) == 3
    assert bundle.definitions.cargo_keys == ["steel", "lumber"]
    assert bundle.definitions.company_keys == ["stahlwerk", "bau_mart"]
    assert len(bundle.definitions.rules) == 3


def test_map_export_is_optional(tmp_path: Path) -> None:
    source = write_feeds(tmp_path, definitions=SAMPLE_DEFINITIONS)

    bundle = load_import_bundle(source)

    assert bundle.map_feed.cities == []
    assert bundle.map_feed.depots == []


def test_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "nope"

    with pytest.raises(ImportSourceError) as excinfo:
        load_import_bundle(missing)

    assert excinfo.value.path == missing


def test_missing_definitions(tmp_path: Path) -> None:
    source = write_feeds(tmp_path, map_export=SAMPLE_MAP_EXPORT)

    with pytest.raises(ImportSourceError, match="definitions.json"):
        load_import_bundle(source)


def test_malformed_json_is_a_format_error(tmp_path: Path) -> None:
    (tmp_path / "definitions.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(FeedFormatError) as excinfo:
        load_import_bundle(tmp_path)

    assert excinfo.value.path == tmp_path / "definitions.json"


def test_schema_violation_is_a_format_error(tmp_path: Path) -> None:
    source = write_feeds(
        tmp_path,
        definitions=SAMPLE_DEFINITIONS,
        map_export={"cities": [{"name": "Rostock", "lat": "north", "lon": 12.0}]},
    )

    with pytest.raises(FeedFormatError, match="map_export.json"):
        load_import_bundle(source)
