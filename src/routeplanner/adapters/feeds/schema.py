"""Pydantic schemas for the extracted feed files of an import directory."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAP_EXPORT_FILENAME = "map_export.json"
DEFINITIONS_FILENAME = "definitions.json"


class FeedModel(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class MapCityPayload(FeedModel):
    name: str
    lat: float
    lon: float


class MapDepotPayload(FeedModel):
    name: str
    lat: float
    lon: float


class MapExportPayload(FeedModel):
    cities: list[MapCityPayload] = Field(default_factory=list[MapCityPayload])
    depots: list[MapDepotPayload] = Field(default_factory=list[MapDepotPayload])


class CargoRulePayload(FeedModel):
    company: str
    cargo: str
    direction: Literal["in", "out"]

    @field_validator("direction", mode="before")
    @classmethod
    def _lowercase_direction(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


class CityLinkPayload(FeedModel):
    company: str
    city: str


class DefinitionsPayload(FeedModel):
    cargo: list[str] = Field(default_factory=list[str])
    companies: list[str] = Field(default_factory=list[str])
    rules: list[CargoRulePayload] = Field(default_factory=list[CargoRulePayload])
    city_links: list[CityLinkPayload] = Field(default_factory=list[CityLinkPayload])
