"""Pydantic models for external service payloads.

Nominatim returns a JSON array of search hits with coordinates encoded
as strings; Overpass returns a flat list of ``node`` and ``way``
elements where ways reference nodes by id. Unknown fields are ignored
so additive API changes do not break parsing.

Coordinates are range-checked here, at parse time, so a malformed hit
surfaces as a ``pydantic.ValidationError`` (and from the providers as
``ProviderResponseError``) rather than later as a ``GeoPoint`` error.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roof_measure.models.geo_point import GeoPoint


def _check_degrees(value: float, bound: float, name: str) -> float:
    if not math.isfinite(value):
        msg = f"{name} must be finite, got {value}"
        raise ValueError(msg)
    if not -bound <= value <= bound:
        msg = f"{name} {value} is outside [-{bound:g}, {bound:g}]"
        raise ValueError(msg)
    return value


def _parse_degrees(text: str, bound: float, name: str) -> float:
    try:
        value = float(text)
    except ValueError as exc:
        msg = f"{name} is not a number: {text!r}"
        raise ValueError(msg) from exc
    return _check_degrees(value, bound, name)


class SearchResult(BaseModel):
    """A single Nominatim search hit.

    Attributes:
        lat: Latitude as returned by Nominatim (string).
        lon: Longitude as returned by Nominatim (string).
        display_name: Full human-readable address.
        place_id: Nominatim place identifier.
        boundingbox: ``[south, north, west, east]`` as strings.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    lat: str
    lon: str
    display_name: str = ""
    place_id: str = ""
    boundingbox: list[str] = Field(default_factory=list)

    @field_validator("lat")
    @classmethod
    def _lat_in_range(cls, value: str) -> str:
        _parse_degrees(value, 90.0, "Latitude")
        return value

    @field_validator("lon")
    @classmethod
    def _lon_in_range(cls, value: str) -> str:
        _parse_degrees(value, 180.0, "Longitude")
        return value

    @property
    def location(self) -> GeoPoint:
        """The hit as a ``GeoPoint``."""
        return GeoPoint(latitude=float(self.lat), longitude=float(self.lon))


class OutlineElement(BaseModel):
    """An Overpass element: a ``node`` with coordinates or a ``way`` of node ids."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["node", "way"]
    id: int
    lat: float | None = None
    lon: float | None = None
    nodes: list[int] | None = None

    @field_validator("lat")
    @classmethod
    def _lat_in_range(cls, value: float | None) -> float | None:
        return None if value is None else _check_degrees(value, 90.0, "Latitude")

    @field_validator("lon")
    @classmethod
    def _lon_in_range(cls, value: float | None) -> float | None:
        return None if value is None else _check_degrees(value, 180.0, "Longitude")


class OutlineResponse(BaseModel):
    """Overpass ``[out:json]`` response body."""

    model_config = ConfigDict(extra="ignore")

    elements: list[OutlineElement] = Field(default_factory=list)
