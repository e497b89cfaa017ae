"""Geographic coordinate value type.

A GeoPoint is a single WGS 84 latitude/longitude pair in degrees. It is
the vertex type for roof outlines and the endpoint type for edge
measurements.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from roof_measure.core.exceptions import InvalidCoordinateError

_LATITUDE_KEYS = ("latitude", "lat")
_LONGITUDE_KEYS = ("longitude", "lng", "lon")


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A WGS 84 coordinate.

    Attributes:
        latitude: Degrees north, in ``[-90, 90]``.
        longitude: Degrees east, in ``[-180, 180]``.

    Raises:
        InvalidCoordinateError: If either value is non-finite or out of range.
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        validate_wgs84_coordinate(self.latitude, self.longitude)

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> GeoPoint:
        """Build from a ``(lat, lng)`` pair."""
        if len(pair) != 2:
            msg = f"Coordinate pair must have 2 values, got {len(pair)}"
            raise InvalidCoordinateError(msg)
        return cls(latitude=float(pair[0]), longitude=float(pair[1]))

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> GeoPoint:
        """Build from a mapping keyed ``latitude/longitude``, ``lat/lng`` or ``lat/lon``.

        Raises:
            InvalidCoordinateError: If a key is missing or a value is not numeric.
        """
        lat = _first_present(data, _LATITUDE_KEYS)
        lon = _first_present(data, _LONGITUDE_KEYS)
        if lat is None or lon is None:
            msg = f"Coordinate mapping needs latitude and longitude keys, got {sorted(data)}"
            raise InvalidCoordinateError(msg)
        try:
            return cls(latitude=float(lat), longitude=float(lon))  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            msg = f"Coordinate values must be numeric, got lat={lat!r}, lon={lon!r}"
            raise InvalidCoordinateError(msg) from exc

    def to_dict(self) -> dict[str, float]:
        """Serialise as ``{"latitude": ..., "longitude": ...}``."""
        return {"latitude": self.latitude, "longitude": self.longitude}

    def as_lon_lat(self) -> tuple[float, float]:
        """Return ``(lon, lat)``, the axis order used by pyproj and shapely."""
        return (self.longitude, self.latitude)


def validate_wgs84_coordinate(latitude: float, longitude: float) -> None:
    """Check that a latitude/longitude pair is finite and in range.

    Raises:
        InvalidCoordinateError: If either value is invalid.
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        msg = f"Coordinate must be finite, got lat={latitude}, lon={longitude}"
        raise InvalidCoordinateError(msg)
    if not -90.0 <= latitude <= 90.0:
        msg = f"Latitude {latitude} is outside [-90, 90]"
        raise InvalidCoordinateError(msg)
    if not -180.0 <= longitude <= 180.0:
        msg = f"Longitude {longitude} is outside [-180, 180]"
        raise InvalidCoordinateError(msg)


def _first_present(data: Mapping[str, object], keys: tuple[str, ...]) -> object | None:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None
