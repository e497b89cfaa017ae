"""Shared constants — single source of truth.

Unit conversion factors, geometry limits and public service endpoints
used across the geometry engine, providers and report.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Unit conversions
# ---------------------------------------------------------------------------

METRES_TO_FEET: float = 3.28084
"""Feet per metre, applied to edge lengths."""

SQ_METRES_TO_SQ_FEET: float = 10.7639
"""Square feet per square metre."""

SQ_FEET_PER_ROOFING_SQUARE: float = 100.0
"""A roofing square is 100 ft²."""

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

MIN_POLYGON_VERTICES: int = 3
"""Distinct vertices needed to enclose an area."""

MAX_PITCH_DEG: float = 90.0
"""Exclusive upper bound for roof pitch (a vertical plane)."""

EARTH_RADIUS_M: float = 6_371_000.0
"""Mean Earth radius for haversine edge lengths."""

GEOD_ELLIPSOID: str = "WGS84"
"""Ellipsoid for geodesic polygon area."""

# ---------------------------------------------------------------------------
# External services
# ---------------------------------------------------------------------------

DEFAULT_NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
DEFAULT_NOMINATIM_SUGGEST_URL: str = (
    "https://nominatim.openstreetmap.org/search"
    "?format=json&addressdetails=1&limit=5"
    "&viewbox=-97.05,33.05,-96.45,32.55&bounded=1"
)
DEFAULT_OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
DEFAULT_USER_AGENT: str = "roof-measure/0.1"
DEFAULT_REQUEST_TIMEOUT_S: float = 10.0
DEFAULT_OUTLINE_RADIUS_M: float = 10.0

# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

DEFAULT_REPORT_FILENAME: str = "roof-measurement.pdf"
REPORT_TITLE: str = "Roof Measurement Report"
NOT_AVAILABLE: str = "N/A"
