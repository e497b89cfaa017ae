"""Roof area calculation.

Converts a traced roof outline and a pitch angle into projected
(footprint) area, pitch-corrected real area, square feet and roofing
squares.

Projected area is geodesic: ``pyproj.Geod`` on the WGS 84 ellipsoid
(Karney's algorithm), never a planar shoelace on raw degrees. The
result is taken as an absolute value so clockwise and anticlockwise
outlines give the same area.

All functions are pure and hold no state between calls.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from roof_measure.core.constants import (
    GEOD_ELLIPSOID,
    MAX_PITCH_DEG,
    SQ_FEET_PER_ROOFING_SQUARE,
    SQ_METRES_TO_SQ_FEET,
)
from roof_measure.core.exceptions import InvalidPitchError
from roof_measure.geometry.shapes import RingShape, VertexLike, classify_ring, normalize_ring
from roof_measure.models.geo_point import GeoPoint
from roof_measure.models.measurement import AreaResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_roof_area(
    vertices: Iterable[VertexLike],
    pitch_deg: float,
    *,
    shape: RingShape | None = None,
) -> AreaResult:
    """Compute all roof areas for one outline and pitch.

    Validation runs before any computation: the outline first, then the
    pitch. Either a complete ``AreaResult`` is returned or an error is
    raised.

    Args:
        vertices: Outline vertices (``GeoPoint``, mappings or ``(lat, lng)`` pairs).
        pitch_deg: Roof pitch in degrees, ``0 <= pitch < 90``.
        shape: The outline's ``classify_ring`` result, when the caller
            already has it; computed here otherwise.

    Returns:
        The projected and real areas plus the real area in ft² and squares.

    Raises:
        InvalidPolygonError: If the outline has fewer than 3 distinct vertices.
        InvalidCoordinateError: If a vertex is malformed or out of range.
        InvalidPitchError: If the pitch is outside ``[0, 90)``.
    """
    ring = normalize_ring(vertices)
    pitch = validate_pitch(pitch_deg)

    projected = _geodesic_area_m2(ring, shape or classify_ring(ring))
    real = compute_real_area(projected, pitch)
    area_ft2, area_sq = convert_area_units(real)

    logger.debug(
        "Roof area computed | vertices=%d | pitch=%.2f deg | projected=%.2f m2 | real=%.2f m2",
        len(ring),
        pitch,
        projected,
        real,
    )
    return AreaResult(
        projected_area_m2=projected,
        real_area_m2=real,
        area_ft2=area_ft2,
        area_sq=area_sq,
    )


def compute_projected_area(vertices: Iterable[VertexLike]) -> float:
    """Geodesic ground-plane area of the outline in square metres.

    Raises:
        InvalidPolygonError: If the outline has fewer than 3 distinct vertices.
        InvalidCoordinateError: If a vertex is malformed or out of range.
    """
    ring = normalize_ring(vertices)
    return _geodesic_area_m2(ring, classify_ring(ring))


def compute_real_area(projected_area_m2: float, pitch_deg: float) -> float:
    """Roof surface area for a plane tilted ``pitch_deg`` from horizontal.

    ``real = projected / cos(pitch)``. A pitch of 0 returns the projected
    area unchanged.

    Raises:
        InvalidPitchError: If the pitch is outside ``[0, 90)``.
    """
    pitch = validate_pitch(pitch_deg)
    return projected_area_m2 / math.cos(math.radians(pitch))


def convert_area_units(area_m2: float) -> tuple[float, float]:
    """Convert square metres to ``(square feet, roofing squares)``.

    No validation: NaN or infinity in gives NaN or infinity out.
    """
    area_ft2 = area_m2 * SQ_METRES_TO_SQ_FEET
    return area_ft2, area_ft2 / SQ_FEET_PER_ROOFING_SQUARE


def validate_pitch(pitch_deg: float) -> float:
    """Return the pitch as a float if it lies in ``[0, 90)``.

    Raises:
        InvalidPitchError: If the value is not numeric, not finite or out of range.
    """
    try:
        pitch = float(pitch_deg)
    except (TypeError, ValueError) as exc:
        msg = f"Pitch angle must be numeric, got {pitch_deg!r}"
        raise InvalidPitchError(msg) from exc

    if not math.isfinite(pitch) or pitch < 0.0 or pitch >= MAX_PITCH_DEG:
        msg = f"Pitch angle {pitch_deg} deg is outside [0, {MAX_PITCH_DEG:.0f})"
        raise InvalidPitchError(msg)
    return pitch


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _geodesic_area_m2(ring: Sequence[GeoPoint], shape: RingShape) -> float:
    """Absolute geodesic area of an already-normalised ring."""
    from pyproj import Geod

    if shape is RingShape.DEGENERATE:
        logger.info("Degenerate roof outline | vertices=%d | collinear, zero area", len(ring))
        return 0.0
    if shape is RingShape.SELF_INTERSECTING:
        # pyproj still returns a signed sum; lobes of opposite winding cancel
        logger.warning(
            "Self-intersecting roof outline | vertices=%d | area may be understated",
            len(ring),
        )

    geod = Geod(ellps=GEOD_ELLIPSOID)
    lons = [p.longitude for p in ring]
    lats = [p.latitude for p in ring]

    # Geod.polygon_area_perimeter returns (area_m2, perimeter_m)
    area_m2, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(area_m2)
