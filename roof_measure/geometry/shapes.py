"""Outline normalisation and small shape helpers.

Every geometry entry point funnels its vertices through
``normalize_ring`` so that validation (vertex count, coordinate range)
happens once, at the boundary, with the same error messages.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence

from roof_measure.core.constants import MIN_POLYGON_VERTICES
from roof_measure.core.exceptions import InvalidCoordinateError, InvalidPolygonError
from roof_measure.models.geo_point import GeoPoint

#: Anything the UI layer may hand us as a vertex.
VertexLike = GeoPoint | Mapping[str, object] | Sequence[float]

_COLLINEAR_TOLERANCE = 1e-9


def as_geo_point(vertex: VertexLike) -> GeoPoint:
    """Coerce a vertex into a ``GeoPoint``.

    Accepts a ``GeoPoint``, a mapping (``latitude/longitude``, ``lat/lng``
    or ``lat/lon``) or a ``(lat, lng)`` pair.

    Raises:
        InvalidCoordinateError: If the vertex cannot be interpreted.
    """
    if isinstance(vertex, GeoPoint):
        return vertex
    if isinstance(vertex, Mapping):
        return GeoPoint.from_dict(vertex)
    if isinstance(vertex, Sequence) and not isinstance(vertex, (str, bytes)):
        return GeoPoint.from_pair(vertex)
    msg = f"Unsupported vertex type: {type(vertex).__name__}"
    raise InvalidCoordinateError(msg)


def points_from_pairs(pairs: Iterable[Sequence[float]]) -> list[GeoPoint]:
    """Convert ``[(lat, lng), ...]`` pairs into ``GeoPoint`` objects."""
    return [GeoPoint.from_pair(pair) for pair in pairs]


def normalize_ring(vertices: Iterable[VertexLike]) -> tuple[GeoPoint, ...]:
    """Validate an outline and return it as an open ring of ``GeoPoint``.

    A trailing vertex equal to the first (an explicitly closed ring) is
    dropped; the ring is always closed implicitly downstream.

    Raises:
        InvalidPolygonError: If fewer than three distinct vertices remain.
        InvalidCoordinateError: If any vertex is malformed or out of range.
    """
    points = [as_geo_point(v) for v in vertices]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()

    distinct = len(set(points))
    if distinct < MIN_POLYGON_VERTICES:
        msg = (
            f"Insufficient vertices for a roof outline: need at least "
            f"{MIN_POLYGON_VERTICES} distinct, got {distinct}"
        )
        raise InvalidPolygonError(msg)
    return tuple(points)


def polygon_center(vertices: Iterable[VertexLike]) -> GeoPoint:
    """Arithmetic mean of the vertices.

    This is a label anchor, not an area centroid; it matches what the
    map overlay uses to centre the outline.

    Raises:
        InvalidPolygonError: If no vertices are given.
    """
    points = [as_geo_point(v) for v in vertices]
    if not points:
        msg = "Cannot compute the centre of an empty outline"
        raise InvalidPolygonError(msg)
    lat = sum(p.latitude for p in points) / len(points)
    lon = sum(p.longitude for p in points) / len(points)
    return GeoPoint(latitude=lat, longitude=lon)


def midpoint(a: VertexLike, b: VertexLike) -> GeoPoint:
    """Arithmetic midpoint between two vertices."""
    p1 = as_geo_point(a)
    p2 = as_geo_point(b)
    return GeoPoint(
        latitude=(p1.latitude + p2.latitude) / 2,
        longitude=(p1.longitude + p2.longitude) / 2,
    )


class RingShape(enum.Enum):
    """How a closed outline sits in the plane."""

    SIMPLE = "simple"
    #: All vertices (near-)collinear; the ring encloses no area.
    DEGENERATE = "degenerate"
    SELF_INTERSECTING = "self_intersecting"


def classify_ring(ring: Sequence[GeoPoint]) -> RingShape:
    """Classify a normalised ring with shapely.

    A ring whose convex hull has (almost) no area, relative to the square
    of its extent, is ``DEGENERATE``. Coordinates are shifted to the first
    vertex before the test.
    """
    from shapely.geometry import LinearRing, MultiPoint

    lon0, lat0 = ring[0].as_lon_lat()
    coords = [(p.longitude - lon0, p.latitude - lat0) for p in ring]

    xs = [x for x, _ in coords]
    ys = [y for _, y in coords]
    extent = max(max(xs) - min(xs), max(ys) - min(ys))
    # a bow-tie has zero signed area but a non-empty hull
    if MultiPoint(coords).convex_hull.area <= _COLLINEAR_TOLERANCE * extent**2:
        return RingShape.DEGENERATE
    if not LinearRing(coords).is_simple:
        return RingShape.SELF_INTERSECTING
    return RingShape.SIMPLE
