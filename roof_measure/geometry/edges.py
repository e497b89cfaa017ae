"""Roof edge lengths.

Edge lengths are great-circle (haversine) distances on a sphere of
radius 6 371 km, the same model the map overlay uses for its edge
labels, reported in feet.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from roof_measure.core.constants import EARTH_RADIUS_M, METRES_TO_FEET
from roof_measure.geometry.shapes import VertexLike, as_geo_point, midpoint, normalize_ring
from roof_measure.models.measurement import EdgeMeasurement


def compute_edge_distance_feet(a: VertexLike, b: VertexLike) -> float:
    """Great-circle distance between two points in feet.

    Symmetric, and zero for identical points.

    Raises:
        InvalidCoordinateError: If either point is malformed or out of range.
    """
    return compute_edge_distance_m(a, b) * METRES_TO_FEET


def compute_edge_distance_m(a: VertexLike, b: VertexLike) -> float:
    """Haversine distance between two points in metres."""
    p1 = as_geo_point(a)
    p2 = as_geo_point(b)

    lat1 = math.radians(p1.latitude)
    lat2 = math.radians(p2.latitude)
    d_lat = math.radians(p2.latitude - p1.latitude)
    d_lon = math.radians(p2.longitude - p1.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    h = min(1.0, h)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def compute_edge_measurements(vertices: Iterable[VertexLike]) -> tuple[EdgeMeasurement, ...]:
    """Measure every edge of the outline, wrapping the last vertex to the first.

    Raises:
        InvalidPolygonError: If the outline has fewer than 3 distinct vertices.
        InvalidCoordinateError: If a vertex is malformed or out of range.
    """
    ring = normalize_ring(vertices)
    edges = []
    for i, start in enumerate(ring):
        end = ring[(i + 1) % len(ring)]
        edges.append(
            EdgeMeasurement(
                index=i,
                start=start,
                end=end,
                midpoint=midpoint(start, end),
                length_ft=compute_edge_distance_feet(start, end),
            )
        )
    return tuple(edges)
