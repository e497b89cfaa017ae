"""Roof geometry engine.

Pure functions: projected and real roof area, unit conversion and
edge lengths for a traced outline.
"""

from roof_measure.geometry.edges import (
    compute_edge_distance_feet,
    compute_edge_distance_m,
    compute_edge_measurements,
)
from roof_measure.geometry.roof_area import (
    calculate_roof_area,
    compute_projected_area,
    compute_real_area,
    convert_area_units,
    validate_pitch,
)
from roof_measure.geometry.shapes import (
    RingShape,
    as_geo_point,
    classify_ring,
    midpoint,
    normalize_ring,
    points_from_pairs,
    polygon_center,
)

__all__ = [
    "RingShape",
    "as_geo_point",
    "calculate_roof_area",
    "classify_ring",
    "compute_edge_distance_feet",
    "compute_edge_distance_m",
    "compute_edge_measurements",
    "compute_projected_area",
    "compute_real_area",
    "convert_area_units",
    "midpoint",
    "normalize_ring",
    "points_from_pairs",
    "polygon_center",
    "validate_pitch",
]
