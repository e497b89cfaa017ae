"""Data models.

- GeoPoint: WGS 84 coordinate value type
- AreaResult, EdgeMeasurement, RoofMeasurement: measurement outputs
- SearchResult, OutlineElement, OutlineResponse: external service payloads
"""

from roof_measure.models.geo_point import GeoPoint, validate_wgs84_coordinate
from roof_measure.models.measurement import AreaResult, EdgeMeasurement, RoofMeasurement
from roof_measure.models.payloads import OutlineElement, OutlineResponse, SearchResult

__all__ = [
    "AreaResult",
    "EdgeMeasurement",
    "GeoPoint",
    "OutlineElement",
    "OutlineResponse",
    "RoofMeasurement",
    "SearchResult",
    "validate_wgs84_coordinate",
]
