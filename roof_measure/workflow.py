"""Roof measurement workflow.

Chains the collaborators the way the measuring tool uses them:

    address ──► Nominatim (first hit) ──► Overpass (building way)
            ──► outline ──► areas + edge lengths ──► RoofMeasurement

``measure_polygon`` is the entry point when the user has traced or
adjusted the outline by hand; ``measure_address`` starts from a search.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from roof_measure.geometry.edges import compute_edge_measurements
from roof_measure.geometry.roof_area import calculate_roof_area, validate_pitch
from roof_measure.geometry.shapes import RingShape, VertexLike, classify_ring, normalize_ring
from roof_measure.models.measurement import RoofMeasurement
from roof_measure.providers.base import AddressNotFoundError
from roof_measure.providers.nominatim import NominatimGeocoder
from roof_measure.providers.overpass import OverpassOutlineClient

logger = logging.getLogger(__name__)


def measure_polygon(
    vertices: Iterable[VertexLike],
    pitch_deg: float,
    *,
    address: str = "",
) -> RoofMeasurement:
    """Measure a traced outline.

    Args:
        vertices: Outline vertices (``GeoPoint``, mappings or ``(lat, lng)`` pairs).
        pitch_deg: Roof pitch in degrees, ``0 <= pitch < 90``.
        address: Display name to carry into the report.

    Raises:
        InvalidPolygonError: If the outline has fewer than 3 distinct vertices.
        InvalidCoordinateError: If a vertex is malformed or out of range.
        InvalidPitchError: If the pitch is outside ``[0, 90)``.
    """
    ring = normalize_ring(vertices)
    shape = classify_ring(ring)
    area = calculate_roof_area(ring, pitch_deg, shape=shape)
    edges = compute_edge_measurements(ring)

    measurement = RoofMeasurement(
        vertices=ring,
        pitch_deg=float(pitch_deg),
        area=area,
        edges=edges,
        address=address,
        is_simple=shape is not RingShape.SELF_INTERSECTING,
    )
    logger.info(
        "Roof measured | address=%s | vertices=%d | pitch=%.1f deg | "
        "projected=%.2f m2 | real=%.2f m2 | squares=%.1f | perimeter=%.1f ft",
        address or "-",
        len(ring),
        measurement.pitch_deg,
        area.projected_area_m2,
        area.real_area_m2,
        area.area_sq,
        measurement.perimeter_ft,
    )
    return measurement


def measure_address(
    address: str,
    pitch_deg: float,
    *,
    geocoder: NominatimGeocoder,
    outline_client: OverpassOutlineClient,
) -> RoofMeasurement:
    """Geocode an address, fetch its building outline and measure it.

    The pitch is validated before any request is made.

    Raises:
        InvalidPitchError: If the pitch is outside ``[0, 90)``.
        AddressNotFoundError: If geocoding returns no results.
        OutlineNotFoundError: If no building outline is found at the location.
        GeocodingError, OutlineFetchError: On request failure.
        ProviderResponseError: On unexpected service payloads.
    """
    validate_pitch(pitch_deg)

    results = geocoder.search_address(address)
    if not results:
        msg = f"Address not found: {address!r}"
        raise AddressNotFoundError(msg)

    hit = results[0]
    location = hit.location
    outline = outline_client.find_building_outline(location.latitude, location.longitude)
    return measure_polygon(outline, pitch_deg, address=hit.display_name)
