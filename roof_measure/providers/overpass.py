"""Overpass building-outline client.

Finds OSM building ways within a small radius of a point and resolves
the first way's node references into an outline of ``GeoPoint``.

The query asks for ways tagged ``building`` and recurses down (``>;``)
so the referenced nodes come back in the same response.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from roof_measure.core.constants import MIN_POLYGON_VERTICES
from roof_measure.core.exceptions import TransientError
from roof_measure.models.geo_point import GeoPoint
from roof_measure.models.payloads import OutlineResponse
from roof_measure.providers.base import (
    OsmServiceClient,
    OutlineFetchError,
    OutlineNotFoundError,
    ProviderResponseError,
)

logger = logging.getLogger(__name__)


def build_outline_query(lat: float, lon: float, radius_m: float) -> str:
    """Overpass QL for building ways within ``radius_m`` of ``(lat, lon)``."""
    return (
        "[out:json];"
        f'(way["building"](around:{radius_m:g},{lat},{lon}););'
        "out body;>;out skel qt;"
    )


def extract_outline(response: OutlineResponse) -> list[GeoPoint]:
    """Resolve the first way in the response into its vertices.

    Node ids that are missing from the response, or nodes without
    coordinates, are skipped. Returns ``[]`` when there is no way.
    """
    nodes = {
        el.id: GeoPoint(latitude=el.lat, longitude=el.lon)
        for el in response.elements
        if el.type == "node" and el.lat is not None and el.lon is not None
    }
    way = next((el for el in response.elements if el.type == "way"), None)
    if way is None or not way.nodes:
        return []
    return [nodes[node_id] for node_id in way.nodes if node_id in nodes]


class OverpassOutlineClient(OsmServiceClient):
    """Building-outline lookup against an Overpass API interpreter."""

    request_error: type[TransientError] = OutlineFetchError
    stage = "outline"

    def get_building_outline(self, lat: float, lon: float) -> OutlineResponse:
        """Fetch building ways (and their nodes) near a point.

        Raises:
            OutlineFetchError: On transport failure or HTTP error status.
            ProviderResponseError: If the payload does not match ``OutlineResponse``.
        """
        query = build_outline_query(lat, lon, self._config.outline_radius_m)
        payload = self._get_json(self._config.overpass_url, {"data": query})
        try:
            return OutlineResponse.model_validate(payload)
        except ValidationError as exc:
            msg = f"Unexpected Overpass payload near ({lat}, {lon}): {exc.error_count()} error(s)"
            raise ProviderResponseError(msg, stage=self.stage) from exc

    def find_building_outline(self, lat: float, lon: float) -> list[GeoPoint]:
        """Fetch and resolve the nearest building outline.

        Raises:
            OutlineNotFoundError: If fewer than three distinct vertices resolve.
            OutlineFetchError: On transport failure or HTTP error status.
            ProviderResponseError: If the payload does not match ``OutlineResponse``.
        """
        outline = extract_outline(self.get_building_outline(lat, lon))
        if len(set(outline)) < MIN_POLYGON_VERTICES:
            msg = f"Building outline not found near ({lat}, {lon})"
            raise OutlineNotFoundError(msg)

        logger.info(
            "Building outline found | lat=%.6f | lon=%.6f | vertices=%d",
            lat,
            lon,
            len(outline),
        )
        return outline
