"""Shared pytest fixtures for the roof_measure test suite."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from roof_measure.models.geo_point import GeoPoint

# ---------------------------------------------------------------------------
# Reference outlines
# ---------------------------------------------------------------------------

# 0.001 deg x 0.001 deg square at 40N (~111 m x ~85 m), anticlockwise
SQUARE_40N = [
    GeoPoint(40.000, -75.000),
    GeoPoint(40.000, -74.999),
    GeoPoint(40.001, -74.999),
    GeoPoint(40.001, -75.000),
]

# Small house-sized L-shape in Dallas
DALLAS_L_SHAPE = [
    (32.77670, -96.79700),
    (32.77670, -96.79680),
    (32.77680, -96.79680),
    (32.77680, -96.79690),
    (32.77690, -96.79690),
    (32.77690, -96.79700),
]

@pytest.fixture()
def square_40n() -> list[GeoPoint]:
    """A ~9 500 m2 square outline at 40N."""
    return list(SQUARE_40N)


@pytest.fixture()
def dallas_l_shape() -> list[tuple[float, float]]:
    """An L-shaped outline as ``(lat, lng)`` pairs."""
    return list(DALLAS_L_SHAPE)


# ---------------------------------------------------------------------------
# External service payloads
# ---------------------------------------------------------------------------


@pytest.fixture()
def nominatim_payload() -> list[dict[str, object]]:
    """Nominatim ``format=json`` response with one hit."""
    return [
        {
            "place_id": 298017452,
            "licence": "Data (c) OpenStreetMap contributors, ODbL 1.0.",
            "lat": "32.77675",
            "lon": "-96.79690",
            "display_name": "1500 Marilla Street, Dallas, Texas, 75201, United States",
            "boundingbox": ["32.7766", "32.7769", "-96.7971", "-96.7967"],
            "importance": 0.41,
        }
    ]


@pytest.fixture()
def overpass_payload() -> dict[str, object]:
    """Overpass response with one closed building way and its nodes."""
    corners = [
        (32.77670, -96.79700),
        (32.77670, -96.79680),
        (32.77680, -96.79680),
        (32.77680, -96.79700),
    ]
    nodes = [
        {"type": "node", "id": 101 + i, "lat": lat, "lon": lon}
        for i, (lat, lon) in enumerate(corners)
    ]
    return {
        "version": 0.6,
        "generator": "Overpass API",
        "elements": [
            {
                "type": "way",
                "id": 5550001,
                "nodes": [101, 102, 103, 104, 101],
                "tags": {"building": "yes"},
            },
            *nodes,
        ],
    }


@pytest.fixture()
def make_http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Factory for an ``httpx.Client`` backed by a ``MockTransport`` handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make
