"""Unit tests for the Nominatim and Overpass clients.

HTTP is served by ``httpx.MockTransport`` handlers; no network access.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from roof_measure.core.config import RoofConfig
from roof_measure.models.geo_point import GeoPoint
from roof_measure.models.payloads import OutlineResponse
from roof_measure.providers import (
    GeocodingError,
    NominatimGeocoder,
    OutlineFetchError,
    OutlineNotFoundError,
    OverpassOutlineClient,
    ProviderResponseError,
    build_outline_query,
    extract_outline,
)

MakeClient = Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]


def _never_called(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request: {request.url}")


# ===========================================================================
# Nominatim
# ===========================================================================


class TestNominatimGeocoder:
    def test_search_address(self, make_http_client: MakeClient, nominatim_payload: list[dict[str, object]]) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=nominatim_payload)

        geocoder = NominatimGeocoder(client=make_http_client(handler))
        results = geocoder.search_address("  1500 Marilla St, Dallas ")

        assert len(results) == 1
        assert results[0].location == GeoPoint(32.77675, -96.79690)
        assert seen[0].url.host == "nominatim.openstreetmap.org"
        assert seen[0].url.params["q"] == "1500 Marilla St, Dallas"
        assert seen[0].url.params["format"] == "json"

    def test_suggestions_keep_bounded_url_params(
        self, make_http_client: MakeClient, nominatim_payload: list[dict[str, object]]
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=nominatim_payload)

        geocoder = NominatimGeocoder(client=make_http_client(handler))
        geocoder.get_suggestions("Marilla")

        params = seen[0].url.params
        assert params["q"] == "Marilla"
        assert params["format"] == "json"
        assert params["addressdetails"] == "1"
        assert params["limit"] == "5"
        assert params["viewbox"] == "-97.05,33.05,-96.45,32.55"
        assert params["bounded"] == "1"

    def test_endpoint_query_string_merged_with_search_params(self, make_http_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        config = RoofConfig(nominatim_url="http://geo.local/search?countrycodes=us")
        NominatimGeocoder(config, client=make_http_client(handler)).search_address("Dallas")

        params = seen[0].url.params
        assert params["countrycodes"] == "us"
        assert params["format"] == "json"
        assert params["q"] == "Dallas"

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_makes_no_request(self, make_http_client: MakeClient, query: str) -> None:
        geocoder = NominatimGeocoder(client=make_http_client(_never_called))
        assert geocoder.search_address(query) == []
        assert geocoder.get_suggestions(query) == []

    def test_empty_result_list(self, make_http_client: MakeClient) -> None:
        geocoder = NominatimGeocoder(client=make_http_client(lambda r: httpx.Response(200, json=[])))
        assert geocoder.search_address("nowhere") == []

    def test_http_error_is_transient(self, make_http_client: MakeClient) -> None:
        geocoder = NominatimGeocoder(client=make_http_client(lambda r: httpx.Response(503)))
        with pytest.raises(GeocodingError) as exc_info:
            geocoder.search_address("Dallas")
        assert exc_info.value.retryable is True

    def test_timeout_is_transient(self, make_http_client: MakeClient) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        geocoder = NominatimGeocoder(client=make_http_client(handler))
        with pytest.raises(GeocodingError):
            geocoder.search_address("Dallas")

    def test_non_json_body(self, make_http_client: MakeClient) -> None:
        geocoder = NominatimGeocoder(client=make_http_client(lambda r: httpx.Response(200, text="<html>")))
        with pytest.raises(ProviderResponseError, match="not valid JSON"):
            geocoder.search_address("Dallas")

    def test_unexpected_payload_shape(self, make_http_client: MakeClient) -> None:
        geocoder = NominatimGeocoder(client=make_http_client(lambda r: httpx.Response(200, json={"error": "x"})))
        with pytest.raises(ProviderResponseError) as exc_info:
            geocoder.search_address("Dallas")
        assert exc_info.value.category == "contract"
        assert exc_info.value.stage == "geocoding"

    @pytest.mark.parametrize(
        "hit",
        [{"lat": "abc", "lon": "1"}, {"lat": "95.0", "lon": "-96.8"}, {"lat": "32.7", "lon": "200"}],
    )
    def test_bad_hit_coordinates_are_contract_errors(self, make_http_client: MakeClient, hit: dict[str, str]) -> None:
        geocoder = NominatimGeocoder(client=make_http_client(lambda r: httpx.Response(200, json=[hit])))
        with pytest.raises(ProviderResponseError) as exc_info:
            geocoder.search_address("Dallas")
        assert exc_info.value.stage == "geocoding"

    def test_custom_endpoint(self, make_http_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        config = RoofConfig(nominatim_url="http://geo.local/search")
        NominatimGeocoder(config, client=make_http_client(handler)).search_address("x")
        assert seen[0].url.host == "geo.local"

    def test_owned_client_closed(self) -> None:
        geocoder = NominatimGeocoder()
        geocoder.close()
        assert geocoder._client.is_closed

    def test_injected_client_left_open(self, make_http_client: MakeClient) -> None:
        client = make_http_client(_never_called)
        with NominatimGeocoder(client=client):
            pass
        assert not client.is_closed


# ===========================================================================
# Overpass
# ===========================================================================


class TestBuildOutlineQuery:
    def test_query_text(self) -> None:
        query = build_outline_query(32.7767, -96.797, 10.0)
        assert query.startswith("[out:json];")
        assert 'way["building"](around:10,32.7767,-96.797)' in query
        assert query.endswith("out body;>;out skel qt;")


class TestExtractOutline:
    def test_closed_way(self, overpass_payload: dict[str, object]) -> None:
        outline = extract_outline(OutlineResponse.model_validate(overpass_payload))
        assert len(outline) == 5
        assert outline[0] == outline[-1] == GeoPoint(32.7767, -96.797)

    def test_missing_nodes_skipped(self) -> None:
        response = OutlineResponse.model_validate(
            {
                "elements": [
                    {"type": "way", "id": 1, "nodes": [10, 11, 99, 12]},
                    {"type": "node", "id": 10, "lat": 1.0, "lon": 1.0},
                    {"type": "node", "id": 11, "lat": 1.0, "lon": 1.1},
                    {"type": "node", "id": 12, "lat": 1.1, "lon": 1.1},
                ]
            }
        )
        assert extract_outline(response) == [GeoPoint(1.0, 1.0), GeoPoint(1.0, 1.1), GeoPoint(1.1, 1.1)]

    def test_only_first_way_used(self) -> None:
        response = OutlineResponse.model_validate(
            {
                "elements": [
                    {"type": "way", "id": 1, "nodes": [10]},
                    {"type": "way", "id": 2, "nodes": [10, 10]},
                    {"type": "node", "id": 10, "lat": 1.0, "lon": 1.0},
                ]
            }
        )
        assert extract_outline(response) == [GeoPoint(1.0, 1.0)]

    def test_no_way(self) -> None:
        response = OutlineResponse.model_validate({"elements": [{"type": "node", "id": 1, "lat": 0, "lon": 0}]})
        assert extract_outline(response) == []


class TestOverpassOutlineClient:
    def test_find_building_outline(self, make_http_client: MakeClient, overpass_payload: dict[str, object]) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=overpass_payload)

        client = OverpassOutlineClient(RoofConfig(outline_radius_m=15), client=make_http_client(handler))
        outline = client.find_building_outline(32.77675, -96.7969)

        assert len(outline) == 5
        assert seen[0].url.host == "overpass-api.de"
        assert "around:15,32.77675,-96.7969" in seen[0].url.params["data"]

    def test_no_outline(self, make_http_client: MakeClient) -> None:
        client = OverpassOutlineClient(client=make_http_client(lambda r: httpx.Response(200, json={"elements": []})))
        with pytest.raises(OutlineNotFoundError) as exc_info:
            client.find_building_outline(0.0, 0.0)
        assert exc_info.value.retryable is False

    def test_degenerate_closed_way_is_not_an_outline(self, make_http_client: MakeClient) -> None:
        payload = {
            "elements": [
                {"type": "way", "id": 1, "nodes": [1, 2, 1]},
                {"type": "node", "id": 1, "lat": 0.0, "lon": 0.0},
                {"type": "node", "id": 2, "lat": 0.0, "lon": 0.001},
            ]
        }
        client = OverpassOutlineClient(client=make_http_client(lambda r: httpx.Response(200, json=payload)))
        with pytest.raises(OutlineNotFoundError):
            client.find_building_outline(0.0, 0.0)

    def test_http_error(self, make_http_client: MakeClient) -> None:
        client = OverpassOutlineClient(client=make_http_client(lambda r: httpx.Response(429)))
        with pytest.raises(OutlineFetchError):
            client.get_building_outline(0.0, 0.0)

    def test_bad_element_type(self, make_http_client: MakeClient) -> None:
        payload = {"elements": [{"type": "area", "id": 1}]}
        client = OverpassOutlineClient(client=make_http_client(lambda r: httpx.Response(200, json=payload)))
        with pytest.raises(ProviderResponseError) as exc_info:
            client.get_building_outline(0.0, 0.0)
        assert exc_info.value.stage == "outline"

    def test_out_of_range_node_is_contract_error(self, make_http_client: MakeClient) -> None:
        payload = {
            "elements": [
                {"type": "way", "id": 1, "nodes": [1, 2, 3]},
                {"type": "node", "id": 1, "lat": 95.0, "lon": 0.0},
                {"type": "node", "id": 2, "lat": 0.0, "lon": 0.001},
                {"type": "node", "id": 3, "lat": 0.001, "lon": 0.0},
            ]
        }
        client = OverpassOutlineClient(client=make_http_client(lambda r: httpx.Response(200, json=payload)))
        with pytest.raises(ProviderResponseError) as exc_info:
            client.find_building_outline(0.0, 0.0)
        assert exc_info.value.stage == "outline"
