"""Nominatim address geocoder.

Two lookups are offered: ``search_address`` for a full free-text
search, and ``get_suggestions`` for type-ahead suggestions against a
bounded search URL (by default a viewbox around Dallas, five results,
with address details).

Nominatim usage policy requires an identifying ``User-Agent``; it is
taken from ``RoofConfig.user_agent``.
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from roof_measure.core.exceptions import TransientError
from roof_measure.models.payloads import SearchResult
from roof_measure.providers.base import GeocodingError, OsmServiceClient, ProviderResponseError

logger = logging.getLogger(__name__)

_RESULTS_ADAPTER = TypeAdapter(list[SearchResult])


class NominatimGeocoder(OsmServiceClient):
    """Address search against a Nominatim instance."""

    request_error: type[TransientError] = GeocodingError
    stage = "geocoding"

    def search_address(self, query: str) -> list[SearchResult]:
        """Free-text address search. Blank queries return ``[]`` without a request.

        Raises:
            GeocodingError: On transport failure or HTTP error status.
            ProviderResponseError: If the payload is not a list of search hits.
        """
        return self._search(self._config.nominatim_url, query, {"format": "json"})

    def get_suggestions(self, query: str) -> list[SearchResult]:
        """Type-ahead suggestions from the bounded suggestion URL.

        Raises:
            GeocodingError: On transport failure or HTTP error status.
            ProviderResponseError: If the payload is not a list of search hits.
        """
        return self._search(self._config.nominatim_suggest_url, query, {})

    def _search(self, url: str, query: str, params: dict[str, str]) -> list[SearchResult]:
        query = query.strip()
        if not query:
            return []

        payload = self._get_json(url, {**params, "q": query})
        try:
            results = _RESULTS_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            msg = f"Unexpected Nominatim payload for query {query!r}: {exc.error_count()} error(s)"
            raise ProviderResponseError(msg, stage=self.stage) from exc

        logger.info("Address search | query=%s | results=%d", query, len(results))
        return results
