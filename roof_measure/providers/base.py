"""Shared HTTP plumbing and error types for OSM service clients.

Both clients issue a single JSON ``GET`` per call. Transport failures,
timeouts and non-2xx responses surface as transient errors; bodies that
are not JSON or do not match the payload models surface as contract
errors. There is no retry loop: the caller decides.

Lifecycle:
    A client constructed without an ``httpx.Client`` creates and owns
    one, and closes it in ``close()`` / on context-manager exit. An
    injected client is never closed here.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from roof_measure.core.config import RoofConfig
from roof_measure.core.exceptions import (
    ContractError,
    PermanentError,
    RoofMeasureError,
    TransientError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ProviderError(RoofMeasureError):
    """Base for all OSM service client errors."""

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"


class GeocodingError(TransientError, ProviderError):
    """Address lookup request failed (network, timeout, HTTP status)."""

    default_stage = "geocoding"
    default_code = "GEOCODING_FAILED"


class OutlineFetchError(TransientError, ProviderError):
    """Building-outline request failed (network, timeout, HTTP status)."""

    default_stage = "outline"
    default_code = "OUTLINE_FETCH_FAILED"


class AddressNotFoundError(PermanentError, ProviderError):
    """Geocoding returned no results for the query."""

    default_stage = "geocoding"
    default_code = "ADDRESS_NOT_FOUND"


class OutlineNotFoundError(PermanentError, ProviderError):
    """No building outline with at least three vertices near the point."""

    default_stage = "outline"
    default_code = "OUTLINE_NOT_FOUND"


class ProviderResponseError(ContractError, ProviderError):
    """Service response is not JSON or does not match the payload model."""

    default_code = "PROVIDER_RESPONSE_INVALID"


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class OsmServiceClient:
    """Base class for the Nominatim and Overpass clients.

    Subclasses set ``request_error`` to the transient error type raised
    for failed requests and ``stage`` for error context.
    """

    request_error: type[TransientError] = GeocodingError
    stage: str = "provider"

    def __init__(
        self,
        config: RoofConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config or RoofConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self._config.request_timeout_s,
            headers={"User-Agent": self._config.user_agent},
            follow_redirects=True,
        )

    @property
    def config(self) -> RoofConfig:
        """Return the client configuration (read-only)."""
        return self._config

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> OsmServiceClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get_json(self, url: str, params: dict[str, str]) -> Any:
        """Issue a GET and decode the JSON body.

        Raises:
            TransientError: ``request_error`` on transport failure or HTTP error status.
            ProviderResponseError: If the body is not valid JSON.
        """
        logger.debug("OSM request | stage=%s | url=%s | params=%s", self.stage, url, params)
        # Merge so query parameters already baked into ``url`` survive.
        request_url = httpx.URL(url).copy_merge_params(params)
        try:
            response = self._client.get(request_url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            msg = f"{self.stage} request to {url} failed: {exc}"
            raise self.request_error(msg) from exc

        try:
            return response.json()
        except ValueError as exc:
            msg = f"{self.stage} response from {url} is not valid JSON"
            raise ProviderResponseError(msg, stage=self.stage) from exc
