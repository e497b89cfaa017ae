"""Service configuration loaded from environment variables.

All values have defaults that point at the public OpenStreetMap
services, so the geocoder and outline clients work out of the box.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a numeric value
    is out of range or an endpoint is empty.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from roof_measure.core.constants import (
    DEFAULT_NOMINATIM_SUGGEST_URL,
    DEFAULT_NOMINATIM_URL,
    DEFAULT_OUTLINE_RADIUS_M,
    DEFAULT_OVERPASS_URL,
    DEFAULT_REPORT_FILENAME,
    DEFAULT_REQUEST_TIMEOUT_S,
    DEFAULT_USER_AGENT,
)
from roof_measure.core.exceptions import RoofMeasureError


class ConfigValidationError(RoofMeasureError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class RoofConfig:
    """Immutable configuration for the external collaborators.

    Attributes:
        nominatim_url: Nominatim search endpoint for full address lookup.
        nominatim_suggest_url: Nominatim URL (with its own query string)
            used for type-ahead suggestions.
        overpass_url: Overpass API interpreter endpoint.
        request_timeout_s: Per-request HTTP timeout in seconds.
        outline_radius_m: Search radius around the geocoded point when
            looking for a building way.
        user_agent: ``User-Agent`` header sent to OSM services.
        report_filename: Default file name for exported PDF reports.
    """

    nominatim_url: str = DEFAULT_NOMINATIM_URL
    nominatim_suggest_url: str = DEFAULT_NOMINATIM_SUGGEST_URL
    overpass_url: str = DEFAULT_OVERPASS_URL
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    outline_radius_m: float = DEFAULT_OUTLINE_RADIUS_M
    user_agent: str = DEFAULT_USER_AGENT
    report_filename: str = DEFAULT_REPORT_FILENAME

    @classmethod
    def from_env(cls) -> RoofConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``REQUEST_TIMEOUT_S=abc``).
        """
        config = cls(
            nominatim_url=os.getenv("NOMINATIM_BASE_URL", DEFAULT_NOMINATIM_URL),
            nominatim_suggest_url=os.getenv("NOMINATIM_SUGGEST_URL", DEFAULT_NOMINATIM_SUGGEST_URL),
            overpass_url=os.getenv("OVERPASS_BASE_URL", DEFAULT_OVERPASS_URL),
            request_timeout_s=float(os.getenv("REQUEST_TIMEOUT_S", str(DEFAULT_REQUEST_TIMEOUT_S))),
            outline_radius_m=float(os.getenv("OUTLINE_SEARCH_RADIUS_M", str(DEFAULT_OUTLINE_RADIUS_M))),
            user_agent=os.getenv("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
            report_filename=os.getenv("REPORT_FILENAME", DEFAULT_REPORT_FILENAME),
        )
        _validate(config)
        return config


def _validate(config: RoofConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.request_timeout_s <= 0:
        raise ConfigValidationError(
            "REQUEST_TIMEOUT_S",
            config.request_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.outline_radius_m <= 0:
        raise ConfigValidationError(
            "OUTLINE_SEARCH_RADIUS_M",
            config.outline_radius_m,
            "must be > 0 (metres)",
        )

    for key, value in (
        ("NOMINATIM_BASE_URL", config.nominatim_url),
        ("NOMINATIM_SUGGEST_URL", config.nominatim_suggest_url),
        ("OVERPASS_BASE_URL", config.overpass_url),
        ("HTTP_USER_AGENT", config.user_agent),
        ("REPORT_FILENAME", config.report_filename),
    ):
        if not value:
            raise ConfigValidationError(key, value, "must not be empty")
