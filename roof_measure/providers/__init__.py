"""OpenStreetMap service clients.

- NominatimGeocoder: address search and suggestions
- OverpassOutlineClient: building outline lookup near a point
"""

from roof_measure.providers.base import (
    AddressNotFoundError,
    GeocodingError,
    OsmServiceClient,
    OutlineFetchError,
    OutlineNotFoundError,
    ProviderError,
    ProviderResponseError,
)
from roof_measure.providers.nominatim import NominatimGeocoder
from roof_measure.providers.overpass import (
    OverpassOutlineClient,
    build_outline_query,
    extract_outline,
)

__all__ = [
    "AddressNotFoundError",
    "GeocodingError",
    "NominatimGeocoder",
    "OsmServiceClient",
    "OutlineFetchError",
    "OutlineNotFoundError",
    "OverpassOutlineClient",
    "ProviderError",
    "ProviderResponseError",
    "build_outline_query",
    "extract_outline",
]
