"""Search resolution (interpreter + geocoding gateway).

The interpreter is pure; this module owns the only I/O: forward-geocoding an extracted place
reference and reverse-geocoding coordinates for region classification. Gateway failures never reach
the caller; they are logged and treated as "nothing found".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.config.settings import Settings, load_settings
from src.geo.gateway import GeocodingError, GeocodingGateway, NominatimGateway
from src.search.interpreter import parse
from src.search.regions import resolve_from_reverse_geocode
from src.search.schema import ForwardGeocodeResult, GeoPoint, ParsedQuery, Region

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResolution:
    """A parsed query plus the geocoded location of its place reference, if any.

    When `location` is set the caller re-centers the map on it and applies no region filter.
    """

    query: ParsedQuery
    location: GeoPoint | None = None


class SearchService:
    """Resolve free-text searches and coordinates against a geocoding gateway."""

    def __init__(self, gateway: GeocodingGateway | None, *, geocoding_enabled: bool = True) -> None:
        self.gateway = gateway
        self.geocoding_enabled = geocoding_enabled and gateway is not None

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchService:
        """Create a service backed by Nominatim, or with geocoding off when it is disabled."""

        if not settings.geocoder_enabled:
            return cls(None, geocoding_enabled=False)
        return cls(NominatimGateway(settings.geocoder_config()))

    @classmethod
    def from_env(cls) -> SearchService:
        """Create a service from validated environment settings.

        Raises:
            RuntimeError: If the environment configuration is invalid.
        """

        return cls.from_settings(load_settings())

    def _forward(self, place: str) -> ForwardGeocodeResult | None:
        if not self.geocoding_enabled or self.gateway is None:
            return None
        try:
            return self.gateway.forward_geocode(place)
        except GeocodingError as exc:
            logger.warning("forward geocode failed reason=%s", exc)
            return None

    def resolve(self, raw_query: str | None) -> SearchResolution:
        """Parse a query and geocode its place reference.

        If the place cannot be geocoded the query is interpreted again as if it named no place, so
        the locality words count as search terms and the region detected in the text applies.
        """

        parsed = parse(raw_query)
        if parsed.place_reference is None:
            return SearchResolution(query=parsed)

        result = self._forward(parsed.place_reference)
        if result is not None:
            logger.info("place geocoded place=%s", parsed.place_reference)
            return SearchResolution(query=parsed, location=result.point)

        logger.info("place not found place=%s", parsed.place_reference)
        return SearchResolution(query=parse(raw_query, extract_places=False))

    def region_for_coordinates(self, lat: float, lng: float) -> Region | None:
        """Classify a coordinate pair into a region via reverse geocoding.

        Returns `None` when the point is outside the US, the geocoder has no answer, or the call
        fails.
        """

        if not self.geocoding_enabled or self.gateway is None:
            return None

        try:
            result = self.gateway.reverse_geocode(lat, lng)
        except GeocodingError as exc:
            logger.warning("reverse geocode failed lat=%s lng=%s reason=%s", lat, lng, exc)
            return None

        return resolve_from_reverse_geocode(result)
