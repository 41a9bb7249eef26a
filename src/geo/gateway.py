"""Geocoding gateway contract and the Nominatim (OpenStreetMap) implementation.

The gateway is the only I/O boundary of the search layer. Implementations raise `GeocodingError` on
transport or response-format failures and return `None` when the service simply has no result; the
search service treats both as "no place could be determined".
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import ValidationError

from src.search.schema import ForwardGeocodeResult, GeoPoint, ReverseGeocodeResult


class GeocodingError(RuntimeError):
    """Raised when the geocoding service fails or returns an unexpected payload."""


class GeocodingGateway(Protocol):
    """Forward/reverse geocoding as consumed by the search service."""

    def forward_geocode(self, place_text: str) -> ForwardGeocodeResult | None: ...

    def reverse_geocode(self, lat: float, lng: float) -> ReverseGeocodeResult | None: ...


@dataclass(frozen=True)
class GeocoderConfig:
    """Configuration for the Nominatim HTTP API."""

    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "RC-Spot-Finder/1.0"
    timeout_s: float = 10.0
    country_codes: str = "us"
    # State-level detail is enough for region classification.
    reverse_zoom: int = 5


def _endpoint_url(base_url: str, path: str, params: dict[str, Any]) -> str:
    return f"{base_url.rstrip('/')}/{path}?{urlencode(params)}"


class NominatimGateway:
    """`GeocodingGateway` backed by the Nominatim `search` and `reverse` JSON endpoints."""

    def __init__(self, config: GeocoderConfig | None = None) -> None:
        self.config = config or GeocoderConfig()

    def _get_json(self, url: str) -> Any:
        req = Request(
            url,
            method="GET",
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
        )

        try:
            with urlopen(req, timeout=self.config.timeout_s) as resp:  # noqa: S310 (fixed geocoder host)
                body = resp.read()
        except HTTPError as exc:
            raise GeocodingError(f"geocoder HTTP error: {exc.code}") from exc
        except (URLError, TimeoutError) as exc:
            raise GeocodingError("geocoder connection error") from exc

        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise GeocodingError("geocoder did not return valid JSON") from exc

    def forward_geocode(self, place_text: str) -> ForwardGeocodeResult | None:
        """Resolve a "locality, state" string to coordinates (first hit only)."""

        url = _endpoint_url(
            self.config.base_url,
            "search",
            {
                "format": "json",
                "q": place_text,
                "limit": 1,
                "countrycodes": self.config.country_codes,
            },
        )
        data = self._get_json(url)
        if not data:
            return None

        try:
            hit = data[0]
            return ForwardGeocodeResult(
                point=GeoPoint(lat=float(hit["lat"]), lng=float(hit["lon"])),
                display_name=hit.get("display_name") or "",
            )
        except (KeyError, IndexError, TypeError, ValueError, ValidationError) as exc:
            raise GeocodingError("unexpected geocoder search response") from exc

    def reverse_geocode(self, lat: float, lng: float) -> ReverseGeocodeResult | None:
        """Resolve coordinates to the state-level administrative area and country."""

        url = _endpoint_url(
            self.config.base_url,
            "reverse",
            {"format": "json", "lat": lat, "lon": lng, "zoom": self.config.reverse_zoom},
        )
        data = self._get_json(url)
        if not isinstance(data, dict) or "error" in data:
            return None

        address = data.get("address")
        if not isinstance(address, dict):
            return None

        return ReverseGeocodeResult(
            administrative_area_name=address.get("state"),
            country_code=address.get("country_code"),
        )

