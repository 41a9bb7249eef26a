"""Tests for the Nominatim gateway (network calls are monkeypatched)."""

from __future__ import annotations

import json
from typing import Any
from urllib.error import URLError
from urllib.parse import parse_qs, urlparse

import pytest

from src.geo import gateway as gateway_module
from src.geo.gateway import GeocoderConfig, GeocodingError, NominatimGateway
from src.search.schema import GeoPoint


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def _install_urlopen(monkeypatch: pytest.MonkeyPatch, payload: Any) -> list[Any]:
    requests: list[Any] = []
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()

    def fake_urlopen(req: Any, timeout: float) -> _FakeResponse:
        requests.append((req, timeout))
        return _FakeResponse(body)

    monkeypatch.setattr(gateway_module, "urlopen", fake_urlopen)
    return requests


def test_forward_geocode(monkeypatch: pytest.MonkeyPatch) -> None:
    requests = _install_urlopen(
        monkeypatch,
        [{"lat": "43.97", "lon": "-124.10", "display_name": "Florence, Lane County, Oregon"}],
    )

    result = NominatimGateway(GeocoderConfig(timeout_s=3.0)).forward_geocode("florence, or")

    assert result is not None
    assert result.point == GeoPoint(lat=43.97, lng=-124.10)
    assert result.display_name.startswith("Florence")

    req, timeout = requests[0]
    query = parse_qs(urlparse(req.full_url).query)
    assert urlparse(req.full_url).path == "/search"
    assert query["q"] == ["florence, or"]
    assert query["countrycodes"] == ["us"]
    assert query["limit"] == ["1"]
    assert req.get_header("User-agent") == "RC-Spot-Finder/1.0"
    assert timeout == 3.0


def test_forward_geocode_no_hits(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_urlopen(monkeypatch, [])
    assert NominatimGateway().forward_geocode("nowhere, or") is None


def test_forward_geocode_malformed_hit(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_urlopen(monkeypatch, [{"display_name": "missing coordinates"}])
    with pytest.raises(GeocodingError):
        NominatimGateway().forward_geocode("florence, or")


def test_invalid_json_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_urlopen(monkeypatch, b"<html>rate limited</html>")
    with pytest.raises(GeocodingError):
        NominatimGateway().forward_geocode("florence, or")


def test_connection_error_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(req: Any, timeout: float) -> _FakeResponse:
        raise URLError("down")

    monkeypatch.setattr(gateway_module, "urlopen", fake_urlopen)
    with pytest.raises(GeocodingError):
        NominatimGateway().reverse_geocode(44.0, -121.3)


def test_reverse_geocode(monkeypatch: pytest.MonkeyPatch) -> None:
    requests = _install_urlopen(
        monkeypatch,
        {"address": {"state": "Oregon", "country": "United States", "country_code": "us"}},
    )

    result = NominatimGateway().reverse_geocode(44.0, -121.3)

    assert result is not None
    assert result.administrative_area_name == "Oregon"
    assert result.country_code == "us"

    req, _ = requests[0]
    query = parse_qs(urlparse(req.full_url).query)
    assert urlparse(req.full_url).path == "/reverse"
    assert query["zoom"] == ["5"]


def test_reverse_geocode_error_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_urlopen(monkeypatch, {"error": "Unable to geocode"})
    assert NominatimGateway().reverse_geocode(0.0, 0.0) is None

