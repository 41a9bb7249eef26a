"""Geocoding integration.

The search layer only consumes the `GeocodingGateway` contract; `NominatimGateway` is the default
HTTP implementation.
"""
