"""Geocoding providers: address -> coordinate and coordinate -> address."""

from geocoding.base import DisabledGeocoder, GeocodeError, Geocoder
from geocoding.google import GoogleGeocoder, build_url, parse_response

__all__ = [
    "DisabledGeocoder",
    "GeocodeError",
    "Geocoder",
    "GoogleGeocoder",
    "build_url",
    "parse_response",
]
