"""Google Geocoding API client."""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from constants import GEOCODE_ENDPOINT, GEOCODE_HTTP_TIMEOUT, MAPMARKER_VERSION
from geocoding.base import GeocodeError, Geocoder
from model import GeocodeResult

log = logging.getLogger(__name__)


def build_url(
    endpoint: str = GEOCODE_ENDPOINT,
    *,
    address: str | None = None,
    latlng: tuple[float, float] | None = None,
    api_key: str | None = None,
) -> str:
    """Build a geocode request URL for either an address or a coordinate."""
    params: dict[str, str] = {}
    if address is not None:
        params["address"] = address
    if latlng is not None:
        params["latlng"] = f"{latlng[0]!r},{latlng[1]!r}"
    if api_key:
        params["key"] = api_key
    return f"{endpoint}?{urllib.parse.urlencode(params)}"


def parse_response(data: Any) -> GeocodeResult:
    """Turn a decoded Geocoding API response into a GeocodeResult.

    Only the first (best) result is used.

    Raises:
        GeocodeError: If the body is not a Geocoding API response.
    """
    if not isinstance(data, dict):
        raise GeocodeError("Unexpected geocode response")
    status = data.get("status")
    if not isinstance(status, str) or not status:
        raise GeocodeError("Geocode response has no status")
    if status != "OK":
        return GeocodeResult.failure(status)

    results = data.get("results") or []
    if not results:
        return GeocodeResult.failure("ZERO_RESULTS")
    try:
        best = results[0]
        geometry = best["geometry"]
        location = geometry["location"]
        return GeocodeResult(
            status=status,
            location_type=geometry.get("location_type"),
            latitude=float(location["lat"]),
            longitude=float(location["lng"]),
            formatted_address=best.get("formatted_address", ""),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise GeocodeError(f"Malformed geocode result: {e}") from e


class GoogleGeocoder(Geocoder):
    """Geocoder backed by the Google Geocoding web service."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = GEOCODE_HTTP_TIMEOUT,
        endpoint: str = GEOCODE_ENDPOINT,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.endpoint = endpoint

    async def forward(self, address: str) -> GeocodeResult:
        url = build_url(self.endpoint, address=address, api_key=self.api_key)
        return await self._lookup(url)

    async def reverse(self, lat: float, lng: float) -> GeocodeResult:
        url = build_url(self.endpoint, latlng=(lat, lng), api_key=self.api_key)
        return await self._lookup(url)

    async def _lookup(self, url: str) -> GeocodeResult:
        data = await asyncio.to_thread(self._fetch_json, url)
        return parse_response(data)

    def _fetch_json(self, url: str) -> Any:
        """Blocking GET + JSON decode (runs in a worker thread)."""
        log.debug(f"GET {url.split('&key=')[0]}")
        req = urllib.request.Request(
            url, headers={"Accept": "application/json", "User-Agent": f"mapmarker/{MAPMARKER_VERSION}"}
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return json.loads(response.read().decode())
        except (urllib.error.URLError, OSError) as e:
            raise GeocodeError(f"Geocode request failed: {e}") from e
        except ValueError as e:
            raise GeocodeError(f"Geocode response is not JSON: {e}") from e
