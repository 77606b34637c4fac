"""Geocoder interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from model import GeocodeResult


class GeocodeError(Exception):
    """Raised when a lookup fails below the provider protocol (network, bad JSON)."""


class Geocoder(ABC):
    """An asynchronous geocoding provider.

    Provider-reported failures (zero results, quota, ...) come back as a
    GeocodeResult with that status. Only transport and parse failures
    raise GeocodeError.
    """

    @abstractmethod
    async def forward(self, address: str) -> GeocodeResult:
        """Resolve an address to its best-match coordinate."""

    @abstractmethod
    async def reverse(self, lat: float, lng: float) -> GeocodeResult:
        """Resolve a coordinate to its best-match address."""


class DisabledGeocoder(Geocoder):
    """Geocoder used offline: every request is denied without network access."""

    async def forward(self, address: str) -> GeocodeResult:
        return GeocodeResult.failure("REQUEST_DENIED")

    async def reverse(self, lat: float, lng: float) -> GeocodeResult:
        return GeocodeResult.failure("REQUEST_DENIED")
