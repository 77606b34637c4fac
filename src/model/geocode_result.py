"""Outcome of a single geocode lookup."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeocodeResult:
    """Best match returned by a geocoding provider.

    Forward lookups fill in the coordinate; reverse lookups fill in
    formatted_address (and usually the coordinate of that address).
    """

    status: str  # provider status, e.g. "OK", "ZERO_RESULTS"
    location_type: str | None = None  # e.g. "ROOFTOP"
    latitude: float | None = None
    longitude: float | None = None
    formatted_address: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == "OK" and self.latitude is not None and self.longitude is not None

    @classmethod
    def failure(cls, status: str = "UNKNOWN") -> GeocodeResult:
        return cls(status=status)
