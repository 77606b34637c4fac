"""Geocode status taxonomy: integer code <-> provider key <-> label."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class GeocodeStatus(IntEnum):
    """Outcome of the most recent geocode lookup for a marker.

    The integer values are persisted alongside the marker, so they must
    never change.
    """

    NA = 0
    OK = 1
    OK_ROOFTOP = 2
    OK_RANGE_INTERPOLATED = 3
    OK_GEOMETRIC_CENTER = 4
    OK_APPROXIMATE = 5

    UNKNOWN = -1
    ZERO_RESULTS = -2
    OVER_QUERY_LIMIT = -3
    REQUEST_DENIED = -4
    INVALID_REQUEST = -5

    DISABLED = -100

    @property
    def key(self) -> str:
        """Provider-style key, e.g. "OK_ROOFTOP"."""
        return _KEYS[self]

    @property
    def label(self) -> str:
        """Human-readable label, e.g. "OK ROOFTOP"."""
        return _KEYS[self].replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self.value >= 1

    @classmethod
    def from_code(cls, code: Any) -> GeocodeStatus:
        """Look up a status by integer code; unrecognized codes are UNKNOWN."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.UNKNOWN

    @classmethod
    def from_key(cls, key: str) -> GeocodeStatus:
        """Look up a status by provider key; unrecognized keys are UNKNOWN."""
        return _BY_KEY.get(key, cls.UNKNOWN)

    @classmethod
    def from_provider(cls, status: str | None, location_type: str | None = None) -> GeocodeStatus:
        """Map a provider response onto a status.

        A successful response is refined by its location type
        ("OK" + "ROOFTOP" -> OK_ROOFTOP) and falls back to plain OK when
        the combination is not in the table. Failure strings only map to
        the failure codes a provider can actually report.
        """
        if status == "OK":
            if location_type:
                return _BY_KEY.get(f"OK_{location_type}", cls.OK)
            return cls.OK
        return _PROVIDER_FAILURES.get(status or "", cls.UNKNOWN)


_KEYS: dict[GeocodeStatus, str] = {
    GeocodeStatus.NA: "N/A",
    GeocodeStatus.OK: "OK",
    GeocodeStatus.OK_ROOFTOP: "OK_ROOFTOP",
    GeocodeStatus.OK_RANGE_INTERPOLATED: "OK_RANGE_INTERPOLATED",
    GeocodeStatus.OK_GEOMETRIC_CENTER: "OK_GEOMETRIC_CENTER",
    GeocodeStatus.OK_APPROXIMATE: "OK_APPROXIMATE",
    GeocodeStatus.UNKNOWN: "UNKNOWN",
    GeocodeStatus.ZERO_RESULTS: "ZERO_RESULTS",
    GeocodeStatus.OVER_QUERY_LIMIT: "OVER_QUERY_LIMIT",
    GeocodeStatus.REQUEST_DENIED: "REQUEST_DENIED",
    GeocodeStatus.INVALID_REQUEST: "INVALID_REQUEST",
    GeocodeStatus.DISABLED: "Geocode OFF",
}

_BY_KEY: dict[str, GeocodeStatus] = {key: status for status, key in _KEYS.items()}

_PROVIDER_FAILURES: dict[str, GeocodeStatus] = {
    status.key: status
    for status in (
        GeocodeStatus.ZERO_RESULTS,
        GeocodeStatus.OVER_QUERY_LIMIT,
        GeocodeStatus.REQUEST_DENIED,
        GeocodeStatus.INVALID_REQUEST,
    )
}
