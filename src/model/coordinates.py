"""Coordinate and zoom normalization shared by the record and state models."""

from __future__ import annotations

import math
from typing import Any


def parse_coordinate(value: Any) -> float | None:
    """Parse a latitude/longitude value into a finite float.

    Strings may use a comma as decimal separator ("40,7128"). Anything
    that is not a finite number (including booleans) returns None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_coordinate_text(value: Any) -> str:
    """Normalize a persisted coordinate string: dot-decimal, or "" if invalid."""
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    number = parse_coordinate(value)
    if number is None:
        return ""
    return value if isinstance(value, str) else repr(number)


def parse_zoom(value: Any) -> int | None:
    """Coerce a zoom value to an integer (floor), or None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return math.floor(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def format_coordinate(value: float | None) -> str:
    """Format a coordinate for a form field ("" when unset)."""
    if value is None:
        return ""
    return repr(value)
