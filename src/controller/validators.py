"""Validation functions for form field input."""

from constants import MAX_ZOOM
from model import parse_coordinate, parse_zoom


def validate_coordinate(value: str) -> float | None:
    """Validate a latitude/longitude field.

    Accepts a comma as decimal separator ("51,5074").

    Args:
        value: String value from input field

    Returns:
        Parsed float or None if not a finite number
    """
    return parse_coordinate(value)


def validate_zoom(value: str) -> int | None:
    """Validate a zoom field: a number >= 1 (fractions are floored).

    Values above MAX_ZOOM are clamped to it.

    Args:
        value: String value from input field

    Returns:
        Integer zoom or None if invalid
    """
    zoom = parse_zoom(value.strip())
    if zoom is None or zoom < 1:
        return None
    return min(zoom, MAX_ZOOM)


def validate_address(value: str) -> str:
    """Collapse whitespace in an address.

    An empty result is valid (no address); it just never gets geocoded.
    """
    return " ".join(value.split())
