"""Web Mercator projection helpers for the terminal map view.

World pixel coordinates follow the usual tile convention: the whole
world is TILE_SIZE * 2**zoom pixels square, x grows east from the
antimeridian and y grows south from the top edge (~85.05N).
"""

from __future__ import annotations

import math

from constants import MAX_LATITUDE

TILE_SIZE = 256

# Pixels covered by one terminal cell (cells are roughly twice as tall as wide)
CELL_WIDTH_PX = 16
CELL_HEIGHT_PX = 32


def world_size(zoom: int) -> float:
    return TILE_SIZE * (2 ** zoom)


def clamp_latitude(lat: float) -> float:
    return max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))


def wrap_longitude(lng: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return ((lng + 180.0) % 360.0) - 180.0


def to_pixels(lat: float, lng: float, zoom: int) -> tuple[float, float]:
    """Project a coordinate to world pixels at the given zoom."""
    size = world_size(zoom)
    sin_lat = math.sin(math.radians(clamp_latitude(lat)))
    x = (lng + 180.0) / 360.0 * size
    y = (0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)) * size
    return x, y


def x_to_longitude(x: float, zoom: int) -> float:
    """Unwrapped longitude of a world pixel column (may leave [-180, 180))."""
    return x / world_size(zoom) * 360.0 - 180.0


def y_to_latitude(y: float, zoom: int) -> float:
    n = math.pi - 2 * math.pi * y / world_size(zoom)
    return math.degrees(math.atan(math.sinh(n)))


def from_pixels(x: float, y: float, zoom: int) -> tuple[float, float]:
    """Inverse of to_pixels (longitude is wrapped, latitude clamped)."""
    return clamp_latitude(y_to_latitude(y, zoom)), wrap_longitude(x_to_longitude(x, zoom))


def cell_to_coordinate(
    col: int, row: int, center: tuple[float, float], zoom: int, width: int, height: int
) -> tuple[float, float]:
    """Coordinate at the middle of a viewport cell."""
    cx, cy = to_pixels(center[0], center[1], zoom)
    x = cx + (col - width // 2) * CELL_WIDTH_PX
    y = cy + (row - height // 2) * CELL_HEIGHT_PX
    return from_pixels(x, y, zoom)


def coordinate_to_cell(
    lat: float, lng: float, center: tuple[float, float], zoom: int, width: int, height: int
) -> tuple[int, int] | None:
    """Viewport cell containing a coordinate, or None when off-screen."""
    cx, cy = to_pixels(center[0], center[1], zoom)
    x, y = to_pixels(lat, lng, zoom)
    dx = x - cx
    # Take the shorter way round the antimeridian
    size = world_size(zoom)
    if dx > size / 2:
        dx -= size
    elif dx < -size / 2:
        dx += size
    col = width // 2 + round(dx / CELL_WIDTH_PX)
    row = height // 2 + round((y - cy) / CELL_HEIGHT_PX)
    if 0 <= col < width and 0 <= row < height:
        return col, row
    return None


def graticule_spacing(zoom: int) -> float:
    """Degrees between graticule lines, keeping a few lines per screen."""
    span = 360.0 / (2 ** zoom)
    for step in (45.0, 30.0, 15.0, 10.0, 5.0, 2.0, 1.0, 0.5, 0.25, 0.1, 0.05, 0.01, 0.005, 0.001):
        if step <= span * 2:
            return step
    return 0.0005
