"""Per-widget map configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from constants import DEFAULT_ZOOM


class MapType(Enum):
    """Map style variant shown by the map widget."""

    HYBRID = "hybrid"
    ROADMAP = "roadmap"
    SATELLITE = "satellite"
    TERRAIN = "terrain"

    @classmethod
    def parse(cls, name: str | None, default: MapType | None = None) -> MapType:
        """Parse a map type name, falling back to default (HYBRID) when unknown."""
        fallback = default or cls.HYBRID
        if not name:
            return fallback
        try:
            return cls(name.strip().lower())
        except ValueError:
            return fallback


@dataclass(frozen=True)
class MapConfig:
    """Options for one map widget instance.

    Each controller gets its own MapConfig so that tweaking one widget
    (e.g. its default zoom) never leaks into another.
    """

    default_zoom: int = DEFAULT_ZOOM
    default_center: tuple[float, float] = (0.0, 0.0)
    map_type: MapType = MapType.HYBRID
    draggable: bool = True
    lookup_timeout: float | None = None  # seconds; None waits indefinitely
