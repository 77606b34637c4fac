"""Surfaces the MapSyncController pushes state into."""

from __future__ import annotations

from typing import Protocol

from model import MapType


class MapSurface(Protocol):
    """The rendered map widget."""

    def place_marker(self, lat: float, lng: float) -> None: ...

    def clear_marker(self) -> None: ...

    def set_zoom(self, zoom: int) -> None: ...

    def set_map_type(self, map_type: MapType) -> None: ...

    def refresh_viewport(self, center: tuple[float, float] | None) -> None:
        """Recompute the rendered viewport and re-center (no state change)."""
        ...


class FormSurface(Protocol):
    """The form fields and status/notes display around the map."""

    def set_coordinates(self, lat: float | None, lng: float | None) -> None: ...

    def set_zoom(self, zoom: int) -> None: ...

    def set_address(self, address: str) -> None: ...

    def set_geocode_enabled(self, enabled: bool) -> None: ...

    def set_status(self, code: int, label: str) -> None: ...

    def set_notes(self, text: str) -> None: ...
