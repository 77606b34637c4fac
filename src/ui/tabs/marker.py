"""Marker tab composition."""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.widgets import Label, Static

from model import MapConfig, MapType, MarkerRecord
from ui.widgets import FieldRow, MapTypeCard, MapView
import ui.ids as ids


def compose_marker_tab(config: MapConfig, on_map_type_change: Callable[[MapType], None]) -> ComposeResult:
    """Compose the marker tab content.

    Widgets start empty; the controller fills them in on mount.

    Args:
        config: Map configuration for the map view
        on_map_type_change: Callback when the map style is cycled

    Yields:
        Textual widgets for the marker tab
    """
    with Horizontal(id=ids.MARKER_TAB_CONTENT):
        with Vertical(id=ids.MAP_CONTAINER):
            yield MapView(config, id=ids.MAP_VIEW)
            yield Static(
                "Arrows move, Enter drops, +/- zoom, c centers (or drag with the mouse)",
                id=ids.MAP_HINT,
            )
        with VerticalScroll(id=ids.MARKER_FIELDS):
            with Container(classes="options-section"):
                yield Label("Position", classes="section-label")
                yield FieldRow(MarkerRecord.lat, placeholder="e.g. 51.5074")
                yield FieldRow(MarkerRecord.lng, placeholder="e.g. -0.1278")
                yield FieldRow(MarkerRecord.zoom, placeholder=str(config.default_zoom))
            with Container(classes="options-section"):
                yield Label("Address", classes="section-label")
                yield FieldRow(MarkerRecord.address, placeholder="Street, city, country")
                yield FieldRow(MarkerRecord.geocode_enabled, value=True)
                yield Static("", id=ids.STATUS_DISPLAY, classes="status-none")
                yield Static("", id=ids.NOTES_DISPLAY)
            with Container(classes="options-section"):
                yield Label("Map style", classes="section-label")
                yield MapTypeCard(on_map_type_change, config.map_type)
