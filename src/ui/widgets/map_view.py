"""MapView: a draggable single-marker map rendered as text."""

from __future__ import annotations

import math

from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget

from constants import MAX_ZOOM, MIN_ZOOM
from model import MapConfig, MapType
from ui import projection

# background, horizontal line, vertical line, crossing, base style
MAP_PALETTES: dict[MapType, tuple[str, str, str, str, str]] = {
    MapType.HYBRID: ("░", "─", "│", "┼", "green"),
    MapType.ROADMAP: (" ", "─", "│", "┼", "bright_black"),
    MapType.SATELLITE: ("▒", "▒", "▒", "▒", "dark_green"),
    MapType.TERRAIN: ("·", "─", "│", "┼", "yellow"),
}

MARKER_GLYPH = "◉"
DRAG_GLYPH = "◎"


def _crosses(low: float, high: float, step: float) -> bool:
    """True if a multiple of step lies in [low, high)."""
    return math.floor(low / step) != math.floor(high / step)


class MapView(Widget, can_focus=True):
    """Terminal map with one marker (implements MapSurface).

    Arrow keys (or a mouse drag) move the marker; the move is only
    reported when it is dropped with Enter/Space (or the mouse button is
    released), mirroring a drag-end event. +/- change the zoom.
    """

    BINDINGS = [
        Binding("left", "nudge(-1, 0)", "West", show=False),
        Binding("right", "nudge(1, 0)", "East", show=False),
        Binding("up", "nudge(0, -1)", "North", show=False),
        Binding("down", "nudge(0, 1)", "South", show=False),
        Binding("enter,space", "drop", "Drop marker", show=True),
        Binding("plus,equals_sign", "zoom(1)", "Zoom in", show=True),
        Binding("minus", "zoom(-1)", "Zoom out", show=True),
        Binding("c", "center", "Center", show=False),
    ]

    class MarkerDragged(Message):
        """The marker was dropped at a new position."""

        def __init__(self, lat: float, lng: float) -> None:
            super().__init__()
            self.lat = lat
            self.lng = lng

    class ZoomChanged(Message):
        """The user zoomed the map."""

        def __init__(self, zoom: int) -> None:
            super().__init__()
            self.zoom = zoom

    class Shown(Message):
        """The map became visible after being hidden."""

    def __init__(self, config: MapConfig | None = None, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.config = config or MapConfig()
        self.center: tuple[float, float] = self.config.default_center
        self.zoom = self.config.default_zoom
        self.map_type = self.config.map_type
        self.marker: tuple[float, float] | None = None
        self._pending: tuple[float, float] | None = None  # position while dragging
        self._mouse_drag = False

    # =========================================================================
    # MapSurface
    # =========================================================================

    def place_marker(self, lat: float, lng: float) -> None:
        self.marker = (lat, lng)
        self._pending = None
        self.center = (lat, lng)
        self.refresh()

    def clear_marker(self) -> None:
        self.marker = None
        self._pending = None
        self.refresh()

    def set_zoom(self, zoom: int) -> None:
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
        self.refresh()

    def set_map_type(self, map_type: MapType) -> None:
        self.map_type = map_type
        self.refresh()

    def refresh_viewport(self, center: tuple[float, float] | None) -> None:
        if center is not None:
            self.center = center
        self.refresh(layout=True)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self) -> Text:
        width, height = self.size.width, self.size.height
        text = Text(no_wrap=True, overflow="crop")
        if width <= 0 or height <= 0:
            return text

        bg, h_line, v_line, cross, style = MAP_PALETTES[self.map_type]
        step = projection.graticule_spacing(self.zoom)
        cx, cy = projection.to_pixels(self.center[0], self.center[1], self.zoom)
        world = projection.world_size(self.zoom)
        half_w = projection.CELL_WIDTH_PX / 2
        half_h = projection.CELL_HEIGHT_PX / 2

        # Mercator is separable: columns only depend on x, rows only on y
        col_lines = []
        for col in range(width):
            x = cx + (col - width // 2) * projection.CELL_WIDTH_PX
            west = projection.x_to_longitude(x - half_w, self.zoom)
            east = projection.x_to_longitude(x + half_w, self.zoom)
            col_lines.append(_crosses(west, east, step))
        row_lines = []
        for row in range(height):
            y = cy + (row - height // 2) * projection.CELL_HEIGHT_PX
            if y + half_h < 0 or y - half_h > world:
                row_lines.append(None)  # beyond the poles
                continue
            north = projection.y_to_latitude(y - half_h, self.zoom)
            south = projection.y_to_latitude(y + half_h, self.zoom)
            row_lines.append(_crosses(south, north, step))

        marker_cell = None
        position = self._pending or self.marker
        if position is not None:
            marker_cell = projection.coordinate_to_cell(
                position[0], position[1], self.center, self.zoom, width, height
            )

        for row in range(height):
            on_row = row_lines[row]
            for col in range(width):
                if marker_cell == (col, row):
                    glyph = DRAG_GLYPH if self._pending else MARKER_GLYPH
                    text.append(glyph, style="bold red" if not self._pending else "bold yellow")
                    continue
                if on_row is None:
                    text.append(" ")
                    continue
                on_col = col_lines[col]
                if on_row and on_col:
                    text.append(cross, style=style)
                elif on_row:
                    text.append(h_line, style=style)
                elif on_col:
                    text.append(v_line, style=style)
                else:
                    text.append(bg, style=f"dim {style}")
            if row < height - 1:
                text.append("\n")
        return text

    # =========================================================================
    # Interaction
    # =========================================================================

    def _cell_position(self, col: int, row: int) -> tuple[float, float]:
        return projection.cell_to_coordinate(
            col, row, self.center, self.zoom, self.size.width, self.size.height
        )

    def action_nudge(self, dx: int, dy: int) -> None:
        """Move the marker one cell (not reported until dropped)."""
        if not self.config.draggable:
            return
        start = self._pending or self.marker or self.center
        x, y = projection.to_pixels(start[0], start[1], self.zoom)
        self._pending = projection.from_pixels(
            x + dx * projection.CELL_WIDTH_PX, y + dy * projection.CELL_HEIGHT_PX, self.zoom
        )
        self.refresh()

    def action_drop(self) -> None:
        if self._pending is None:
            return
        lat, lng = self._pending
        self.marker = self._pending
        self._pending = None
        self.refresh()
        self.post_message(self.MarkerDragged(lat, lng))

    def action_zoom(self, delta: int) -> None:
        zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom + delta))
        if zoom == self.zoom:
            return
        self.zoom = zoom
        self.refresh()
        self.post_message(self.ZoomChanged(zoom))

    def action_center(self) -> None:
        self.refresh_viewport(self.marker)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if not self.config.draggable:
            return
        self.capture_mouse()
        self._mouse_drag = True
        self._pending = self._cell_position(event.x, event.y)
        self.refresh()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._mouse_drag:
            self._pending = self._cell_position(event.x, event.y)
            self.refresh()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._mouse_drag:
            self._mouse_drag = False
            self.release_mouse()
            self.action_drop()

    def on_show(self, event: events.Show) -> None:
        self.post_message(self.Shown())
