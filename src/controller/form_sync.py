"""FormSyncManager: pushes MarkerState into the Textual form widgets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from textual.css.query import NoMatches
from textual.widgets import Checkbox, Input, Static

from controller.field_mappings import MAPPINGS_BY_ATTR, FieldMapping
from ui.ids import css
import ui.ids as ids

if TYPE_CHECKING:
    from textual.app import App

log = logging.getLogger(__name__)

# Status codes >= 1 are successes, < 0 failures, 0 means "no lookup yet"
_STATUS_CLASSES = ("status-ok", "status-error", "status-none")


class FormSyncManager:
    """The form side of the marker: implements FormSurface over Textual widgets.

    Values are written with the widget's change messages suppressed, so
    a value pushed from the controller never comes back as a user edit.

    Widgets are looked up once and cached.
    """

    def __init__(self, app: App) -> None:
        self.app = app
        self._widget_cache: dict[str, Any] = {}

    def get_widget(self, widget_id: str, widget_type: type) -> Any | None:
        """Get a widget by ID, using cache if available."""
        if widget_id in self._widget_cache:
            return self._widget_cache[widget_id]
        try:
            widget = self.app.query_one(css(widget_id), widget_type)
            self._widget_cache[widget_id] = widget
            return widget
        except NoMatches:
            return None

    def _push(self, mapping: FieldMapping, value: Any) -> None:
        widget = self.get_widget(mapping.widget_id, mapping.widget_type)
        if widget is None:
            log.debug(f"Widget {mapping.widget_id} not mounted")
            return
        if mapping.inverse_transform:
            value = mapping.inverse_transform(value)
        if mapping.widget_type is Checkbox:
            with widget.prevent(Checkbox.Changed):
                widget.value = bool(value)
        else:
            with widget.prevent(Input.Changed):
                widget.value = "" if value is None else str(value)

    def push_attr(self, state_attr: str, value: Any) -> None:
        """Write one MarkerState attribute into its widget."""
        self._push(MAPPINGS_BY_ATTR[state_attr], value)

    # FormSurface

    def set_coordinates(self, lat: float | None, lng: float | None) -> None:
        self.push_attr("latitude", lat)
        self.push_attr("longitude", lng)

    def set_zoom(self, zoom: int) -> None:
        self.push_attr("zoom", zoom)

    def set_address(self, address: str) -> None:
        self.push_attr("address", address)

    def set_geocode_enabled(self, enabled: bool) -> None:
        self.push_attr("geocode_enabled", enabled)

    def set_status(self, code: int, label: str) -> None:
        status = self.get_widget(ids.STATUS_DISPLAY, Static)
        if status is None:
            return
        status.update(f"Status: {label} ({code})")
        status.remove_class(*_STATUS_CLASSES)
        if code >= 1:
            status.add_class("status-ok")
        elif code < 0:
            status.add_class("status-error")
        else:
            status.add_class("status-none")

    def set_notes(self, text: str) -> None:
        notes = self.get_widget(ids.NOTES_DISPLAY, Static)
        if notes is not None:
            notes.update(text)
