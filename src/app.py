"""Main TUI application for mapmarker."""

import json
import logging
import os
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import (
    Button,
    Checkbox,
    Input,
    Label,
    Static,
    TabbedContent,
    TabPane,
)

from constants import APP_NAME, MAPMARKER_VERSION
from controller import FormSyncManager, MapSyncController, MarkerEvents
from controller import events as ev
from controller.validators import validate_address
from geocoding import Geocoder
from model import MapConfig, MapType, MarkerRecord
from records import MAPMARKER_RECORDS_DIR, MarkerFile, RecordManager, serialize
from ui import MapTypeCard, MapView, RecordItem, compose_marker_tab, compose_record_tab
from ui.ids import css
from ui.modals import LoadRecordModal, SaveRecordModal
import ui.ids as ids

# Set up logging to XDG state directory
def _get_log_path() -> Path:
    """Get the log file path using XDG Base Directory spec."""
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state) / APP_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"{APP_NAME}.log"

logging.basicConfig(
    filename=str(_get_log_path()),
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()


class MapMarkerTUI(App):
    """TUI for placing a map marker and geocoding its address.

    app.run() returns the edited MarkerRecord when the user finishes with
    Done, or None when they cancel.
    """

    TITLE = "Map Marker"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+d", "done", "Done", show=True),
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("ctrl+s", "save_record", "Save", show=True),
    ]

    def __init__(
        self,
        geocoder: Geocoder,
        record: MarkerRecord | None = None,
        config: MapConfig | None = None,
        record_name: str = "",
        version: str = MAPMARKER_VERSION,
        records_dir: Path = MAPMARKER_RECORDS_DIR,
    ) -> None:
        super().__init__()
        self.geocoder = geocoder
        self.record = record or MarkerRecord()
        self.map_config = config or MapConfig()
        self.record_name = record_name
        self.version = version
        self.records_dir = records_dir
        self.events = MarkerEvents()
        self.controller: MapSyncController | None = None
        self._form_sync: FormSyncManager | None = None
        self._record_manager: RecordManager | None = None
        for name in ev.EVENT_NAMES:
            self.events.subscribe(name, self._on_marker_event)
        self.events.subscribe(ev.STATUS_CHANGED, self._on_status_changed)

    def compose(self) -> ComposeResult:
        title = f"mapmarker - {self.record_name}" if self.record_name else "mapmarker"
        yield Horizontal(
            Label(title, id=ids.HEADER_TITLE),
            Button("Load", id=ids.LOAD_RECORD_BTN, variant="default"),
            Button("Save", id=ids.SAVE_RECORD_BTN, variant="default"),
            id=ids.HEADER_CONTAINER,
        )

        with TabbedContent(id=ids.CONFIG_TABS):
            with TabPane("Marker", id=ids.MARKER_TAB):
                yield from compose_marker_tab(self.map_config, self._on_map_type_change)

            with TabPane("Record", id=ids.RECORD_TAB):
                yield from compose_record_tab(self.version)

        yield Horizontal(
            Static("", id=ids.STATUS_BAR),
            Button("Done [^D]", id=ids.DONE_BTN, variant="success"),
            Button("Cancel [Esc]", id=ids.CANCEL_BTN, variant="error"),
            id=ids.FOOTER_BUTTONS,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self._form_sync = FormSyncManager(self)
        self.controller = MapSyncController(
            self.geocoder,
            self.query_one(css(ids.MAP_VIEW), MapView),
            self._form_sync,
            self.map_config,
            self.events,
        )
        self._load_record(self.record)
        self._refresh_records_list()
        self.query_one(css(ids.MAP_VIEW), MapView).focus()

    def on_unmount(self) -> None:
        if self.controller is not None:
            self.controller.close()

    def _load_record(self, record: MarkerRecord) -> None:
        """Show a record: re-initialize the marker from its values."""
        self.controller.initialize(record)
        try:
            self.query_one(MapTypeCard).set_map_type(self.controller.state.map_type)
        except NoMatches:
            log.debug("Map type card not mounted")
        self._update_record_view()

    # =========================================================================
    # Status and Record View
    # =========================================================================

    def _set_status(self, message: str) -> None:
        """Set status bar message."""
        try:
            status = self.query_one(css(ids.STATUS_BAR), Static)
            status.update(message)
        except NoMatches:
            log.debug(f"Status bar not mounted: {message}")

    def _on_marker_event(self, *args: object) -> None:
        self._update_record_view()

    def _on_status_changed(self, code: int, label: str) -> None:
        self._set_status(f"Geocode: {label}")

    def _update_record_view(self) -> None:
        """Update the summary and stored values on the record tab."""
        if self.controller is None:
            return
        record = self.controller.to_record()
        try:
            self.query_one(css(ids.RECORD_SUMMARY), Static).update(str(record))
            self.query_one(css(ids.RECORD_JSON), Static).update(json.dumps(serialize(record), indent=2))
        except NoMatches:
            log.debug("Record tab not mounted")

    # =========================================================================
    # Map Events
    # =========================================================================

    @on(MapView.MarkerDragged)
    def on_marker_dragged(self, event: MapView.MarkerDragged) -> None:
        self.controller.on_marker_dragged(event.lat, event.lng)

    @on(MapView.ZoomChanged)
    def on_map_zoom_changed(self, event: MapView.ZoomChanged) -> None:
        self.controller.on_map_zoom_changed(event.zoom)

    @on(MapView.Shown)
    def on_map_shown(self, event: MapView.Shown) -> None:
        if self.controller is not None:
            self.controller.on_container_visible()

    def _on_map_type_change(self, map_type: MapType) -> None:
        self.controller.on_map_type_changed(map_type)
        self._update_record_view()

    # =========================================================================
    # Form Events
    # =========================================================================

    @on(Input.Blurred, css(ids.ADDRESS_INPUT))
    def on_address_blurred(self, event: Input.Blurred) -> None:
        """Address committed: the field lost focus."""
        self.controller.on_address_committed(validate_address(event.value))
        self._update_record_view()

    @on(Input.Submitted, css(ids.ADDRESS_INPUT))
    def on_address_submitted(self, event: Input.Submitted) -> None:
        # Moving focus on blurs the field, which commits the address
        self.screen.focus_next()

    @on(Input.Changed, css(ids.ZOOM_INPUT))
    def on_zoom_input_changed(self, event: Input.Changed) -> None:
        self.controller.on_zoom_field_edited(event.value)

    @on(Input.Submitted, css(ids.LAT_INPUT))
    @on(Input.Submitted, css(ids.LNG_INPUT))
    def on_coordinates_submitted(self, event: Input.Submitted) -> None:
        lat = self.query_one(css(ids.LAT_INPUT), Input).value
        lng = self.query_one(css(ids.LNG_INPUT), Input).value
        self.controller.on_coordinates_edited(lat, lng)

    @on(Checkbox.Changed, css(ids.GEOCODE_TOGGLE))
    def on_geocode_toggled(self, event: Checkbox.Changed) -> None:
        self.controller.on_geocode_toggled(event.value)
        self._update_record_view()

    # =========================================================================
    # Record Management (using RecordManager)
    # =========================================================================

    def _get_record_manager(self) -> RecordManager:
        """Get or create the record manager."""
        if self._record_manager is None:
            self._record_manager = RecordManager(
                app=self,
                get_record=lambda: self.controller.to_record(),
                on_record_loaded=self._on_record_loaded,
                on_status=self._set_status,
                records_dir=self.records_dir,
            )
        return self._record_manager

    def _refresh_records_list(self) -> None:
        """Refresh the list of saved records on the record tab."""
        try:
            records_list = self.query_one(css(ids.RECORDS_LIST), VerticalScroll)
        except NoMatches:
            log.debug("Records list not found")
            return
        for item in list(records_list.query(RecordItem)):
            item.remove()
        for marker_file in MarkerFile.list_records(self.records_dir):
            records_list.mount(RecordItem(marker_file.path, self._on_load_record_path, self._delete_record))

    @on(Button.Pressed, css(ids.LOAD_RECORD_BTN))
    def on_load_record_pressed(self, event: Button.Pressed) -> None:
        """Open load record modal."""
        self.push_screen(LoadRecordModal(self.records_dir), self._on_load_record_path)

    @on(Button.Pressed, css(ids.SAVE_RECORD_BTN))
    def on_save_record_pressed(self, event: Button.Pressed) -> None:
        """Open save record modal."""
        self.action_save_record()

    def action_save_record(self) -> None:
        self.push_screen(SaveRecordModal(self.record_name), self._on_save_record_result)

    def _on_load_record_path(self, record_path: Path | None) -> None:
        """Handle result from load record modal (or a records list click)."""
        if record_path:
            self._get_record_manager().load_record(record_path)

    def _on_record_loaded(self, record: MarkerRecord) -> None:
        """Called by RecordManager when a record was read."""
        self._load_record(record)

    def _on_save_record_result(self, name: str | None) -> None:
        """Handle result from save record modal."""
        if name and self._get_record_manager().save_record(name):
            self.record_name = name
            self._refresh_records_list()

    def _delete_record(self, item: RecordItem) -> None:
        self._get_record_manager().delete_record(item.record_path)
        item.remove()

    # =========================================================================
    # Done / Cancel
    # =========================================================================

    @on(Button.Pressed, css(ids.DONE_BTN))
    def on_done_pressed(self, event: Button.Pressed) -> None:
        self.action_done()

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel_pressed(self, event: Button.Pressed) -> None:
        self.action_cancel()

    def action_done(self) -> None:
        """Finish editing and return the marker record."""
        record = self.controller.to_record()
        log.info(f"Done: {record}")
        self.exit(record)

    def action_cancel(self) -> None:
        self.exit(None)
