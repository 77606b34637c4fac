"""Widget ID constants for the TUI.

Using constants prevents typos and makes refactoring easier.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, STATUS_BAR
        self.query_one(css(STATUS_BAR), Static)
    """
    return f"#{widget_id}"

# Container IDs
HEADER_CONTAINER = "header-container"
HEADER_TITLE = "header-title"
CONFIG_TABS = "config-tabs"
MARKER_TAB = "marker-tab"
RECORD_TAB = "record-tab"
FOOTER_BUTTONS = "footer-buttons"
STATUS_BAR = "status-bar"

# Header buttons
LOAD_RECORD_BTN = "load-record-btn"
SAVE_RECORD_BTN = "save-record-btn"

# Marker tab IDs
MARKER_TAB_CONTENT = "marker-tab-content"
MAP_CONTAINER = "map-container"
MAP_VIEW = "map-view"
MAP_HINT = "map-hint"
MARKER_FIELDS = "marker-fields"

# Form fields (must match MarkerRecord widget ids)
LAT_INPUT = "marker-lat"
LNG_INPUT = "marker-lng"
ZOOM_INPUT = "marker-zoom"
ADDRESS_INPUT = "marker-address"
GEOCODE_TOGGLE = "marker-geocode"
STATUS_DISPLAY = "marker-status"
NOTES_DISPLAY = "marker-notes"

# Map type card
MAP_TYPE_BTN = "map-type-btn"
MAP_TYPE_DESC = "map-type-desc"

# Record tab IDs
RECORD_TAB_CONTENT = "record-tab-content"
RECORD_SUMMARY = "record-summary"
RECORD_JSON = "record-json"
RECORDS_LIST = "records-list"

# Footer buttons
DONE_BTN = "done-btn"
CANCEL_BTN = "cancel-btn"

# Modal IDs
MODAL_TITLE = "modal-title"
MODAL_RECORD_LIST = "modal-record-list"
MODAL_BUTTONS = "modal-buttons"
NO_RECORDS = "no-records"
RECORD_NAME_INPUT = "record-name-input"
MODAL_SAVE_BTN = "modal-save-btn"
MODAL_CANCEL_BTN = "modal-cancel-btn"
