"""UI module containing widgets, styles, and tab compositions."""

from ui.widgets import (
    FieldRow,
    MapTypeCard,
    MapView,
    RecordItem,
)
from ui.tabs import (
    compose_marker_tab,
    compose_record_tab,
)
from ui import ids

__all__ = [
    # Widgets
    "FieldRow",
    "MapTypeCard",
    "MapView",
    "RecordItem",
    # Tab composers
    "compose_marker_tab",
    "compose_record_tab",
]
