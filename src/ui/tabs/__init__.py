"""Tab modules for the Map Marker TUI."""

from ui.tabs.marker import compose_marker_tab
from ui.tabs.record import compose_record_tab

__all__ = [
    "compose_marker_tab",
    "compose_record_tab",
]
