"""Custom Textual widgets for mapmarker.

This package contains all custom widgets organized by domain.
"""

from ui.widgets.map_view import MapView
from ui.widgets.map_type import MapTypeCard
from ui.widgets.field_row import FieldRow
from ui.widgets.records import RecordItem

__all__ = [
    # Map widgets
    "MapView",
    "MapTypeCard",
    # Form widgets
    "FieldRow",
    # Record widgets
    "RecordItem",
]
