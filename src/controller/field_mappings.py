"""Field mapping registry for MarkerState -> form widget synchronization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from textual.widgets import Checkbox, Input

from model import MarkerRecord, format_coordinate


@dataclass
class FieldMapping:
    """Maps a form widget to a MarkerState attribute."""

    widget_id: str
    state_attr: str  # e.g., "latitude"
    widget_type: type  # Checkbox or Input
    inverse_transform: Callable[[Any], Any] | None = None  # Transform state value to widget value


# Widget IDs come from the record's field metadata so the form and the
# persisted record can never disagree about which widget holds what
FIELD_MAPPINGS: list[FieldMapping] = [
    FieldMapping(MarkerRecord.lat.widget_id, "latitude", Input, format_coordinate),
    FieldMapping(MarkerRecord.lng.widget_id, "longitude", Input, format_coordinate),
    FieldMapping(MarkerRecord.zoom.widget_id, "zoom", Input, str),
    FieldMapping(MarkerRecord.address.widget_id, "address", Input),
    FieldMapping(MarkerRecord.geocode_enabled.widget_id, "geocode_enabled", Checkbox, bool),
]

MAPPINGS_BY_ATTR: dict[str, FieldMapping] = {m.state_attr: m for m in FIELD_MAPPINGS}
