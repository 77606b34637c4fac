"""Model classes for mapmarker."""

from model.ui_field import Field, RecordBase, UIField
from model.coordinates import format_coordinate, parse_coordinate, parse_zoom
from model.geocode_status import GeocodeStatus
from model.geocode_result import GeocodeResult
from model.map_config import MapConfig, MapType
from model.marker_record import MarkerRecord
from model.marker_state import MarkerState

__all__ = [
    "Field",
    "RecordBase",
    "UIField",
    "format_coordinate",
    "parse_coordinate",
    "parse_zoom",
    "GeocodeStatus",
    "GeocodeResult",
    "MapConfig",
    "MapType",
    "MarkerRecord",
    "MarkerState",
]
