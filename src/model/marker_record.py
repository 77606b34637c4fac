"""MarkerRecord: the persisted values of one map marker."""

from __future__ import annotations

from typing import Any

from model.coordinates import normalize_coordinate_text, parse_zoom
from model.geocode_status import GeocodeStatus
from model.ui_field import Field, RecordBase, UIField


def _normalize_address(value: Any) -> str:
    """Collapse the address to a single line of text."""
    if value is None:
        return ""
    return " ".join(str(value).split())


def _normalize_zoom(value: Any) -> int:
    # 0 means "use the widget's default zoom"
    zoom = parse_zoom(value)
    return zoom if zoom is not None and zoom > 0 else 0


def _normalize_status(value: Any) -> int:
    return int(GeocodeStatus.from_code(value))


class MarkerRecord(RecordBase):
    """The stored form of a marker, as loaded from and saved to disk."""

    lat = UIField(
        type_=str,
        default="",
        widget_id="marker-lat",
        label="Latitude",
        explanation="Decimal degrees, north positive",
        normalize=normalize_coordinate_text,
    )
    lng = UIField(
        type_=str,
        default="",
        widget_id="marker-lng",
        label="Longitude",
        explanation="Decimal degrees, east positive",
        normalize=normalize_coordinate_text,
    )
    address = UIField(
        type_=str,
        default="",
        widget_id="marker-address",
        label="Address",
        explanation="Looked up when the field loses focus",
        normalize=_normalize_address,
    )
    zoom = UIField(
        type_=int,
        default=0,
        widget_id="marker-zoom",
        label="Zoom",
        explanation="1 (world) and up",
        normalize=_normalize_zoom,
    )
    geocode_enabled = UIField(
        type_=bool,
        default=True,
        widget_id="marker-geocode",
        label="Geocode address",
        explanation="Resolve the address to a position and back",
        normalize=bool,
    )
    status = Field(type_=int, default=0, normalize=_normalize_status)
    map_type = Field(type_=str, default="hybrid", normalize=lambda v: str(v or "hybrid").lower())

    @property
    def status_label(self) -> str:
        return GeocodeStatus.from_code(self.status).label

    def __str__(self) -> str:
        return f"{self.address} ({self.lat}, {self.lng}, {self.zoom}) [{self.status_label}]"

    def __repr__(self) -> str:
        return f"MarkerRecord({self.to_dict()!r})"
