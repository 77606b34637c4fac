"""MarkerState: authoritative in-memory state of one map marker."""

from __future__ import annotations

import logging
from typing import Any

from model.coordinates import format_coordinate, parse_coordinate, parse_zoom
from model.geocode_result import GeocodeResult
from model.geocode_status import GeocodeStatus
from model.map_config import MapConfig, MapType
from model.marker_record import MarkerRecord

log = logging.getLogger(__name__)

# Statuses that say nothing about whether the current address was looked up
_NO_LOOKUP_STATUSES = (GeocodeStatus.NA, GeocodeStatus.DISABLED)


class MarkerState:
    """Coordinate, zoom, address and geocode status of a marker.

    Latitude and longitude are either both finite floats or both None.
    The status is always a GeocodeStatus member. Only the
    MapSyncController mutates a live instance; the methods here never
    trigger lookups themselves.
    """

    def __init__(self, config: MapConfig | None = None) -> None:
        self.config = config or MapConfig()
        self.latitude: float | None = None
        self.longitude: float | None = None
        self.zoom: int = self.config.default_zoom
        self.address: str = ""
        self.geocode_enabled: bool = True
        self.geocode_status: GeocodeStatus = GeocodeStatus.NA
        self.map_type: MapType = self.config.map_type
        # Address the most recent forward lookup was issued for, and the
        # status it produced (reused when the same address is committed again)
        self.last_geocoded_address: str = ""
        self.last_lookup_status: GeocodeStatus = GeocodeStatus.NA

    @classmethod
    def from_record(cls, record: MarkerRecord, config: MapConfig | None = None) -> MarkerState:
        """Build state from persisted values."""
        state = cls(config)
        state.set_position(record.lat, record.lng)
        state.set_zoom(record.zoom)
        state.set_address(record.address)
        state.geocode_enabled = record.geocode_enabled
        state.map_type = MapType.parse(record.map_type, state.config.map_type)
        status = GeocodeStatus.from_code(record.status)
        state.geocode_status = status
        if record.address and status not in _NO_LOOKUP_STATUSES:
            state.last_geocoded_address = record.address
            state.last_lookup_status = status
        return state

    def to_record(self) -> MarkerRecord:
        """Snapshot the state into a persistable record."""
        return MarkerRecord(
            lat=format_coordinate(self.latitude),
            lng=format_coordinate(self.longitude),
            address=self.address,
            zoom=self.zoom,
            status=int(self.geocode_status),
            geocode_enabled=self.geocode_enabled,
            map_type=self.map_type.value,
        )

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def position(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude

    def set_position(self, lat: Any, lng: Any) -> bool:
        """Store a coordinate pair; an invalid component clears both.

        Returns True if a position is set afterwards.
        """
        parsed_lat = parse_coordinate(lat)
        parsed_lng = parse_coordinate(lng)
        if parsed_lat is None or parsed_lng is None:
            self.latitude = None
            self.longitude = None
            return False
        self.latitude = parsed_lat
        self.longitude = parsed_lng
        return True

    def clear_position(self) -> None:
        self.latitude = None
        self.longitude = None

    def set_zoom(self, zoom: Any) -> int:
        """Store floor(zoom); values below 1 (or non-numeric) use the default zoom."""
        value = parse_zoom(zoom)
        if value is None or value < 1:
            value = self.config.default_zoom
        self.zoom = value
        return value

    def set_address(self, text: str) -> None:
        self.address = text

    def needs_geocode(self, address: str | None = None) -> bool:
        """True if a forward lookup should be issued for the address."""
        if address is None:
            address = self.address
        return self.geocode_enabled and address != self.last_geocoded_address

    def mark_geocode_issued(self, address: str) -> None:
        self.last_geocoded_address = address

    def forget_geocoded_address(self) -> None:
        """Drop the lookup cache so the next commit of any address is looked up."""
        self.last_geocoded_address = ""
        self.last_lookup_status = GeocodeStatus.NA

    def reuse_cached_status(self) -> GeocodeStatus:
        """Restore the status of the last lookup for the unchanged address."""
        self.geocode_status = self.last_lookup_status
        return self.geocode_status

    def disable_geocoding(self) -> None:
        self.geocode_enabled = False
        self.geocode_status = GeocodeStatus.DISABLED

    def apply_geocode_result(self, result: GeocodeResult, *, keep_position: bool = False) -> GeocodeStatus:
        """Merge a lookup outcome into the state.

        The provider status is mapped onto GeocodeStatus. A success
        overwrites the coordinate and a failure clears it, so a failed
        lookup never leaves stale coordinates behind. Pass
        keep_position=True when the position is authoritative from
        elsewhere (a drag, or an interactive edit that must not lose the
        marker).
        """
        status = GeocodeStatus.from_provider(result.status, result.location_type)
        if status.is_success and not result.succeeded:
            # "OK" without a coordinate is not a usable answer
            status = GeocodeStatus.UNKNOWN
        self.geocode_status = status
        self.last_lookup_status = status
        if not keep_position:
            if status.is_success:
                self.set_position(result.latitude, result.longitude)
            else:
                self.clear_position()
        log.debug(f"Geocode result {status.key} for {self.address!r}")
        return status

    def status_label(self) -> str:
        return self.geocode_status.label

    def __str__(self) -> str:
        return str(self.to_record())
