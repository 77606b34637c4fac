"""MapSyncController: keeps map, form fields and geocoder consistent."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from controller import events as ev
from controller.events import MarkerEvents
from controller.surfaces import FormSurface, MapSurface
from controller.validators import validate_zoom
from geocoding import GeocodeError, Geocoder
from model import GeocodeResult, GeocodeStatus, MapConfig, MapType, MarkerRecord, MarkerState, parse_zoom

log = logging.getLogger(__name__)

FORWARD = "forward"
REVERSE = "reverse"

NOTES_DISABLED = "Geocoding is disabled"


@dataclass(frozen=True)
class LookupRequest:
    """One issued lookup. Only the request with the latest sequence is applied."""

    sequence: int
    kind: str  # FORWARD or REVERSE
    address: str = ""
    position: tuple[float, float] | None = None


class MapSyncController:
    """Mediator between the map widget, the form fields and the geocoder.

    Every handler is one state transition: it updates MarkerState, then
    pushes the result to the surfaces that did NOT originate the event
    (a drag never re-positions the map, an address edit never rewrites
    the address field). Lookups run as asyncio tasks; each gets a
    sequence number and a completion is dropped unless it belongs to the
    most recently issued request.

    Example usage:
        controller = MapSyncController(geocoder, map_view, form_sync, config)
        controller.initialize(record)

        # wired to UI events:
        controller.on_marker_dragged(51.5074, -0.1278)
        controller.on_address_committed("1600 Amphitheatre Parkway")
    """

    def __init__(
        self,
        geocoder: Geocoder,
        map_surface: MapSurface,
        form_surface: FormSurface,
        config: MapConfig | None = None,
        events: MarkerEvents | None = None,
    ) -> None:
        self.geocoder = geocoder
        self.map = map_surface
        self.form = form_surface
        self.config = config or MapConfig()
        self.events = events or MarkerEvents()
        self.state = MarkerState(self.config)
        self._sequence = 0
        self._forward_in_flight = False
        self._tasks: set[asyncio.Task[Any]] = set()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self, record: MarkerRecord) -> None:
        """Build state from persisted values and push it to every surface."""
        self._supersede()
        self.state = MarkerState.from_record(record, self.config)
        state = self.state
        log.info(f"Initialized marker: {state}")

        self.map.set_map_type(state.map_type)
        self.map.set_zoom(state.zoom)
        if state.has_position:
            self.map.place_marker(state.latitude, state.longitude)
        else:
            self.map.clear_marker()

        self.form.set_coordinates(state.latitude, state.longitude)
        self.form.set_zoom(state.zoom)
        self.form.set_address(state.address)
        self.form.set_geocode_enabled(state.geocode_enabled)
        self.form.set_status(int(state.geocode_status), state.status_label())
        self.form.set_notes("" if state.geocode_enabled else NOTES_DISABLED)

    def close(self) -> None:
        """Discard the results of any lookup still in flight."""
        self._supersede()

    def to_record(self) -> MarkerRecord:
        return self.state.to_record()

    async def wait_for_lookups(self) -> None:
        """Wait until every issued lookup task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # =========================================================================
    # Map-originated events
    # =========================================================================

    def on_marker_dragged(self, lat: float, lng: float) -> LookupRequest | None:
        """Marker dropped at (lat, lng): update fields, reverse geocode."""
        if not self.state.set_position(lat, lng):
            log.debug(f"Ignoring drag to invalid position ({lat!r}, {lng!r})")
            self.form.set_coordinates(None, None)
            self._emit_position()
            return None
        self.form.set_coordinates(self.state.latitude, self.state.longitude)
        self._emit_position()
        if self.state.geocode_enabled:
            return self._issue(REVERSE, position=self.state.position)
        return None

    def on_map_zoom_changed(self, zoom: int) -> None:
        value = self.state.set_zoom(zoom)
        self.form.set_zoom(value)
        self.events.emit(ev.ZOOM_CHANGED, value)

    def on_container_visible(self) -> None:
        """Map container was shown again: fix up rendering only."""
        self.map.refresh_viewport(self.state.position or self.config.default_center)

    # =========================================================================
    # Form-originated events
    # =========================================================================

    def on_zoom_field_edited(self, text: str) -> None:
        zoom = validate_zoom(text)
        if zoom is None:
            return  # keep the last valid zoom until the field holds one
        value = self.state.set_zoom(zoom)
        self.map.set_zoom(value)
        if value != parse_zoom(text.strip()):
            self.form.set_zoom(value)  # clamped to MAX_ZOOM
        self.events.emit(ev.ZOOM_CHANGED, value)

    def on_coordinates_edited(self, lat: str, lng: str) -> LookupRequest | None:
        """Coordinates typed into the fields: move the marker, reverse geocode."""
        if self.state.set_position(lat, lng):
            self.map.place_marker(self.state.latitude, self.state.longitude)
        else:
            self.map.clear_marker()
        self._emit_position()
        if self.state.geocode_enabled and self.state.has_position:
            return self._issue(REVERSE, position=self.state.position)
        return None

    def on_address_committed(self, address: str | None = None) -> LookupRequest | None:
        """Address field lost focus: forward geocode the current address."""
        state = self.state
        if address is not None:
            state.set_address(address)
        address = state.address

        if not state.geocode_enabled:
            self._set_status(GeocodeStatus.DISABLED)
            self.form.set_notes(NOTES_DISABLED)
            return None
        if not address.strip():
            return None
        if not state.needs_geocode(address):
            if self._forward_in_flight:
                log.debug(f"Lookup for {address!r} already in flight")
                return None
            log.debug(f"Address unchanged since last lookup: {address!r}")
            self._set_status(state.reuse_cached_status())
            return None

        return self._issue(FORWARD, address=address)

    def on_geocode_toggled(self, enabled: bool) -> LookupRequest | None:
        if not enabled:
            self.state.disable_geocoding()
            self._supersede()
            self._publish_status()
            self.form.set_notes(NOTES_DISABLED)
            return None
        self.state.geocode_enabled = True
        self._set_status(self.state.reuse_cached_status())
        self.form.set_notes("")
        return self.on_address_committed()

    def on_map_type_changed(self, map_type: MapType) -> None:
        self.state.map_type = map_type
        self.map.set_map_type(map_type)

    # =========================================================================
    # Lookups
    # =========================================================================

    def _supersede(self) -> None:
        """Invalidate every lookup issued so far."""
        if self._forward_in_flight:
            # The address it was issued for never got a result
            self.state.forget_geocoded_address()
            self._forward_in_flight = False
        self._sequence += 1

    def _issue(
        self,
        kind: str,
        *,
        address: str = "",
        position: tuple[float, float] | None = None,
    ) -> LookupRequest:
        self._supersede()
        request = LookupRequest(self._sequence, kind, address, position)
        if kind == FORWARD:
            self.state.mark_geocode_issued(address)
            self._forward_in_flight = True
        log.info(f"Issuing {kind} lookup #{request.sequence}: {address or position}")
        task = asyncio.get_running_loop().create_task(self._run_lookup(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return request

    async def _run_lookup(self, request: LookupRequest) -> None:
        try:
            result = await self._call_provider(request)
        except GeocodeError as e:
            log.warning(f"Lookup #{request.sequence} failed: {e}")
            result = GeocodeResult.failure("UNKNOWN")
        except asyncio.TimeoutError:
            log.warning(f"Lookup #{request.sequence} timed out after {self.config.lookup_timeout}s")
            result = GeocodeResult.failure("UNKNOWN")
        self.complete_lookup(request, result)

    async def _call_provider(self, request: LookupRequest) -> GeocodeResult:
        if request.kind == FORWARD:
            pending = self.geocoder.forward(request.address)
        else:
            pending = self.geocoder.reverse(*request.position)
        if self.config.lookup_timeout is None:
            return await pending
        return await asyncio.wait_for(pending, self.config.lookup_timeout)

    def complete_lookup(self, request: LookupRequest, result: GeocodeResult) -> bool:
        """Merge a lookup result, unless a newer request superseded it.

        Returns True if the result was applied.
        """
        if request.sequence != self._sequence:
            log.debug(f"Discarding superseded lookup #{request.sequence} (latest #{self._sequence})")
            return False
        self._forward_in_flight = False
        if request.kind == FORWARD:
            self._apply_forward(request, result)
        else:
            self._apply_reverse(result)
        return True

    def _apply_forward(self, request: LookupRequest, result: GeocodeResult) -> None:
        state = self.state
        # A failed lookup leaves the marker where it was
        status = state.apply_geocode_result(result, keep_position=not result.succeeded)
        if status.is_success:
            self.map.place_marker(state.latitude, state.longitude)
            self.form.set_coordinates(state.latitude, state.longitude)
            self._emit_position()
            self.events.emit(ev.ADDRESS_RESOLVED, request.address)
        self._publish_status()
        self.form.set_notes(f"Geocode {status.label}: '{request.address}'")

    def _apply_reverse(self, result: GeocodeResult) -> None:
        state = self.state
        # The dragged position stays authoritative either way
        status = state.apply_geocode_result(result, keep_position=True)
        if status.is_success and result.formatted_address:
            state.set_address(result.formatted_address)
            state.mark_geocode_issued(result.formatted_address)
            self.form.set_address(result.formatted_address)
            self.events.emit(ev.ADDRESS_RESOLVED, result.formatted_address)
        else:
            # The cached status described the address before the move
            state.forget_geocoded_address()
        self._publish_status()
        self.form.set_notes(f"Reverse geocode {status.label}")

    # =========================================================================
    # Propagation helpers
    # =========================================================================

    def _set_status(self, status: GeocodeStatus) -> None:
        self.state.geocode_status = status
        self._publish_status()

    def _publish_status(self) -> None:
        status = self.state.geocode_status
        self.form.set_status(int(status), status.label)
        self.events.emit(ev.STATUS_CHANGED, int(status), status.label)

    def _emit_position(self) -> None:
        self.events.emit(ev.POSITION_CHANGED, self.state.latitude, self.state.longitude)
