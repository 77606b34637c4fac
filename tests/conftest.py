"""Shared fixtures for mapmarker tests."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from controller import MapSyncController, MarkerEvents
from controller import events as ev
from geocoding import Geocoder
from model import GeocodeResult, MapConfig, MapType, MarkerRecord


@dataclass
class PendingLookup:
    """A lookup the fake geocoder received; the test decides its outcome."""

    kind: str  # "forward" or "reverse"
    query: Any  # address, or (lat, lng)
    future: asyncio.Future

    def resolve(self, result: GeocodeResult) -> None:
        self.future.set_result(result)

    def fail(self, error: BaseException) -> None:
        self.future.set_exception(error)


class FakeGeocoder(Geocoder):
    """Geocoder whose lookups stay pending until the test resolves them."""

    def __init__(self) -> None:
        self.lookups: list[PendingLookup] = []

    async def forward(self, address: str) -> GeocodeResult:
        return await self._pending("forward", address)

    async def reverse(self, lat: float, lng: float) -> GeocodeResult:
        return await self._pending("reverse", (lat, lng))

    async def _pending(self, kind: str, query: Any) -> GeocodeResult:
        future = asyncio.get_running_loop().create_future()
        self.lookups.append(PendingLookup(kind, query, future))
        return await future

    @property
    def last(self) -> PendingLookup:
        return self.lookups[-1]


class RecordingMapSurface:
    """MapSurface that remembers what it shows and every call it got."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.marker: tuple[float, float] | None = None
        self.zoom: int | None = None
        self.map_type: MapType | None = None
        self.center: tuple[float, float] | None = None

    def place_marker(self, lat: float, lng: float) -> None:
        self.calls.append(("place_marker", lat, lng))
        self.marker = (lat, lng)

    def clear_marker(self) -> None:
        self.calls.append(("clear_marker",))
        self.marker = None

    def set_zoom(self, zoom: int) -> None:
        self.calls.append(("set_zoom", zoom))
        self.zoom = zoom

    def set_map_type(self, map_type: MapType) -> None:
        self.calls.append(("set_map_type", map_type))
        self.map_type = map_type

    def refresh_viewport(self, center: tuple[float, float] | None) -> None:
        self.calls.append(("refresh_viewport", center))
        self.center = center


class RecordingFormSurface:
    """FormSurface that remembers field values and every call it got."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.lat: float | None = None
        self.lng: float | None = None
        self.zoom: int | None = None
        self.address = ""
        self.geocode_enabled: bool | None = None
        self.status: tuple[int, str] | None = None
        self.notes = ""

    def set_coordinates(self, lat: float | None, lng: float | None) -> None:
        self.calls.append(("set_coordinates", lat, lng))
        self.lat, self.lng = lat, lng

    def set_zoom(self, zoom: int) -> None:
        self.calls.append(("set_zoom", zoom))
        self.zoom = zoom

    def set_address(self, address: str) -> None:
        self.calls.append(("set_address", address))
        self.address = address

    def set_geocode_enabled(self, enabled: bool) -> None:
        self.calls.append(("set_geocode_enabled", enabled))
        self.geocode_enabled = enabled

    def set_status(self, code: int, label: str) -> None:
        self.calls.append(("set_status", code, label))
        self.status = (code, label)

    def set_notes(self, text: str) -> None:
        self.calls.append(("set_notes", text))
        self.notes = text

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@dataclass
class EventLog:
    """Every marker event emitted, in order."""

    events: list[tuple] = field(default_factory=list)

    def names(self) -> list[str]:
        return [e[0] for e in self.events]

    def of(self, name: str) -> list[tuple]:
        return [e[1:] for e in self.events if e[0] == name]


async def settle() -> None:
    """Let freshly issued lookup tasks reach the geocoder."""
    for _ in range(5):
        await asyncio.sleep(0)


def ok_result(lat: float, lng: float, location_type: str = "ROOFTOP", address: str = "") -> GeocodeResult:
    return GeocodeResult(
        status="OK",
        location_type=location_type,
        latitude=lat,
        longitude=lng,
        formatted_address=address,
    )


@pytest.fixture
def geocoder():
    """Scripted geocoder: lookups wait for the test to resolve them."""
    return FakeGeocoder()


@pytest.fixture
def map_surface():
    return RecordingMapSurface()


@pytest.fixture
def form_surface():
    return RecordingFormSurface()


@pytest.fixture
def map_config():
    """Map configuration with the stock defaults."""
    return MapConfig()


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def controller(geocoder, map_surface, form_surface, map_config, event_log):
    """MapSyncController wired to the fake geocoder and recording surfaces."""
    events = MarkerEvents()
    for name in ev.EVENT_NAMES:
        events.subscribe(name, lambda *args, _name=name: event_log.events.append((_name, *args)))
    return MapSyncController(geocoder, map_surface, form_surface, map_config, events)


@pytest.fixture
def empty_record():
    """A record with nothing set (new marker)."""
    return MarkerRecord()


@pytest.fixture
def london_record():
    """A geocoded record for an address in London."""
    return MarkerRecord(
        lat="51.5074",
        lng="-0.1278",
        address="10 Downing Street, London",
        zoom=15,
        status=2,
        geocode_enabled=True,
        map_type="roadmap",
    )


@pytest.fixture
def tmp_records(tmp_path):
    """Temporary directory for record files."""
    records_dir = tmp_path / "markers"
    records_dir.mkdir()
    return records_dir
