"""Tests for MarkerState and MarkerRecord."""

import math

import pytest

from model import GeocodeResult, GeocodeStatus, MapConfig, MapType, MarkerRecord, MarkerState


class TestSetPosition:
    """Test MarkerState.set_position()."""

    @pytest.mark.parametrize(
        "lat,lng",
        [
            (0.0, 0.0),
            (40.7128, -74.006),
            (-33.8688, 151.2093),
            (89.999, -179.999),
            (1e-9, -1e-9),
        ],
    )
    def test_numeric_pair_round_trips(self, lat, lng):
        """Numeric pairs read back unchanged."""
        state = MarkerState()
        assert state.set_position(lat, lng) is True
        assert (state.latitude, state.longitude) == (lat, lng)
        assert state.position == (lat, lng)

    def test_numeric_strings_are_parsed(self):
        state = MarkerState()
        state.set_position("51.5074", "-0.1278")
        assert state.position == (51.5074, -0.1278)

    def test_comma_decimal_is_normalized(self):
        """A comma decimal separator is accepted and stored as a number."""
        state = MarkerState()
        state.set_position("40,7128", "-74,0060")
        assert state.position == (40.7128, -74.006)

    @pytest.mark.parametrize(
        "lat,lng",
        [
            ("abc", 1.0),
            (1.0, "abc"),
            ("", ""),
            (None, 2.0),
            (float("nan"), 2.0),
            (2.0, float("inf")),
            (True, 2.0),
        ],
    )
    def test_invalid_component_clears_both(self, lat, lng):
        """Any non-numeric component leaves no position at all."""
        state = MarkerState()
        state.set_position(10.0, 20.0)
        assert state.set_position(lat, lng) is False
        assert state.latitude is None
        assert state.longitude is None
        assert not state.has_position

    def test_clear_position(self):
        state = MarkerState()
        state.set_position(1.0, 2.0)
        state.clear_position()
        assert state.position is None


class TestSetZoom:
    """Test MarkerState.set_zoom()."""

    @pytest.mark.parametrize("zoom,expected", [(1, 1), (12, 12), (3.7, 3), ("15", 15), (21.99, 21)])
    def test_zoom_at_least_one_is_floored(self, zoom, expected):
        state = MarkerState()
        assert state.set_zoom(zoom) == expected
        assert state.zoom == math.floor(float(zoom))

    @pytest.mark.parametrize("zoom", [0, -3, 0.5, "0", None, "abc"])
    def test_zoom_below_one_uses_default(self, zoom):
        """Zoom below 1 (or not a number) falls back to the configured default."""
        state = MarkerState(MapConfig(default_zoom=7))
        assert state.set_zoom(zoom) == 7
        assert state.zoom == 7


class TestGeocodeBookkeeping:
    """Test the lookup suppression helpers."""

    def test_needs_geocode_for_new_address(self):
        state = MarkerState()
        state.set_address("Paris")
        assert state.needs_geocode() is True

    def test_no_geocode_for_same_address(self):
        state = MarkerState()
        state.mark_geocode_issued("Paris")
        assert state.needs_geocode("Paris") is False

    def test_no_geocode_when_disabled(self):
        state = MarkerState()
        state.geocode_enabled = False
        assert state.needs_geocode("Paris") is False

    def test_disable_sets_disabled_status(self):
        state = MarkerState()
        state.disable_geocoding()
        assert state.geocode_status is GeocodeStatus.DISABLED
        assert state.status_label() == "Geocode OFF"

    def test_reuse_cached_status(self):
        state = MarkerState()
        state.apply_geocode_result(GeocodeResult("OK", "ROOFTOP", 1.0, 2.0))
        state.disable_geocoding()
        assert state.reuse_cached_status() is GeocodeStatus.OK_ROOFTOP

    def test_forget_geocoded_address(self, london_record):
        state = MarkerState.from_record(london_record)
        state.forget_geocoded_address()
        assert state.needs_geocode() is True
        assert state.reuse_cached_status() is GeocodeStatus.NA


class TestApplyGeocodeResult:
    """Test MarkerState.apply_geocode_result()."""

    def test_success_sets_position_and_status(self):
        state = MarkerState()
        status = state.apply_geocode_result(GeocodeResult("OK", "ROOFTOP", 37.422, -122.084))
        assert status is GeocodeStatus.OK_ROOFTOP
        assert state.position == (37.422, -122.084)

    def test_unknown_location_type_falls_back_to_ok(self):
        state = MarkerState()
        status = state.apply_geocode_result(GeocodeResult("OK", "SOMEWHERE", 1.0, 2.0))
        assert status is GeocodeStatus.OK

    def test_failure_clears_position(self):
        """A failed lookup never leaves stale coordinates behind."""
        state = MarkerState()
        state.set_position(1.0, 2.0)
        status = state.apply_geocode_result(GeocodeResult.failure("ZERO_RESULTS"))
        assert status is GeocodeStatus.ZERO_RESULTS
        assert state.position is None

    def test_failure_keeps_position_when_asked(self):
        state = MarkerState()
        state.set_position(1.0, 2.0)
        state.apply_geocode_result(GeocodeResult.failure("OVER_QUERY_LIMIT"), keep_position=True)
        assert state.geocode_status is GeocodeStatus.OVER_QUERY_LIMIT
        assert state.position == (1.0, 2.0)

    def test_ok_without_coordinate_is_unknown(self):
        state = MarkerState()
        status = state.apply_geocode_result(GeocodeResult("OK"))
        assert status is GeocodeStatus.UNKNOWN

    def test_unrecognized_provider_status_is_unknown(self):
        state = MarkerState()
        assert state.apply_geocode_result(GeocodeResult.failure("SERVER_ON_FIRE")) is GeocodeStatus.UNKNOWN


class TestRecordConversion:
    """Test MarkerState <-> MarkerRecord."""

    def test_from_record(self, london_record):
        state = MarkerState.from_record(london_record)
        assert state.position == (51.5074, -0.1278)
        assert state.zoom == 15
        assert state.address == "10 Downing Street, London"
        assert state.geocode_status is GeocodeStatus.OK_ROOFTOP
        assert state.map_type is MapType.ROADMAP
        # The persisted address counts as already geocoded
        assert state.needs_geocode() is False

    def test_from_record_zero_zoom_uses_default(self):
        state = MarkerState.from_record(MarkerRecord(zoom=0), MapConfig(default_zoom=9))
        assert state.zoom == 9

    def test_from_record_na_status_needs_geocode(self):
        state = MarkerState.from_record(MarkerRecord(address="Berlin", status=0))
        assert state.needs_geocode() is True

    def test_to_record_round_trip(self, london_record):
        record = MarkerState.from_record(london_record).to_record()
        assert record == london_record

    def test_str(self, london_record):
        state = MarkerState.from_record(london_record)
        assert str(state) == "10 Downing Street, London (51.5074, -0.1278, 15) [OK ROOFTOP]"


class TestMarkerRecord:
    """Test MarkerRecord field normalization."""

    def test_defaults(self, empty_record):
        assert empty_record.lat == ""
        assert empty_record.zoom == 0
        assert empty_record.geocode_enabled is True
        assert empty_record.status == 0
        assert empty_record.map_type == "hybrid"

    def test_comma_decimal(self):
        assert MarkerRecord(lat="40,7128").lat == "40.7128"

    def test_non_numeric_coordinate_is_blank(self):
        assert MarkerRecord(lng="north-ish").lng == ""

    def test_numeric_coordinate_becomes_string(self):
        assert MarkerRecord(lat=12.5).lat == "12.5"

    def test_negative_zoom_means_default(self):
        assert MarkerRecord(zoom=-4).zoom == 0

    def test_unknown_status_code(self):
        assert MarkerRecord(status=42).status == -1

    def test_address_whitespace_collapsed(self):
        assert MarkerRecord(address="  1600   Amphitheatre\nParkway ").address == "1600 Amphitheatre Parkway"

    def test_field_metadata(self):
        assert MarkerRecord.lat.widget_id == "marker-lat"
        assert MarkerRecord.geocode_enabled.type_ is bool
        assert set(MarkerRecord.get_ui_fields()) == {"lat", "lng", "address", "zoom", "geocode_enabled"}
        assert set(MarkerRecord.get_data_fields()) == {"status", "map_type"}

    def test_unknown_kwargs_ignored(self):
        record = MarkerRecord(color="red")
        assert "color" not in record.to_dict()
