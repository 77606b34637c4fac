"""Tests for the Google Geocoding client."""

import io
import json
import urllib.error
import urllib.parse

import pytest

from geocoding import DisabledGeocoder, GeocodeError, GoogleGeocoder, build_url, parse_response
from model import GeocodeStatus, MarkerState

ROOFTOP_RESPONSE = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
            "geometry": {
                "location": {"lat": 37.4224764, "lng": -122.0842499},
                "location_type": "ROOFTOP",
            },
        },
        {
            "formatted_address": "Mountain View, CA, USA",
            "geometry": {
                "location": {"lat": 37.3860517, "lng": -122.0838511},
                "location_type": "APPROXIMATE",
            },
        },
    ],
}


def _query(url):
    return urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)


class TestBuildUrl:
    """Test build_url() function."""

    def test_address(self):
        url = build_url("https://geo.example/json", address="10 Downing St, London")
        assert url.startswith("https://geo.example/json?")
        assert _query(url) == {"address": ["10 Downing St, London"]}

    def test_latlng(self):
        url = build_url("https://geo.example/json", latlng=(51.5074, -0.1278))
        assert _query(url) == {"latlng": ["51.5074,-0.1278"]}

    def test_api_key_appended(self):
        url = build_url("https://geo.example/json", address="x", api_key="secret")
        assert _query(url)["key"] == ["secret"]
        assert url.endswith("key=secret")

    def test_no_key_when_unset(self):
        assert "key=" not in build_url("https://geo.example/json", address="x")


class TestParseResponse:
    """Test parse_response() function."""

    def test_first_result_wins(self):
        result = parse_response(ROOFTOP_RESPONSE)
        assert result.succeeded
        assert result.location_type == "ROOFTOP"
        assert (result.latitude, result.longitude) == (37.4224764, -122.0842499)
        assert result.formatted_address.startswith("1600 Amphitheatre")

    def test_provider_failure_status(self):
        result = parse_response({"status": "OVER_QUERY_LIMIT", "results": []})
        assert result.status == "OVER_QUERY_LIMIT"
        assert not result.succeeded

    def test_ok_without_results_is_zero_results(self):
        assert parse_response({"status": "OK", "results": []}).status == "ZERO_RESULTS"

    def test_missing_location_type(self):
        data = {"status": "OK", "results": [{"geometry": {"location": {"lat": 1, "lng": 2}}}]}
        result = parse_response(data)
        assert result.location_type is None
        assert result.formatted_address == ""
        assert (result.latitude, result.longitude) == (1.0, 2.0)

    @pytest.mark.parametrize("data", [None, [], "OK", {"results": []}, {"status": ""}])
    def test_not_a_response(self, data):
        with pytest.raises(GeocodeError):
            parse_response(data)

    @pytest.mark.parametrize(
        "result",
        [
            {},
            {"geometry": {}},
            {"geometry": {"location": {"lat": "north", "lng": 1}}},
            {"geometry": None},
        ],
    )
    def test_malformed_result(self, result):
        with pytest.raises(GeocodeError, match="Malformed"):
            parse_response({"status": "OK", "results": [result]})

    def test_feeds_marker_state(self):
        """A parsed response maps onto the OK ROOFTOP status."""
        state = MarkerState()
        status = state.apply_geocode_result(parse_response(ROOFTOP_RESPONSE))
        assert status is GeocodeStatus.OK_ROOFTOP
        assert state.position == (37.4224764, -122.0842499)


class TestGoogleGeocoder:
    """Test GoogleGeocoder with urlopen replaced."""

    @pytest.fixture
    def requests(self, monkeypatch):
        """Capture outgoing requests and answer with ROOFTOP_RESPONSE."""
        seen = []

        def fake_urlopen(req, timeout=None):
            seen.append((req, timeout))
            return io.BytesIO(json.dumps(ROOFTOP_RESPONSE).encode())

        monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
        return seen

    @pytest.mark.asyncio
    async def test_forward(self, requests):
        geocoder = GoogleGeocoder(api_key="k", timeout=3, endpoint="https://geo.example/json")
        result = await geocoder.forward("1600 Amphitheatre Parkway")
        assert result.location_type == "ROOFTOP"
        req, timeout = requests[0]
        assert timeout == 3
        assert _query(req.full_url) == {"address": ["1600 Amphitheatre Parkway"], "key": ["k"]}
        assert req.get_header("Accept") == "application/json"

    @pytest.mark.asyncio
    async def test_reverse(self, requests):
        geocoder = GoogleGeocoder(endpoint="https://geo.example/json")
        await geocoder.reverse(37.4224764, -122.0842499)
        req, _ = requests[0]
        assert _query(req.full_url) == {"latlng": ["37.4224764,-122.0842499"]}

    @pytest.mark.asyncio
    async def test_network_error(self, monkeypatch):
        def fail(req, timeout=None):
            raise urllib.error.URLError("no route to host")

        monkeypatch.setattr("urllib.request.urlopen", fail)
        with pytest.raises(GeocodeError, match="request failed"):
            await GoogleGeocoder().forward("x")

    @pytest.mark.asyncio
    async def test_bad_json(self, monkeypatch):
        monkeypatch.setattr("urllib.request.urlopen", lambda req, timeout=None: io.BytesIO(b"<html>"))
        with pytest.raises(GeocodeError, match="not JSON"):
            await GoogleGeocoder().forward("x")


class TestDisabledGeocoder:
    """Test the offline geocoder."""

    @pytest.mark.asyncio
    async def test_always_denied(self):
        geocoder = DisabledGeocoder()
        assert (await geocoder.forward("x")).status == "REQUEST_DENIED"
        assert (await geocoder.reverse(1.0, 2.0)).status == "REQUEST_DENIED"
