"""Tests for controller validators."""

import pytest

from constants import MAX_ZOOM
from controller.validators import (
    validate_address,
    validate_coordinate,
    validate_zoom,
)


class TestValidateCoordinate:
    """Tests for validate_coordinate function."""

    def test_valid_decimal(self):
        assert validate_coordinate("51.5074") == 51.5074

    def test_negative(self):
        assert validate_coordinate("-0.1278") == -0.1278

    def test_comma_decimal(self):
        """A comma decimal separator is accepted."""
        assert validate_coordinate("40,7128") == 40.7128

    def test_strips_whitespace(self):
        assert validate_coordinate("  12.5 ") == 12.5

    def test_empty_is_invalid(self):
        assert validate_coordinate("") is None

    def test_non_numeric_is_invalid(self):
        assert validate_coordinate("north") is None

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
    def test_non_finite_is_invalid(self, value):
        assert validate_coordinate(value) is None


class TestValidateZoom:
    """Tests for validate_zoom function."""

    def test_valid(self):
        assert validate_zoom("12") == 12

    def test_one_is_valid(self):
        assert validate_zoom("1") == 1

    def test_fraction_is_floored(self):
        assert validate_zoom("7.9") == 7

    def test_zero_is_invalid(self):
        assert validate_zoom("0") is None

    def test_negative_is_invalid(self):
        assert validate_zoom("-3") is None

    def test_non_numeric_is_invalid(self):
        assert validate_zoom("far") is None

    def test_strips_whitespace(self):
        assert validate_zoom(" 5 ") == 5

    def test_max_is_valid(self):
        assert validate_zoom(str(MAX_ZOOM)) == MAX_ZOOM

    def test_above_max_is_clamped(self):
        assert validate_zoom("50") == MAX_ZOOM


class TestValidateAddress:
    """Tests for validate_address function."""

    def test_collapses_whitespace(self):
        assert validate_address("  10   Downing\tStreet  ") == "10 Downing Street"

    def test_empty_is_valid(self):
        """Empty string is valid (no address)."""
        assert validate_address("   ") == ""
