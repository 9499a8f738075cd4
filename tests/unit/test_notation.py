"""Tests for the exposure notation codec."""

import pytest

from exposure_triangle.core.exceptions import InvalidFormatError
from exposure_triangle.core.types import Axis
from exposure_triangle.exposure.notation import (
    format_aperture,
    format_iso,
    format_shutter_speed,
    format_value,
    parse,
    parse_aperture,
    parse_iso,
    parse_shutter_speed,
)
from exposure_triangle.exposure.scales import DEFAULT_TABLES


class TestParseShutterSpeed:
    """Tests for shutter speed parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1/125", 1 / 125),
            ("1/8000", 1 / 8000),
            ("1/2.5", 0.4),
            ('30"', 30.0),
            ('1.3"', 1.3),
            ("0.5", 0.5),
            ("2", 2.0),
            ("  1/60  ", 1 / 60),
        ],
    )
    def test_valid_notations(self, text, expected):
        """Fractions, seconds marks and bare decimals all parse."""
        assert parse_shutter_speed(text) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "abc", "1/0", "1/2/3", "1/x", '"', "-1/125", "0", "-2", "nan", "inf"],
    )
    def test_invalid_notations(self, text):
        """Malformed or non-positive notations raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            parse_shutter_speed(text)

    def test_none_is_rejected(self):
        """A missing value is a format error, not a TypeError."""
        with pytest.raises(InvalidFormatError):
            parse_shutter_speed(None)

    def test_error_is_a_value_error(self):
        """InvalidFormatError can be caught as a ValueError."""
        with pytest.raises(ValueError):
            parse_shutter_speed("fast")


class TestParseAperture:
    """Tests for aperture parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [("f/2.8", 2.8), ("F/16", 16.0), ("5.6", 5.6), ("f/1", 1.0)],
    )
    def test_valid_notations(self, text, expected):
        assert parse_aperture(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "f/", "f/abc", "f/0", "f/-2"])
    def test_invalid_notations(self, text):
        with pytest.raises(InvalidFormatError):
            parse_aperture(text)


class TestParseIso:
    """Tests for ISO parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [("400", 400.0), ("ISO 400", 400.0), ("iso3200", 3200.0), ("100", 100.0)],
    )
    def test_valid_notations(self, text, expected):
        assert parse_iso(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "ISO", "high", "0", "-100"])
    def test_invalid_notations(self, text):
        with pytest.raises(InvalidFormatError):
            parse_iso(text)


class TestFormatting:
    """Tests for rendering values in camera notation."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (1 / 125, "1/125"),
            (1 / 8000, "1/8000"),
            (0.4, "1/2.5"),
            (1 / 3, "1/3"),
            (0.5, "1/2"),
            (0.96, '1"'),
            (1.0, '1"'),
            (1.3, '1.3"'),
            (2.0, '2"'),
            (30.0, '30"'),
            (300.0, '300"'),
        ],
    )
    def test_shutter_speed(self, seconds, expected):
        """Fractions below a second, seconds marks above."""
        assert format_shutter_speed(seconds) == expected

    @pytest.mark.parametrize(
        "f_number,expected",
        [(2.8, "f/2.8"), (4.0, "f/4"), (5.66, "f/5.7"), (22.0, "f/22")],
    )
    def test_aperture(self, f_number, expected):
        assert format_aperture(f_number) == expected

    def test_iso_is_integer(self):
        assert format_iso(1600.4) == "1600"
        assert format_iso(100.0) == "100"

    @pytest.mark.parametrize("axis", list(Axis))
    def test_non_positive_rejected(self, axis):
        """Formatting zero or negative values is an error on every axis."""
        with pytest.raises(InvalidFormatError):
            format_value(axis, 0.0)
        with pytest.raises(InvalidFormatError):
            format_value(axis, -1.0)


class TestRoundTrip:
    """Every camera scale entry survives parse then format unchanged."""

    @pytest.mark.parametrize(
        "axis,granularity",
        list(DEFAULT_TABLES.keys()),
        ids=lambda key: getattr(key, "value", str(key)),
    )
    def test_scale_entries_round_trip(self, axis, granularity):
        for entry in DEFAULT_TABLES[(axis, granularity)]:
            assert format_value(axis, parse(axis, entry)) == entry

    def test_dispatch_by_axis(self):
        """parse/format_value route to the axis-specific codec."""
        assert parse(Axis.SHUTTER_SPEED, "1/250") == pytest.approx(0.004)
        assert parse(Axis.APERTURE, "f/11") == pytest.approx(11.0)
        assert parse(Axis.ISO, "800") == pytest.approx(800.0)
        assert format_value(Axis.APERTURE, 11.0) == "f/11"


class TestExtremeValues:
    """Values far outside any camera scale still format to parseable text."""

    @pytest.mark.parametrize("axis", list(Axis))
    @pytest.mark.parametrize("value", [0.3, 0.04, 1e-3, 1e-6, 2.0**-1022])
    def test_small_values_stay_positive(self, axis, value):
        """Tiny values never collapse to "0" or "f/0"."""
        text = format_value(axis, value)
        assert parse(axis, text) > 0
        assert parse(axis, text) == pytest.approx(value, rel=0.5)

    @pytest.mark.parametrize("axis", list(Axis))
    @pytest.mark.parametrize("value", [1e15, 1e100, 2.0**1023])
    def test_large_values_use_significant_digits(self, axis, value):
        text = format_value(axis, value)
        assert len(text) < 16
        assert parse(axis, text) == pytest.approx(value, rel=1e-2)

    def test_small_aperture_and_iso(self):
        assert format_aperture(0.04) == "f/0.04"
        assert format_iso(0.3) == "0.3"
        assert format_iso(1e-300) == "1e-300"

    def test_tiny_shutter_speed(self):
        assert format_shutter_speed(1e-20) == "1/1e+20"

    @pytest.mark.parametrize("axis", list(Axis))
    def test_non_finite_rejected(self, axis):
        with pytest.raises(InvalidFormatError):
            format_value(axis, float("inf"))
        with pytest.raises(InvalidFormatError):
            format_value(axis, float("nan"))

    def test_overflowing_fraction_rejected(self):
        """A fraction whose quotient overflows is not a shutter speed."""
        with pytest.raises(InvalidFormatError):
            parse_shutter_speed("1e300/1e-300")
