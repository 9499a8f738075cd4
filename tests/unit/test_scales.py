"""Tests for camera scales and snapping."""

import numpy as np
import pytest

from exposure_triangle.core.exceptions import InvalidFormatError, ScaleError
from exposure_triangle.core.types import Axis, DiagnosticKind, Granularity
from exposure_triangle.exposure.scales import (
    APERTURES_THIRD,
    DEFAULT_TABLES,
    ISOS_FULL,
    SHUTTER_SPEEDS_FULL,
    Scale,
    ScaleSet,
    default_scales,
)
from exposure_triangle.exposure.snapper import is_beyond_limits, nearest, nearest_index, snap


@pytest.fixture
def full_shutter():
    return default_scales().get_scale(Axis.SHUTTER_SPEED, Granularity.FULL)


class TestDefaultScales:
    """Test the built-in scale tables."""

    def test_all_combinations_present(self):
        scales = default_scales()
        assert len(scales) == 9
        for axis in Axis:
            for granularity in Granularity:
                assert scales.get_scale(axis, granularity).axis is axis

    def test_strictly_increasing(self):
        for scale in default_scales().values():
            assert np.all(np.diff(scale.values) > 0)

    def test_shared_extremes(self):
        """Every granularity spans the same camera range."""
        for (axis, _), entries in DEFAULT_TABLES.items():
            first, last = {
                Axis.SHUTTER_SPEED: ("1/8000", '30"'),
                Axis.APERTURE: ("f/1", "f/64"),
                Axis.ISO: ("50", "102400"),
            }[axis]
            assert entries[0] == first
            assert entries[-1] == last

    def test_finer_scales_are_longer(self):
        for axis in Axis:
            full, half, third = (
                len(default_scales().get_scale(axis, g)) for g in Granularity
            )
            assert full < half < third

    def test_default_scales_cached(self):
        assert default_scales() is default_scales()

    def test_values_read_only(self, full_shutter):
        with pytest.raises(ValueError):
            full_shutter.values[0] = 1.0

    def test_extremes_and_positions(self, full_shutter):
        """minimum/maximum are the fastest and slowest entries; value_of indexes like entries."""
        assert full_shutter.minimum == pytest.approx(1 / 8000)
        assert full_shutter.maximum == pytest.approx(30.0)
        assert full_shutter.value_of(-1) == full_shutter.maximum
        assert full_shutter.value_of(6) == pytest.approx(1 / 125)
        with pytest.raises(IndexError):
            full_shutter.value_of(len(full_shutter))


class TestScaleValidation:
    """Test scale construction errors."""

    def test_empty_scale(self):
        with pytest.raises(ScaleError):
            Scale(Axis.ISO, Granularity.FULL, ())

    def test_unordered_scale(self):
        with pytest.raises(ScaleError, match="strictly increasing"):
            Scale(Axis.ISO, Granularity.FULL, ("100", "400", "200"))

    def test_duplicate_entries(self):
        with pytest.raises(ScaleError):
            Scale(Axis.APERTURE, Granularity.FULL, ("f/2", "f/2"))

    def test_descending_shutter_rejected(self):
        """Shutter scales run fastest to slowest."""
        with pytest.raises(ScaleError):
            Scale(Axis.SHUTTER_SPEED, Granularity.FULL, ('1"', "1/2", "1/4"))

    def test_unparseable_entry(self):
        with pytest.raises(ScaleError, match="Unparseable"):
            Scale(Axis.APERTURE, Granularity.FULL, ("f/2", "f/wide"))

    def test_entries_become_tuple(self):
        scale = Scale(Axis.ISO, Granularity.FULL, ["100", "200"])
        assert scale.entries == ("100", "200")
        assert "200" in scale
        assert list(scale) == ["100", "200"]

    def test_missing_scale_in_set(self):
        scales = ScaleSet.from_tables({(Axis.ISO, Granularity.FULL): ISOS_FULL})
        with pytest.raises(ScaleError):
            scales.get_scale(Axis.APERTURE, Granularity.FULL)

    def test_scale_set_is_read_only(self):
        scales = ScaleSet.from_tables({(Axis.ISO, Granularity.FULL): ISOS_FULL})
        with pytest.raises(TypeError):
            scales[(Axis.ISO, Granularity.HALF)] = scales[(Axis.ISO, Granularity.FULL)]

    def test_lookup_accepts_strings(self):
        scale = default_scales().get_scale("aperture", "third")
        assert scale.entries == APERTURES_THIRD


class TestNearest:
    """Test nearest-entry selection in log space."""

    def test_between_entries(self, full_shutter):
        """1/100 is closer to 1/125 than 1/60 in stops."""
        assert nearest(full_shutter, 1 / 100) == "1/125"

    def test_exact_entry(self, full_shutter):
        result = snap(full_shutter, 1 / 250)
        assert result.entry == "1/250"
        assert result.error_stops == pytest.approx(0.0)
        assert not result.substituted

    def test_tie_goes_to_first_entry(self):
        """200 is exactly one stop from 100 and 400; scale order wins."""
        scale = Scale(Axis.ISO, Granularity.FULL, ("100", "400"))
        assert nearest(scale, 200.0) == "100"

    def test_matches_brute_force(self):
        """Snapped entry minimises |log2(entry / target)| for every target."""
        scale = default_scales().get_scale(Axis.APERTURE, Granularity.THIRD)
        for target in np.geomspace(0.9, 70.0, 200):
            best = min(abs(np.log2(v / target)) for v in scale.values)
            index = nearest_index(scale, target)
            assert abs(np.log2(scale.value_of(index) / target)) == pytest.approx(best)

    def test_targets_at_float_extremes(self, full_shutter):
        """Targets whose ratio to the entries leaves the float range still snap to the nearer end."""
        iso = default_scales().get_scale(Axis.ISO, Granularity.FULL)

        assert nearest(full_shutter, 2.0**1023) == SHUTTER_SPEEDS_FULL[-1]
        assert nearest(full_shutter, 2.0**-1022) == SHUTTER_SPEEDS_FULL[0]
        assert nearest(iso, 2.0**-1022) == "50"
        assert nearest(iso, 2.0**1023) == "102400"

    @pytest.mark.parametrize("target", [0.0, -1.0, float("nan")])
    def test_invalid_target(self, full_shutter, target):
        with pytest.raises(InvalidFormatError):
            nearest(full_shutter, target)


class TestLimits:
    """Test scale limit detection."""

    def test_far_beyond_slowest(self, full_shutter):
        result = snap(full_shutter, 300.0, tolerance=1.5)

        assert result.entry == '30"'
        assert result.substituted
        assert result.limit.kind is DiagnosticKind.PARAMETER_LIMIT_EXCEEDED
        assert result.limit.axis is Axis.SHUTTER_SPEED
        assert result.limit.requested == '300"'
        assert result.limit.nearest == '30"'
        assert result.limit.stops == pytest.approx(np.log2(10.0))

    def test_within_tolerance(self, full_shutter):
        """A slight overshoot snaps without a limit diagnostic."""
        result = snap(full_shutter, 40.0, tolerance=1.5)
        assert result.entry == '30"'
        assert result.limit is None

    def test_below_fastest(self, full_shutter):
        result = snap(full_shutter, 1 / 20000, tolerance=1.5)
        assert result.entry == "1/8000"
        assert result.limit.requested == "1/20000"
        assert result.limit.nearest == "1/8000"

    def test_is_beyond_limits(self, full_shutter):
        assert is_beyond_limits(full_shutter, 31.0)
        assert not is_beyond_limits(full_shutter, 31.0, tolerance=1.5)
        assert not is_beyond_limits(full_shutter, 1 / 125)
        assert full_shutter.entries == SHUTTER_SPEEDS_FULL
