"""Tests for brightness scaling."""

import math

import pytest

from ambiway.core import scale, scale_sequence
from ambiway.models import Color, RawColor


@pytest.mark.unit
class TestScale:
    """Test channel scaling and clamping."""

    def test_quarter_brightness(self):
        """0.25 * 200 = 50 on every channel."""
        assert scale(RawColor(200.0, 200.0, 200.0), 0.25) == Color(r=50, g=50, b=50)

    def test_unit_factor_rounds(self):
        """Float samples are rounded to the nearest integer."""
        assert scale(RawColor(10.4, 10.6, 0.0), 1.0) == Color(r=10, g=11, b=0)

    def test_rounds_half_up(self):
        """Exact halves round up."""
        assert scale(RawColor(101.0, 1.0, 0.0), 0.5) == Color(r=51, g=1, b=0)

    def test_clamps_overflow(self):
        """Values above 255 saturate instead of wrapping."""
        assert scale(RawColor(200.0, 100.0, 0.0), 2.0) == Color(r=255, g=200, b=0)

    @pytest.mark.parametrize("factor", [0.0, -0.5, -10.0])
    def test_non_positive_factor_is_black(self, factor):
        """A factor of zero or below turns the LED off."""
        assert scale(RawColor(255.0, 128.0, 3.0), factor) == Color.off()

    def test_nan_channel_is_zero(self):
        """NaN from an empty average becomes 0."""
        assert scale(RawColor(math.nan, 10.0, 10.0), 1.0) == Color(r=0, g=10, b=10)

    def test_monotonic_in_factor(self):
        """Larger factors never produce smaller channels."""
        raw = RawColor(90.0, 45.0, 200.0)
        previous = scale(raw, 0.0)
        for step in range(1, 40):
            current = scale(raw, step * 0.1)
            assert current.r >= previous.r
            assert current.g >= previous.g
            assert current.b >= previous.b
            previous = current


@pytest.mark.unit
def test_scale_sequence():
    """Every LED is scaled, order kept."""
    colors = scale_sequence([RawColor(100.0, 0.0, 0.0), RawColor(0.0, 0.0, 100.0)], 0.5)
    assert colors == (Color(r=50, g=0, b=0), Color(r=0, g=0, b=50))
    assert isinstance(colors, tuple)
