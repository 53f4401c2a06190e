"""Tests for temporal smoothing."""

import pytest

from ambiway.core import Smoother
from ambiway.core.smoothing import CONVERGENCE_EPSILON, SMOOTHING_WEIGHT, smooth
from ambiway.models import RawColor

BLACK = RawColor(0.0, 0.0, 0.0)
WHITE = RawColor(255.0, 255.0, 255.0)


@pytest.mark.unit
class TestSmooth:
    """Test the per-LED blend."""

    def test_disabled_is_identity(self):
        """With smoothing off the raw color is returned unchanged."""
        raw = RawColor(12.5, 200.0, 3.0)
        assert smooth(WHITE, raw, enabled=False) == raw

    def test_blend(self):
        """Enabled smoothing moves part of the way toward the new color."""
        result = smooth(BLACK, RawColor(100.0, 0.0, 0.0), enabled=True)
        assert result.r == pytest.approx(100.0 * (1.0 - SMOOTHING_WEIGHT))
        assert result.g == 0.0

    def test_snaps_when_close(self):
        """Within epsilon the output lands exactly on the target."""
        target = RawColor(100.0, 100.0, 100.0)
        previous = RawColor(100.0 - CONVERGENCE_EPSILON, 100.0, 100.0)
        assert smooth(previous, target, enabled=True) == target

    def test_same_color_is_fixed_point(self):
        """A steady color stays put."""
        assert smooth(WHITE, WHITE, enabled=True) == WHITE


@pytest.mark.unit
class TestSmoother:
    """Test the per-monitor smoothing state."""

    def test_first_frame_passes_through(self):
        """State is seeded from the first frame."""
        smoother = Smoother(enabled=True)
        assert smoother.apply([WHITE]) == (WHITE,)

    def test_converges_within_nine_cycles(self):
        """A constant input is reached exactly, without overshoot."""
        smoother = Smoother(enabled=True)
        smoother.apply([BLACK])

        outputs = [smoother.apply([WHITE])[0] for _ in range(9)]

        assert outputs[-1] == WHITE
        reds = [c.r for c in outputs]
        assert reds == sorted(reds)
        assert all(r <= 255.0 for r in reds)

    def test_state_updated_each_cycle(self):
        """Next blend starts from the last emitted color."""
        smoother = Smoother(enabled=True)
        smoother.apply([BLACK])
        first = smoother.apply([WHITE])
        second = smoother.apply([WHITE])
        assert second[0].r > first[0].r

    def test_disabled_tracks_raw(self):
        """With smoothing off every frame is emitted as sampled."""
        smoother = Smoother(enabled=False)
        smoother.apply([BLACK])
        assert smoother.apply([WHITE]) == (WHITE,)

    def test_length_change_reseeds(self):
        """A different LED count starts over instead of misaligning."""
        smoother = Smoother(enabled=True)
        smoother.apply([BLACK])
        assert smoother.apply([WHITE, WHITE]) == (WHITE, WHITE)

    def test_input_not_modified(self):
        """The caller's list is left untouched."""
        smoother = Smoother(enabled=True)
        smoother.apply([BLACK])
        raw = [WHITE]
        smoother.apply(raw)
        assert raw == [WHITE]
