"""Tests for the per-monitor worker."""

import time

import pytest

from conftest import FakeCaptureSource, make_frame

from ambiway.core import MAX_SHAPE_MISMATCHES, FrameSampler, MonitorWorker, compute_regions
from ambiway.exceptions import CaptureFailure, CaptureTimeout
from ambiway.models import Color, EdgeLayout, FailurePolicy, MonitorLayoutConfig, WorkerState

RED = (255, 0, 0)
GREEN = (0, 255, 0)


def _worker(source, brightness=1.0, smooth=False, failure_policy=FailurePolicy.FREEZE):
    layout = MonitorLayoutConfig(left=EdgeLayout(leds=1), right=EdgeLayout(leds=1))
    regions = compute_regions(layout, 40, 20, 5)
    return MonitorWorker(
        index=0,
        source=source,
        sampler=FrameSampler(regions, (40, 20), camera_id=source.camera_id),
        brightness=brightness,
        smooth=smooth,
        interval=0.001,
        capture_timeout=0.01,
        failure_policy=failure_policy,
    )


def _solid(rgb):
    return (Color(r=rgb[0], g=rgb[1], b=rgb[2]),) * 2


@pytest.mark.unit
class TestRunCycle:
    """Test single capture/process cycles."""

    def test_publishes_scaled_colors(self):
        """A frame goes through sampling and brightness scaling."""
        worker = _worker(FakeCaptureSource(script=[make_frame(40, 20, rgb=(200, 100, 0))]), brightness=0.5)

        assert worker.latest() is None
        assert worker.run_cycle() is True
        assert worker.latest() == _solid((100, 50, 0))
        assert worker.state == WorkerState.READY
        assert worker.cycles == 1

    def test_timeout_keeps_previous_colors(self):
        """A capture timeout skips the cycle without touching the output."""
        source = FakeCaptureSource(
            script=[make_frame(40, 20, rgb=RED), CaptureTimeout(0, 0.01)]
        )
        worker = _worker(source)
        worker.run_cycle()
        before = worker.latest()

        assert worker.run_cycle() is False
        assert worker.latest() is before
        assert worker.timeouts == 1

    def test_single_shape_mismatch_is_skipped(self):
        """One wrong-sized frame is dropped, the next good one is used."""
        source = FakeCaptureSource(
            script=[make_frame(40, 20, rgb=RED), make_frame(30, 20), make_frame(40, 20, rgb=GREEN)]
        )
        worker = _worker(source)

        assert worker.run_cycle() is True
        assert worker.run_cycle() is False
        assert worker.latest() == _solid(RED)
        assert worker.run_cycle() is True
        assert worker.latest() == _solid(GREEN)

    def test_repeated_shape_mismatch_escalates(self):
        """Consecutive wrong-sized frames become a capture failure."""
        source = FakeCaptureSource(script=[make_frame(30, 20)] * MAX_SHAPE_MISMATCHES)
        worker = _worker(source)

        for _ in range(MAX_SHAPE_MISMATCHES - 1):
            assert worker.run_cycle() is False
        with pytest.raises(CaptureFailure):
            worker.run_cycle()

    def test_smoothing_applied(self):
        """With smoothing on, a color change is approached gradually."""
        source = FakeCaptureSource(
            script=[make_frame(40, 20, rgb=(0, 0, 0)), make_frame(40, 20, rgb=(200, 0, 0))]
        )
        worker = _worker(source, smooth=True)
        worker.run_cycle()
        worker.run_cycle()

        red = worker.latest()[0].r
        assert 0 < red < 200


@pytest.mark.integration
class TestWorkerThread:
    """Test the worker thread lifecycle."""

    def test_runs_until_stopped(self):
        """The thread keeps publishing until stop()."""
        source = FakeCaptureSource(script=[make_frame(40, 20, rgb=RED)])
        worker = _worker(source)

        worker.start()
        deadline = time.monotonic() + 2.0
        while worker.cycles < 3 and time.monotonic() < deadline:
            time.sleep(0.005)
        worker.stop()

        assert worker.cycles >= 3
        assert not worker.is_running
        assert worker.state == WorkerState.STOPPED
        assert source.closed

    def test_failure_freezes_last_colors(self):
        """With the freeze policy a failed monitor keeps its last output."""
        source = FakeCaptureSource(
            script=[make_frame(40, 20, rgb=RED), CaptureFailure(0, "unplugged")]
        )
        worker = _worker(source)

        worker.start()
        worker._thread.join(timeout=2.0)

        assert worker.state == WorkerState.FAILED
        assert isinstance(worker.failure, CaptureFailure)
        assert worker.latest() == _solid(RED)

        worker.stop()
        assert worker.state == WorkerState.FAILED

    def test_failure_goes_dark(self):
        """With the dark policy a failed monitor publishes black."""
        source = FakeCaptureSource(
            script=[make_frame(40, 20, rgb=RED), CaptureFailure(0, "unplugged")]
        )
        worker = _worker(source, failure_policy=FailurePolicy.DARK)

        worker.start()
        worker._thread.join(timeout=2.0)

        assert worker.state == WorkerState.FAILED
        assert worker.latest() == (Color.off(), Color.off())
        worker.stop()

    def test_stop_is_not_a_failure(self):
        """Closing the source during shutdown ends the worker cleanly."""
        source = FakeCaptureSource(script=[make_frame(40, 20, rgb=RED)])
        worker = _worker(source)

        worker.start()
        worker.stop()

        assert worker.failure is None
        assert worker.state == WorkerState.STOPPED
