"""Per-monitor capture and processing worker."""

import logging
import threading
from typing import Optional

from ambiway.capture import CaptureSource
from ambiway.core.brightness import scale_sequence
from ambiway.core.sampler import FrameSampler
from ambiway.core.smoothing import Smoother
from ambiway.exceptions import CaptureFailure, CaptureTimeout, FrameShapeMismatch
from ambiway.models import FailurePolicy, LedSequence, WorkerState, black_sequence
from ambiway.utils import LatestValue

logger = logging.getLogger(__name__)

# Consecutive wrong-sized frames before the capture is treated as failed
MAX_SHAPE_MISMATCHES = 3


class MonitorWorker:
    """
    Runs capture -> sample -> smooth -> scale for one monitor on its own thread.

    The worker exclusively owns its capture source, sampler and smoothing
    state. The only thing it shares is the latest finished LedSequence,
    published as an immutable tuple into a single-slot cell that the update
    loop reads without blocking.

    State cycle: IDLE -> CAPTURING -> SAMPLING -> PROCESSING -> READY -> IDLE.
    A persistent capture failure moves the worker to FAILED and ends its
    thread; `stop()` moves it to STOPPED.
    """

    def __init__(
        self,
        index: int,
        source: CaptureSource,
        sampler: FrameSampler,
        brightness: float,
        smooth: bool,
        interval: float,
        capture_timeout: float = 1.0,
        failure_policy: FailurePolicy = FailurePolicy.FREEZE,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the worker (the capture source must already be open).

        Args:
            index: Monitor position in the configured camera list
            source: Open capture source for this monitor
            sampler: Sampler bound to this monitor's regions
            brightness: Linear brightness factor
            smooth: Enable temporal smoothing
            interval: Minimum seconds between cycles
            capture_timeout: Seconds to wait for a frame
            failure_policy: What to publish once the capture fails
            stop_event: Shared shutdown signal (a private one if None)
        """
        self.index = index
        self.source = source
        self.sampler = sampler
        self.brightness = brightness
        self.interval = interval
        self.capture_timeout = capture_timeout
        self.failure_policy = failure_policy
        self.smoother = Smoother(enabled=smooth)

        self._stop_event = stop_event or threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._state = WorkerState.IDLE
        self._state_lock = threading.Lock()
        self._latest: LatestValue[LedSequence] = LatestValue()
        self._shape_mismatches = 0
        self.failure: Optional[Exception] = None

        self.cycles = 0
        self.timeouts = 0

    @property
    def led_count(self) -> int:
        return self.sampler.led_count

    @property
    def camera_id(self) -> Optional[int]:
        return self.source.camera_id

    @property
    def state(self) -> WorkerState:
        with self._state_lock:
            return self._state

    def _set_state(self, state: WorkerState) -> None:
        with self._state_lock:
            self._state = state

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def latest(self) -> Optional[LedSequence]:
        """Most recently published sequence (None until the first one)."""
        return self._latest.get()

    def start(self) -> None:
        """Start the worker thread."""
        if self.is_running:
            logger.warning(f"Monitor {self.index} worker is already running")
            return

        self._thread = threading.Thread(
            target=self._run, name=f"monitor-{self.index}", daemon=True
        )
        self._thread.start()
        logger.debug(f"Monitor {self.index} worker started (camera {self.camera_id})")

    def stop(self, timeout: float = 2.0) -> None:
        """Signal shutdown, wait for the thread, release the capture source."""
        self._stop_event.set()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning(f"Monitor {self.index} worker did not stop within {timeout}s")

        try:
            self.source.close()
        except Exception as e:
            logger.error(f"Error releasing camera {self.camera_id}: {e}")

        if self.state != WorkerState.FAILED:
            self._set_state(WorkerState.STOPPED)
        logger.debug(f"Monitor {self.index} worker stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_cycle()
            except CaptureFailure as e:
                if self._stop_event.is_set():
                    # Source closed under us during shutdown
                    return
                self._fail(e)
                return
            except Exception as e:
                logger.exception(f"Monitor {self.index}: unexpected error in capture cycle")
                self._fail(e)
                return

            self._set_state(WorkerState.IDLE)
            self._stop_event.wait(self.interval)

    def run_cycle(self) -> bool:
        """
        Run one capture/process cycle.

        Returns:
            True if a fresh sequence was published, False if the cycle was
            skipped (timeout or a single wrong-sized frame)

        Raises:
            CaptureFailure: When the capture is gone or keeps delivering
                wrong-sized frames
        """
        self._set_state(WorkerState.CAPTURING)
        try:
            frame = self.source.next_frame(self.capture_timeout)
        except CaptureTimeout as e:
            self.timeouts += 1
            logger.warning(f"Monitor {self.index}: {e.user_message}, keeping previous colors")
            return False

        self._set_state(WorkerState.SAMPLING)
        try:
            raw = self.sampler.sample(frame)
        except FrameShapeMismatch as e:
            self._shape_mismatches += 1
            if self._shape_mismatches >= MAX_SHAPE_MISMATCHES:
                raise CaptureFailure(
                    self.camera_id,
                    f"{self._shape_mismatches} consecutive wrong-sized frames ({e.user_message})",
                ) from e
            logger.warning(f"Monitor {self.index}: {e.user_message}, frame skipped")
            return False
        self._shape_mismatches = 0

        self._set_state(WorkerState.PROCESSING)
        smoothed = self.smoother.apply(raw)
        colors = scale_sequence(smoothed, self.brightness)

        self._latest.publish(colors)
        self.cycles += 1
        self._set_state(WorkerState.READY)
        return True

    def _fail(self, error: Exception) -> None:
        self.failure = error
        self._set_state(WorkerState.FAILED)

        message = getattr(error, "user_message", str(error))
        if self.failure_policy == FailurePolicy.DARK:
            self._latest.publish(black_sequence(self.led_count))
            logger.error(f"Monitor {self.index} failed: {message}. Its zone is switched off")
        else:
            logger.error(f"Monitor {self.index} failed: {message}. Its zone keeps the last colors")
