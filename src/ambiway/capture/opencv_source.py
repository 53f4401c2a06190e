"""OpenCV (V4L2) capture source with a background reader thread."""

import logging
import sys
import threading
from typing import Optional

import cv2
import numpy as np
import numpy.typing as npt

from ambiway.exceptions import CaptureFailure, CaptureTimeout

logger = logging.getLogger(__name__)

# Consecutive failed reads before the device is considered gone
MAX_READ_FAILURES = 30


def _default_backend() -> int:
    return cv2.CAP_V4L2 if sys.platform.startswith("linux") else cv2.CAP_ANY


class OpenCVCaptureSource:
    """
    Capture device read continuously by a daemon thread.

    `cv2.VideoCapture.read()` blocks without a timeout, so a reader thread
    keeps only the newest frame and `next_frame()` waits for it with a
    bounded timeout. Frames are BGR `uint8` arrays.
    """

    def __init__(
        self,
        camera_id: int,
        frame_size: Optional[tuple[int, int]] = None,
        backend: Optional[int] = None,
    ):
        """
        Initialize the capture source (does not open the device).

        Args:
            camera_id: Capture device index (/dev/videoN)
            frame_size: Requested (width, height); device default if None
            backend: OpenCV capture API (V4L2 on Linux by default)
        """
        self.camera_id = camera_id
        self._requested_size = frame_size
        self._backend = backend if backend is not None else _default_backend()
        self._capture: Optional[cv2.VideoCapture] = None
        self._frame_size: Optional[tuple[int, int]] = frame_size

        self._running = False
        self._reader_thread: Optional[threading.Thread] = None
        self._frame_lock = threading.Lock()
        self._frame_ready = threading.Condition(self._frame_lock)
        self._frame: Optional[npt.NDArray[np.uint8]] = None
        self._frame_seq = 0
        self._consumed_seq = 0
        self._failure: Optional[str] = None

    @property
    def frame_size(self) -> Optional[tuple[int, int]]:
        return self._frame_size

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> None:
        """Open the device and start the reader thread."""
        if self.is_open:
            logger.warning(f"Camera {self.camera_id} is already open")
            return

        capture = cv2.VideoCapture(self.camera_id, self._backend)
        if not capture.isOpened():
            capture.release()
            raise CaptureFailure(self.camera_id, "device could not be opened")

        if self._requested_size is not None:
            width, height = self._requested_size
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

        width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
        height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
        if width > 0 and height > 0:
            if self._requested_size is not None and (width, height) != tuple(self._requested_size):
                logger.warning(
                    f"Camera {self.camera_id} delivers {width}x{height}, "
                    f"requested {self._requested_size[0]}x{self._requested_size[1]}"
                )
            self._frame_size = (width, height)

        self._capture = capture
        self._failure = None
        self._running = True
        self._reader_thread = threading.Thread(
            target=self._read_frames, name=f"capture-{self.camera_id}", daemon=True
        )
        self._reader_thread.start()
        logger.info(f"Opened camera {self.camera_id} ({self._frame_size})")

    def next_frame(self, timeout: float) -> npt.NDArray[np.uint8]:
        """Wait up to `timeout` seconds for a frame newer than the last one returned."""
        with self._frame_ready:
            ready = self._frame_ready.wait_for(
                lambda: self._frame_seq != self._consumed_seq or self._failure is not None,
                timeout=timeout,
            )
            if self._failure is not None:
                raise CaptureFailure(self.camera_id, self._failure)
            if not ready or self._frame is None:
                raise CaptureTimeout(self.camera_id, timeout)
            self._consumed_seq = self._frame_seq
            return self._frame

    def close(self) -> None:
        """Stop the reader thread and release the device."""
        self._running = False

        with self._frame_ready:
            if self._failure is None:
                self._failure = "capture closed"
            self._frame_ready.notify_all()

        # The reader thread owns the device and releases it on exit
        reader = self._reader_thread
        if reader is not None:
            reader.join(timeout=1.0)
            if reader.is_alive():
                logger.warning(
                    f"Camera {self.camera_id} read is still blocked; "
                    "the device is released when it returns"
                )
        self._reader_thread = None
        self._capture = None

    def _read_frames(self) -> None:
        """Reader thread: keep the newest frame, flag persistent failures."""
        failures = 0
        capture = self._capture
        if capture is None:
            return

        try:
            while self._running:
                try:
                    ok, frame = capture.read()
                except cv2.error as e:
                    ok, frame = False, None
                    logger.debug(f"Camera {self.camera_id} read error: {e}")

                if not ok or frame is None:
                    failures += 1
                    if failures >= MAX_READ_FAILURES:
                        self._set_failure(f"{failures} consecutive failed reads")
                        return
                    continue

                failures = 0
                with self._frame_ready:
                    self._frame = frame
                    self._frame_seq += 1
                    self._frame_ready.notify_all()
        finally:
            capture.release()
            logger.info(f"Released camera {self.camera_id}")

    def _set_failure(self, reason: str) -> None:
        logger.error(f"Camera {self.camera_id} stopped delivering frames: {reason}")
        with self._frame_ready:
            self._failure = reason
            self._frame_ready.notify_all()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def list_cameras(max_index: int = 10, backend: Optional[int] = None) -> list[tuple[int, int, int]]:
    """
    Probe capture device indices.

    Returns:
        List of (camera_id, width, height) for devices that open
    """
    found = []
    api = backend if backend is not None else _default_backend()
    for index in range(max_index):
        capture = cv2.VideoCapture(index, api)
        try:
            if capture.isOpened():
                width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
                height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
                found.append((index, width, height))
        finally:
            capture.release()
    return found
