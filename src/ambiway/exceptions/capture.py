"""Capture-related exceptions.

This module defines exceptions raised while reading frames from a
monitor's capture device:
- CaptureError: Base class for capture errors
- CaptureTimeout: No new frame arrived in time (transient)
- CaptureFailure: The device is gone or unreadable (persistent)
- FrameShapeMismatch: Frame size differs from the cached layout
"""

from typing import Optional

from .base import AmbiwayError


class CaptureError(AmbiwayError):
    """Capture device operation failed."""

    def __init__(self, user_message: str, camera_id: Optional[int] = None, **kwargs):
        """
        Initialize capture error.

        Args:
            user_message: User-friendly error message
            camera_id: The capture device index (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.camera_id = camera_id


class CaptureTimeout(CaptureError):
    """No frame became available within the capture timeout."""

    def __init__(self, camera_id: Optional[int], timeout: float):
        """
        Initialize capture timeout.

        Args:
            camera_id: The capture device index
            timeout: How long we waited (seconds)
        """
        super().__init__(
            user_message=f"Camera {camera_id} produced no frame within {timeout:.2f}s",
            camera_id=camera_id,
            recoverable=True,
        )
        self.timeout = timeout


class CaptureFailure(CaptureError):
    """Capture device disappeared or cannot be read."""

    def __init__(self, camera_id: Optional[int], reason: str):
        """
        Initialize capture failure.

        Args:
            camera_id: The capture device index
            reason: Why the device failed
        """
        super().__init__(
            user_message=f"Camera {camera_id} failed: {reason}",
            technical_message=f"Capture failure on camera {camera_id}: {reason}",
            camera_id=camera_id,
            recoverable=False,
            recovery_hint=(
                "Check the capture device is connected. "
                "Run 'ambiway cams list' to see which cameras can be opened"
            ),
        )
        self.reason = reason


class FrameShapeMismatch(CaptureError):
    """Incoming frame dimensions disagree with the cached sampling regions."""

    def __init__(
        self,
        expected: tuple[int, int],
        actual: tuple[int, int],
        camera_id: Optional[int] = None,
    ):
        """
        Initialize frame shape mismatch.

        Args:
            expected: (width, height) the regions were computed for
            actual: (width, height) of the received frame
            camera_id: The capture device index (if known)
        """
        super().__init__(
            user_message=(
                f"Frame size {actual[0]}x{actual[1]} does not match "
                f"expected {expected[0]}x{expected[1]}"
            ),
            camera_id=camera_id,
            recoverable=True,
            recovery_hint="Set 'frame_sizes' in the config to the capture resolution",
        )
        self.expected = expected
        self.actual = actual
