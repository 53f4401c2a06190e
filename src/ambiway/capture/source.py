"""Protocol for per-monitor frame sources."""

from typing import Optional, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt


@runtime_checkable
class CaptureSource(Protocol):
    """
    Pull interface to one monitor's video feed.

    Implementations must make `next_frame` return within roughly `timeout`
    seconds and must be safe to `close()` from another thread while a
    caller is blocked in `next_frame`.
    """

    camera_id: Optional[int]

    def open(self) -> None:
        """
        Acquire the device.

        Raises:
            CaptureFailure: If the device cannot be opened
        """
        ...

    @property
    def frame_size(self) -> Optional[tuple[int, int]]:
        """(width, height) of delivered frames, if known."""
        ...

    def next_frame(self, timeout: float) -> npt.NDArray[np.uint8]:
        """
        Wait for a frame newer than the last one returned.

        Raises:
            CaptureTimeout: No new frame within `timeout` seconds
            CaptureFailure: The device is gone
        """
        ...

    def close(self) -> None:
        """Release the device."""
        ...
