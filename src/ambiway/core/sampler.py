"""Frame sampling: one mean color per sampling region."""

import logging
from collections.abc import Sequence
from typing import Optional

import cv2
import numpy as np
import numpy.typing as npt

from ambiway.exceptions import FrameShapeMismatch
from ambiway.models import RawColor, SampleRegion

logger = logging.getLogger(__name__)

Frame = npt.NDArray[np.uint8]


def frame_size(frame: Frame) -> tuple[int, int]:
    """(width, height) of an OpenCV frame."""
    height, width = frame.shape[:2]
    return int(width), int(height)


def mean_color(frame: Frame, region: SampleRegion) -> RawColor:
    """
    Mean color of a rectangle of a BGR frame.

    Args:
        frame: OpenCV image, shape (height, width, 3), BGR channel order
        region: Rectangle to average (must lie inside the frame)

    Returns:
        Unclamped RGB mean
    """
    roi = frame[region.y:region.y2, region.x:region.x2]
    b, g, r, _ = cv2.mean(roi)
    return RawColor(r, g, b)


def sample(
    frame: Frame,
    regions: Sequence[SampleRegion],
    expected_size: Optional[tuple[int, int]] = None,
    camera_id: Optional[int] = None,
) -> tuple[RawColor, ...]:
    """
    Average every region of a frame, preserving region order.

    Args:
        frame: OpenCV BGR image
        regions: Sampling regions in wiring order
        expected_size: (width, height) the regions were computed for
        camera_id: Used in error messages only

    Returns:
        One raw color per region

    Raises:
        FrameShapeMismatch: If the frame size differs from expected_size
    """
    if expected_size is not None:
        actual = frame_size(frame)
        if actual != tuple(expected_size):
            raise FrameShapeMismatch(tuple(expected_size), actual, camera_id=camera_id)

    return tuple(mean_color(frame, region) for region in regions)


class FrameSampler:
    """Samples frames of one monitor against its cached regions."""

    def __init__(
        self,
        regions: Sequence[SampleRegion],
        frame_size: tuple[int, int],
        camera_id: Optional[int] = None,
    ):
        """
        Initialize the sampler.

        Args:
            regions: Regions computed by the layout engine for this monitor
            frame_size: (width, height) the regions were computed for
            camera_id: Capture device index, for error messages
        """
        self.regions = tuple(regions)
        self.frame_size = frame_size
        self.camera_id = camera_id

    @property
    def led_count(self) -> int:
        return len(self.regions)

    def sample(self, frame: Frame) -> tuple[RawColor, ...]:
        """Average the cached regions of one frame."""
        return sample(frame, self.regions, self.frame_size, self.camera_id)
