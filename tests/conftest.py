"""Pytest fixtures for tests."""

from collections.abc import Iterable
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Optional, Union
from unittest.mock import Mock

import numpy as np
import pytest

from ambiway.exceptions import CaptureFailure, CaptureTimeout
from ambiway.models import AppConfig


def make_frame(width: int, height: int, rgb: tuple[int, int, int] = (0, 0, 0)) -> np.ndarray:
    """Create a solid BGR frame like the ones OpenCV delivers."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    r, g, b = rgb
    frame[:, :] = (b, g, r)
    return frame


class FakeCaptureSource:
    """
    Scripted capture source.

    Each call to `next_frame` consumes the next scripted item: a frame is
    returned, an exception is raised. When the script runs out the last
    frame is repeated (or a timeout raised if there never was one).
    """

    def __init__(
        self,
        camera_id: int = 0,
        script: Iterable[Union[np.ndarray, Exception]] = (),
        frame_size: Optional[tuple[int, int]] = None,
        fail_open: bool = False,
    ):
        self.camera_id = camera_id
        self.script = list(script)
        self.frame_size = frame_size
        self.fail_open = fail_open
        self.opened = False
        self.closed = False
        self.calls = 0
        self._last_frame: Optional[np.ndarray] = None

    def open(self) -> None:
        if self.fail_open:
            raise CaptureFailure(self.camera_id, "device could not be opened")
        self.opened = True

    def next_frame(self, timeout: float) -> np.ndarray:
        self.calls += 1
        if self.closed:
            raise CaptureFailure(self.camera_id, "capture closed")
        if self.script:
            item = self.script.pop(0)
            if isinstance(item, Exception):
                raise item
            self._last_frame = item
            return item
        if self._last_frame is None:
            raise CaptureTimeout(self.camera_id, timeout)
        return self._last_frame

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_dict():
    """Two-monitor config document, as parsed from TOML."""
    return {
        "led": {
            "left": [2, 1],
            "up": [0, 2],
            "right": [2, 1],
            "down": [0, 2],
        },
        "indent": {},
        "settings": {
            "size": 10,
            "brightness": 1.0,
            "smooth": False,
            "cams": [0, 2],
            "device_id": 0,
            "zone_id_list": [0, 1],
            "update_rate": 60,
            "capture_timeout": 0.05,
        },
    }


@pytest.fixture
def app_config(config_dict):
    """Validated two-monitor AppConfig."""
    return AppConfig.from_dict(config_dict)


@pytest.fixture
def mock_client():
    """Lighting client mock that accepts every update."""
    client = Mock()
    client.zone_led_count.return_value = None
    return client


@pytest.fixture
def red_blue_frame():
    """100x50 frame: pure red on the left half, pure blue on the right half."""
    frame = make_frame(100, 50)
    frame[:, :50] = (0, 0, 255)
    frame[:, 50:] = (255, 0, 0)
    return frame
