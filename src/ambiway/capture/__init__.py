"""Frame acquisition for monitor capture devices."""

from .opencv_source import OpenCVCaptureSource, list_cameras
from .source import CaptureSource

__all__ = ["CaptureSource", "OpenCVCaptureSource", "list_cameras"]
