"""Data models for ambiway."""

from .color import Color, LedSequence, RawColor, black_sequence
from .config import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    ControllerSettings,
    Indents,
    LedCounts,
    Settings,
    default_config_path,
)
from .enums import DEFAULT_EDGE_ORDER, Edge, FailurePolicy, WorkerState
from .layout import EdgeLayout, MonitorLayoutConfig, SampleRegion
from .update import DeviceUpdate, ZoneUpdate

__all__ = [
    # Config
    "AppConfig",
    "ControllerSettings",
    "DEFAULT_CONFIG_PATH",
    "Indents",
    "LedCounts",
    "Settings",
    "default_config_path",
    # Colors
    "Color",
    "LedSequence",
    "RawColor",
    "black_sequence",
    # Enums
    "DEFAULT_EDGE_ORDER",
    "Edge",
    "FailurePolicy",
    "WorkerState",
    # Layout
    "EdgeLayout",
    "MonitorLayoutConfig",
    "SampleRegion",
    # Updates
    "DeviceUpdate",
    "ZoneUpdate",
]
