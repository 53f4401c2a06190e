"""Lighting controller clients."""

from .client import LightingClient, LoggingLightingClient
from .openrgb_client import OpenRGBLightingClient

__all__ = ["LightingClient", "LoggingLightingClient", "OpenRGBLightingClient"]
