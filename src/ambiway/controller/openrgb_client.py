"""OpenRGB SDK client adapter."""

import logging
from typing import Optional

from openrgb import OpenRGBClient
from openrgb.utils import RGBColor

from ambiway.exceptions import (
    ControllerConnectionError,
    ControllerUpdateFailure,
    wrap_openrgb_error,
)
from ambiway.models import ControllerSettings, DeviceUpdate

logger = logging.getLogger(__name__)


class OpenRGBLightingClient:
    """
    Sends zone colors to an OpenRGB SDK server.

    One connection is shared by all zones; updates for a tick are sent
    zone by zone in monitor order using the fast (no state refresh) path.
    """

    def __init__(self, settings: Optional[ControllerSettings] = None):
        """
        Args:
            settings: Server host/port and client name (defaults if None)
        """
        self.settings = settings or ControllerSettings()
        self._client: Optional[OpenRGBClient] = None

    @property
    def address(self) -> str:
        return f"{self.settings.host}:{self.settings.port}"

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        """Connect to the server."""
        if self.is_connected:
            return
        try:
            self._client = OpenRGBClient(
                address=self.settings.host,
                port=self.settings.port,
                name=self.settings.client_name,
            )
        except (OSError, TimeoutError) as e:
            raise ControllerConnectionError(self.address, original_error=str(e)) from e
        logger.info(f"Connected to OpenRGB at {self.address} ({len(self._client.devices)} devices)")

    def _zone(self, device_id: int, zone_id: int):
        if self._client is None:
            raise ControllerConnectionError(self.address, original_error="not connected")
        devices = self._client.devices
        if not 0 <= device_id < len(devices):
            raise ControllerConnectionError(
                self.address,
                user_message=f"OpenRGB device {device_id} not found ({len(devices)} devices)",
                recovery_hint="Run 'ambiway controller list' to see device and zone IDs",
                device_id=device_id,
            )
        zones = devices[device_id].zones
        if not 0 <= zone_id < len(zones):
            raise ControllerConnectionError(
                self.address,
                user_message=(
                    f"Zone {zone_id} not found on device {device_id} ({len(zones)} zones)"
                ),
                recovery_hint="Run 'ambiway controller list' to see device and zone IDs",
                device_id=device_id,
                zone_id=zone_id,
            )
        return zones[zone_id]

    def zone_led_count(self, device_id: int, zone_id: int) -> Optional[int]:
        """Number of LEDs OpenRGB reports for a zone."""
        return len(self._zone(device_id, zone_id).leds)

    def update(self, device_update: DeviceUpdate) -> None:
        """
        Set the colors of every zone in the update.

        All zones are attempted; the first failure is raised afterwards so
        one bad zone does not stop the others from updating.
        """
        first_error: Optional[Exception] = None
        for zone_update in device_update.zones:
            try:
                zone = self._zone(device_update.device_id, zone_update.zone_id)
                zone.set_colors(
                    [RGBColor(c.r, c.g, c.b) for c in zone_update.colors],
                    fast=True,
                )
            except (ControllerConnectionError, ControllerUpdateFailure) as e:
                first_error = first_error or e
            except Exception as e:
                first_error = first_error or wrap_openrgb_error(
                    e, device_update.device_id, zone_update.zone_id, address=self.address
                )
        if first_error is not None:
            raise first_error

    def list_devices(self) -> list[tuple[int, str, list[tuple[int, str, int]]]]:
        """
        Describe the server's devices.

        Returns:
            List of (device_id, name, [(zone_id, zone_name, led_count), ...])
        """
        if self._client is None:
            raise ControllerConnectionError(self.address, original_error="not connected")
        result = []
        for device_id, device in enumerate(self._client.devices):
            zones = [(zone_id, zone.name, len(zone.leds)) for zone_id, zone in enumerate(device.zones)]
            result.append((device_id, device.name, zones))
        return result

    def disconnect(self) -> None:
        """Close the connection."""
        if self._client is None:
            return
        try:
            self._client.disconnect()
        except OSError as e:
            logger.warning(f"Error disconnecting from OpenRGB: {e}")
        finally:
            self._client = None
        logger.info("Disconnected from OpenRGB")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
