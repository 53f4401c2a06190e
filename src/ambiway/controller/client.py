"""Lighting controller client protocol and a logging client for dry runs."""

import logging
from typing import Optional, Protocol, runtime_checkable

from ambiway.models import DeviceUpdate

logger = logging.getLogger(__name__)


@runtime_checkable
class LightingClient(Protocol):
    """
    Pushes ordered colors to controller zones.

    `update` is called once per tick from the update loop thread. It must
    raise ControllerUpdateFailure (or ControllerConnectionError) rather
    than library-specific exceptions.
    """

    def connect(self) -> None:
        """Connect to the controller."""
        ...

    def zone_led_count(self, device_id: int, zone_id: int) -> Optional[int]:
        """LED count of a zone, or None if the client cannot tell."""
        ...

    def update(self, device_update: DeviceUpdate) -> None:
        """Send one tick's colors for every zone."""
        ...

    def disconnect(self) -> None:
        """Close the connection."""
        ...


class LoggingLightingClient:
    """Client that only logs updates (used with --dry-run)."""

    def __init__(self, log_every: int = 50):
        """
        Args:
            log_every: Log one summary line every N updates
        """
        self.log_every = max(1, log_every)
        self.updates_sent = 0
        self.last_update: Optional[DeviceUpdate] = None

    def connect(self) -> None:
        logger.info("Dry run: no lighting controller connected")

    def zone_led_count(self, device_id: int, zone_id: int) -> Optional[int]:
        return None

    def update(self, device_update: DeviceUpdate) -> None:
        self.last_update = device_update
        self.updates_sent += 1
        if self.updates_sent % self.log_every == 1:
            for zone in device_update.zones:
                preview = " ".join(c.to_hex() for c in zone.colors[:4])
                logger.info(
                    f"Dry run: device {device_update.device_id} zone {zone.zone_id} "
                    f"<- {zone.led_count} colors [{preview}{' ...' if zone.led_count > 4 else ''}]"
                )

    def disconnect(self) -> None:
        logger.info(f"Dry run finished after {self.updates_sent} updates")
