"""Lighting controller exceptions.

This module defines exceptions for the OpenRGB controller connection:
- ControllerError: Base class for controller errors
- ControllerConnectionError: Server unreachable or device/zone missing
- ControllerUpdateFailure: A single color update was rejected
"""

from typing import Optional

from .base import AmbiwayError


class ControllerError(AmbiwayError):
    """Lighting controller operation failed."""

    def __init__(
        self,
        user_message: str,
        device_id: Optional[int] = None,
        zone_id: Optional[int] = None,
        **kwargs
    ):
        """
        Initialize controller error.

        Args:
            user_message: User-friendly error message
            device_id: Controller device index (if applicable)
            zone_id: Zone index on the device (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.device_id = device_id
        self.zone_id = zone_id


class ControllerConnectionError(ControllerError):
    """Could not reach the OpenRGB server, device or zone."""

    def __init__(self, address: str, original_error: Optional[str] = None, **kwargs):
        """
        Initialize controller connection error.

        Args:
            address: host:port of the OpenRGB server
            original_error: The original error message from the client library
        """
        tech_msg = f"Cannot connect to OpenRGB server at {address}"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        kwargs.setdefault("user_message", f"Cannot connect to OpenRGB server at {address}")
        kwargs.setdefault(
            "recovery_hint",
            "Start OpenRGB with the SDK server enabled (openrgb --server) "
            "and check the host/port in the [settings.controller] table",
        )
        super().__init__(
            technical_message=tech_msg,
            recoverable=False,
            **kwargs
        )
        self.address = address


class ControllerUpdateFailure(ControllerError):
    """Sending colors to a zone failed for this tick."""

    def __init__(self, device_id: int, zone_id: int, original_error: str):
        """
        Initialize controller update failure.

        Args:
            device_id: Controller device index
            zone_id: Zone that rejected the update
            original_error: The original error message from the client library
        """
        super().__init__(
            user_message=f"Failed to update zone {zone_id} on device {device_id}",
            technical_message=(
                f"Zone update failed (device={device_id}, zone={zone_id}): {original_error}"
            ),
            device_id=device_id,
            zone_id=zone_id,
            recoverable=True,
        )
        self.original_error = original_error
