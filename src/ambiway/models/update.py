"""Device update payload sent to the lighting controller once per tick."""

from pydantic import BaseModel, ConfigDict

from .color import Color


class ZoneUpdate(BaseModel):
    """Ordered colors for one controller zone."""

    model_config = ConfigDict(frozen=True)

    zone_id: int
    colors: tuple[Color, ...]

    @property
    def led_count(self) -> int:
        return len(self.colors)


class DeviceUpdate(BaseModel):
    """All zone updates for one device, in configured monitor order."""

    model_config = ConfigDict(frozen=True)

    device_id: int
    zones: tuple[ZoneUpdate, ...]
