"""Application configuration model.

The on-disk layout keeps one list entry per monitor in every per-monitor
table, e.g. two monitors:

```toml
[led]
left = [20, 12]
up = [36, 20]
right = [20, 12]
down = [36, 20]

[indent]
left_up = [0, 0]
...

[settings]
size = 40
brightness = 1.0
smooth = true
cams = [0, 2]
device_id = 0
zone_id_list = [0, 1]
```
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .enums import DEFAULT_EDGE_ORDER, Edge, FailurePolicy
from .layout import EdgeLayout, MonitorLayoutConfig

DEFAULT_CONFIG_PATH = Path.home() / ".ambiway" / "config.toml"


def _xdg_config_path() -> Path:
    """Config location under $XDG_CONFIG_HOME (~/.config/ambiway/config.toml)."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / "ambiway" / "config.toml"


def default_config_path() -> Path:
    """
    Config file used when none is given on the command line.

    ~/.ambiway/config.toml wins; an existing file in the XDG config
    directory is used otherwise. New configs go to ~/.ambiway/.
    """
    if not DEFAULT_CONFIG_PATH.exists():
        xdg_path = _xdg_config_path()
        if xdg_path.exists():
            return xdg_path
    return DEFAULT_CONFIG_PATH


class LedCounts(BaseModel):
    """LED count per edge, one entry per monitor."""

    left: list[int] = Field(default_factory=list)
    up: list[int] = Field(default_factory=list)
    right: list[int] = Field(default_factory=list)
    down: list[int] = Field(default_factory=list)

    @field_validator("left", "up", "right", "down")
    @classmethod
    def validate_counts(cls, v: list[int]) -> list[int]:
        if any(count < 0 for count in v):
            raise ValueError("LED counts must be non-negative")
        return v


class Indents(BaseModel):
    """Pixel insets per corner-of-edge, one entry per monitor.

    Empty lists mean no indent on any monitor.
    """

    left_up: list[int] = Field(default_factory=list)
    left_down: list[int] = Field(default_factory=list)
    up_left: list[int] = Field(default_factory=list)
    up_right: list[int] = Field(default_factory=list)
    right_up: list[int] = Field(default_factory=list)
    right_down: list[int] = Field(default_factory=list)
    down_left: list[int] = Field(default_factory=list)
    down_right: list[int] = Field(default_factory=list)

    @field_validator("*")
    @classmethod
    def validate_indents(cls, v: list[int]) -> list[int]:
        if any(indent < 0 for indent in v):
            raise ValueError("Indents must be non-negative")
        return v

    def value(self, name: str, monitor_index: int) -> int:
        values = getattr(self, name)
        return values[monitor_index] if values else 0


class ControllerSettings(BaseModel):
    """OpenRGB SDK server connection."""

    host: str = Field(default="127.0.0.1", description="OpenRGB server address")
    port: int = Field(default=6742, ge=1, le=65535, description="OpenRGB server port")
    client_name: str = Field(default="ambiway", description="Name shown in the OpenRGB client list")


class Settings(BaseModel):
    """Global sampling settings (shared by all monitors)."""

    model_config = ConfigDict(populate_by_name=True)

    region_size: int = Field(alias="size", gt=0, description="Sampling depth from the edge in pixels")
    brightness: float = Field(default=1.0, description="Linear brightness multiplier (<= 0 is off)")
    smooth: bool = Field(default=True, description="Blend each frame with the previous colors")
    camera_ids: list[int] = Field(alias="cams", description="Capture device index per monitor")
    device_id: int = Field(default=0, ge=0, description="OpenRGB device index")
    zone_ids: list[int] = Field(alias="zone_id_list", description="OpenRGB zone index per monitor")

    update_rate: float = Field(
        default=10.0, gt=0, le=60, description="Device updates per second"
    )
    capture_timeout: float = Field(
        default=1.0, gt=0, description="Seconds to wait for a frame before skipping a cycle"
    )
    failure_policy: FailurePolicy = Field(
        default=FailurePolicy.FREEZE,
        description="What a monitor's zone shows after its camera fails (freeze or dark)",
    )
    edge_order: list[Edge] = Field(
        default_factory=lambda: list(DEFAULT_EDGE_ORDER),
        description="Order in which the strip visits the edges (clockwise within each edge)",
    )
    frame_sizes: list[tuple[int, int]] | None = Field(
        default=None,
        description="Capture resolution [width, height] per monitor (probed from the device if unset)",
    )
    controller: ControllerSettings = Field(default_factory=ControllerSettings)

    @field_validator("edge_order")
    @classmethod
    def validate_edge_order(cls, v: list[Edge]) -> list[Edge]:
        if sorted(e.value for e in v) != sorted(e.value for e in Edge):
            raise ValueError("edge_order must list each of left, up, right, down exactly once")
        return v

    @field_validator("frame_sizes")
    @classmethod
    def validate_frame_sizes(cls, v: list[tuple[int, int]] | None) -> list[tuple[int, int]] | None:
        if v is not None and any(w <= 0 or h <= 0 for w, h in v):
            raise ValueError("frame sizes must be positive")
        return v

    @property
    def tick_interval(self) -> float:
        """Seconds between device updates."""
        return 1.0 / self.update_rate


class AppConfig(BaseModel):
    """Application configuration and settings."""

    led: LedCounts
    indent: Indents = Field(default_factory=Indents)
    settings: Settings

    @model_validator(mode="after")
    def validate_cardinality(self) -> "AppConfig":
        """Every per-monitor list must have one entry per camera."""
        monitors = len(self.settings.camera_ids)
        if monitors == 0:
            raise ValueError("cams must list at least one capture device")

        checks: dict[str, list[Any]] = {
            "settings.zone_id_list": self.settings.zone_ids,
            "led.left": self.led.left,
            "led.up": self.led.up,
            "led.right": self.led.right,
            "led.down": self.led.down,
        }
        for name in Indents.model_fields:
            values = getattr(self.indent, name)
            if values:
                checks[f"indent.{name}"] = values
        if self.settings.frame_sizes is not None:
            checks["settings.frame_sizes"] = self.settings.frame_sizes

        mismatched = [name for name, values in checks.items() if len(values) != monitors]
        if mismatched:
            raise ValueError(
                f"cams lists {monitors} monitor(s) but "
                + ", ".join(f"{name} has {len(checks[name])}" for name in mismatched)
            )
        return self

    @property
    def monitor_count(self) -> int:
        return len(self.settings.camera_ids)

    def monitor_layout(self, index: int) -> MonitorLayoutConfig:
        """Build the layout for one monitor.

        Near/far corners follow the clockwise wiring direction: left runs
        bottom to top, up left to right, right top to bottom, down right to left.
        """
        indent = self.indent
        return MonitorLayoutConfig(
            left=EdgeLayout(
                leds=self.led.left[index],
                near_indent=indent.value("left_down", index),
                far_indent=indent.value("left_up", index),
            ),
            up=EdgeLayout(
                leds=self.led.up[index],
                near_indent=indent.value("up_left", index),
                far_indent=indent.value("up_right", index),
            ),
            right=EdgeLayout(
                leds=self.led.right[index],
                near_indent=indent.value("right_up", index),
                far_indent=indent.value("right_down", index),
            ),
            down=EdgeLayout(
                leds=self.led.down[index],
                near_indent=indent.value("down_right", index),
                far_indent=indent.value("down_left", index),
            ),
        )

    def monitor_layouts(self) -> list[MonitorLayoutConfig]:
        """Layouts for all monitors, in camera list order."""
        return [self.monitor_layout(i) for i in range(self.monitor_count)]

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<config>") -> "AppConfig":
        """
        Validate a parsed config document.

        Raises:
            ConfigValidationError: If values or list lengths are invalid
        """
        from ambiway.exceptions import wrap_pydantic_error

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise wrap_pydantic_error(e, source) from e

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from a TOML or JSON file.

        Args:
            path: Path to config file. If None, uses default_config_path().

        Raises:
            ConfigurationError: If the file is missing
            ConfigFileInvalidError: If the file has invalid syntax
            ConfigValidationError: If config values fail validation
        """
        from ambiway.exceptions import ConfigurationError
        from ambiway.utils.persistence import PydanticPersistence

        if path is None:
            path = default_config_path()

        try:
            data = PydanticPersistence.read_document(path)
        except FileNotFoundError as e:
            raise ConfigurationError(
                user_message=f"Config file not found: {path}",
                recovery_hint=f"Run 'ambiway config init' to create {path}",
            ) from e
        return cls.from_dict(data, str(path))

    @staticmethod
    def default_template() -> str:
        """Starter config for a single 1920x1080 monitor."""
        return DEFAULT_TEMPLATE


DEFAULT_TEMPLATE = """\
# ambiway configuration
# Every list holds one entry per monitor, in the same order as settings.cams.

[led]
# LEDs on each edge. The strip starts at the bottom-left corner and runs
# clockwise: left (bottom->top), up (left->right), right (top->bottom),
# down (right->left).
left = [20]
up = [36]
right = [20]
down = [36]

[indent]
# Pixels to skip at each end of each edge, named <edge>_<corner>.
left_up = [0]
left_down = [0]
up_left = [0]
up_right = [0]
right_up = [0]
right_down = [0]
down_left = [0]
down_right = [0]

[settings]
size = 40            # sampling depth from the edge, in pixels
brightness = 1.0     # linear multiplier, values above 1 saturate
smooth = true        # blend each frame with the previous colors
cams = [0]           # V4L2 capture device index per monitor
device_id = 0        # OpenRGB device index
zone_id_list = [0]   # OpenRGB zone index per monitor
update_rate = 10.0   # device updates per second
failure_policy = "freeze"   # or "dark" once a camera fails

[settings.controller]
host = "127.0.0.1"
port = 6742
"""
