"""Per-monitor LED layout and sampling region models."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import Edge


class EdgeLayout(BaseModel):
    """LED count and corner indents for one edge of a monitor.

    `near_indent` is measured from the corner where this edge's LEDs start
    (ordinal 0), `far_indent` from the corner where they end.
    """

    model_config = ConfigDict(frozen=True)

    leds: int = Field(default=0, ge=0, description="Number of LEDs on this edge")
    near_indent: int = Field(default=0, ge=0, description="Pixels skipped at the start corner")
    far_indent: int = Field(default=0, ge=0, description="Pixels skipped at the end corner")


class MonitorLayoutConfig(BaseModel):
    """LED counts and indents for all four edges of one monitor."""

    model_config = ConfigDict(frozen=True)

    left: EdgeLayout = Field(default_factory=EdgeLayout)
    up: EdgeLayout = Field(default_factory=EdgeLayout)
    right: EdgeLayout = Field(default_factory=EdgeLayout)
    down: EdgeLayout = Field(default_factory=EdgeLayout)

    def edge(self, edge: Edge) -> EdgeLayout:
        """Get the layout of one edge."""
        return getattr(self, edge.value)

    @property
    def led_count(self) -> int:
        """Total LEDs around this monitor."""
        return self.left.leds + self.up.leds + self.right.leds + self.down.leds


class SampleRegion(BaseModel):
    """Rectangle of frame pixels averaged into one LED color."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    edge: Edge
    ordinal: int = Field(ge=0, description="Position along the edge, 0 at the start corner")

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height
