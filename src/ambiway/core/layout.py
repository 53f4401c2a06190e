"""Sampling region layout around the edges of a monitor frame.

Regions tile each edge's usable span (frame dimension minus both corner
indents) into one contiguous segment per LED. Each region is as long as its
segment along the edge and `region_size` pixels deep, flush against the
edge. Direction within an edge is clockwise around the screen:

    left   bottom -> top
    up     left   -> right
    right  top    -> bottom
    down   right  -> left

Ordinal 0 of every edge sits at that edge's near corner, so concatenating
edges in `edge_order` gives the physical wiring order of a strip that runs
clockwise. When an edge has more LEDs than usable pixels each region is
widened to one pixel and neighbouring regions overlap.
"""

import logging
import math
from collections.abc import Sequence

from ambiway.exceptions import LayoutError
from ambiway.models import DEFAULT_EDGE_ORDER, Edge, MonitorLayoutConfig, SampleRegion

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _segments(span: int, count: int) -> list[tuple[int, int]]:
    """Split [0, span) into `count` contiguous (offset, length) segments."""
    step = span / count
    bounds = [_round_half_up(step * k) for k in range(count + 1)]
    segments = []
    for k in range(count):
        start, end = bounds[k], bounds[k + 1]
        if end <= start:
            # More LEDs than pixels: keep a 1px region, overlapping the neighbour
            start = min(start, span - 1)
            end = start + 1
        segments.append((start, end - start))
    return segments


def _edge_regions(
    edge: Edge,
    leds: int,
    near: int,
    far: int,
    frame_width: int,
    frame_height: int,
    depth: int,
    monitor_index: int,
) -> list[SampleRegion]:
    if leds == 0:
        return []

    length = frame_height if edge in (Edge.LEFT, Edge.RIGHT) else frame_width
    span = length - near - far
    if span <= 0:
        raise LayoutError(
            monitor_index,
            f"indents {near} + {far} leave no room on a {length}px edge",
            edge=edge.value,
        )

    regions = []
    for ordinal, (offset, size) in enumerate(_segments(span, leds)):
        if edge == Edge.LEFT:
            # bottom -> top
            x, y, w, h = 0, frame_height - near - offset - size, depth, size
        elif edge == Edge.UP:
            # left -> right
            x, y, w, h = near + offset, 0, size, depth
        elif edge == Edge.RIGHT:
            # top -> bottom
            x, y, w, h = frame_width - depth, near + offset, depth, size
        else:
            # right -> left
            x, y, w, h = frame_width - near - offset - size, frame_height - depth, size, depth
        regions.append(SampleRegion(x=x, y=y, width=w, height=h, edge=edge, ordinal=ordinal))
    return regions


def compute_regions(
    layout: MonitorLayoutConfig,
    frame_width: int,
    frame_height: int,
    region_size: int,
    edge_order: Sequence[Edge] = DEFAULT_EDGE_ORDER,
    monitor_index: int = 0,
) -> tuple[SampleRegion, ...]:
    """
    Compute one sampling rectangle per LED, in wiring order.

    Args:
        layout: LED counts and indents for the monitor
        frame_width: Capture frame width in pixels
        frame_height: Capture frame height in pixels
        region_size: Sampling depth from the edge in pixels
        edge_order: Order in which the strip visits the edges
        monitor_index: Used in error messages only

    Returns:
        Tuple of SampleRegion, length equal to the monitor's LED count

    Raises:
        LayoutError: If the frame is empty, region_size does not fit the
            frame, or an edge's indents consume its whole length
    """
    if frame_width <= 0 or frame_height <= 0:
        raise LayoutError(monitor_index, f"invalid frame size {frame_width}x{frame_height}")
    if region_size <= 0:
        raise LayoutError(monitor_index, f"region size must be positive, got {region_size}")
    if region_size > min(frame_width, frame_height):
        raise LayoutError(
            monitor_index,
            f"region size {region_size} exceeds frame {frame_width}x{frame_height}",
        )

    regions: list[SampleRegion] = []
    for edge in edge_order:
        edge_layout = layout.edge(edge)
        regions.extend(
            _edge_regions(
                edge,
                edge_layout.leds,
                edge_layout.near_indent,
                edge_layout.far_indent,
                frame_width,
                frame_height,
                region_size,
                monitor_index,
            )
        )

    logger.debug(
        f"Monitor {monitor_index}: {len(regions)} regions for {frame_width}x{frame_height} "
        f"(size={region_size})"
    )
    return tuple(regions)


def describe_regions(regions: Sequence[SampleRegion]) -> list[str]:
    """Human-readable lines, one per region, for previews and logs."""
    lines = []
    for index, region in enumerate(regions):
        lines.append(
            f"{index:4d}  {region.edge.value:<5} #{region.ordinal:<3d} "
            f"x={region.x:<5d} y={region.y:<5d} {region.width}x{region.height}"
        )
    return lines
