"""Enumerations for ambiway."""

from enum import Enum


class Edge(str, Enum):
    """Monitor edges used as LED mounting references."""

    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


# Physical wiring order: strip starts at the bottom-left corner and runs clockwise
DEFAULT_EDGE_ORDER: tuple[Edge, ...] = (Edge.LEFT, Edge.UP, Edge.RIGHT, Edge.DOWN)


class WorkerState(str, Enum):
    """Monitor worker lifecycle states."""

    IDLE = "idle"  # Waiting for the next cycle
    CAPTURING = "capturing"  # Blocked on the capture source (bounded by timeout)
    SAMPLING = "sampling"  # Averaging regions of the frame
    PROCESSING = "processing"  # Smoothing and brightness scaling
    READY = "ready"  # Fresh sequence published
    FAILED = "failed"  # Capture device lost, no more fresh data
    STOPPED = "stopped"  # Shut down cleanly


class FailurePolicy(str, Enum):
    """What a failed monitor's zone shows."""

    FREEZE = "freeze"  # Keep the last published colors
    DARK = "dark"  # Switch the zone off
