"""Core pipeline: layout, sampling, smoothing, scaling, sequencing and threads."""

from .brightness import scale, scale_sequence
from .layout import compute_regions, describe_regions
from .sampler import FrameSampler, mean_color, sample
from .sequencer import sequence
from .smoothing import SMOOTHING_WEIGHT, Smoother, smooth
from .update_loop import UpdateLoop
from .worker import MAX_SHAPE_MISMATCHES, MonitorWorker

__all__ = [
    "FrameSampler",
    "MAX_SHAPE_MISMATCHES",
    "MonitorWorker",
    "SMOOTHING_WEIGHT",
    "Smoother",
    "UpdateLoop",
    "compute_regions",
    "describe_regions",
    "mean_color",
    "sample",
    "scale",
    "scale_sequence",
    "sequence",
    "smooth",
]
