"""autoseg: cut continuous sensor recordings into fixed-length samples.

The entry point is :func:`autoseg.analysis.segments.find_segments`, which
locates the interesting parts of a recording (spoken keywords, gestures) and
returns one ``[start, end)`` range per sample. Loading, exporting and
plotting helpers live in :mod:`autoseg.dataio` and :mod:`autoseg.tools`.
"""

from .analysis.peaks import find_peaks
from .analysis.segments import (
    Segment,
    SegmentFinder,
    find_segments,
    slice_segments,
    window_samples,
)
from .config.runtime import CLIENT_PRESET, SegmentationConfig, load_config
from .errors import InvalidArgument, TooFewSegments

__all__ = [
    "CLIENT_PRESET",
    "InvalidArgument",
    "Segment",
    "SegmentFinder",
    "SegmentationConfig",
    "TooFewSegments",
    "find_peaks",
    "find_segments",
    "load_config",
    "slice_segments",
    "window_samples",
]
