"""Signal analysis utilities (features, filtering, peaks and segmentation).

This package gathers pure-Python helpers that operate on NumPy arrays of
sensor samples. Modules such as :mod:`features`, :mod:`filters`,
:mod:`peaks` and :mod:`segments` stay free of plotting and I/O dependencies
so they can be reused in command-line scripts, automated tests, or an
upload pipeline alike.
"""

from .peaks import find_peaks
from .segments import (
    Segment,
    SegmentFinder,
    Window,
    find_segments,
    slice_segments,
    window_samples,
)

__all__ = [
    "Segment",
    "SegmentFinder",
    "Window",
    "find_peaks",
    "find_segments",
    "slice_segments",
    "window_samples",
]
