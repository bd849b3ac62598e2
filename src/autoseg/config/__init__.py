"""Configuration objects and helpers for autoseg.

This package knows how to load YAML descriptors that tune the segmenter
(peak threshold, frame energy factor, overlap policy, silence floor). The
resulting typed dataclass (see :mod:`runtime`) is passed to
:class:`~autoseg.analysis.segments.SegmentFinder` and the command-line tool.
"""

from .runtime import (
    CLIENT_PRESET,
    PRESETS,
    SegmentationConfig,
    config_from_mapping,
    load_config,
)

__all__ = [
    "CLIENT_PRESET",
    "PRESETS",
    "SegmentationConfig",
    "config_from_mapping",
    "load_config",
]
