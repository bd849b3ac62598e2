"""Runtime configuration for the segmentation algorithm."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml

from ..errors import InvalidArgument

OVERLAP_POLICIES = ("keep_highest", "drop")


@dataclass(slots=True)
class SegmentationConfig:
    """
    Tuning knobs for how recordings are cut into samples.

    The defaults follow the studio-side segmenter: peaks must exceed twice
    the RMS level, frames count as energetic above 1.2x the mean frame
    energy, and overlapping segments keep the one with the higher peak.
    See :data:`CLIENT_PRESET` for the constant set used by the mobile client.
    """

    # Peak height threshold, as a multiple of the mean-removed RMS level
    peak_threshold_factor: float = 2.0
    # Frame energy threshold, as a multiple of the mean frame energy
    energy_factor: float = 1.2

    # Fractions of samples_per_window
    min_distance_ratio: float = 0.85
    max_overlap_ratio: float = 0.15

    # Durations in seconds, converted with the sampling frequency
    frame_seconds: float = 0.02
    merge_gap_seconds: float = 0.2
    shift_margin_seconds: float = 0.1

    # Mean-removed RMS below which the recording counts as silence (None = off)
    silence_rms: Optional[float] = 0.01

    overlap_policy: str = "keep_highest"
    # Mean squared amplitude below which a segment counts as silence (None = off)
    min_segment_energy: Optional[float] = None

    def sanitized(self) -> SegmentationConfig:
        """Return a copy with derived limits applied."""
        policy = str(self.overlap_policy or "keep_highest").strip().lower().replace("-", "_")
        if policy not in OVERLAP_POLICIES:
            raise InvalidArgument(
                f"overlap_policy must be one of {OVERLAP_POLICIES}, got {self.overlap_policy!r}"
            )
        floor = self.min_segment_energy
        if floor is not None:
            floor = max(0.0, float(floor))
        silence = self.silence_rms
        if silence is not None:
            silence = max(0.0, float(silence))
        return SegmentationConfig(
            peak_threshold_factor=max(0.0, float(self.peak_threshold_factor)),
            energy_factor=max(0.0, float(self.energy_factor)),
            min_distance_ratio=max(1e-6, min(1.0, float(self.min_distance_ratio))),
            max_overlap_ratio=max(0.0, min(1.0, float(self.max_overlap_ratio))),
            frame_seconds=max(1e-6, float(self.frame_seconds)),
            merge_gap_seconds=max(0.0, float(self.merge_gap_seconds)),
            shift_margin_seconds=max(0.0, float(self.shift_margin_seconds)),
            silence_rms=silence,
            overlap_policy=policy,
            min_segment_energy=floor,
        )


# Constant set of the browser client segmenter
CLIENT_PRESET = SegmentationConfig(
    peak_threshold_factor=1.2,
    energy_factor=2.0,
    overlap_policy="drop",
    min_segment_energy=100000.0,
)

PRESETS: dict[str, SegmentationConfig] = {
    "studio": SegmentationConfig(),
    "client": CLIENT_PRESET,
}


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`SegmentationConfig`."""
    return {f.name for f in fields(SegmentationConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten known nesting patterns (e.g. top-level ``segmentation`` key)."""
    if "segmentation" in data and isinstance(data["segmentation"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "segmentation":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> SegmentationConfig:
    """
    Build :class:`SegmentationConfig` from ``data`` (ignoring unknown keys).

    A ``preset`` key (``studio`` or ``client``) selects the base values that
    the remaining keys override.
    """
    if not data:
        return SegmentationConfig()
    normalized = _normalize_mapping(data)
    preset_name = str(normalized.pop("preset", "studio")).strip().lower()
    if preset_name not in PRESETS:
        raise InvalidArgument(
            f"preset must be one of {tuple(PRESETS)}, got {preset_name!r}"
        )
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return replace(PRESETS[preset_name], **payload).sanitized()


def load_config(path: str | Path | None) -> SegmentationConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`SegmentationConfig`.
    """
    if path is None:
        return SegmentationConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return SegmentationConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = [
    "CLIENT_PRESET",
    "OVERLAP_POLICIES",
    "PRESETS",
    "SegmentationConfig",
    "config_from_mapping",
    "load_config",
]
