"""Automatic segmentation of a recording into fixed-length samples.

A recording such as a microphone capture of someone repeating a keyword is
cut into one segment per utterance:

1. multi-axis samples are combined into one channel (sum of ``abs`` values),
2. peaks at least ``0.85 * samples_per_window`` apart are located,
3. around every peak the most energetic run of 20 ms frames is found and the
   segment is centred between that run and the peak,
4. segments that overlap their predecessor by more than 15% are resolved,
5. optionally, near-silent segments are rejected.

Recordings whose overall level stays below ``silence_rms`` yield no segments.

Every returned :class:`Segment` is exactly ``samples_per_window`` long and
lies inside the buffer, so callers can slice the original (all axes) data
with it directly.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike

from ..config.runtime import SegmentationConfig
from ..errors import InvalidArgument
from ..tools.debug import time_block
from .features import as_signal, combine_axes, frame_energies, mean_square, rms
from .filters import remove_mean
from .peaks import find_peaks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """Half-open ``[start, end)`` sample range inside a recording."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass
class Window:
    """Run of energetic frames inside the search range around a peak."""

    start: int
    end: int
    energy: float


@dataclass(frozen=True)
class _Candidate:
    segment: Segment
    peak: int
    peak_value: float


def _positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    if not float(value).is_integer() or value <= 0:
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def _positive_float(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"{name} must be > 0, got {value!r}")
    result = float(value)
    if not math.isfinite(result) or result <= 0:
        raise InvalidArgument(f"{name} must be > 0, got {value!r}")
    return result


def window_samples(window_ms: float, frequency: float) -> int:
    """
    Convert a window length in milliseconds to a number of samples.

    Parameters
    ----------
    window_ms:
        Duration of one sample, e.g. 1000 for one-second keywords.
    frequency:
        Sampling rate in Hz.
    """
    window_ms = _positive_float("window_ms", window_ms)
    frequency = _positive_float("frequency", frequency)
    return max(1, int(round(window_ms / 1000.0 * frequency)))


def slice_segments(data: ArrayLike, segments: Iterable[Segment]) -> List[np.ndarray]:
    """Cut the original (single- or multi-axis) data into one array per segment."""
    arr = np.asarray(data)
    return [arr[s.start : s.end] for s in segments]


class SegmentFinder:
    """
    Find fixed-length segments centred on the interesting parts of a signal.

    Parameters
    ----------
    config:
        Algorithm constants; defaults to :class:`SegmentationConfig`.
    rng:
        Random generator used only when ``shift_segments`` is requested.
        Pass a seeded ``np.random.default_rng(seed)`` for reproducible shifts.
    """

    def __init__(
        self,
        config: Optional[SegmentationConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = (config or SegmentationConfig()).sanitized()
        self._rng = rng if rng is not None else np.random.default_rng()

    def find_segments(
        self,
        data: ArrayLike | Sequence[Sequence[float]],
        samples_per_window: int,
        frequency: float,
        shift_segments: bool = False,
    ) -> List[Segment]:
        """
        Return the segments found in ``data``, ordered by position.

        Parameters
        ----------
        data:
            Complete recording, one value per sample or one tuple per sample
            for multi-axis sensors.
        samples_per_window:
            Length of every returned segment, in samples.
        frequency:
            Sampling rate in Hz.
        shift_segments:
            Randomly move each segment within the slack around its energetic
            region instead of centring it.

        Returns
        -------
        list of Segment
            Possibly empty when nothing stands out from the background.
        """
        samples_per_window = _positive_int("samples_per_window", samples_per_window)
        frequency = _positive_float("frequency", frequency)
        signal = as_signal(data)
        combined = combine_axes(signal)
        length = combined.shape[0]

        if length < samples_per_window:
            logger.debug(
                "Signal of %d samples is shorter than one window (%d); no segments",
                length,
                samples_per_window,
            )
            return []

        silence = self.config.silence_rms
        if silence is not None:
            level = rms(remove_mean(combined))
            if level < silence:
                logger.debug("Signal RMS %.6g below silence level %.6g; no segments", level, silence)
                return []

        with time_block(f"find_segments({length} samples)"):
            distance = math.ceil(samples_per_window * self.config.min_distance_ratio)
            peaks = find_peaks(combined, distance, self.config.peak_threshold_factor)

            candidates = [
                self._segment_around_peak(
                    combined, int(peak), samples_per_window, frequency, distance, shift_segments
                )
                for peak in peaks
            ]
            segments = self._resolve_overlaps(candidates, samples_per_window)

            floor = self.config.min_segment_energy
            if floor is not None:
                segments = [s for s in segments if self._above_floor(signal, s, floor)]

        if (
            length == samples_per_window
            and len(segments) == 1
            and segments[0] == Segment(0, length)
        ):
            # Buffer was already trimmed to a single sample
            return []

        return segments

    # ------------------------------------------------------------------ helpers
    def _segment_around_peak(
        self,
        combined: np.ndarray,
        center: int,
        samples_per_window: int,
        frequency: float,
        distance: int,
        shift_segments: bool,
    ) -> _Candidate:
        length = combined.shape[0]
        half = samples_per_window // 2
        search_start = max(center - distance, 0)
        search_end = min(center + distance, length - 1)

        window = self._most_energetic_window(combined, search_start, search_end, frequency)
        if window is None:
            begin = center - half
        else:
            # Midway between the energetic run and the peak so the peak is kept
            midpoint = ((window.start + window.end) / 2 + center) / 2
            begin = int(math.floor(midpoint)) - half
            if shift_segments:
                begin += self._random_shift(begin, window, samples_per_window, frequency)

        begin = min(max(begin, 0), length - samples_per_window)
        return _Candidate(
            segment=Segment(begin, begin + samples_per_window),
            peak=center,
            peak_value=float(combined[center]),
        )

    def _most_energetic_window(
        self, combined: np.ndarray, start: int, stop: int, frequency: float
    ) -> Optional[Window]:
        frame_length = max(1, int(math.floor(self.config.frame_seconds * frequency)))
        starts, energies = frame_energies(combined, start, stop, frame_length)
        if energies.size == 0:
            return None

        level = float(np.mean(energies)) * self.config.energy_factor
        selected = energies > level
        merge_gap = int(math.floor(self.config.merge_gap_seconds * frequency))

        windows: List[Window] = []
        current: Optional[Window] = None
        for frame_start, energy in zip(starts[selected], energies[selected]):
            frame_start = int(frame_start)
            if current is not None and frame_start - current.end < merge_gap:
                current.end = frame_start + frame_length
                current.energy += float(energy)
                continue
            if current is not None:
                windows.append(current)
            current = Window(frame_start, frame_start + frame_length, float(energy))
        if current is not None:
            windows.append(current)

        if not windows:
            return None
        return max(windows, key=lambda w: w.energy)

    def _random_shift(
        self, begin: int, window: Window, samples_per_window: int, frequency: float
    ) -> int:
        """Signed offset that keeps ``window`` inside the segment with a margin."""
        margin = int(math.ceil(self.config.shift_margin_seconds * frequency))
        end = begin + samples_per_window
        shift_left = self._rng.random() >= 0.5
        if shift_left:
            limit = end - window.end - margin
        else:
            limit = window.start - margin - begin
        if limit <= 0:
            return 0
        amount = int(math.floor(limit * self._rng.random()))
        return -amount if shift_left else amount

    def _resolve_overlaps(
        self, candidates: Sequence[_Candidate], samples_per_window: int
    ) -> List[Segment]:
        min_gap = -self.config.max_overlap_ratio * samples_per_window
        keep_highest = self.config.overlap_policy == "keep_highest"

        accepted: List[_Candidate] = []
        for candidate in sorted(candidates, key=lambda c: c.segment.start):
            keep = True
            while accepted and candidate.segment.start - accepted[-1].segment.end < min_gap:
                previous = accepted[-1]
                if keep_highest and candidate.peak_value > previous.peak_value:
                    logger.debug(
                        "Segment %s (peak %d) replaces overlapping %s (peak %d)",
                        candidate.segment,
                        candidate.peak,
                        previous.segment,
                        previous.peak,
                    )
                    accepted.pop()
                    continue
                logger.debug("Dropping overlapping segment %s", candidate.segment)
                keep = False
                break
            if keep:
                accepted.append(candidate)

        for candidate in accepted:
            logger.debug("Found segment %s around peak %d", candidate.segment, candidate.peak)
        return [c.segment for c in accepted]

    @staticmethod
    def _above_floor(signal: np.ndarray, segment: Segment, floor: float) -> bool:
        energy = mean_square(signal[segment.start : segment.end])
        if energy < floor:
            logger.debug(
                "Rejecting segment %s: mean square %.6g below %.6g", segment, energy, floor
            )
            return False
        return True


def find_segments(
    data: ArrayLike | Sequence[Sequence[float]],
    samples_per_window: int,
    frequency: float,
    shift_segments: bool = False,
    *,
    config: Optional[SegmentationConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Segment]:
    """Convenience wrapper around :meth:`SegmentFinder.find_segments`."""
    finder = SegmentFinder(config=config, rng=rng)
    return finder.find_segments(data, samples_per_window, frequency, shift_segments)


__all__ = [
    "Segment",
    "SegmentFinder",
    "Window",
    "find_segments",
    "slice_segments",
    "window_samples",
]
