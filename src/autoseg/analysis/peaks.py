"""Peak detection with distance-based suppression."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike

from ..errors import InvalidArgument
from .features import _to_1d_array, rms
from .filters import remove_mean

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_FACTOR = 2.0


def local_maxima(data: ArrayLike, threshold: float) -> np.ndarray:
    """
    Return indices ``i`` with ``x[i] >= x[i-1]``, ``x[i] > x[i+1]`` and
    ``x[i] > threshold``.

    The first and last samples are never reported.
    """
    arr = _to_1d_array(data)
    if arr.size < 3:
        return np.empty(0, dtype=int)
    mid = arr[1:-1]
    mask = (mid >= arr[:-2]) & (mid > arr[2:]) & (mid > threshold)
    return np.flatnonzero(mask) + 1


def suppress_peaks(peaks: np.ndarray, priority: np.ndarray, distance: int) -> np.ndarray:
    """
    Keep the highest peaks that are at least ``distance`` samples apart.

    Peaks are visited in descending ``priority`` order (equal priorities in
    ascending position); a surviving peak removes every other peak closer
    than ``distance`` on either side. This is the same priority scheme as
    ``scipy.signal.find_peaks(..., distance=...)``.

    Parameters
    ----------
    peaks:
        Sorted peak indices.
    priority:
        Value of each peak, same length as ``peaks``.
    distance:
        Minimum separation in samples.

    Returns
    -------
    np.ndarray
        Boolean mask over ``peaks``; True for peaks that survive.
    """
    size = peaks.shape[0]
    keep = np.ones(size, dtype=bool)
    order = np.argsort(-priority, kind="stable")

    for j in order:
        if not keep[j]:
            continue

        k = j - 1
        while k >= 0 and peaks[j] - peaks[k] < distance:
            keep[k] = False
            k -= 1

        k = j + 1
        while k < size and peaks[k] - peaks[j] < distance:
            keep[k] = False
            k += 1

    return keep


def find_peaks(
    data: ArrayLike,
    distance: int,
    threshold_factor: float = DEFAULT_THRESHOLD_FACTOR,
) -> np.ndarray:
    """
    Find prominent peaks in a single-channel signal.

    The signal mean is removed first; a sample qualifies as a peak when it is
    a local maximum above ``rms * threshold_factor`` of the mean-removed
    signal. Peaks closer than ``distance`` samples are then suppressed in
    favour of the higher one.

    Parameters
    ----------
    data:
        1-D array-like of samples.
    distance:
        Minimum distance between returned peaks, in samples. Must be >= 1.
    threshold_factor:
        Multiplier on the RMS level giving the minimum peak height.

    Returns
    -------
    np.ndarray
        Indices of surviving peaks in ascending order.
    """
    if distance < 1:
        raise InvalidArgument(f"distance must be >= 1, got {distance}")

    centered = remove_mean(_to_1d_array(data))
    threshold = rms(centered) * float(threshold_factor)

    peaks = local_maxima(centered, threshold)
    if peaks.size == 0:
        logger.debug("No peaks above threshold %.6g", threshold)
        return peaks

    keep = suppress_peaks(peaks, centered[peaks], int(distance))
    survivors = peaks[keep]
    logger.debug(
        "Peak detection: %d candidates above %.6g, %d kept after suppression",
        peaks.size,
        threshold,
        survivors.size,
    )
    return survivors
