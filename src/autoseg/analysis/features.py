"""Feature extraction helpers."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import ArrayLike

from ..errors import InvalidArgument


Number = Union[float, np.floating]


def _to_1d_array(signal: ArrayLike) -> np.ndarray:
    """Convert input to a 1D float64 numpy array."""
    arr = np.asarray(signal, dtype=float)
    if arr.size == 0:
        raise InvalidArgument("signal must contain at least one sample")
    if arr.ndim != 1:
        raise InvalidArgument(f"signal must be 1-D, got shape {arr.shape}")
    return arr


def as_signal(data: ArrayLike | Sequence[Sequence[float]]) -> np.ndarray:
    """
    Validate a single- or multi-axis signal and return it as a float array.

    Parameters
    ----------
    data:
        Either a flat sequence of samples, or a sequence of equally sized
        per-sample tuples (one value per axis).

    Returns
    -------
    np.ndarray
        1-D array of shape ``(n,)`` or 2-D array of shape ``(n, axes)``.
    """
    rows = data
    if not isinstance(data, np.ndarray):
        rows = list(data)
        if rows and not np.isscalar(rows[0]):
            if any(np.isscalar(row) or not hasattr(row, "__len__") for row in rows):
                raise InvalidArgument("multi-axis samples must all be sequences of values")
            widths = {len(row) for row in rows}
            if len(widths) != 1:
                raise InvalidArgument(
                    f"multi-axis samples must all have the same length, got {sorted(widths)}"
                )
    try:
        arr = np.asarray(rows, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"signal must be numeric: {exc}") from exc

    if arr.size == 0 or arr.shape[0] == 0:
        raise InvalidArgument("signal must contain at least one sample")
    if arr.ndim not in (1, 2):
        raise InvalidArgument(f"signal must be 1-D or 2-D, got shape {arr.shape}")
    if arr.ndim == 2 and arr.shape[1] == 0:
        raise InvalidArgument("multi-axis samples must have at least one axis")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgument("signal must only contain finite values")
    return arr


def combine_axes(data: ArrayLike) -> np.ndarray:
    """
    Reduce a multi-axis signal to one channel.

    Each sample becomes the sum of the absolute values of its axes, so
    ``[[1, 2], [4, -2]]`` turns into ``[3, 6]``. Single-axis input is
    returned unchanged.
    """
    arr = as_signal(data)
    if arr.ndim == 1:
        return arr
    return np.sum(np.abs(arr), axis=1)


def rms(signal: ArrayLike) -> Number:
    """
    Compute root-mean-square (RMS) value of a 1-D signal.

    Parameters
    ----------
    signal:
        1-D array-like of samples.

    Returns
    -------
    float
        RMS value of the signal.
    """
    arr = _to_1d_array(signal)
    return float(np.sqrt(np.mean(np.square(arr))))


def mean_square(data: ArrayLike) -> Number:
    """Mean of the squared values over every sample and axis of ``data``."""
    arr = np.asarray(data, dtype=float)
    if arr.size == 0:
        raise InvalidArgument("signal must contain at least one sample")
    return float(np.mean(np.square(arr)))


def frame_energies(
    signal: ArrayLike, start: int, stop: int, frame_length: int
) -> tuple[np.ndarray, np.ndarray]:
    """
    Sum of squares over consecutive, non-overlapping frames.

    Frames begin at ``start`` and advance by ``frame_length`` while the frame
    start is below ``stop - frame_length``.

    Returns
    -------
    starts : np.ndarray
        Start index of every frame.
    energies : np.ndarray
        Energy of every frame.
    """
    if frame_length <= 0:
        raise InvalidArgument(f"frame_length must be > 0, got {frame_length}")
    arr = _to_1d_array(signal)
    starts = np.arange(start, stop - frame_length, frame_length, dtype=int)
    if starts.size == 0:
        return starts, np.empty(0, dtype=float)
    offsets = starts[:, None] + np.arange(frame_length)[None, :]
    energies = np.sum(np.square(arr[offsets]), axis=1)
    return starts, energies
