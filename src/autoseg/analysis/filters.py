"""Filtering helpers."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal


def detrend(data: ArrayLike, *, axis: int = -1, type: str = "linear") -> np.ndarray:
    """
    Remove a trend from data using scipy.signal.detrend.

    Parameters
    ----------
    data:
        Input data (array-like).
    axis:
        Axis along which to detrend (default: last axis).
    type:
        Type of detrending. One of {"linear", "constant"}; see scipy docs.

    Returns
    -------
    np.ndarray
        Detrended data.
    """
    data_arr = np.asarray(data, dtype=float)
    return signal.detrend(data_arr, axis=axis, type=type)


def remove_mean(data: ArrayLike) -> np.ndarray:
    """Subtract the mean of the whole signal (constant detrend)."""
    return detrend(data, type="constant")
