from __future__ import annotations

import numpy as np
import pytest

from autoseg.analysis.peaks import find_peaks, local_maxima, suppress_peaks
from autoseg.errors import InvalidArgument


def _spikes(length: int, **positions: float) -> np.ndarray:
    signal = np.zeros(length)
    for key, value in positions.items():
        signal[int(key[1:])] = value
    return signal


def test_close_peaks_keep_only_the_highest() -> None:
    signal = _spikes(300, i100=10.0, i130=8.0)
    np.testing.assert_array_equal(find_peaks(signal, 43), [100])


def test_distant_peaks_both_survive() -> None:
    signal = _spikes(300, i100=10.0, i200=8.0)
    np.testing.assert_array_equal(find_peaks(signal, 43), [100, 200])


def test_higher_later_peak_suppresses_earlier_one() -> None:
    signal = _spikes(300, i100=5.0, i120=9.0, i250=7.0)
    np.testing.assert_array_equal(find_peaks(signal, 43), [120, 250])


def test_equal_peaks_keep_the_first_position() -> None:
    signal = _spikes(300, i100=6.0, i120=6.0)
    np.testing.assert_array_equal(find_peaks(signal, 43), [100])


def test_peaks_below_rms_threshold_are_ignored() -> None:
    signal = _spikes(300, i50=20.0, i200=1.0)
    np.testing.assert_array_equal(find_peaks(signal, 10), [50])


def test_flat_signal_has_no_peaks() -> None:
    assert find_peaks(np.full(500, 3.0), 10).size == 0
    assert find_peaks(np.zeros(500), 10).size == 0


def test_edges_are_never_peaks() -> None:
    signal = np.zeros(50)
    signal[0] = 100.0
    signal[-1] = 100.0
    assert find_peaks(signal, 5).size == 0


def test_plateau_reports_its_last_sample() -> None:
    signal = np.zeros(20)
    signal[5:8] = 4.0
    np.testing.assert_array_equal(local_maxima(signal, 1.0), [7])


def test_suppress_peaks_marks_neighbours_dead() -> None:
    peaks = np.array([10, 15, 30, 33])
    priority = np.array([1.0, 3.0, 2.0, 5.0])
    keep = suppress_peaks(peaks, priority, 10)
    np.testing.assert_array_equal(keep, [False, True, False, True])


def test_distance_must_be_positive() -> None:
    with pytest.raises(InvalidArgument):
        find_peaks(np.zeros(10), 0)
