import pathlib
import sys
import unittest

import numpy as np

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from autoseg.analysis.peaks import find_peaks  # noqa: E402
from autoseg.analysis.features import combine_axes  # noqa: E402
from autoseg.analysis.segments import (  # noqa: E402
    Segment,
    SegmentFinder,
    find_segments,
    slice_segments,
    window_samples,
)
from autoseg.config.runtime import CLIENT_PRESET, SegmentationConfig  # noqa: E402
from autoseg.errors import InvalidArgument  # noqa: E402


def _impulse_recording(seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    data = rng.uniform(-0.5, 0.5, 1000)
    data[500] = 50.0
    return data


def _burst_recording(seed: int, length: int, spacing: int, width: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    data = rng.normal(0.0, 0.05, length)
    for center in range(spacing, length - spacing // 2, spacing):
        amplitude = rng.uniform(5.0, 20.0)
        lo = max(0, center - width // 2)
        hi = min(length, center + width // 2)
        data[lo:hi] += amplitude * np.hanning(hi - lo)
    return data


class SegmentFinderScenarioTest(unittest.TestCase):
    def test_single_impulse_yields_centred_segment(self):
        segments = find_segments(_impulse_recording(), 100, 100, False)

        self.assertEqual(segments, [Segment(450, 550)])

    def test_segments_have_window_length_and_stay_in_bounds(self):
        data = _burst_recording(seed=1, length=3000, spacing=130, width=40)
        for config in (SegmentationConfig(), SegmentationConfig(overlap_policy="drop")):
            segments = find_segments(data, 100, 100, False, config=config)
            self.assertGreater(len(segments), 0)
            for s in segments:
                self.assertEqual(s.end - s.start, 100)
                self.assertGreaterEqual(s.start, 0)
                self.assertLessEqual(s.end, len(data))

    def test_adjacent_segments_overlap_at_most_fifteen_percent(self):
        data = _burst_recording(seed=2, length=4000, spacing=90, width=60)
        for config in (SegmentationConfig(), SegmentationConfig(overlap_policy="drop")):
            segments = find_segments(data, 100, 100, False, config=config)
            starts = [s.start for s in segments]
            self.assertEqual(starts, sorted(starts))
            for prev, nxt in zip(segments, segments[1:]):
                self.assertGreaterEqual(nxt.start - prev.end, -0.15 * 100)

    def test_identical_inputs_give_identical_output(self):
        data = _burst_recording(seed=3, length=3000, spacing=150, width=50)
        first = find_segments(data, 100, 100, False)
        second = find_segments(data.copy(), 100, 100, False)
        self.assertEqual(first, second)

    def test_silence_yields_no_segments(self):
        self.assertEqual(find_segments(np.zeros(1000), 100, 100, False), [])
        self.assertEqual(find_segments(np.full(1000, 0.25), 100, 100, False), [])

    def test_low_level_noise_yields_no_segments(self):
        noise = np.random.default_rng(0).normal(0.0, 1e-3, 1000)
        self.assertEqual(find_segments(noise, 100, 100, False), [])

    def test_silence_level_can_be_disabled(self):
        noise = np.random.default_rng(0).normal(0.0, 1e-3, 1000)
        config = SegmentationConfig(silence_rms=None)
        self.assertGreater(len(find_segments(noise, 100, 100, False, config=config)), 0)

    def test_shorter_than_window_yields_no_segments(self):
        data = np.zeros(50)
        data[25] = 10.0
        self.assertEqual(find_segments(data, 100, 100, False), [])


class DegenerateInputTest(unittest.TestCase):
    def test_pre_trimmed_buffer_reports_nothing(self):
        data = np.zeros(100)
        data[48:53] = [5.0, 20.0, 50.0, 20.0, 5.0]
        self.assertEqual(find_peaks(data, 85).tolist(), [50])

        self.assertEqual(find_segments(data, 100, 100, False), [])

    def test_longer_buffer_keeps_segment_starting_at_zero(self):
        data = np.zeros(300)
        data[20] = 40.0
        self.assertEqual(find_segments(data, 100, 100, False), [Segment(0, 100)])

    def test_segment_is_clamped_to_buffer_end(self):
        data = np.zeros(300)
        data[290] = 40.0
        self.assertEqual(find_segments(data, 100, 100, False), [Segment(200, 300)])


class MultiAxisTest(unittest.TestCase):
    def test_axes_are_combined_before_peak_detection(self):
        data = np.zeros((300, 2))
        data[100, 0] = 10.0
        data[200, 1] = -40.0

        self.assertEqual(find_peaks(combine_axes(data), 43).tolist(), [100, 200])
        self.assertEqual(find_peaks(data[:, 0], 43).tolist(), [100])

        segments = find_segments(data, 50, 50, False)
        self.assertEqual(segments, [Segment(75, 125), Segment(175, 225)])

        axis0_only = find_segments(data[:, 0], 50, 50, False)
        self.assertEqual(axis0_only, [Segment(75, 125)])

    def test_list_of_tuples_is_accepted(self):
        data = [(0.0, 0.0)] * 300
        data[150] = (3.0, -4.0)
        segments = find_segments(data, 100, 100, False)
        self.assertEqual(segments, [Segment(100, 200)])


class OverlapPolicyTest(unittest.TestCase):
    def setUp(self):
        self.data = np.zeros(1000)
        self.data[300] = 20.0
        self.data[360] = 40.0

    def test_keep_highest_prefers_the_higher_peak(self):
        config = SegmentationConfig(min_distance_ratio=0.5)
        segments = find_segments(self.data, 100, 100, False, config=config)
        self.assertEqual(segments, [Segment(310, 410)])

    def test_drop_keeps_the_earlier_segment(self):
        config = SegmentationConfig(min_distance_ratio=0.5, overlap_policy="drop")
        segments = find_segments(self.data, 100, 100, False, config=config)
        self.assertEqual(segments, [Segment(250, 350)])


class EnergyFloorTest(unittest.TestCase):
    def test_client_preset_rejects_quiet_segments(self):
        self.assertEqual(find_segments(_impulse_recording(), 100, 100, False, config=CLIENT_PRESET), [])

    def test_client_preset_keeps_loud_segments(self):
        data = np.zeros(1000)
        data[500] = 5000.0
        segments = find_segments(data, 100, 100, False, config=CLIENT_PRESET)
        self.assertEqual(segments, [Segment(450, 550)])


class ShiftSegmentsTest(unittest.TestCase):
    def test_shift_keeps_energetic_region_inside_with_margin(self):
        data = _impulse_recording()
        for seed in range(20):
            finder = SegmentFinder(rng=np.random.default_rng(seed))
            segments = finder.find_segments(data, 100, 100, True)
            self.assertEqual(len(segments), 1)
            s = segments[0]
            self.assertEqual(s.end - s.start, 100)
            self.assertLessEqual(s.start, 499 - 10)
            self.assertGreaterEqual(s.end, 501 + 10)

    def test_shift_is_reproducible_with_a_seed(self):
        data = _burst_recording(seed=4, length=3000, spacing=150, width=30)
        first = SegmentFinder(rng=np.random.default_rng(7)).find_segments(data, 100, 100, True)
        second = SegmentFinder(rng=np.random.default_rng(7)).find_segments(data, 100, 100, True)
        self.assertEqual(first, second)

    def test_shift_does_not_change_how_many_segments_are_found(self):
        data = _burst_recording(seed=5, length=3000, spacing=200, width=30)
        centred = find_segments(data, 100, 100, False)
        shifted = find_segments(data, 100, 100, True, rng=np.random.default_rng(1))
        self.assertEqual(len(centred), len(shifted))


class ArgumentValidationTest(unittest.TestCase):
    def test_invalid_arguments_fail_fast(self):
        with self.assertRaises(InvalidArgument):
            find_segments([], 100, 100, False)
        with self.assertRaises(InvalidArgument):
            find_segments(np.zeros(200), 0, 100, False)
        with self.assertRaises(InvalidArgument):
            find_segments(np.zeros(200), -5, 100, False)
        with self.assertRaises(InvalidArgument):
            find_segments(np.zeros(200), 2.5, 100, False)
        with self.assertRaises(InvalidArgument):
            find_segments(np.zeros(200), 100, 0, False)
        with self.assertRaises(InvalidArgument):
            find_segments([[1, 2], [3]], 1, 100, False)
        with self.assertRaises(InvalidArgument):
            find_segments([[1.0, 2.0], 3.0, [1.0, 1.0]], 1, 100, False)

    def test_invalid_argument_is_a_value_error(self):
        with self.assertRaises(ValueError):
            find_segments(np.zeros(200), 100, -1.0, False)

    def test_integral_float_window_is_accepted(self):
        data = _impulse_recording()
        self.assertEqual(find_segments(data, 100.0, 100, False), [Segment(450, 550)])


class HelperTest(unittest.TestCase):
    def test_window_samples(self):
        self.assertEqual(window_samples(1000, 16000), 16000)
        self.assertEqual(window_samples(500, 100), 50)
        with self.assertRaises(InvalidArgument):
            window_samples(0, 100)

    def test_slice_segments_keeps_all_axes(self):
        data = np.arange(20).reshape(10, 2)
        pieces = slice_segments(data, [Segment(0, 3), Segment(5, 8)])
        self.assertEqual([p.shape for p in pieces], [(3, 2), (3, 2)])
        np.testing.assert_array_equal(pieces[1][0], [10, 11])

    def test_segment_to_dict(self):
        self.assertEqual(Segment(3, 7).to_dict(), {"start": 3, "end": 7})
        self.assertEqual(Segment(3, 7).length, 4)


if __name__ == "__main__":
    unittest.main()
