#!/usr/bin/env python3
"""
Cut a recorded CSV log into fixed-length samples.

The log is loaded (an optional header row is skipped), the selected columns
are combined and segmented, and the resulting ``[start, end)`` bounds are
printed as JSON::

    autoseg-segment --file keyword.csv --frequency 16000 --window-ms 1000

With ``--export-dir`` every segment is also written to its own CSV file,
ready to be labelled and uploaded.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import numpy as np

from ..analysis.segments import SegmentFinder, window_samples
from ..config.runtime import load_config
from ..dataio.csv_writer import write_segments
from ..dataio.file_paths import sanitize_name, segment_directory
from ..dataio.log_loader import load_csv, select_columns
from ..errors import InvalidArgument, TooFewSegments

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find fixed-length samples (keywords, gestures) in a CSV recording."
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        required=True,
        help="Path to a numeric CSV log (one row per sample).",
    )
    parser.add_argument(
        "-r",
        "--frequency",
        type=float,
        required=True,
        help="Sampling rate of the log in Hz.",
    )
    parser.add_argument(
        "-w",
        "--window-ms",
        type=float,
        default=1000.0,
        help="Length of one sample in milliseconds (default: 1000).",
    )
    parser.add_argument(
        "-c",
        "--columns",
        type=str,
        default="",
        help="Comma separated column names or indices to use (default: all).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with segmentation settings.",
    )
    parser.add_argument(
        "--shift",
        action="store_true",
        help="Randomly shift segments around their energetic region.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for --shift, for reproducible output.",
    )
    parser.add_argument(
        "--min-segments",
        type=int,
        default=1,
        help="Fail when fewer segments are found (default: 1).",
    )
    parser.add_argument(
        "--export-dir",
        type=str,
        default=None,
        help="Write every segment to a CSV file below this directory.",
    )
    parser.add_argument(
        "--label",
        type=str,
        default=None,
        help="Label used to name exported files (default: log file stem).",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Show the recording with the detected segments.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run(args: argparse.Namespace) -> list[dict]:
    """Segment the log described by ``args`` and return the bounds as dicts."""
    csv_path = Path(args.file).expanduser()
    config = load_config(args.config)

    data, columns = load_csv(csv_path)
    wanted = [c.strip() for c in args.columns.split(",") if c.strip()]
    data = select_columns(data, columns, wanted)
    used_columns = wanted or list(columns)

    samples_per_window = window_samples(args.window_ms, args.frequency)
    rng = np.random.default_rng(args.seed)
    finder = SegmentFinder(config=config, rng=rng)
    segments = finder.find_segments(data, samples_per_window, args.frequency, args.shift)
    logger.info(
        "Found %d segments of %d samples in %s", len(segments), samples_per_window, csv_path
    )

    if len(segments) < args.min_segments:
        raise TooFewSegments(args.min_segments, len(segments))

    if args.export_dir:
        label = args.label or csv_path.stem
        target = segment_directory(label, Path(args.export_dir).expanduser())
        paths = write_segments(target, sanitize_name(label), data, segments, used_columns)
        logger.info("Wrote %d segment files to %s", len(paths), target)

    if args.plot:
        from .plotter import show_segments

        show_segments(data, segments, args.frequency, title=csv_path.name)

    return [s.to_dict() for s in segments]


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not Path(args.file).expanduser().exists():
        parser.error(f"Log file not found: {args.file}")

    try:
        result = run(args)
    except (InvalidArgument, TooFewSegments) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"[ERROR] Failed to segment {args.file}: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
