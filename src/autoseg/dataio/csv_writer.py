"""CSV writing helpers for segmented sensor data."""

import csv
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from ..analysis.segments import Segment, slice_segments


def write_rows(path: Path, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    """
    Write a header row and all data rows to a CSV file.

    Directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(headers)
        writer.writerows(rows)


def write_segments(
    directory: Path,
    stem: str,
    data: np.ndarray,
    segments: Sequence[Segment],
    headers: Optional[Sequence[str]] = None,
) -> List[Path]:
    """
    Write every segment of ``data`` to its own CSV file.

    Files are named ``<stem>_<index>_<start>-<end>.csv``. Returns the written
    paths in segment order.
    """
    written: List[Path] = []
    for index, (segment, piece) in enumerate(zip(segments, slice_segments(data, segments))):
        table = piece if piece.ndim == 2 else piece[:, None]
        names = list(headers) if headers else [f"col{i}" for i in range(table.shape[1])]
        path = Path(directory) / f"{stem}_{index:03d}_{segment.start}-{segment.end}.csv"
        write_rows(path, names, table.tolist())
        written.append(path)
    return written
