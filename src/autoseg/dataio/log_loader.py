"""Utilities for loading recorded CSV logs."""

from pathlib import Path
from typing import List, Sequence
import io

import numpy as np


def _looks_numeric_csv_line(line: str) -> bool:
    """Heuristically decide if a CSV line is numeric-only (no header)."""
    stripped = line.strip()
    if not stripped:
        return False
    tokens = [t for t in stripped.split(",") if t]
    if not tokens:
        return False
    try:
        for t in tokens:
            float(t)
        return True
    except ValueError:
        return False


def _split_header(line: str) -> List[str]:
    return [t.strip() for t in line.strip().split(",")]


def load_csv(path: Path) -> tuple[np.ndarray, List[str]]:
    """
    Load a CSV file containing numeric data.

    The file may optionally include a single header row, which will be
    skipped automatically.

    Returns
    -------
    data : np.ndarray
        1-D array for single-column files, otherwise ``(rows, columns)``.
    columns : list of str
        Header names, or ``col0``, ``col1``... when the file has no header.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        first_line = f.readline()
        rest = f.read()

    # Decide if the first line is header or data
    if _looks_numeric_csv_line(first_line):
        buffer = io.StringIO(first_line + rest)
        columns = None
    else:
        buffer = io.StringIO(rest)
        columns = _split_header(first_line)

    data = np.loadtxt(buffer, delimiter=",", ndmin=2)
    if data.size == 0:
        raise ValueError(f"{path} contains no samples")
    if columns is None or len(columns) != data.shape[1]:
        columns = [f"col{i}" for i in range(data.shape[1])]
    if data.shape[1] == 1:
        data = data[:, 0]
    return data, columns


def select_columns(
    data: np.ndarray, columns: Sequence[str], wanted: Sequence[str]
) -> np.ndarray:
    """
    Return the ``wanted`` columns of ``data`` (by header name or index).

    A single wanted column yields a 1-D array.
    """
    if not wanted:
        return data
    table = data if data.ndim == 2 else data[:, None]
    indices: List[int] = []
    for name in wanted:
        if name in columns:
            indices.append(list(columns).index(name))
            continue
        try:
            index = int(name)
        except ValueError:
            raise ValueError(f"Unknown column {name!r}; available: {list(columns)}") from None
        if not 0 <= index < table.shape[1]:
            raise ValueError(f"Column index {index} out of range (0..{table.shape[1] - 1})")
        indices.append(index)
    selected = table[:, indices]
    if selected.shape[1] == 1:
        return selected[:, 0]
    return selected


