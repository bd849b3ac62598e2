"""Helpers for constructing standard file paths."""

import re
from datetime import datetime
from pathlib import Path

# Allow only alphanumerics, underscore, dot, and dash.
_NAME_RE = re.compile(r"[^A-Za-z0-9_.-]+")


def sanitize_name(name: str) -> str:
    """
    Sanitize a label or file stem for use in a path.

    - Replace disallowed characters with '_'.
    - Strip leading/trailing underscores.
    - Fall back to 'segments' if nothing remains.
    """
    cleaned = _NAME_RE.sub("_", name).strip("_")
    return cleaned or "segments"


def segment_directory(name: str, base: Path | None = None) -> Path:
    """
    Create a timestamped directory name for exported segments.

    Example: "hello_world_20251204_153045_120394". A numeric suffix is added
    when that directory already exists.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    root = base or Path.cwd() / "segments"
    candidate = root / f"{sanitize_name(name)}_{timestamp}"
    counter = 1
    while candidate.exists():
        candidate = root / f"{sanitize_name(name)}_{timestamp}_{counter}"
        counter += 1
    return candidate
