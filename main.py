from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

# Make sure the 'src' directory is on sys.path so 'autoseg' can be imported
REPO_ROOT = Path(__file__).resolve().parent
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from autoseg.tools.segment_log import main as run_segment_main


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the segmentation command-line tool.

    Parameters
    ----------
    argv:
        Command-line arguments (without the program name). If None, uses
        sys.argv[1:].
    """
    if argv is None:
        argv = sys.argv[1:]
    return run_segment_main(list(argv))


if __name__ == "__main__":
    raise SystemExit(main())
