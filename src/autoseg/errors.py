"""Exceptions raised by the segmentation helpers."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a signal or segmentation parameter is malformed."""


class TooFewSegments(RuntimeError):
    """Raised when a recording yields fewer segments than the caller expects."""

    def __init__(self, expected: int, found: int) -> None:
        super().__init__(
            f"Expected to find at least {expected} segments, but only found {found}"
        )
        self.expected = expected
        self.found = found


__all__ = ["InvalidArgument", "TooFewSegments"]
