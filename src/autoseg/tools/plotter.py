"""Matplotlib view of a recording with its detected segments shaded."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import ArrayLike

from ..analysis.features import combine_axes
from ..analysis.segments import Segment


def plot_segments(
    data: ArrayLike,
    segments: Sequence[Segment],
    frequency: float,
    *,
    title: str | None = None,
):
    """
    Plot the combined signal over time with one shaded span per segment.

    Returns
    -------
    (fig, ax)
    """
    combined = combine_axes(data)
    t = np.arange(combined.shape[0]) / float(frequency)

    fig, ax = plt.subplots(1, 1)
    ax.plot(t, combined, linewidth=0.8, label="combined")
    for index, segment in enumerate(segments):
        ax.axvspan(
            segment.start / frequency,
            segment.end / frequency,
            alpha=0.25,
            color="tab:orange",
            label="segment" if index == 0 else None,
        )
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("Value")
    ax.set_title(title or f"{len(segments)} segments @ {frequency:g} Hz")
    if segments:
        ax.legend(loc="upper right")
    fig.tight_layout()
    return fig, ax


def show_segments(
    data: ArrayLike,
    segments: Sequence[Segment],
    frequency: float,
    *,
    title: str | None = None,
) -> None:
    fig, _ax = plot_segments(data, segments, frequency, title=title)
    fig.canvas.manager.set_window_title(title or "autoseg segments")
    plt.show()
