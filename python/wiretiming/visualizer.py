"""Histogram rendering for timing distributions."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

EDGE_COLOR = "darkgreen"
FILL_COLOR = "lightgreen"
PANEL_COLOR = "#7f7f7f"
GRID_COLOR = "#a0a0a0"
# Upper bound on bin count when an outlier stretches the data range.
MAX_BINS = 200_000


def histogram_edges(values: np.ndarray, bin_width: float) -> np.ndarray:
    """Bin edges aligned to multiples of ``bin_width`` covering ``values``."""

    if bin_width <= 0:
        raise ValueError("bin_width must be positive")
    if values.size == 0:
        return np.asarray([0.0, bin_width])
    low = min(math.floor(float(values.min()) / bin_width) * bin_width, float(values.min()))
    high = float(values.max())
    count = int(math.ceil((high - low) / bin_width)) + 1
    if count > MAX_BINS:
        logger.warning(
            "Histogram would need %d bins of width %g; clamping to %d",
            count,
            bin_width,
            MAX_BINS,
        )
        return np.linspace(low, high, MAX_BINS + 1)
    return low + bin_width * np.arange(count + 1)


def plot_histogram(
    values: Sequence[float],
    *,
    bin_width: float,
    window: Optional[Tuple[float, float]],
    title: str,
    subtitle: str,
    xlabel: str = "[ms]",
) -> Figure:
    """Render a frequency histogram zoomed to ``window`` on the x axis.

    The window only changes what is shown; every value is binned. A missing,
    non-finite or empty window leaves matplotlib's automatic limits in place.
    """

    data = np.asarray(values, dtype=float)
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(
        data,
        bins=histogram_edges(data, bin_width),
        color=FILL_COLOR,
        edgecolor=EDGE_COLOR,
    )
    ax.set_facecolor(PANEL_COLOR)
    ax.grid(True, color=GRID_COLOR, linewidth=0.6)
    ax.set_axisbelow(True)

    if _usable_window(window):
        ax.set_xlim(*window)
    elif window is not None:
        logger.debug("Ignoring unusable histogram window %s for %s", window, title)

    ax.set_xlabel(xlabel)
    ax.set_ylabel("")
    fig.suptitle(title, x=0.125, ha="left", fontweight="bold")
    ax.set_title(subtitle, loc="left", fontsize="medium")
    return fig


def save_figure(figure: Figure, path: Union[str, Path], dpi: int = 150) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    figure.savefig(target, dpi=dpi)
    logger.info("Wrote %s", target)
    return target


def _usable_window(window: Optional[Tuple[float, float]]) -> bool:
    if window is None:
        return False
    lower, upper = window
    return math.isfinite(lower) and math.isfinite(upper) and lower < upper


__all__ = ["histogram_edges", "plot_histogram", "save_figure"]
