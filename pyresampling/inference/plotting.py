"""
Histogram of a resampling distribution with inference markers.

A visualization aid only: nothing here feeds back into a decision.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike

from pyresampling.inference._interval import null_interval

if TYPE_CHECKING:
    from matplotlib.axes import Axes


def plot_null_distribution(
    null: ArrayLike,
    observed: float | None = None,
    interval: tuple[float, float] | None = None,
    *,
    conf_level: float = 0.95,
    ax: 'Axes | None' = None,
    bins: int | str = 30,
    title: str | None = None,
    xlabel: str = "statistic",
    **hist_kwargs: Any,
) -> 'Axes':
    """
    Draw the null distribution as a histogram.

    A solid red line marks the observed statistic; dashed lines mark the
    interval bounds. The interval defaults to null_interval(null,
    conf_level); pass interval=() to draw none.

    Args:
        null: Collected statistics.
        observed: Observed statistic, or None for no marker.
        interval: (lower, upper) bounds to mark.
        conf_level: Used when interval is computed here.
        ax: Axes to draw on; a new figure is created when None.
        bins: Passed to Axes.hist.
        title: Axes title.
        xlabel: x-axis label.
        **hist_kwargs: Extra keyword arguments for Axes.hist.

    Returns:
        The Axes drawn on.
    """
    import matplotlib.pyplot as plt

    values = np.asarray(null, dtype=np.float64).ravel()
    values = values[np.isfinite(values)]

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))

    hist_kwargs.setdefault("color", "0.75")
    hist_kwargs.setdefault("edgecolor", "white")
    ax.hist(values, bins=bins, **hist_kwargs)

    if interval is None:
        interval = null_interval(values, conf_level)
    if interval:
        lo, hi = interval
        ax.axvline(lo, color="steelblue", linestyle="--", label="null interval")
        ax.axvline(hi, color="steelblue", linestyle="--")

    if observed is not None and np.isfinite(observed):
        ax.axvline(observed, color="firebrick", linewidth=2, label="observed")

    ax.set_xlabel(xlabel)
    ax.set_ylabel("frequency")
    if title is not None:
        ax.set_title(title)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="best", frameon=False)
    return ax
