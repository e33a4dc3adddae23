"""
Two-sample location statistics.

Point statistics only: the t formulas match R's t.test() (Welch by
default, pooled with var_equal=True) without the p-value and interval
machinery, since the reference distribution comes from resampling.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def mean_diff(x: ArrayLike, y: ArrayLike) -> float:
    """Difference in means: mean(x) - mean(y)."""
    return float(np.mean(x) - np.mean(y))


def t_statistic(x: ArrayLike, y: ArrayLike, var_equal: bool = False) -> float:
    """
    Two-sample t statistic for H0: mean(x) = mean(y).

    Args:
        x: Group 1 values, at least 2 observations.
        y: Group 2 values, at least 2 observations.
        var_equal: If True, pooled-variance Student t. If False (default),
            Welch's unequal-variance t, as R's t.test().

    Returns:
        The t statistic, or NaN when the standard error is zero or a
        group has fewer than 2 observations.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n1, n2 = len(x), len(y)
    if n1 < 2 or n2 < 2:
        return float('nan')

    var1 = np.var(x, ddof=1)
    var2 = np.var(y, ddof=1)
    diff = np.mean(x) - np.mean(y)

    if var_equal:
        df = n1 + n2 - 2
        sp2 = ((n1 - 1) * var1 + (n2 - 1) * var2) / df
        se = np.sqrt(sp2 * (1.0 / n1 + 1.0 / n2))
    else:
        se = np.sqrt(var1 / n1 + var2 / n2)

    if se == 0.0:
        return float('nan')
    return float(diff / se)


def welch_t(x: ArrayLike, y: ArrayLike) -> float:
    """Welch two-sample t statistic (unequal variances)."""
    return t_statistic(x, y, var_equal=False)


def pooled_t(x: ArrayLike, y: ArrayLike) -> float:
    """Student two-sample t statistic (pooled variance)."""
    return t_statistic(x, y, var_equal=True)
