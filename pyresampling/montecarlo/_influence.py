"""
Delete-one jackknife influence values.

Used by the BCa interval to estimate the acceleration constant:
    L_i = (n - 1) * (mean_j theta_(-j) - theta_(-i))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyresampling.montecarlo.solution import BootstrapSolution


def _leave_one_out(boot_out: 'BootstrapSolution', i: int) -> NDArray:
    design = boot_out._design
    data = design.data
    n = data.shape[0]
    keep = np.delete(np.arange(n), i)

    if design.sim == "parametric":
        return np.atleast_1d(np.asarray(design.statistic(data[keep])))
    if design.stype == "i":
        return np.atleast_1d(np.asarray(
            design.statistic(data[keep], np.arange(n - 1))
        ))

    freqs = np.ones(n, dtype=np.float64)
    freqs[i] = 0.0
    if design.stype == "w":
        freqs /= freqs.sum()
    return np.atleast_1d(np.asarray(design.statistic(data, freqs)))


def jackknife_influence(
    boot_out: 'BootstrapSolution',
    stat_index: int = 0,
) -> NDArray:
    """
    Jackknife influence values for one element of the statistic vector.

    Args:
        boot_out: Bootstrap solution carrying the data and statistic.
        stat_index: Which element of the statistic vector (0-indexed).

    Returns:
        Influence values, shape (n,).
    """
    n = boot_out.data.shape[0]
    jack = np.array([_leave_one_out(boot_out, i)[stat_index] for i in range(n)])
    return (n - 1) * (jack.mean() - jack)
