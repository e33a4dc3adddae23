"""
Common data structures for Monte Carlo methods.

BootParams and NullParams are the parameter payloads wrapped by
Result[P] and exposed through Solution classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

DEFAULT_R = 1000
DEFAULT_BOOT_R = 999
DEFAULT_CONF_LEVEL = 0.95


@dataclass(frozen=True)
class BootParams:
    """
    Parameter payload for bootstrap results.

    Matches R's boot object structure:
    - t0: observed statistic(s) on original data
    - t: matrix of bootstrap replicates (R rows, k columns)
    - bias: mean(t) - t0
    - se: sd(t)
    - ci: confidence intervals (populated by boot_ci)
    """
    t0: NDArray[np.floating[Any]]              # shape (k,)
    t: NDArray[np.floating[Any]]               # shape (R, k)
    R: int                                      # number of replicates
    bias: NDArray[np.floating[Any]]            # shape (k,)
    se: NDArray[np.floating[Any]]              # shape (k,)
    ci: dict[str, NDArray] | None = None       # keyed by CI type
    ci_conf_level: float | None = None


@dataclass(frozen=True)
class NullParams:
    """
    Parameter payload for a collected resampling distribution.

    - observed_stat: statistic on the original (unresampled) data
    - null_stats: statistics from R resamples, in draw order
    - interval: empirical (alpha/2, 1 - alpha/2) quantiles of null_stats
    - p_value: (count + 1) / (R + 1) with Phipson-Smyth correction
    - n_nonfinite: replicates that evaluated to NaN/Inf (kept in null_stats)
    """
    observed_stat: float
    null_stats: NDArray[np.floating[Any]]      # shape (R,)
    interval: tuple[float, float]
    conf_level: float
    p_value: float
    R: int
    alternative: str                            # "two.sided" | "less" | "greater"
    n_nonfinite: int = 0
