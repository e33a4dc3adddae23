"""
Bootstrap confidence interval computation.

Implements the five methods of R's boot.ci():
- normal: bias-corrected normal approximation
- basic: basic (pivotal) bootstrap interval
- perc: percentile method (the empirical quantile interval)
- bca: bias-corrected and accelerated
- stud: studentized (bootstrap-t)

Every method returns an array of shape (k, 2), one row per statistic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyresampling.core.exceptions import ValidationError

if TYPE_CHECKING:
    from pyresampling.montecarlo.solution import BootstrapSolution

CI_TYPES = ("normal", "basic", "perc", "bca", "stud")


def compute_ci(
    boot_out: 'BootstrapSolution',
    types: list[str],
    conf_level: float,
    index: int = 0,
    var_t0: float | None = None,
    var_t: NDArray | None = None,
) -> dict[str, NDArray]:
    """
    Compute bootstrap confidence intervals.

    Args:
        boot_out: Bootstrap result.
        types: CI types to compute.
        conf_level: Confidence level (e.g., 0.95).
        index: Statistic used by the studentized interval.
        var_t0: Variance of the observed statistic.
        var_t: Per-replicate variances, shape (R,). Required for "stud".

    Returns:
        Dict mapping CI type name to NDArray of shape (k, 2).
    """
    t0 = boot_out.t0
    t = boot_out.t
    alpha = 1.0 - conf_level

    ci_dict: dict[str, NDArray] = {}
    for ci_type in types:
        if ci_type == "normal":
            ci_dict[ci_type] = _ci_normal(t0, t, alpha, var_t0)
        elif ci_type == "basic":
            ci_dict[ci_type] = _ci_basic(t0, t, alpha)
        elif ci_type == "perc":
            ci_dict[ci_type] = _ci_percentile(t, alpha)
        elif ci_type == "bca":
            ci_dict[ci_type] = _ci_bca(boot_out, alpha)
        elif ci_type == "stud":
            if var_t is None:
                raise ValidationError(
                    "Studentized CI requires var_t "
                    "(per-replicate variance estimates)"
                )
            ci_dict[ci_type] = _ci_studentized(t0, t, alpha, var_t0, var_t, index)
        else:
            raise ValidationError(
                f"Unknown CI type: {ci_type!r}. Use one of {CI_TYPES}"
            )
    return ci_dict


def _quantiles(t: NDArray, lo: float, hi: float) -> NDArray:
    """Column-wise (lo, hi) quantiles of t, shape (k, 2)."""
    return np.quantile(t, [lo, hi], axis=0).T


def _ci_normal(
    t0: NDArray,
    t: NDArray,
    alpha: float,
    var_t0: float | None,
) -> NDArray:
    """
    Normal approximation centered at the bias-corrected 2*t0 - mean(t).
    """
    z = sp_stats.norm.ppf(1.0 - alpha / 2.0)
    center = 2.0 * t0 - t.mean(axis=0)
    if var_t0 is not None and len(t0) == 1:
        se = np.array([np.sqrt(var_t0)])
    else:
        se = t.std(axis=0, ddof=1)
    return np.column_stack([center - z * se, center + z * se])


def _ci_basic(t0: NDArray, t: NDArray, alpha: float) -> NDArray:
    """
    Basic (pivotal) interval: [2*t0 - Q(1-alpha/2), 2*t0 - Q(alpha/2)].
    """
    q = _quantiles(t, alpha / 2.0, 1.0 - alpha / 2.0)
    return np.column_stack([2.0 * t0 - q[:, 1], 2.0 * t0 - q[:, 0]])


def _ci_percentile(t: NDArray, alpha: float) -> NDArray:
    """Percentile interval: [Q(alpha/2), Q(1-alpha/2)]."""
    return _quantiles(t, alpha / 2.0, 1.0 - alpha / 2.0)


def _ci_bca(boot_out: 'BootstrapSolution', alpha: float) -> NDArray:
    """
    BCa interval.

    z0 = Phi^-1(proportion of t* < t0), a = sum(L^3) / (6 * sum(L^2)^1.5)
    from jackknife influence values, then percentiles at the adjusted
    levels Phi(z0 + (z0 + z) / (1 - a (z0 + z))).
    """
    from pyresampling.montecarlo._influence import jackknife_influence

    t0 = boot_out.t0
    t = boot_out.t
    R = t.shape[0]
    z_lo = sp_stats.norm.ppf(alpha / 2.0)
    z_hi = sp_stats.norm.ppf(1.0 - alpha / 2.0)
    edge = 0.5 / R

    ci = np.empty((len(t0), 2), dtype=np.float64)
    for j in range(len(t0)):
        prop_below = np.clip(np.mean(t[:, j] < t0[j]), edge, 1.0 - edge)
        z0 = sp_stats.norm.ppf(prop_below)

        L = jackknife_influence(boot_out, j)
        ss = np.sum(L ** 2)
        a = np.sum(L ** 3) / (6.0 * ss ** 1.5) if ss > 0 else 0.0

        levels = []
        for z in (z_lo, z_hi):
            denom = 1.0 - a * (z0 + z)
            level = 0.5 if abs(denom) < 1e-15 else sp_stats.norm.cdf(z0 + (z0 + z) / denom)
            levels.append(np.clip(level, edge, 1.0 - edge))

        ci[j] = np.quantile(t[:, j], levels)
    return ci


def _ci_studentized(
    t0: NDArray,
    t: NDArray,
    alpha: float,
    var_t0: float | None,
    var_t: NDArray,
    index: int,
) -> NDArray:
    """
    Studentized (bootstrap-t) interval for statistic `index`.

    z* = (t* - t0) / se*;  CI = [t0 - q(1-alpha/2) se, t0 - q(alpha/2) se].
    Other rows are NaN.
    """
    ci = np.full((len(t0), 2), np.nan)
    t_j = t[:, index]
    t0_j = t0[index]

    se_star = np.sqrt(np.asarray(var_t, dtype=np.float64))
    valid = se_star > 0
    if not valid.any():
        return ci
    z_star = (t_j[valid] - t0_j) / se_star[valid]

    q_lo, q_hi = np.quantile(z_star, [alpha / 2.0, 1.0 - alpha / 2.0])
    se_hat = np.sqrt(var_t0) if var_t0 is not None else np.std(t_j, ddof=1)

    ci[index] = [t0_j - q_hi * se_hat, t0_j - q_lo * se_hat]
    return ci
