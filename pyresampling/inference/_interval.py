"""
Empirical quantile intervals and the informal two-sided test.

The interval is the (alpha/2, 1 - alpha/2) pair of sample quantiles of
the whole collected distribution, using numpy's default linear
interpolation (R's quantile() type 7). An observed statistic outside
the interval rejects the null at level alpha = 1 - conf_level.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyresampling.core.exceptions import ValidationError
from pyresampling.core.validation import check_alternative, check_conf_level


@dataclass(frozen=True)
class InferenceReport:
    """
    Observed statistic set against its resampling distribution.

    Attributes:
        observed: Statistic on the original data.
        interval: (lower, upper) empirical quantiles of the distribution.
        conf_level: Coverage of the interval.
        outside: True if observed lies strictly outside the interval.
        p_value: (count + 1) / (R + 1), Phipson-Smyth.
        alternative: "two.sided", "less", or "greater".
        R: Number of finite replicates the interval was computed from.
    """
    observed: float
    interval: tuple[float, float]
    conf_level: float
    outside: bool
    p_value: float
    alternative: str
    R: int
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def reject(self) -> bool:
        """Informal test decision at alpha = 1 - conf_level."""
        return self.outside

    def summary(self) -> str:
        pct = f"{self.conf_level * 100:g}%"
        lo, hi = self.interval
        decision = "outside" if self.outside else "inside"
        lines = [
            "",
            f"Observed statistic: {self.observed:.6g}",
            f"{pct} null interval: ({lo:.6g}, {hi:.6g})",
            f"Observed value lies {decision} the interval",
            f"p-value ({self.alternative}): {self.p_value:.4g}  [R = {self.R}]",
            "",
        ]
        return "\n".join(lines)


def _finite_null(null: ArrayLike) -> tuple[NDArray[np.floating[Any]], list[str]]:
    arr = np.asarray(null, dtype=np.float64).ravel()
    if arr.size == 0:
        raise ValidationError("null: distribution is empty")
    finite = np.isfinite(arr)
    messages: list[str] = []
    if not finite.all():
        n_bad = int((~finite).sum())
        if n_bad == arr.size:
            raise ValidationError("null: no finite values in distribution")
        msg = f"{n_bad} of {arr.size} replicates are not finite and were excluded"
        warnings.warn(msg, RuntimeWarning, stacklevel=3)
        messages.append(msg)
        arr = arr[finite]
    return arr, messages


def null_interval(
    null: ArrayLike,
    conf_level: float = 0.95,
) -> tuple[float, float]:
    """
    Empirical (alpha/2, 1 - alpha/2) quantile interval.

    Args:
        null: Collected statistics, shape (R,).
        conf_level: Interval coverage, default 0.95 (2.5% / 97.5%).

    Returns:
        (lower, upper)

    Raises:
        ValidationError: If null is empty or has no finite values.
    """
    conf_level = check_conf_level(conf_level)
    arr, _ = _finite_null(null)
    alpha = 1.0 - conf_level
    lo, hi = np.quantile(arr, [alpha / 2.0, 1.0 - alpha / 2.0])
    return float(lo), float(hi)


def p_value(
    observed: float,
    null: ArrayLike,
    alternative: str = "two.sided",
) -> float:
    """
    Permutation p-value with Phipson-Smyth correction: (count + 1) / (R + 1).

    two.sided counts |t*| >= |t0|; greater counts t* >= t0; less counts
    t* <= t0. Non-finite replicates are dropped from both the count and
    R. NaN observed, or no finite replicate, gives NaN.
    """
    alternative = check_alternative(alternative)
    null_arr = np.asarray(null, dtype=np.float64).ravel()
    if np.isnan(observed):
        return float('nan')
    null_arr = null_arr[np.isfinite(null_arr)]
    R = null_arr.size
    if R == 0:
        return float('nan')
    if alternative == "two.sided":
        count = np.sum(np.abs(null_arr) >= np.abs(observed))
    elif alternative == "greater":
        count = np.sum(null_arr >= observed)
    else:
        count = np.sum(null_arr <= observed)
    return float(count + 1) / float(R + 1)


def infer(
    observed: float,
    null: ArrayLike,
    conf_level: float = 0.95,
    alternative: str = "two.sided",
) -> InferenceReport:
    """
    Compare an observed statistic with its resampling distribution.

    Returns:
        InferenceReport with the empirical interval, the outside/inside
        decision and the Phipson-Smyth p-value.
    """
    conf_level = check_conf_level(conf_level)
    alternative = check_alternative(alternative)
    finite, messages = _finite_null(null)
    alpha = 1.0 - conf_level
    lo, hi = np.quantile(finite, [alpha / 2.0, 1.0 - alpha / 2.0])
    observed = float(observed)
    outside = bool(observed < lo or observed > hi)
    return InferenceReport(
        observed=observed,
        interval=(float(lo), float(hi)),
        conf_level=conf_level,
        outside=outside,
        p_value=p_value(observed, finite, alternative),
        alternative=alternative,
        R=int(finite.size),
        warnings=tuple(messages),
    )
