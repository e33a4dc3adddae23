"""
Solution wrappers for Monte Carlo results.

BootstrapSolution and NullDistributionSolution wrap Result[P] and
provide convenient accessors, R-style summary output, the inference
report and the histogram.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.exceptions import ValidationError
from pyresampling.core.result import Result
from pyresampling.inference import InferenceReport, infer, plot_null_distribution
from pyresampling.montecarlo._common import BootParams, NullParams

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from pyresampling.montecarlo.design import BootstrapDesign


@dataclass
class BootstrapSolution:
    """
    User-facing bootstrap results.

    Matches R's boot object output: t0, t, bias, SE, plus CI if computed.
    summary() produces R's print.boot format.
    """
    _result: Result[BootParams]
    _design: 'BootstrapDesign'

    @property
    def t0(self) -> NDArray[np.floating[Any]]:
        """Observed statistic(s) on original data, shape (k,)."""
        return self._result.params.t0

    @property
    def t(self) -> NDArray[np.floating[Any]]:
        """Bootstrap replicates, shape (R, k)."""
        return self._result.params.t

    @property
    def R(self) -> int:
        return self._result.params.R

    @property
    def bias(self) -> NDArray[np.floating[Any]]:
        """Bootstrap bias estimate: mean(t) - t0, shape (k,)."""
        return self._result.params.bias

    @property
    def se(self) -> NDArray[np.floating[Any]]:
        """Bootstrap standard error: sd(t), shape (k,)."""
        return self._result.params.se

    @property
    def ci(self) -> dict[str, NDArray] | None:
        """Confidence intervals keyed by type, or None if not computed."""
        return self._result.params.ci

    @property
    def ci_conf_level(self) -> float | None:
        return self._result.params.ci_conf_level

    @property
    def data(self) -> NDArray:
        return self._design.data

    @property
    def sim(self) -> str:
        return self._design.sim

    @property
    def seed(self) -> int | None:
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def plot(self, index: int = 0, ax: 'Axes | None' = None, **kwargs) -> 'Axes':
        """Histogram of replicates for statistic `index`, marking t0 and the percentile interval."""
        kwargs.setdefault("xlabel", f"t{index + 1}*")
        return plot_null_distribution(self.t[:, index], self.t0[index], ax=ax, **kwargs)

    def summary(self) -> str:
        """
        R-style print.boot output.

        Produces:
            ORDINARY NONPARAMETRIC BOOTSTRAP

            Bootstrap Statistics :
                original       bias    std. error
            t1*  5.12345    0.01234     0.56789
        """
        lines = []

        sim_name = {
            "ordinary": "ORDINARY NONPARAMETRIC BOOTSTRAP",
            "balanced": "BALANCED BOOTSTRAP",
            "parametric": "PARAMETRIC BOOTSTRAP",
        }.get(self.sim, "BOOTSTRAP")
        lines.append(f"\n{sim_name}\n")

        lines.append(
            f"Call: boot(data, statistic, R={self.R}, "
            f"sim=\"{self.sim}\")"
        )
        lines.append("")
        lines.append("Bootstrap Statistics :")

        k = len(self.t0)
        lines.append(f"{'':>8s} {'original':>14s} {'bias':>14s} {'std. error':>14s}")
        for i in range(k):
            label = f"t{i+1}*"
            lines.append(
                f"{label:>8s} {self.t0[i]:14.5f} {self.bias[i]:14.5f} "
                f"{self.se[i]:14.5f}"
            )

        if self.ci is not None:
            lines.append("")
            conf_pct = int(round((self.ci_conf_level or 0.95) * 100))
            for ci_type, ci_vals in self.ci.items():
                lines.append(f"{conf_pct}% {ci_type} CI:")
                for i in range(k):
                    lines.append(
                        f"  t{i+1}*: ({ci_vals[i, 0]:.5f}, {ci_vals[i, 1]:.5f})"
                    )

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BootstrapSolution(R={self.R}, k={len(self.t0)}, "
            f"sim={self.sim!r}, backend={self.backend_name!r})"
        )


@dataclass
class NullDistributionSolution:
    """
    User-facing result of a permutation, bootstrap or Monte Carlo run.

    Holds the observed statistic, the collected distribution, its
    empirical quantile interval and the Phipson-Smyth p-value.
    """
    _result: Result[NullParams]
    _design: Any
    _extra: dict[str, Any] = field(default_factory=dict)

    title = "RESAMPLING TEST"

    @property
    def observed_stat(self) -> float:
        """Statistic on the original (unresampled) data."""
        return self._result.params.observed_stat

    @property
    def null_stats(self) -> NDArray[np.floating[Any]]:
        """Collected distribution, shape (R,), in draw order."""
        return self._result.params.null_stats

    @property
    def perm_stats(self) -> NDArray[np.floating[Any]]:
        return self.null_stats

    @property
    def null_interval(self) -> tuple[float, float]:
        """Empirical (alpha/2, 1 - alpha/2) quantiles of the distribution."""
        return self._result.params.interval

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def p_value(self) -> float:
        """p-value with Phipson-Smyth correction."""
        return self._result.params.p_value

    @property
    def R(self) -> int:
        return self._result.params.R

    @property
    def alternative(self) -> str:
        return self._result.params.alternative

    @property
    def n_nonfinite(self) -> int:
        return self._result.params.n_nonfinite

    @property
    def reject(self) -> bool:
        """True if the observed statistic lies outside the null interval."""
        lo, hi = self.null_interval
        obs = self.observed_stat
        return bool(obs < lo or obs > hi)

    @property
    def statistic_name(self) -> str | None:
        return self._result.info.get('statistic')

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def report(self, conf_level: float | None = None) -> InferenceReport:
        """
        Inference report for the observed statistic.

        Args:
            conf_level: Override the design's interval coverage.
        """
        if not np.isfinite(self.observed_stat):
            raise ValidationError("observed statistic is not finite; nothing to report")
        return infer(
            self.observed_stat,
            self.null_stats[np.isfinite(self.null_stats)],
            conf_level=self.conf_level if conf_level is None else conf_level,
            alternative=self.alternative,
        )

    def plot(self, ax: 'Axes | None' = None, **kwargs) -> 'Axes':
        """Histogram of the distribution with observed and interval markers."""
        observed = self.observed_stat if np.isfinite(self.observed_stat) else None
        kwargs.setdefault("xlabel", self.statistic_name or "statistic")
        return plot_null_distribution(
            self.null_stats, observed, self.null_interval, ax=ax, **kwargs,
        )

    def _summary_body(self) -> list[str]:
        pct = f"{self.conf_level * 100:g}%"
        lo, hi = self.null_interval
        return [
            f"Number of resamples: {self.R}",
            f"Observed statistic: {self.observed_stat:.6g}",
            f"{pct} null interval: ({lo:.6g}, {hi:.6g})",
            f"p-value ({self.alternative}): {self.p_value:.4g}",
        ]

    def summary(self) -> str:
        lines = [f"\n{self.title}", ""]
        lines.extend(self._summary_body())
        if self.warnings:
            lines.append("")
            lines.extend(f"Warning: {w}" for w in self.warnings)
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(R={self.R}, "
            f"observed={self.observed_stat:.4g}, "
            f"p_value={self.p_value:.4g})"
        )


@dataclass(repr=False)
class PermutationSolution(NullDistributionSolution):
    """Two-sample permutation or bootstrap test of a location statistic."""
    title = "PERMUTATION TEST"


@dataclass(repr=False)
class AnovaPermutationSolution(NullDistributionSolution):
    """Permutation test of the ANOVA F for a grouping factor."""
    title = "PERMUTATION ANOVA"

    @property
    def table(self):
        """Sequential ANOVA table (tuple of AnovaRow) for the observed data."""
        return self._extra['table']

    def _summary_body(self) -> list[str]:
        lines = [
            f"{'':<12s} {'Df':>5s} {'Sum Sq':>12s} {'Mean Sq':>12s} {'F value':>10s}",
        ]
        for row in self.table:
            f_str = f"{row.f_value:10.4f}" if row.f_value is not None else f"{'':>10s}"
            lines.append(
                f"{row.term:<12s} {row.df:>5d} {row.sum_sq:12.4f} "
                f"{row.mean_sq:12.4f} {f_str}"
            )
        lines.append("")
        lines.extend(super()._summary_body())
        return lines


@dataclass(repr=False)
class RegressionPermutationSolution(NullDistributionSolution):
    """Permutation test of the regression R²."""
    title = "PERMUTATION TEST OF R-SQUARED"


@dataclass(repr=False)
class PermanovaSolution(NullDistributionSolution):
    """
    PERMANOVA result, laid out like vegan::adonis().

    p_value is one-sided (large pseudo-F), as in adonis.
    """
    title = "PERMANOVA"

    @property
    def table(self):
        """PermanovaTable for the observed grouping."""
        return self._extra['table']

    @property
    def f_value(self) -> float:
        return self.table.f_value

    @property
    def r_squared(self) -> float:
        return self.table.r_squared

    @property
    def method(self) -> str:
        return self._extra['method']

    def _summary_body(self) -> list[str]:
        tab = self.table
        lines = []
        if self._design.strata is not None:
            lines.append("Blocks:  strata")
        resid_r2 = tab.ss_residual / tab.ss_total if tab.ss_total > 0 else float('nan')
        return lines + [
            f"Permutation: free, number of permutations: {self.R}",
            f"Dissimilarity: {self.method}",
            "",
            f"{'':<10s} {'Df':>4s} {'SumOfSqs':>10s} {'R2':>8s} {'F':>9s} {'Pr(>F)':>8s}",
            f"{'groups':<10s} {tab.df_groups:>4d} {tab.ss_groups:10.5f} "
            f"{tab.r_squared:8.5f} {tab.f_value:9.4f} {self.p_value:8.4g}",
            f"{'Residual':<10s} {tab.df_residual:>4d} {tab.ss_residual:10.5f} "
            f"{resid_r2:8.5f}",
            f"{'Total':<10s} {tab.df_groups + tab.df_residual:>4d} "
            f"{tab.ss_total:10.5f} {1.0:8.5f}",
        ]


@dataclass(repr=False)
class MonteCarloSolution(NullDistributionSolution):
    """
    Monte Carlo simulation result.

    observed_stat is NaN (and p_value NaN) when no observed value was
    supplied; the interval is still available.
    """
    title = "MONTE CARLO SIMULATION"

    @property
    def has_observed(self) -> bool:
        return bool(self._result.info.get('has_observed'))

    @property
    def reject(self) -> bool:
        if not self.has_observed:
            raise ValidationError("no observed statistic was supplied")
        return super().reject
