"""
CPU backends for resampling, bootstrap and Monte Carlo.

CPUResamplingBackend: permutation / bootstrap null distributions.
CPUBootstrapBackend: Ordinary, balanced, and parametric bootstrap.
CPUMonteCarloBackend: Simulation from a known generator.
"""

from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.result import Result
from pyresampling.core.compute.timing import Timer
from pyresampling.inference import infer, null_interval
from pyresampling.montecarlo._common import BootParams, NullParams
from pyresampling.montecarlo.design import (
    BootstrapDesign, MonteCarloDesign, ResamplingDesign,
)
from pyresampling.resample import (
    balanced_bootstrap_indices, bootstrap_indices, resample_indices,
)


def summarize_null(
    observed: float,
    null_stats: NDArray,
    R: int,
    alternative: str,
    conf_level: float,
) -> tuple[NullParams, list[str]]:
    """
    Interval, p-value and non-finite count for a collected distribution.

    Shared by every backend so CPU and GPU results are summarized
    identically.
    """
    n_nonfinite = int(np.sum(~np.isfinite(null_stats)))
    messages: list[str] = []
    if n_nonfinite:
        msg = (
            f"{n_nonfinite} of {R} replicates produced a non-finite "
            f"statistic; they are excluded from the interval and p-value"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=4)
        messages.append(msg)

    if n_nonfinite == R:
        interval = (float('nan'), float('nan'))
        p_value = float('nan')
    else:
        finite = null_stats[np.isfinite(null_stats)]
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            if np.isfinite(observed):
                report = infer(observed, finite, conf_level, alternative)
                interval, p_value = report.interval, report.p_value
            else:
                interval = null_interval(finite, conf_level)
                p_value = float('nan')

    if not np.isfinite(observed):
        messages.append("observed statistic is not finite")

    params = NullParams(
        observed_stat=float(observed),
        null_stats=null_stats,
        interval=interval,
        conf_level=conf_level,
        p_value=p_value,
        R=R,
        alternative=alternative,
        n_nonfinite=n_nonfinite,
    )
    return params, messages


class CPUResamplingBackend:
    """
    CPU backend collecting a permutation or bootstrap distribution.

    Evaluates the statistic once on the original arrangement, then R
    times on resampled arrangements drawn from a single seeded
    generator, so a fixed seed reproduces the distribution exactly.
    """

    @property
    def name(self) -> str:
        return 'cpu_resampling'

    def solve(self, design: ResamplingDesign) -> Result[NullParams]:
        """Collect the distribution and return Result[NullParams]."""
        timer = Timer()
        timer.start()

        data = design.data
        statistic = design.statistic
        R = design.R
        n = design.n
        rng = np.random.default_rng(design.seed)

        with timer.section('observed_stat'):
            observed = float(statistic(data))

        with timer.section('replicates'):
            null_stats = np.empty(R, dtype=np.float64)
            for b in range(R):
                indices = resample_indices(n, rng, design.sim, design.strata)
                null_stats[b] = statistic(data[indices])

        with timer.section('summary'):
            params, messages = summarize_null(
                observed, null_stats, R, design.alternative, design.conf_level,
            )

        timer.stop()

        return Result(
            params=params,
            info={
                'sim': design.sim,
                'n': n,
                'n_strata': 0 if design.strata is None else len(np.unique(design.strata)),
                'statistic': design.statistic_name,
                'split': design.split,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(messages),
        )


class CPUMonteCarloBackend:
    """CPU backend for Monte Carlo simulation from a generator."""

    @property
    def name(self) -> str:
        return 'cpu_montecarlo'

    def solve(self, design: MonteCarloDesign) -> Result[NullParams]:
        timer = Timer()
        timer.start()

        rng = np.random.default_rng(design.seed)
        R = design.R

        with timer.section('replicates'):
            sim_stats = np.empty(R, dtype=np.float64)
            for b in range(R):
                sim_stats[b] = design.statistic(design.generator(rng))

        observed = design.observed if design.observed is not None else float('nan')
        with timer.section('summary'):
            params, messages = summarize_null(
                observed, sim_stats, R, design.alternative, design.conf_level,
            )
        if design.observed is None:
            messages = [m for m in messages if not m.startswith("observed")]

        timer.stop()

        return Result(
            params=params,
            info={'has_observed': design.observed is not None},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(messages),
        )


class CPUBootstrapBackend:
    """
    CPU backend for bootstrap resampling.

    Supports ordinary, balanced, and parametric simulation types.
    """

    @property
    def name(self) -> str:
        return 'cpu_bootstrap'

    def solve(self, design: BootstrapDesign) -> Result[BootParams]:
        """Run bootstrap and return Result[BootParams]."""
        timer = Timer()
        timer.start()

        data = design.data
        statistic = design.statistic
        R = design.R
        sim = design.sim
        stype = design.stype

        n = data.shape[0]
        rng = np.random.default_rng(design.seed)

        with timer.section('t0_computation'):
            if sim == "parametric":
                t0 = np.atleast_1d(np.asarray(statistic(data), dtype=np.float64))
            else:
                t0 = np.atleast_1d(np.asarray(
                    statistic(data, self._second_arg(np.arange(n), n, stype)),
                    dtype=np.float64,
                ))

        k = len(t0)
        t = np.empty((R, k), dtype=np.float64)

        with timer.section('bootstrap_replicates'):
            if sim == "ordinary":
                for b in range(R):
                    indices = bootstrap_indices(n, rng, design.strata)
                    t[b] = statistic(data, self._second_arg(indices, n, stype))
            elif sim == "balanced":
                all_indices = balanced_bootstrap_indices(n, R, rng, design.strata)
                for b in range(R):
                    t[b] = statistic(data, self._second_arg(all_indices[b], n, stype))
            else:
                for b in range(R):
                    sim_data = design.ran_gen(data, design.mle, rng)
                    t[b] = statistic(sim_data)

        with timer.section('summary_statistics'):
            bias = np.mean(t, axis=0) - t0
            se = np.std(t, axis=0, ddof=1) if R > 1 else np.full(k, np.nan)

        timer.stop()

        params = BootParams(
            t0=t0,
            t=t,
            R=R,
            bias=bias,
            se=se,
            ci=None,
            ci_conf_level=None,
        )

        return Result(
            params=params,
            info={
                'sim': sim,
                'stype': stype,
                'n': n,
                'k': k,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )

    @staticmethod
    def _second_arg(indices: NDArray, n: int, stype: str) -> NDArray:
        """Translate resample indices into the form the statistic expects."""
        if stype == "i":
            return indices
        freqs = np.bincount(indices, minlength=n).astype(np.float64)
        if stype == "f":
            return freqs
        return freqs / n
