"""
Solver dispatch for Monte Carlo methods.

Each function builds a frozen design, hands it to a backend and wraps
the Result in a Solution:

    null_distribution()        generic resample + evaluate loop
    permutation_test()         two-sample location statistics
    anova_permutation_test()   ANOVA F, optionally within blocks
    lm_permutation_test()      regression R²
    permanova()                distance-based pseudo-F (adonis)
    monte_carlo()              simulation from a known generator
    boot(), boot_ci()          bootstrap replicates and intervals
"""

from __future__ import annotations

from typing import Any, Callable, Literal

import numpy as np
from numpy.typing import ArrayLike

from pyresampling.core.exceptions import ValidationError
from pyresampling.core.validation import (
    check_1d, check_array, check_conf_level, check_consistent_length, check_finite,
)
from pyresampling.montecarlo._ci import CI_TYPES, compute_ci
from pyresampling.montecarlo._common import (
    BootParams, DEFAULT_BOOT_R, DEFAULT_CONF_LEVEL, DEFAULT_R,
)
from pyresampling.montecarlo.backends.cpu import (
    CPUBootstrapBackend, CPUMonteCarloBackend, CPUResamplingBackend,
)
from pyresampling.montecarlo.design import (
    BootstrapDesign, MonteCarloDesign, ResamplingDesign,
)
from pyresampling.montecarlo.solution import (
    AnovaPermutationSolution,
    BootstrapSolution,
    MonteCarloSolution,
    NullDistributionSolution,
    PermanovaSolution,
    PermutationSolution,
    RegressionPermutationSolution,
)
from pyresampling.core.result import Result
from pyresampling.statistics import (
    AnovaModel,
    OLSModel,
    PermanovaModel,
    check_distance_matrix,
    distance_matrix,
    get_statistic,
)

BackendChoice = Literal['cpu', 'gpu', 'auto']


def _get_resampling_backend(backend: str = 'cpu'):
    """
    Select backend for resampling distributions.

    'auto' uses the GPU when one is present and silently stays on CPU
    otherwise; 'gpu' requires one.
    """
    if backend == 'cpu':
        return CPUResamplingBackend()
    if backend in ('gpu', 'auto'):
        from pyresampling.core.compute.device import select_device
        device = select_device('gpu' if backend == 'gpu' else 'auto')
        if not device.is_gpu:
            return CPUResamplingBackend()
        from pyresampling.montecarlo.backends.gpu import GPUResamplingBackend
        return GPUResamplingBackend(device)
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu', 'gpu', or 'auto'."
    )


def _get_bootstrap_backend(backend: str = 'cpu'):
    if backend == 'cpu':
        return CPUBootstrapBackend()
    if backend in ('gpu', 'auto'):
        from pyresampling.core.compute.device import select_device
        device = select_device('gpu' if backend == 'gpu' else 'auto')
        if not device.is_gpu:
            return CPUBootstrapBackend()
        from pyresampling.montecarlo.backends.gpu import GPUBootstrapBackend
        return GPUBootstrapBackend(device)
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu', 'gpu', or 'auto'."
    )


def null_distribution(
    data: ArrayLike,
    statistic: Callable[[np.ndarray], float],
    R: int = DEFAULT_R,
    *,
    sim: Literal["permutation", "bootstrap"] = "permutation",
    strata: ArrayLike | None = None,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    conf_level: float = DEFAULT_CONF_LEVEL,
    seed: int | None = None,
    backend: BackendChoice = 'cpu',
) -> NullDistributionSolution:
    """
    Collect the distribution of a statistic over R resamples of data.

    Parameters
    ----------
    data : array-like
        1D vector or 2D table; rows are resampled.
    statistic : callable
        fn(arrangement) -> float, evaluated once on data itself (the
        observed value) and once per resample.
    R : int
        Number of resamples. Default 1000.
    sim : str
        "permutation" (without replacement) or "bootstrap" (with).
    strata : array-like or None
        Labels of length n; resampling happens within each stratum.
    alternative : str
        Direction for the p-value.
    conf_level : float
        Coverage of the empirical null interval. Default 0.95.
    seed : int or None
        Random seed; a fixed seed reproduces the distribution exactly.
    backend : str
        'cpu' (default), 'gpu' or 'auto'.

    Returns
    -------
    NullDistributionSolution
    """
    design = ResamplingDesign.for_resampling(
        data, statistic, R,
        sim=sim,
        strata=strata,
        alternative=alternative,
        conf_level=conf_level,
        seed=seed,
    )
    result = _get_resampling_backend(backend).solve(design)
    return NullDistributionSolution(_result=result, _design=design)


def permutation_test(
    x: ArrayLike,
    y: ArrayLike,
    statistic: str | Callable[[np.ndarray, np.ndarray], float] = "t",
    R: int = DEFAULT_R,
    *,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    strata: ArrayLike | None = None,
    sim: Literal["permutation", "bootstrap"] = "permutation",
    conf_level: float = DEFAULT_CONF_LEVEL,
    seed: int | None = None,
    backend: BackendChoice = 'cpu',
) -> PermutationSolution:
    """
    Two-sample permutation test.

    The pooled observations are reassigned to groups of the original
    sizes R times; the statistic of each reassignment forms the null.

    Parameters
    ----------
    x, y : array-like
        The two samples.
    statistic : str or callable
        "t" (Welch, default), "t_pooled", "mean_diff", or fn(x, y) -> float.
    R : int
        Number of permutations. Default 1000.
    alternative : str
        "two.sided" (default), "less", or "greater".
    strata : array-like or None
        Labels for the pooled observations (x first, then y); labels
        are only exchanged within strata.
    sim : str
        "permutation" (default) or "bootstrap" for a pooled bootstrap
        null.
    conf_level : float
        Null interval coverage. Default 0.95.
    seed : int or None
        Random seed.
    backend : str
        'cpu' (default), 'gpu' or 'auto'. Named statistics are batched
        on the GPU; callables fall back to CPU.

    Returns
    -------
    PermutationSolution
    """
    if isinstance(statistic, str):
        name: str | None = statistic
        fn = get_statistic(statistic)
    else:
        name = None
        fn = statistic

    design = ResamplingDesign.for_two_sample(
        x, y, fn, R,
        sim=sim,
        strata=strata,
        alternative=alternative,
        conf_level=conf_level,
        seed=seed,
        statistic_name=name,
    )
    result = _get_resampling_backend(backend).solve(design)
    return PermutationSolution(_result=result, _design=design)


def anova_permutation_test(
    y: ArrayLike,
    groups: ArrayLike,
    R: int = DEFAULT_R,
    *,
    blocks: ArrayLike | None = None,
    conf_level: float = DEFAULT_CONF_LEVEL,
    seed: int | None = None,
) -> AnovaPermutationSolution:
    """
    Permutation test of the one-way ANOVA F statistic.

    The response is permuted; with blocks (e.g. time points of a
    repeated-measures design) it is permuted within blocks only and the
    block term enters the model before groups, as aov(y ~ block + group).

    The p-value is one-sided (large F), as for the F distribution.

    Returns
    -------
    AnovaPermutationSolution
        Includes the observed ANOVA table.
    """
    y_arr = check_array(y, "y")
    check_1d(y_arr, "y")
    check_finite(y_arr, "y")

    model = AnovaModel(groups, blocks)
    check_consistent_length(y_arr, model.groups, names=("y", "groups"))

    design = ResamplingDesign.for_resampling(
        y_arr, model.f_statistic, R,
        sim="permutation",
        strata=blocks,
        alternative="greater",
        conf_level=conf_level,
        seed=seed,
        statistic_name="F",
    )
    result = CPUResamplingBackend().solve(design)
    return AnovaPermutationSolution(
        _result=result, _design=design, _extra={'table': model.table(y_arr)},
    )


def lm_permutation_test(
    X: ArrayLike,
    y: ArrayLike,
    R: int = DEFAULT_R,
    *,
    intercept: bool = True,
    strata: ArrayLike | None = None,
    conf_level: float = DEFAULT_CONF_LEVEL,
    seed: int | None = None,
) -> RegressionPermutationSolution:
    """
    Permutation test of the OLS coefficient of determination.

    The response is permuted against fixed predictors; the observed R²
    is compared with the R² of each permutation. One-sided (large R²).

    Raises
    ------
    SingularMatrixError
        If X is rank-deficient.
    """
    y_arr = check_array(y, "y")
    check_1d(y_arr, "y")
    check_finite(y_arr, "y")

    model = OLSModel(X, intercept=intercept)
    check_consistent_length(model.X, y_arr, names=("X", "y"))

    design = ResamplingDesign.for_resampling(
        y_arr, model.r_squared, R,
        sim="permutation",
        strata=strata,
        alternative="greater",
        conf_level=conf_level,
        seed=seed,
        statistic_name="R2",
    )
    result = CPUResamplingBackend().solve(design)
    return RegressionPermutationSolution(_result=result, _design=design)


def permanova(
    data: ArrayLike,
    groups: ArrayLike,
    R: int = 999,
    *,
    method: str = "braycurtis",
    distance: bool = False,
    strata: ArrayLike | None = None,
    conf_level: float = DEFAULT_CONF_LEVEL,
    seed: int | None = None,
) -> PermanovaSolution:
    """
    Permutational multivariate analysis of variance. Matches vegan::adonis().

    Parameters
    ----------
    data : array-like
        (n, p) observations (sites x species), or an (n, n) dissimilarity
        matrix when distance=True.
    groups : array-like
        Group label of each observation.
    R : int
        Number of permutations. Default 999 (as adonis).
    method : str
        scipy.spatial.distance metric used when data are raw
        observations. Default "braycurtis".
    distance : bool
        Treat data as a precomputed dissimilarity matrix.
    strata : array-like or None
        Group labels are permuted only within strata.
    seed : int or None
        Random seed.

    Returns
    -------
    PermanovaSolution
        pseudo-F, R², partition table and one-sided p-value.
    """
    D = check_distance_matrix(data) if distance else distance_matrix(data, method)
    model = PermanovaModel(D, groups)

    design = ResamplingDesign.for_resampling(
        model.codes, model.pseudo_f, R,
        sim="permutation",
        strata=strata,
        alternative="greater",
        conf_level=conf_level,
        seed=seed,
        statistic_name="pseudo-F",
    )
    result = CPUResamplingBackend().solve(design)
    return PermanovaSolution(
        _result=result,
        _design=design,
        _extra={
            'table': model.table(),
            'method': 'precomputed' if distance else method,
        },
    )


def monte_carlo(
    generator: Callable[[np.random.Generator], Any],
    statistic: Callable[[Any], float],
    R: int = DEFAULT_R,
    *,
    observed: float | None = None,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    conf_level: float = DEFAULT_CONF_LEVEL,
    seed: int | None = None,
) -> MonteCarloSolution:
    """
    Monte Carlo procedure: simulate R datasets and collect a statistic.

    Parameters
    ----------
    generator : callable
        fn(rng) -> one simulated dataset, drawing only from the
        numpy Generator it is given.
    statistic : callable
        fn(dataset) -> float.
    observed : float or None
        Value to compare against the simulated distribution.

    Returns
    -------
    MonteCarloSolution

    Examples
    --------
    >>> gen = lambda rng: rng.normal(0, 1, size=30)
    >>> mc = monte_carlo(gen, np.mean, R=2000, seed=1)
    >>> mc.null_interval       # approx (-0.36, 0.36)
    """
    design = MonteCarloDesign.for_monte_carlo(
        generator, statistic, R,
        observed=observed,
        alternative=alternative,
        conf_level=conf_level,
        seed=seed,
    )
    result = CPUMonteCarloBackend().solve(design)
    return MonteCarloSolution(_result=result, _design=design)


def boot(
    data: ArrayLike,
    statistic: Callable,
    R: int = DEFAULT_BOOT_R,
    *,
    sim: Literal["ordinary", "balanced", "parametric"] = "ordinary",
    stype: Literal["i", "f", "w"] = "i",
    strata: ArrayLike | None = None,
    ran_gen: Callable | None = None,
    mle: Any = None,
    seed: int | None = None,
    backend: BackendChoice = 'cpu',
) -> BootstrapSolution:
    """
    Bootstrap resampling. Matches R's boot::boot().

    Parameters
    ----------
    data : array-like
        1D or 2D data; rows are resampled.
    statistic : callable
        fn(data, indices) -> array of k statistics (stype="i"), or
        fn(data, freqs/weights) for stype "f"/"w", or fn(simulated) for
        sim="parametric".
    R : int
        Number of replicates. Default 999.
    sim : str
        "ordinary", "balanced", or "parametric".
    strata : array-like or None
        Resample within strata (e.g. group labels for a two-sample
        difference of means).
    ran_gen : callable or None
        fn(data, mle, rng) -> simulated data; required for parametric.
    seed : int or None
        Random seed.

    Returns
    -------
    BootstrapSolution
    """
    design = BootstrapDesign.for_bootstrap(
        data, statistic, R,
        sim=sim,
        stype=stype,
        strata=strata,
        ran_gen=ran_gen,
        mle=mle,
        seed=seed,
    )
    result = _get_bootstrap_backend(backend).solve(design)
    return BootstrapSolution(_result=result, _design=design)


def boot_ci(
    boot_out: BootstrapSolution,
    *,
    conf: float = DEFAULT_CONF_LEVEL,
    type: str | list[str] = "all",
    index: int = 0,
    var_t0: float | None = None,
    var_t: ArrayLike | None = None,
) -> BootstrapSolution:
    """
    Bootstrap confidence intervals. Matches R's boot::boot.ci().

    Parameters
    ----------
    boot_out : BootstrapSolution
        Result of boot().
    conf : float
        Confidence level. Default 0.95.
    type : str or list of str
        "normal", "basic", "perc", "bca", "stud" or "all". "all" skips
        "stud" unless var_t is given (as R).
    index : int
        Statistic used for the studentized interval.
    var_t0, var_t :
        Variance of t0 and per-replicate variances, shape (R,), for "stud".

    Returns
    -------
    BootstrapSolution
        New solution with ci populated.
    """
    conf = check_conf_level(conf)

    var_t_arr = None if var_t is None else np.asarray(var_t, dtype=np.float64)

    if type == "all":
        types = [t for t in CI_TYPES if t != "stud" or var_t_arr is not None]
    elif isinstance(type, str):
        types = [type]
    else:
        types = list(type)

    ci = compute_ci(boot_out, types, conf, index, var_t0, var_t_arr)

    old = boot_out._result.params
    params = BootParams(
        t0=old.t0,
        t=old.t,
        R=old.R,
        bias=old.bias,
        se=old.se,
        ci=ci,
        ci_conf_level=conf,
    )
    result = Result(
        params=params,
        info=boot_out._result.info,
        timing=boot_out._result.timing,
        backend_name=boot_out._result.backend_name,
        warnings=boot_out._result.warnings,
    )
    return BootstrapSolution(_result=result, _design=boot_out._design)
