"""
PyResampling Monte Carlo methods.

Null-distribution collection for permutation tests, bootstrap
resampling (matching R's boot package) and Monte Carlo simulation,
with CPU and GPU backends.

Usage:
    from pyresampling.montecarlo import permutation_test, boot, boot_ci

    # Permutation test of Welch's t
    result = permutation_test(x, y, "t", R=1000, seed=1079)
    result.null_interval, result.reject

    # Bootstrap
    result = boot(data, statistic, R=999, seed=42)
    ci_result = boot_ci(result, type="perc")
"""

from pyresampling.montecarlo.solvers import (
    null_distribution,
    permutation_test,
    anova_permutation_test,
    lm_permutation_test,
    permanova,
    monte_carlo,
    boot,
    boot_ci,
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

__all__ = [
    "null_distribution",
    "permutation_test",
    "anova_permutation_test",
    "lm_permutation_test",
    "permanova",
    "monte_carlo",
    "boot",
    "boot_ci",
    "BootstrapDesign",
    "MonteCarloDesign",
    "ResamplingDesign",
    "AnovaPermutationSolution",
    "BootstrapSolution",
    "MonteCarloSolution",
    "NullDistributionSolution",
    "PermanovaSolution",
    "PermutationSolution",
    "RegressionPermutationSolution",
]
