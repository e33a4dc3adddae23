"""
PyResampling: resampling-based statistical inference for Python.

Permutation tests, bootstrapping and Monte Carlo procedures built from
four composable pieces: a resampler, a statistic evaluator, a
null-distribution collector and an inference reporter.

Submodules:
    resample: Permutation and bootstrap index generators (stratified or not)
    statistics: Scalar test statistics (t, F, R², PERMANOVA pseudo-F)
    montecarlo: Null-distribution collection, bootstrap, Monte Carlo
    inference: Quantile intervals, informal tests, histogram rendering
    datasets: Seeded synthetic example inputs
"""

__version__ = "0.1.0"

from pyresampling import resample
from pyresampling import statistics
from pyresampling import montecarlo
from pyresampling import inference
from pyresampling import datasets

from pyresampling.montecarlo import (
    null_distribution,
    permutation_test,
    anova_permutation_test,
    lm_permutation_test,
    permanova,
    monte_carlo,
    boot,
    boot_ci,
)
from pyresampling.inference import null_interval, infer, plot_null_distribution

__all__ = [
    "__version__",
    "resample",
    "statistics",
    "montecarlo",
    "inference",
    "datasets",
    "null_distribution",
    "permutation_test",
    "anova_permutation_test",
    "lm_permutation_test",
    "permanova",
    "monte_carlo",
    "boot",
    "boot_ci",
    "null_interval",
    "infer",
    "plot_null_distribution",
]
