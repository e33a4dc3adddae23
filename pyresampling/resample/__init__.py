"""
Resampling primitives.

Index generators for permutation (without replacement) and bootstrap
(with replacement) resampling, optionally restricted to strata.
Callers index their data with the returned indices, so rows of a 2D
table move together.

Usage:
    from pyresampling.resample import permutation_indices, permute

    rng = np.random.default_rng(42)
    idx = permutation_indices(len(y), rng, strata=time)
    y_star = y[idx]

    x_star = permute(x, seed=1)
"""

from pyresampling.resample.resampler import (
    SIM_TYPES,
    as_generator,
    permutation_indices,
    bootstrap_indices,
    balanced_bootstrap_indices,
    resample_indices,
    permute,
    bootstrap,
)

__all__ = [
    "SIM_TYPES",
    "as_generator",
    "permutation_indices",
    "bootstrap_indices",
    "balanced_bootstrap_indices",
    "resample_indices",
    "permute",
    "bootstrap",
]
