"""
Permutation and bootstrap index generators.

Stratified mode: the positions holding stratum s receive indices drawn
only from stratum s, so every value stays in its own stratum and
stratum sizes are unchanged.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyresampling.core.exceptions import DimensionError, ValidationError
from pyresampling.core.validation import check_labels

SIM_TYPES = ("permutation", "bootstrap")

SeedLike = int | np.random.Generator | None


def as_generator(rng: SeedLike) -> np.random.Generator:
    """Return rng unchanged if it is a Generator, else seed a new one."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _check_n(n: int) -> int:
    if n < 1:
        raise ValidationError(f"n must be >= 1, got {n}")
    return int(n)


def _strata_groups(strata: ArrayLike, n: int) -> list[NDArray[np.intp]]:
    """Positions of each stratum, in order of first appearance of the label."""
    strata_arr = check_labels(strata, "strata")
    if strata_arr.shape[0] != n:
        raise DimensionError(
            f"strata length ({strata_arr.shape[0]}) must match data rows ({n})"
        )
    _, first, inverse = np.unique(
        strata_arr, return_index=True, return_inverse=True
    )
    order = np.argsort(first)
    return [np.flatnonzero(inverse == k) for k in order]


def permutation_indices(
    n: int,
    rng: SeedLike = None,
    strata: ArrayLike | None = None,
) -> NDArray[np.intp]:
    """
    Random permutation of 0..n-1 (sampling without replacement).

    Args:
        n: Number of observations.
        rng: Generator, integer seed, or None.
        strata: Optional labels of length n; permutation happens
            independently inside each stratum.

    Returns:
        Index array of shape (n,) in which every index appears once.
    """
    n = _check_n(n)
    gen = as_generator(rng)
    if strata is None:
        return gen.permutation(n)

    indices = np.empty(n, dtype=np.intp)
    for positions in _strata_groups(strata, n):
        indices[positions] = gen.permutation(positions)
    return indices


def bootstrap_indices(
    n: int,
    rng: SeedLike = None,
    strata: ArrayLike | None = None,
) -> NDArray[np.intp]:
    """
    n indices drawn uniformly with replacement from 0..n-1.

    With strata, each stratum is resampled with replacement from its own
    members only.
    """
    n = _check_n(n)
    gen = as_generator(rng)
    if strata is None:
        return gen.choice(n, size=n, replace=True)

    indices = np.empty(n, dtype=np.intp)
    for positions in _strata_groups(strata, n):
        indices[positions] = gen.choice(positions, size=len(positions), replace=True)
    return indices


def balanced_bootstrap_indices(
    n: int,
    R: int,
    rng: SeedLike = None,
    strata: ArrayLike | None = None,
) -> NDArray[np.intp]:
    """
    Balanced bootstrap: an (R, n) index matrix in which each of
    0..n-1 appears exactly R times in total.

    A pool holding every index R times is shuffled and cut into R
    samples of size n (within each stratum when strata are given).
    """
    n = _check_n(n)
    if R < 1:
        raise ValidationError(f"R must be >= 1, got {R}")
    gen = as_generator(rng)

    if strata is None:
        pool = np.tile(np.arange(n), R)
        gen.shuffle(pool)
        return pool.reshape(R, n)

    all_indices = np.empty((R, n), dtype=np.intp)
    for positions in _strata_groups(strata, n):
        ns = len(positions)
        pool = np.tile(positions, R)
        gen.shuffle(pool)
        all_indices[:, positions] = pool.reshape(R, ns)
    return all_indices


def resample_indices(
    n: int,
    rng: SeedLike,
    sim: str,
    strata: ArrayLike | None = None,
) -> NDArray[np.intp]:
    """Dispatch on sim: 'permutation' or 'bootstrap'."""
    if sim == "permutation":
        return permutation_indices(n, rng, strata)
    if sim == "bootstrap":
        return bootstrap_indices(n, rng, strata)
    raise ValidationError(
        f"sim must be one of {SIM_TYPES}, got {sim!r}"
    )


def _resampled_copy(x: ArrayLike, sim: str, seed: SeedLike, strata) -> NDArray[Any]:
    arr = np.asarray(x)
    if arr.ndim == 0:
        raise ValidationError("x must be an array, not a scalar")
    idx = resample_indices(arr.shape[0], seed, sim, strata)
    return arr[idx]


def permute(
    x: ArrayLike,
    seed: SeedLike = None,
    strata: ArrayLike | None = None,
) -> NDArray[Any]:
    """Shuffled copy of x (rows of 2D input move together)."""
    return _resampled_copy(x, "permutation", seed, strata)


def bootstrap(
    x: ArrayLike,
    seed: SeedLike = None,
    strata: ArrayLike | None = None,
) -> NDArray[Any]:
    """Bootstrap sample of x: same length, drawn with replacement."""
    return _resampled_copy(x, "bootstrap", seed, strata)
