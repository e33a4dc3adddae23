"""
Design classes for Monte Carlo methods.

BootstrapDesign, ResamplingDesign and MonteCarloDesign encapsulate all
inputs needed by backends. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyresampling.core.exceptions import DimensionError, ValidationError
from pyresampling.core.validation import (
    check_alternative,
    check_array,
    check_conf_level,
    check_labels,
    check_replicates,
)
from pyresampling.montecarlo._common import (
    DEFAULT_BOOT_R, DEFAULT_CONF_LEVEL, DEFAULT_R,
)
from pyresampling.resample import SIM_TYPES


def _check_strata(strata: ArrayLike | None, n: int) -> NDArray | None:
    if strata is None:
        return None
    strata_arr = check_labels(strata, "strata")
    if strata_arr.shape[0] != n:
        raise DimensionError(
            f"strata length ({strata_arr.shape[0]}) must match "
            f"data rows ({n})"
        )
    return strata_arr


@dataclass(frozen=True)
class BootstrapDesign:
    """
    Frozen design for bootstrap resampling.

    Attributes:
        data: Original data array, shape (n,) or (n, p).
        statistic: User function. For nonparametric: fn(data, indices) -> (k,).
            For parametric: fn(simulated_data) -> (k,).
        R: Number of bootstrap replicates.
        sim: Simulation type: "ordinary", "balanced", or "parametric".
        stype: What the second argument to statistic represents:
            "i" (indices), "f" (frequencies), "w" (weights).
        strata: Optional stratification vector of length n.
        ran_gen: For parametric bootstrap: fn(data, mle, rng) -> simulated data.
        mle: Parameter estimates passed to ran_gen for parametric bootstrap.
        seed: Random seed for reproducibility.
    """
    data: NDArray[np.floating[Any]]
    statistic: Callable
    R: int
    sim: str
    stype: str
    strata: NDArray | None
    ran_gen: Callable | None
    mle: Any
    seed: int | None

    @classmethod
    def for_bootstrap(
        cls,
        data,
        statistic: Callable,
        R: int = DEFAULT_BOOT_R,
        *,
        sim: str = "ordinary",
        stype: str = "i",
        strata=None,
        ran_gen: Callable | None = None,
        mle=None,
        seed: int | None = None,
    ) -> BootstrapDesign:
        """
        Create a bootstrap design with validation.

        Raises:
            ValidationError: If inputs are invalid.
        """
        data_arr = check_array(data, "data").copy()
        if data_arr.ndim not in (1, 2):
            raise DimensionError(
                f"data must be 1D or 2D, got {data_arr.ndim}D"
            )

        n = data_arr.shape[0]
        if n < 1:
            raise ValidationError("data must have at least 1 observation")

        R = check_replicates(R)

        if sim not in ("ordinary", "balanced", "parametric"):
            raise ValidationError(
                f"sim must be 'ordinary', 'balanced', or 'parametric', "
                f"got {sim!r}"
            )

        if stype not in ("i", "f", "w"):
            raise ValidationError(
                f"stype must be 'i', 'f', or 'w', got {stype!r}"
            )

        if sim == "parametric" and ran_gen is None:
            raise ValidationError(
                "ran_gen is required for parametric bootstrap "
                "(sim='parametric')"
            )

        return cls(
            data=data_arr,
            statistic=statistic,
            R=R,
            sim=sim,
            stype=stype,
            strata=_check_strata(strata, n),
            ran_gen=ran_gen,
            mle=mle,
            seed=seed,
        )


@dataclass(frozen=True)
class ResamplingDesign:
    """
    Frozen design for collecting a resampling distribution.

    The statistic sees the whole resampled arrangement: data[indices],
    where indices come from a (stratified) permutation or bootstrap draw.

    Attributes:
        data: Array whose rows are resampled, shape (n,) or (n, p).
        statistic: fn(arrangement) -> float.
        R: Number of resamples.
        sim: "permutation" or "bootstrap".
        strata: Optional labels of length n restricting resampling.
        alternative: "two.sided", "less", or "greater".
        conf_level: Coverage of the reported quantile interval.
        seed: Random seed for reproducibility.
        statistic_name: Name of a built-in two-sample statistic, or None
            for user callables. Enables batched GPU evaluation.
        split: For two-sample designs, the size of group 1; rows
            [:split] are x and rows [split:] are y.
    """
    data: NDArray[Any]
    statistic: Callable[[NDArray[Any]], float]
    R: int
    sim: str
    strata: NDArray | None
    alternative: str
    conf_level: float
    seed: int | None
    statistic_name: str | None = None
    split: int | None = None

    @property
    def n(self) -> int:
        return self.data.shape[0]

    @classmethod
    def for_resampling(
        cls,
        data,
        statistic: Callable[[NDArray[Any]], float],
        R: int = DEFAULT_R,
        *,
        sim: str = "permutation",
        strata=None,
        alternative: str = "two.sided",
        conf_level: float = DEFAULT_CONF_LEVEL,
        seed: int | None = None,
        statistic_name: str | None = None,
        split: int | None = None,
    ) -> ResamplingDesign:
        """
        Create a resampling design with validation.

        Args:
            data: Values to resample; numeric, 1D or 2D.
            statistic: fn(arrangement) -> float.
            R: Number of resamples. Must be >= 1.
            sim: "permutation" (without replacement) or "bootstrap".
            strata: Labels of length n; resampling stays within strata.
            alternative: Direction used for the p-value.
            conf_level: Interval coverage, default 0.95.
            seed: Random seed.

        Raises:
            ValidationError: If inputs are invalid.
        """
        if not callable(statistic):
            raise ValidationError(
                f"statistic must be callable, got {type(statistic).__name__}"
            )
        data_arr = check_array(data, "data").copy()
        if data_arr.ndim not in (1, 2):
            raise DimensionError(f"data must be 1D or 2D, got {data_arr.ndim}D")
        n = data_arr.shape[0]
        if n < 1:
            raise ValidationError("data must have at least 1 observation")
        if sim not in SIM_TYPES:
            raise ValidationError(f"sim must be one of {SIM_TYPES}, got {sim!r}")

        return cls(
            data=data_arr,
            statistic=statistic,
            R=check_replicates(R),
            sim=sim,
            strata=_check_strata(strata, n),
            alternative=check_alternative(alternative),
            conf_level=check_conf_level(conf_level),
            seed=seed,
            statistic_name=statistic_name,
            split=split,
        )

    @classmethod
    def for_two_sample(
        cls,
        x,
        y,
        statistic: Callable[[NDArray, NDArray], float],
        R: int = DEFAULT_R,
        *,
        sim: str = "permutation",
        strata=None,
        alternative: str = "two.sided",
        conf_level: float = DEFAULT_CONF_LEVEL,
        seed: int | None = None,
        statistic_name: str | None = None,
    ) -> ResamplingDesign:
        """
        Two-sample design: x and y are pooled and group labels reshuffled.

        Args:
            x: Group 1 data.
            y: Group 2 data.
            statistic: fn(x, y) -> float.
            strata: Labels for the pooled observations (x first, then y).

        Raises:
            ValidationError: If either group is empty or scalar.
        """
        x_arr = check_array(x, "x")
        y_arr = check_array(y, "y")

        if x_arr.ndim == 0 or y_arr.ndim == 0:
            raise ValidationError("x and y must be arrays, not scalars")

        if len(x_arr) < 1 or len(y_arr) < 1:
            raise ValidationError("x and y must each have at least 1 observation")

        if x_arr.shape[1:] != y_arr.shape[1:]:
            raise DimensionError(
                f"x and y must have matching trailing dimensions, "
                f"got {x_arr.shape} and {y_arr.shape}"
            )

        n1 = len(x_arr)

        def pooled_statistic(arrangement: NDArray) -> float:
            return statistic(arrangement[:n1], arrangement[n1:])

        return cls.for_resampling(
            np.concatenate([x_arr, y_arr]),
            pooled_statistic,
            R,
            sim=sim,
            strata=strata,
            alternative=alternative,
            conf_level=conf_level,
            seed=seed,
            statistic_name=statistic_name,
            split=n1,
        )


@dataclass(frozen=True)
class MonteCarloDesign:
    """
    Frozen design for a Monte Carlo procedure.

    Attributes:
        generator: fn(rng) -> one simulated dataset.
        statistic: fn(dataset) -> float.
        R: Number of simulations.
        observed: Optional observed statistic to set against the
            simulated distribution.
        alternative: Direction used for the p-value.
        conf_level: Interval coverage.
        seed: Random seed for reproducibility.
    """
    generator: Callable[[np.random.Generator], Any]
    statistic: Callable[[Any], float]
    R: int
    observed: float | None
    alternative: str
    conf_level: float
    seed: int | None

    @classmethod
    def for_monte_carlo(
        cls,
        generator: Callable[[np.random.Generator], Any],
        statistic: Callable[[Any], float],
        R: int = DEFAULT_R,
        *,
        observed: float | None = None,
        alternative: str = "two.sided",
        conf_level: float = DEFAULT_CONF_LEVEL,
        seed: int | None = None,
    ) -> MonteCarloDesign:
        """Create a Monte Carlo design with validation."""
        if not callable(generator):
            raise ValidationError("generator must be callable: fn(rng) -> dataset")
        if not callable(statistic):
            raise ValidationError("statistic must be callable: fn(dataset) -> float")
        return cls(
            generator=generator,
            statistic=statistic,
            R=check_replicates(R),
            observed=None if observed is None else float(observed),
            alternative=check_alternative(alternative),
            conf_level=check_conf_level(conf_level),
            seed=seed,
        )
