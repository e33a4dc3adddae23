"""
Input validation utilities for PyResampling.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyresampling.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating point numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) and result.dtype != bool:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_labels(labels: ArrayLike, name: str) -> NDArray:
    """
    Validate a 1D vector of group or stratum labels.

    Labels may be of any hashable scalar dtype (strings, integers,
    floats). Only the dimensionality is checked.

    Raises:
        DimensionError: If labels are not 1D
    """
    result = np.asarray(labels)
    if result.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D label vector, got {result.ndim}D with shape {result.shape}"
        )
    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_replicates(R: int, name: str = "R") -> int:
    """
    Verify the number of resampling replicates is a positive integer.

    Raises:
        ValidationError: If R is not an integer >= 1
    """
    if isinstance(R, bool) or not isinstance(R, (int, np.integer)):
        raise ValidationError(f"{name} must be an integer, got {type(R).__name__}")
    if R < 1:
        raise ValidationError(f"{name} must be >= 1, got {R}")
    return int(R)


def check_conf_level(conf_level: float) -> float:
    """
    Verify a confidence level lies strictly between 0 and 1.

    Raises:
        ValidationError: If conf_level is outside (0, 1)
    """
    if not 0.0 < conf_level < 1.0:
        raise ValidationError(
            f"conf_level must be in (0, 1), got {conf_level}"
        )
    return float(conf_level)


def check_alternative(alternative: str) -> str:
    """
    Verify the alternative hypothesis name.

    Raises:
        ValidationError: If alternative is not one of the R spellings
    """
    if alternative not in ("two.sided", "less", "greater"):
        raise ValidationError(
            f"alternative must be 'two.sided', 'less', or 'greater', "
            f"got {alternative!r}"
        )
    return alternative
