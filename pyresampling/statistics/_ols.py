"""
Coefficient of determination from an ordinary least squares fit.

Permutation tests of R² shuffle the response and keep the predictors,
so OLSModel factors the design matrix once and reuses the QR factors
for every replicate.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyresampling.core.compute.linalg.qr import qr_cpu
from pyresampling.core.exceptions import DimensionError
from pyresampling.core.validation import check_array, check_finite


class OLSModel:
    """
    Fixed-design OLS fit of y on X.

    Args:
        X: Predictors, shape (n,) or (n, p).
        intercept: Prepend a column of ones (as R's lm() does).

    Raises:
        DimensionError: If X has more columns than rows.
        SingularMatrixError: If X is rank-deficient.
    """

    def __init__(self, X: ArrayLike, intercept: bool = True):
        X_arr = check_array(X, "X")
        if X_arr.ndim == 1:
            X_arr = X_arr[:, None]
        if X_arr.ndim != 2:
            raise DimensionError(
                f"X: expected 1D or 2D array, got {X_arr.ndim}D with shape {X_arr.shape}"
            )
        check_finite(X_arr, "X")
        if intercept:
            X_arr = np.column_stack([np.ones(X_arr.shape[0]), X_arr])

        n, p = X_arr.shape
        if n <= p:
            raise DimensionError(
                f"X: need more observations than coefficients, got n={n}, p={p}"
            )

        self.X = X_arr
        self.intercept = intercept
        self._qr = qr_cpu(X_arr, mode='reduced')
        self._qr.check_full_rank('X')

    @property
    def n(self) -> int:
        return self.X.shape[0]

    @property
    def p(self) -> int:
        return self.X.shape[1]

    def coefficients(self, y: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self._qr.solve(y)

    def rss(self, y: NDArray[np.floating[Any]]) -> float:
        residuals = y - self.X @ self._qr.solve(y)
        return float(residuals @ residuals)

    def r_squared(self, y: ArrayLike) -> float:
        """R² = 1 - RSS/TSS (TSS about the mean when there is an intercept)."""
        y = np.asarray(y, dtype=np.float64)
        if y.shape[0] != self.n:
            raise DimensionError(
                f"Inconsistent lengths: X={self.n}, y={y.shape[0]}"
            )
        rss = self.rss(y)
        if self.intercept:
            tss = float(np.sum((y - np.mean(y)) ** 2))
        else:
            tss = float(y @ y)
        if tss == 0:
            return 1.0 if rss == 0 else 0.0
        return 1.0 - rss / tss


def r_squared(X: ArrayLike, y: ArrayLike, intercept: bool = True) -> float:
    """R² of the OLS regression of y on X."""
    return OLSModel(X, intercept=intercept).r_squared(y)
