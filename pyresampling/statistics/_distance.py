"""
Distance-based multivariate ANOVA (PERMANOVA).

Partitions the sum of squared pairwise dissimilarities into within- and
between-group parts (Anderson 2001), giving the pseudo-F that R's
vegan::adonis() tests by permuting group labels:

    SS_total  = (1/n)   * sum_{i<j} d_ij^2
    SS_within = sum_g (1/n_g) * sum_{i<j in g} d_ij^2
    F = (SS_between / (a - 1)) / (SS_within / (n - a))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial import distance as sp_distance

from pyresampling.core.exceptions import DimensionError, ValidationError
from pyresampling.core.validation import check_2d, check_array, check_finite, check_labels


@dataclass(frozen=True)
class PermanovaTable:
    """PERMANOVA partition for one grouping of the observations."""
    df_groups: int
    df_residual: int
    ss_groups: float
    ss_residual: float
    ss_total: float
    f_value: float
    r_squared: float


def distance_matrix(
    data: ArrayLike,
    method: str = "braycurtis",
) -> NDArray[np.floating[Any]]:
    """
    Square pairwise dissimilarity matrix between the rows of data.

    Args:
        data: (n, p) observations, e.g. sites x species cover.
        method: Any scipy.spatial.distance metric name. Default
            'braycurtis', vegan's default for community data.

    Raises:
        ValidationError: If data are not 2D finite numbers or the
            metric name is unknown.
    """
    arr = check_array(data, "data")
    if arr.ndim == 1:
        arr = arr[:, None]
    check_2d(arr, "data")
    check_finite(arr, "data")
    if method == "braycurtis" and np.any(arr < 0):
        raise ValidationError("data: Bray-Curtis dissimilarity requires non-negative values")
    try:
        condensed = sp_distance.pdist(arr, metric=method)
    except ValueError as e:
        raise ValidationError(f"method: {e}") from e
    return sp_distance.squareform(condensed)


def check_distance_matrix(distance: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Validate a square, symmetric, zero-diagonal dissimilarity matrix.

    Raises:
        DimensionError: If the matrix is not square.
        ValidationError: If it is not symmetric or has a nonzero diagonal.
    """
    D = check_array(distance, "distance")
    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise DimensionError(f"distance: expected square matrix, got shape {D.shape}")
    check_finite(D, "distance")
    if not np.allclose(D, D.T):
        raise ValidationError("distance: matrix is not symmetric")
    if not np.allclose(np.diag(D), 0.0):
        raise ValidationError("distance: diagonal must be zero")
    return D


def _ss_within(d2: NDArray, codes: NDArray[np.intp], n_levels: int) -> float:
    ss = 0.0
    for g in range(n_levels):
        members = np.flatnonzero(codes == g)
        if len(members) > 0:
            ss += d2[np.ix_(members, members)].sum() / (2.0 * len(members))
    return ss


class PermanovaModel:
    """
    Squared distances and total SS for a fixed distance matrix.

    Permuting the group labels only changes SS_within, so the model is
    built once and queried once per permutation.
    """

    def __init__(self, distance: ArrayLike, groups: ArrayLike):
        D = check_distance_matrix(distance)
        groups_arr = check_labels(groups, "groups")
        n = D.shape[0]
        if groups_arr.shape[0] != n:
            raise DimensionError(
                f"Inconsistent lengths: distance={n}, groups={groups_arr.shape[0]}"
            )
        levels, codes = np.unique(groups_arr, return_inverse=True)
        if len(levels) < 2:
            raise ValidationError("groups: need at least 2 levels")

        self.n = n
        self.n_levels = len(levels)
        self.codes = codes.astype(np.intp)
        self._d2 = D ** 2
        self.ss_total = self._d2.sum() / (2.0 * n)

    def table(self, codes: NDArray[np.intp] | None = None) -> PermanovaTable:
        """Partition for the given group codes (the observed ones by default)."""
        if codes is None:
            codes = self.codes
        df_groups = self.n_levels - 1
        df_res = self.n - self.n_levels
        ss_res = _ss_within(self._d2, codes, self.n_levels)
        ss_groups = self.ss_total - ss_res
        if df_res > 0 and ss_res > 0:
            f_value = (ss_groups / df_groups) / (ss_res / df_res)
        else:
            f_value = float('nan')
        r2 = ss_groups / self.ss_total if self.ss_total > 0 else float('nan')
        return PermanovaTable(
            df_groups=df_groups,
            df_residual=df_res,
            ss_groups=float(ss_groups),
            ss_residual=float(ss_res),
            ss_total=float(self.ss_total),
            f_value=float(f_value),
            r_squared=float(r2),
        )

    def pseudo_f(self, codes: NDArray[np.intp]) -> float:
        return self.table(np.asarray(codes, dtype=np.intp)).f_value


def permanova_table(distance: ArrayLike, groups: ArrayLike) -> PermanovaTable:
    """PERMANOVA partition of a distance matrix by groups."""
    return PermanovaModel(distance, groups).table()


def pseudo_f(distance: ArrayLike, groups: ArrayLike) -> float:
    """PERMANOVA pseudo-F of groups on a distance matrix."""
    return permanova_table(distance, groups).f_value
