"""
Analysis-of-variance F statistic with an optional blocking term.

Sequential (Type I) sums of squares, as R's anova(aov(y ~ block + group)):
the block term enters first, the group term is tested after it. Nested
model fits are projections onto orthonormal bases of the column spaces,
computed once per design, so permuting the response costs two
matrix-vector products per replicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import linalg as sla
from scipy import stats as sp_stats

from pyresampling.core.exceptions import DimensionError, ValidationError
from pyresampling.core.validation import check_labels


@dataclass(frozen=True)
class AnovaRow:
    """One row of an ANOVA table (one term or residuals)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float
    f_value: float | None    # None for Residuals row
    p_value: float | None    # None for Residuals row


def encode_treatment(factor: NDArray) -> NDArray[np.floating[Any]]:
    """
    Treatment (dummy) coding: k-1 indicator columns, first sorted level
    is the baseline.
    """
    levels = np.unique(factor)
    X = np.zeros((len(factor), len(levels) - 1), dtype=np.float64)
    for j, level in enumerate(levels[1:]):
        X[:, j] = factor == level
    return X


def _column_basis(X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Orthonormal basis of the column space; rank = number of columns."""
    if X.shape[1] == 0:
        return X
    return sla.orth(X)


class AnovaModel:
    """
    Fixed design for y ~ [blocks +] groups.

    Args:
        groups: Treatment labels, length n, at least 2 levels.
        blocks: Optional block/stratum labels, length n.

    Raises:
        DimensionError: If label vectors are not 1D or lengths differ.
        ValidationError: If groups has fewer than 2 levels.
    """

    def __init__(self, groups: ArrayLike, blocks: ArrayLike | None = None):
        groups_arr = check_labels(groups, "groups")
        n = groups_arr.shape[0]
        if len(np.unique(groups_arr)) < 2:
            raise ValidationError("groups: need at least 2 levels")

        intercept = np.ones((n, 1), dtype=np.float64)
        columns = [intercept]
        self.terms: list[str] = []

        if blocks is not None:
            blocks_arr = check_labels(blocks, "blocks")
            if blocks_arr.shape[0] != n:
                raise DimensionError(
                    f"Inconsistent lengths: groups={n}, blocks={blocks_arr.shape[0]}"
                )
            columns.append(encode_treatment(blocks_arr))
            self.terms.append("blocks")
        columns.append(encode_treatment(groups_arr))
        self.terms.append("groups")

        # Basis of each nested model: intercept, +blocks, +groups
        self._bases = [
            _column_basis(np.hstack(columns[:k + 1]))
            for k in range(len(columns))
        ]
        self._ranks = [basis.shape[1] for basis in self._bases]
        self.n = n
        self.groups = groups_arr

    @property
    def df_residual(self) -> int:
        return self.n - self._ranks[-1]

    def _rss_sequence(self, y: NDArray[np.floating[Any]]) -> list[float]:
        rss = []
        for basis in self._bases:
            fitted = basis @ (basis.T @ y)
            resid = y - fitted
            rss.append(float(resid @ resid))
        return rss

    def _check_response(self, y: ArrayLike) -> NDArray[np.floating[Any]]:
        y = np.asarray(y, dtype=np.float64)
        if y.ndim != 1 or y.shape[0] != self.n:
            raise DimensionError(
                f"y: expected 1D array of length {self.n}, got shape {y.shape}"
            )
        return y

    def table(self, y: ArrayLike) -> tuple[AnovaRow, ...]:
        """Sequential ANOVA table: one row per term, then Residuals."""
        y = self._check_response(y)
        rss = self._rss_sequence(y)
        df_res = self.df_residual
        rss_full = rss[-1]
        ms_res = rss_full / df_res if df_res > 0 else float('nan')

        rows = []
        for k, term in enumerate(self.terms):
            ss = max(rss[k] - rss[k + 1], 0.0)
            df = self._ranks[k + 1] - self._ranks[k]
            ms = ss / df if df > 0 else float('nan')
            if df > 0 and df_res > 0 and ms_res > 0:
                f_val = ms / ms_res
                p_val = float(sp_stats.f.sf(f_val, df, df_res))
            else:
                f_val, p_val = float('nan'), float('nan')
            rows.append(AnovaRow(term, df, ss, ms, f_val, p_val))

        rows.append(AnovaRow("Residuals", df_res, rss_full, ms_res, None, None))
        return tuple(rows)

    def f_statistic(self, y: ArrayLike) -> float:
        """F of the groups term (after blocks, when present)."""
        y = self._check_response(y)
        rss = self._rss_sequence(y)
        df_res = self.df_residual
        df_groups = self._ranks[-1] - self._ranks[-2]
        if df_res <= 0 or df_groups <= 0 or rss[-1] <= 0:
            return float('nan')
        ss_groups = max(rss[-2] - rss[-1], 0.0)
        return (ss_groups / df_groups) / (rss[-1] / df_res)


def f_statistic(
    y: ArrayLike,
    groups: ArrayLike,
    blocks: ArrayLike | None = None,
) -> float:
    """ANOVA F statistic of groups, optionally after a block term."""
    return AnovaModel(groups, blocks).f_statistic(y)


def anova_table(
    y: ArrayLike,
    groups: ArrayLike,
    blocks: ArrayLike | None = None,
) -> tuple[AnovaRow, ...]:
    """Sequential ANOVA table for y ~ [blocks +] groups."""
    return AnovaModel(groups, blocks).table(y)
