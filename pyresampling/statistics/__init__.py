"""
Statistic evaluators.

Each evaluator turns one arrangement of the data into a scalar. The
*Model classes fix everything that does not change under resampling of
the response (design matrices, squared distances) so the per-replicate
cost is small.

Public API:
    mean_diff(x, y)               - difference in means
    t_statistic(x, y)             - Welch or pooled two-sample t
    f_statistic(y, groups)        - ANOVA F, optional block term
    r_squared(X, y)               - OLS coefficient of determination
    distance_matrix(data)         - pairwise dissimilarities
    pseudo_f(distance, groups)    - PERMANOVA pseudo-F
    get_statistic(name)           - named two-sample statistic lookup
"""

from __future__ import annotations

from typing import Callable

from pyresampling.core.exceptions import ValidationError
from pyresampling.statistics._location import mean_diff, t_statistic, welch_t, pooled_t
from pyresampling.statistics._anova import (
    AnovaRow, AnovaModel, f_statistic, anova_table, encode_treatment,
)
from pyresampling.statistics._ols import OLSModel, r_squared
from pyresampling.statistics._distance import (
    PermanovaTable,
    PermanovaModel,
    distance_matrix,
    check_distance_matrix,
    permanova_table,
    pseudo_f,
)

TWO_SAMPLE_STATISTICS: dict[str, Callable[..., float]] = {
    "mean_diff": mean_diff,
    "t": welch_t,
    "t_pooled": pooled_t,
}


def get_statistic(name: str) -> Callable[..., float]:
    """
    Look up a named two-sample statistic fn(x, y) -> float.

    Raises:
        ValidationError: If the name is unknown.
    """
    try:
        return TWO_SAMPLE_STATISTICS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown statistic: {name!r}. "
            f"Use one of {sorted(TWO_SAMPLE_STATISTICS)} or a callable."
        ) from None


__all__ = [
    "mean_diff",
    "t_statistic",
    "welch_t",
    "pooled_t",
    "AnovaRow",
    "AnovaModel",
    "f_statistic",
    "anova_table",
    "encode_treatment",
    "OLSModel",
    "r_squared",
    "PermanovaTable",
    "PermanovaModel",
    "distance_matrix",
    "check_distance_matrix",
    "permanova_table",
    "pseudo_f",
    "TWO_SAMPLE_STATISTICS",
    "get_statistic",
]
