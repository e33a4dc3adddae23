"""
Tests for the ANOVA F statistic and sequential ANOVA table.

One-way F is checked against scipy.stats.f_oneway; the blocked F is
checked against nested least-squares fits.
"""

import numpy as np
import pytest
from scipy import stats as sp_stats

from pyresampling.core.exceptions import DimensionError, ValidationError
from pyresampling.statistics import AnovaModel, anova_table, encode_treatment, f_statistic


def _rss(X, y):
    beta = np.linalg.lstsq(X, y, rcond=None)[0]
    resid = y - X @ beta
    return float(resid @ resid)


class TestOneWay:

    def test_hand_computed(self):
        y = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        groups = np.array(["a", "a", "a", "b", "b", "b"])
        # SS_between = 13.5 on 1 df, SS_within = 4 on 4 df
        assert f_statistic(y, groups) == pytest.approx(13.5, rel=1e-10)

    def test_matches_f_oneway(self, rng):
        groups = np.repeat(["ctrl", "trt1", "trt2"], [8, 10, 7])
        y = rng.normal(size=25) + (groups == "trt1") * 0.8
        samples = [y[groups == g] for g in ("ctrl", "trt1", "trt2")]
        expected = sp_stats.f_oneway(*samples).statistic
        assert f_statistic(y, groups) == pytest.approx(expected, rel=1e-10)

    def test_table(self, rng):
        groups = np.repeat([1, 2, 3], 5)
        y = rng.normal(size=15)
        table = anova_table(y, groups)
        assert [row.term for row in table] == ["groups", "Residuals"]
        assert table[0].df == 2
        assert table[1].df == 12
        total = np.sum((y - y.mean()) ** 2)
        assert table[0].sum_sq + table[1].sum_sq == pytest.approx(total, rel=1e-10)
        expected_p = sp_stats.f.sf(table[0].f_value, 2, 12)
        assert table[0].p_value == pytest.approx(expected_p, rel=1e-10)
        assert table[1].f_value is None

    def test_constant_response_is_nan(self):
        assert np.isnan(f_statistic(np.ones(6), [0, 0, 0, 1, 1, 1]))


class TestBlocked:

    def test_matches_nested_fits(self, rng):
        time = np.tile([1, 2, 3, 4], 6)
        groups = np.repeat(["control", "treated"], 12)
        y = rng.normal(size=24) + time * 2.0 + (groups == "treated") * 1.0

        ones = np.ones((24, 1))
        X_block = np.hstack([ones, encode_treatment(time)])
        X_full = np.hstack([X_block, encode_treatment(groups)])
        rss_block = _rss(X_block, y)
        rss_full = _rss(X_full, y)
        df_res = 24 - X_full.shape[1]
        expected = (rss_block - rss_full) / (rss_full / df_res)

        assert f_statistic(y, groups, blocks=time) == pytest.approx(expected, rel=1e-8)

    def test_table_terms(self, rng):
        time = np.tile([1, 2, 3], 4)
        groups = np.repeat(["a", "b"], 6)
        table = anova_table(rng.normal(size=12), groups, blocks=time)
        assert [row.term for row in table] == ["blocks", "groups", "Residuals"]
        assert [row.df for row in table] == [2, 1, 8]

    def test_block_term_removes_trend(self, rng):
        time = np.tile(np.arange(5), 4)
        groups = np.repeat(["a", "b"], 10)
        y = time * 10.0 + (groups == "b") * 1.0 + rng.normal(0, 0.5, 20)
        assert f_statistic(y, groups, blocks=time) > f_statistic(y, groups)


class TestErrors:

    def test_one_level(self):
        with pytest.raises(ValidationError, match="at least 2 levels"):
            AnovaModel(["a", "a", "a"])

    def test_block_length(self):
        with pytest.raises(DimensionError):
            AnovaModel(["a", "b", "a", "b"], blocks=[1, 2])

    def test_response_length(self):
        model = AnovaModel(["a", "b", "a", "b"])
        with pytest.raises(DimensionError, match="length 4"):
            model.f_statistic(np.zeros(5))
