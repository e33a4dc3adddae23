"""
Tests for the permutation test of the regression R².
"""

import numpy as np
import pytest

from pyresampling.core.exceptions import DimensionError, SingularMatrixError
from pyresampling.datasets import community_example
from pyresampling.montecarlo import lm_permutation_test
from pyresampling.statistics import r_squared


class TestLmPermutation:

    def test_strong_relationship(self, rng):
        x = rng.uniform(0, 10, 30)
        y = 2.0 * x + rng.normal(0, 1, 30)
        result = lm_permutation_test(x, y, R=199, seed=1)
        assert result.observed_stat == pytest.approx(r_squared(x, y))
        assert result.observed_stat > 0.9
        assert result.p_value == pytest.approx(1.0 / 200.0)
        assert result.statistic_name == "R2"

    def test_null_r_squared_near_expectation(self, rng):
        x = rng.normal(size=30)
        y = rng.normal(size=30)
        result = lm_permutation_test(x, y, R=500, seed=2)
        assert np.all((result.null_stats > -1e-12) & (result.null_stats <= 1.0))
        # E[R²] = p / (n - 1) under the null
        assert result.null_stats.mean() < 0.1

    def test_multiple_predictors(self):
        comm = community_example(seed=7)
        total_cover = comm.cover.sum(axis=1)
        result = lm_permutation_test(comm.chemistry, total_cover, R=99, seed=3)
        assert result.observed_stat == pytest.approx(r_squared(comm.chemistry, total_cover))
        assert result.null_stats.shape == (99,)

    def test_summary(self, rng):
        result = lm_permutation_test(rng.normal(size=12), rng.normal(size=12), R=19, seed=0)
        assert "R-SQUARED" in result.summary()


class TestValidation:

    def test_collinear(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularMatrixError):
            lm_permutation_test(X, y, R=10)

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            lm_permutation_test(np.arange(10.0), np.arange(9.0), R=10)

    def test_2d_response(self):
        with pytest.raises(DimensionError):
            lm_permutation_test(np.arange(10.0), np.zeros((10, 2)), R=10)
