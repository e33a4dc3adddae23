"""
Tests for permutation and bootstrap index generators.

Validates:
    - Permutation preserves the multiset
    - Bootstrap keeps the length and draws only input values
    - Stratified resampling never crosses stratum boundaries
    - Seed reproducibility
"""

import numpy as np
import pytest

from pyresampling.core.exceptions import DimensionError, ValidationError
from pyresampling.resample import (
    as_generator,
    balanced_bootstrap_indices,
    bootstrap,
    bootstrap_indices,
    permutation_indices,
    permute,
    resample_indices,
)


class TestPermutation:

    def test_preserves_multiset(self, rng):
        x = rng.normal(size=50)
        x_star = permute(x, seed=1)
        assert x_star.shape == x.shape
        np.testing.assert_array_equal(np.sort(x_star), np.sort(x))

    def test_preserves_ties(self):
        x = np.array([1.0, 1.0, 2.0, 2.0, 2.0, 7.0])
        np.testing.assert_array_equal(np.sort(permute(x, seed=3)), x)

    def test_every_index_once(self):
        idx = permutation_indices(100, rng=5)
        np.testing.assert_array_equal(np.sort(idx), np.arange(100))

    def test_rows_move_together(self):
        x = np.arange(20).reshape(10, 2)
        x_star = permute(x, seed=3)
        np.testing.assert_array_equal(x_star[:, 1] - x_star[:, 0], np.ones(10))

    def test_seed_reproducibility(self, rng):
        x = rng.normal(size=30)
        np.testing.assert_array_equal(permute(x, seed=42), permute(x, seed=42))

    def test_generator_advances(self):
        gen = np.random.default_rng(0)
        first = permutation_indices(30, gen)
        second = permutation_indices(30, gen)
        assert not np.array_equal(first, second)


class TestBootstrap:

    def test_length_and_values(self, rng):
        x = rng.normal(size=40)
        x_star = bootstrap(x, seed=2)
        assert x_star.shape == x.shape
        assert set(x_star).issubset(set(x))

    def test_indices_in_range(self):
        idx = bootstrap_indices(25, rng=4)
        assert idx.shape == (25,)
        assert idx.min() >= 0
        assert idx.max() < 25

    def test_draws_with_replacement(self):
        idx = bootstrap_indices(200, rng=4)
        assert len(np.unique(idx)) < 200


class TestBalancedBootstrap:

    def test_each_index_r_times(self):
        idx = balanced_bootstrap_indices(12, 50, rng=1)
        assert idx.shape == (50, 12)
        np.testing.assert_array_equal(np.bincount(idx.ravel(), minlength=12), np.full(12, 50))

    def test_stratified_balance(self):
        strata = np.array([0, 0, 0, 1, 1, 1, 1])
        idx = balanced_bootstrap_indices(7, 20, rng=1, strata=strata)
        np.testing.assert_array_equal(np.bincount(idx.ravel(), minlength=7), np.full(7, 20))
        for row in idx:
            np.testing.assert_array_equal(strata[row], strata)


class TestStratified:

    @pytest.mark.parametrize("sim", ["permutation", "bootstrap"])
    def test_never_crosses_strata(self, sim):
        strata = np.repeat(["t1", "t2", "t3"], [4, 5, 6])
        gen = np.random.default_rng(8)
        for _ in range(50):
            idx = resample_indices(15, gen, sim, strata)
            np.testing.assert_array_equal(strata[idx], strata)

    def test_interleaved_labels(self):
        strata = np.array(["a", "b"] * 6)
        x = np.arange(12.0)
        x_star = permute(x, seed=11, strata=strata)
        np.testing.assert_array_equal(x_star[strata == "a"] % 2, np.zeros(6))
        np.testing.assert_array_equal(np.sort(x_star[strata == "b"]), x[strata == "b"])

    def test_single_member_strata_fixed(self):
        strata = np.arange(6)
        idx = permutation_indices(6, rng=0, strata=strata)
        np.testing.assert_array_equal(idx, np.arange(6))


class TestErrors:

    def test_zero_length(self):
        with pytest.raises(ValidationError, match="n must be >= 1"):
            permutation_indices(0)

    def test_strata_length_mismatch(self):
        with pytest.raises(DimensionError, match="strata length"):
            permutation_indices(5, strata=[0, 0, 1])

    def test_unknown_sim(self):
        with pytest.raises(ValidationError, match="sim"):
            resample_indices(5, 0, "jackknife")

    def test_scalar_input(self):
        with pytest.raises(ValidationError, match="scalar"):
            permute(3.0)

    def test_as_generator(self):
        gen = np.random.default_rng(1)
        assert as_generator(gen) is gen
        assert isinstance(as_generator(7), np.random.Generator)
        assert isinstance(as_generator(None), np.random.Generator)
