"""
Tests for bootstrap resampling.

Covers ordinary, balanced, stratified and parametric bootstrap, the
three stype conventions, seed reproducibility and validation.
"""

import numpy as np
import pytest

from pyresampling.montecarlo import boot


def mean_stat(data, indices):
    """Bootstrap statistic: sample mean."""
    return np.array([np.mean(data[indices])])


def mean_var_stat(data, indices):
    """Bootstrap statistic: mean and variance (2 statistics)."""
    d = data[indices]
    return np.array([np.mean(d), np.var(d, ddof=1)])


def slope_stat(data, indices):
    """Bootstrap statistic: intercept and slope of y on x."""
    d = data[indices]
    slope, intercept = np.polyfit(d[:, 0], d[:, 1], 1)
    return np.array([intercept, slope])


class TestOrdinaryBootstrap:

    def test_mean(self):
        data = np.arange(1.0, 11.0)
        result = boot(data, mean_stat, R=999, seed=42)

        assert result.t0[0] == pytest.approx(5.5, rel=1e-10)
        assert result.t.shape == (999, 1)
        assert result.R == 999
        assert abs(result.bias[0]) < 0.5
        # sd / sqrt(n) = 0.96 with the n-denominator variance
        assert 0.5 < result.se[0] < 1.5

    def test_default_R(self):
        result = boot(np.arange(5.0), mean_stat, seed=1)
        assert result.R == 999

    def test_bias_and_se_definitions(self):
        data = np.arange(1.0, 21.0)
        result = boot(data, mean_var_stat, R=300, seed=3)
        np.testing.assert_allclose(result.bias, result.t.mean(axis=0) - result.t0)
        np.testing.assert_allclose(result.se, result.t.std(axis=0, ddof=1))

    def test_regression_rows_resampled_together(self, rng):
        x = rng.uniform(0, 10, 50)
        y = 2.0 + 3.0 * x + rng.normal(0, 1, 50)
        result = boot(np.column_stack([x, y]), slope_stat, R=300, seed=42)
        assert result.t.shape == (300, 2)
        assert result.t0[1] == pytest.approx(3.0, abs=0.3)
        assert np.all(np.abs(result.t[:, 1] - 3.0) < 1.0)

    def test_replicates_use_input_values(self):
        data = np.array([1.0, 5.0, 9.0])

        def first_value(d, indices):
            return np.array([d[indices][0]])

        result = boot(data, first_value, R=100, seed=0)
        assert set(result.t[:, 0]).issubset({1.0, 5.0, 9.0})

    def test_seed_reproducibility(self):
        data = np.arange(1.0, 6.0)
        r1 = boot(data, mean_stat, R=100, seed=42)
        r2 = boot(data, mean_stat, R=100, seed=42)
        np.testing.assert_array_equal(r1.t, r2.t)
        np.testing.assert_array_equal(r1.se, r2.se)

    def test_single_observation(self):
        result = boot(np.array([5.0]), mean_stat, R=50, seed=42)
        np.testing.assert_allclose(result.t[:, 0], 5.0)
        assert result.se[0] == 0.0

    def test_single_replicate_se_nan(self):
        result = boot(np.arange(5.0), mean_stat, R=1, seed=0)
        assert np.isnan(result.se[0])


class TestBalancedBootstrap:

    def test_each_observation_used_R_times(self):
        data = np.arange(1.0, 6.0)
        R = 100
        counts = np.zeros(5, dtype=int)
        calls = 0

        def counting_stat(d, indices):
            nonlocal calls
            calls += 1
            if calls > 1:
                np.add.at(counts, indices, 1)
            return np.array([np.mean(d[indices])])

        boot(data, counting_stat, R=R, sim="balanced", seed=42)
        np.testing.assert_array_equal(counts, np.full(5, R))

    def test_mean_of_replicates_equals_t0(self):
        data = np.array([2.0, 3.0, 7.0, 11.0])
        result = boot(data, mean_stat, R=200, sim="balanced", seed=5)
        # every observation appears equally often overall
        assert result.bias[0] == pytest.approx(0.0, abs=1e-10)
        assert result.sim == "balanced"


class TestStratifiedBootstrap:

    def test_strata_sizes_preserved(self):
        data = np.array([1.0, 2.0, 3.0, 100.0, 200.0])
        strata = np.array([0, 0, 0, 1, 1])

        def composition(d, indices):
            sample = d[indices]
            return np.array([np.sum(sample < 50), np.sum(sample >= 50)], dtype=float)

        result = boot(data, composition, R=50, strata=strata, seed=42)
        np.testing.assert_array_equal(result.t[:, 0], 3.0)
        np.testing.assert_array_equal(result.t[:, 1], 2.0)

    def test_difference_of_means(self):
        data = np.array([1.0, 2.0, 3.0, 10.0, 20.0, 30.0])
        strata = np.array(["a", "a", "a", "b", "b", "b"])

        def diff_means(d, indices):
            sample = d[indices]
            return np.array([sample[3:].mean() - sample[:3].mean()])

        result = boot(data, diff_means, R=200, strata=strata, seed=1)
        assert result.t0[0] == pytest.approx(18.0)
        assert np.all(result.t[:, 0] >= 10.0 - 3.0)


class TestStype:

    def test_frequencies(self):
        data = np.arange(1.0, 6.0)

        def freq_mean(d, freqs):
            return np.array([np.sum(d * freqs) / np.sum(freqs)])

        result = boot(data, freq_mean, R=100, stype="f", seed=42)
        assert result.t0[0] == pytest.approx(3.0, rel=1e-10)
        assert result.info['stype'] == "f"

    def test_weights(self):
        data = np.arange(1.0, 6.0)

        def weighted_mean(d, weights):
            return np.array([np.sum(d * weights)])

        result = boot(data, weighted_mean, R=100, stype="w", seed=42)
        assert result.t0[0] == pytest.approx(3.0, rel=1e-10)

    def test_index_and_frequency_agree(self):
        data = np.arange(1.0, 8.0)

        def freq_mean(d, freqs):
            return np.array([np.sum(d * freqs) / np.sum(freqs)])

        r_i = boot(data, mean_stat, R=50, stype="i", seed=9)
        r_f = boot(data, freq_mean, R=50, stype="f", seed=9)
        np.testing.assert_allclose(r_i.t, r_f.t)


class TestParametricBootstrap:

    def test_normal_mean(self):
        data = np.random.default_rng(123).normal(5.0, 2.0, 30)
        mle = {"mean": np.mean(data), "std": np.std(data)}

        def ran_gen(d, params, rng):
            return rng.normal(params["mean"], params["std"], len(d))

        def param_mean(d):
            return np.array([np.mean(d)])

        result = boot(
            data, param_mean, R=500,
            sim="parametric", ran_gen=ran_gen, mle=mle, seed=42,
        )
        assert result.t0[0] == pytest.approx(np.mean(data), rel=1e-10)
        assert result.se[0] == pytest.approx(mle["std"] / np.sqrt(30), rel=0.2)


class TestBootstrapSolution:

    def test_summary(self):
        result = boot(np.arange(1.0, 6.0), mean_stat, R=100, seed=42)
        s = result.summary()
        assert "ORDINARY NONPARAMETRIC BOOTSTRAP" in s
        assert "t1*" in s
        assert "std. error" in s

    def test_repr(self):
        r = repr(boot(np.arange(3.0), mean_stat, R=100, seed=42))
        assert "BootstrapSolution" in r
        assert "R=100" in r
        assert "k=1" in r

    def test_backend_and_timing(self):
        result = boot(np.arange(3.0), mean_stat, R=10, seed=42)
        assert result.backend_name == "cpu_bootstrap"
        assert 'total_seconds' in result.timing
        assert 'bootstrap_replicates' in result.timing

    def test_plot(self):
        import matplotlib.pyplot as plt

        result = boot(np.arange(1.0, 21.0), mean_var_stat, R=100, seed=42)
        ax = result.plot(index=1)
        assert ax.get_xlabel() == "t2*"
        plt.close("all")


class TestBootstrapValidation:

    def test_R_must_be_positive(self):
        with pytest.raises(ValueError, match="R must be >= 1"):
            boot(np.arange(3.0), mean_stat, R=0)

    def test_invalid_sim(self):
        with pytest.raises(ValueError, match="sim must be"):
            boot(np.arange(3.0), mean_stat, R=10, sim="invalid")

    def test_invalid_stype(self):
        with pytest.raises(ValueError, match="stype must be"):
            boot(np.arange(3.0), mean_stat, R=10, stype="x")

    def test_empty_data(self):
        with pytest.raises(ValueError):
            boot(np.array([]), mean_stat, R=10)

    def test_strata_length_mismatch(self):
        with pytest.raises(ValueError, match="strata length"):
            boot(np.arange(3.0), mean_stat, R=10, strata=np.array([0, 1]))

    def test_parametric_requires_ran_gen(self):
        with pytest.raises(ValueError, match="ran_gen is required"):
            boot(np.arange(3.0), mean_stat, R=10, sim="parametric")

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            boot(np.arange(3.0), mean_stat, R=10, backend="tpu")
