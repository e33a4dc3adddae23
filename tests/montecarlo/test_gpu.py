"""
Tests for the GPU resampling backends.

The GPU backend draws the same permutations as the CPU backend and
evaluates named two-sample statistics in batch, so its null
distribution must match the CPU one to the tolerance of its precision.
Arbitrary callables fall back to CPU.

Skipped if no GPU (CUDA or MPS) is available.
"""

import numpy as np
import pytest

from pyresampling.core.compute.tolerances import select_tolerance
from pyresampling.montecarlo import boot, null_distribution, permutation_test


def mean_stat(data, indices):
    """Bootstrap statistic: sample mean."""
    return np.array([np.mean(data[indices])])


class TestGPUPermutation:

    @pytest.mark.parametrize("statistic", ["mean_diff", "t", "t_pooled"])
    def test_matches_cpu(self, gpu_available, separated_samples, statistic):
        x, y = separated_samples
        cpu = permutation_test(x, y, statistic, R=500, seed=42, backend='cpu')
        gpu = permutation_test(x, y, statistic, R=500, seed=42, backend='gpu')

        assert "gpu" in gpu.backend_name
        assert "cpu_fallback" not in gpu.backend_name
        tol = select_tolerance(gpu.backend_name)
        np.testing.assert_allclose(gpu.null_stats, cpu.null_stats, rtol=tol.rtol, atol=tol.atol)
        assert gpu.observed_stat == cpu.observed_stat

    def test_stratified_matches_cpu(self, gpu_available, separated_samples):
        x, y = separated_samples
        strata = np.arange(len(x) + len(y)) % 3
        cpu = permutation_test(x, y, "t", R=200, strata=strata, seed=7, backend='cpu')
        gpu = permutation_test(x, y, "t", R=200, strata=strata, seed=7, backend='gpu')
        tol = select_tolerance(gpu.backend_name)
        np.testing.assert_allclose(gpu.null_stats, cpu.null_stats, rtol=tol.rtol, atol=tol.atol)

    def test_callable_falls_back(self, gpu_available, separated_samples):
        x, y = separated_samples

        def median_diff(a, b):
            return np.median(a) - np.median(b)

        cpu = permutation_test(x, y, median_diff, R=200, seed=42, backend='cpu')
        gpu = permutation_test(x, y, median_diff, R=200, seed=42, backend='gpu')
        assert gpu.backend_name.endswith("(cpu_fallback)")
        np.testing.assert_array_equal(gpu.null_stats, cpu.null_stats)

    def test_generic_collector_falls_back(self, gpu_available, rng):
        result = null_distribution(rng.normal(size=20), np.median, R=50, seed=1, backend='gpu')
        assert "cpu_fallback" in result.backend_name


class TestGPUBootstrap:

    def test_falls_back_with_same_replicates(self, gpu_available):
        data = np.arange(1.0, 21.0)
        cpu = boot(data, mean_stat, R=200, seed=42, backend='cpu')
        gpu = boot(data, mean_stat, R=200, seed=42, backend='gpu')
        assert "gpu" in gpu.backend_name
        np.testing.assert_array_equal(gpu.t, cpu.t)


class TestAutoBackend:

    def test_auto_always_runs(self, separated_samples):
        x, y = separated_samples
        result = permutation_test(x, y, "t", R=50, seed=1, backend='auto')
        assert result.null_stats.shape == (50,)
