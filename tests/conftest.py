"""
pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def separated_samples(rng):
    """Two normal samples with a clear mean shift."""
    x = rng.normal(0.0, 1.0, 30)
    y = rng.normal(2.0, 1.0, 25)
    return x, y


@pytest.fixture
def gpu_available():
    """Skip if no GPU is available."""
    try:
        import torch
    except ImportError:
        pytest.skip("PyTorch not installed")
    has_cuda = torch.cuda.is_available()
    has_mps = hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
    if not (has_cuda or has_mps):
        pytest.skip("No GPU available")
    return 'cuda' if has_cuda else 'mps'


@pytest.fixture
def simple_regression_data(rng):
    """Simple regression dataset for basic tests."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y
