"""
Tests for the Result[P] envelope.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyresampling.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


class TestResult:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=42.0),
            info={"sim": "permutation"},
            timing={"total_seconds": 0.01},
            backend_name="cpu_resampling",
        )
        assert result.params.value == 42.0
        assert result.info["sim"] == "permutation"
        assert result.backend_name == "cpu_resampling"
        assert result.warnings == ()

    def test_frozen(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "gpu"

    def test_warnings_kept(self):
        result = Result(
            params=FakeParams(1.0),
            info={},
            timing=None,
            backend_name="cpu",
            warnings=("3 of 100 replicates produced a non-finite statistic",),
        )
        assert len(result.warnings) == 1
        assert "non-finite" in result.warnings[0]
