"""
Tests for the PyResampling exception hierarchy.

Validates:
    - Every exception is catchable via PyResamplingError
    - ValidationError doubles as ValueError
    - Diagnostic attributes on SingularMatrixError
"""

import pytest

from pyresampling.core.exceptions import (
    DimensionError,
    NumericalError,
    PyResamplingError,
    SingularMatrixError,
    ValidationError,
)


class TestInheritance:
    """Every exception is catchable via PyResamplingError."""

    def test_validation_error_is_base_error(self):
        with pytest.raises(PyResamplingError):
            raise ValidationError("bad input")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_numerical_error_is_not_value_error(self):
        assert not issubclass(NumericalError, ValueError)


class TestSingularMatrixError:

    def test_attributes(self):
        err = SingularMatrixError("X is singular", matrix_name="X", rank=2, expected_rank=3)
        assert err.matrix_name == "X"
        assert err.rank == 2
        assert err.expected_rank == 3
        assert str(err) == "X is singular"

    def test_defaults_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.rank is None
        assert err.expected_rank is None
