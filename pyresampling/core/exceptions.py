"""
Exception hierarchy for PyResampling.

All exceptions inherit from PyResamplingError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Degenerate statistics are NOT errors: they evaluate to NaN
"""


class PyResamplingError(Exception):
    """Base exception for all PyResampling errors."""
    pass


class ValidationError(PyResamplingError, ValueError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks. Also a
    ValueError so callers may catch the builtin.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, or when a
    strata/group vector does not line up with the data.
    """
    pass


class NumericalError(PyResamplingError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when the OLS design matrix used by the R² evaluator is
    rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of columns)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
