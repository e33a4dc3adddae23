"""
Core infrastructure for PyResampling.

Shared abstractions used by the resampling, statistics, montecarlo and
inference submodules.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, device detection, QR kernels
"""

from pyresampling.core.protocols import Backend
from pyresampling.core.result import Result
from pyresampling.core.exceptions import (
    PyResamplingError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyResamplingError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
]
