"""
Core protocols for PyResampling.

Structural interfaces that backends must satisfy. Protocol (structural
typing) is used rather than ABC so CPU and GPU backends need no common
base class.
"""

from typing import Protocol, TypeVar, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a frozen design and produces a Result envelope.
    Backends are stateless: all configuration is passed via the design
    or at construction time.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_resampling', 'cpu_bootstrap', 'gpu_cuda_resampling'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the resampling computation.

        Args:
            design: Validated, frozen design

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            ValidationError: If design is invalid for this backend
        """
        ...
