"""
Generic result container for all PyResampling computations.

Every backend returns a Result envelope so timing, warnings and
metadata are handled the same way for permutation tests, bootstraps
and Monte Carlo runs, while each domain defines its own payload.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (sim type, n, strata count)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for resampling computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (null distribution, replicates, ...)
        info: Structured metadata (sim type, sample sizes, statistic name)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=NullParams(observed_stat=-4.7, null_stats=stats, ...),
        ...     info={'sim': 'permutation', 'n': 180},
        ...     timing={'total_seconds': 0.2, 'replicates': 0.19},
        ...     backend_name='cpu_resampling'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
