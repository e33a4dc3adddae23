"""
Tolerance tiers for numerical comparison.

The CPU path is the reference. The GPU path evaluates the same
permutations in batch, so its statistics must agree with the CPU ones
to within the tier for its precision.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision (reference)',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

# MPS and consumer GPUs run in single precision
GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='GPU single precision, statistically equivalent',
)


def select_tolerance(backend_name: str) -> ToleranceTier:
    """Select the tolerance tier for a backend identifier."""
    if 'gpu' in backend_name and 'cpu_fallback' not in backend_name:
        if 'mps' in backend_name:
            return GPU_FP32
        return GPU_FP64
    return CPU_FP64
