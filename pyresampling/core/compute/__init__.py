"""
Shared compute infrastructure for PyResampling.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    tolerances: Precision tiers for CPU and GPU paths
    linalg: QR kernels for the OLS evaluator
"""

from pyresampling.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pyresampling.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
