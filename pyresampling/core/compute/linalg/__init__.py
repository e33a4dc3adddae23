"""
Linear algebra kernels for PyResampling.

CPU functions use NumPy/SciPy (LAPACK under the hood) and return
structured result dataclasses.
"""

from pyresampling.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
)

__all__ = [
    "QRResult",
    "qr_cpu",
]
