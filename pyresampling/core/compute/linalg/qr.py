"""
QR decomposition for least squares.

Used by the R² evaluator: the design matrix is fixed across
permutations of the response, so its factorization is computed once
and reused for every replicate.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pyresampling.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (n x k where k = min(n, p) for reduced mode)
        R: Upper triangular matrix (k x p)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int

    def check_full_rank(self, name: str = 'X') -> None:
        """Raise SingularMatrixError unless the factored matrix has full column rank."""
        p = self.R.shape[1]
        if self.rank < p:
            raise SingularMatrixError(
                f"Design matrix is rank-deficient: rank={self.rank}, expected={p}. "
                f"This indicates perfect multicollinearity.",
                matrix_name=name,
                rank=self.rank,
                expected_rank=p
            )

    def solve(self, y: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Least squares coefficients for response y: β = R⁻¹ Q'y."""
        p = self.R.shape[1]
        Qty = self.Q.T @ y
        return solve_triangular(self.R[:p, :p], Qty[:p], lower=False)


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK (via NumPy).

    Args:
        X: Matrix to decompose (n x p)
        mode: 'reduced' for economy QR, 'complete' for full QR

    Returns:
        QRResult with Q, R, and numerical rank
    """
    Q, R = np.linalg.qr(X, mode=mode)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        tol = max(X.shape) * np.finfo(X.dtype).eps * diag_R.max()
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, rank=rank)
