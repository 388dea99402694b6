import logging
from dataclasses import dataclass
import numpy as np
from scipy.linalg import lapack
from ..errors import InvalidArgument, InvalidDimensions, ConvergenceFailure
from .gemm import multiply
from .layout import check_shape, as_buffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SVDResult:
    s: np.ndarray              # (n,) descending
    u: np.ndarray              # (n * n,) row-major
    vt: np.ndarray             # (n * n,) row-major
    reconstructed: np.ndarray  # (n * n,) row-major U diag(S) Vt
    max_err: float

    @property
    def n(self):
        return self.s.shape[0]


def svd(a, rows, cols=None):
    """
    Full singular value decomposition of a square row-major matrix.

    Parameters
    ----------
    a : array_like, shape (rows * cols,)
        Row-major buffer.
    rows, cols : int
        Shape of A. `cols` defaults to `rows`; only square input is accepted.

    Returns
    -------
    u : ndarray, shape (n * n,)
        Row-major U, orthogonal.
    s : ndarray, shape (n,)
        Singular values, non-negative and descending.
    vt : ndarray, shape (n * n,)
        Row-major V^T, orthogonal.

    Raises
    ------
    InvalidDimensions
        A is not square or the buffer length does not match.
    ConvergenceFailure
        The bidiagonal QR iteration of dgesvd did not converge.
    """
    cols = rows if cols is None else cols
    check_shape(rows, cols)
    if rows != cols:
        raise InvalidDimensions(f"SVD expects a square matrix, got {rows}x{cols}.")
    n = rows
    A = as_buffer(a, n, n).reshape(n, n)
    if not np.isfinite(A).all():
        raise InvalidArgument("Input matrix contains NaN or Inf.")

    u, s, vt, info = lapack.dgesvd(A, compute_uv=1, full_matrices=1)
    if info < 0:
        raise InvalidArgument(f"dgesvd: illegal value in argument {-info}")
    if info > 0:
        logger.warning("svd: %d superdiagonals did not converge", info)
        raise ConvergenceFailure(f"SVD did not converge ({info} superdiagonals left).")
    logger.debug("svd: n=%d, s=%s", n, s)
    return np.asarray(u).reshape(-1), np.asarray(s), np.asarray(vt).reshape(-1)


def reconstruct(u, s, vt, n):
    """
    A_hat = U @ diag(S) @ V^T as two chained dense products.
    """
    check_shape(n)
    sigma = np.diag(as_buffer(s, n, 1)).reshape(-1)
    us = multiply(u, sigma, n, n, n)
    return multiply(us, vt, n, n, n)


def max_abs_error(a, b):
    """
    Largest element-wise |a - b| between two buffers of equal length.
    """
    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    if a.shape != b.shape:
        raise InvalidDimensions(f"Cannot compare buffers of length {a.size} and {b.size}.")
    return float(np.max(np.abs(a - b)))


def decompose(a, n):
    """
    Factor a row-major n x n matrix and measure how well the factors
    reproduce it.

    Returns
    -------
    SVDResult
    """
    a = as_buffer(a, n, n)
    u, s, vt = svd(a, n)
    a_hat = reconstruct(u, s, vt, n)
    max_err = max_abs_error(a_hat, a)
    logger.info("svd: n=%d, max reconstruction error=%.3e", n, max_err)
    return SVDResult(s=s, u=u, vt=vt, reconstructed=a_hat, max_err=max_err)
