import logging
import numpy as np
from scipy.linalg import qr as scipy_qr
from scipy.linalg import lapack
from ..errors import InvalidArgument, InvalidDimensions, SingularSystem, RankDeficient
from ..params import defaults
from .gemm import multiply
from .layout import check_shape, as_buffer, to_column_major

logger = logging.getLogger(__name__)


def _check_design(X, y):
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64).reshape(-1)
    if X.ndim != 2:
        raise InvalidDimensions(f"Design matrix must be 2-D, got {X.ndim} dimensions.")
    check_shape(*X.shape)
    if X.shape[0] != y.shape[0]:
        raise InvalidDimensions("X and y must have the same number of samples.")
    return X, y


def _equilibrate(G):
    """
    Row scales r and column scales c such that r[:, None] * G * c has
    unit max-norm rows and columns. (None, None) when G has a zero row
    or column.
    """
    row_max = np.max(np.abs(G), axis=1)
    if np.any(row_max == 0):
        return None, None
    r = 1.0 / row_max
    col_max = np.max(np.abs(r[:, None] * G), axis=0)
    if np.any(col_max == 0):
        return None, None
    return r, 1.0 / col_max


def _column_norms(X):
    """2-norm of each column; zero columns get 1 so they stay zero."""
    norms = np.linalg.norm(X, axis=0)
    norms[norms == 0] = 1.0
    return norms


def lu_solve(G, v, pivot_tol=None):
    """
    Solve the square system G @ x = v by LU factorization with partial pivoting.

    Parameters
    ----------
    G : ndarray, shape (n, n)
    v : ndarray, shape (n,)
    pivot_tol : float, optional
        A pivot with |u_ii| <= pivot_tol counts as a breakdown. Rows and
        columns of G are scaled to unit max-norm first, so the test does
        not depend on the units of G.
        Defaults to `params.defaults['pivot_tol']`.

    Returns
    -------
    x : ndarray, shape (n,)

    Raises
    ------
    SingularSystem
        LAPACK reported an exactly zero pivot or a pivot fell below tolerance.
    """
    pivot_tol = defaults.resolve('pivot_tol', pivot_tol)
    G = np.asarray(G, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    if G.ndim != 2 or G.shape[0] != G.shape[1]:
        raise InvalidDimensions(f"System matrix must be square, got shape {G.shape}.")
    check_shape(G.shape[0])
    if v.shape[0] != G.shape[0]:
        raise InvalidDimensions("Right-hand side length does not match the system size.")

    r, c = _equilibrate(G)
    if r is None:
        logger.warning("lu_solve: G has an all-zero row or column")
        raise SingularSystem(
            "Singular system: LU pivot breakdown; sample x-values may be collinear or repeated."
        )
    Gs = r[:, None] * G * c[None, :]
    lu, piv, z, info = lapack.dgesv(Gs, (r * v).reshape(-1, 1))
    if info < 0:
        raise InvalidArgument(f"dgesv: illegal value in argument {-info}")
    pivots = np.abs(np.diag(lu))
    if info > 0 or pivots.min() <= pivot_tol:
        logger.warning("lu_solve: pivot breakdown (info=%d, min scaled pivot=%.3e)",
                       info, pivots.min())
        raise SingularSystem(
            "Singular system: LU pivot breakdown; sample x-values may be collinear or repeated."
        )
    logger.debug("lu_solve: n=%d, min scaled pivot=%.3e", G.shape[0], pivots.min())
    return c * z.reshape(-1)


def solve_normal_equation(X, y, pivot_tol=None):
    """
    Solve OLS via the normal equation (X^T X) beta = X^T y.

    The Gram matrix and right-hand side are formed with the dense
    multiplier; X^T read row-major is X read column-major, so no explicit
    transpose is needed.

    Returns
    -------
    beta : ndarray, shape (n_features,)
    """
    X, y = _check_design(X, y)
    m, n = X.shape
    a = X.reshape(-1)
    at = to_column_major(a, m, n)
    G = multiply(at, a, n, m, n).reshape(n, n)
    v = multiply(at, y, n, m, 1)
    logger.debug("solve_normal_equation: m=%d, n=%d", m, n)
    return lu_solve(G, v, pivot_tol=pivot_tol)


def column_rank(X, tol=None):
    """
    Numerical column rank of X from QR decomposition with column pivoting.

    Parameters
    ----------
    X : np.ndarray, shape (n_samples, n_features)
        Design matrix.
    tol : float
        Relative tolerance; a diagonal entry of R counts when
        |R_kk| > tol * |R_00|. Defaults to `params.defaults['rank_tol']`.

    Columns are scaled to unit 2-norm before factorizing, so the rank
    does not depend on the units of each column.
    """
    tol = defaults.resolve('rank_tol', tol)
    X = np.asarray(X, dtype=np.float64)
    X = X / _column_norms(X)
    _, R, _ = scipy_qr(X, mode='economic', pivoting=True)
    diag_R = np.abs(np.diag(R))
    if diag_R.size == 0 or diag_R[0] == 0:
        return 0
    return int(np.sum(diag_R > tol * diag_R[0]))


def solve_least_squares_inplace(a, b, m, n, rank_tol=None):
    """
    Solve min ||A x - b||_2 with a QR factorization (LAPACK dgels), in place.

    Parameters
    ----------
    a : array_like, shape (m * n,)
        Row-major design matrix A (m x n). Not modified.
    b : ndarray of float64, shape (ldb,), ldb >= max(m, n)
        Holds the observations in b[:m] on entry. Overwritten on success:
        b[:n] holds the solution and, when m > n, b[n:m] holds the
        components of Q^T b orthogonal to the column space of A.
    m, n : int
    rank_tol : float, optional
        Relative tolerance passed to `column_rank`.

    Returns
    -------
    b : ndarray
        The same buffer that was passed in.

    Raises
    ------
    InvalidArgument
        `b` is not a writable float64 buffer large enough for max(m, n).
    RankDeficient
        A does not have full column rank.
    """
    check_shape(m, n)
    a = as_buffer(a, m, n)
    ldb = max(m, n)
    if not isinstance(b, np.ndarray) or b.dtype != np.float64 or b.ndim != 1:
        raise InvalidArgument("b must be a 1-D float64 ndarray.")
    if b.shape[0] < ldb:
        raise InvalidArgument(f"b must hold at least max(m, n) = {ldb} values, got {b.shape[0]}.")
    if not b.flags.writeable:
        raise InvalidArgument("b must be writable.")

    A = a.reshape(m, n)
    d = _column_norms(A)
    rank = column_rank(A, tol=rank_tol)
    if rank < n:
        logger.warning("solve_least_squares: rank %d < %d columns", rank, n)
        raise RankDeficient(f"Design matrix has rank {rank}, expected full column rank {n}.")

    rhs = np.array(b[:ldb], dtype=np.float64).reshape(-1, 1)
    rhs[m:] = 0.0
    # solve for z = D theta on unit-norm columns; the residual is unchanged
    _, x, info = lapack.dgels(np.asfortranarray(A / d), rhs)
    if info < 0:
        raise InvalidArgument(f"dgels: illegal value in argument {-info}")
    if info > 0:
        logger.warning("solve_least_squares: dgels reported a zero diagonal of R (info=%d)", info)
        raise RankDeficient(f"Design matrix is rank deficient (dgels info={info}).")

    b[:ldb] = x.reshape(-1)
    b[:n] /= d
    logger.debug("solve_least_squares: m=%d, n=%d, rank=%d", m, n, rank)
    return b


def solve_least_squares(X, y, rank_tol=None):
    """
    Solve linear least squares directly from the design matrix, without
    forming X^T X.

    Returns
    -------
    beta : ndarray, shape (n_features,)
    """
    X, y = _check_design(X, y)
    m, n = X.shape
    b = np.zeros(max(m, n), dtype=np.float64)
    b[:m] = y
    solve_least_squares_inplace(X.reshape(-1), b, m, n, rank_tol=rank_tol)
    return b[:n].copy()


def packed_residual_sse(b, m, n):
    """
    Sum of squared residuals read from a buffer solved by
    `solve_least_squares_inplace`. Zero when m <= n.
    """
    b = np.asarray(b, dtype=np.float64)
    if m <= n:
        return 0.0
    return float(np.sum(b[n:m] ** 2))
