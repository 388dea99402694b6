import logging
import numpy as np
from scipy.linalg.blas import dgemm
from ..errors import InvalidDimensions, DimensionMismatch
from .layout import Matrix, ROW_MAJOR, check_shape, as_buffer, to_column_major, to_row_major

logger = logging.getLogger(__name__)


def _gemm_col_major(a, b, m, n, l):
    """
    C = A @ B on column-major buffers, returned column-major.
    """
    A = a.reshape((m, n), order='F')
    B = b.reshape((n, l), order='F')
    C = dgemm(1.0, A, B)
    return np.asarray(C).flatten(order='F')


def multiply(a, b, m, n, l):
    """
    General matrix product C = A @ B on flat row-major buffers.

    Parameters
    ----------
    a : array_like, shape (m * n,)
        Row-major buffer of A (m x n).
    b : array_like, shape (n * l,)
        Row-major buffer of B (n x l).
    m, n, l : int
        Shape parameters, all positive.

    Returns
    -------
    c : ndarray, shape (m * l,)
        Newly allocated row-major buffer of C (m x l).

    Raises
    ------
    InvalidDimensions
        Non-positive shape parameter or a buffer of the wrong length.
    DimensionMismatch
        B holds a whole number of rows of length l, but not n of them.
    """
    check_shape(m, n, l)
    a = as_buffer(a, m, n)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    if b.size != n * l:
        if b.size and b.size % l == 0:
            raise DimensionMismatch(
                f"A has {n} columns but B has {b.size // l} rows."
            )
        raise InvalidDimensions(f"Buffer of length {b.size} does not hold a {n}x{l} matrix.")

    logger.debug("gemm: (%d x %d) @ (%d x %d)", m, n, n, l)
    # BLAS works column-major; callers only ever see row-major buffers.
    c = _gemm_col_major(to_column_major(a, m, n), to_column_major(b, n, l), m, n, l)
    return to_row_major(c, m, l)


def matmul(A, B):
    """
    Multiply two matrices given as `Matrix` objects or 2-D array_likes.
    The result is a row-major `Matrix` whatever the operand layouts are.
    """
    A = A if isinstance(A, Matrix) else Matrix.from_array(A)
    B = B if isinstance(B, Matrix) else Matrix.from_array(B)
    if A.cols != B.rows:
        raise DimensionMismatch(
            f"Cannot multiply {A.rows}x{A.cols} by {B.rows}x{B.cols}: inner dimensions differ."
        )
    a = A.as_layout(ROW_MAJOR).data
    b = B.as_layout(ROW_MAJOR).data
    c = multiply(a, b, A.rows, A.cols, B.cols)
    return Matrix(c, A.rows, B.cols, ROW_MAJOR)


__all__ = ['multiply', 'matmul']
