import numpy as np
import pytest

from denselin.errors import InvalidDimensions, DimensionMismatch
from denselin.linalg import Matrix, COL_MAJOR, multiply, matmul


def test_multiply_known_product():
    # [[1, 2, 3],    [[ 7,  8],     [[ 58,  64],
    #  [4, 5, 6]]  @  [ 9, 10],  =   [139, 154]]
    #                 [11, 12]]
    a = [1, 2, 3, 4, 5, 6]
    b = [7, 8, 9, 10, 11, 12]
    c = multiply(a, b, 2, 3, 2)
    assert c.shape == (4,)
    assert np.array_equal(c, [58, 64, 139, 154])


@pytest.mark.parametrize("m, n, l", [(1, 1, 1), (3, 4, 2), (5, 2, 7), (1, 6, 1), (6, 1, 6)])
def test_multiply_matches_numpy(m, n, l):
    rng = np.random.default_rng(m * 100 + n * 10 + l)
    A = rng.standard_normal((m, n))
    B = rng.standard_normal((n, l))
    c = multiply(A.reshape(-1), B.reshape(-1), m, n, l)
    assert c.shape == (m * l,)
    assert np.allclose(c.reshape(m, l), A @ B, rtol=1e-12, atol=1e-12)


def test_multiply_by_identity_and_zeros():
    rng = np.random.default_rng(0)
    m, n = 4, 3
    a = rng.standard_normal(m * n)
    eye = np.eye(n).reshape(-1)
    assert np.allclose(multiply(a, eye, m, n, n), a)
    zeros = np.zeros(n * 5)
    assert np.array_equal(multiply(a, zeros, m, n, 5), np.zeros(m * 5))


def test_multiply_does_not_modify_inputs():
    a = np.array([1.0, 2.0, 3.0, 4.0])
    b = np.array([5.0, 6.0, 7.0, 8.0])
    multiply(a, b, 2, 2, 2)
    assert np.array_equal(a, [1, 2, 3, 4])
    assert np.array_equal(b, [5, 6, 7, 8])


@pytest.mark.parametrize("m, n, l", [(0, 2, 2), (2, 0, 2), (2, 2, -1)])
def test_multiply_non_positive_dimensions(m, n, l):
    with pytest.raises(InvalidDimensions):
        multiply(np.ones(4), np.ones(4), m, n, l)


def test_multiply_wrong_a_length():
    with pytest.raises(InvalidDimensions):
        multiply(np.ones(5), np.ones(4), 2, 2, 2)


def test_multiply_inner_dimension_mismatch():
    # B holds 3 rows of length 2 while A has 2 columns
    with pytest.raises(DimensionMismatch):
        multiply(np.ones(4), np.ones(6), 2, 2, 2)
    with pytest.raises(InvalidDimensions):
        multiply(np.ones(4), np.ones(5), 2, 2, 2)


def test_matmul_returns_row_major_matrix():
    A = Matrix.from_array([[1, 2], [3, 4], [5, 6]], layout=COL_MAJOR)
    B = [[1, 0, 2], [0, 1, 3]]
    C = matmul(A, B)
    assert isinstance(C, Matrix)
    assert C.layout == 'row'
    assert C.shape == (3, 3)
    assert np.array_equal(C.to_array(), np.array([[1, 2, 8], [3, 4, 18], [5, 6, 28]]))


def test_matmul_dimension_mismatch():
    A = Matrix.from_array(np.ones((2, 3)))
    B = Matrix.from_array(np.ones((2, 3)))
    with pytest.raises(DimensionMismatch):
        matmul(A, B)
