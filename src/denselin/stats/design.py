import numpy as np
from patsy import dmatrix
from ..errors import InvalidArgument

INTERCEPT = 'Intercept'


def polynomial_formula(degree):
    'this function builds the right-hand side of a polynomial model, highest power first'
    if degree < 1:
        raise InvalidArgument(f"Polynomial degree must be at least 1, got {degree}.")
    terms = [f'I(x ** {p})' for p in range(degree, 1, -1)]
    terms.append('x')
    return ' + '.join(terms)


def design_matrix(x, degree):
    """
    Design matrix of a polynomial model of the given degree.

    Column j holds x ** (degree - j); the last column is the constant 1.

    Parameters
    ----------
    x : array_like, shape (n_samples,)
    degree : int

    Returns
    -------
    pandas.DataFrame, shape (n_samples, degree + 1)
        Columns named after the patsy terms, e.g. ('I(x ** 2)', 'x', 'Intercept').
    """
    x = np.asarray(x, dtype=np.float64).reshape(-1)
    X = dmatrix(polynomial_formula(degree), {'x': x}, return_type='dataframe')
    # patsy puts the intercept first
    columns = [c for c in X.columns if c != INTERCEPT] + [INTERCEPT]
    return X[columns]
