import logging
from dataclasses import dataclass
import numpy as np
import pandas as pd
from ..base import BaseEstimator
from ..design import design_matrix
from ..samples import SampleSet
from ..metrics.regression import RegressionMetrics
from ...errors import InvalidArgument
from ...linalg.algebra import solve_normal_equation, solve_least_squares

logger = logging.getLogger(__name__)

METHODS = ('normal', 'qr')


def predict(theta, x):
    """
    Evaluate the polynomial with coefficients `theta` (highest power first)
    at `x` using Horner's scheme. Scalars in, scalar out.
    """
    theta = np.asarray(theta, dtype=np.float64).reshape(-1)
    x_arr = np.asarray(x, dtype=np.float64)
    y = np.zeros_like(x_arr)
    for c in theta:
        y = y * x_arr + c
    if x_arr.ndim == 0:
        return float(y)
    return y


class PolynomialFit(BaseEstimator):
    """
    Least-squares polynomial fit y ≈ θ_0 x^d + ... + θ_{d-1} x + θ_d.

    Supports 'normal' (normal equation + LU) or 'qr' (direct QR
    least squares) solving methods. With method=None the 2-parameter
    linear model uses 'normal' and every other degree uses 'qr'.
    """
    def __init__(self, degree=1, method=None, pivot_tol=None, rank_tol=None):
        super().__init__(degree=degree, method=method, pivot_tol=pivot_tol, rank_tol=rank_tol)
        self.column_names = None

        # regression coefficients
        self.coef_ = None
        self.method_ = None

        # data
        self.x_ = None
        self.y_ = None
        self.y_pred_ = None
        self.resid_ = None

        # statistics
        self.sse_ = None
        self.mse_ = None
        self.statistics_ = None

    def _resolve_method(self):
        method = self.method
        if method is None:
            method = 'normal' if self.degree == 1 else 'qr'
        if method not in METHODS:
            raise InvalidArgument(f"method must be one of {METHODS}, got {method!r}")
        return method

    def fit(self, x, y):
        """
        Fit the polynomial model to the samples (x, y).
        """
        x, y = self._check_xy(x, y)
        method = self._resolve_method()
        X = design_matrix(x, self.degree)
        column_names = tuple(X.columns)
        X = X.to_numpy(dtype=np.float64)

        # solve for theta; raises before any fitted state is touched
        if method == 'normal':
            theta = solve_normal_equation(X, y, pivot_tol=self.pivot_tol)
        else:
            theta = solve_least_squares(X, y, rank_tol=self.rank_tol)

        self.column_names = column_names
        self.method_ = method
        self.coef_ = theta
        self.x_ = x
        self.y_ = y

        # fitted values & residual, always recomputed from theta
        self.y_pred_ = predict(theta, x)
        self.resid_ = RegressionMetrics.residuals(y, self.y_pred_)
        self.sse_ = float(np.sum(self.resid_ ** 2))
        self.mse_ = self.sse_ / x.shape[0]
        self.statistics_ = RegressionMetrics.statistics(X, y, self.y_pred_, theta)
        logger.info("%s fit (degree=%d, m=%d): coef=%s, SSE=%.6g, MSE=%.6g",
                    method, self.degree, x.shape[0], np.array2string(theta), self.sse_, self.mse_)
        return self

    def _check_fitted(self):
        if self.coef_ is None:
            raise ValueError("Model has not been fitted yet.")

    def predict(self, x=None):
        """
        Predict using the fitted model.

        If x is None, return fitted predictions.
        If x is given, predict for new data.
        """
        self._check_fitted()
        if x is None:
            return self.y_pred_
        return predict(self.coef_, x)

    @property
    def resid(self):
        """
        Return residuals (y_hat - y).
        """
        self._check_fitted()
        return self.resid_

    @property
    def intercept_(self):
        self._check_fitted()
        return float(self.coef_[-1])

    def summary(self):
        """
        Per-sample table of the fit.

        Returns
        -------
        pandas.DataFrame with columns x, y, y_hat, err.
        """
        self._check_fitted()
        return pd.DataFrame({
            'x': self.x_,
            'y': self.y_,
            'y_hat': self.y_pred_,
            'err': self.resid_,
        })

    def coefficients(self):
        """Coefficients indexed by design column name."""
        self._check_fitted()
        return pd.Series(self.coef_, index=list(self.column_names), name='coef')


@dataclass(frozen=True, eq=False)
class FitResult:
    theta: np.ndarray
    table: pd.DataFrame
    sse: float
    mse: float
    method: str

    def predict(self, x):
        return predict(self.theta, x)


def fit_polynomial(samples, n_params=2, method=None):
    """
    Fit a linear (n_params=2) or quadratic (n_params=3) model to samples.

    Parameters
    ----------
    samples : SampleSet or iterable of (x, y) pairs
    n_params : {2, 3}
    method : {'normal', 'qr'}, optional
        Defaults to 'normal' for the linear model and 'qr' for the quadratic.

    Returns
    -------
    FitResult
    """
    if n_params not in (2, 3):
        raise InvalidArgument(f"n_params must be 2 or 3, got {n_params!r}")
    if not isinstance(samples, SampleSet):
        samples = SampleSet.from_pairs(samples)
    model = PolynomialFit(degree=n_params - 1, method=method).fit(samples.x, samples.y)
    return FitResult(theta=model.coef_.copy(), table=model.summary(),
                     sse=model.sse_, mse=model.mse_, method=model.method_)
