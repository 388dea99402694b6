import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from ..errors import InvalidArgument
from ..params import defaults
from .metrics.regression import RegressionMetrics


def _pad(values, n_rows):
    out = np.full(n_rows, np.nan)
    out[:len(values)] = values
    return out


class FitEvaluator:
    """
    Evaluator class for fitted polynomial models.
    Computes fit metrics, prediction grids and diagnostic plots.
    """

    def __init__(self, estimator):
        self.estimator = estimator

        # Check if estimator has fitted predictions
        if getattr(estimator, 'y_pred_', None) is None:
            raise AttributeError("Estimator must have fitted predictions (y_pred_) after calling fit().")
        self.x = estimator.x_
        self.y_true = estimator.y_
        self.y_pred = estimator.y_pred_

    def evaluate(self):
        """
        Evaluate the model and return a dictionary of metrics.
        """
        return {
            'sse': RegressionMetrics.sse(self.y_true, self.y_pred),
            'mse': RegressionMetrics.mse(self.y_true, self.y_pred),
            'rmse': RegressionMetrics.rmse(self.y_true, self.y_pred),
            'r2': RegressionMetrics.r2(self.y_true, self.y_pred),
        }

    def curve(self, n_grid=None, x_min=None, x_max=None):
        """
        Plotting data: the samples next to predictions of the fitted model
        over an even grid. The shorter pair of columns is padded with NaN.

        Parameters
        ----------
        n_grid : int, optional
            Number of grid points, at least 2. Defaults to `params.defaults['n_grid']`.
        x_min, x_max : float, optional
            Grid bounds; default to the sample range.

        Returns
        -------
        pandas.DataFrame with columns x_pts, y_pts, x_fit, y_fit.
        """
        n_grid = defaults.resolve('n_grid', n_grid)
        if n_grid < 2:
            raise InvalidArgument(f"n_grid must be at least 2, got {n_grid}.")
        x_min = np.min(self.x) if x_min is None else x_min
        x_max = np.max(self.x) if x_max is None else x_max
        x_fit = np.linspace(x_min, x_max, n_grid)
        n_rows = max(n_grid, self.x.shape[0])
        return pd.DataFrame({
            'x_pts': _pad(self.x, n_rows),
            'y_pts': _pad(self.y_true, n_rows),
            'x_fit': _pad(x_fit, n_rows),
            'y_fit': _pad(self.estimator.predict(x_fit), n_rows),
        })

    def plot_fit(self, n_grid=None, ax=None, show=False):
        """
        Plot the samples and the fitted curve.

        Returns
        -------
        matplotlib.axes.Axes
        """
        if ax is None:
            _, ax = plt.subplots(figsize=(6, 4))
        grid = self.curve(n_grid)[['x_fit', 'y_fit']].dropna()
        ax.plot(self.x, self.y_true, 'o', label='Data')
        ax.plot(grid['x_fit'], grid['y_fit'], '-', label='Fit')
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_title(f"Least-squares fit (degree {self.estimator.degree})")
        ax.legend()
        ax.grid(True)
        if show:
            plt.show()
        return ax

    def plot_residuals(self, method="hist", bins=10, ax=None, show=False):
        """
        Plot residuals after fitting.

        Parameters
        ----------
        method : str
            "hist" for histogram, "scatter" for residual vs predicted scatter plot.
        bins : int
            Number of bins for histogram.
        """
        residuals = RegressionMetrics.residuals(self.y_true, self.y_pred)
        if method not in ("hist", "scatter"):
            raise ValueError("method must be 'hist' or 'scatter'")
        if ax is None:
            _, ax = plt.subplots(figsize=(6, 4))

        if method == "hist":
            ax.hist(residuals, bins=bins, edgecolor='k')
            ax.set_title("Residuals Histogram")
            ax.set_xlabel("Residual")
            ax.set_ylabel("Frequency")
        else:
            ax.scatter(self.y_pred, residuals, alpha=0.5)
            ax.set_title("Residuals vs Predicted")
            ax.set_xlabel("Predicted")
            ax.set_ylabel("Residual")
            ax.axhline(0, color='red', linestyle='--')

        ax.grid(True)
        if show:
            plt.show()
        return ax
