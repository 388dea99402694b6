import numpy as np
from scipy.stats import t


def _safe_divide(numerator, denominator):
    """
    Elementwise division, but where denominator==0, yield NaN.
    """
    numerator = np.asarray(numerator, dtype=np.float64)
    denominator = np.asarray(denominator, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.divide(
            numerator,
            denominator,
            out=np.full(np.broadcast(numerator, denominator).shape, np.nan),
            where=(denominator != 0)
        )


class RegressionMetrics:
    """
    Standard regression metrics and statistics for a fitted polynomial model.

    Residuals follow the convention err = y_pred - y_true.
    """

    @staticmethod
    def residuals(y_true, y_pred):
        return np.asarray(y_pred, dtype=np.float64) - np.asarray(y_true, dtype=np.float64)

    @staticmethod
    def sse(y_true, y_pred):
        """
        Sum of Squared Errors
        """
        return float(np.sum(RegressionMetrics.residuals(y_true, y_pred) ** 2))

    @staticmethod
    def mse(y_true, y_pred):
        """
        Mean Squared Error (SSE / n_samples)
        """
        return RegressionMetrics.sse(y_true, y_pred) / np.asarray(y_true).shape[0]

    @staticmethod
    def rmse(y_true, y_pred):
        """
        Root Mean Squared Error
        """
        return float(np.sqrt(RegressionMetrics.mse(y_true, y_pred)))

    @staticmethod
    def r2(y_true, y_pred):
        """
        Coefficient of Determination (R²); NaN when y is constant.
        """
        y_true = np.asarray(y_true, dtype=np.float64)
        ss_res = RegressionMetrics.sse(y_true, y_pred)
        ss_tot = np.sum((y_true - np.mean(y_true)) ** 2)
        return float(1 - _safe_divide(ss_res, ss_tot))

    @staticmethod
    def adjusted_r2(y_true, y_pred, n_features):
        """
        Adjusted R², n_features counting the intercept column.
        """
        n_samples = np.asarray(y_true).shape[0]
        r2 = RegressionMetrics.r2(y_true, y_pred)
        return float(1 - _safe_divide((1 - r2) * (n_samples - 1), n_samples - n_features))

    @staticmethod
    def _compute_standard_error(XtX_inv, residual_variance):
        """
        Standard error of each coefficient from the diagonal of (X'X)^-1.
        """
        return np.sqrt(np.diag(XtX_inv) * residual_variance)

    @staticmethod
    def _compute_tvals_pvals(beta, se, df_err):
        """
        Compute t-values and two-sided p-values for coefficients
        """
        tvals = _safe_divide(beta, se)
        if df_err <= 0:
            return tvals, np.full_like(tvals, np.nan)
        pvals = 2 * t.sf(np.abs(tvals), df_err)
        return tvals, pvals

    @staticmethod
    def _compute_confidence_interval(beta, se, df_err, alpha=0.05):
        """
        Compute confidence intervals for coefficients
        """
        if df_err <= 0:
            nan = np.full_like(beta, np.nan)
            return nan, nan.copy()
        crit_t = t.ppf(1 - alpha / 2, df_err)
        return beta - crit_t * se, beta + crit_t * se

    @staticmethod
    def statistics(X, y_true, y_pred, beta, alpha=0.05):
        """
        Compute regression statistics of a fitted model.

        Parameters
        ----------
        X : ndarray, shape (n_samples, n_features)
            Design matrix used for fitting.
        y_true : ndarray, shape (n_samples,)
            Observed responses.
        y_pred : ndarray, shape (n_samples,)
            Predicted responses from the model.
        beta : ndarray, shape (n_features,)
            Estimated coefficients.
        alpha : float, optional
            Significance level for confidence intervals.

        Returns
        -------
        stats : dict
            - **sse**, **mse**, **rmse** : float
            - **r2**, **r2_adj** : float
            - **residual_variance** : float
              SSE / (n_samples - rank(X)); NaN without residual dof.
            - **se**, **tvals**, **pvals** : ndarray, shape (n_features,)
            - **ci_lower**, **ci_upper** : ndarray, shape (n_features,)
              Bounds of the (1 - alpha) confidence intervals.
            - **dof** : dict with **model** (rank of X) and **error** (int)
        """
        X = np.asarray(X, dtype=np.float64)
        beta = np.asarray(beta, dtype=np.float64)
        n_samples = X.shape[0]
        rank = int(np.linalg.matrix_rank(X))
        df_err = n_samples - rank

        sse = RegressionMetrics.sse(y_true, y_pred)
        residual_variance = float(_safe_divide(sse, df_err)) if df_err > 0 else np.nan

        XtX = X.T @ X
        try:
            XtX_inv = np.linalg.inv(XtX)
        except np.linalg.LinAlgError:
            XtX_inv = np.linalg.pinv(XtX)
        se = RegressionMetrics._compute_standard_error(XtX_inv, residual_variance)
        tvals, pvals = RegressionMetrics._compute_tvals_pvals(beta, se, df_err)
        ci_lower, ci_upper = RegressionMetrics._compute_confidence_interval(
            beta, se, df_err, alpha
        )

        return {
            "sse":               sse,
            "mse":               RegressionMetrics.mse(y_true, y_pred),
            "rmse":              RegressionMetrics.rmse(y_true, y_pred),
            "r2":                RegressionMetrics.r2(y_true, y_pred),
            "r2_adj":            RegressionMetrics.adjusted_r2(y_true, y_pred, rank),
            "residual_variance": residual_variance,
            "se":                se,
            "tvals":             tvals,
            "pvals":             pvals,
            "ci_lower":          ci_lower,
            "ci_upper":          ci_upper,
            "dof":               {"model": rank, "error": df_err},
        }
