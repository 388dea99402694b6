import numpy as np
from ...errors import InvalidDimensions


class BaseEstimator:
    """
    Minimal Base Estimator class.
    All estimators should inherit from this class.
    Hyperparameters are the keyword arguments given to __init__; fitted
    attributes end with an underscore and are not hyperparameters.
    """
    def __init__(self, **kwargs):
        """
        Initialize estimator with hyperparameters.
        No computation should be done here.
        """
        self._param_names = tuple(kwargs)
        for key, value in kwargs.items():
            setattr(self, key, value)

    def fit(self, x, y):
        """
        Override this method to implement model fitting.
        """
        raise NotImplementedError("The fit() method must be implemented by subclass.")

    def get_params(self):
        """
        Return all hyperparameters as a dictionary.
        """
        return {key: getattr(self, key) for key in self._param_names}

    def set_params(self, **params):
        """
        Set hyperparameters from a dictionary.
        """
        for key, value in params.items():
            if key not in self._param_names:
                raise ValueError(f"Invalid parameter {key!r} for {type(self).__name__}.")
            setattr(self, key, value)
        return self

    def _check_samples(self, v, name):
        """
        Validate a sample vector, enforce 1-D float64.
        """
        v = np.asarray(v, dtype=np.float64)
        if v.ndim > 1:
            if v.ndim == 2 and 1 in v.shape:
                v = v.reshape(-1)
            else:
                raise InvalidDimensions(f"Input {name} must be one-dimensional, got shape {v.shape}.")
        v = np.atleast_1d(v)
        if v.size == 0:
            raise InvalidDimensions(f"Input {name} is empty.")
        if not np.isfinite(v).all():
            raise ValueError(f"Input {name} contains NaN or Inf.")
        return v

    def _check_xy(self, x, y):
        """
        Validate x and y are matching sample vectors.
        """
        x = self._check_samples(x, 'x')
        y = self._check_samples(y, 'y')
        if x.shape[0] != y.shape[0]:
            raise InvalidDimensions("x and y must have the same number of samples.")
        return x, y
