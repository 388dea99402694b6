from .estimator import BaseEstimator

__all__ = ['BaseEstimator']
