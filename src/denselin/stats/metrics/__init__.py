from .regression import RegressionMetrics

__all__ = ['RegressionMetrics']
