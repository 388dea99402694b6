from .samples import SampleSet
from .design import design_matrix
from .model import PolynomialFit, FitResult, fit_polynomial, predict
from .metrics import RegressionMetrics
from .evaluation import FitEvaluator

__all__ = ['SampleSet', 'design_matrix', 'PolynomialFit', 'FitResult', 'fit_polynomial',
           'predict', 'RegressionMetrics', 'FitEvaluator']
