import logging

from .errors import (DenseLinAlgError, InvalidDimensions, DimensionMismatch, InvalidArgument,
                     SingularSystem, RankDeficient, ConvergenceFailure)
from .params import SolverParams, defaults
from .linalg import (Matrix, to_column_major, to_row_major, multiply, matmul,
                     svd, reconstruct, max_abs_error, decompose, SVDResult)
from .stats import SampleSet, PolynomialFit, FitResult, fit_polynomial, predict
from . import linalg
from . import stats

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ['DenseLinAlgError', 'InvalidDimensions', 'DimensionMismatch', 'InvalidArgument',
           'SingularSystem', 'RankDeficient', 'ConvergenceFailure',
           'SolverParams', 'defaults',
           'Matrix', 'to_column_major', 'to_row_major', 'multiply', 'matmul',
           'svd', 'reconstruct', 'max_abs_error', 'decompose', 'SVDResult',
           'SampleSet', 'PolynomialFit', 'FitResult', 'fit_polynomial', 'predict',
           'linalg', 'stats']
