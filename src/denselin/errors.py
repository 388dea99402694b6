import numpy as np


class DenseLinAlgError(Exception):
    """
    Base class of every failure raised by denselin.
    Catch this to handle all kernel errors at once; catch a subclass
    to react to one kind of failure.
    """


class InvalidDimensions(DenseLinAlgError, ValueError):
    """Non-positive or inconsistent shape parameters."""


class DimensionMismatch(DenseLinAlgError, ValueError):
    """Inner dimensions of a multiplication do not agree."""


class InvalidArgument(DenseLinAlgError, ValueError):
    """Argument rejected by a solver precondition (buffer size, selector)."""


class SingularSystem(DenseLinAlgError, np.linalg.LinAlgError):
    """The Gram matrix of the normal equations is not invertible."""


class RankDeficient(DenseLinAlgError, np.linalg.LinAlgError):
    """The least-squares design matrix lacks full column rank."""


class ConvergenceFailure(DenseLinAlgError, np.linalg.LinAlgError):
    """The SVD iteration did not converge."""


__all__ = ['DenseLinAlgError', 'InvalidDimensions', 'DimensionMismatch', 'InvalidArgument',
           'SingularSystem', 'RankDeficient', 'ConvergenceFailure']
