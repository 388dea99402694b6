from .polyfit import PolynomialFit, FitResult, fit_polynomial, predict

__all__ = ['PolynomialFit', 'FitResult', 'fit_polynomial', 'predict']
