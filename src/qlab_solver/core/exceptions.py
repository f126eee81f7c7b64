"""
Exception types raised by QLab Solver.

All of them derive from the builtin that callers would naturally catch
(ValueError for bad input, RuntimeError for numerical failure).
"""


class ExpressionError(ValueError):
    """A custom potential expression could not be parsed or evaluated."""


class QubitInputError(ValueError):
    """Qubit amplitudes could not be parsed into a two-component state."""


class EigensolverError(RuntimeError):
    """Dense diagonalisation failed to converge or produced non-finite values."""
