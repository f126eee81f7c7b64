"""
Normalization of sampled wavefunctions.

Discrete L² norm on a uniform grid: ||f|| = sqrt(Σ |f_i|² dx).
"""

import numpy as np
from numpy.typing import NDArray


def l2_norm(f: NDArray, dx: float) -> float:
    """
    Compute the discrete L² norm of a sampled function.

    Args:
        f: Function values on the grid (real or complex).
        dx: Grid spacing.

    Returns:
        sqrt(Σ |f_i|² dx).
    """
    f = np.asarray(f)
    return float(np.sqrt(np.sum(np.abs(f) ** 2) * dx))


def normalize(f: NDArray, dx: float) -> NDArray:
    """
    Rescale a sampled function so that Σ |f_i|² dx = 1.

    A zero (or non-finite) norm is treated as 1, so the zero function is
    returned unchanged instead of turning into NaN. Normalizing an already
    normalized function is a no-op up to rounding.

    Args:
        f: Function values on the grid.
        dx: Grid spacing.

    Returns:
        A new, normalized array.
    """
    f = np.asarray(f)
    norm = l2_norm(f, dx)
    if norm == 0.0 or not np.isfinite(norm):
        norm = 1.0
    return f / norm
