"""
Illustrative closed-form systems for the advanced view.

These are qualitative pictures, not solutions of a 3D Schrödinger
equation: the hydrogen radial functions use low-order Laguerre factors
without normalization, and the 2D oscillator shows only the ground-state
Gaussian.
"""

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray


def clamp_quantum_numbers(n: int, l: int, m: int) -> Tuple[int, int, int]:
    """Clamp to n ≥ 1, 0 ≤ l ≤ n - 1, -l ≤ m ≤ l."""
    n = max(1, int(n))
    l = min(n - 1, max(0, int(l)))
    m = min(l, max(-l, int(m)))
    return n, l, m


def hydrogen_radial(
    n: int,
    l: int,
    r: Optional[NDArray[np.floating]] = None,
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Qualitative hydrogen radial function R_nl(r) ∝ r^l L(ρ) e^(-r/n).

    Explicit Laguerre factors are used for n ≤ 3; other (n, l) use 1.

    Args:
        n: Principal quantum number (clamped to ≥ 1).
        l: Orbital quantum number (clamped to [0, n - 1]).
        r: Radii. Defaults to 100 points on [0.1, 10.1].

    Returns:
        Tuple (r, R).
    """
    n, l, _ = clamp_quantum_numbers(n, l, 0)
    if r is None:
        r = np.linspace(0.1, 10.1, 100)
    r = np.asarray(r, dtype=float)
    rho = 2 * r / n

    if (n, l) == (2, 0):
        laguerre = 1.0 - 0.5 * rho
    elif (n, l) == (3, 0):
        laguerre = 1.0 - rho + rho * rho / 6
    elif (n, l) == (3, 1):
        laguerre = 1.0 - 0.25 * rho
    else:
        laguerre = np.ones_like(r)

    return r, r ** l * laguerre * np.exp(-r / n)


def harmonic_2d_ground(
    x: Optional[NDArray[np.floating]] = None,
    y: Optional[NDArray[np.floating]] = None,
) -> Tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]]:
    """
    Ground-state density surface exp(-(x² + y²)/2) of the isotropic 2D oscillator.

    Returns:
        Tuple (x, y, Z) with Z[i, j] evaluated at (x[i], y[j]).
    """
    if x is None:
        x = np.linspace(-5, 5, 50)
    if y is None:
        y = np.linspace(-5, 5, 50)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    X, Y = np.meshgrid(x, y, indexing="ij")
    return x, y, np.exp(-(X * X + Y * Y) / 2)


def quantum_dot_potential(x: Optional[NDArray[np.floating]] = None) -> Tuple[NDArray, NDArray]:
    """Anharmonic confinement V = ½x² + 0.1x⁴ on [-5, 5]."""
    if x is None:
        x = np.linspace(-5, 5, 100)
    x = np.asarray(x, dtype=float)
    return x, 0.5 * x * x + 0.1 * x ** 4


def spin_components(angles: Optional[NDArray[np.floating]] = None) -> Tuple[NDArray, NDArray, NDArray]:
    """Spin-up / spin-down projections cos θ, sin θ over a full turn."""
    if angles is None:
        angles = np.linspace(0, 2 * np.pi, 100)
    angles = np.asarray(angles, dtype=float)
    return angles, np.cos(angles), np.sin(angles)
