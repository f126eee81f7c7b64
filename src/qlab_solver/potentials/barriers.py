"""
Barrier profiles for the scattering view.

These are display profiles on a fixed scattering grid; the transmission
coefficient itself is always the closed-form rectangular-barrier result
from qlab_solver.scattering.tunneling.
"""

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.grid import Domain, build_grid


BARRIER_KINDS = ("single", "double", "periodic", "ramp")

SCATTERING_X_MIN = -10.0
SCATTERING_X_MAX = 10.0
SCATTERING_POINTS = 500


def scattering_grid(N: int = SCATTERING_POINTS) -> Domain:
    """The fixed [-10, 10] grid the barrier profiles are drawn on."""
    return build_grid(SCATTERING_X_MIN, SCATTERING_X_MAX, N)


def barrier_profile(
    x: NDArray,
    kind: str,
    height: float,
    width: float,
) -> NDArray[np.floating]:
    """
    Sample a barrier profile.

    Args:
        x: Positions.
        kind: single, double, periodic or ramp. Unknown kinds give single.
        height: Barrier height V0.
        width: Barrier width (or period / decay length for periodic and ramp).

    Returns:
        V(x) as a new array.
    """
    x = np.asarray(x, dtype=float)

    if kind == "double":
        # Two barriers of width w/2 centred at ±w/2
        inside = (np.abs(x - width / 2) < width / 4) | (np.abs(x + width / 2) < width / 4)
        return np.where(inside, height, 0.0)
    if kind == "periodic":
        if width == 0:
            return np.zeros_like(x)
        return np.where(np.abs(np.sin(x * np.pi / width)) > 0.5, height, 0.0)
    if kind == "ramp":
        if width == 0:
            return np.where(x > 0, height, 0.0)
        # Only the x > 0 branch is used; clip keeps exp() finite for x < 0
        ramp = height * (1 - np.exp(-np.clip(x, 0, None) / width))
        return np.where(x > 0, ramp, 0.0)
    return np.where(np.abs(x) < width / 2, height, 0.0)


def gaussian_wavepacket(
    x: NDArray,
    t: float = 0.0,
    center: float = -5.0,
    width: float = 1.0,
    k0: float = 5.0,
) -> NDArray[np.floating]:
    """
    Illustrative free Gaussian packet translating at unit speed.

    ψ(x, t) = exp(-(x - x0 - t)² / 2σ²) cos(k0 (x - x0 - t))

    Not a solution of the barrier problem; it only animates the incoming
    packet next to the barrier profile.
    """
    x = np.asarray(x, dtype=float)
    shifted = x - center - t
    return np.exp(-shifted ** 2 / (2 * width ** 2)) * np.cos(k0 * shifted)
