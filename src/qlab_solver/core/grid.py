"""
Domain class for discretizing the one-dimensional position space.

Provides the uniformly spaced sample grid shared by every potential,
eigensolver and time-evolution call.
"""

import numpy as np
from numpy.typing import NDArray


class Domain:
    """
    Uniform discretization of a finite interval [x_min, x_max].

    The endpoints are both included, so the spacing is
    dx = (x_max - x_min) / (N - 1).

    Attributes:
        N: Number of grid points.
        x: Array of sample positions (strictly increasing).
        dx: Grid spacing.
        x_min: Left endpoint.
        x_max: Right endpoint.
    """

    def __init__(self, x_min: float, x_max: float, N: int):
        """
        Initialize the domain.

        Args:
            x_min: Left endpoint of the interval.
            x_max: Right endpoint. Must be strictly greater than x_min.
            N: Number of grid points. Must be at least 2.
        """
        if int(N) != N or N < 2:
            raise ValueError(f"N must be an integer >= 2, got {N}")
        if not np.isfinite(x_min) or not np.isfinite(x_max):
            raise ValueError(f"Interval bounds must be finite, got [{x_min}, {x_max}]")
        if x_max <= x_min:
            raise ValueError(f"x_max must exceed x_min, got [{x_min}, {x_max}]")

        self.N = int(N)
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        self.dx = (self.x_max - self.x_min) / (self.N - 1)

        x = self.x_min + self.dx * np.arange(self.N)
        x[-1] = self.x_max
        x.setflags(write=False)
        self.x = x

    @property
    def width(self) -> float:
        """Length of the interval, x_max - x_min."""
        return self.x_max - self.x_min

    @property
    def center(self) -> float:
        """Midpoint of the interval."""
        return 0.5 * (self.x_min + self.x_max)

    def integrate(self, f: NDArray) -> complex:
        """
        Integrate a sampled function over the domain.

        Uses the plain Riemann sum Σ f_i·dx, the same quadrature the
        normalizer and the observables use, so that a normalized state
        integrates to exactly 1.

        Args:
            f: Function values on the grid.

        Returns:
            The integral (complex if f is complex).
        """
        if len(f) != self.N:
            raise ValueError(f"Function length {len(f)} doesn't match grid size {self.N}")
        return np.sum(f) * self.dx

    def k_grid(self) -> NDArray[np.floating]:
        """
        Momentum grid centred at zero for the discrete Fourier transform.

        k_j = (j - N/2)·2π/(N·dx), j = 0 … N-1.
        """
        dk = 2 * np.pi / (self.N * self.dx)
        return (np.arange(self.N) - self.N / 2) * dk

    def __eq__(self, other) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return (self.N, self.x_min, self.x_max) == (other.N, other.x_min, other.x_max)

    def __hash__(self) -> int:
        return hash((self.N, self.x_min, self.x_max))

    def __repr__(self) -> str:
        return f"Domain(x_min={self.x_min}, x_max={self.x_max}, N={self.N}, dx={self.dx:.6f})"


def build_grid(x_min: float, x_max: float, N: int) -> Domain:
    """
    Build a uniform grid of N points spanning [x_min, x_max].

    Args:
        x_min: Left endpoint.
        x_max: Right endpoint.
        N: Number of points (>= 2).

    Returns:
        The Domain.
    """
    return Domain(x_min, x_max, N)


def symmetric_grid(width: float, N: int) -> Domain:
    """Build the grid [-width/2, width/2] used by the built-in potentials."""
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    return Domain(-width / 2, width / 2, N)
