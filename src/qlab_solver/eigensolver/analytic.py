"""
Closed-form eigenstates for the exactly solvable families.

Harmonic oscillator (m = ℏ = 1, frequency ω):
    E_n = ω (n + ½)
    φ_n(x) ∝ H_n(ξ) exp(-ξ²/2),   ξ = x √ω

Infinite square well of width L centred at the origin:
    E_n = (n + 1)² π² / (2 L²)
    φ_n(x) ∝ sin((n + 1) π (x + L/2) / L)  for |x| ≤ L/2, else 0

The analytic forms avoid the discretization error a 150-point finite
difference grid would introduce. Eigenfunctions are normalized on the grid.
"""

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.grid import Domain
from qlab_solver.core.normalization import normalize
from qlab_solver.eigensolver.result import METHOD_ANALYTIC, Spectrum


def hermite(n: int, xi: NDArray) -> NDArray:
    """
    Physicists' Hermite polynomial H_n(ξ).

    Two-term recurrence:
        H_0 = 1, H_1 = 2ξ, H_k = 2ξ H_{k-1} - 2(k-1) H_{k-2}
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    xi = np.asarray(xi, dtype=float)
    h_prev = np.ones_like(xi)
    if n == 0:
        return h_prev
    h = 2 * xi
    for k in range(2, n + 1):
        h_prev, h = h, 2 * xi * h - 2 * (k - 1) * h_prev
    return h


def hermite_functions(n_max: int, xi: NDArray) -> NDArray:
    """
    Normalized Hermite functions ψ_0 .. ψ_n_max at ξ, one row per order.

    ψ_n = H_n(ξ) exp(-ξ²/2) / sqrt(2^n n! sqrt(π)), built from the recurrence
        ψ_k = sqrt(2/k) ξ ψ_{k-1} - sqrt((k-1)/k) ψ_{k-2}
    which stays bounded where H_n itself overflows.
    """
    if n_max < 0:
        raise ValueError(f"n_max must be non-negative, got {n_max}")
    xi = np.asarray(xi, dtype=float)
    psi = np.zeros((n_max + 1, len(xi)))
    psi[0] = np.pi ** -0.25 * np.exp(-xi * xi / 2)
    if n_max >= 1:
        psi[1] = np.sqrt(2.0) * xi * psi[0]
    for k in range(2, n_max + 1):
        psi[k] = np.sqrt(2.0 / k) * xi * psi[k - 1] - np.sqrt((k - 1) / k) * psi[k - 2]
    return psi


def harmonic_energy(n: int, omega: float) -> float:
    return omega * (n + 0.5)


def box_energy(n: int, width: float) -> float:
    return (n + 1) ** 2 * np.pi ** 2 / (2 * width * width)


def box_wavefunction(x: NDArray, n: int, width: float) -> NDArray:
    """Un-normalized box eigenfunction, zero outside the walls."""
    x = np.asarray(x, dtype=float)
    inside = np.abs(x) <= width / 2
    return np.where(inside, np.sin((n + 1) * np.pi * (x + width / 2) / width), 0.0)


def _count(domain: Domain, num_states: int) -> int:
    if num_states < 1:
        raise ValueError(f"num_states must be at least 1, got {num_states}")
    return min(int(num_states), domain.N)


def solve_harmonic(domain: Domain, omega: float, num_states: int) -> Spectrum:
    """
    Analytic oscillator spectrum on the grid.

    Args:
        domain: Grid.
        omega: Oscillator frequency (> 0).
        num_states: Number of states requested (capped at N).

    Returns:
        Spectrum with method "analytic".
    """
    if omega <= 0:
        raise ValueError(f"omega must be positive, got {omega}")
    n_states = _count(domain, num_states)

    energies = np.array([harmonic_energy(n, omega) for n in range(n_states)])
    xi = np.asarray(domain.x) * np.sqrt(omega)
    wavefunctions = np.array([
        normalize(psi, domain.dx) for psi in hermite_functions(n_states - 1, xi)
    ])
    return Spectrum(domain, energies, wavefunctions, method=METHOD_ANALYTIC)


def solve_infinite_well(domain: Domain, width: float, num_states: int) -> Spectrum:
    """
    Analytic infinite-well spectrum on the grid.

    Args:
        domain: Grid.
        width: Well width L (> 0), centred at x = 0.
        num_states: Number of states requested (capped at N).

    Returns:
        Spectrum with method "analytic".
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    n_states = _count(domain, num_states)

    energies = np.array([box_energy(n, width) for n in range(n_states)])
    wavefunctions = np.array([
        normalize(box_wavefunction(domain.x, n, width), domain.dx)
        for n in range(n_states)
    ])
    return Spectrum(domain, energies, wavefunctions, method=METHOD_ANALYTIC)
