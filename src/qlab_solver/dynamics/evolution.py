"""
Spectral time evolution of a superposition of eigenstates.

Because each φ_n is an eigenstate of H, the evolution is exact:

    ψ(x, t) = Σ_n c_n φ_n(x) exp(-i E_n t)

There is no time stepping, so any t (negative or large) is reached
directly and the norm is conserved to rounding.

Derived quantities:
- probability density |ψ|²
- probability current J = Re ψ · ∂Im ψ/∂x - Im ψ · ∂Re ψ/∂x  (ℏ = m = 1)
- momentum density |φ(k)|² from the discrete Fourier integral
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.grid import Domain
from qlab_solver.eigensolver.result import Spectrum


INITIAL_STATE_PRESETS = ("ground", "first", "superposition", "gaussian")


def prepare_coefficients(
    coefficients: Sequence[complex],
    n_states: int,
) -> NDArray[np.complexfloating]:
    """
    Fit expansion coefficients to the spectrum size and normalize them.

    The vector is zero-padded or truncated to n_states, then rescaled to
    Σ|c_n|² = 1. An all-zero vector is returned unchanged.
    """
    c = np.zeros(n_states, dtype=complex)
    given = np.asarray(coefficients, dtype=complex).ravel()[:n_states]
    c[:len(given)] = given

    norm = np.sqrt(np.sum(np.abs(c) ** 2))
    if norm > 0 and np.isfinite(norm):
        c = c / norm
    return c


def initial_coefficients(preset: str, n_states: int) -> NDArray[np.complexfloating]:
    """
    Expansion coefficients for the built-in initial states.

    Args:
        preset: ground (c₀ = 1), first (c₁ = 1), superposition
            (c₀ = c₁ = 1/√2) or gaussian (c_n ∝ exp(-½(n - 2)²)).
            Unknown presets behave like ground.
        n_states: Number of states in the spectrum.

    Returns:
        Complex coefficient vector of length n_states. Entries for states
        that do not exist are dropped, so "first" with a single state is
        the zero vector.
    """
    c = np.zeros(n_states, dtype=complex)
    if n_states == 0:
        return c

    if preset == "first":
        if n_states > 1:
            c[1] = 1.0
    elif preset == "superposition":
        c[0] = 1 / np.sqrt(2)
        if n_states > 1:
            c[1] = 1 / np.sqrt(2)
    elif preset == "gaussian":
        n = np.arange(n_states)
        weights = np.exp(-0.5 * (n - 2) ** 2)
        c[:] = weights / np.sqrt(np.sum(weights ** 2))
    else:
        c[0] = 1.0
    return c


def evolve(
    spectrum: Spectrum,
    coefficients: Sequence[complex],
    t: float,
) -> NDArray[np.complexfloating]:
    """
    Complex wavefunction ψ(x, t) on the spectrum's grid.

    Args:
        spectrum: Eigenstates and energies.
        coefficients: Expansion coefficients c_n (padded/truncated to the
            spectrum size and normalized).
        t: Time.

    Returns:
        Complex array of length N.
    """
    c = prepare_coefficients(coefficients, spectrum.n_states)
    phases = np.exp(-1j * spectrum.energies * t)
    return (c * phases) @ spectrum.wavefunctions


def probability_density(psi: NDArray[np.complexfloating]) -> NDArray[np.floating]:
    """|ψ|² = Re² + Im²."""
    psi = np.asarray(psi)
    return psi.real ** 2 + psi.imag ** 2


def probability_current(
    psi: NDArray[np.complexfloating],
    dx: float,
) -> NDArray[np.floating]:
    """
    Probability current by central differences.

    J_i = Re ψ_i · (Im ψ_{i+1} - Im ψ_{i-1})/2dx - Im ψ_i · (Re ψ_{i+1} - Re ψ_{i-1})/2dx

    J is 0 at the first and last grid point, where no central difference
    exists.
    """
    psi = np.asarray(psi, dtype=complex)
    J = np.zeros(len(psi))
    if len(psi) < 3:
        return J

    re, im = psi.real, psi.imag
    d_re = (re[2:] - re[:-2]) / (2 * dx)
    d_im = (im[2:] - im[:-2]) / (2 * dx)
    J[1:-1] = re[1:-1] * d_im - im[1:-1] * d_re
    return J


def momentum_density(
    psi: NDArray[np.complexfloating],
    domain: Domain,
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Momentum-space density |φ(k)|².

    φ(k) = Σ_j ψ(x_j) exp(-i k x_j) dx on the grid
    k_j = (j - N/2)·2π/(N·dx), and |φ(k)|² = |φ(k)|²_raw / (2π).

    Args:
        psi: Complex wavefunction on the domain.
        domain: Grid.

    Returns:
        Tuple (k, density).
    """
    psi = np.asarray(psi, dtype=complex)
    if len(psi) != domain.N:
        raise ValueError(f"Function length {len(psi)} doesn't match grid size {domain.N}")

    k = domain.k_grid()
    kernel = np.exp(-1j * np.outer(k, domain.x))
    phi = kernel @ psi * domain.dx
    return k, (phi.real ** 2 + phi.imag ** 2) / (2 * np.pi)


def revival_period(spectrum: Spectrum, i: int = 0, j: int = 1) -> float:
    """
    Period 2π/|E_j - E_i| of a two-state superposition.

    Returns inf for degenerate levels.
    """
    gap = abs(float(spectrum.energies[j] - spectrum.energies[i]))
    if gap == 0:
        return float("inf")
    return 2 * np.pi / gap


@dataclass(frozen=True, eq=False)
class EvolutionFrame:
    """
    Everything the time-evolution view draws for one instant.

    Attributes:
        t: Time.
        psi: Complex wavefunction ψ(x, t).
        density: |ψ|².
        current: Probability current J(x, t).
        k: Momentum grid.
        momentum_density: |φ(k, t)|².
        dx: Grid spacing of psi.
    """

    t: float
    psi: NDArray[np.complexfloating]
    density: NDArray[np.floating]
    current: NDArray[np.floating]
    k: NDArray[np.floating]
    momentum_density: NDArray[np.floating]
    dx: float = 1.0

    @property
    def norm(self) -> float:
        """Σ|ψ|² dx; stays 1 for normalized coefficients."""
        return float(np.sum(self.density) * self.dx)


def evolve_frame(
    spectrum: Spectrum,
    t: float,
    coefficients: Optional[Sequence[complex]] = None,
    preset: str = "ground",
) -> EvolutionFrame:
    """
    Evolve and compute all derived quantities at time t.

    Args:
        spectrum: Eigenstates and energies.
        t: Time.
        coefficients: Explicit expansion coefficients. If None, the preset
            is used.
        preset: Initial-state preset name (see initial_coefficients).

    Returns:
        EvolutionFrame.
    """
    if coefficients is None:
        coefficients = initial_coefficients(preset, spectrum.n_states)

    domain = spectrum.domain
    psi = evolve(spectrum, coefficients, t)
    k, phi_sq = momentum_density(psi, domain)
    return EvolutionFrame(
        t=float(t),
        psi=psi,
        density=probability_density(psi),
        current=probability_current(psi, domain.dx),
        k=k,
        momentum_density=phi_sq,
        dx=domain.dx,
    )
