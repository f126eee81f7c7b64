"""
Finite-difference eigensolver for arbitrary potentials.

Solves the discretized stationary Schrödinger equation
    H ψ = E ψ,   H = -ℏ²/(2m) d²/dx² + V(x)
on a uniform grid with the three-point Laplacian. With t = ℏ²/(2m dx²):
    H[i][i]   = 2t + V[i]
    H[i][i±1] = -t
i.e. ψ = 0 just outside the grid (hard walls at the domain ends).

Two exact dense solvers are available:
- "lapack": scipy.linalg.eigh_tridiagonal on the two bands (default)
- "jacobi": cyclic Jacobi rotations on the dense matrix (numpy only)

If the solve fails, solve_finite_difference returns a placeholder sine
spectrum flagged with used_fallback=True instead of raising.
"""

import warnings
from typing import Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import eigh_tridiagonal

from qlab_solver.core.constants import HBAR, MASS
from qlab_solver.core.exceptions import EigensolverError
from qlab_solver.core.grid import Domain
from qlab_solver.core.normalization import normalize
from qlab_solver.eigensolver.jacobi import jacobi_eigh
from qlab_solver.eigensolver.result import (
    METHOD_FALLBACK,
    METHOD_FINITE_DIFFERENCE,
    Spectrum,
)


SOLVER_METHODS = ("lapack", "jacobi")


class FiniteDifferenceSolver:
    """
    Dense finite-difference eigensolver on a uniform grid.

    Attributes:
        domain: Grid the Hamiltonian is built on.
        potential: V sampled on domain.x.
        method: "lapack" or "jacobi".
    """

    def __init__(
        self,
        domain: Domain,
        potential: NDArray[np.floating],
        method: str = "lapack",
        hbar: float = HBAR,
        mass: float = MASS,
        verbose: bool = False,
    ):
        """
        Initialize the solver.

        Args:
            domain: Grid.
            potential: Potential profile aligned with domain.x.
            method: Dense eigensolver to use ("lapack" or "jacobi").
            hbar: Reduced Planck constant (1.0 in natural units).
            mass: Particle mass (1.0 in natural units).
            verbose: Print diagnostic information.
        """
        if method not in SOLVER_METHODS:
            raise ValueError(f"method must be one of {SOLVER_METHODS}, got {method!r}")
        potential = np.asarray(potential, dtype=float)
        if potential.shape != (domain.N,):
            raise ValueError(
                f"Potential length {potential.shape} doesn't match grid size {domain.N}"
            )

        self.domain = domain
        self.potential = potential
        self.method = method
        self.hbar = hbar
        self.mass = mass
        self.verbose = verbose

        if self.verbose:
            print("=== FiniteDifferenceSolver Initialized ===")
            print(f"  N: {domain.N}, dx: {domain.dx:.6f}")
            print(f"  t = hbar^2/(2 m dx^2): {self.kinetic_coefficient:.6f}")
            print(f"  method: {method}")

    @property
    def kinetic_coefficient(self) -> float:
        """Hopping amplitude t = ℏ²/(2m dx²)."""
        return self.hbar ** 2 / (2 * self.mass * self.domain.dx ** 2)

    def bands(self) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return (diagonal, off-diagonal) of the tridiagonal Hamiltonian."""
        t = self.kinetic_coefficient
        diagonal = 2 * t + self.potential
        off_diagonal = np.full(self.domain.N - 1, -t)
        return diagonal, off_diagonal

    def build_hamiltonian(self) -> NDArray[np.floating]:
        """Build the dense N × N Hamiltonian matrix."""
        diagonal, off_diagonal = self.bands()
        return np.diag(diagonal) + np.diag(off_diagonal, 1) + np.diag(off_diagonal, -1)

    def _diagonalize(self) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        if not np.all(np.isfinite(self.potential)):
            raise EigensolverError("Potential contains non-finite values")
        if self.method == "jacobi":
            return jacobi_eigh(self.build_hamiltonian())
        diagonal, off_diagonal = self.bands()
        try:
            return eigh_tridiagonal(diagonal, off_diagonal)
        except np.linalg.LinAlgError as e:
            raise EigensolverError(f"LAPACK tridiagonal solve failed: {e}") from e

    def solve(self, num_states: int = 5) -> Spectrum:
        """
        Solve for the lowest eigenpairs.

        Args:
            num_states: Number of states (capped at N).

        Returns:
            Spectrum with method "finite_difference".

        Raises:
            EigensolverError: If the diagonalization fails or produces
                non-finite values.
        """
        if num_states < 1:
            raise ValueError(f"num_states must be at least 1, got {num_states}")
        n_states = min(int(num_states), self.domain.N)

        energies, vectors = self._diagonalize()
        if not (np.all(np.isfinite(energies)) and np.all(np.isfinite(vectors))):
            raise EigensolverError("Eigendecomposition produced non-finite values")

        order = np.argsort(energies, kind="stable")[:n_states]
        energies = energies[order]
        wavefunctions = vectors[:, order].T

        states = np.empty_like(wavefunctions)
        for i, psi in enumerate(wavefunctions):
            states[i] = normalize(_fix_sign(psi), self.domain.dx)

        if self.verbose:
            print(f"  Lowest energies: {np.array2string(energies[:5], precision=6)}")

        return Spectrum(
            self.domain,
            np.array(energies, dtype=float),
            states,
            method=METHOD_FINITE_DIFFERENCE,
        )

    def verify_eigenstate(
        self,
        energy: float,
        psi: NDArray[np.floating],
        tol: float = 1e-6,
    ) -> Tuple[bool, float]:
        """
        Check H ψ = E ψ for a computed pair.

        Returns:
            Tuple (is_eigenstate, relative residual ||Hψ - Eψ|| / ||Eψ||).
        """
        H = self.build_hamiltonian()
        residual = np.linalg.norm(H @ psi - energy * psi)
        scale = np.linalg.norm(energy * psi)
        if scale == 0:
            scale = 1.0
        relative = float(residual / scale)
        return relative < tol, relative


def build_hamiltonian(domain: Domain, potential: NDArray[np.floating]) -> NDArray[np.floating]:
    """Dense finite-difference Hamiltonian for a potential on the domain."""
    return FiniteDifferenceSolver(domain, potential).build_hamiltonian()


def _fix_sign(psi: NDArray[np.floating]) -> NDArray[np.floating]:
    """Flip psi so that its largest-magnitude sample is positive."""
    if psi[np.argmax(np.abs(psi))] < 0:
        return -psi
    return psi


def fallback_spectrum(domain: Domain, num_states: int) -> Spectrum:
    """
    Placeholder spectrum used when the numerical solve fails.

    Energies are n + 1 and the states are box-like sines spanning the whole
    domain, sin((n + 1) π (x - x_min) / L). The result is flagged with
    used_fallback=True so callers can tell it is not a physical solution.
    """
    n_states = min(max(int(num_states), 1), domain.N)
    L = domain.width
    energies = np.arange(1, n_states + 1, dtype=float)
    wavefunctions = np.array([
        normalize(np.sin((n + 1) * np.pi * (domain.x - domain.x_min) / L), domain.dx)
        for n in range(n_states)
    ])
    return Spectrum(
        domain,
        energies,
        wavefunctions,
        method=METHOD_FALLBACK,
        used_fallback=True,
    )


def solve_finite_difference(
    domain: Domain,
    potential: NDArray[np.floating],
    num_states: int = 5,
    method: str = "lapack",
    verbose: bool = False,
) -> Spectrum:
    """
    Finite-difference spectrum that degrades to the fallback instead of raising.

    Args:
        domain: Grid.
        potential: Potential profile aligned with domain.x.
        num_states: Number of states requested.
        method: "lapack" or "jacobi".
        verbose: Print diagnostic information.

    Returns:
        The numerical Spectrum, or the fallback spectrum (with a
        RuntimeWarning) if the eigensolver fails.
    """
    solver = FiniteDifferenceSolver(domain, potential, method=method, verbose=verbose)
    try:
        return solver.solve(num_states)
    except EigensolverError as e:
        warnings.warn(
            f"Eigensolver failed ({e}); returning placeholder sine spectrum",
            RuntimeWarning,
        )
        return fallback_spectrum(domain, num_states)
