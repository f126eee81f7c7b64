"""
Eigensolver module for QLab Solver.

Provides the stationary states of the active potential:

- Analytic solvers: harmonic oscillator and infinite square well
- FiniteDifferenceSolver: three-point Hamiltonian for any potential,
  diagonalized with LAPACK (default) or cyclic Jacobi rotations
- solve_spectrum: dispatcher choosing between the two

A failed numerical solve returns a placeholder spectrum with
used_fallback=True rather than raising.
"""

from qlab_solver.eigensolver.result import Spectrum
from qlab_solver.eigensolver.analytic import (
    hermite,
    hermite_functions,
    solve_harmonic,
    solve_infinite_well,
)
from qlab_solver.eigensolver.jacobi import jacobi_eigh
from qlab_solver.eigensolver.finite_difference import (
    FiniteDifferenceSolver,
    build_hamiltonian,
    fallback_spectrum,
    solve_finite_difference,
)
from qlab_solver.eigensolver.solver import solve_spectrum

__all__ = [
    "Spectrum",
    "hermite",
    "hermite_functions",
    "solve_harmonic",
    "solve_infinite_well",
    "jacobi_eigh",
    "FiniteDifferenceSolver",
    "build_hamiltonian",
    "fallback_spectrum",
    "solve_finite_difference",
    "solve_spectrum",
]
