"""
Spectrum dispatcher.

Harmonic and infinite-well potentials always use the closed forms; every
other family goes through the finite-difference eigensolver.
"""

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.grid import Domain
from qlab_solver.eigensolver.analytic import solve_harmonic, solve_infinite_well
from qlab_solver.eigensolver.finite_difference import solve_finite_difference
from qlab_solver.eigensolver.result import Spectrum


def solve_spectrum(
    domain: Domain,
    potential: NDArray[np.floating],
    family: str,
    p1: float,
    num_states: int,
    method: str = "lapack",
    verbose: bool = False,
) -> Spectrum:
    """
    Compute the lowest eigenstates for the active potential.

    Args:
        domain: Grid.
        potential: Potential profile on the grid (ignored by the analytic
            families, whose closed forms depend only on p1).
        family: Potential family tag.
        p1: First family parameter (ω for harmonic, L for infinite).
        num_states: Number of states requested (capped at N).
        method: Dense eigensolver for the numerical families.
        verbose: Print diagnostic information.

    Returns:
        Spectrum; check spectrum.used_fallback before presenting it as a
        physical result.
    """
    if family == "harmonic":
        return solve_harmonic(domain, p1, num_states)
    if family == "infinite":
        return solve_infinite_well(domain, p1, num_states)
    return solve_finite_difference(domain, potential, num_states, method=method, verbose=verbose)
