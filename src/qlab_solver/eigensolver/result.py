"""
Spectrum container returned by every eigensolver.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.grid import Domain


METHOD_ANALYTIC = "analytic"
METHOD_FINITE_DIFFERENCE = "finite_difference"
METHOD_FALLBACK = "fallback"


@dataclass(frozen=True, eq=False)
class Spectrum:
    """
    Ordered set of eigenstates for one potential.

    Attributes:
        domain: Grid the eigenfunctions are sampled on.
        energies: Eigenenergies in ascending order, shape (n_states,).
        wavefunctions: Real eigenfunctions, shape (n_states, N), each
            normalized so that Σ ψ² dx = 1.
        method: How the states were obtained: analytic, finite_difference
            or fallback.
        used_fallback: True if the numerical solve failed and the states are
            placeholder sine functions rather than solutions of the
            Schrödinger equation.
    """

    domain: Domain
    energies: NDArray[np.floating]
    wavefunctions: NDArray[np.floating]
    method: str = METHOD_FINITE_DIFFERENCE
    used_fallback: bool = False

    def __post_init__(self):
        if self.wavefunctions.ndim != 2:
            raise ValueError(f"wavefunctions must be 2D, got shape {self.wavefunctions.shape}")
        if self.wavefunctions.shape != (len(self.energies), self.domain.N):
            raise ValueError(
                f"wavefunctions shape {self.wavefunctions.shape} doesn't match "
                f"({len(self.energies)}, {self.domain.N})"
            )

    @property
    def n_states(self) -> int:
        return len(self.energies)

    def __len__(self) -> int:
        return self.n_states

    def state(self, n: int) -> Tuple[float, NDArray[np.floating]]:
        """Return (energy, amplitude) of the n-th eigenstate."""
        return float(self.energies[n]), self.wavefunctions[n]

    @property
    def ground_state(self) -> Tuple[float, NDArray[np.floating]]:
        return self.state(0)

    @property
    def ground_state_energy(self) -> float:
        return float(self.energies[0])
