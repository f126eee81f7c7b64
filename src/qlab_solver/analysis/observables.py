"""
Expectation values and uncertainties of stationary states.

For a real eigenstate φ with energy E on a uniform grid:

    <A>  = Σ A_i φ_i² dx
    ΔX   = sqrt(max(0, <x²> - <x>²))
    ΔP   = sqrt(2 max(0, E - <V>))        (<p²>/2m = <H> - <V>, m = 1)

ΔP from the energy is only valid for eigenstates. The product ΔX·ΔP is
reported against the Heisenberg bound ℏ/2 as a self-check; nothing is
enforced.
"""

from dataclasses import dataclass
from typing import Dict

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.constants import HEISENBERG_BOUND, MASS
from qlab_solver.eigensolver.result import Spectrum


# Rounding slack: an exact Gaussian ground state sits on the bound itself
HEISENBERG_TOLERANCE = 1e-9


@dataclass(frozen=True)
class QuantumProperties:
    """
    Uncertainty metrics of one eigenstate.

    Attributes:
        delta_x: Position uncertainty ΔX.
        delta_p: Momentum uncertainty ΔP.
        uncertainty_product: ΔX·ΔP.
        satisfies_heisenberg: uncertainty_product ≥ 0.5 (up to rounding).
    """

    delta_x: float = 0.0
    delta_p: float = 0.0
    uncertainty_product: float = 0.0
    satisfies_heisenberg: bool = False

    def to_dict(self) -> Dict[str, float]:
        """Field names as used by the export snapshot."""
        return {
            "deltaX": self.delta_x,
            "deltaP": self.delta_p,
            "uncertaintyProduct": self.uncertainty_product,
        }


def expectation(
    operator: NDArray[np.floating],
    amplitude: NDArray[np.floating],
    dx: float,
) -> float:
    """
    Expectation of a multiplicative operator in a real state.

    Args:
        operator: Operator values sampled on the grid (e.g. x, x², V).
        amplitude: State amplitude on the grid.
        dx: Grid spacing.

    Returns:
        Σ operator_i · amplitude_i² · dx
    """
    operator = np.asarray(operator, dtype=float)
    amplitude = np.asarray(amplitude)
    if operator.shape != amplitude.shape:
        raise ValueError(
            f"Operator shape {operator.shape} doesn't match amplitude shape {amplitude.shape}"
        )
    return float(np.sum(operator * np.abs(amplitude) ** 2) * dx)


def position_uncertainty(x: NDArray, amplitude: NDArray, dx: float) -> float:
    x = np.asarray(x, dtype=float)
    mean = expectation(x, amplitude, dx)
    mean_sq = expectation(x * x, amplitude, dx)
    return float(np.sqrt(max(0.0, mean_sq - mean * mean)))


def momentum_uncertainty(
    energy: float,
    potential: NDArray[np.floating],
    amplitude: NDArray[np.floating],
    dx: float,
) -> float:
    """ΔP of an eigenstate from its kinetic energy E - <V>."""
    kinetic = energy - expectation(potential, amplitude, dx)
    return float(np.sqrt(2 * MASS * max(0.0, kinetic)))


def uncertainty_properties(
    spectrum: Spectrum,
    potential: NDArray[np.floating],
    state: int = 0,
) -> QuantumProperties:
    """
    ΔX, ΔP and their product for one state of the spectrum.

    Args:
        spectrum: Solved spectrum.
        potential: Potential profile the spectrum was solved for.
        state: Index of the eigenstate (default ground state).

    Returns:
        QuantumProperties. An empty spectrum gives all zeros.
    """
    if spectrum.n_states == 0:
        return QuantumProperties()

    domain = spectrum.domain
    energy, amplitude = spectrum.state(state)

    delta_x = position_uncertainty(domain.x, amplitude, domain.dx)
    delta_p = momentum_uncertainty(energy, potential, amplitude, domain.dx)
    product = delta_x * delta_p
    return QuantumProperties(
        delta_x=delta_x,
        delta_p=delta_p,
        uncertainty_product=product,
        satisfies_heisenberg=bool(product >= HEISENBERG_BOUND - HEISENBERG_TOLERANCE),
    )


def expectation_values(spectrum: Spectrum, state: int = 0) -> Dict[str, float]:
    """
    <x>, <H> and <p> for one eigenstate.

    <H> is the eigenvalue itself and <p> vanishes for a real bound state.
    """
    domain = spectrum.domain
    energy, amplitude = spectrum.state(state)
    return {
        "x": expectation(domain.x, amplitude, domain.dx),
        "H": energy,
        "p": 0.0,
    }


def hamiltonian_matrix_elements(spectrum: Spectrum, size: int = 5) -> NDArray[np.floating]:
    """
    Illustrative matrix view of H in its eigenbasis.

    Diagonal entries are the eigenenergies; off-diagonal entries are a
    decorative 0.1·exp(-|i - j|) coupling, not computed matrix elements.
    """
    size = min(size, spectrum.n_states)
    i, j = np.indices((size, size))
    matrix = 0.1 * np.exp(-np.abs(i - j).astype(float))
    matrix[np.diag_indices(size)] = spectrum.energies[:size]
    return matrix
