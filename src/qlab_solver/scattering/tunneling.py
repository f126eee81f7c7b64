"""
Transmission through a rectangular potential barrier.

Exact stationary-scattering result for a barrier of height V0 and width a
(m = ℏ = 1):

    E < V0:  κ = √(2m(V0 - E))/ℏ,  T = 1 / (1 + V0² sinh²(κa) / (4E(V0 - E)))
    E > V0:  q = √(2m(E - V0))/ℏ,  T = 1 / (1 + V0² sin²(qa)  / (4E(E - V0)))
    E = V0:  T = 1 / (1 + m a² V0 / (2ℏ²))

and R = 1 - T.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.constants import HBAR, MASS, RESONANCE_EPSILON


REGIME_NO_BARRIER = "no_barrier"
REGIME_RESONANCE = "resonance"
REGIME_TUNNELING = "tunneling"
REGIME_ABOVE_BARRIER = "above_barrier"


@dataclass(frozen=True)
class TransmissionResult:
    """
    Transmission and reflection probabilities.

    Attributes:
        T: Transmission coefficient, 0 ≤ T ≤ 1.
        R: Reflection coefficient, R = 1 - T.
        regime: Which branch produced T.
        energy: Incident energy E.
        barrier_height: V0.
    """

    T: float
    R: float
    regime: str
    energy: float
    barrier_height: float

    @property
    def tunneling_probability(self) -> Optional[float]:
        """T for a classically forbidden crossing (E < V0), else None."""
        if self.energy < self.barrier_height:
            return self.T
        return None


def _transmission(E: float, V0: float, a: float) -> Tuple[float, str]:
    if a == 0:
        return 1.0, REGIME_NO_BARRIER

    if abs(E - V0) < RESONANCE_EPSILON:
        return 1.0 / (1.0 + MASS * a * a * V0 / (2 * HBAR * HBAR)), REGIME_RESONANCE

    if E < V0:
        if E == 0:
            # No incident flux: the κ formula's denominator vanishes and T → 0
            return 0.0, REGIME_TUNNELING
        kappa = np.sqrt(2 * MASS * (V0 - E)) / HBAR
        with np.errstate(over="ignore"):
            sinh_sq = np.sinh(kappa * a) ** 2
        return float(1.0 / (1.0 + V0 * V0 * sinh_sq / (4 * E * (V0 - E)))), REGIME_TUNNELING

    if E == 0:
        # Only reachable for V0 < 0 (a well): zero-energy limit of the q formula
        return 0.0, REGIME_ABOVE_BARRIER
    q = np.sqrt(2 * MASS * (E - V0)) / HBAR
    sin_sq = np.sin(q * a) ** 2
    return float(1.0 / (1.0 + V0 * V0 * sin_sq / (4 * E * (E - V0)))), REGIME_ABOVE_BARRIER


def tunnel(E: float, V0: float, a: float) -> TransmissionResult:
    """
    Transmission and reflection for a rectangular barrier.

    Args:
        E: Incident energy (>= 0).
        V0: Barrier height (negative values describe a well).
        a: Barrier width (>= 0).

    Returns:
        TransmissionResult with T clipped to [0, 1] and R = 1 - T.
    """
    if E < 0:
        raise ValueError(f"E must be non-negative, got {E}")
    if a < 0:
        raise ValueError(f"a must be non-negative, got {a}")

    T, regime = _transmission(float(E), float(V0), float(a))
    if not np.isfinite(T):
        T = 0.0
    T = min(1.0, max(0.0, T))
    return TransmissionResult(T=T, R=1.0 - T, regime=regime, energy=float(E), barrier_height=float(V0))


def transmission_curve(
    V0: float,
    a: float,
    energies: Optional[NDArray[np.floating]] = None,
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    T(E) over a range of incident energies.

    Args:
        V0: Barrier height.
        a: Barrier width.
        energies: Energies to evaluate. Defaults to 100 points on [0.1, 20.1].

    Returns:
        Tuple (energies, T).
    """
    if energies is None:
        energies = np.linspace(0.1, 20.1, 100)
    energies = np.asarray(energies, dtype=float)
    T = np.array([tunnel(E, V0, a).T for E in energies])
    return energies, T
