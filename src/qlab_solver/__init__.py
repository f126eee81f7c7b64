"""
QLab Solver - single-particle quantum mechanics kernel

Stationary states of 1D potentials (analytic where closed forms exist,
finite differences otherwise), exact spectral time evolution,
rectangular-barrier tunnelling, uncertainty observables and single-qubit
gates, in natural units ℏ = m = 1.

Main Interface:
    from qlab_solver import QuantumEngine, SolveRequest

    engine = QuantumEngine()
    result = engine.solve(SolveRequest(family="finite", param1=4.0, param2=10.0))
    print(result.spectrum.energies, result.used_fallback)

    frame = engine.evolve_preset(result, "superposition", t=2.0)
    T = engine.tunnel(E=5.0, V0=8.0, a=1.0).T

Components:
- QuantumEngine: stateless facade taking explicit request objects
- Spectrum: eigenenergies and normalized eigenfunctions
- PlaybackScheduler: start/stop/tick driver for time-evolution playback
"""

from qlab_solver.core import (
    HBAR,
    MASS,
    Domain,
    build_grid,
    CustomPotential,
    PotentialParameters,
    ScatteringParameters,
    EigensolverError,
    ExpressionError,
    QubitInputError,
)
from qlab_solver.core.engine import QuantumEngine, SolveRequest, SolveResult
from qlab_solver.eigensolver import Spectrum, solve_spectrum
from qlab_solver.dynamics import PlaybackScheduler, evolve
from qlab_solver.scattering import TransmissionResult, tunnel
from qlab_solver.qubit import QubitState, apply_gate

__version__ = "0.1.0"

__all__ = [
    "HBAR",
    "MASS",
    "Domain",
    "build_grid",
    "CustomPotential",
    "PotentialParameters",
    "ScatteringParameters",
    "EigensolverError",
    "ExpressionError",
    "QubitInputError",
    "QuantumEngine",
    "SolveRequest",
    "SolveResult",
    "Spectrum",
    "solve_spectrum",
    "PlaybackScheduler",
    "evolve",
    "TransmissionResult",
    "tunnel",
    "QubitState",
    "apply_gate",
]
