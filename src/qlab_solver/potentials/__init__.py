"""
Potentials module for QLab Solver.

Contains the potential energy profiles for the stationary problem, the
restricted expression language for user-defined potentials, and the
barrier profiles of the scattering view.
"""

from qlab_solver.potentials.expression import Expression, compile_expression
from qlab_solver.potentials.families import evaluate_potential
from qlab_solver.potentials.barriers import (
    BARRIER_KINDS,
    barrier_profile,
    gaussian_wavepacket,
    scattering_grid,
)

__all__ = [
    "Expression",
    "compile_expression",
    "evaluate_potential",
    "BARRIER_KINDS",
    "barrier_profile",
    "gaussian_wavepacket",
    "scattering_grid",
]
