"""
Advanced module for QLab Solver.

Closed-form illustrations (hydrogen radial functions, 2D oscillator,
quantum-dot confinement, spin projections). None of these solve a
Schrödinger equation.
"""

from qlab_solver.advanced.systems import (
    clamp_quantum_numbers,
    harmonic_2d_ground,
    hydrogen_radial,
    quantum_dot_potential,
    spin_components,
)

__all__ = [
    "clamp_quantum_numbers",
    "harmonic_2d_ground",
    "hydrogen_radial",
    "quantum_dot_potential",
    "spin_components",
]
