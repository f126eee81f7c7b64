"""
Qubit module for QLab Solver.

Two-amplitude qubit states, single-qubit gates and Bloch-sphere
coordinates.
"""

from qlab_solver.qubit.gates import (
    GATE_NAMES,
    QubitState,
    apply_gate,
    bloch_coordinates,
    canonical_gate_name,
    parse_qubit,
)

__all__ = [
    "GATE_NAMES",
    "QubitState",
    "apply_gate",
    "bloch_coordinates",
    "canonical_gate_name",
    "parse_qubit",
]
