"""
Analysis module for QLab Solver.

Expectation values, position and momentum uncertainties, and the
Heisenberg-product self-check for solved eigenstates.
"""

from qlab_solver.analysis.observables import (
    QuantumProperties,
    expectation,
    expectation_values,
    hamiltonian_matrix_elements,
    momentum_uncertainty,
    position_uncertainty,
    uncertainty_properties,
)

__all__ = [
    "QuantumProperties",
    "expectation",
    "expectation_values",
    "hamiltonian_matrix_elements",
    "momentum_uncertainty",
    "position_uncertainty",
    "uncertainty_properties",
]
