"""
Scattering module for QLab Solver.

Closed-form transmission and reflection coefficients for a rectangular
barrier, including the E = V0 limit.
"""

from qlab_solver.scattering.tunneling import (
    TransmissionResult,
    transmission_curve,
    tunnel,
)

__all__ = [
    "TransmissionResult",
    "transmission_curve",
    "tunnel",
]
