"""
Dynamics module for QLab Solver.

Exact spectral time evolution of eigenstate superpositions, the derived
densities and currents, and the playback scheduler that advances time for
animation.
"""

from qlab_solver.dynamics.evolution import (
    INITIAL_STATE_PRESETS,
    EvolutionFrame,
    evolve,
    evolve_frame,
    initial_coefficients,
    momentum_density,
    prepare_coefficients,
    probability_current,
    probability_density,
    revival_period,
)
from qlab_solver.dynamics.scheduler import PlaybackScheduler

__all__ = [
    "INITIAL_STATE_PRESETS",
    "EvolutionFrame",
    "evolve",
    "evolve_frame",
    "initial_coefficients",
    "momentum_density",
    "prepare_coefficients",
    "probability_current",
    "probability_density",
    "revival_period",
    "PlaybackScheduler",
]
