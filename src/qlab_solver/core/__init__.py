"""
Core module for QLab Solver.

Contains natural-unit constants and session defaults, parameter
dataclasses, the position grid, normalization and the engine facade.

Main interface:
    from qlab_solver import QuantumEngine, SolveRequest

    engine = QuantumEngine()
    result = engine.solve(SolveRequest(family="harmonic", param1=1.0))
"""

from qlab_solver.core.constants import (
    HBAR,
    MASS,
    DEFAULTS,
    load_defaults_from_json,
    save_defaults_to_json,
    get_defaults_json_path,
)
from qlab_solver.core.exceptions import (
    EigensolverError,
    ExpressionError,
    QubitInputError,
)
from qlab_solver.core.grid import Domain, build_grid, symmetric_grid
from qlab_solver.core.normalization import l2_norm, normalize
from qlab_solver.core.parameters import (
    ANALYTIC_FAMILIES,
    POTENTIAL_FAMILIES,
    CustomPotential,
    PlaybackParameters,
    PotentialParameters,
    ScatteringParameters,
)

__all__ = [
    "HBAR",
    "MASS",
    "DEFAULTS",
    "load_defaults_from_json",
    "save_defaults_to_json",
    "get_defaults_json_path",
    "EigensolverError",
    "ExpressionError",
    "QubitInputError",
    "Domain",
    "build_grid",
    "symmetric_grid",
    "l2_norm",
    "normalize",
    "ANALYTIC_FAMILIES",
    "POTENTIAL_FAMILIES",
    "CustomPotential",
    "PlaybackParameters",
    "PotentialParameters",
    "ScatteringParameters",
]
