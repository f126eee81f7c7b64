"""
Parameter dataclasses for configuring a solver session.

Each dataclass validates itself on construction so that impossible
settings are rejected before any numerical work starts.
"""

from dataclasses import dataclass, field
from typing import Optional

from qlab_solver.core.constants import DEFAULTS


POTENTIAL_FAMILIES = (
    "harmonic",
    "infinite",
    "finite",
    "step",
    "double",
    "coulomb",
    "custom",
)

# Families with closed-form eigenstates
ANALYTIC_FAMILIES = ("harmonic", "infinite")


@dataclass(frozen=True)
class CustomPotential:
    """
    User-defined potential V(x) on a custom interval.

    Attributes:
        expression: Arithmetic expression in the variable x,
            e.g. "0.5*x**2" or "-2*exp(-x^2)".
        x_min: Left end of the solving interval.
        x_max: Right end of the solving interval.
    """

    expression: str = DEFAULTS["custom_expression"]
    x_min: float = DEFAULTS["custom_min"]
    x_max: float = DEFAULTS["custom_max"]

    def __post_init__(self):
        if self.x_max <= self.x_min:
            raise ValueError(
                f"x_max ({self.x_max}) must exceed x_min ({self.x_min})"
            )


@dataclass(frozen=True)
class PotentialParameters:
    """
    Parameters of the stationary problem.

    Attributes:
        family: Potential family tag (see POTENTIAL_FAMILIES). Unknown tags
            are accepted and evaluate to 0.5·x².
        param1: First family parameter. Meaning depends on family:
            harmonic → ω, infinite/finite → well width, step → step height,
            double → well separation, coulomb → charge Z.
        param2: Second family parameter (finite → depth, double → depth).
        num_states: Number of eigenstates requested.
        system_size: Width of the symmetric domain [-L/2, L/2].
        grid_points: Number of grid points N.
    """

    family: str = "harmonic"
    param1: float = DEFAULTS["param1"]
    param2: float = DEFAULTS["param2"]
    num_states: int = DEFAULTS["num_states"]
    system_size: float = DEFAULTS["system_size"]
    grid_points: int = DEFAULTS["grid_points"]

    def __post_init__(self):
        if self.num_states < 1:
            raise ValueError(f"num_states must be at least 1, got {self.num_states}")
        if self.system_size <= 0:
            raise ValueError(f"system_size must be positive, got {self.system_size}")
        if self.grid_points < 2:
            raise ValueError(f"grid_points must be at least 2, got {self.grid_points}")
        if self.family in ANALYTIC_FAMILIES and self.param1 <= 0:
            raise ValueError(
                f"param1 must be positive for the {self.family} family, got {self.param1}"
            )

    @property
    def is_analytic(self) -> bool:
        """True if the family has closed-form eigenstates."""
        return self.family in ANALYTIC_FAMILIES


@dataclass(frozen=True)
class ScatteringParameters:
    """
    Rectangular-barrier scattering set-up.

    Attributes:
        energy: Incident energy E (>= 0).
        barrier_height: Barrier height V0 (any sign).
        barrier_width: Barrier width a (>= 0).
        barrier_kind: Profile shape for display: single, double, periodic, ramp.
    """

    energy: float = DEFAULTS["scattering_energy"]
    barrier_height: float = DEFAULTS["barrier_height"]
    barrier_width: float = DEFAULTS["barrier_width"]
    barrier_kind: str = "single"

    def __post_init__(self):
        if self.energy < 0:
            raise ValueError(f"energy must be non-negative, got {self.energy}")
        if self.barrier_width < 0:
            raise ValueError(f"barrier_width must be non-negative, got {self.barrier_width}")

    @property
    def is_tunneling(self) -> bool:
        """True if the incident energy is below the barrier top."""
        return self.energy < self.barrier_height


@dataclass(frozen=True)
class PlaybackParameters:
    """Time-evolution playback settings."""

    time_step: float = DEFAULTS["time_step"]
    speed: float = DEFAULTS["playback_speed"]
    initial_state: str = "ground"
    coefficients: Optional[tuple] = field(default=None)

    def __post_init__(self):
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
