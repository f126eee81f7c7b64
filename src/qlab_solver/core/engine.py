"""
QLab Engine - main interface to the simulation kernel.

The engine is a stateless facade: every call takes explicit request
objects and returns new values, so the caller owns the session state
(current request, spectrum, time) and threads it between calls.

A full recomputation pass is:
    grid → potential → spectrum → uncertainty properties
after which time evolution, tunnelling and qubit gates are independent
calls on the results.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from qlab_solver.analysis.observables import (
    QuantumProperties,
    expectation as _expectation,
    uncertainty_properties,
)
from qlab_solver.core.constants import INFINITE_WALL
from qlab_solver.core.grid import Domain, build_grid, symmetric_grid
from qlab_solver.core.parameters import CustomPotential, PotentialParameters
from qlab_solver.dynamics.evolution import (
    EvolutionFrame,
    evolve as _evolve,
    evolve_frame,
)
from qlab_solver.eigensolver.finite_difference import SOLVER_METHODS
from qlab_solver.eigensolver.result import Spectrum
from qlab_solver.eigensolver.solver import solve_spectrum as _solve_spectrum
from qlab_solver.potentials.families import evaluate_potential as _evaluate_potential
from qlab_solver.qubit.gates import QubitState, apply_gate as _apply_gate
from qlab_solver.scattering.tunneling import TransmissionResult, tunnel as _tunnel


@dataclass(frozen=True)
class SolveRequest(PotentialParameters):
    """
    Everything needed for one stationary solve.

    Extends PotentialParameters with the user-defined potential, used when
    family == "custom". The custom interval replaces the symmetric
    [-system_size/2, system_size/2] domain.
    """

    custom: Optional[CustomPotential] = None

    @property
    def custom_potential(self) -> Optional[CustomPotential]:
        """The active custom potential, or None for the built-in families."""
        if self.family != "custom":
            return None
        return self.custom if self.custom is not None else CustomPotential()

    def domain(self) -> Domain:
        """Grid implied by the request."""
        custom = self.custom_potential
        if custom is not None:
            return build_grid(custom.x_min, custom.x_max, self.grid_points)
        return symmetric_grid(self.system_size, self.grid_points)


@dataclass(frozen=True, eq=False)
class SolveResult:
    """
    Result of a full solve pass.

    Attributes:
        request: The request that produced it.
        domain: Grid.
        potential: Potential profile on the grid.
        spectrum: Eigenstates.
        properties: Uncertainty metrics of the ground state.
    """

    request: SolveRequest
    domain: Domain
    potential: NDArray[np.floating]
    spectrum: Spectrum
    properties: QuantumProperties

    @property
    def used_fallback(self) -> bool:
        """True if the displayed states are placeholders, not a physical solve."""
        return self.spectrum.used_fallback


class QuantumEngine:
    """
    Stateless facade over the simulation kernel.

    Usage:
        engine = QuantumEngine()
        result = engine.solve(SolveRequest(family="double", param1=4.0, param2=8.0))
        frame = engine.evolve_preset(result, "superposition", t=1.0)
        print(result.spectrum.energies, result.used_fallback)
    """

    def __init__(
        self,
        method: str = "lapack",
        wall: float = INFINITE_WALL,
        verbose: bool = False,
    ):
        """
        Initialize the engine.

        Args:
            method: Dense eigensolver for numerical families ("lapack" or "jacobi").
            wall: Height used for the infinite-well walls in the potential profile.
            verbose: Print diagnostic information.
        """
        if method not in SOLVER_METHODS:
            raise ValueError(f"method must be one of {SOLVER_METHODS}, got {method!r}")
        self.method = method
        self.wall = wall
        self.verbose = verbose

    # -------------------------------------------------------------------------
    # Elementary operations
    # -------------------------------------------------------------------------

    def build_grid(self, x_min: float, x_max: float, N: int) -> Domain:
        return build_grid(x_min, x_max, N)

    def evaluate_potential(
        self,
        domain: Domain,
        family: str,
        p1: float,
        p2: float,
        custom_expr: Optional[str] = None,
    ) -> NDArray[np.floating]:
        return _evaluate_potential(domain, family, p1, p2, custom_expr, wall=self.wall)

    def solve_spectrum(
        self,
        domain: Domain,
        potential: NDArray[np.floating],
        family: str,
        p1: float,
        num_states: int,
    ) -> Spectrum:
        """Eigenstates; check .used_fallback on the result."""
        return _solve_spectrum(
            domain, potential, family, p1, num_states,
            method=self.method, verbose=self.verbose,
        )

    def evolve(
        self,
        spectrum: Spectrum,
        coefficients: Sequence[complex],
        t: float,
    ) -> NDArray[np.complexfloating]:
        return _evolve(spectrum, coefficients, t)

    def tunnel(self, E: float, V0: float, a: float) -> TransmissionResult:
        return _tunnel(E, V0, a)

    def expectation(
        self,
        operator: NDArray[np.floating],
        amplitude: NDArray[np.floating],
        domain: Domain,
    ) -> float:
        return _expectation(operator, amplitude, domain.dx)

    def apply_gate(self, state: Union[QubitState, Sequence[complex]], gate: str) -> QubitState:
        if not isinstance(state, QubitState):
            state = QubitState.from_sequence(state)
        return _apply_gate(state, gate)

    # -------------------------------------------------------------------------
    # Full passes
    # -------------------------------------------------------------------------

    def solve(self, request: SolveRequest) -> SolveResult:
        """
        Grid, potential, spectrum and ground-state uncertainties for a request.

        Args:
            request: Solve request.

        Returns:
            SolveResult.
        """
        domain = request.domain()
        custom = request.custom_potential
        potential = self.evaluate_potential(
            domain,
            request.family,
            request.param1,
            request.param2,
            custom.expression if custom is not None else None,
        )
        spectrum = self.solve_spectrum(
            domain, potential, request.family, request.param1, request.num_states
        )
        properties = uncertainty_properties(spectrum, potential)

        if self.verbose:
            print(f"=== Solved {request.family} potential ===")
            print(f"  Method: {spectrum.method}, states: {spectrum.n_states}")
            print(f"  Ground-state energy: {spectrum.ground_state_energy:.6f}")
            print(f"  dX*dP = {properties.uncertainty_product:.4f}")
            if spectrum.used_fallback:
                print("  WARNING: placeholder spectrum, not a physical solution")

        return SolveResult(
            request=request,
            domain=domain,
            potential=potential,
            spectrum=spectrum,
            properties=properties,
        )

    def evolve_preset(
        self,
        result: SolveResult,
        preset: str = "ground",
        t: float = 0.0,
        coefficients: Optional[Sequence[complex]] = None,
    ) -> EvolutionFrame:
        """Time-evolution frame for a solved result and an initial-state preset."""
        return evolve_frame(result.spectrum, t, coefficients=coefficients, preset=preset)
