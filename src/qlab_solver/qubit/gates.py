"""
Single-qubit gates on a two-amplitude state [α, β].

    hadamard: [(α + β)/√2, (α - β)/√2]
    pauliX:   [β, α]
    pauliY:   [β, -α]
    pauliZ:   [α, -β]
    cnot:     identity (a CNOT needs a second qubit; on one qubit it is a no-op)

States are immutable: applying a gate returns a new state, and bad input
never alters the caller's state. Gates do not renormalize, so a
non-normalized input stays non-normalized.

Note the pauliY row here is [β, -α], i.e. iY up to the global phase i.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from qlab_solver.core.exceptions import QubitInputError


_SQRT_HALF = 1 / np.sqrt(2)

GATE_NAMES = ("hadamard", "pauliX", "pauliY", "pauliZ", "cnot")

_ALIASES = {
    "hadamard": "hadamard",
    "h": "hadamard",
    "paulix": "pauliX",
    "x": "pauliX",
    "not": "pauliX",
    "pauliy": "pauliY",
    "y": "pauliY",
    "pauliz": "pauliZ",
    "z": "pauliZ",
    "cnot": "cnot",
}

# Gate matrices acting on the column vector (α, β)
GATE_MATRICES = {
    "hadamard": np.array([[1, 1], [1, -1]], dtype=complex) * _SQRT_HALF,
    "pauliX": np.array([[0, 1], [1, 0]], dtype=complex),
    "pauliY": np.array([[0, 1], [-1, 0]], dtype=complex),
    "pauliZ": np.array([[1, 0], [0, -1]], dtype=complex),
    "cnot": np.eye(2, dtype=complex),
}


@dataclass(frozen=True)
class QubitState:
    """
    Two complex amplitudes of a qubit.

    Attributes:
        alpha: Amplitude of |0⟩.
        beta: Amplitude of |1⟩.
    """

    alpha: complex = 1.0
    beta: complex = 0.0

    @classmethod
    def from_sequence(cls, amplitudes: Sequence[Union[complex, float]]) -> "QubitState":
        """Build from a two-element sequence; other lengths raise QubitInputError."""
        values = list(amplitudes)
        if len(values) != 2:
            raise QubitInputError(f"A qubit needs exactly 2 amplitudes, got {len(values)}")
        try:
            alpha, beta = (complex(v) for v in values)
        except (TypeError, ValueError) as e:
            raise QubitInputError(f"Amplitudes must be numbers: {e}") from e
        if not (np.isfinite(alpha) and np.isfinite(beta)):
            raise QubitInputError("Amplitudes must be finite")
        return cls(alpha, beta)

    def as_array(self) -> np.ndarray:
        return np.array([self.alpha, self.beta], dtype=complex)

    def as_tuple(self) -> Tuple[complex, complex]:
        return (self.alpha, self.beta)

    @property
    def norm(self) -> float:
        return float(np.sqrt(abs(self.alpha) ** 2 + abs(self.beta) ** 2))

    def probabilities(self) -> Tuple[float, float]:
        """Raw |α|², |β|² (not divided by the norm)."""
        return abs(self.alpha) ** 2, abs(self.beta) ** 2

    def __str__(self) -> str:
        return f"{_format_amplitude(self.alpha)}, {_format_amplitude(self.beta)}"


def _format_amplitude(value: complex) -> str:
    if value.imag == 0:
        return f"{value.real:.3f}"
    return f"{value.real:.3f}{value.imag:+.3f}j"


def canonical_gate_name(gate: str) -> str:
    """Resolve aliases and case (e.g. "X", "paulix") to a name in GATE_NAMES."""
    try:
        return _ALIASES[gate.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown gate {gate!r}; expected one of {GATE_NAMES}") from None


def apply_gate(state: QubitState, gate: str) -> QubitState:
    """
    Apply a single-qubit gate.

    Args:
        state: Input state (left untouched).
        gate: Gate name or alias.

    Returns:
        The new state. No renormalization is applied.
    """
    matrix = GATE_MATRICES[canonical_gate_name(gate)]
    alpha, beta = matrix @ state.as_array()
    return QubitState(complex(alpha), complex(beta))


def parse_qubit(text: str) -> QubitState:
    """
    Parse "α, β" into a state.

    Each amplitude may be a real number or a Python complex literal
    ("0.5+0.5j"). Anything other than exactly two parsable values raises
    QubitInputError, leaving whatever state the caller holds unchanged.
    """
    if not isinstance(text, str):
        raise QubitInputError(f"Expected text, got {type(text).__name__}")
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2 or not all(parts):
        raise QubitInputError(f"Expected two comma-separated amplitudes, got {text!r}")
    try:
        values = [complex(part.replace(" ", "")) for part in parts]
    except ValueError as e:
        raise QubitInputError(f"Cannot parse amplitudes from {text!r}") from e
    return QubitState.from_sequence(values)


def bloch_coordinates(state: QubitState) -> Tuple[float, float, float]:
    """
    Point on the Bloch sphere.

    θ = 2 acos(min(1, |α|)), φ = arg β - arg α, giving
    (sin θ cos φ, sin θ sin φ, cos θ).
    """
    theta = 2 * np.arccos(min(1.0, abs(state.alpha)))
    phi = np.angle(state.beta) - np.angle(state.alpha)
    return (
        float(np.sin(theta) * np.cos(phi)),
        float(np.sin(theta) * np.sin(phi)),
        float(np.cos(theta)),
    )
