"""
Tests for single-qubit gates and qubit input parsing.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from qlab_solver.core.exceptions import QubitInputError
from qlab_solver.qubit.gates import (
    GATE_NAMES,
    QubitState,
    apply_gate,
    bloch_coordinates,
    canonical_gate_name,
    parse_qubit,
)


ZERO = QubitState(1.0, 0.0)
ONE = QubitState(0.0, 1.0)


@pytest.mark.unit
class TestGates:
    """Test gate actions on basis and superposition states."""

    def test_hadamard_on_zero(self):
        state = apply_gate(ZERO, "hadamard")
        assert_allclose(state.as_array(), [1 / np.sqrt(2), 1 / np.sqrt(2)])

    @pytest.mark.parametrize("gate", ["hadamard", "pauliX", "pauliZ", "cnot"])
    def test_self_inverse(self, gate):
        state = QubitState(0.6, 0.8j)
        twice = apply_gate(apply_gate(state, gate), gate)
        assert_allclose(twice.as_array(), state.as_array(), atol=1e-12)

    def test_pauli_x_swaps(self):
        assert_allclose(apply_gate(QubitState(0.6, 0.8), "pauliX").as_array(), [0.8, 0.6])

    def test_pauli_y(self):
        """Test the real form [β, -α]."""
        assert_allclose(apply_gate(QubitState(0.6, 0.8), "pauliY").as_array(), [0.8, -0.6])

    def test_pauli_y_twice_negates(self):
        state = QubitState(0.6, 0.8)
        twice = apply_gate(apply_gate(state, "pauliY"), "pauliY")
        assert_allclose(twice.as_array(), [-0.6, -0.8])

    def test_pauli_z(self):
        assert_allclose(apply_gate(QubitState(0.6, 0.8), "pauliZ").as_array(), [0.6, -0.8])

    def test_cnot_is_identity(self):
        state = QubitState(0.3, 0.4 + 0.2j)
        assert apply_gate(state, "cnot") == state

    def test_no_renormalization(self):
        """Test that a non-normalized state stays non-normalized."""
        state = QubitState(3.0, 4.0)
        result = apply_gate(state, "hadamard")

        assert_allclose(result.norm, 5.0)
        assert_allclose(result.as_array(), [7 / np.sqrt(2), -1 / np.sqrt(2)])

    @pytest.mark.parametrize("gate", GATE_NAMES)
    def test_preserves_norm(self, gate):
        state = QubitState(0.6, 0.8j)
        assert_allclose(apply_gate(state, gate).norm, 1.0)

    def test_input_untouched(self):
        state = QubitState(0.6, 0.8)
        apply_gate(state, "pauliX")
        assert state.as_tuple() == (0.6, 0.8)

    @pytest.mark.parametrize("alias,name", [
        ("H", "hadamard"),
        ("x", "pauliX"),
        ("NOT", "pauliX"),
        ("PauliY", "pauliY"),
        (" z ", "pauliZ"),
        ("CNOT", "cnot"),
    ])
    def test_aliases(self, alias, name):
        assert canonical_gate_name(alias) == name

    def test_unknown_gate(self):
        with pytest.raises(ValueError):
            apply_gate(ZERO, "toffoli")


@pytest.mark.unit
class TestQubitInput:
    """Test parsing and validation of qubit amplitudes."""

    def test_parse_real(self):
        assert parse_qubit("0.6, 0.8").as_tuple() == (0.6 + 0j, 0.8 + 0j)

    def test_parse_complex(self):
        state = parse_qubit("0.5+0.5j, 0")
        assert_allclose(state.as_array(), [0.5 + 0.5j, 0.0])

    @pytest.mark.parametrize("text", ["1", "1, 0, 0", "a, b", ", 1", "1,", ""])
    def test_parse_errors(self, text):
        with pytest.raises(QubitInputError):
            parse_qubit(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_qubit("nope")

    def test_from_sequence(self):
        assert QubitState.from_sequence([0, 1]) == ONE

    @pytest.mark.parametrize("values", [[1.0], [1, 0, 0], ["a", 0], [np.inf, 0], [np.nan, 1]])
    def test_from_sequence_errors(self, values):
        with pytest.raises(QubitInputError):
            QubitState.from_sequence(values)

    def test_str(self):
        assert str(QubitState(1 / np.sqrt(2), complex(0, -1))) == "0.707, 0.000-1.000j"

    def test_probabilities(self):
        assert_allclose(QubitState(0.6, 0.8j).probabilities(), (0.36, 0.64))


@pytest.mark.unit
class TestBloch:
    """Test Bloch-sphere coordinates."""

    def test_basis_states(self):
        assert_allclose(bloch_coordinates(ZERO), (0.0, 0.0, 1.0), atol=1e-12)
        assert_allclose(bloch_coordinates(ONE), (0.0, 0.0, -1.0), atol=1e-12)

    def test_plus_state(self):
        plus = apply_gate(ZERO, "hadamard")
        assert_allclose(bloch_coordinates(plus), (1.0, 0.0, 0.0), atol=1e-7)

    def test_plus_i_state(self):
        state = QubitState(1 / np.sqrt(2), 1j / np.sqrt(2))
        assert_allclose(bloch_coordinates(state), (0.0, 1.0, 0.0), atol=1e-7)
