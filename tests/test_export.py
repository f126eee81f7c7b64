"""
Tests for the export snapshot and the tabulated summaries.
"""

import json

import numpy as np
import pytest
from numpy.testing import assert_allclose

from qlab_solver import CustomPotential, QuantumEngine, SolveRequest
from qlab_solver.eigensolver.finite_difference import fallback_spectrum
from qlab_solver.reporting.export import (
    build_snapshot,
    format_session_summary,
    format_spectrum_table,
    snapshot_to_json,
    write_snapshot,
)
from qlab_solver.scattering.tunneling import tunnel


@pytest.fixture
def harmonic_result():
    return QuantumEngine().solve(SolveRequest(family="harmonic", grid_points=50, num_states=3))


@pytest.mark.unit
class TestSnapshot:
    """Test the JSON export document."""

    def test_keys(self, harmonic_result):
        snapshot = build_snapshot(harmonic_result)

        assert set(snapshot) == {
            "parameters", "potential", "customPotential",
            "quantumProperties", "usedFallback", "data",
        }
        assert set(snapshot["parameters"]) == {
            "param1", "param2", "numStates", "systemSize", "gridPoints",
        }
        assert set(snapshot["quantumProperties"]) == {
            "deltaX", "deltaP", "uncertaintyProduct",
        }
        assert set(snapshot["data"]) == {"x", "wavefunctions", "energies", "potential"}

    def test_values(self, harmonic_result):
        snapshot = build_snapshot(harmonic_result)

        assert snapshot["potential"] == "harmonic"
        assert snapshot["customPotential"] is None
        assert snapshot["usedFallback"] is False
        assert snapshot["parameters"]["gridPoints"] == 50
        assert len(snapshot["data"]["x"]) == 50
        assert len(snapshot["data"]["wavefunctions"]) == 3
        assert len(snapshot["data"]["wavefunctions"][0]) == 50
        assert_allclose(snapshot["data"]["energies"], [0.5, 1.5, 2.5])

    def test_custom_potential(self):
        result = QuantumEngine().solve(SolveRequest(
            family="custom",
            custom=CustomPotential("x**4", -2.0, 2.0),
            grid_points=40,
            num_states=2,
        ))
        snapshot = build_snapshot(result)

        assert snapshot["customPotential"] == {"function": "x**4", "min": -2.0, "max": 2.0}
        assert_allclose(snapshot["data"]["x"][0], -2.0)

    def test_json_serializable(self, harmonic_result):
        text = snapshot_to_json(build_snapshot(harmonic_result))
        loaded = json.loads(text)
        assert loaded["parameters"]["numStates"] == 3

    def test_write_snapshot(self, harmonic_result, tmp_path):
        path = write_snapshot(build_snapshot(harmonic_result), tmp_path / "session.json")

        assert path.exists()
        with open(path, encoding="utf-8") as f:
            loaded = json.load(f)
        assert_allclose(loaded["data"]["potential"], harmonic_result.potential)


@pytest.mark.unit
class TestTables:
    """Test the tabulate summaries."""

    def test_spectrum_table(self, harmonic_result):
        table = format_spectrum_table(harmonic_result.spectrum)

        assert "E_n" in table
        assert "1.500000" in table
        assert "WARNING" not in table

    def test_spectrum_table_keeps_six_decimals(self, harmonic_result):
        """Test that round energies are not shortened by number parsing."""
        table = format_spectrum_table(harmonic_result.spectrum, tablefmt="plain")

        assert "0.500000" in table
        assert "2.500000" in table
        assert "0.000000" in table
        assert " 1.5 " not in table

    def test_spectrum_table_marks_fallback(self, harmonic_result):
        table = format_spectrum_table(fallback_spectrum(harmonic_result.domain, 2))
        assert "WARNING" in table

    def test_session_summary(self, harmonic_result):
        summary = format_session_summary(harmonic_result, tablefmt="plain")

        assert "harmonic" in summary
        assert "analytic" in summary
        assert "OK" in summary
        assert "Transmission" not in summary

    def test_session_summary_keeps_formatting(self, harmonic_result):
        summary = format_session_summary(harmonic_result, tablefmt="plain")

        assert "0.500000" in summary
        assert "0.7071" in summary
        assert "0.5000" in summary

    def test_session_summary_with_transmission(self, harmonic_result):
        summary = format_session_summary(harmonic_result, tunnel(5.0, 8.0, 1.0))

        assert "Transmission T" in summary
        assert "tunneling" in summary
        assert np.isfinite(harmonic_result.properties.uncertainty_product)
