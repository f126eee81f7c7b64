"""
Tests for rectangular-barrier transmission.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from qlab_solver.core.parameters import ScatteringParameters
from qlab_solver.scattering.tunneling import (
    REGIME_ABOVE_BARRIER,
    REGIME_NO_BARRIER,
    REGIME_RESONANCE,
    REGIME_TUNNELING,
    transmission_curve,
    tunnel,
)


@pytest.mark.unit
class TestTunnel:
    """Test the closed-form transmission coefficient."""

    def test_below_barrier(self):
        """Test E < V0 against the sinh formula."""
        E, V0, a = 1.0, 10.0, 1.0
        kappa = np.sqrt(2 * (V0 - E))
        expected = 1 / (1 + V0 ** 2 * np.sinh(kappa * a) ** 2 / (4 * E * (V0 - E)))

        result = tunnel(E, V0, a)
        assert result.regime == REGIME_TUNNELING
        assert_allclose(result.T, expected)
        assert result.T < 1e-3
        assert_allclose(result.tunneling_probability, result.T)

    def test_above_barrier(self):
        """Test E > V0 against the sin formula."""
        E, V0, a = 20.0, 10.0, 1.0
        q = np.sqrt(2 * (E - V0))
        expected = 1 / (1 + V0 ** 2 * np.sin(q * a) ** 2 / (4 * E * (E - V0)))

        result = tunnel(E, V0, a)
        assert result.regime == REGIME_ABOVE_BARRIER
        assert_allclose(result.T, expected)
        assert result.tunneling_probability is None

    def test_resonance(self):
        """Test the E = V0 limit 1/(1 + a² V0 / 2)."""
        result = tunnel(8.0, 8.0, 1.5)
        assert result.regime == REGIME_RESONANCE
        assert_allclose(result.T, 1 / (1 + 1.5 ** 2 * 8.0 / 2))

    def test_resonance_is_continuous(self):
        """Test that the E = V0 branch joins both neighbouring formulas."""
        V0, a = 8.0, 1.0
        at = tunnel(V0, V0, a).T
        assert_allclose(tunnel(V0 - 1e-6, V0, a).T, at, rtol=1e-4)
        assert_allclose(tunnel(V0 + 1e-6, V0, a).T, at, rtol=1e-4)

    def test_default_scenario(self):
        """Test E = 5, V0 = 8, a = 1 tunnels partially."""
        params = ScatteringParameters()
        result = tunnel(params.energy, params.barrier_height, params.barrier_width)

        assert params.is_tunneling
        assert 0 < result.T < 1
        assert_allclose(result.T + result.R, 1.0)

    def test_transmission_resonance_above_barrier(self):
        """Test T = 1 when q a = nπ."""
        V0, a = 5.0, 1.0
        E = V0 + (np.pi / a) ** 2 / 2
        assert_allclose(tunnel(E, V0, a).T, 1.0)

    def test_zero_width(self):
        result = tunnel(3.0, 10.0, 0.0)
        assert result.regime == REGIME_NO_BARRIER
        assert result.T == 1.0
        assert result.R == 0.0

    def test_zero_energy(self):
        result = tunnel(0.0, 5.0, 1.0)
        assert result.T == 0.0
        assert result.R == 1.0

    def test_thick_barrier_does_not_overflow(self):
        result = tunnel(0.5, 100.0, 100.0)
        assert np.isfinite(result.T)
        assert result.T == 0.0

    def test_well(self):
        """Test a negative V0 (well) stays in [0, 1]."""
        result = tunnel(2.0, -3.0, 1.0)
        assert result.regime == REGIME_ABOVE_BARRIER
        assert 0 < result.T <= 1

    @pytest.mark.parametrize("E,a", [(-1.0, 1.0), (1.0, -0.5)])
    def test_invalid_input(self, E, a):
        with pytest.raises(ValueError):
            tunnel(E, 5.0, a)

    @pytest.mark.parametrize("V0", [-5.0, 0.0, 1.0, 8.0, 30.0])
    @pytest.mark.parametrize("a", [0.1, 1.0, 3.0])
    def test_conservation(self, V0, a):
        """Test 0 ≤ T ≤ 1 and T + R = 1 over a range of energies."""
        for E in np.linspace(0.0, 40.0, 81):
            result = tunnel(E, V0, a)
            assert 0.0 <= result.T <= 1.0
            assert_allclose(result.T + result.R, 1.0)


@pytest.mark.unit
class TestTransmissionCurve:
    """Test T(E) sampling."""

    def test_default_energies(self):
        energies, T = transmission_curve(8.0, 1.0)
        assert len(energies) == len(T) == 100
        assert_allclose(energies[[0, -1]], [0.1, 20.1])

    def test_rises_through_barrier_top(self):
        energies, T = transmission_curve(8.0, 1.0, np.array([1.0, 4.0, 7.0]))
        assert np.all(np.diff(T) > 0)
