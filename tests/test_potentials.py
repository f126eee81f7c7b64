"""
Tests for potential profiles and barrier shapes.
"""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose

from qlab_solver.core.grid import build_grid, symmetric_grid
from qlab_solver.potentials.barriers import (
    barrier_profile,
    gaussian_wavepacket,
    scattering_grid,
)
from qlab_solver.potentials.families import double_well, evaluate_potential


@pytest.fixture
def domain():
    return build_grid(-5, 5, 101)


class TestPotentialFamilies:
    """Test the built-in potential families."""

    def test_harmonic(self, domain):
        """Test V = ½ ω² x²."""
        V = evaluate_potential(domain, "harmonic", 2.0, 0.0)
        assert_allclose(V, 0.5 * 4.0 * domain.x ** 2)

    def test_infinite_well(self, domain):
        """Test zero inside the box and the large wall outside."""
        V = evaluate_potential(domain, "infinite", 4.0, 0.0)

        inside = np.abs(domain.x) <= 2.0
        assert_allclose(V[inside], 0.0)
        assert_allclose(V[~inside], 1000.0)

    def test_infinite_well_custom_wall(self, domain):
        V = evaluate_potential(domain, "infinite", 4.0, 0.0, wall=50.0)
        assert V.max() == 50.0

    def test_finite_well(self, domain):
        """Test depth p2 outside |x| ≤ p1/2."""
        V = evaluate_potential(domain, "finite", 2.0, 3.5)

        inside = np.abs(domain.x) <= 1.0
        assert_allclose(V[inside], 0.0)
        assert_allclose(V[~inside], 3.5)

    def test_step(self, domain):
        """Test p1 for x > 0 and 0 elsewhere (including x = 0)."""
        V = evaluate_potential(domain, "step", 2.5, 0.0)

        assert_allclose(V[domain.x > 0], 2.5)
        assert_allclose(V[domain.x <= 0], 0.0)

    def test_double_well_minima(self, domain):
        """Test that the double well vanishes at x = ±p1/2 with barrier p2/16 at 0."""
        x = np.array([-2.0, 0.0, 2.0])
        V = double_well(x, separation=4.0, depth=8.0)

        assert_allclose(V[[0, 2]], 0.0, atol=1e-12)
        assert_allclose(V[1], 8.0 * 4.0 ** 2 / 4.0 ** 4)

    def test_double_well_zero_separation(self, domain):
        """Test that p1 = 0 does not divide by zero."""
        V = evaluate_potential(domain, "double", 0.0, 1.0)

        assert np.all(np.isfinite(V))
        assert_allclose(V, domain.x ** 4)

    def test_coulomb_is_finite(self, domain):
        """Test the softened Coulomb potential at the origin."""
        V = evaluate_potential(domain, "coulomb", 1.0, 0.0)

        assert np.all(np.isfinite(V))
        assert_allclose(V[50], -1.0 / 0.1)
        assert_allclose(V, -1.0 / (np.abs(domain.x) + 0.1))

    def test_unknown_family_defaults_to_half_x_squared(self, domain):
        V = evaluate_potential(domain, "no-such-family", 7.0, 7.0)
        assert_allclose(V, 0.5 * domain.x ** 2)

    def test_returns_fresh_array(self, domain):
        """Test that the profile is a new, writable array."""
        V1 = evaluate_potential(domain, "harmonic", 1.0, 0.0)
        V2 = evaluate_potential(domain, "harmonic", 1.0, 0.0)
        V1[0] = -1.0
        assert V2[0] != -1.0
        assert len(V1) == domain.N


class TestCustomPotential:
    """Test user expressions in the potential evaluator."""

    def test_matches_builtin(self, domain):
        """Test that 0.5*x**2 reproduces the harmonic profile."""
        V = evaluate_potential(domain, "custom", 0, 0, "0.5*x**2")
        assert_allclose(V, 0.5 * domain.x ** 2)

    def test_pointwise_failure_gives_zero(self):
        """Test that a failing point is 0 while the others are kept."""
        domain = build_grid(-1, 1, 3)
        V = evaluate_potential(domain, "custom", 0, 0, "1/x")

        assert_allclose(V, [-1.0, 0.0, 1.0])

    def test_domain_error_gives_zero(self):
        domain = build_grid(-4, 4, 3)
        V = evaluate_potential(domain, "custom", 0, 0, "sqrt(x)")
        assert_allclose(V, [0.0, 0.0, 2.0])

    def test_syntax_error_gives_zero_profile(self, domain):
        """Test that an unparsable expression never fails the call."""
        with pytest.warns(RuntimeWarning):
            V = evaluate_potential(domain, "custom", 0, 0, "0.5*x**")
        assert_allclose(V, 0.0)

    @pytest.mark.parametrize("text", [
        "(" * 400 + "x" + ")" * 400,
        "-" * 2000 + "x",
        "+".join(["x"] * 1000),
    ])
    def test_deeply_nested_expression_gives_zero_profile(self, text):
        with pytest.warns(RuntimeWarning):
            V = evaluate_potential(symmetric_grid(10, 20), "custom", 1, 1, text)
        assert_allclose(V, 0.0)

    def test_code_is_not_executed(self, domain):
        """Test that arbitrary Python is rejected, not evaluated."""
        with pytest.warns(RuntimeWarning):
            V = evaluate_potential(domain, "custom", 0, 0, "__import__('os').getcwd()")
        assert_allclose(V, 0.0)

    def test_missing_expression(self, domain):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            V = evaluate_potential(domain, "custom", 0, 0, None)
        assert_allclose(V, 0.0)


class TestBarriers:
    """Test the scattering barrier profiles."""

    def test_scattering_grid(self):
        grid = scattering_grid()
        assert grid.N == 500
        assert grid.x_min == -10.0
        assert grid.x_max == 10.0

    def test_single(self):
        x = np.array([-1.0, -0.4, 0.0, 0.4, 1.0])
        assert_allclose(barrier_profile(x, "single", 8.0, 1.0), [0, 8, 8, 8, 0])

    def test_double(self):
        """Test two barriers centred at ±w/2."""
        x = np.array([-1.0, 0.0, 1.0, 2.0])
        V = barrier_profile(x, "double", 5.0, 2.0)
        assert_allclose(V, [5.0, 0.0, 5.0, 0.0])

    def test_periodic(self):
        x = np.array([0.0, 0.5, 1.0, 1.5])
        V = barrier_profile(x, "periodic", 3.0, 1.0)
        assert_allclose(V, [0.0, 3.0, 0.0, 3.0])

    def test_ramp(self):
        """Test h(1 - exp(-x/w)) for x > 0 and 0 for x ≤ 0."""
        x = np.array([-50.0, 0.0, 1.0, 100.0])
        V = barrier_profile(x, "ramp", 2.0, 1.0)

        assert np.all(np.isfinite(V))
        assert_allclose(V, [0.0, 0.0, 2.0 * (1 - np.exp(-1.0)), 2.0])

    def test_unknown_kind_is_single(self):
        x = np.linspace(-2, 2, 9)
        assert_allclose(
            barrier_profile(x, "zigzag", 1.0, 1.0),
            barrier_profile(x, "single", 1.0, 1.0),
        )

    def test_wavepacket_translates(self):
        """Test that the packet peak moves with unit speed."""
        grid = symmetric_grid(20.0, 2001)
        psi0 = gaussian_wavepacket(grid.x, t=0.0)
        psi3 = gaussian_wavepacket(grid.x, t=3.0)

        assert_allclose(grid.x[np.argmax(psi0)], -5.0, atol=0.02)
        assert_allclose(grid.x[np.argmax(psi3)], -2.0, atol=0.02)
