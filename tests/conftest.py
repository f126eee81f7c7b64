"""
Pytest configuration for QLab Solver test suite.

Shared grids, potentials and solved spectra for the unit tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import numpy as np

from qlab_solver.core.grid import symmetric_grid
from qlab_solver.eigensolver.analytic import solve_harmonic, solve_infinite_well


def pytest_configure(config):
    """Called after command line options have been parsed."""
    # Add markers for test organization
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


@pytest.fixture
def default_domain():
    """Default session grid: 150 points on [-5, 5]."""
    return symmetric_grid(10.0, 150)


@pytest.fixture
def small_domain():
    """Smaller grid for the dense Jacobi solver."""
    return symmetric_grid(10.0, 40)


@pytest.fixture
def harmonic_spectrum(default_domain):
    """Analytic oscillator spectrum, ω = 1, five states."""
    return solve_harmonic(default_domain, omega=1.0, num_states=5)


@pytest.fixture
def box_spectrum():
    """Analytic infinite-well spectrum, L = 10, five states."""
    return solve_infinite_well(symmetric_grid(10.0, 150), width=10.0, num_states=5)


@pytest.fixture
def harmonic_potential(default_domain):
    """½ x² on the default grid."""
    return 0.5 * np.asarray(default_domain.x) ** 2
