"""
QLab Solver Test Suite.

Unit and integration tests for the stationary solvers and their consumers:
- Grids, potentials and the custom-expression parser
- Analytic, finite-difference and Jacobi eigensolvers
- Time evolution, playback, tunnelling, observables and qubit gates

Test Files:
- test_finite_difference.py: Hamiltonian assembly and the dense solvers
- test_engine.py: QuantumEngine requests and elementary operations
- test_export.py: JSON snapshot and summary tables

Usage:
    # Run all tests
    pytest tests/ -v

    # Run only unit tests (fast)
    pytest tests/ -m unit -v

    # Run only integration tests
    pytest tests/ -m integration -v
"""
