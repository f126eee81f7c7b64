"""
Potential energy profiles V(x) for the built-in potential families.

V(x) is evaluated on the sample positions of a Domain and returned as a
fresh array aligned index-for-index with domain.x.

| family   | V(x)                                   |
|----------|----------------------------------------|
| harmonic | ½ p1² x²                               |
| infinite | 0 for |x| ≤ p1/2, else a large wall    |
| finite   | 0 for |x| ≤ p1/2, else p2              |
| step     | p1 for x > 0, else 0                   |
| double   | p2 (x² − (p1/2)²)² / p1⁴               |
| coulomb  | −p1 / (|x| + 0.1)                      |
| custom   | user expression, 0 where it fails      |

Any other tag falls back to ½ x².
"""

import warnings
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.constants import COULOMB_SOFTENING, INFINITE_WALL
from qlab_solver.core.exceptions import ExpressionError
from qlab_solver.core.grid import Domain
from qlab_solver.potentials.expression import Expression, compile_expression


def harmonic(x: NDArray, omega: float) -> NDArray:
    """V = ½ m ω² x² with m = 1."""
    return 0.5 * omega * omega * x * x


def infinite_well(x: NDArray, width: float, wall: float = INFINITE_WALL) -> NDArray:
    """Box of the given width; the walls are a finite stand-in for +∞."""
    return np.where(np.abs(x) > width / 2, wall, 0.0)


def finite_well(x: NDArray, width: float, depth: float) -> NDArray:
    """Zero inside |x| ≤ width/2, `depth` outside."""
    return np.where(np.abs(x) <= width / 2, 0.0, depth)


def step(x: NDArray, height: float) -> NDArray:
    return np.where(x > 0, height, 0.0)


def double_well(x: NDArray, separation: float, depth: float) -> NDArray:
    """
    Quartic double well with minima at x = ±separation/2.

    The barrier at x = 0 has height depth/16. A zero separation would make
    the p1⁴ denominator vanish; it is then treated as 1.
    """
    denominator = separation ** 4
    if denominator == 0:
        denominator = 1.0
    return depth * (x * x - (separation / 2) ** 2) ** 2 / denominator


def coulomb(x: NDArray, charge: float) -> NDArray:
    """Softened 1D Coulomb attraction, finite at the origin."""
    return -charge / (np.abs(x) + COULOMB_SOFTENING)


def custom(x: NDArray, expression: Union[str, Expression]) -> NDArray:
    """
    Evaluate a user expression point by point.

    A point where evaluation fails (domain error, division by zero,
    overflow, non-finite value) gets V = 0; the rest of the profile is
    kept. An expression that does not parse at all yields V = 0 everywhere
    and a RuntimeWarning.
    """
    V = np.zeros(len(x))
    if not isinstance(expression, Expression):
        try:
            expression = compile_expression(expression)
        except ExpressionError as e:
            warnings.warn(f"Custom potential ignored: {e}", RuntimeWarning)
            return V

    for i, xi in enumerate(x):
        try:
            V[i] = expression.evaluate(xi)
        except ExpressionError:
            V[i] = 0.0
    return V


def evaluate_potential(
    domain: Domain,
    family: str,
    p1: float = 1.0,
    p2: float = 1.0,
    custom_expr: Optional[Union[str, Expression]] = None,
    wall: float = INFINITE_WALL,
) -> NDArray[np.floating]:
    """
    Sample the potential of a family on the domain.

    Args:
        domain: Grid to evaluate on.
        family: Family tag (harmonic, infinite, finite, step, double,
            coulomb, custom). Unknown tags give ½ x².
        p1: First family parameter.
        p2: Second family parameter.
        custom_expr: Expression text (or compiled Expression) for the
            custom family.
        wall: Height used for the infinite-well walls.

    Returns:
        New float array of length domain.N.
    """
    x = np.asarray(domain.x, dtype=float)

    if family == "harmonic":
        V = harmonic(x, p1)
    elif family == "infinite":
        V = infinite_well(x, p1, wall)
    elif family == "finite":
        V = finite_well(x, p1, p2)
    elif family == "step":
        V = step(x, p1)
    elif family == "double":
        V = double_well(x, p1, p2)
    elif family == "coulomb":
        V = coulomb(x, p1)
    elif family == "custom":
        V = custom(x, custom_expr if custom_expr is not None else "0")
    else:
        V = 0.5 * x * x

    return np.array(V, dtype=float)
