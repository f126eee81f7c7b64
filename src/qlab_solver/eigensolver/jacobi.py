"""
Cyclic Jacobi eigensolver for dense real symmetric matrices.

Self-contained (numpy only) alternative to the LAPACK routine. Each
rotation zeroes one off-diagonal pair; sweeping over all pairs repeatedly
drives the off-diagonal norm to zero quadratically. Slower than LAPACK
(O(N³) per sweep with a large constant) but with no external numerical
dependency beyond array arithmetic.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from qlab_solver.core.exceptions import EigensolverError


def off_diagonal_norm(A: NDArray) -> float:
    """Frobenius norm of the off-diagonal part of A."""
    return float(np.linalg.norm(A - np.diag(np.diag(A))))


def jacobi_eigh(
    H: NDArray[np.floating],
    tol: float = 1e-12,
    max_sweeps: int = 60,
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Diagonalize a real symmetric matrix by cyclic Jacobi rotations.

    Args:
        H: Symmetric matrix (N × N). Not modified.
        tol: Convergence threshold on ||offdiag(A)|| / ||A||.
        max_sweeps: Maximum number of full sweeps over all (p, q) pairs.

    Returns:
        Tuple (eigenvalues, eigenvectors) with eigenvalues ascending and
        eigenvectors as columns, like numpy.linalg.eigh.

    Raises:
        EigensolverError: If H is not square and symmetric, contains
            non-finite values, or the sweeps are exhausted before
            convergence.
    """
    A = np.array(H, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise EigensolverError(f"Matrix must be square, got shape {A.shape}")
    if not np.all(np.isfinite(A)):
        raise EigensolverError("Matrix contains non-finite entries")
    if not np.allclose(A, A.T, rtol=0, atol=1e-12 * max(1.0, np.max(np.abs(A)))):
        raise EigensolverError("Matrix is not symmetric")

    N = A.shape[0]
    V = np.eye(N)
    scale = np.linalg.norm(A)
    if scale == 0:
        return np.zeros(N), V

    for sweep in range(max_sweeps):
        if off_diagonal_norm(A) <= tol * scale:
            break
        for p in range(N - 1):
            for q in range(p + 1, N):
                apq = A[p, q]
                if apq == 0.0:
                    continue

                theta = (A[q, q] - A[p, p]) / (2 * apq)
                if abs(theta) > 1e150:
                    t = 0.5 / theta
                else:
                    t = np.sign(theta) / (abs(theta) + np.sqrt(theta * theta + 1))
                    if theta == 0:
                        t = 1.0
                c = 1 / np.sqrt(t * t + 1)
                s = t * c

                # A <- Pᵀ A P with P the (p, q) plane rotation
                col_p = A[:, p].copy()
                col_q = A[:, q].copy()
                A[:, p] = c * col_p - s * col_q
                A[:, q] = s * col_p + c * col_q

                row_p = A[p, :].copy()
                row_q = A[q, :].copy()
                A[p, :] = c * row_p - s * row_q
                A[q, :] = s * row_p + c * row_q
                A[p, q] = A[q, p] = 0.0

                vec_p = V[:, p].copy()
                vec_q = V[:, q].copy()
                V[:, p] = c * vec_p - s * vec_q
                V[:, q] = s * vec_p + c * vec_q
    else:
        if off_diagonal_norm(A) > tol * scale:
            raise EigensolverError(
                f"Jacobi iteration did not converge after {max_sweeps} sweeps"
            )

    eigenvalues = np.diag(A).copy()
    order = np.argsort(eigenvalues, kind="stable")
    return eigenvalues[order], V[:, order]
