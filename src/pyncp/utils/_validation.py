"""Input validation utilities."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyncp._exceptions import DimensionMismatchError


def check_symmetric(A: NDArray, tol: float = 1e-10) -> bool:
    """Check if a matrix is symmetric within tolerance."""
    A = np.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    return np.allclose(A, A.T, atol=tol)


def check_positive_definite(A: NDArray) -> bool:
    """Check if a matrix is positive definite via eigenvalues."""
    if not check_symmetric(A):
        return False
    eigvals = np.linalg.eigvalsh(np.asarray(A))
    return bool(np.all(eigvals > 0))


def check_2d(A, name: str = "A") -> None:
    """Raise DimensionMismatchError if A is not 2-dimensional."""
    if A.ndim != 2:
        raise DimensionMismatchError(
            f"{name} must be 2-dimensional, got shape {tuple(A.shape)}"
        )


def check_square(A, name: str = "A") -> None:
    """Raise DimensionMismatchError if A is not square."""
    check_2d(A, name)
    if A.shape[0] != A.shape[1]:
        raise DimensionMismatchError(
            f"{name} must be square, got shape {tuple(A.shape)}"
        )


def is_corr_cholesky(L: NDArray, tol: float = 1e-9) -> bool:
    """Check that L is a valid correlation Cholesky factor.

    L must be lower-triangular with a strictly positive diagonal and rows of
    unit Euclidean norm. Stacked factors of shape (..., D, D) are accepted;
    all of them must be valid.
    """
    L = np.asarray(L, dtype=np.float64)
    if L.ndim < 2 or L.shape[-1] != L.shape[-2]:
        return False
    if np.any(np.abs(np.triu(L, k=1)) > tol):
        return False
    if np.any(np.diagonal(L, axis1=-2, axis2=-1) <= 0):
        return False
    row_norms = np.sqrt(np.sum(L * L, axis=-1))
    return bool(np.all(np.abs(row_norms - 1.0) <= tol))
