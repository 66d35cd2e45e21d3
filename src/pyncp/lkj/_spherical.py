"""Spherical-angle parameterization of correlation Cholesky factors.

Each row of a correlation Cholesky factor L is a unit vector, so it can be
written in hyperspherical coordinates. For row i (0-indexed, i > 0) with
angles theta[i, 0..i-1]:

  L[i, j] = cos(theta[i, j]) * prod_{m<j} sin(theta[i, m])   for j < i
  L[i, i] = prod_{m<i} sin(theta[i, m])
  L[0, 0] = 1

With every angle in (0, pi) the diagonal is strictly positive and the map is
a bijection onto correlation Cholesky factors, with K*(K-1)/2 angles.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyncp._exceptions import DimensionMismatchError, InvalidArgumentError
from pyncp.utils._validation import check_square, is_corr_cholesky


def _angle_index(i: int, j: int) -> int:
    """Map (i, j) with j < i to flat index in theta vector."""
    # Angles are stored row by row: row 1 has 1 angle, row 2 has 2, etc.
    return i * (i - 1) // 2 + j


def angles_to_corr_cholesky(theta: NDArray, K: int) -> NDArray:
    """Build a correlation Cholesky factor from spherical angles.

    Parameters
    ----------
    theta : ndarray, shape (K*(K-1)//2,)
        Angles in (0, pi), stored row by row.
    K : int
        Dimension of the correlation matrix.

    Returns
    -------
    L : ndarray, shape (K, K)
        Lower-triangular factor with unit row norms.

    Raises
    ------
    InvalidArgumentError
        If K < 1 or an angle lies outside (0, pi).
    """
    if K < 1:
        raise InvalidArgumentError(f"K must be >= 1, got {K}")
    theta = np.asarray(theta, dtype=np.float64).ravel()
    n_params = K * (K - 1) // 2
    if theta.shape[0] != n_params:
        raise DimensionMismatchError(
            f"theta must have {n_params} angles for K={K}, got {theta.shape[0]}"
        )
    if not np.all((theta > 0.0) & (theta < np.pi)):
        raise InvalidArgumentError("angles must lie in the open interval (0, pi)")

    L = np.zeros((K, K), dtype=np.float64)
    L[0, 0] = 1.0

    for i in range(1, K):
        prod_sin = 1.0
        for j in range(i):
            t = theta[_angle_index(i, j)]
            L[i, j] = prod_sin * np.cos(t)
            prod_sin *= np.sin(t)
        L[i, i] = prod_sin

    return L


def corr_cholesky_to_angles(L: NDArray) -> NDArray:
    """Recover spherical angles from a correlation Cholesky factor.

    Inverse of :func:`angles_to_corr_cholesky`.

    Parameters
    ----------
    L : ndarray, shape (K, K)
        Valid correlation Cholesky factor.

    Returns
    -------
    theta : ndarray, shape (K*(K-1)//2,)
        Angles in (0, pi).
    """
    L = np.asarray(L, dtype=np.float64)
    check_square(L, "L")
    if not is_corr_cholesky(L, tol=1e-8):
        raise InvalidArgumentError("L is not a valid correlation Cholesky factor")

    K = L.shape[0]
    theta = np.zeros(K * (K - 1) // 2, dtype=np.float64)

    for i in range(1, K):
        prod_sin = 1.0
        for j in range(i):
            # Rounding can push the ratio a hair past +/-1
            c = np.clip(L[i, j] / prod_sin, -1.0, 1.0)
            t = np.arccos(c)
            theta[_angle_index(i, j)] = t
            prod_sin *= np.sin(t)

    return theta
