"""Covariance Cholesky factors from marginal scales and correlations.

For a covariance matrix Omega = omega * Omega* * omega where omega is the
diagonal matrix of standard deviations and Omega* = L @ L.T is a correlation
matrix, the lower Cholesky factor of Omega is C = omega @ L: row i of L
multiplied by the i-th scale.
"""

from __future__ import annotations

from pyncp._exceptions import (
    DegenerateScaleError,
    DimensionMismatchError,
    InvalidArgumentError,
)
from pyncp.backend._array_api import array_namespace
from pyncp.utils._validation import check_square


def compose_cov_cholesky(scales, corr_cholesky, *, xp=None):
    """Combine marginal scales with a correlation Cholesky factor.

    Parameters
    ----------
    scales : array-like, shape (D,)
        Positive marginal standard deviations.
    corr_cholesky : array-like, shape (D, D)
        Correlation Cholesky factor L.
    xp : backend, optional
        Array backend. Inferred from inputs if not provided.

    Returns
    -------
    C : array, shape (D, D)
        Covariance Cholesky factor diag(scales) @ L.

    Raises
    ------
    DimensionMismatchError
        If len(scales) differs from the size of L.
    InvalidArgumentError
        If any scale is not strictly positive.
    """
    if xp is None:
        xp = array_namespace(scales, corr_cholesky)

    scales = xp.array(scales, dtype=xp.float64)
    L = xp.array(corr_cholesky, dtype=xp.float64)
    check_square(L, "corr_cholesky")

    if scales.ndim != 1 or scales.shape[0] != L.shape[0]:
        raise DimensionMismatchError(
            f"scales must have length {L.shape[0]}, got shape {tuple(scales.shape)}"
        )
    if not xp.all(scales > 0):
        raise InvalidArgumentError("scales must be strictly positive")

    return xp.reshape(scales, (-1, 1)) * L


def _check_operand(C, v, name: str) -> None:
    check_square(C, "cov_cholesky")
    if v.ndim not in (1, 2) or v.shape[0] != C.shape[0]:
        raise DimensionMismatchError(
            f"{name} must have leading dimension {C.shape[0]}, "
            f"got shape {tuple(v.shape)}"
        )


def apply_cholesky(cov_cholesky, eta, *, xp=None):
    """Color standard-normal vectors: return ``C @ eta``.

    Parameters
    ----------
    cov_cholesky : array-like, shape (D, D)
    eta : array-like, shape (D,) or (D, J)
        One vector, or J independent vectors stored as columns.

    Returns
    -------
    x : array, same shape as ``eta``
    """
    if xp is None:
        xp = array_namespace(cov_cholesky, eta)

    C = xp.array(cov_cholesky, dtype=xp.float64)
    eta = xp.array(eta, dtype=xp.float64)
    _check_operand(C, eta, "eta")
    return xp.matmul(C, eta)


def invert_cholesky(cov_cholesky, x, *, xp=None):
    """Whiten correlated vectors: solve ``C @ eta = x`` by forward substitution.

    Parameters
    ----------
    cov_cholesky : array-like, shape (D, D)
        Lower-triangular covariance Cholesky factor.
    x : array-like, shape (D,) or (D, J)

    Returns
    -------
    eta : array, same shape as ``x``

    Raises
    ------
    DegenerateScaleError
        If C has a zero on its diagonal.
    """
    if xp is None:
        xp = array_namespace(cov_cholesky, x)

    C = xp.array(cov_cholesky, dtype=xp.float64)
    x = xp.array(x, dtype=xp.float64)
    _check_operand(C, x, "x")
    if xp.any(xp.diagonal(C) == 0):
        raise DegenerateScaleError(
            "cov_cholesky has a zero diagonal entry; the system is singular"
        )
    return xp.solve_triangular(C, x, lower=True)


def cov_from_cholesky(cov_cholesky, *, xp=None):
    """Full covariance matrix ``C @ C.T``."""
    if xp is None:
        xp = array_namespace(cov_cholesky)
    C = xp.array(cov_cholesky, dtype=xp.float64)
    check_square(C, "cov_cholesky")
    return xp.matmul(C, xp.transpose(C))


def cov_cholesky_log_det(cov_cholesky, *, xp=None):
    """``log|det C|``, the sum of log absolute diagonal entries."""
    if xp is None:
        xp = array_namespace(cov_cholesky)
    C = xp.array(cov_cholesky, dtype=xp.float64)
    check_square(C, "cov_cholesky")
    return xp.sum(xp.log(xp.abs(xp.diagonal(C))))
