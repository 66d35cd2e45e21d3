"""Non-centered parameterization for correlated multivariate group effects.

Each group j has K correlated effects (e.g. intercept and slope):
theta[:, j] = mu + C @ eta[:, j], where C = diag(tau) @ L is the covariance
Cholesky factor shared by all groups and eta[:, j] is standard normal.
Columns are transformed independently. Over J groups the log Jacobian is
J * sum(log|C_kk|), again constant in eta.
"""

from __future__ import annotations

from pyncp._exceptions import DegenerateScaleError, DimensionMismatchError
from pyncp.backend._array_api import array_namespace
from pyncp.utils._validation import check_square


def _prepare(values, cov_cholesky, location, xp, name):
    C = xp.array(cov_cholesky, dtype=xp.float64)
    check_square(C, "cov_cholesky")
    K = C.shape[0]

    values = xp.array(values, dtype=xp.float64)
    if values.ndim == 1:
        values = xp.reshape(values, (-1, 1))
    if values.ndim != 2 or values.shape[0] != K:
        raise DimensionMismatchError(
            f"{name} must have shape ({K}, J), got {tuple(values.shape)}"
        )

    if location is None:
        location = xp.zeros((K,), dtype=xp.float64)
    location = xp.array(location, dtype=xp.float64)
    if location.ndim != 1 or location.shape[0] != K:
        raise DimensionMismatchError(
            f"location must have length {K}, got shape {tuple(location.shape)}"
        )
    return C, values, xp.reshape(location, (-1, 1))


def to_centered_mvn(raw_eta, cov_cholesky, location=None, *, xp=None):
    """Map a K x J matrix of auxiliary draws to correlated group effects.

    Parameters
    ----------
    raw_eta : array-like, shape (K, J) or (K,)
        Standard-normal auxiliary variables, one column per group. A 1-D
        input is treated as a single group.
    cov_cholesky : array-like, shape (K, K)
        Covariance Cholesky factor shared across groups.
    location : array-like, shape (K,), optional
        Population means of the K effects. Defaults to zero.

    Returns
    -------
    theta : array, shape (K, J)
        ``location[:, None] + cov_cholesky @ raw_eta``.
    """
    if xp is None:
        xp = array_namespace(raw_eta, cov_cholesky, location)
    C, eta, loc = _prepare(raw_eta, cov_cholesky, location, xp, "raw_eta")
    return loc + xp.matmul(C, eta)


def to_raw_mvn(centered, cov_cholesky, location=None, *, xp=None):
    """Inverse of :func:`to_centered_mvn`, solved by forward substitution.

    Raises
    ------
    DegenerateScaleError
        If ``cov_cholesky`` has a zero diagonal entry.
    """
    if xp is None:
        xp = array_namespace(centered, cov_cholesky, location)
    C, theta, loc = _prepare(centered, cov_cholesky, location, xp, "centered")
    if xp.any(xp.diagonal(C) == 0):
        raise DegenerateScaleError(
            "cov_cholesky has a zero diagonal entry; the transform is not invertible"
        )
    return xp.solve_triangular(C, theta - loc, lower=True)


def log_abs_det_jacobian_mvn(cov_cholesky, n_groups: int = 1, *, xp=None):
    """Log |det| of the multivariate transform over ``n_groups`` groups."""
    if xp is None:
        xp = array_namespace(cov_cholesky)
    C = xp.array(cov_cholesky, dtype=xp.float64)
    check_square(C, "cov_cholesky")
    return n_groups * xp.sum(xp.log(xp.abs(xp.diagonal(C))))
