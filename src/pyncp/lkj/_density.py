"""LKJ-Cholesky log-density and the exact off-diagonal marginal."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy import special, stats

from pyncp._exceptions import InvalidArgumentError
from pyncp.lkj._onion import check_lkj_args
from pyncp.utils._validation import is_corr_cholesky


def lkj_log_normalizer(dim: int, concentration: float) -> float:
    """Log normalizing constant of the LKJ-Cholesky density.

    Parameters
    ----------
    dim : int
        Matrix dimension D >= 1.
    concentration : float
        LKJ concentration nu > 0.

    Returns
    -------
    log_c : float
        Zero for D = 1, where the density is a point mass at [[1]].
    """
    dim, conc = check_lkj_args(dim, concentration)
    if dim == 1:
        return 0.0
    dm1 = dim - 1
    alpha = conc + 0.5 * dm1
    denominator = special.gammaln(alpha) * dm1
    numerator = special.multigammaln(alpha - 0.5, dm1)
    # multigammaln carries (D-1)(D-2)/4 log(pi); the LKJ constant needs D(D-1)/4
    pi_constant = 0.5 * dm1 * math.log(math.pi)
    return float(pi_constant + numerator - denominator)


def lkj_cholesky_log_prob(
    L: NDArray,
    concentration: float,
    *,
    validate_args: bool = True,
) -> NDArray | float:
    """Log-density of a correlation Cholesky factor under LKJ(nu).

    The correlation density det(R)^(nu - 1) = prod_i L_ii^(2(nu - 1)) is
    combined with the Jacobian prod_i L_ii^(D - i) of the map L -> L @ L.T,
    so each diagonal entry enters with exponent 2(nu - 1) + D - i.

    Parameters
    ----------
    L : ndarray, shape (..., D, D)
        Correlation Cholesky factor(s).
    concentration : float
        LKJ concentration nu > 0.
    validate_args : bool
        If True, reject inputs that are not valid correlation Cholesky
        factors.

    Returns
    -------
    log_prob : float or ndarray, shape (...)
    """
    L = np.asarray(L, dtype=np.float64)
    if L.ndim < 2 or L.shape[-1] != L.shape[-2]:
        raise InvalidArgumentError(
            f"L must have shape (..., D, D), got {L.shape}"
        )
    dim, conc = check_lkj_args(L.shape[-1], concentration)
    if validate_args and not is_corr_cholesky(L, tol=1e-6):
        raise InvalidArgumentError("L is not a valid correlation Cholesky factor")

    if dim == 1:
        out = np.zeros(L.shape[:-2])
    else:
        diag = np.diagonal(L, axis1=-2, axis2=-1)[..., 1:]
        order = 2.0 * (conc - 1.0) + dim - np.arange(2, dim + 1)
        out = np.sum(order * np.log(diag), axis=-1) - lkj_log_normalizer(dim, conc)

    if out.ndim == 0:
        return float(out)
    return out


def lkj_offdiag_marginal(dim: int, concentration: float):
    """Exact marginal distribution of any off-diagonal correlation.

    Under LKJ(nu) every off-diagonal entry of R = L @ L.T follows
    Beta(nu - 1 + D/2, nu - 1 + D/2) stretched onto (-1, 1). For D = 2 and
    nu = 1 this is the uniform distribution on (-1, 1).

    Returns
    -------
    dist : frozen scipy.stats.beta
        Distribution on (-1, 1).

    Raises
    ------
    InvalidArgumentError
        If dim < 2 (a 1 x 1 matrix has no off-diagonal entries).
    """
    dim, conc = check_lkj_args(dim, concentration)
    if dim < 2:
        raise InvalidArgumentError("off-diagonal marginal requires dim >= 2")
    shape = conc - 1.0 + 0.5 * dim
    return stats.beta(shape, shape, loc=-1.0, scale=2.0)
