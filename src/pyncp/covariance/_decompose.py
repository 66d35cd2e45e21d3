"""Split a covariance matrix into scales and a correlation matrix."""

from __future__ import annotations

from pyncp._exceptions import InvalidArgumentError
from pyncp.backend._array_api import array_namespace
from pyncp.utils._validation import check_square, check_symmetric


def decompose_cov(capomega, *, xp=None):
    """Decompose Omega = omega * Omega* * omega.

    Parameters
    ----------
    capomega : array-like, shape (K, K)
        Symmetric covariance matrix with positive diagonal.
    xp : backend, optional
        Array backend. Inferred from input if not provided.

    Returns
    -------
    scales : array, shape (K,)
        Standard deviations sqrt(diag(Omega)).
    corr : array, shape (K, K)
        Correlation matrix Omega* with exact unit diagonal.
    """
    if xp is None:
        xp = array_namespace(capomega)

    capomega = xp.array(capomega, dtype=xp.float64)
    check_square(capomega, "capomega")
    if not check_symmetric(xp.to_numpy(capomega), tol=1e-10):
        raise InvalidArgumentError("capomega must be symmetric")

    variances = xp.diagonal(capomega)
    if not xp.all(variances > 0):
        raise InvalidArgumentError("capomega must have a positive diagonal")

    scales = xp.sqrt(variances)
    inv = 1.0 / scales
    corr = xp.reshape(inv, (-1, 1)) * capomega * xp.reshape(inv, (1, -1))

    K = capomega.shape[0]
    for i in range(K):
        corr[i, i] = 1.0

    return scales, corr
