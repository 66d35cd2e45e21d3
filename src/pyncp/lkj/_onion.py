"""Onion-method sampler for Cholesky factors of LKJ correlation matrices.

The LKJ(nu) density over D x D correlation matrices is proportional to
det(R)^(nu - 1). Its Cholesky factor L is built one row at a time (the
"onion" construction of Lewandowski, Kurowicka & Joe, 2009):

- Row 1 is e1 = [1, 0, ..., 0].
- Row k (k = 2..D) gets an off-diagonal part of squared norm
  y_k ~ Beta((k - 1) / 2, nu + (D - k) / 2), pointing in a direction drawn
  uniformly from the unit sphere in R^(k-1). The diagonal entry is
  sqrt(1 - y_k), so every row has unit norm and L @ L.T has unit diagonal.

Beta variates come from the inverse CDF of standard uniforms, so a draw
depends only on the uniform and normal streams of the supplied source.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyncp._exceptions import InvalidArgumentError
from pyncp.backend._array_api import get_backend
from pyncp.utils._seeds import default_rng

# Lower bound on 1 - y_k so the diagonal stays strictly positive
_TINY = np.finfo(np.float64).tiny


def check_lkj_args(dim, concentration) -> tuple[int, float]:
    """Validate and normalize (dim, concentration).

    Raises
    ------
    InvalidArgumentError
        If dim is not an integer >= 1 or concentration is not a finite
        positive number.
    """
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 1:
        raise InvalidArgumentError(f"dim must be an integer >= 1, got {dim!r}")
    try:
        conc = float(concentration)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"concentration must be a positive number, got {concentration!r}"
        ) from e
    if not math.isfinite(conc) or conc <= 0.0:
        raise InvalidArgumentError(
            f"concentration must be finite and > 0, got {concentration!r}"
        )
    return int(dim), conc


def onion_beta_params(dim: int, concentration: float) -> tuple[NDArray, NDArray]:
    """Beta parameters for the squared off-diagonal norm of rows 2..D.

    Returns
    -------
    a, b : ndarray, shape (D - 1,)
        Row k (k = 2..D) uses Beta(a[k-2], b[k-2]) with
        a = (k - 1) / 2 and b = nu + (D - k) / 2.
    """
    k = np.arange(2, dim + 1, dtype=np.float64)
    a = 0.5 * (k - 1.0)
    b = concentration + 0.5 * (dim - k)
    return a, b


def _beta_ppf(u: NDArray, a: NDArray, b: NDArray) -> NDArray:
    """Inverse Beta CDF that stays finite for very large ``b``.

    ``scipy.stats.beta.ppf`` returns NaN once ``b`` is astronomically large
    (e.g. nu = 1e300). Such entries are recomputed from the complementary
    Beta(b, a), and failing that from the large-b limit
    b * y -> Gamma(a, 1).
    """
    y = np.asarray(stats.beta.ppf(u, a, b), dtype=np.float64)
    bad = ~np.isfinite(y)
    if not np.any(bad):
        return y

    u_b, a_b, b_b = np.broadcast_arrays(u, a, b)
    y[bad] = 1.0 - stats.beta.ppf(1.0 - u_b[bad], b_b[bad], a_b[bad])
    bad = ~np.isfinite(y)
    if np.any(bad):
        y[bad] = stats.gamma.ppf(u_b[bad], a_b[bad]) / b_b[bad]
    if not np.all(np.isfinite(y)):
        raise InvalidArgumentError(
            "Beta inverse CDF is not finite for the given concentration"
        )
    return np.clip(y, 0.0, 1.0)


def _as_shape(size) -> tuple[int, ...]:
    if size is None:
        return ()
    return tuple(int(s) for s in np.atleast_1d(size))


def sample_lkj_cholesky(
    dim: int,
    concentration: float = 1.0,
    rng=None,
    *,
    size=None,
    xp=None,
):
    """Draw Cholesky factors of LKJ-distributed correlation matrices.

    Parameters
    ----------
    dim : int
        Matrix dimension D >= 1.
    concentration : float
        LKJ concentration nu > 0. nu = 1 is uniform over correlation
        matrices, nu > 1 pulls draws toward the identity, nu < 1 favors
        strong correlations.
    rng : random-variate source, optional
        Object with ``random(size)`` and ``standard_normal(size)``, typically
        a ``numpy.random.Generator``. A fresh unseeded generator is used if
        omitted.
    size : int or tuple of int, optional
        Batch shape. None returns a single factor.
    xp : backend, optional
        Backend of the returned array. Defaults to the current backend.

    Returns
    -------
    L : array, shape (*size, D, D)
        Lower-triangular factors with positive diagonal and unit row norms.

    Raises
    ------
    InvalidArgumentError
        If dim < 1 or concentration <= 0.
    """
    dim, conc = check_lkj_args(dim, concentration)
    if rng is None:
        rng = default_rng()
    if xp is None:
        xp = get_backend()

    batch = _as_shape(size)
    L = np.zeros(batch + (dim, dim), dtype=np.float64)
    L[..., 0, 0] = 1.0

    if dim > 1:
        a, b = onion_beta_params(dim, conc)
        u = rng.random(batch + (dim - 1,))
        y = _beta_ppf(u, a, b)

        # Rows 2..D of a strictly lower-triangular normal matrix; each row's
        # first k - 1 entries normalized is uniform on the (k-1)-sphere
        z = np.tril(rng.standard_normal(batch + (dim, dim)), k=-1)[..., 1:, :]
        direction = z / np.linalg.norm(z, axis=-1, keepdims=True)

        L[..., 1:, :] = np.sqrt(y)[..., None] * direction
        rows = np.arange(1, dim)
        L[..., rows, rows] = np.sqrt(np.maximum(1.0 - y, _TINY))

    return xp.array(L, dtype=xp.float64)
