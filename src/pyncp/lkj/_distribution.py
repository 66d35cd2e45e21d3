"""LKJ distribution over correlation Cholesky factors."""

from __future__ import annotations

from numpy.typing import NDArray

from pyncp.lkj._density import (
    lkj_cholesky_log_prob,
    lkj_log_normalizer,
    lkj_offdiag_marginal,
)
from pyncp.lkj._onion import check_lkj_args, sample_lkj_cholesky


class LKJCholesky:
    """LKJ(nu) distribution on D x D correlation Cholesky factors.

    Parameters
    ----------
    dim : int
        Matrix dimension D >= 1.
    concentration : float
        Concentration nu > 0.

    Examples
    --------
    >>> from pyncp.utils import default_rng
    >>> dist = LKJCholesky(3, concentration=2.0)
    >>> L = dist.sample(default_rng(0))
    >>> dist.log_prob(L)  # doctest: +SKIP
    """

    def __init__(self, dim: int, concentration: float = 1.0):
        self.dim, self.concentration = check_lkj_args(dim, concentration)

    def __repr__(self) -> str:
        return f"LKJCholesky(dim={self.dim}, concentration={self.concentration})"

    def sample(self, rng=None, size=None, *, xp=None):
        """Draw factors; see :func:`sample_lkj_cholesky`."""
        return sample_lkj_cholesky(
            self.dim, self.concentration, rng, size=size, xp=xp
        )

    def log_prob(self, L: NDArray, *, validate_args: bool = True):
        """Normalized log-density of ``L``."""
        return lkj_cholesky_log_prob(
            L, self.concentration, validate_args=validate_args
        )

    @property
    def log_normalizer(self) -> float:
        return lkj_log_normalizer(self.dim, self.concentration)

    def offdiag_marginal(self):
        """Frozen ``scipy.stats.beta`` on (-1, 1) for every off-diagonal entry."""
        return lkj_offdiag_marginal(self.dim, self.concentration)
