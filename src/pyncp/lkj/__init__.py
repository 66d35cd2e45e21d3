"""LKJ distribution over correlation Cholesky factors."""

from pyncp.lkj._onion import sample_lkj_cholesky
from pyncp.lkj._density import (
    lkj_cholesky_log_prob,
    lkj_log_normalizer,
    lkj_offdiag_marginal,
)
from pyncp.lkj._distribution import LKJCholesky
from pyncp.lkj._spherical import angles_to_corr_cholesky, corr_cholesky_to_angles
from pyncp.lkj._summary import offdiag_summary

__all__ = [
    "LKJCholesky",
    "sample_lkj_cholesky",
    "lkj_cholesky_log_prob",
    "lkj_log_normalizer",
    "lkj_offdiag_marginal",
    "angles_to_corr_cholesky",
    "corr_cholesky_to_angles",
    "offdiag_summary",
]
