"""Covariance Cholesky composition from scales and correlation factors."""

from pyncp.covariance._compose import (
    apply_cholesky,
    compose_cov_cholesky,
    cov_cholesky_log_det,
    cov_from_cholesky,
    invert_cholesky,
)
from pyncp.covariance._decompose import decompose_cov

__all__ = [
    "compose_cov_cholesky",
    "apply_cholesky",
    "invert_cholesky",
    "cov_from_cholesky",
    "cov_cholesky_log_det",
    "decompose_cov",
]
