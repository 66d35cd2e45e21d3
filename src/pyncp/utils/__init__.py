"""Utility functions."""

from pyncp.utils._seeds import default_rng, spawn_rngs
from pyncp.utils._validation import (
    check_2d,
    check_positive_definite,
    check_square,
    check_symmetric,
    is_corr_cholesky,
)

__all__ = [
    "default_rng",
    "spawn_rngs",
    "check_2d",
    "check_square",
    "check_symmetric",
    "check_positive_definite",
    "is_corr_cholesky",
]
