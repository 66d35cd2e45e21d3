"""Non-centered transforms between auxiliary variables and group effects."""

from pyncp.ncp._scalar import log_abs_det_jacobian, to_centered, to_raw
from pyncp.ncp._multivariate import (
    log_abs_det_jacobian_mvn,
    to_centered_mvn,
    to_raw_mvn,
)

__all__ = [
    "to_centered",
    "to_raw",
    "log_abs_det_jacobian",
    "to_centered_mvn",
    "to_raw_mvn",
    "log_abs_det_jacobian_mvn",
]
