"""pyncp: reparameterization tools for hierarchical models.

LKJ sampling of correlation Cholesky factors, covariance composition from
scales and correlations, and non-centered transforms for group effects.
"""

__version__ = "0.1.0"

from pyncp._exceptions import (
    DegenerateScaleError,
    DimensionMismatchError,
    GroupIndexError,
    InvalidArgumentError,
    PyncpError,
)

__all__ = [
    "__version__",
    "PyncpError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "DegenerateScaleError",
    "GroupIndexError",
]
