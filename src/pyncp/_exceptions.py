"""Exception hierarchy for pyncp.

Every error is raised synchronously and leaves no partial state behind. Each
class also derives from the builtin exception a caller would expect, so
``except ValueError`` style handling keeps working.
"""

from __future__ import annotations


class PyncpError(Exception):
    """Base class for all pyncp errors."""


class InvalidArgumentError(PyncpError, ValueError):
    """Bad dimension, concentration, or other out-of-domain argument."""


class DimensionMismatchError(PyncpError, ValueError):
    """Vector and matrix sizes are incompatible."""


class DegenerateScaleError(PyncpError, ZeroDivisionError):
    """A zero scale makes a non-centered transform non-invertible."""


class GroupIndexError(PyncpError, IndexError):
    """A group id lies outside the declared group range."""
