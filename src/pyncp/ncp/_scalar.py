"""Non-centered parameterization for scalar group effects.

A group effect theta_j ~ Normal(mu, sigma) is written as
theta_j = mu + sigma * eta_j with eta_j ~ Normal(0, 1). The sampler moves in
eta, where the geometry no longer narrows as sigma shrinks (the "funnel").
The map eta -> theta has Jacobian determinant sigma per group, which does
not depend on eta.
"""

from __future__ import annotations

from pyncp._exceptions import DegenerateScaleError
from pyncp.backend._array_api import array_namespace


def to_centered(raw_eta, scale, location=0.0, *, xp=None):
    """Map auxiliary standard-normal draws to centered group effects.

    Parameters
    ----------
    raw_eta : float or array-like
        Auxiliary variable(s) eta, one per group.
    scale : float or array-like
        Group-level standard deviation sigma. Broadcasts against ``raw_eta``.
        A zero scale is allowed and collapses every effect onto ``location``.
    location : float or array-like
        Group-level mean mu.

    Returns
    -------
    theta : array
        ``location + scale * raw_eta``.
    """
    if xp is None:
        xp = array_namespace(raw_eta, scale, location)
    raw_eta = xp.array(raw_eta, dtype=xp.float64)
    scale = xp.array(scale, dtype=xp.float64)
    location = xp.array(location, dtype=xp.float64)
    return location + scale * raw_eta


def to_raw(centered, scale, location=0.0, *, xp=None):
    """Inverse of :func:`to_centered`: ``(centered - location) / scale``.

    Raises
    ------
    DegenerateScaleError
        If any scale is zero (a zero-variance group has no raw coordinate).
    """
    if xp is None:
        xp = array_namespace(centered, scale, location)
    centered = xp.array(centered, dtype=xp.float64)
    scale = xp.array(scale, dtype=xp.float64)
    location = xp.array(location, dtype=xp.float64)
    if xp.any(scale == 0):
        raise DegenerateScaleError(
            "scale must be nonzero to recover the raw auxiliary variable"
        )
    return (centered - location) / scale


def log_abs_det_jacobian(scale, n_groups: int = 1, *, xp=None):
    """Log |det d theta / d eta| of the scalar transform.

    Parameters
    ----------
    scale : float or array-like
        Shared scale, or one scale per transformed coordinate.
    n_groups : int
        Number of groups sharing ``scale``.

    Returns
    -------
    log_det : float
        ``n_groups * sum(log|scale|)``; constant in eta. ``-inf`` if a scale
        is zero.
    """
    if xp is None:
        xp = array_namespace(scale)
    scale = xp.array(scale, dtype=xp.float64)
    return n_groups * xp.sum(xp.log(xp.abs(scale)))
