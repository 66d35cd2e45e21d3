"""Linear predictor for hierarchical regression models.

For observation n in group j = group_index[n]:

    mean[n] = alpha + theta[j]            (varying intercepts)
    mean[n] = alpha + theta[j] + x[n] * beta[j]   (varying slopes)

``theta`` and ``beta`` are the centered group effects produced by the
non-centered transforms in :mod:`pyncp.ncp`.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyncp._exceptions import (
    DimensionMismatchError,
    GroupIndexError,
    InvalidArgumentError,
)
from pyncp.backend._array_api import array_namespace
from pyncp.models._control import PredictorControl
from pyncp.utils._seeds import default_rng


def check_group_index(group_index, n_groups: int, index_base: int = 1) -> NDArray:
    """Validate group ids and convert them to zero-based positions.

    Parameters
    ----------
    group_index : array-like of int, shape (N,)
        Group id of each observation.
    n_groups : int
        Number of groups J.
    index_base : int
        1 if ids run 1..J, 0 if they run 0..J-1.

    Returns
    -------
    idx : ndarray of int64, shape (N,)
        Zero-based group positions.

    Raises
    ------
    GroupIndexError
        If any id lies outside [index_base, index_base + J - 1].
    """
    idx = np.asarray(group_index)
    if idx.ndim != 1:
        raise DimensionMismatchError(
            f"group_index must be 1-dimensional, got shape {idx.shape}"
        )
    if idx.dtype == np.bool_:
        raise InvalidArgumentError("group_index must contain integer ids, not booleans")
    if idx.size and not np.issubdtype(idx.dtype, np.integer):
        as_int = idx.astype(np.int64)
        if not np.array_equal(as_int, idx):
            raise InvalidArgumentError("group_index must contain integer ids")
        idx = as_int

    idx = idx.astype(np.int64) - index_base
    bad = (idx < 0) | (idx >= n_groups)
    if np.any(bad):
        first = int(idx[bad][0]) + index_base
        raise GroupIndexError(
            f"group id {first} outside [{index_base}, {index_base + n_groups - 1}]"
        )
    return idx


def predict_means(
    global_intercept,
    group_effects,
    group_index,
    *,
    x=None,
    slope_effects=None,
    n_groups: int | None = None,
    index_base: int = 1,
    xp=None,
):
    """Per-observation predicted means of a hierarchical linear model.

    Parameters
    ----------
    global_intercept : float
        Population intercept alpha.
    group_effects : array-like, shape (J,)
        Centered group intercept offsets theta.
    group_index : array-like of int, shape (N,)
        Group id of each observation.
    x : array-like, shape (N,) or (N, P), optional
        Covariate(s). Must be given together with ``slope_effects``.
    slope_effects : array-like, shape (J,) or (J, P), optional
        Group-specific slopes beta.
    n_groups : int, optional
        Declared number of groups J. Defaults to ``len(group_effects)``.
    index_base : int
        1 for ids 1..J, 0 for ids 0..J-1.
    xp : backend, optional
        Array backend. Inferred from inputs if not provided.

    Returns
    -------
    means : array, shape (N,)

    Raises
    ------
    GroupIndexError
        If a group id is outside the declared range.
    DimensionMismatchError
        If array lengths disagree, or only one of ``x``/``slope_effects``
        is given.
    """
    if xp is None:
        xp = array_namespace(group_effects, x, slope_effects)

    effects = xp.array(group_effects, dtype=xp.float64)
    if effects.ndim != 1:
        raise DimensionMismatchError(
            f"group_effects must be 1-dimensional, got shape {tuple(effects.shape)}"
        )
    J = effects.shape[0] if n_groups is None else int(n_groups)
    if effects.shape[0] != J:
        raise DimensionMismatchError(
            f"group_effects must have length {J}, got {effects.shape[0]}"
        )

    idx = check_group_index(group_index, J, index_base)
    pos = xp.array(idx, dtype=xp.int64)
    means = global_intercept + effects[pos]

    if (x is None) != (slope_effects is None):
        raise DimensionMismatchError("x and slope_effects must be given together")
    if x is None:
        return means

    x = xp.array(x, dtype=xp.float64)
    slopes = xp.array(slope_effects, dtype=xp.float64)
    if x.ndim == 0 or slopes.ndim == 0:
        raise DimensionMismatchError(
            "x and slope_effects must be arrays with one entry per observation "
            "and per group"
        )
    if x.shape[0] != idx.shape[0]:
        raise DimensionMismatchError(
            f"x must have {idx.shape[0]} rows, got {x.shape[0]}"
        )
    if slopes.shape[0] != J:
        raise DimensionMismatchError(
            f"slope_effects must have {J} rows, got {slopes.shape[0]}"
        )

    if x.ndim == 1 and slopes.ndim == 1:
        return means + x * slopes[pos]
    if x.ndim == 2 and slopes.ndim == 2 and x.shape[1] == slopes.shape[1]:
        return means + xp.sum(x * slopes[pos], axis=1)
    raise DimensionMismatchError(
        f"x with shape {tuple(x.shape)} does not match slope_effects with "
        f"shape {tuple(slopes.shape)}"
    )


def replicate(means, noise_scale, rng=None, *, n_replicates: int | None = None, xp=None):
    """Posterior-predictive replicates y_rep[n] ~ Normal(means[n], noise_scale).

    Parameters
    ----------
    means : array-like, shape (N,)
        Predicted means.
    noise_scale : float
        Observation noise standard deviation sigma_y >= 0.
    rng : random-variate source, optional
        Object with ``standard_normal(size)``.
    n_replicates : int, optional
        If given, return that many replicate data sets stacked on axis 0.

    Returns
    -------
    y_rep : array, shape (N,) or (n_replicates, N)

    Raises
    ------
    InvalidArgumentError
        If noise_scale is negative or not finite.
    """
    if xp is None:
        xp = array_namespace(means)
    means_np = np.asarray(xp.to_numpy(means), dtype=np.float64)

    sigma = float(noise_scale)
    if not np.isfinite(sigma) or sigma < 0.0:
        raise InvalidArgumentError(
            f"noise_scale must be finite and >= 0, got {noise_scale!r}"
        )
    if rng is None:
        rng = default_rng()

    shape = means_np.shape if n_replicates is None else (int(n_replicates),) + means_np.shape
    y_rep = means_np + sigma * rng.standard_normal(shape)
    return xp.array(y_rep, dtype=xp.float64)


class HierarchicalPredictor:
    """Linear predictor with a fixed observation-to-group mapping.

    The group mapping and covariates are validated once at construction and
    stored read-only. Each ``predict`` call only combines the current
    parameter values.

    Parameters
    ----------
    group_index : array-like of int, shape (N,)
        Group id of each observation.
    n_groups : int
        Number of groups J.
    x : array-like, shape (N,) or (N, P), optional
        Covariate(s) for a varying-slope term.
    control : PredictorControl, optional
        Configuration. Defaults to ``PredictorControl()``.
    """

    def __init__(
        self,
        group_index,
        n_groups: int,
        x=None,
        control: PredictorControl | None = None,
    ):
        self.control = control or PredictorControl()
        if isinstance(n_groups, bool) or int(n_groups) != n_groups or n_groups < 1:
            raise InvalidArgumentError(f"n_groups must be an integer >= 1, got {n_groups!r}")
        self.n_groups = int(n_groups)

        self._idx = check_group_index(group_index, self.n_groups, self.control.index_base)
        self._idx.setflags(write=False)

        if x is not None:
            x = np.array(x, dtype=np.float64)
            if x.ndim not in (1, 2) or x.shape[0] != self._idx.shape[0]:
                raise DimensionMismatchError(
                    f"x must have {self._idx.shape[0]} rows, got shape {x.shape}"
                )
            x.setflags(write=False)
        self._x = x

        if self.control.verbose >= 1:
            print(f"HierarchicalPredictor with {self.n_obs} observations, "
                  f"{self.n_groups} groups")
            if self._x is None:
                print("  Slope term: none")
            else:
                print(f"  Slope term: {self.n_slopes} covariate(s)")

    @property
    def n_obs(self) -> int:
        return int(self._idx.shape[0])

    @property
    def group_index(self) -> NDArray:
        """Group ids in the caller's numbering (read-only)."""
        ids = self._idx + self.control.index_base
        ids.setflags(write=False)
        return ids

    @property
    def has_slope(self) -> bool:
        return self._x is not None

    @property
    def n_slopes(self) -> int:
        if self._x is None:
            return 0
        return 1 if self._x.ndim == 1 else int(self._x.shape[1])

    def _check_finite(self, *values) -> None:
        for v in values:
            if v is not None and not np.all(np.isfinite(np.asarray(v, dtype=np.float64))):
                raise InvalidArgumentError("intercept and effects must be finite")

    def predict(self, global_intercept, group_effects, slope_effects=None, *, xp=None):
        """Predicted mean for every observation.

        Raises
        ------
        DimensionMismatchError
            If a slope term is configured but ``slope_effects`` is missing,
            or vice versa.
        """
        if self.control.check_finite:
            self._check_finite(global_intercept, group_effects, slope_effects)
        return predict_means(
            global_intercept,
            group_effects,
            self._idx,
            x=self._x,
            slope_effects=slope_effects,
            n_groups=self.n_groups,
            index_base=0,
            xp=xp,
        )

    def predict_from_matrix(self, global_intercept, centered, *, xp=None):
        """Predict from a K x J matrix of correlated group effects.

        Row 0 holds the intercept offsets and rows 1..K-1 the slopes, as
        returned by :func:`pyncp.ncp.to_centered_mvn`. K must equal
        ``1 + n_slopes``.
        """
        if xp is None:
            xp = array_namespace(centered)
        centered = xp.array(centered, dtype=xp.float64)
        K = 1 + self.n_slopes
        if centered.ndim != 2 or tuple(centered.shape) != (K, self.n_groups):
            raise DimensionMismatchError(
                f"centered must have shape ({K}, {self.n_groups}), "
                f"got {tuple(centered.shape)}"
            )

        slopes = None
        if self.has_slope:
            slopes = centered[1] if self._x.ndim == 1 else xp.transpose(centered[1:])
        return self.predict(global_intercept, centered[0], slopes, xp=xp)

    def replicate(self, means, noise_scale, rng=None, *, n_replicates=None):
        """Posterior-predictive replicates; see :func:`replicate`."""
        means = np.asarray(means)
        if means.shape[-1] != self.n_obs:
            raise DimensionMismatchError(
                f"means must have {self.n_obs} entries, got {means.shape[-1]}"
            )
        return replicate(means, noise_scale, rng, n_replicates=n_replicates)

    def to_dataframe(self, means) -> pd.DataFrame:
        """Tabulate predicted means with their group ids.

        Returns
        -------
        df : pd.DataFrame
            Columns: group, mean (plus x or x0..x{P-1} when a slope term is
            configured), indexed by observation.
        """
        means = np.asarray(means, dtype=np.float64)
        if means.shape != (self.n_obs,):
            raise DimensionMismatchError(
                f"means must have shape ({self.n_obs},), got {means.shape}"
            )
        data = {"group": self.group_index, "mean": means}
        if self._x is not None:
            if self._x.ndim == 1:
                data["x"] = self._x
            else:
                for p in range(self._x.shape[1]):
                    data[f"x{p}"] = self._x[:, p]
        df = pd.DataFrame(data)
        df.index.name = "obs"
        return df
