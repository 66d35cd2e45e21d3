"""Tabular summaries of LKJ draws."""

from __future__ import annotations

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyncp._exceptions import DimensionMismatchError


def offdiag_summary(samples: NDArray) -> pd.DataFrame:
    """Summarize off-diagonal correlations across many Cholesky draws.

    Parameters
    ----------
    samples : ndarray, shape (N, D, D)
        Correlation Cholesky factors, e.g. from ``sample_lkj_cholesky(...,
        size=N)``.

    Returns
    -------
    df : pd.DataFrame
        One row per pair (row, col) with row > col of R = L @ L.T. Columns:
        mean, std, mean_abs, min, max.
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.ndim != 3 or samples.shape[1] != samples.shape[2]:
        raise DimensionMismatchError(
            f"samples must have shape (N, D, D), got {samples.shape}"
        )
    if samples.shape[0] == 0:
        raise DimensionMismatchError("samples must contain at least one draw")

    corr = samples @ np.swapaxes(samples, -1, -2)
    D = samples.shape[1]
    rows, cols = np.tril_indices(D, k=-1)
    values = corr[:, rows, cols]

    df = pd.DataFrame(
        {
            "mean": values.mean(axis=0),
            "std": values.std(axis=0, ddof=1) if len(values) > 1 else np.nan,
            "mean_abs": np.abs(values).mean(axis=0),
            "min": values.min(axis=0),
            "max": values.max(axis=0),
        },
        index=pd.MultiIndex.from_arrays([rows, cols], names=["row", "col"]),
    )
    return df
