"""Tests for LKJ draw summaries."""

from __future__ import annotations

import numpy as np
import pytest

from pyncp import DimensionMismatchError
from pyncp.lkj import offdiag_summary, sample_lkj_cholesky


class TestOffdiagSummary:
    def test_index_and_columns(self, rng):
        df = offdiag_summary(sample_lkj_cholesky(4, 1.0, rng, size=100))
        assert list(df.columns) == ["mean", "std", "mean_abs", "min", "max"]
        assert list(df.index) == [(1, 0), (2, 0), (2, 1), (3, 0), (3, 1), (3, 2)]
        assert df.index.names == ["row", "col"]

    def test_values(self, corr_chol_3x3):
        samples = np.stack([corr_chol_3x3, np.eye(3)])
        df = offdiag_summary(samples)
        np.testing.assert_allclose(df.loc[(1, 0), "mean"], 0.3)
        np.testing.assert_allclose(df.loc[(2, 1), "max"], 0.5)
        np.testing.assert_allclose(df.loc[(2, 0), "min"], 0.0)
        np.testing.assert_allclose(df.loc[(2, 0), "mean_abs"], 0.15)

    def test_bounded(self, rng):
        df = offdiag_summary(sample_lkj_cholesky(3, 0.3, rng, size=500))
        assert (df["min"] >= -1.0).all() and (df["max"] <= 1.0).all()

    def test_bad_shape(self):
        with pytest.raises(DimensionMismatchError):
            offdiag_summary(np.eye(3))

    def test_empty_batch(self):
        with pytest.raises(DimensionMismatchError):
            offdiag_summary(np.zeros((0, 3, 3)))
