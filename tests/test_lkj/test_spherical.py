"""Tests for the spherical-angle parameterization."""

from __future__ import annotations

import numpy as np
import pytest

from pyncp import DimensionMismatchError, InvalidArgumentError
from pyncp.lkj import (
    angles_to_corr_cholesky,
    corr_cholesky_to_angles,
    sample_lkj_cholesky,
)
from pyncp.utils import is_corr_cholesky


class TestAnglesToCorrCholesky:
    def test_two_dim(self):
        L = angles_to_corr_cholesky(np.array([np.pi / 3]), 2)
        np.testing.assert_allclose(L, [[1.0, 0.0], [0.5, np.sqrt(3) / 2]])

    def test_right_angles_give_identity(self):
        theta = np.full(6, np.pi / 2)
        np.testing.assert_allclose(angles_to_corr_cholesky(theta, 4), np.eye(4), atol=1e-15)

    def test_valid_for_random_angles(self, rng):
        for K in (2, 3, 5):
            theta = rng.uniform(0.05, np.pi - 0.05, size=K * (K - 1) // 2)
            assert is_corr_cholesky(angles_to_corr_cholesky(theta, K))

    def test_wrong_length(self):
        with pytest.raises(DimensionMismatchError):
            angles_to_corr_cholesky(np.ones(2), 3)

    @pytest.mark.parametrize("angle", [0.0, np.pi, 4.0, -0.5, np.nan])
    def test_rejects_angle_outside_open_interval(self, angle):
        with pytest.raises(InvalidArgumentError):
            angles_to_corr_cholesky(np.array([angle]), 2)

    def test_rejects_one_bad_angle_among_valid(self):
        theta = np.array([0.5, 1.0, np.pi])
        with pytest.raises(InvalidArgumentError):
            angles_to_corr_cholesky(theta, 3)

    def test_dim_one(self):
        np.testing.assert_array_equal(angles_to_corr_cholesky(np.array([]), 1), [[1.0]])


class TestRoundTrip:
    @pytest.mark.parametrize("K", [2, 3, 6])
    def test_from_lkj_draws(self, rng, K):
        for L in sample_lkj_cholesky(K, 1.0, rng, size=10):
            theta = corr_cholesky_to_angles(L)
            assert np.all((theta > 0) & (theta < np.pi))
            np.testing.assert_allclose(angles_to_corr_cholesky(theta, K), L, atol=1e-10)

    def test_from_angles(self, rng):
        theta = rng.uniform(0.1, np.pi - 0.1, size=10)
        L = angles_to_corr_cholesky(theta, 5)
        np.testing.assert_allclose(corr_cholesky_to_angles(L), theta, atol=1e-8)

    def test_rejects_invalid_factor(self, pd_3x3):
        with pytest.raises(InvalidArgumentError):
            corr_cholesky_to_angles(np.linalg.cholesky(pd_3x3))
