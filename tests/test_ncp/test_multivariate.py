"""Tests for the correlated multivariate non-centered transform."""

from __future__ import annotations

import numpy as np
import pytest

from pyncp import DegenerateScaleError, DimensionMismatchError
from pyncp.covariance import compose_cov_cholesky
from pyncp.lkj import sample_lkj_cholesky
from pyncp.ncp import log_abs_det_jacobian_mvn, to_centered_mvn, to_raw_mvn


@pytest.fixture
def cov_chol(corr_chol_3x3):
    return compose_cov_cholesky([1.0, 1.5, 2.0], corr_chol_3x3)


class TestToCenteredMvn:
    def test_columnwise(self, rng, cov_chol):
        eta = rng.standard_normal((3, 5))
        loc = np.array([1.0, -2.0, 0.5])
        theta = to_centered_mvn(eta, cov_chol, loc)
        assert theta.shape == (3, 5)
        for j in range(5):
            np.testing.assert_allclose(theta[:, j], loc + cov_chol @ eta[:, j])

    def test_default_location(self, rng, cov_chol):
        eta = rng.standard_normal((3, 4))
        np.testing.assert_allclose(to_centered_mvn(eta, cov_chol), cov_chol @ eta)

    def test_single_group_vector(self, cov_chol):
        theta = to_centered_mvn(np.array([1.0, 0.0, 0.0]), cov_chol)
        assert theta.shape == (3, 1)
        np.testing.assert_allclose(theta[:, 0], cov_chol[:, 0])

    def test_group_effects_have_target_covariance(self, rng, cov_3x3, cov_chol):
        theta = to_centered_mvn(rng.standard_normal((3, 200_000)), cov_chol, [5.0, 0.0, -5.0])
        np.testing.assert_allclose(theta.mean(axis=1), [5.0, 0.0, -5.0], atol=0.05)
        np.testing.assert_allclose(np.cov(theta), cov_3x3, atol=0.1)

    def test_shape_errors(self, cov_chol):
        with pytest.raises(DimensionMismatchError):
            to_centered_mvn(np.ones((2, 4)), cov_chol)
        with pytest.raises(DimensionMismatchError):
            to_centered_mvn(np.ones((3, 4)), cov_chol, location=[0.0, 1.0])
        with pytest.raises(DimensionMismatchError):
            to_centered_mvn(np.ones((3, 4)), np.ones((3, 2)))


class TestToRawMvn:
    @pytest.mark.parametrize("K", [1, 2, 4])
    def test_round_trip(self, rng, K):
        L = sample_lkj_cholesky(K, 1.0, rng)
        C = compose_cov_cholesky(rng.uniform(0.01, 3.0, size=K), L)
        eta = rng.standard_normal((K, 12))
        loc = rng.standard_normal(K)
        np.testing.assert_allclose(
            to_raw_mvn(to_centered_mvn(eta, C, loc), C, loc), eta, atol=1e-9
        )

    def test_degenerate_factor(self):
        C = np.array([[1.0, 0.0], [0.3, 0.0]])
        with pytest.raises(DegenerateScaleError):
            to_raw_mvn(np.zeros((2, 3)), C)


class TestJacobianMvn:
    def test_value(self, cov_chol):
        expected = 7 * np.sum(np.log(np.diag(cov_chol)))
        np.testing.assert_allclose(log_abs_det_jacobian_mvn(cov_chol, n_groups=7), expected)

    def test_matches_slogdet_of_block_map(self, cov_chol):
        # For J groups the map vec(eta) -> vec(theta) is kron(I_J, C)
        J = 3
        big = np.kron(np.eye(J), cov_chol)
        np.testing.assert_allclose(
            log_abs_det_jacobian_mvn(cov_chol, n_groups=J), np.linalg.slogdet(big)[1]
        )
