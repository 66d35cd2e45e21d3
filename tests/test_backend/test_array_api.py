"""Tests for backend abstraction."""

from __future__ import annotations

import numpy as np
import pytest

from pyncp import InvalidArgumentError
from pyncp.backend import array_namespace, get_backend, set_backend


class TestGetBackend:
    def test_numpy_backend(self):
        xp = get_backend("numpy")
        assert xp.name == "numpy"

    def test_default_is_numpy(self):
        xp = get_backend()
        assert xp.name == "numpy"

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            get_backend("invalid")

    def test_set_invalid_backend(self):
        with pytest.raises(InvalidArgumentError):
            set_backend("jax")

    def test_set_backend_round_trip(self):
        set_backend("numpy")
        assert get_backend().name == "numpy"


class TestArrayNamespace:
    def test_infer_numpy(self):
        xp = array_namespace(np.array([1.0]))
        assert xp.name == "numpy"

    def test_infer_none_returns_default(self):
        xp = array_namespace(None)
        assert xp.name == "numpy"

    def test_python_scalars_use_default(self):
        assert array_namespace(1.0, [2.0, 3.0]).name == "numpy"

    def test_infer_torch(self, xp_torch):
        import torch

        assert array_namespace(torch.ones(2), np.ones(2)).name == "torch"


class TestNumpyBackendOps:
    def test_zeros(self, xp_numpy):
        z = xp_numpy.zeros((3, 3))
        np.testing.assert_array_equal(z, np.zeros((3, 3)))

    def test_eye(self, xp_numpy):
        np.testing.assert_array_equal(xp_numpy.eye(3), np.eye(3))

    def test_batched_diagonal(self, xp_numpy):
        a = np.stack([np.diag([1.0, 2.0]), np.diag([3.0, 4.0])])
        np.testing.assert_array_equal(xp_numpy.diagonal(a), [[1.0, 2.0], [3.0, 4.0]])

    def test_transpose_last_axes(self, xp_numpy):
        a = np.arange(12.0).reshape(2, 2, 3)
        assert xp_numpy.transpose(a).shape == (2, 3, 2)
        v = np.ones(3)
        assert xp_numpy.transpose(v) is v

    def test_solve_triangular(self, xp_numpy, pd_3x3):
        L = xp_numpy.cholesky(pd_3x3)
        b = xp_numpy.array([1.0, 2.0, 3.0])
        x = xp_numpy.solve_triangular(L, b, lower=True)
        np.testing.assert_allclose(L @ x, b, atol=1e-12)

    def test_cholesky(self, xp_numpy, pd_3x3):
        L = xp_numpy.cholesky(pd_3x3)
        np.testing.assert_allclose(L @ L.T, pd_3x3, atol=1e-10)

    def test_reductions(self, xp_numpy):
        assert xp_numpy.all(np.array([True, True]))
        assert not xp_numpy.any(np.array([False, False]))
        np.testing.assert_allclose(xp_numpy.sum(np.ones((2, 3)), axis=1), [3.0, 3.0])


class TestTorchBackendOps:
    def test_solve_triangular_vector(self, xp_torch, pd_3x3):
        L = xp_torch.cholesky(xp_torch.array(pd_3x3))
        b = xp_torch.array([1.0, 2.0, 3.0])
        x = xp_torch.solve_triangular(L, b, lower=True)
        np.testing.assert_allclose((L @ x).numpy(), b.numpy(), atol=1e-12)

    def test_to_numpy(self, xp_torch):
        out = xp_torch.to_numpy(xp_torch.eye(2))
        assert isinstance(out, np.ndarray)
        np.testing.assert_array_equal(out, np.eye(2))
