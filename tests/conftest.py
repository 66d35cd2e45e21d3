"""Shared test fixtures for pyncp."""

from __future__ import annotations

import numpy as np
import pytest

from pyncp.backend import get_backend
from pyncp.utils import default_rng


@pytest.fixture
def xp_numpy():
    """NumPy backend fixture."""
    return get_backend("numpy")


@pytest.fixture
def xp_torch():
    """PyTorch backend fixture (skips if torch not installed)."""
    pytest.importorskip("torch")
    return get_backend("torch")


@pytest.fixture(params=["numpy"])
def xp(request):
    """Parametrized backend fixture (numpy only by default)."""
    if request.param == "torch":
        pytest.importorskip("torch")
    return get_backend(request.param)


@pytest.fixture
def rng():
    """Seeded random-variate source."""
    return default_rng(20240521)


@pytest.fixture
def pd_3x3():
    """3x3 positive-definite symmetric matrix."""
    return np.array([[4.0, 2.0, 1.0],
                     [2.0, 5.0, 3.0],
                     [1.0, 3.0, 6.0]])


@pytest.fixture
def cov_3x3():
    """3x3 covariance matrix with known std devs and correlations."""
    # Omega = omega * Omega* * omega
    # omega = diag(1.0, 1.5, 2.0)
    # Omega* = [[1, 0.6, 0.3], [0.6, 1, 0.5], [0.3, 0.5, 1]]
    omega = np.diag([1.0, 1.5, 2.0])
    corr = np.array([[1.0, 0.6, 0.3],
                     [0.6, 1.0, 0.5],
                     [0.3, 0.5, 1.0]])
    return omega @ corr @ omega


@pytest.fixture
def corr_chol_3x3():
    """Cholesky factor of the correlation matrix used in cov_3x3."""
    corr = np.array([[1.0, 0.6, 0.3],
                     [0.6, 1.0, 0.5],
                     [0.3, 0.5, 1.0]])
    return np.linalg.cholesky(corr)
