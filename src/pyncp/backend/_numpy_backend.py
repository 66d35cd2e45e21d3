"""NumPy + SciPy backend implementation."""

from __future__ import annotations

import numpy as np
import scipy.linalg


class NumpyBackend:
    """Backend wrapping NumPy + SciPy for array operations."""

    name = "numpy"
    float64 = np.float64
    int64 = np.int64

    # --- Array creation ---
    @staticmethod
    def array(data, dtype=None):
        return np.asarray(data, dtype=dtype)

    @staticmethod
    def zeros(shape, dtype=np.float64):
        return np.zeros(shape, dtype=dtype)

    @staticmethod
    def eye(n, dtype=np.float64):
        return np.eye(n, dtype=dtype)

    # --- Array manipulation ---
    @staticmethod
    def reshape(a, shape):
        return np.reshape(a, shape)

    @staticmethod
    def diagonal(a, offset=0):
        """Diagonal over the last two axes (batched)."""
        return np.diagonal(a, offset=offset, axis1=-2, axis2=-1)

    # --- Math operations ---
    @staticmethod
    def sqrt(x):
        return np.sqrt(x)

    @staticmethod
    def log(x):
        return np.log(x)

    @staticmethod
    def abs(x):
        return np.abs(x)

    @staticmethod
    def sum(a, axis=None, keepdims=False):
        return np.sum(a, axis=axis, keepdims=keepdims)

    @staticmethod
    def all(a):
        return bool(np.all(a))

    @staticmethod
    def any(a):
        return bool(np.any(a))

    # --- Linear algebra ---
    @staticmethod
    def matmul(a, b):
        return a @ b

    @staticmethod
    def transpose(a):
        """Swap the last two axes; 1-D input is returned unchanged."""
        if a.ndim < 2:
            return a
        return np.swapaxes(a, -1, -2)

    @staticmethod
    def solve_triangular(A, b, lower=True):
        return scipy.linalg.solve_triangular(A, b, lower=lower)

    @staticmethod
    def cholesky(A):
        return scipy.linalg.cholesky(A, lower=True)

    # --- Type checking ---
    @staticmethod
    def to_numpy(x):
        return np.asarray(x)
