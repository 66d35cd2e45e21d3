"""PyTorch backend implementation (optional dependency)."""

from __future__ import annotations

from typing import Any


def _import_torch():
    """Lazy import of torch."""
    try:
        import torch
        return torch
    except ImportError as e:
        raise ImportError(
            "PyTorch is required for the torch backend. "
            "Install it with: pip install pyncp[torch]"
        ) from e


class TorchBackend:
    """Backend wrapping PyTorch for array operations with GPU support."""

    name = "torch"

    def __init__(self, device: str = "cpu", dtype: Any = None):
        self._torch = _import_torch()
        self.device = device
        self.float64 = self._torch.float64
        self.int64 = self._torch.int64
        self._default_dtype = dtype or self._torch.float64

    # --- Array creation ---
    def array(self, data, dtype=None):
        dtype = dtype or self._default_dtype
        if isinstance(data, self._torch.Tensor):
            return data.to(device=self.device, dtype=dtype)
        return self._torch.as_tensor(data, dtype=dtype, device=self.device)

    def zeros(self, shape, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.zeros(shape, dtype=dtype, device=self.device)

    def eye(self, n, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.eye(n, dtype=dtype, device=self.device)

    # --- Array manipulation ---
    def reshape(self, a, shape):
        return a.reshape(shape)

    def diagonal(self, a, offset=0):
        return self._torch.diagonal(a, offset=offset, dim1=-2, dim2=-1)

    # --- Math operations ---
    def sqrt(self, x):
        return self._torch.sqrt(x)

    def log(self, x):
        return self._torch.log(x)

    def abs(self, x):
        return self._torch.abs(x)

    def sum(self, a, axis=None, keepdims=False):
        if axis is None:
            return a.sum()
        return a.sum(dim=axis, keepdim=keepdims)

    def all(self, a):
        return bool(self._torch.as_tensor(a).all())

    def any(self, a):
        return bool(self._torch.as_tensor(a).any())

    # --- Linear algebra ---
    def matmul(self, a, b):
        return a @ b

    def transpose(self, a):
        if a.dim() < 2:
            return a
        return a.transpose(-2, -1)

    def solve_triangular(self, A, b, lower=True):
        if b.dim() == 1:
            x = self._torch.linalg.solve_triangular(
                A, b.unsqueeze(-1), upper=not lower
            )
            return x.squeeze(-1)
        return self._torch.linalg.solve_triangular(A, b, upper=not lower)

    def cholesky(self, A):
        return self._torch.linalg.cholesky(A)

    # --- Type checking ---
    def to_numpy(self, x):
        if isinstance(x, self._torch.Tensor):
            return x.detach().cpu().numpy()
        import numpy as np
        return np.asarray(x)
