"""Hierarchical predictor control structure."""

from __future__ import annotations

from dataclasses import dataclass

from pyncp._exceptions import InvalidArgumentError


@dataclass
class PredictorControl:
    """Control structure for :class:`HierarchicalPredictor`.

    Attributes
    ----------
    index_base : int
        Numbering of group ids: 1 for ids 1..J (default), 0 for ids 0..J-1.
    check_finite : bool
        If True, reject NaN or infinite effects and intercepts in ``predict``.
    verbose : int
        Verbosity: 0=silent, 1=construction summary.
    """

    index_base: int = 1
    check_finite: bool = True
    verbose: int = 0

    def __post_init__(self):
        if self.index_base not in (0, 1):
            raise InvalidArgumentError(
                f"index_base must be 0 or 1, got {self.index_base!r}"
            )
