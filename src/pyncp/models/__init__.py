"""Hierarchical linear predictor and posterior-predictive replicates."""

from pyncp.models._control import PredictorControl
from pyncp.models._predictor import (
    HierarchicalPredictor,
    check_group_index,
    predict_means,
    replicate,
)

__all__ = [
    "PredictorControl",
    "HierarchicalPredictor",
    "check_group_index",
    "predict_means",
    "replicate",
]
