"""Evaluation metrics for finished runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence

import numpy as np


@dataclass(frozen=True)
class MetricResult:
    name: str
    value: float


def default_metrics(task_type: str) -> List[str]:
    if task_type == "regression":
        return ["mae", "rmse", "r2"]
    if task_type == "classification":
        return ["accuracy"]
    raise ValueError(f"Unknown task type: {task_type}")


def _as_matrix(values: Sequence[Any]) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    return arr


def compute_metric(
    name: str,
    predictions: Sequence[Any],
    targets: Sequence[Any],
) -> MetricResult:
    key = name.lower()
    if len(predictions) != len(targets):
        raise ValueError(
            f"Got {len(predictions)} predictions for {len(targets)} targets"
        )
    if key == "accuracy":
        if predictions and isinstance(predictions[0], (list, tuple, np.ndarray)):
            # vector outputs: compare the winning unit
            pred_idx = np.argmax(_as_matrix(predictions), axis=1)
            targ_idx = np.argmax(_as_matrix(targets), axis=1)
            value = float(np.mean(pred_idx == targ_idx))
        else:
            hits = [p == t for p, t in zip(predictions, targets)]
            value = float(np.mean(hits)) if hits else 0.0
        return MetricResult(name=key, value=value)

    preds = _as_matrix(predictions)
    targs = _as_matrix(targets)
    if key == "mae":
        value = float(np.mean(np.abs(preds - targs)))
    elif key == "rmse":
        value = float(np.sqrt(np.mean((preds - targs) ** 2)))
    elif key == "r2":
        mean = np.mean(targs, axis=0, keepdims=True)
        ss_res = float(np.sum((targs - preds) ** 2))
        ss_tot = float(np.sum((targs - mean) ** 2))
        value = 1.0 if ss_tot == 0 else float(1 - ss_res / (ss_tot + 1e-9))
    else:
        raise KeyError(f"Unknown metric: {name}")
    return MetricResult(name=key, value=value)


def compute_metrics(
    names: Iterable[str],
    predictions: Sequence[Any],
    targets: Sequence[Any],
) -> Mapping[str, float]:
    results: Dict[str, float] = {}
    for name in names:
        metric = compute_metric(name, predictions, targets)
        results[metric.name] = metric.value
    return results


__all__ = ["MetricResult", "default_metrics", "compute_metric", "compute_metrics"]
