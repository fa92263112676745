"""Deterministic ``summary.json`` builders for finished runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np

from ..core.types import EpochResult, Neighbor


def summarize_training(history: Sequence[EpochResult], *, tail: int = 32) -> Dict[str, Any]:
    """Describe the loss curve returned by :meth:`MultiLayerPerceptron.train`.

    ``tail_slope`` is the least-squares slope of the last ``tail`` epoch
    losses; a negative value means the network was still improving when
    training ended.
    """

    losses = np.asarray([result.loss for result in history], dtype=np.float64)
    summary: Dict[str, Any] = {"kind": "mlp", "epochs": int(losses.size), "history": losses.tolist()}
    if not losses.size:
        summary["loss"] = {}
        return summary

    window = losses[-max(1, min(int(tail), losses.size)):]
    slope = 0.0
    if window.size > 1:
        slope = float(np.polyfit(np.arange(window.size, dtype=np.float64), window, 1)[0])
    best = int(np.argmin(losses))
    summary["tail_window"] = int(window.size)
    summary["loss"] = {
        "first": float(losses[0]),
        "last": float(losses[-1]),
        "min": float(losses[best]),
        "best_epoch": int(history[best].epoch),
        "mean": float(np.mean(losses)),
        "tail_mean": float(np.mean(window)),
        "tail_slope": slope,
    }
    return summary


def summarize_neighbors(
    neighbor_sets: Sequence[Sequence[Neighbor]],
    *,
    k: int,
    votes: Optional[Sequence[int]] = None,
) -> Dict[str, Any]:
    """Describe the neighbourhoods found for every query of a KNN run.

    ``votes`` holds the winning vote count per query for classification
    runs; ``vote_share`` divides it by the number of neighbours consulted.
    """

    summary: Dict[str, Any] = {"kind": "knn", "k": int(k), "queries": len(neighbor_sets)}
    distances = np.asarray(
        [n.distance for found in neighbor_sets for n in found], dtype=np.float64
    )
    if distances.size:
        nearest = np.asarray([found[0].distance for found in neighbor_sets if found])
        summary["distance"] = {
            "min": float(np.min(distances)),
            "max": float(np.max(distances)),
            "mean": float(np.mean(distances)),
            "median": float(np.median(distances)),
            "nearest_mean": float(np.mean(nearest)),
        }
    if votes:
        consulted = np.asarray([len(found) for found in neighbor_sets], dtype=np.float64)
        shares = np.asarray(votes, dtype=np.float64) / consulted
        summary["vote_share"] = {
            "mean": float(np.mean(shares)),
            "min": float(np.min(shares)),
            "unanimous": int(np.sum(shares == 1.0)),
        }
    return summary


def write_summary(path: str | Path, summary: Dict[str, Any]) -> str:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(summary, sort_keys=True, indent=2))
    return str(out)


__all__ = ["summarize_neighbors", "summarize_training", "write_summary"]
