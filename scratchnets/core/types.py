"""Core typing contracts for scratchnets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, List, Sequence

Vector = List[float]
Point = Sequence[float]

ActivationFn = Callable[[float], float]
LossFn = Callable[[Sequence[float], Sequence[float]], float]
DistanceFn = Callable[[Point, Point], float]
EpochCallback = Callable[[int, float], Any]


@dataclass(frozen=True)
class Sample:
    """A single training example for the feed-forward network."""

    inputs: Sequence[float]
    targets: Sequence[float]


@dataclass(frozen=True)
class Neighbor:
    """A stored point returned by a nearest-neighbour search."""

    index: int
    point: Point
    distance: float
    label: Any = None


@dataclass(frozen=True)
class Vote:
    """Outcome of a majority vote among the nearest neighbours."""

    label: Hashable
    votes: int

    def __iter__(self):
        # allows ``label, votes = knn.predict(x)``
        yield self.label
        yield self.votes


@dataclass(frozen=True)
class EpochResult:
    """Mean loss recorded at the end of one training epoch."""

    epoch: int
    loss: float


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`scratchnets.pipelines.run_pipeline`."""

    kind: str
    epochs: int
    metrics_path: str
    manifest_path: str
    summary_path: str = ""
    predictions_path: str = ""
