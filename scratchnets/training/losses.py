"""Loss registry used by the feed-forward network."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Sequence, Union

from ..core.errors import DimensionMismatchError
from ..core.types import LossFn


def _check(predictions: Sequence[float], targets: Sequence[float]) -> None:
    if len(predictions) != len(targets):
        raise DimensionMismatchError(len(predictions), len(targets), what="Target")
    if not predictions:
        raise ValueError("Loss is undefined for empty vectors")


def mse(predictions: Sequence[float], targets: Sequence[float]) -> float:
    """Mean of the squared differences."""

    _check(predictions, targets)
    return sum((t - p) ** 2 for p, t in zip(predictions, targets)) / len(predictions)


def cross_entropy(predictions: Sequence[float], targets: Sequence[float]) -> float:
    """Binary cross-entropy of probabilities ``predictions`` against 0/1 ``targets``."""

    _check(predictions, targets)
    eps = 1e-7
    total = 0.0
    for p, t in zip(predictions, targets):
        total -= t * math.log(p + eps) + (1 - t) * math.log(1 - p + eps)
    return total / len(predictions)


@dataclass(frozen=True)
class Loss:
    """Named loss wrapper."""

    name: str
    fn: LossFn

    def __call__(self, predictions: Sequence[float], targets: Sequence[float]) -> float:
        return self.fn(predictions, targets)


class LossRegistry:
    """Central registry for loss functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, name: str, fn: LossFn) -> None:
        self._registry[name] = Loss(name, fn)

    def get(self, name: str) -> Loss:
        try:
            return self._registry[name]
        except KeyError as exc:
            raise KeyError(f"Unknown loss: {name}") from exc

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, name: Union[str, Callable[..., float]]) -> LossFn:
        if callable(name):
            return name
        if name not in self._registry:
            available = ", ".join(self.names())
            raise KeyError(f"Unknown loss {name!r}. Available losses: {available}")
        return self._registry[name].fn


REGISTRY = LossRegistry()
REGISTRY.register("mse", mse)
REGISTRY.register("cross_entropy", cross_entropy)
# Aliases for configs written against the camel-cased names
REGISTRY.register("ce", cross_entropy)
REGISTRY.register("crossEntropy", cross_entropy)

__all__ = ["mse", "cross_entropy", "Loss", "LossRegistry", "REGISTRY"]
