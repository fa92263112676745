"""Scalar activation functions."""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, Union

from .types import ActivationFn


def sigmoid(x: float) -> float:
    """Squash ``x`` into (0, 1)."""

    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def relu(x: float) -> float:
    """Return ``x`` for positive inputs and ``0`` otherwise."""

    return x if x > 0 else 0.0


def tanh(x: float) -> float:
    """Squash ``x`` into (-1, 1)."""

    return math.tanh(x)


class ActivationRegistry:
    """Name lookup for activation functions used by configs."""

    def __init__(self) -> None:
        self._registry: Dict[str, ActivationFn] = {}

    def register(self, name: str, fn: ActivationFn) -> None:
        self._registry[name] = fn

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, name: Union[str, Callable[[float], float]]) -> ActivationFn:
        if callable(name):
            return name
        key = str(name)
        if key not in self._registry:
            available = ", ".join(self.names())
            raise KeyError(f"Unknown activation {name!r}. Available activations: {available}")
        return self._registry[key]


REGISTRY = ActivationRegistry()
REGISTRY.register("sigmoid", sigmoid)
REGISTRY.register("relu", relu)
REGISTRY.register("reLU", relu)
REGISTRY.register("tanh", tanh)

__all__ = ["sigmoid", "relu", "tanh", "ActivationRegistry", "REGISTRY"]
