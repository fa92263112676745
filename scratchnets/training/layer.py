"""A single fully-connected layer."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

from ..core.activations import relu
from ..core.errors import DimensionMismatchError
from ..core.types import ActivationFn, Vector


class NetworkLayer:
    """Weight matrix, bias vector and cached activations for one layer.

    ``weights[i]`` holds the ``num_inputs`` incoming weights of neuron ``i``.
    Weights and biases start uniformly distributed in ``[-1, 1)``. The layer
    only knows how to go forward; gradients are written into ``gradients``
    by the owning network.
    """

    def __init__(
        self,
        num_neurons: int,
        num_inputs: int,
        activation: ActivationFn = relu,
        rng: Optional[random.Random] = None,
    ) -> None:
        if num_neurons <= 0 or num_inputs <= 0:
            raise ValueError(
                f"Layer sizes must be positive, got ({num_neurons}, {num_inputs})"
            )
        rng = rng or random  # module-level generator honours random.seed()
        self.num_neurons = int(num_neurons)
        self.num_inputs = int(num_inputs)
        self.activation = activation
        self.weights: List[Vector] = []
        self.biases: Vector = []
        self.activations: Vector = []
        self.gradients: Vector = []
        for _ in range(self.num_neurons):
            self.weights.append([rng.random() * 2 - 1 for _ in range(self.num_inputs)])
            self.biases.append(rng.random() * 2 - 1)

    def __repr__(self) -> str:
        return f"NetworkLayer(num_neurons={self.num_neurons}, num_inputs={self.num_inputs})"

    def forward(self, inputs: Sequence[float]) -> Vector:
        """Return ``activation(W @ inputs + b)`` and cache it in ``activations``."""

        if len(inputs) != self.num_inputs:
            raise DimensionMismatchError(self.num_inputs, len(inputs))
        outputs: Vector = []
        for row, bias in zip(self.weights, self.biases):
            raw = sum(w * x for w, x in zip(row, inputs)) + bias
            outputs.append(self.activation(raw))
        self.activations = outputs
        return list(outputs)

    def parameter_count(self) -> int:
        return self.num_neurons * self.num_inputs + self.num_neurons

    def state_dict(self) -> Dict[str, List]:
        return {
            "weights": [list(row) for row in self.weights],
            "biases": list(self.biases),
        }

    def load_state_dict(self, state: Dict[str, List]) -> None:
        weights = state["weights"]
        biases = state["biases"]
        if len(weights) != self.num_neurons or len(biases) != self.num_neurons:
            raise DimensionMismatchError(self.num_neurons, len(weights), what="Neuron")
        for row in weights:
            if len(row) != self.num_inputs:
                raise DimensionMismatchError(self.num_inputs, len(row), what="Weight row")
        self.weights = [list(map(float, row)) for row in weights]
        self.biases = [float(b) for b in biases]


__all__ = ["NetworkLayer"]
