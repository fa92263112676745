"""Multi-layer perceptron trained sample by sample with backpropagation."""

from __future__ import annotations

import random
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from ..core import activations as _activations
from ..core.errors import DimensionMismatchError
from ..core.types import ActivationFn, EpochCallback, EpochResult, LossFn, Sample, Vector
from . import losses as _losses
from .layer import NetworkLayer

DEFAULT_LEARNING_RATE = 0.01

SampleLike = Union[Sample, Tuple[Sequence[float], Sequence[float]], Mapping[str, Sequence[float]]]


def as_sample(item: SampleLike) -> Sample:
    """Coerce ``item`` into a :class:`Sample`."""

    if isinstance(item, Sample):
        return item
    if isinstance(item, Mapping):
        return Sample(inputs=item["inputs"], targets=item["targets"])
    inputs, targets = item
    return Sample(inputs=inputs, targets=targets)


class MultiLayerPerceptron:
    """Fully-connected feed-forward network.

    ``layer_sizes`` lists one ``(num_neurons, num_inputs)`` pair per layer,
    the input layer included. The input layer transforms the raw inputs
    like any other layer during the forward pass but is never updated.

    Backpropagation scales every gradient by ``a * (1 - a)``, the sigmoid
    derivative, whatever activation the network was configured with. With
    ``relu`` or ``tanh`` the updates are therefore not true gradients of the
    loss; pick ``sigmoid`` for textbook behaviour.
    """

    def __init__(
        self,
        layer_sizes: Sequence[Sequence[int]],
        activation: Union[str, ActivationFn, None] = None,
        loss: Union[str, LossFn, None] = None,
        learning_rate: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> None:
        if not layer_sizes:
            raise ValueError("layer_sizes must describe at least one layer")
        self.activation: ActivationFn = _activations.REGISTRY.resolve(
            activation or _activations.relu
        )
        self.loss: LossFn = _losses.REGISTRY.resolve(loss or _losses.mse)
        self.learning_rate = float(learning_rate or DEFAULT_LEARNING_RATE)
        if self.learning_rate < 0:
            raise ValueError(f"learning_rate must be positive, got {learning_rate}")
        rng = random.Random(seed) if seed is not None else None
        self._layers: List[NetworkLayer] = [
            NetworkLayer(int(neurons), int(inputs), activation=self.activation, rng=rng)
            for neurons, inputs in layer_sizes
        ]

    @property
    def layers(self) -> Tuple[NetworkLayer, ...]:
        return tuple(self._layers)

    def parameter_count(self) -> int:
        return sum(layer.parameter_count() for layer in self._layers)

    def state_dict(self) -> List[Mapping[str, Any]]:
        return [layer.state_dict() for layer in self._layers]

    def load_state_dict(self, state: Sequence[Mapping[str, Any]]) -> None:
        if len(state) != len(self._layers):
            raise ValueError(f"Expected {len(self._layers)} layer states, got {len(state)}")
        for layer, layer_state in zip(self._layers, state):
            layer.load_state_dict(dict(layer_state))

    # ------------------------------------------------------------------
    # Forward / loss / backward

    def predict(self, inputs: Sequence[float]) -> Vector:
        """Feed ``inputs`` through every layer and return the last activations."""

        outputs: Sequence[float] = inputs
        for layer in self._layers:
            outputs = layer.forward(outputs)
        return list(outputs)

    def compute_loss(self, predictions: Sequence[float], targets: Sequence[float]) -> float:
        return self.loss(predictions, targets)

    def backpropagate(self, targets: Sequence[float], predictions: Sequence[float]) -> None:
        """Compute gradients from the last layer to the first and update in place.

        Layer ``i`` is updated with ``layers[i - 1].activations`` before the
        sweep moves down, so the hidden gradient of layer ``i - 1`` reads the
        freshly updated weights of layer ``i``.
        """

        last = len(self._layers) - 1
        outputs = self._layers[last].num_neurons
        if len(targets) != outputs:
            raise DimensionMismatchError(outputs, len(targets), what="Target")
        if len(predictions) != outputs:
            raise DimensionMismatchError(outputs, len(predictions), what="Prediction")
        lr = self.learning_rate
        for i in range(last, 0, -1):
            layer = self._layers[i]
            gradients: Vector = []
            if i == last:
                for j, a in enumerate(layer.activations):
                    gradients.append((targets[j] - predictions[j]) * a * (1 - a))
            else:
                upper = self._layers[i + 1]
                for j, a in enumerate(layer.activations):
                    total = 0.0
                    for k in range(upper.num_neurons):
                        total += upper.weights[k][j] * upper.gradients[k]
                    gradients.append(total * a * (1 - a))

            previous = self._layers[i - 1].activations
            for j, grad in enumerate(gradients):
                row = layer.weights[j]
                for k, prev_activation in enumerate(previous):
                    row[k] += lr * grad * prev_activation
                layer.biases[j] += lr * grad
            layer.gradients = gradients

    # ------------------------------------------------------------------
    # Training loop

    def train(
        self,
        samples: Sequence[SampleLike],
        epochs: int,
        on_epoch: Optional[EpochCallback] = None,
    ) -> List[EpochResult]:
        """Run ``epochs`` passes of per-sample gradient descent over ``samples``.

        ``on_epoch(epoch, mean_loss)`` is invoked after every epoch; a truthy
        return value stops training before the next epoch starts.
        """

        dataset = [as_sample(item) for item in samples]
        if epochs > 0 and not dataset:
            raise ValueError("Cannot train on an empty sample list")

        history: List[EpochResult] = []
        for epoch in range(1, int(epochs) + 1):
            total = 0.0
            for sample in dataset:
                predictions = self.predict(sample.inputs)
                total += self.compute_loss(predictions, sample.targets)
                self.backpropagate(sample.targets, predictions)
            mean_loss = total / len(dataset)
            history.append(EpochResult(epoch=epoch, loss=mean_loss))
            if on_epoch is not None and on_epoch(epoch, mean_loss):
                break
        return history

    def evaluate(self, samples: Sequence[SampleLike]) -> float:
        """Mean loss over ``samples`` without touching the parameters."""

        dataset = [as_sample(item) for item in samples]
        if not dataset:
            raise ValueError("Cannot evaluate an empty sample list")
        total = sum(
            self.compute_loss(self.predict(sample.inputs), sample.targets)
            for sample in dataset
        )
        return total / len(dataset)


__all__ = ["DEFAULT_LEARNING_RATE", "MultiLayerPerceptron", "as_sample"]
