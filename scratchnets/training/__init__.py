"""Feed-forward network, losses and training helpers."""

from .callbacks import EarlyStopping, chain
from .layer import NetworkLayer
from .losses import REGISTRY as LOSSES
from .network import MultiLayerPerceptron

__all__ = ["EarlyStopping", "chain", "NetworkLayer", "LOSSES", "MultiLayerPerceptron"]
