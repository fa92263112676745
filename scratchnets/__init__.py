"""scratchnets public API."""

from .core import activations, distances, errors, types  # noqa: F401
from .core.errors import DimensionMismatchError, EmptyTrainingSetError
from .core.types import Sample, Vote
from .neighbors import KNNClassifier
from .pipelines import load_preset, presets, run_pipeline
from .training import EarlyStopping, MultiLayerPerceptron, NetworkLayer

__all__ = [
    "DimensionMismatchError",
    "EarlyStopping",
    "EmptyTrainingSetError",
    "KNNClassifier",
    "MultiLayerPerceptron",
    "NetworkLayer",
    "Sample",
    "Vote",
    "activations",
    "distances",
    "errors",
    "types",
    "load_preset",
    "presets",
    "run_pipeline",
]
