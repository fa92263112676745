"""Core numerical primitives for scratchnets."""

from . import activations, distances, errors, types

__all__ = ["activations", "distances", "errors", "types"]
