"""Nearest-neighbour predictors."""

from .knn import KNNClassifier

__all__ = ["KNNClassifier"]
