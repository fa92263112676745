"""k-nearest-neighbours predictor for classification and regression."""

from __future__ import annotations

import warnings
from typing import Any, Dict, Hashable, List, Optional, Sequence, Union

from ..core.distances import METRICS, nearest_points, normalize_points
from ..core.errors import DimensionMismatchError, EmptyTrainingSetError, ScratchNetsWarning
from ..core.types import DistanceFn, Neighbor, Point, Vector, Vote


class KNNClassifier:
    """Lazy learner that answers from the ``k`` closest stored points.

    Configuration is fluent and read at call time::

        KNNClassifier(3).with_normalization(True).train(xs, ys).predict(x)

    With normalisation enabled every ``train`` batch is rescaled on its own
    min/max before it is stored, and ``predict`` rescales the query against
    ``[query] + stored``. Several normalised batches therefore do not share
    a common scale; a :class:`ScratchNetsWarning` is emitted whenever a
    batch is added on top of stored points and either side was normalised.
    """

    def __init__(self, k: int) -> None:
        if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
            raise ValueError(f"k must be a positive integer, got {k!r}")
        self._k = k
        self._distance_metric: Optional[DistanceFn] = None
        self._normalization = False
        self._regression = False
        self._batches = 0
        self._normalized_batches = 0
        self._features: List[Vector] = []
        self._labels: List[Any] = []

    def __len__(self) -> int:
        return len(self._features)

    def __repr__(self) -> str:
        return (
            f"KNNClassifier(k={self._k}, normalization={self._normalization}, "
            f"regression={self._regression}, points={len(self)})"
        )

    @property
    def k(self) -> int:
        return self._k

    @property
    def normalization(self) -> bool:
        return self._normalization

    @property
    def regression(self) -> bool:
        return self._regression

    # ------------------------------------------------------------------
    # Fluent configuration

    def with_distance_metric(
        self, distance_metric: Union[str, DistanceFn, None]
    ) -> "KNNClassifier":
        """Use ``distance_metric`` (callable or registered name); ``None`` means Euclidean."""

        self._distance_metric = METRICS.resolve(distance_metric)
        return self

    def with_normalization(self, normalization: bool) -> "KNNClassifier":
        self._normalization = bool(normalization)
        return self

    def with_regression(self, regression: bool) -> "KNNClassifier":
        self._regression = bool(regression)
        return self

    # ------------------------------------------------------------------
    # Training / prediction

    def train(self, features: Sequence[Point], labels: Sequence[Any]) -> "KNNClassifier":
        """Append labelled points to the stored training set."""

        if len(features) != len(labels):
            raise ValueError(
                f"Got {len(features)} feature vectors for {len(labels)} labels"
            )
        if not features:
            return self

        dims = len(self._features[0]) if self._features else len(features[0])
        for point in features:
            if len(point) != dims:
                raise DimensionMismatchError(dims, len(point), what="Feature")

        if self._features and (self._normalization or self._normalized_batches):
            warnings.warn(
                f"Batch {self._batches + 1} is scaled independently of the "
                f"{len(self._features)} stored points; train once with the full "
                "data set for a consistent scale",
                ScratchNetsWarning,
                stacklevel=2,
            )
        self._batches += 1
        if self._normalization:
            self._normalized_batches += 1
            batch = normalize_points(features)
        else:
            batch = [[float(v) for v in point] for point in features]

        self._features.extend(batch)
        self._labels.extend(labels)
        return self

    def kneighbors(self, feature: Point) -> List[Neighbor]:
        """Return the labelled nearest neighbours of ``feature``."""

        if not self._features:
            raise EmptyTrainingSetError()
        if len(feature) != len(self._features[0]):
            raise DimensionMismatchError(len(self._features[0]), len(feature), what="Feature")

        point: Point = feature
        if self._normalization:
            point = normalize_points([feature, *self._features])[0]

        return [
            Neighbor(
                index=n.index,
                point=n.point,
                distance=n.distance,
                label=self._labels[n.index],
            )
            for n in nearest_points(point, self._features, self._k, self._distance_metric)
        ]

    def predict(self, feature: Point) -> Union[Vote, float]:
        """Mean neighbour label for regression, majority :class:`Vote` otherwise."""

        neighbors = self.kneighbors(feature)
        if self._regression:
            return sum(float(n.label) for n in neighbors) / len(neighbors)
        return self._majority_vote(neighbors)

    @staticmethod
    def _majority_vote(neighbors: Sequence[Neighbor]) -> Vote:
        tally: Dict[Hashable, int] = {}
        for neighbor in neighbors:
            tally[neighbor.label] = tally.get(neighbor.label, 0) + 1

        # strict comparison: on a tie the label tallied first wins
        best_label: Hashable = None
        best_votes = 0
        for label, votes in tally.items():
            if votes > best_votes:
                best_label, best_votes = label, votes
        return Vote(label=best_label, votes=best_votes)


__all__ = ["KNNClassifier"]
