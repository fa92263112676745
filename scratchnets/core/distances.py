"""Distance metrics, min/max normalisation and the k-nearest search."""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import DimensionMismatchError
from .types import DistanceFn, Neighbor, Point, Vector

MinMax = List[Tuple[float, float]]


def _check_dims(a: Point, b: Point) -> None:
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b), what="Point")


def euclidean_distance(a: Point, b: Point) -> float:
    """Return the straight-line distance between ``a`` and ``b``."""

    _check_dims(a, b)
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


def manhattan_distance(a: Point, b: Point) -> float:
    _check_dims(a, b)
    return sum(abs(x - y) for x, y in zip(a, b))


def inverse_lerp(lo: float, hi: float, value: float) -> float:
    """Return where ``value`` falls within ``[lo, hi]`` as a fraction.

    A degenerate range (``lo == hi``) maps every value to ``0.0``.
    """

    if hi == lo:
        return 0.0
    return (value - lo) / (hi - lo)


def min_max_points(points: Sequence[Point]) -> MinMax:
    """Return the per-dimension ``(min, max)`` pairs of ``points``."""

    if not points:
        return []
    dims = len(points[0])
    for point in points:
        _check_dims(points[0], point)
    return [
        (min(p[j] for p in points), max(p[j] for p in points)) for j in range(dims)
    ]


def normalize_points(
    points: Sequence[Point], min_max: Optional[MinMax] = None
) -> List[Vector]:
    """Rescale every coordinate to ``(value - min) / (max - min)``.

    ``min_max`` defaults to the bounds of ``points`` themselves, in which case
    every coordinate lands in ``[0, 1]``. Externally supplied bounds that do
    not enclose the data produce values outside that range.
    """

    bounds = min_max if min_max is not None else min_max_points(points)
    result: List[Vector] = []
    for point in points:
        if len(point) != len(bounds):
            raise DimensionMismatchError(len(bounds), len(point), what="Point")
        result.append(
            [inverse_lerp(lo, hi, value) for (lo, hi), value in zip(bounds, point)]
        )
    return result


def nearest_points(
    point: Point,
    points: Sequence[Point],
    k: int = 1,
    metric: Optional[DistanceFn] = None,
) -> List[Neighbor]:
    """Return the ``k`` stored points closest to ``point``.

    Results are sorted ascending by distance; equal distances keep their
    insertion order. Fewer than ``k`` points yields all of them.
    """

    if k <= 0:
        raise ValueError(f"k must be a positive integer, got {k}")
    distance = metric or euclidean_distance
    scored = [
        Neighbor(index=idx, point=p, distance=distance(point, p))
        for idx, p in enumerate(points)
    ]
    scored.sort(key=lambda n: n.distance)
    return scored[:k]


class MetricRegistry:
    """Name lookup for distance metrics used by configs."""

    def __init__(self) -> None:
        self._registry: Dict[str, DistanceFn] = {}

    def register(self, name: str, fn: DistanceFn) -> None:
        self._registry[name] = fn

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, name: Union[str, Callable[[Point, Point], float], None]) -> DistanceFn:
        if name is None:
            return euclidean_distance
        if callable(name):
            return name
        key = str(name)
        if key not in self._registry:
            available = ", ".join(self.names())
            raise KeyError(f"Unknown metric {name!r}. Available metrics: {available}")
        return self._registry[key]


METRICS = MetricRegistry()
METRICS.register("euclidean", euclidean_distance)
METRICS.register("manhattan", manhattan_distance)

__all__ = [
    "MinMax",
    "euclidean_distance",
    "manhattan_distance",
    "inverse_lerp",
    "min_max_points",
    "normalize_points",
    "nearest_points",
    "MetricRegistry",
    "METRICS",
]
