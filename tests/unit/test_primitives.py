import math

import pytest

from scratchnets.core.activations import REGISTRY as ACTIVATIONS
from scratchnets.core.activations import relu, sigmoid, tanh
from scratchnets.core.distances import (
    METRICS,
    euclidean_distance,
    inverse_lerp,
    manhattan_distance,
    min_max_points,
    nearest_points,
    normalize_points,
)
from scratchnets.core.errors import DimensionMismatchError
from scratchnets.training.losses import REGISTRY as LOSSES
from scratchnets.training.losses import cross_entropy, mse

GRID = [x / 4 for x in range(-40, 41)]


def test_activation_ranges():
    assert all(0.0 < sigmoid(x) < 1.0 for x in GRID)
    assert all(-1.0 < tanh(x) < 1.0 for x in GRID)
    assert all(relu(x) == max(x, 0.0) for x in GRID)
    assert sigmoid(0.0) == pytest.approx(0.5)


def test_sigmoid_saturates_without_overflow():
    assert sigmoid(-1000.0) == pytest.approx(0.0)
    assert sigmoid(1000.0) == pytest.approx(1.0)


def test_activation_registry_resolves_names_and_callables():
    assert ACTIVATIONS.resolve("sigmoid") is sigmoid
    assert ACTIVATIONS.resolve("reLU") is relu
    assert ACTIVATIONS.resolve(abs) is abs
    with pytest.raises(KeyError, match="Available activations"):
        ACTIVATIONS.resolve("softplus")


def test_losses():
    assert mse([1.0, 2.0], [1.0, 4.0]) == pytest.approx(2.0)
    assert cross_entropy([0.9], [1.0]) == pytest.approx(-math.log(0.9 + 1e-7))
    assert cross_entropy([0.2, 0.8], [0.0, 1.0]) == pytest.approx(
        -(math.log(0.8 + 1e-7) + math.log(0.8 + 1e-7)) / 2
    )
    with pytest.raises(DimensionMismatchError):
        mse([1.0], [1.0, 2.0])
    with pytest.raises(ValueError):
        mse([], [])
    assert LOSSES.resolve("crossEntropy") is cross_entropy
    with pytest.raises(KeyError, match="Available losses"):
        LOSSES.resolve("hinge")


def test_distances():
    assert euclidean_distance([0, 0], [3, 4]) == pytest.approx(5.0)
    assert manhattan_distance([0, 0], [3, -4]) == pytest.approx(7.0)
    assert METRICS.resolve(None) is euclidean_distance
    assert METRICS.resolve("manhattan") is manhattan_distance
    with pytest.raises(DimensionMismatchError):
        euclidean_distance([0, 0], [1, 2, 3])


def test_inverse_lerp_and_degenerate_range():
    assert inverse_lerp(2.0, 4.0, 3.0) == pytest.approx(0.5)
    assert inverse_lerp(2.0, 4.0, 6.0) == pytest.approx(2.0)
    assert inverse_lerp(1.0, 1.0, 1.0) == 0.0


def test_min_max_and_normalize():
    points = [[1, 10], [3, 30], [2, 20]]
    assert min_max_points(points) == [(1, 3), (10, 30)]
    assert normalize_points(points) == [[0.0, 0.0], [1.0, 1.0], [0.5, 0.5]]
    assert min_max_points([]) == []

    # external bounds need not enclose the data
    scaled = normalize_points([[5.0]], min_max=[(0.0, 2.0)])
    assert scaled == [[2.5]]


def test_nearest_points_sorted_stable_and_truncated():
    points = [[1.0], [-1.0], [3.0], [1.0]]
    result = nearest_points([0.0], points, k=3)
    assert [n.index for n in result] == [0, 1, 3]
    assert [n.distance for n in result] == [1.0, 1.0, 1.0]

    everything = nearest_points([0.0], points, k=10)
    assert [n.index for n in everything] == [0, 1, 3, 2]
    assert nearest_points([0.0], [], k=2) == []
    with pytest.raises(ValueError):
        nearest_points([0.0], points, k=0)


def test_nearest_points_custom_metric():
    points = [[0.0, 3.0], [2.0, 2.0]]
    by_l2 = nearest_points([0.0, 0.0], points, k=1)
    by_l1 = nearest_points([0.0, 0.0], points, k=1, metric=manhattan_distance)
    assert by_l2[0].index == 1
    assert by_l1[0].index == 0
