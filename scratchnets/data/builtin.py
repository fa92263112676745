"""Small built-in data sets."""

from __future__ import annotations

from .registry import DatasetSpec, register_dataset


@register_dataset("xor")
def make_xor() -> DatasetSpec:
    """Two-output logic table: ``[AND, OR]`` of the two inputs."""

    return DatasetSpec(
        name="xor",
        task_type="regression",
        features=[[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]],
        targets=[[0.0, 0.0], [0.0, 1.0], [0.0, 1.0], [1.0, 1.0]],
        queries=[[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]],
        provenance={"source": "builtin"},
    )


@register_dataset("iris-mini")
def make_iris_mini() -> DatasetSpec:
    """Three samples of each species from the Fisher iris data."""

    return DatasetSpec(
        name="iris-mini",
        task_type="classification",
        features=[
            [5.1, 3.5, 1.4, 0.2],
            [4.9, 3.0, 1.4, 0.2],
            [4.7, 3.2, 1.3, 0.2],
            [7.0, 3.2, 4.7, 1.4],
            [6.4, 3.2, 4.5, 1.5],
            [6.9, 3.1, 4.9, 1.5],
            [6.3, 3.3, 6.0, 2.5],
            [5.8, 2.7, 5.1, 1.9],
            [7.1, 3.0, 5.9, 2.1],
        ],
        targets=[
            "Iris-setosa",
            "Iris-setosa",
            "Iris-setosa",
            "Iris-versicolor",
            "Iris-versicolor",
            "Iris-versicolor",
            "Iris-virginica",
            "Iris-virginica",
            "Iris-virginica",
        ],
        queries=[[6.0, 3.0, 4.8, 1.8]],
        provenance={"source": "builtin", "origin": "Fisher (1936) iris data"},
    )


@register_dataset("points")
def make_points() -> DatasetSpec:
    return DatasetSpec(
        name="points",
        task_type="regression",
        features=[[1.0, 2.0], [2.0, 1.0], [1.0, 3.0], [3.0, 4.0]],
        targets=[5.0, 10.0, 7.0, 12.0],
        queries=[[2.0, 2.0]],
        provenance={"source": "builtin"},
    )
