"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, MutableMapping, Sequence

from ..core.types import Sample

TASK_TYPES = ("regression", "classification")


@dataclass(frozen=True)
class DatasetSpec:
    """An in-memory data set.

    Attributes
    ----------
    features:
        One input vector per example.
    targets:
        Parallel to ``features``. Vectors for network datasets, scalar
        labels (numbers or tokens) for neighbour datasets.
    queries:
        Optional held-out points a run should predict after training.
    """

    name: str
    task_type: str
    features: List[List[float]]
    targets: List[Any]
    queries: List[List[float]] = field(default_factory=list)
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def d_in(self) -> int:
        return len(self.features[0]) if self.features else 0

    def samples(self) -> List[Sample]:
        """Pair features and targets for :meth:`MultiLayerPerceptron.train`."""

        samples = []
        for x, y in zip(self.features, self.targets):
            if not isinstance(y, Sequence) or isinstance(y, str):
                y = [y]
            samples.append(Sample(inputs=x, targets=y))
        return samples


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(name: str) -> Callable[[DatasetFactory], DatasetFactory]:
    """Register a dataset factory under ``name``::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[name] = func
        return func

    return _decorator


def get_dataset(name: str, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` built by the factory registered as ``name``."""

    if name not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise KeyError(f"Unknown dataset {name!r}. Available datasets: {available}")
    spec = _REGISTRY[name](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if spec.task_type not in TASK_TYPES:
        raise ValueError(f"Invalid task type: {spec.task_type}")
    if len(spec.features) != len(spec.targets):
        raise ValueError(
            f"Dataset {spec.name!r} has {len(spec.features)} features "
            f"but {len(spec.targets)} targets"
        )


__all__ = [
    "DatasetSpec",
    "TASK_TYPES",
    "available_datasets",
    "get_dataset",
    "register_dataset",
]
