"""Data sets for scratchnets runs."""

from . import builtin as _builtin  # noqa: F401
from . import csv_generic as _csv_generic  # noqa: F401
from .registry import DatasetSpec, available_datasets, get_dataset, register_dataset

__all__ = ["DatasetSpec", "available_datasets", "get_dataset", "register_dataset"]
