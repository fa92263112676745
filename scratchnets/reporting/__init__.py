"""Run artifacts: epoch logs, manifest, summary and loss plots."""

from .artifacts import write_manifest
from .epochs import CsvEpochLog, JsonlEpochLog
from .plots import plot_loss_curve
from .summary import summarize_neighbors, summarize_training, write_summary

__all__ = [
    "CsvEpochLog",
    "JsonlEpochLog",
    "plot_loss_curve",
    "summarize_neighbors",
    "summarize_training",
    "write_manifest",
    "write_summary",
]
