"""Run manifest describing what produced a run directory."""

from __future__ import annotations

import json
import platform
import subprocess
import time
from pathlib import Path
from typing import Mapping

import numpy as np

from ..data.registry import DatasetSpec


def _git_sha() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
    return out.decode().strip()


def _describe_dataset(dataset: DatasetSpec) -> dict:
    return {
        "name": dataset.name,
        "task_type": dataset.task_type,
        "examples": len(dataset.features),
        "d_in": dataset.d_in,
        "queries": len(dataset.queries),
        "provenance": dict(dataset.provenance),
    }


def write_manifest(
    path: str | Path,
    *,
    config: Mapping[str, object],
    dataset: DatasetSpec,
    model: Mapping[str, object] | None = None,
) -> str:
    """Write ``manifest.json`` with the config, data set shape and environment."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": _git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "dataset": _describe_dataset(dataset),
        "model": dict(model or {}),
        "environment": {"python": platform.python_version(), "numpy": np.__version__},
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)


__all__ = ["write_manifest"]
