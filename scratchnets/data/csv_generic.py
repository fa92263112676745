"""Generic CSV loader for regression and classification tasks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

import pandas as pd

from .registry import DatasetSpec, register_dataset


def _first_bad_line(mask: pd.Series) -> int:
    # data rows start on line 2, after the header
    return int(mask.to_numpy().argmax()) + 2


def _numeric_rows(frame: pd.DataFrame, path: Path) -> List[List[float]]:
    numeric = frame.apply(pd.to_numeric, errors="coerce")
    bad = numeric.isna().any(axis=1)
    if bad.any():
        line = _first_bad_line(bad)
        raise ValueError(f"{path}:{line}: missing or non-numeric feature value")
    return numeric.to_numpy(dtype=float).tolist()


def _targets(column: pd.Series, path: Path, task_type: str) -> List[Any]:
    if task_type == "regression":
        column = pd.to_numeric(column, errors="coerce")
    missing = column.isna()
    if missing.any():
        line = _first_bad_line(missing)
        raise ValueError(f"{path}:{line}: missing or non-numeric target {column.name!r}")
    if task_type == "regression":
        return column.to_numpy(dtype=float).tolist()
    return column.astype(str).tolist()


@register_dataset("csv")
def load_csv(
    *,
    csv_path: str | Path,
    target_col: str = "target",
    task_type: str = "classification",
    query_path: str | Path | None = None,
) -> DatasetSpec:
    """Load a data set from a CSV file with a header row.

    Every column except ``target_col`` must be numeric. Targets are parsed as
    floats for regression and kept as strings for classification. Short rows
    and unparseable cells raise :class:`ValueError` naming the file and line.
    """

    path = Path(csv_path)
    df = pd.read_csv(path)
    if target_col not in df.columns:
        raise KeyError(f"Target column {target_col!r} not found in CSV")
    targets = _targets(df.pop(target_col), path, task_type)
    columns = [str(name) for name in df.columns]
    features = _numeric_rows(df, path)

    queries: List[List[float]] = []
    if query_path is not None:
        qpath = Path(query_path)
        queries = _numeric_rows(pd.read_csv(qpath)[columns], qpath)

    return DatasetSpec(
        name=path.stem,
        task_type=task_type,
        features=features,
        targets=targets,
        queries=queries,
        provenance={
            "source": "csv",
            "local_path": str(path),
            "columns": columns,
            "target_col": target_col,
        },
    )
