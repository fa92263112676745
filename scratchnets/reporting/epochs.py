"""Per-epoch loss logs written while a network trains."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, Optional


class _EpochLog:
    """Truncates ``path`` and records ``(epoch, loss, delta)`` rows.

    ``delta`` is the change from the previous epoch's mean loss, ``0.0`` on
    the first row. Instances are ``on_epoch`` callbacks and never ask the
    training loop to stop.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self._previous: Optional[float] = None

    def _row(self, epoch: int, loss: float) -> Dict[str, float]:
        loss = float(loss)
        delta = 0.0 if self._previous is None else loss - self._previous
        self._previous = loss
        return {"epoch": int(epoch), "loss": loss, "delta": delta}

    def _write(self, row: Dict[str, float]) -> None:
        raise NotImplementedError

    def __call__(self, epoch: int, loss: float) -> None:
        self._write(self._row(epoch, loss))


class JsonlEpochLog(_EpochLog):
    """One JSON object per epoch, tagged with the initialisation seed."""

    def __init__(self, path: str | Path, *, seed: int | None = None) -> None:
        super().__init__(path)
        self.seed = seed

    def _write(self, row: Dict[str, float]) -> None:
        record = dict(row, seed=self.seed)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")


class CsvEpochLog(_EpochLog):
    FIELDS = ("epoch", "loss", "delta")

    def __init__(self, path: str | Path) -> None:
        super().__init__(path)
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            csv.DictWriter(handle, fieldnames=self.FIELDS).writeheader()

    def _write(self, row: Dict[str, float]) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            csv.DictWriter(handle, fieldnames=self.FIELDS).writerow(row)


__all__ = ["CsvEpochLog", "JsonlEpochLog"]
