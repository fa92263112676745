"""Epoch callbacks for :meth:`MultiLayerPerceptron.train`."""

from __future__ import annotations

from typing import Optional

from ..core.types import EpochCallback


class EarlyStopping:
    """Stop once the loss is low enough or has stopped improving."""

    def __init__(
        self,
        min_loss: Optional[float] = None,
        patience: Optional[int] = None,
        min_delta: float = 1e-9,
    ) -> None:
        if patience is not None and patience <= 0:
            raise ValueError(f"patience must be positive, got {patience}")
        self.min_loss = min_loss
        self.patience = patience
        self.min_delta = min_delta
        self.best_loss = float("inf")
        self.best_epoch = 0
        self.stopped_epoch: Optional[int] = None
        self._epochs_no_improve = 0

    def __call__(self, epoch: int, loss: float) -> bool:
        if loss < self.best_loss - self.min_delta:
            self.best_loss = loss
            self.best_epoch = epoch
            self._epochs_no_improve = 0
        else:
            self._epochs_no_improve += 1

        stop = self.min_loss is not None and loss < self.min_loss
        if self.patience and self._epochs_no_improve >= self.patience:
            stop = True
        if stop:
            self.stopped_epoch = epoch
        return stop


def chain(*callbacks: Optional[EpochCallback]) -> EpochCallback:
    """Fan an epoch event out to ``callbacks``; stop if any of them asks to."""

    active = [cb for cb in callbacks if cb is not None]

    def _on_epoch(epoch: int, loss: float) -> bool:
        stop = False
        for callback in active:
            if callback(epoch, loss):
                stop = True
        return stop

    return _on_epoch


__all__ = ["EarlyStopping", "chain"]
