"""Loss curve rendering for network runs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ..core.types import EpochResult


def plot_loss_curve(
    history: Sequence[EpochResult],
    path: str | Path,
    *,
    threshold: Optional[float] = None,
) -> Path | None:
    """Draw mean loss per epoch to ``path``; ``None`` when nothing was trained.

    The best epoch is marked, and ``threshold`` (an early-stopping target)
    is drawn as a dashed line when given.
    """

    if not history:
        return None
    import matplotlib

    matplotlib.use("Agg", force=True)
    import matplotlib.pyplot as plt  # imported lazily for headless safety

    epochs = [result.epoch for result in history]
    losses = [result.loss for result in history]
    best = min(history, key=lambda result: result.loss)

    fig, ax = plt.subplots()
    ax.plot(epochs, losses, label="mean loss")
    ax.scatter([best.epoch], [best.loss], color="tab:red", zorder=3, label=f"best (epoch {best.epoch})")
    if threshold is not None:
        ax.axhline(threshold, linestyle="--", color="tab:gray", label="stop threshold")
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Mean loss")
    ax.legend()

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out)
    plt.close(fig)
    return out


__all__ = ["plot_loss_curve"]
