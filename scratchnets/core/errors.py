"""Exception taxonomy shared by the predictors."""

from __future__ import annotations


class ScratchNetsError(Exception):
    """Base class for every error raised by scratchnets."""


class ScratchNetsWarning(UserWarning):
    """Soft problems that do not stop a computation."""


class DimensionMismatchError(ScratchNetsError, ValueError):
    """A vector does not have the length its consumer was configured for."""

    def __init__(self, expected: int, actual: int, what: str = "Input") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what} dimension mismatch: expected {expected}, got {actual}"
        )


class EmptyTrainingSetError(ScratchNetsError, LookupError):
    """A neighbour search was requested before any point was stored."""

    def __init__(self) -> None:
        super().__init__("No training data: call train() before predict()")


__all__ = [
    "ScratchNetsError",
    "ScratchNetsWarning",
    "DimensionMismatchError",
    "EmptyTrainingSetError",
]
