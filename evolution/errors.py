"""Error taxonomy for evolution strategy runs."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised before the first generation when run parameters are inconsistent."""


class ObjectiveEvaluationError(RuntimeError):
    """Raised when the objective function fails while scoring an individual.

    The original exception is chained as ``__cause__``. ``generation`` is the
    zero-based generation being built (``None`` while scoring the initial
    parents) and ``slot`` is the population index being evaluated.
    """

    def __init__(self, message: str, generation: int | None = None, slot: int | None = None) -> None:
        super().__init__(message)
        self.generation = generation
        self.slot = slot
