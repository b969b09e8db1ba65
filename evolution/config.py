"""Run parameters for the evolution strategy engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from evolution.errors import ConfigurationError
from evolution.selection import Selection


@dataclass(frozen=True)
class ESConfig:
    """Population sizes, selection regime and stopping budget.

    ``rho`` defaults to ``mu`` and ``max_iterations`` to ``100 * mu`` when
    left as ``None``.
    """

    mu: int = 1
    rho: int | None = None
    lambda_: int = 1
    selection: Selection = Selection.PLUS
    max_iterations: int | None = None
    record_interim: bool = False
    init_strategy: Any = None

    def __post_init__(self) -> None:
        try:
            selection = Selection.parse(self.selection)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        object.__setattr__(self, "selection", selection)
        if self.rho is None:
            object.__setattr__(self, "rho", self.mu)
        if self.max_iterations is None:
            object.__setattr__(self, "max_iterations", self.mu * 100)

    def validate(self, population_size: int | None = None) -> None:
        """Raise :class:`ConfigurationError` if the parameters cannot run."""
        if self.mu < 1:
            raise ConfigurationError(f"mu must be >= 1, got {self.mu}")
        if self.lambda_ < 1:
            raise ConfigurationError(f"lambda must be >= 1, got {self.lambda_}")
        if self.rho < 1:
            raise ConfigurationError(f"rho must be >= 1, got {self.rho}")
        if self.rho > self.mu:
            raise ConfigurationError(
                f"rho={self.rho} parents per offspring exceeds the parent population mu={self.mu}"
            )
        if self.selection is Selection.COMMA and self.mu >= self.lambda_:
            raise ConfigurationError(
                f"Comma selection needs more offspring than parents (mu={self.mu}, lambda={self.lambda_})"
            )
        if self.max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if population_size is not None and population_size < self.mu:
            raise ConfigurationError(f"Population size {population_size} cannot be less than mu={self.mu}")
