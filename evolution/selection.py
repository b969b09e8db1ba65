"""Deterministic truncation selection for plus and comma regimes."""

from __future__ import annotations

import enum
from typing import Sequence

import numpy as np


class Selection(str, enum.Enum):
    """Which pool the next parent population is drawn from."""

    PLUS = "plus"
    COMMA = "comma"

    @classmethod
    def parse(cls, value: "Selection | str") -> "Selection":
        if isinstance(value, Selection):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown selection '{value}'. Expected one of: {choices}") from None


def select_comma(offspring_fitness: Sequence[float], mu: int) -> list[int]:
    """Return indices of the ``mu`` fittest offspring, best first.

    Ties keep their original order.
    """
    if mu > len(offspring_fitness):
        raise ValueError("Cannot select more parents than offspring available.")
    order = np.argsort(np.asarray(offspring_fitness, dtype=float), kind="stable")
    return [int(index) for index in order[:mu]]


def select_plus(
    parent_fitness: Sequence[float],
    offspring_fitness: Sequence[float],
    mu: int,
) -> list[tuple[bool, int]]:
    """Rank parents and offspring together and keep the ``mu`` best.

    Returns ``(from_offspring, index)`` pairs in ascending fitness order. On
    equal fitness parents rank ahead of offspring, and each pool keeps its
    own order.
    """
    n_parents = len(parent_fitness)
    if mu > n_parents + len(offspring_fitness):
        raise ValueError("Cannot select more parents than the merged pool holds.")
    merged = np.concatenate(
        [np.asarray(parent_fitness, dtype=float), np.asarray(offspring_fitness, dtype=float)]
    )
    order = np.argsort(merged, kind="stable")[:mu]
    return [(bool(rank >= n_parents), int(rank - n_parents if rank >= n_parents else rank)) for rank in order]
