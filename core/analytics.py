"""Run analytics over recorded fitness histories."""

from __future__ import annotations

from statistics import mean
from typing import Mapping, Sequence

from evolution.history import OFFSPRING_FITNESS, PARENT_FITNESS


def build_summary(history: Mapping[str, Sequence[Sequence[float]]], generations: int) -> dict[str, float]:
    """Summarize a run from its history store.

    ``improvement_rate`` is the mean decrease of the best fitness per
    generation between the first and the last parent snapshot.
    """
    parents = list(history.get(PARENT_FITNESS, ()))
    if not parents:
        return {
            "initial_best": 0.0,
            "final_best": 0.0,
            "final_mean": 0.0,
            "improvement": 0.0,
            "improvement_rate": 0.0,
            "generations": float(generations),
        }

    initial_best = float(parents[0][0])
    final_best = float(parents[-1][0])
    improvement = initial_best - final_best
    summary = {
        "initial_best": initial_best,
        "final_best": final_best,
        "final_mean": float(mean(parents[-1])),
        "improvement": float(improvement),
        "improvement_rate": float(improvement / max(generations, 1)),
        "generations": float(generations),
    }
    offspring = list(history.get(OFFSPRING_FITNESS, ()))
    if offspring:
        summary["final_offspring_best"] = float(min(offspring[-1]))
    return summary


def best_fitness_curve(history: Mapping[str, Sequence[Sequence[float]]]) -> list[float]:
    """Best parent fitness of every recorded parent snapshot."""
    return [float(snapshot[0]) for snapshot in history.get(PARENT_FITNESS, ())]
