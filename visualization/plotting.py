"""Plot utilities for persisted optimizer metrics."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from data.logger import RunLogger  # noqa: E402


def plot_experiment(db_path: str | Path, experiment_id: str, output_path: str | Path) -> Path:
    """Render best/mean fitness curves for an experiment from SQLite logs."""
    logger = RunLogger(db_path)
    try:
        rows = logger.fetch_metrics(experiment_id)
        experiment = logger.fetch_experiment(experiment_id)
    finally:
        logger.close()
    if not rows:
        raise ValueError(f"No metrics recorded for experiment '{experiment_id}'.")

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    generations = [int(row["generation_index"]) + 1 for row in rows]
    best_fitness = [float(row["best_fitness"]) for row in rows]
    mean_fitness = [float(row["mean_fitness"]) for row in rows]
    offspring_best = [float(row["offspring_best_fitness"]) for row in rows]

    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.plot(generations, best_fitness, label="best_fitness")
    ax.plot(generations, mean_fitness, label="mean_fitness")
    ax.plot(generations, offspring_best, label="offspring_best_fitness", linestyle="--", alpha=0.7)
    if min(best_fitness) > 0.0:
        ax.set_yscale("log")
    if experiment is not None:
        ax.set_title(_describe(experiment["config"], experiment["seed"]))
    ax.set_xlabel("generation")
    ax.set_ylabel("fitness")
    ax.legend()

    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    return output


def _describe(config: dict, seed: int) -> str:
    """Compact ``(mu/rho+lambda)-ES on <objective>`` label."""
    sign = "," if config.get("selection") == "comma" else "+"
    label = f"({config.get('mu')}/{config.get('rho')}{sign}{config.get('lambda')})-ES"
    objective = config.get("objective")
    if objective:
        label += f" on {objective}"
    return f"{label}, seed {seed}"
