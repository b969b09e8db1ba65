"""Simple optimizer runner for local validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import numpy as np

from configs.loader import ConfigLoader, ExperimentConfig
from core.analytics import build_summary
from core.deterministic_rng import DeterministicRNG
from data.logger import RunLogger
from engine.component_registry import (
    create_mutation,
    create_objective,
    create_recombination,
    create_strategy,
    create_strategy_mutation,
    create_strategy_recombination,
)
from evolution import operators
from evolution.base import FunctionOperators
from evolution.config import ESConfig
from evolution.es import ESResult, EvolutionStrategy
from population.builders import build_population

LOGGER = logging.getLogger(__name__)


def _build_population(config: ExperimentConfig, rng: DeterministicRNG) -> tuple[list[Any], int]:
    """Create the initial parents from ``initial_value`` or uniform noise."""
    population_rng = rng.stream("population")
    if config.initial_value is None:
        return build_population(config.dimensions, config.mu, population_rng)
    seed_vector = np.broadcast_to(np.asarray(config.initial_value, dtype=float), (config.dimensions,))
    return build_population(seed_vector.copy(), config.mu, population_rng)


def build_components(
    config: ExperimentConfig,
    logger: RunLogger | None = None,
) -> tuple[EvolutionStrategy, Callable[[Any], float], list[Any]]:
    """Build an engine, its objective and the initial population from configuration."""
    rng = DeterministicRNG(config.seed)
    population, mu = _build_population(config, rng)

    termination: Callable[[Any], bool] = operators.never
    if config.sigma_threshold is not None:
        termination = operators.sigma_below(config.sigma_threshold)

    es_config = ESConfig(
        mu=mu,
        rho=config.rho,
        lambda_=config.lambda_,
        selection=config.selection,
        max_iterations=config.max_iterations if config.max_iterations is not None else len(population) * 100,
        record_interim=config.record_interim,
        init_strategy=create_strategy(config.strategy, config.dimensions, config.sigma),
    )
    ops = FunctionOperators(
        recombination=create_recombination(config.recombination),
        strategy_recombination=create_strategy_recombination(config.strategy_recombination),
        mutation=create_mutation(config.mutation),
        strategy_mutation=create_strategy_mutation(config.strategy_mutation),
        termination=termination,
    )
    engine = EvolutionStrategy(
        operators=ops,
        config=es_config,
        rng=rng.stream("evolution"),
        seed=config.seed,
        logger=logger,
        run_config=config.to_dict(),
    )
    return engine, create_objective(config.objective), population


def run_experiment(config: ExperimentConfig, logger: RunLogger | None = None) -> ESResult:
    engine, objective, population = build_components(config, logger=logger)
    result = engine.run(objective, population)
    summary = build_summary(result.history, result.generations)
    LOGGER.info(
        "%s: best %.6g after %d generation(s) (improvement %.6g)",
        config.objective,
        result.best_fitness,
        result.generations,
        summary["improvement"],
    )
    return result


def main(config_path: str = "configs/example_experiment.yaml") -> None:
    """Load config, build components, and run the optimizer."""
    logging.basicConfig(level=logging.INFO)
    config = ConfigLoader.load(config_path)
    logger = RunLogger(Path("es_metrics.db"))
    try:
        run_experiment(config, logger=logger)
    finally:
        logger.close()


if __name__ == "__main__":
    main()
