from __future__ import annotations

import numpy as np
import pytest

from configs.loader import ExperimentConfig
from engine.component_registry import (
    available_mutations,
    available_objectives,
    available_recombinations,
    available_strategies,
    available_strategy_mutations,
    available_strategy_recombinations,
    create_mutation,
    create_objective,
    create_strategy,
    register_objective,
)
from evolution.es import EvolutionStrategy
from evolution.selection import Selection
from evolution.strategy import AnisotropicStrategy, IsotropicStrategy
from main import build_components, run_experiment


def _config(**overrides) -> ExperimentConfig:
    values = dict(objective="sphere", dimensions=3, mu=4, lambda_=8, seed=123, max_iterations=20)
    values.update(overrides)
    return ExperimentConfig(**values)


def test_default_factories_registered() -> None:
    assert {"sphere", "rosenbrock", "rastrigin", "ackley"} <= set(available_objectives())
    assert available_strategies() == ["anisotropic", "isotropic", "none"]
    assert "marriage" in available_recombinations()
    assert "average_sigma" in available_strategy_recombinations()
    assert "cauchy" in available_mutations()
    assert "anisotropic_sigma" in available_strategy_mutations()


def test_create_components_by_name() -> None:
    assert create_objective("sphere")(np.array([1.0, 2.0])) == 5.0
    assert isinstance(create_strategy("isotropic", 4, 0.5), IsotropicStrategy)
    assert isinstance(create_strategy("anisotropic", 4, 0.5), AnisotropicStrategy)
    assert create_strategy("none", 4, 0.5) is None
    with pytest.raises(ValueError, match="Unknown mutation 'levy'. Available: cauchy, gaussian, identity"):
        create_mutation("levy")


def test_registered_objective_is_available() -> None:
    register_objective("shifted_sphere", lambda x: float(np.sum((np.asarray(x) - 1.0) ** 2)))

    assert "shifted_sphere" in available_objectives()
    assert create_objective("shifted_sphere")(np.ones(3)) == 0.0


def test_build_components_from_config() -> None:
    engine, objective, population = build_components(_config(initial_value=2.0, selection="comma", rho=2))

    assert isinstance(engine, EvolutionStrategy)
    assert engine.config.selection is Selection.COMMA
    assert engine.config.rho == 2
    assert len(population) == 4
    assert all(ind.shape == (3,) for ind in population)
    assert all(np.all((ind >= 0.0) & (ind <= 2.0)) for ind in population)
    assert objective is create_objective("sphere")


def test_build_components_defaults_iteration_budget_to_population_size() -> None:
    engine, _objective, _population = build_components(_config(max_iterations=None))

    assert engine.config.max_iterations == 400


def test_run_experiment_is_reproducible_for_same_seed() -> None:
    config = _config(initial_value=[3.0, -2.0, 1.0], sigma=0.3, strategy_mutation="isotropic_sigma")

    first = run_experiment(config)
    second = run_experiment(config)

    assert first.best_fitness == second.best_fitness
    np.testing.assert_array_equal(first.best_individual, second.best_individual)
    assert first.best_fitness < 14.0


def test_sigma_threshold_stops_run_early() -> None:
    config = _config(sigma=1.0e-6, sigma_threshold=1.0e-3, max_iterations=50)

    result = run_experiment(config)

    assert result.generations == 1
