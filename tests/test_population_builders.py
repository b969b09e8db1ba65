"""Tests for initial population construction helpers."""

from __future__ import annotations

import numpy as np
import pytest

from evolution.es import es
from objectives.benchmarks import sphere
from population.builders import build_population, from_generator, from_matrix, replicate


def test_replicate_scales_seed_vector_with_uniform_noise() -> None:
    individuals = replicate([2.0, -4.0], 6, np.random.default_rng(0))

    assert len(individuals) == 6
    for individual in individuals:
        assert individual.shape == (2,)
        assert 0.0 <= individual[0] <= 2.0
        assert -4.0 <= individual[1] <= 0.0
    assert not np.array_equal(individuals[0], individuals[1])


def test_from_matrix_uses_columns_as_individuals() -> None:
    matrix = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    individuals = from_matrix(matrix)

    assert len(individuals) == 3
    np.testing.assert_array_equal(individuals[1], np.array([2.0, 5.0]))
    individuals[0][0] = 100.0
    assert matrix[0, 0] == 1.0


def test_from_matrix_rejects_vectors() -> None:
    with pytest.raises(ValueError, match="2-D"):
        from_matrix(np.ones(3))


def test_from_generator_default_and_custom_creation() -> None:
    defaults = from_generator(4, 3, rng=np.random.default_rng(1))
    custom = from_generator(2, 2, creation=lambda n: np.full(n, 7.0))

    assert len(defaults) == 3
    assert all(ind.shape == (4,) and np.all((ind >= 0.0) & (ind < 1.0)) for ind in defaults)
    np.testing.assert_array_equal(custom[1], np.array([7.0, 7.0]))
    with pytest.raises(ValueError):
        from_generator(0, 2)


def test_build_population_dispatch() -> None:
    rng = np.random.default_rng(2)
    listed = [np.zeros(2), np.ones(2)]

    individuals, mu = build_population(listed, 2, rng)
    assert mu == 2
    assert individuals[0] is listed[0] and individuals[1] is listed[1]
    matrix_individuals, matrix_mu = build_population(np.zeros((3, 5)), 1, rng)
    assert matrix_mu == 5
    assert len(matrix_individuals) == 5
    seeded, seeded_mu = build_population(np.array([1.0, 1.0]), 4, rng)
    assert seeded_mu == 4 and len(seeded) == 4
    plain_seed, plain_mu = build_population([5.0, 5], 3, rng)
    assert plain_mu == 3 and len(plain_seed) == 3
    assert all(ind.shape == (2,) for ind in plain_seed)
    scalars, scalars_mu = build_population([True, False], 2, rng)
    assert scalars_mu == 2 and scalars == [True, False]
    generated, generated_mu = build_population(3, 2, rng)
    assert generated_mu == 2 and generated[0].shape == (3,)
    with pytest.raises(TypeError):
        build_population(True, 2, rng)
    with pytest.raises(TypeError):
        build_population(np.array(["a", "b"]), 2, rng)


def test_es_accepts_matrix_population_and_sets_mu_from_columns() -> None:
    matrix = np.array([[3.0, 1.0, 2.0], [3.0, 1.0, 2.0]])
    result = es(sphere, matrix, lambda_=4, max_iterations=0)

    assert len(result.population) == 3
    assert result.best_fitness == 2.0


def test_es_accepts_individual_size_with_creation() -> None:
    result = es(sphere, 3, creation=lambda n: np.full(n, 2.0), mu=2, lambda_=2, max_iterations=0)

    assert len(result.population) == 2
    assert result.best_fitness == 12.0


def test_es_replicates_plain_list_seed_vector() -> None:
    result = es(sphere, [5.0, 5.0], mu=5, lambda_=10, max_iterations=5, seed=3)

    assert len(result.population) == 5
    assert all(ind.shape == (2,) for ind in result.population)
    assert result.best_fitness <= 50.0
