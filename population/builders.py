"""Helpers that turn a seed value, a matrix or a generator into parents.

These only build the initial list of individuals; the engine never calls
back into them once a run starts.
"""

from __future__ import annotations

from numbers import Integral, Real
from typing import Any, Callable, Sequence

import numpy as np


def replicate(individual: Sequence[float], mu: int, rng: np.random.Generator) -> list[np.ndarray]:
    """Spawn ``mu`` individuals by scaling ``individual`` with uniform noise in [0, 1)."""
    if mu < 1:
        raise ValueError("mu must be >= 1")
    seed = np.asarray(individual, dtype=float)
    return [seed * rng.random(seed.shape) for _ in range(mu)]


def from_matrix(matrix: Any) -> list[np.ndarray]:
    """Split a 2-D array into individuals, one per column."""
    array = np.asarray(matrix, dtype=float)
    if array.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got {array.ndim} dimension(s).")
    return [array[:, column].copy() for column in range(array.shape[1])]


def from_generator(
    size: int,
    mu: int,
    creation: Callable[[int], Any] | None = None,
    rng: np.random.Generator | None = None,
) -> list[Any]:
    """Create ``mu`` individuals of length ``size``.

    Without ``creation`` the individuals are uniform [0, 1) vectors.
    """
    if size < 1:
        raise ValueError("size must be >= 1")
    if mu < 1:
        raise ValueError("mu must be >= 1")
    if creation is None:
        local_rng = rng if rng is not None else np.random.default_rng()
        return [local_rng.random(size) for _ in range(mu)]
    return [creation(size) for _ in range(mu)]


def build_population(
    source: Any,
    mu: int,
    rng: np.random.Generator,
    creation: Callable[[int], Any] | None = None,
) -> tuple[list[Any], int]:
    """Resolve any supported population source into ``(individuals, mu)``.

    - list/tuple of reals: a seed vector, replicated ``mu`` times.
    - other list/tuple: used as given.
    - 2-D array: one individual per column; ``mu`` becomes the column count.
    - 1-D real array: replicated ``mu`` times with random scaling.
    - int: individual size for :func:`from_generator`.
    """
    if isinstance(source, (bool, np.bool_)):
        raise TypeError("Population source cannot be a boolean.")
    if isinstance(source, Integral):
        return from_generator(int(source), mu, creation=creation, rng=rng), mu
    if isinstance(source, (list, tuple)):
        if source and all(_is_real(value) for value in source):
            return replicate(source, mu, rng), mu
        return list(source), mu
    array = np.asarray(source)
    if array.ndim == 2:
        individuals = from_matrix(array)
        return individuals, len(individuals)
    if array.ndim == 1 and np.issubdtype(array.dtype, np.number):
        return replicate(array, mu, rng), mu
    raise TypeError(f"Unsupported population source of type {type(source).__name__}.")


def _is_real(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))
