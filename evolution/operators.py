"""Stock recombination, mutation and termination operators.

Every operator takes the engine's ``numpy.random.Generator`` as its last
argument so that runs stay reproducible for a fixed seed. Operators return new
objects and never modify their inputs.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from evolution.strategy import AnisotropicStrategy, IsotropicStrategy


def first(items: Sequence[Any], rng: np.random.Generator | None = None) -> Any:
    """Pick the first selected parent (individual or strategy)."""
    return items[0]


def identity(value: Any, rng: np.random.Generator | None = None) -> Any:
    return value


def identity_mutation(individual: Any, strategy: Any, rng: np.random.Generator | None = None) -> Any:
    return individual


def never(strategy: Any) -> bool:
    return False


# Recombination

def average(individuals: Sequence[np.ndarray], rng: np.random.Generator | None = None) -> np.ndarray:
    """Intermediate recombination: coordinate-wise mean of the parents."""
    return np.mean(np.stack([np.asarray(ind, dtype=float) for ind in individuals]), axis=0)


def marriage(individuals: Sequence[np.ndarray], rng: np.random.Generator) -> np.ndarray:
    """Discrete recombination: each coordinate comes from a random parent."""
    stacked = np.stack([np.asarray(ind, dtype=float) for ind in individuals])
    donors = rng.integers(0, stacked.shape[0], size=stacked.shape[1])
    return stacked[donors, np.arange(stacked.shape[1])]


def average_sigma(
    strategies: Sequence[IsotropicStrategy | AnisotropicStrategy],
    rng: np.random.Generator | None = None,
) -> IsotropicStrategy | AnisotropicStrategy:
    """Average the step sizes of the selected strategies."""
    head = strategies[0]
    if isinstance(head, AnisotropicStrategy):
        return head.with_sigma(np.mean(np.stack([s.sigma for s in strategies]), axis=0))
    return head.with_sigma(float(np.mean([s.sigma for s in strategies])))


# Strategy mutation

def isotropic_sigma(strategy: IsotropicStrategy, rng: np.random.Generator) -> IsotropicStrategy:
    """Log-normal update of a single step size."""
    return strategy.with_sigma(strategy.sigma * np.exp(strategy.tau * rng.standard_normal()))


def anisotropic_sigma(strategy: AnisotropicStrategy, rng: np.random.Generator) -> AnisotropicStrategy:
    """Log-normal update with one global and one per-coordinate factor."""
    n = strategy.sigma.shape[0]
    common = np.exp(strategy.tau0 * rng.standard_normal())
    return strategy.with_sigma(common * strategy.sigma * np.exp(strategy.tau * rng.standard_normal(n)))


# Object parameter mutation

def gaussian(
    individual: np.ndarray,
    strategy: IsotropicStrategy | AnisotropicStrategy,
    rng: np.random.Generator,
) -> np.ndarray:
    """Add normally distributed noise scaled by the strategy's step size(s)."""
    x = np.asarray(individual, dtype=float)
    return x + np.asarray(strategy.sigma) * rng.standard_normal(x.shape)


def cauchy(
    individual: np.ndarray,
    strategy: IsotropicStrategy | AnisotropicStrategy,
    rng: np.random.Generator,
) -> np.ndarray:
    """Heavy-tailed variant of :func:`gaussian`."""
    x = np.asarray(individual, dtype=float)
    return x + np.asarray(strategy.sigma) * rng.standard_cauchy(x.shape)


# Termination

def sigma_below(threshold: float) -> Callable[[Any], bool]:
    """Stop once every step size of the best parent falls below ``threshold``."""

    def _terminate(strategy: Any) -> bool:
        sigma = getattr(strategy, "sigma", None)
        if sigma is None:
            return False
        return bool(np.all(np.asarray(sigma) < threshold))

    return _terminate
