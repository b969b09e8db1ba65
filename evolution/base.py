"""Operator contracts for the evolution strategy engine."""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, Generic, Sequence, TypeVar

import numpy as np

from evolution import operators

T = TypeVar("T")
S = TypeVar("S")


class EvolutionOperators(ABC, Generic[T, S]):
    """Pluggable variation and termination operators.

    Subclasses override only the capabilities they need; every method has a
    no-op default so that the bare class reproduces a pure selection loop.

    Invariants:
        - Operators must return new objects and must not modify their inputs
          or hold on to the sequences they are given.
        - All randomness must come from the ``rng`` argument.
    """

    def recombine(self, individuals: Sequence[T], rng: np.random.Generator) -> T:
        """Combine the ``rho`` selected parents into one recombinant.

        Default: the first selected parent.
        """
        return individuals[0]

    def recombine_strategy(self, strategies: Sequence[S], rng: np.random.Generator) -> S:
        """Combine the strategy parameters of the selected parents.

        Called before :meth:`recombine` for the same parent subset. Default:
        the first one.
        """
        return strategies[0]

    def mutate(self, individual: T, strategy: S, rng: np.random.Generator) -> T:
        """Perturb a recombinant using its already mutated ``strategy``.

        Default: identity.
        """
        return individual

    def mutate_strategy(self, strategy: S, rng: np.random.Generator) -> S:
        """Perturb a strategy parameter. Default: identity."""
        return strategy

    def should_terminate(self, strategy: S) -> bool:
        """Early-stop predicate on the best parent's strategy. Default: never."""
        return False


class DefaultOperators(EvolutionOperators[Any, Any]):
    """Operators with every default behavior left in place."""


class FunctionOperators(EvolutionOperators[T, S]):
    """Adapter exposing five plain callables through the operator contract."""

    def __init__(
        self,
        recombination: Callable[[Sequence[T], np.random.Generator], T] = operators.first,
        strategy_recombination: Callable[[Sequence[S], np.random.Generator], S] = operators.first,
        mutation: Callable[[T, S, np.random.Generator], T] = operators.identity_mutation,
        strategy_mutation: Callable[[S, np.random.Generator], S] = operators.identity,
        termination: Callable[[S], bool] = operators.never,
    ) -> None:
        self.recombination = recombination
        self.strategy_recombination = strategy_recombination
        self.mutation = mutation
        self.strategy_mutation = strategy_mutation
        self.termination = termination

    def recombine(self, individuals: Sequence[T], rng: np.random.Generator) -> T:
        return self.recombination(individuals, rng)

    def recombine_strategy(self, strategies: Sequence[S], rng: np.random.Generator) -> S:
        return self.strategy_recombination(strategies, rng)

    def mutate(self, individual: T, strategy: S, rng: np.random.Generator) -> T:
        return self.mutation(individual, strategy, rng)

    def mutate_strategy(self, strategy: S, rng: np.random.Generator) -> S:
        return self.strategy_mutation(strategy, rng)

    def should_terminate(self, strategy: S) -> bool:
        return bool(self.termination(strategy))
