"""(mu/rho +, lambda) evolution strategy engine.

The engine owns all loop state: parent and offspring populations are kept as
parallel lists of individuals, strategy parameters and fitness values linked
only by position. Variation is delegated to an :class:`EvolutionOperators`
instance; the engine itself never inspects individuals or strategies.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Mapping, Sequence, TypeVar

import numpy as np

from data.logger import RunLogger
from evolution import operators as stock
from evolution.base import DefaultOperators, EvolutionOperators, FunctionOperators
from evolution.config import ESConfig
from evolution.errors import ObjectiveEvaluationError
from evolution.history import OFFSPRING_FITNESS, PARENT_FITNESS, HistoryStore
from evolution.selection import Selection, select_comma, select_plus
from population.builders import build_population

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

Objective = Callable[[Any], float]


@dataclass(frozen=True)
class ESResult(Generic[T, S]):
    """Outcome of one optimizer invocation.

    Unpacks as ``best_individual, best_fitness, generations, history``.
    """

    best_individual: T
    best_fitness: float
    generations: int
    history: Mapping[str, tuple[tuple[float, ...], ...]]
    population: list[T]
    strategies: list[S]
    fitness: list[float]
    evaluations: int

    def __iter__(self) -> Iterator[Any]:
        return iter((self.best_individual, self.best_fitness, self.generations, self.history))


class EvolutionStrategy(Generic[T, S]):
    """Runs the generational loop for one configuration.

    One instance may be reused for several runs; each run starts from the
    population handed to :meth:`run` and draws from the same ``rng``.
    """

    def __init__(
        self,
        operators: EvolutionOperators[T, S] | None = None,
        config: ESConfig | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        logger: RunLogger | None = None,
        run_config: Mapping[str, Any] | None = None,
        verbose: bool = False,
    ) -> None:
        self.operators: EvolutionOperators[T, S] = operators if operators is not None else DefaultOperators()
        self.config = config if config is not None else ESConfig()
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.logger = logger
        self.run_config = dict(run_config or {})
        self.verbose = verbose
        self.experiment_id: str | None = None
        self.evaluations = 0

    def run(self, objective: Objective, population: Sequence[T]) -> ESResult[T, S]:
        """Optimize ``objective`` starting from ``population``.

        Only the first ``mu`` individuals are used. Raises
        :class:`ConfigurationError` before any evaluation if the configuration
        cannot run, and :class:`ObjectiveEvaluationError` if the objective
        fails at any point.
        """
        config = self.config
        config.validate(len(population))
        mu = config.mu
        self.evaluations = 0

        parents = list(population[:mu])
        initial_fitness = [self._evaluate(objective, individual, None, slot) for slot, individual in enumerate(parents)]
        order = np.argsort(np.asarray(initial_fitness, dtype=float), kind="stable")
        parents = [parents[i] for i in order]
        fitness = [initial_fitness[i] for i in order]
        strategies: list[S] = [config.init_strategy] * mu

        history = HistoryStore(interim=config.record_interim)
        history.record(PARENT_FITNESS, fitness, pin_first=True)
        self._start_experiment()

        LOGGER.info(
            "Starting (%d/%d%s%d)-ES for %d generations, initial best %.6g",
            mu,
            config.rho,
            "+" if config.selection is Selection.PLUS else ",",
            config.lambda_,
            config.max_iterations,
            fitness[0],
        )

        count = 0
        while count < config.max_iterations:
            offspring, offspring_strategies, offspring_fitness = self._procreate(
                objective, parents, strategies, count
            )
            parents, strategies, fitness = self._select(
                parents, strategies, fitness, offspring, offspring_strategies, offspring_fitness
            )
            history.record(PARENT_FITNESS, fitness)
            history.record(OFFSPRING_FITNESS, offspring_fitness)
            self._on_generation_end(count, fitness, offspring_fitness, strategies[0])

            count += 1
            if count == config.max_iterations or self.operators.should_terminate(strategies[0]):
                break

        LOGGER.info("Finished after %d generation(s), %d evaluation(s), best %.6g", count, self.evaluations, fitness[0])
        return ESResult(
            best_individual=parents[0],
            best_fitness=fitness[0],
            generations=count,
            history=history.freeze(),
            population=parents,
            strategies=strategies,
            fitness=fitness,
            evaluations=self.evaluations,
        )

    def _procreate(
        self,
        objective: Objective,
        parents: list[T],
        strategies: list[S],
        generation: int,
    ) -> tuple[list[T], list[S], list[float]]:
        """Build and evaluate ``lambda`` offspring from the current parents."""
        mu, rho, lambda_ = self.config.mu, self.config.rho, self.config.lambda_
        ops = self.operators
        rng = self.rng

        offspring: list[T] = []
        offspring_strategies: list[S] = []
        offspring_fitness = [math.inf] * lambda_
        for slot in range(lambda_):
            if rho == 1:
                j = int(rng.integers(mu))
                recombinant_strategy = strategies[j]
                recombinant = copy.deepcopy(parents[j])
            else:
                selected = rng.choice(mu, size=rho, replace=False)
                # Strategy first: object mutation is driven by the mutated strategy.
                recombinant_strategy = ops.recombine_strategy([strategies[i] for i in selected], rng)
                recombinant = ops.recombine([parents[i] for i in selected], rng)

            child_strategy = ops.mutate_strategy(recombinant_strategy, rng)
            child = ops.mutate(recombinant, child_strategy, rng)
            offspring_strategies.append(child_strategy)
            offspring.append(child)
            offspring_fitness[slot] = self._evaluate(objective, child, generation, slot)
        return offspring, offspring_strategies, offspring_fitness

    def _select(
        self,
        parents: list[T],
        strategies: list[S],
        fitness: list[float],
        offspring: list[T],
        offspring_strategies: list[S],
        offspring_fitness: list[float],
    ) -> tuple[list[T], list[S], list[float]]:
        """Return the next parent population in ascending fitness order."""
        mu = self.config.mu
        if self.config.selection is Selection.COMMA:
            chosen = select_comma(offspring_fitness, mu)
            return (
                [offspring[i] for i in chosen],
                [offspring_strategies[i] for i in chosen],
                [offspring_fitness[i] for i in chosen],
            )

        next_parents: list[T] = []
        next_strategies: list[S] = []
        next_fitness: list[float] = []
        for from_offspring, index in select_plus(fitness, offspring_fitness, mu):
            if from_offspring:
                next_parents.append(offspring[index])
                next_strategies.append(offspring_strategies[index])
                next_fitness.append(offspring_fitness[index])
            else:
                next_parents.append(parents[index])
                next_strategies.append(strategies[index])
                next_fitness.append(fitness[index])
        return next_parents, next_strategies, next_fitness

    def _evaluate(self, objective: Objective, individual: T, generation: int | None, slot: int) -> float:
        self.evaluations += 1
        try:
            return float(objective(individual))
        except Exception as exc:
            where = "initial parent" if generation is None else f"generation {generation} offspring"
            raise ObjectiveEvaluationError(
                f"Objective failed on {where} {slot}: {exc}", generation=generation, slot=slot
            ) from exc

    def _start_experiment(self) -> None:
        if self.logger is None:
            self.experiment_id = None
            return
        config = self.config
        payload = dict(self.run_config)
        payload.update(
            {
                "mu": config.mu,
                "rho": config.rho,
                "lambda": config.lambda_,
                "selection": config.selection.value,
                "max_iterations": config.max_iterations,
                "record_interim": config.record_interim,
            }
        )
        safe_seed = int(self.seed if self.seed is not None else 0)
        self.experiment_id = self.logger.start_experiment(
            config=payload,
            seed=safe_seed,
            metadata={"operators": type(self.operators).__name__},
        )

    def _on_generation_end(
        self,
        generation_index: int,
        fitness: list[float],
        offspring_fitness: list[float],
        best_strategy: S,
    ) -> None:
        LOGGER.log(
            logging.INFO if self.verbose else logging.DEBUG,
            "BEST: %.6g: %r",
            fitness[0],
            best_strategy,
        )
        if self.logger is None or self.experiment_id is None:
            return
        self.logger.log_metrics(
            experiment_id=self.experiment_id,
            generation_index=generation_index,
            metrics={
                "best_fitness": fitness[0],
                "mean_fitness": float(np.mean(fitness)),
                "worst_fitness": fitness[-1],
                "offspring_best_fitness": float(min(offspring_fitness)),
            },
        )


def es(
    objective: Objective,
    population: Any,
    *,
    init_strategy: Any = None,
    recombination: Callable[..., Any] = stock.first,
    strategy_recombination: Callable[..., Any] = stock.first,
    mutation: Callable[..., Any] = stock.identity_mutation,
    strategy_mutation: Callable[..., Any] = stock.identity,
    termination: Callable[[Any], bool] = stock.never,
    mu: int = 1,
    rho: int | None = None,
    lambda_: int = 1,
    selection: Selection | str = Selection.PLUS,
    max_iterations: int | None = None,
    record_interim: bool = False,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    creation: Callable[[int], Any] | None = None,
    verbose: bool = False,
    logger: RunLogger | None = None,
) -> ESResult:
    """Run an evolution strategy with operators given as plain callables.

    ``population`` may be a list of individuals, a seed vector given as a
    1-D array or a plain list of reals (replicated ``mu`` times), a matrix
    whose columns are individuals (``mu`` becomes the column count) or an
    int individual size combined with ``creation``.
    ``max_iterations`` defaults to 100 times the population size.

    Example:
        >>> result = es(lambda x: float(x @ x), np.array([5.0, 5.0]),
        ...             init_strategy=isotropic(2), mutation=gaussian,
        ...             mu=5, lambda_=10, seed=1)
        >>> best, fitness, generations, history = result
    """
    generator = rng if rng is not None else np.random.default_rng(seed)
    individuals, mu = build_population(population, mu, generator, creation=creation)
    if max_iterations is None:
        max_iterations = len(individuals) * 100

    config = ESConfig(
        mu=mu,
        rho=rho,
        lambda_=lambda_,
        selection=selection,
        max_iterations=max_iterations,
        record_interim=record_interim,
        init_strategy=init_strategy,
    )
    operators = FunctionOperators(
        recombination=recombination,
        strategy_recombination=strategy_recombination,
        mutation=mutation,
        strategy_mutation=strategy_mutation,
        termination=termination,
    )
    engine = EvolutionStrategy(
        operators=operators,
        config=config,
        rng=generator,
        seed=seed,
        logger=logger,
        verbose=verbose,
    )
    return engine.run(objective, individuals)
