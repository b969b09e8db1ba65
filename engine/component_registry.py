"""Factories/registries for named optimizer components."""

from __future__ import annotations

from typing import Any, Callable

from evolution import operators
from evolution.strategy import anisotropic, isotropic
from objectives import benchmarks


StrategyFactory = Callable[[int, float], Any]


_OBJECTIVES: dict[str, Callable[[Any], float]] = {}
_STRATEGIES: dict[str, StrategyFactory] = {}
_RECOMBINATIONS: dict[str, Callable[..., Any]] = {}
_STRATEGY_RECOMBINATIONS: dict[str, Callable[..., Any]] = {}
_MUTATIONS: dict[str, Callable[..., Any]] = {}
_STRATEGY_MUTATIONS: dict[str, Callable[..., Any]] = {}


def register_objective(name: str, objective: Callable[[Any], float]) -> None:
    _OBJECTIVES[str(name)] = objective


def register_strategy(name: str, factory: StrategyFactory) -> None:
    _STRATEGIES[str(name)] = factory


def register_recombination(name: str, operator: Callable[..., Any]) -> None:
    _RECOMBINATIONS[str(name)] = operator


def register_strategy_recombination(name: str, operator: Callable[..., Any]) -> None:
    _STRATEGY_RECOMBINATIONS[str(name)] = operator


def register_mutation(name: str, operator: Callable[..., Any]) -> None:
    _MUTATIONS[str(name)] = operator


def register_strategy_mutation(name: str, operator: Callable[..., Any]) -> None:
    _STRATEGY_MUTATIONS[str(name)] = operator


def available_objectives() -> list[str]:
    return sorted(_OBJECTIVES)


def available_strategies() -> list[str]:
    return sorted(_STRATEGIES)


def available_recombinations() -> list[str]:
    return sorted(_RECOMBINATIONS)


def available_strategy_recombinations() -> list[str]:
    return sorted(_STRATEGY_RECOMBINATIONS)


def available_mutations() -> list[str]:
    return sorted(_MUTATIONS)


def available_strategy_mutations() -> list[str]:
    return sorted(_STRATEGY_MUTATIONS)


def _lookup(kind: str, registry: dict[str, Any], name: str) -> Any:
    entry = registry.get(str(name))
    if entry is None:
        available = ", ".join(sorted(registry)) or "<none>"
        raise ValueError(f"Unknown {kind} '{name}'. Available: {available}")
    return entry


def create_objective(name: str) -> Callable[[Any], float]:
    return _lookup("objective", _OBJECTIVES, name)


def create_strategy(name: str, dimensions: int, sigma: float) -> Any:
    return _lookup("strategy", _STRATEGIES, name)(dimensions, sigma)


def create_recombination(name: str) -> Callable[..., Any]:
    return _lookup("recombination", _RECOMBINATIONS, name)


def create_strategy_recombination(name: str) -> Callable[..., Any]:
    return _lookup("strategy recombination", _STRATEGY_RECOMBINATIONS, name)


def create_mutation(name: str) -> Callable[..., Any]:
    return _lookup("mutation", _MUTATIONS, name)


def create_strategy_mutation(name: str) -> Callable[..., Any]:
    return _lookup("strategy mutation", _STRATEGY_MUTATIONS, name)


def _no_strategy(_dimensions: int, _sigma: float) -> None:
    return None


def _register_defaults() -> None:
    if _OBJECTIVES:
        return
    register_objective("sphere", benchmarks.sphere)
    register_objective("rosenbrock", benchmarks.rosenbrock)
    register_objective("rastrigin", benchmarks.rastrigin)
    register_objective("ackley", benchmarks.ackley)

    register_strategy("isotropic", isotropic)
    register_strategy("anisotropic", anisotropic)
    register_strategy("none", _no_strategy)

    register_recombination("first", operators.first)
    register_recombination("average", operators.average)
    register_recombination("marriage", operators.marriage)

    register_strategy_recombination("first", operators.first)
    register_strategy_recombination("average_sigma", operators.average_sigma)

    register_mutation("gaussian", operators.gaussian)
    register_mutation("cauchy", operators.cauchy)
    register_mutation("identity", operators.identity_mutation)

    register_strategy_mutation("identity", operators.identity)
    register_strategy_mutation("isotropic_sigma", operators.isotropic_sigma)
    register_strategy_mutation("anisotropic_sigma", operators.anisotropic_sigma)


_register_defaults()
