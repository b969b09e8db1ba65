"""Configuration loading and validation utilities for optimizer experiments."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from evolution.selection import Selection


_REQUIRED_KEYS: tuple[str, ...] = (
    "objective",
    "dimensions",
    "mu",
    "lambda",
    "seed",
)

_OPTIONAL_DEFAULTS: dict[str, Any] = {
    "rho": None,
    "selection": "plus",
    "max_iterations": None,
    "record_interim": False,
    "initial_value": None,
    "strategy": "isotropic",
    "sigma": 1.0,
    "recombination": "first",
    "strategy_recombination": "first",
    "mutation": "gaussian",
    "strategy_mutation": "identity",
    "sigma_threshold": None,
}


@dataclass(frozen=True)
class ExperimentConfig:
    """Validated experiment configuration container.

    Provides typed field access for the population parameters and
    dictionary-style access for extensible optional parameters.
    """

    objective: str
    dimensions: int
    mu: int
    lambda_: int
    seed: int
    rho: int | None = None
    selection: str = "plus"
    max_iterations: int | None = None
    record_interim: bool = False
    initial_value: float | list[float] | None = None
    strategy: str = "isotropic"
    sigma: float = 1.0
    recombination: str = "first"
    strategy_recombination: str = "first"
    mutation: str = "gaussian"
    strategy_mutation: str = "identity"
    sigma_threshold: float | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a configuration value by key.

        Args:
            key: Configuration key name.
            default: Value to return if key does not exist.

        Returns:
            Value associated with ``key`` or ``default``.
        """
        if key == "lambda":
            return self.lambda_
        if key != "extras" and hasattr(self, key):
            return getattr(self, key)
        return self.extras.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return a full dictionary view of the configuration."""
        payload = {key: self.get(key) for key in _REQUIRED_KEYS}
        payload.update({key: self.get(key) for key in _OPTIONAL_DEFAULTS})
        payload.update(self.extras)
        return payload


class ConfigLoader:
    """Load and validate experiment configuration files (YAML or JSON)."""

    @staticmethod
    def load(path: str | Path) -> ExperimentConfig:
        """Load a single experiment config from ``path``.

        Args:
            path: Path to a YAML or JSON config file.

        Returns:
            A validated ``ExperimentConfig`` instance.
        """
        payload = _read_config_payload(path)
        if not isinstance(payload, Mapping):
            raise ValueError("Single config file must contain a mapping object.")
        return _validate_and_build(payload)

    @staticmethod
    def load_many(path: str | Path) -> list[ExperimentConfig]:
        """Load one or many experiment configs from ``path``.

        Supports:
            - top-level mapping for single experiment
            - top-level list of mappings
            - top-level mapping with an ``experiments`` list
        """
        payload = _read_config_payload(path)

        if isinstance(payload, list):
            return [_validate_and_build(item) for item in payload]

        if isinstance(payload, Mapping) and "experiments" in payload:
            experiments = payload["experiments"]
            if not isinstance(experiments, list):
                raise ValueError("'experiments' must be a list of mappings.")
            return [_validate_and_build(item) for item in experiments]

        if isinstance(payload, Mapping):
            return [_validate_and_build(payload)]

        raise ValueError("Unsupported config file structure.")


def _read_config_payload(path: str | Path) -> Any:
    """Read raw config payload from JSON or YAML file."""
    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in {".json", ".yaml", ".yml"}:
        raise ValueError(f"Unsupported config extension: {suffix}")
    if not config_path.exists():
        raise ValueError(f"Config file not found: {config_path}")

    content = config_path.read_text(encoding="utf-8")
    if suffix == ".json":
        return json.loads(content)
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML config '{config_path}': {exc}") from exc


def _optional_int(payload: Mapping[str, Any], key: str) -> int | None:
    value = payload.get(key)
    return None if value is None else int(value)


def _validate_and_build(payload: Mapping[str, Any]) -> ExperimentConfig:
    """Validate raw mapping and build ``ExperimentConfig``."""
    if not isinstance(payload, Mapping):
        raise ValueError("Each experiment config must be a mapping.")
    missing = [key for key in _REQUIRED_KEYS if key not in payload]
    if missing:
        raise ValueError(f"Missing required config keys: {', '.join(missing)}")

    objective = str(payload["objective"])
    dimensions = int(payload["dimensions"])
    mu = int(payload["mu"])
    lambda_ = int(payload["lambda"])
    seed = int(payload["seed"])
    rho = _optional_int(payload, "rho")
    max_iterations = _optional_int(payload, "max_iterations")
    selection = str(payload.get("selection", "plus"))
    sigma = float(payload.get("sigma", 1.0))
    sigma_threshold = payload.get("sigma_threshold")

    if not objective:
        raise ValueError("objective must be non-empty")
    if dimensions <= 0:
        raise ValueError("dimensions must be > 0")
    if mu <= 0:
        raise ValueError("mu must be > 0")
    if lambda_ <= 0:
        raise ValueError("lambda must be > 0")
    if max_iterations is not None and max_iterations < 0:
        raise ValueError("max_iterations must be >= 0")
    if sigma <= 0.0:
        raise ValueError("sigma must be > 0")
    Selection.parse(selection)

    initial_value = payload.get("initial_value")
    if isinstance(initial_value, list):
        if len(initial_value) != dimensions:
            raise ValueError("initial_value list length must equal dimensions")
        initial_value = [float(v) for v in initial_value]
    elif initial_value is not None:
        initial_value = float(initial_value)

    known = set(_REQUIRED_KEYS) | set(_OPTIONAL_DEFAULTS)
    extras = {k: v for k, v in payload.items() if k not in known}

    return ExperimentConfig(
        objective=objective,
        dimensions=dimensions,
        mu=mu,
        lambda_=lambda_,
        seed=seed,
        rho=rho,
        selection=selection.lower(),
        max_iterations=max_iterations,
        record_interim=bool(payload.get("record_interim", False)),
        initial_value=initial_value,
        strategy=str(payload.get("strategy", "isotropic")),
        sigma=sigma,
        recombination=str(payload.get("recombination", "first")),
        strategy_recombination=str(payload.get("strategy_recombination", "first")),
        mutation=str(payload.get("mutation", "gaussian")),
        strategy_mutation=str(payload.get("strategy_mutation", "identity")),
        sigma_threshold=None if sigma_threshold is None else float(sigma_threshold),
        extras=extras,
    )
