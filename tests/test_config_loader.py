"""Tests for config loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from configs.loader import ConfigLoader


def _payload(**overrides) -> dict:
    payload = {
        "objective": "sphere",
        "dimensions": 2,
        "mu": 5,
        "lambda": 10,
        "seed": 1,
    }
    payload.update(overrides)
    return payload


def test_load_json_config(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(_payload(note="demo", selection="COMMA")), encoding="utf-8")

    config = ConfigLoader.load(config_path)

    assert config.mu == 5
    assert config.lambda_ == 10
    assert config.get("lambda") == 10
    assert config.selection == "comma"
    assert config.mutation == "gaussian"
    assert config.get("note") == "demo"
    assert config.to_dict()["note"] == "demo"
    assert config.to_dict()["lambda"] == 10


def test_load_yaml_config(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "\n".join(
            [
                "objective: rastrigin",
                "dimensions: 3",
                "initial_value: [1.0, 2.0, 3.0]",
                "mu: 4",
                "rho: 2",
                "lambda: 12",
                "seed: 7",
                "strategy: anisotropic",
                "sigma_threshold: 0.001",
                "record_interim: true",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    config = ConfigLoader.load(config_path)

    assert config.objective == "rastrigin"
    assert config.rho == 2
    assert config.initial_value == [1.0, 2.0, 3.0]
    assert config.strategy == "anisotropic"
    assert config.sigma_threshold == 0.001
    assert config.record_interim is True


def test_load_many_batch_json(tmp_path) -> None:
    config_path = tmp_path / "batch.json"
    payload = {"experiments": [_payload(), _payload(objective="rosenbrock", max_iterations=6)]}
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    configs = ConfigLoader.load_many(config_path)

    assert len(configs) == 2
    assert configs[1].max_iterations == 6


def test_load_many_accepts_top_level_list(tmp_path) -> None:
    config_path = tmp_path / "batch.json"
    config_path.write_text(json.dumps([_payload(), _payload(seed=2)]), encoding="utf-8")

    assert [config.seed for config in ConfigLoader.load_many(config_path)] == [1, 2]


def test_bundled_example_configs_load() -> None:
    configs_dir = Path(__file__).resolve().parents[1] / "configs"
    single = ConfigLoader.load(configs_dir / "example_experiment.yaml")
    batch = ConfigLoader.load_many(configs_dir / "example_batch.yaml")

    assert single.initial_value == [5.0, 5.0]
    assert len(batch) == 2
    assert batch[0].sigma_threshold == pytest.approx(1.0e-8)


def test_invalid_config_missing_required_key(tmp_path) -> None:
    config_path = tmp_path / "invalid.json"
    payload = _payload()
    del payload["seed"]
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError, match="Missing required config keys: seed"):
        ConfigLoader.load(config_path)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"mu": 0}, "mu must be > 0"),
        ({"lambda": 0}, "lambda must be > 0"),
        ({"dimensions": 0}, "dimensions must be > 0"),
        ({"sigma": 0.0}, "sigma must be > 0"),
        ({"max_iterations": -1}, "max_iterations must be >= 0"),
        ({"selection": "roulette"}, "Unknown selection"),
        ({"initial_value": [1.0]}, "initial_value list length"),
    ],
)
def test_invalid_values_are_rejected(tmp_path, overrides: dict, message: str) -> None:
    config_path = tmp_path / "invalid.json"
    config_path.write_text(json.dumps(_payload(**overrides)), encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        ConfigLoader.load(config_path)


def test_unsupported_extension_and_missing_file(tmp_path) -> None:
    with pytest.raises(ValueError, match="Unsupported config extension"):
        ConfigLoader.load(tmp_path / "config.toml")
    with pytest.raises(ValueError, match="Config file not found"):
        ConfigLoader.load(tmp_path / "missing.yaml")
