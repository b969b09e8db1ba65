"""Tests for CLI run/batch/plot flow."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import run_cli
from data.logger import RunLogger
from visualization.plotting import plot_experiment


def _write_config(path: Path, **overrides) -> Path:
    payload = {
        "objective": "sphere",
        "dimensions": 2,
        "initial_value": 5.0,
        "mu": 3,
        "lambda": 6,
        "max_iterations": 15,
        "sigma": 0.5,
        "seed": 7,
    }
    payload.update(overrides)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_run_and_plot(tmp_path, capsys) -> None:
    db_path = tmp_path / "es.db"
    config_path = _write_config(tmp_path / "config.json")

    assert run_cli(["run", "--config", str(config_path), "--db", str(db_path)]) == 0
    exp_id, best = capsys.readouterr().out.split()
    assert float(best) >= 0.0

    logger = RunLogger(db_path)
    assert logger.latest_experiment_id() == exp_id
    assert len(logger.fetch_metrics(exp_id)) == 15
    logger.close()

    out_path = tmp_path / "plot.png"
    assert run_cli(["plot", "--experiment", exp_id, "--db", str(db_path), "--out", str(out_path)]) == 0
    assert out_path.exists()
    assert out_path.stat().st_size > 0


def test_cli_batch_and_plot_latest(tmp_path, capsys) -> None:
    db_path = tmp_path / "es.db"
    config_path = tmp_path / "batch.json"
    config_path.write_text(
        json.dumps(
            {
                "experiments": [
                    {"objective": "sphere", "dimensions": 2, "mu": 2, "lambda": 4, "max_iterations": 5, "seed": 1},
                    {
                        "objective": "rosenbrock",
                        "dimensions": 2,
                        "mu": 2,
                        "rho": 2,
                        "lambda": 4,
                        "selection": "comma",
                        "max_iterations": 5,
                        "seed": 2,
                        "recombination": "average",
                    },
                ]
            }
        ),
        encoding="utf-8",
    )

    assert run_cli(["batch", "--config", str(config_path), "--db", str(db_path)]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2

    out_path = tmp_path / "nested" / "latest.png"
    assert run_cli(["plot", "--db", str(db_path), "--out", str(out_path)]) == 0
    assert out_path.exists()


def test_plot_unknown_experiment_raises(tmp_path) -> None:
    db_path = tmp_path / "es.db"
    RunLogger(db_path).close()

    with pytest.raises(ValueError, match="No metrics recorded"):
        plot_experiment(db_path, "missing", tmp_path / "plot.png")


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        run_cli([])
