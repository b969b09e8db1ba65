"""Command-line entry points for running, batching, and plotting optimizer runs."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow `python cli/main.py ...` execution from IDEs by adding repo root to sys.path.
if __package__ in {None, ""}:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from configs.loader import ConfigLoader, ExperimentConfig
from data.logger import RunLogger
from main import run_experiment
from visualization.plotting import plot_experiment


def _run_single(config: ExperimentConfig, db_path: Path) -> tuple[str, float]:
    logger = RunLogger(db_path)
    try:
        result = run_experiment(config, logger=logger)
        experiment_id = logger.latest_experiment_id()
    finally:
        logger.close()
    if experiment_id is None:
        raise RuntimeError("Expected experiment id when logger is configured.")
    return experiment_id, result.best_fitness


def run_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="es")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("--config", default="configs/example_experiment.yaml")
    run_cmd.add_argument("--db", default="es_metrics.db")

    batch_cmd = sub.add_parser("batch")
    batch_cmd.add_argument("--config", default="configs/example_batch.yaml")
    batch_cmd.add_argument("--db", default="es_metrics.db")

    plot_cmd = sub.add_parser("plot")
    plot_cmd.add_argument("--experiment")
    plot_cmd.add_argument("--db", default="es_metrics.db")
    plot_cmd.add_argument("--out", default="artifacts/fitness.png")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.command == "run":
        config = ConfigLoader.load(args.config)
        exp_id, best = _run_single(config, Path(args.db))
        print(f"{exp_id} {best:.6g}")
        return 0

    if args.command == "batch":
        for config in ConfigLoader.load_many(args.config):
            exp_id, best = _run_single(config, Path(args.db))
            print(f"{exp_id} {best:.6g}")
        return 0

    if args.command == "plot":
        experiment_id = args.experiment
        if experiment_id is None:
            logger = RunLogger(args.db)
            try:
                experiment_id = logger.latest_experiment_id()
            finally:
                logger.close()
            if experiment_id is None:
                parser.error(f"No experiments recorded in {args.db}")
        path = plot_experiment(args.db, experiment_id, args.out)
        print(path)
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(run_cli())
