"""SQLite-backed experiment metadata and per-generation fitness logging."""

from __future__ import annotations

import hashlib
import json
import platform
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping


@dataclass(frozen=True)
class GenerationMetrics:
    """Structured per-generation metrics payload."""

    generation_index: int
    best_fitness: float = 0.0
    mean_fitness: float = 0.0
    worst_fitness: float = 0.0
    offspring_best_fitness: float = 0.0


class RunLogger:
    """Persist experiment metadata and per-generation metrics in SQLite."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row
        self._ensure_schema()

    def close(self) -> None:
        self.connection.close()

    def _ensure_schema(self) -> None:
        self.connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS experiment_metadata (
                experiment_id TEXT PRIMARY KEY,
                config_hash TEXT NOT NULL,
                seed INTEGER NOT NULL,
                config_json TEXT NOT NULL,
                runtime_metadata TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS generation_metrics (
                experiment_id TEXT NOT NULL,
                generation_index INTEGER NOT NULL,
                best_fitness REAL NOT NULL,
                mean_fitness REAL NOT NULL,
                worst_fitness REAL NOT NULL,
                offspring_best_fitness REAL NOT NULL,
                PRIMARY KEY (experiment_id, generation_index),
                FOREIGN KEY (experiment_id)
                    REFERENCES experiment_metadata (experiment_id)
                    ON DELETE CASCADE
            );
            """
        )
        self.connection.commit()

    def start_experiment(self, config: Mapping[str, Any], seed: int, metadata: Mapping[str, Any] | None = None) -> str:
        config_json = json.dumps(dict(config), sort_keys=True, default=str)
        runtime_metadata = {"python_version": platform.python_version(), "platform": platform.platform()}
        if metadata:
            runtime_metadata.update(dict(metadata))
        config_hash = hashlib.sha256(config_json.encode("utf-8")).hexdigest()
        deterministic_key = hashlib.sha256(f"{config_hash}:{seed}".encode("utf-8")).hexdigest()
        run_nonce = str(time.time_ns())
        experiment_id = hashlib.sha256(f"{deterministic_key}:{run_nonce}".encode("utf-8")).hexdigest()[:16]
        runtime_metadata["deterministic_key"] = deterministic_key
        metadata_json = json.dumps(runtime_metadata, sort_keys=True, default=str)

        self.connection.execute(
            """
            INSERT OR IGNORE INTO experiment_metadata (
                experiment_id, config_hash, seed, config_json, runtime_metadata
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (experiment_id, config_hash, seed, config_json, metadata_json),
        )
        self.connection.commit()
        return experiment_id

    def log_metrics(self, experiment_id: str, generation_index: int, metrics: Mapping[str, float]) -> None:
        """Store one generation of ES fitness statistics.

        ``metrics`` carries ``best_fitness``, ``mean_fitness`` and
        ``worst_fitness`` of the selected parents, plus
        ``offspring_best_fitness`` of the generation's offspring. Re-logging
        a generation replaces its row.
        """
        row = GenerationMetrics(
            generation_index=generation_index,
            best_fitness=float(metrics.get("best_fitness", 0.0)),
            mean_fitness=float(metrics.get("mean_fitness", 0.0)),
            worst_fitness=float(metrics.get("worst_fitness", 0.0)),
            offspring_best_fitness=float(metrics.get("offspring_best_fitness", 0.0)),
        )
        self.connection.execute(
            """
            INSERT OR REPLACE INTO generation_metrics (
                experiment_id,
                generation_index,
                best_fitness,
                mean_fitness,
                worst_fitness,
                offspring_best_fitness
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                experiment_id,
                row.generation_index,
                row.best_fitness,
                row.mean_fitness,
                row.worst_fitness,
                row.offspring_best_fitness,
            ),
        )
        self.connection.commit()

    def fetch_metrics(self, experiment_id: str) -> list[dict[str, float]]:
        """Return ordered generation metrics for plotting/analysis."""
        rows = self.connection.execute(
            """
            SELECT generation_index, best_fitness, mean_fitness, worst_fitness, offspring_best_fitness
            FROM generation_metrics
            WHERE experiment_id = ?
            ORDER BY generation_index ASC
            """,
            (experiment_id,),
        ).fetchall()
        return [dict(row) for row in rows]

    def latest_experiment_id(self) -> str | None:
        """Return most recently created experiment id, if any."""
        row = self.connection.execute(
            """
            SELECT experiment_id
            FROM experiment_metadata
            ORDER BY created_at DESC, rowid DESC
            LIMIT 1
            """
        ).fetchone()
        return str(row[0]) if row is not None else None

    def fetch_experiment(self, experiment_id: str) -> dict[str, Any] | None:
        """Return the seed and run config stored for ``experiment_id``.

        The config holds the resolved mu, rho, lambda, selection and
        max_iterations merged over the experiment file values. Returns
        ``None`` for unknown ids.
        """
        row = self.connection.execute(
            "SELECT seed, config_json FROM experiment_metadata WHERE experiment_id = ?",
            (experiment_id,),
        ).fetchone()
        if row is None:
            return None
        return {"seed": int(row["seed"]), "config": json.loads(row["config_json"])}
