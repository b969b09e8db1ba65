"""Per-run fitness snapshot store."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

PARENT_FITNESS = "parent_fitness"
OFFSPRING_FITNESS = "offspring_fitness"


class HistoryStore:
    """Append-only mapping from a series key to fitness snapshots.

    With ``interim`` enabled every recorded snapshot is kept. Otherwise a
    series holds its first snapshot when ``pin_first`` was requested, plus the
    most recent one.
    """

    def __init__(self, interim: bool = False) -> None:
        self.interim = bool(interim)
        self._series: dict[str, list[tuple[float, ...]]] = {}
        self._pinned: set[str] = set()
        self._frozen = False

    def record(self, key: str, snapshot: Sequence[float], pin_first: bool = False) -> None:
        """Store a copy of ``snapshot`` under ``key``."""
        if self._frozen:
            raise RuntimeError("History is frozen once the run has returned.")
        values = tuple(float(value) for value in snapshot)
        series = self._series.setdefault(key, [])
        if pin_first and not series:
            self._pinned.add(key)
        if self.interim or not series:
            series.append(values)
            return
        if key in self._pinned and len(series) == 1:
            series.append(values)
        else:
            series[-1] = values

    def freeze(self) -> Mapping[str, tuple[tuple[float, ...], ...]]:
        """Stop accepting snapshots and return a read-only view."""
        self._frozen = True
        return MappingProxyType({key: tuple(series) for key, series in self._series.items()})

    def __getitem__(self, key: str) -> list[tuple[float, ...]]:
        return list(self._series[key])

    def __contains__(self, key: Any) -> bool:
        return key in self._series

    def keys(self) -> list[str]:
        return list(self._series)
