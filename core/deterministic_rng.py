"""Deterministic RNG container for reproducible optimizer runs."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

import numpy as np


@dataclass
class DeterministicRNG:
    """Hands out named numpy generators without touching global random state."""

    seed: int
    _streams: dict[str, np.random.Generator] = field(default_factory=dict, init=False, repr=False)

    def stream(self, name: str) -> np.random.Generator:
        """Return independent deterministic stream by name."""
        if name not in self._streams:
            # Use stable cross-process seed derivation instead of built-in hash().
            digest = hashlib.sha256(f"{self.seed}:{name}".encode("utf-8")).digest()
            derived_seed = int.from_bytes(digest[:8], byteorder="big", signed=False)
            self._streams[name] = np.random.default_rng(derived_seed)
        return self._streams[name]
