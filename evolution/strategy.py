"""Strategy parameter containers for self-adaptive mutation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

import numpy as np


@dataclass(frozen=True)
class IsotropicStrategy:
    """One step size shared by every coordinate.

    ``tau`` is the learning rate of the log-normal step-size update.
    """

    sigma: float = 1.0
    tau: float = 1.0

    def with_sigma(self, sigma: float) -> "IsotropicStrategy":
        return replace(self, sigma=float(sigma))


@dataclass(frozen=True, eq=False)
class AnisotropicStrategy:
    """Per-coordinate step sizes with a global and a local learning rate."""

    sigma: np.ndarray = field(default_factory=lambda: np.ones(1))
    tau: float = 1.0
    tau0: float = 1.0

    def __post_init__(self) -> None:
        sigma = np.array(self.sigma, dtype=float, copy=True)
        sigma.setflags(write=False)
        object.__setattr__(self, "sigma", sigma)

    def with_sigma(self, sigma: np.ndarray) -> "AnisotropicStrategy":
        return replace(self, sigma=sigma)


def isotropic(dim: int, sigma: float = 1.0) -> IsotropicStrategy:
    """Isotropic strategy with the standard learning rate ``1/sqrt(2*dim)``."""
    if dim <= 0:
        raise ValueError("dim must be > 0")
    return IsotropicStrategy(sigma=float(sigma), tau=1.0 / math.sqrt(2.0 * dim))


def anisotropic(dim: int, sigma: float = 1.0) -> AnisotropicStrategy:
    """Anisotropic strategy with standard global and per-coordinate learning rates."""
    if dim <= 0:
        raise ValueError("dim must be > 0")
    return AnisotropicStrategy(
        sigma=np.full(dim, float(sigma)),
        tau=1.0 / math.sqrt(2.0 * dim),
        tau0=1.0 / math.sqrt(2.0 * math.sqrt(dim)),
    )
