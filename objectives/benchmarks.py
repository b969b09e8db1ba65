"""Classic minimization benchmarks. All have their global minimum 0."""

from __future__ import annotations

import math

import numpy as np


def sphere(x: np.ndarray) -> float:
    """Sum of squares, minimum at the origin."""
    v = np.asarray(x, dtype=float)
    return float(np.dot(v, v))


def rosenbrock(x: np.ndarray) -> float:
    """Rosenbrock valley, minimum at (1, ..., 1)."""
    v = np.asarray(x, dtype=float)
    if v.size < 2:
        raise ValueError("rosenbrock needs at least two dimensions")
    return float(np.sum(100.0 * (v[1:] - v[:-1] ** 2) ** 2 + (1.0 - v[:-1]) ** 2))


def rastrigin(x: np.ndarray) -> float:
    v = np.asarray(x, dtype=float)
    return float(10.0 * v.size + np.sum(v**2 - 10.0 * np.cos(2.0 * math.pi * v)))


def ackley(x: np.ndarray) -> float:
    v = np.asarray(x, dtype=float)
    n = v.size
    term1 = -20.0 * math.exp(-0.2 * math.sqrt(float(np.dot(v, v)) / n))
    term2 = -math.exp(float(np.sum(np.cos(2.0 * math.pi * v))) / n)
    return float(term1 + term2 + 20.0 + math.e)
