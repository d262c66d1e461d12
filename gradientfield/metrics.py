"""
gradientfield/metrics.py
Distance metrics over integer displacements

Each metric maps (dx, dy) to a non-negative distance. delta() works on
plain ints, field() on numpy arrays of displacements; both give the same
values for the same inputs.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Union

import numpy as np

ArrayLike = Union[int, np.ndarray]


class DistanceMetric(Enum):
    # IMPORTANT: Order is stable - random metric selection indexes into it
    MANHATTAN = "Manhattan"
    EUCLIDEAN = "Euclidean"
    EUCLIDEAN2 = "Euclidean2"   # squared Euclidean, no sqrt
    CHEBYSHEV = "Chebyshev"
    MIN_XY = "MinXY"

    @property
    def display_name(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def delta(self, dx: int, dy: int) -> float:
        """Distance for a single displacement."""
        ax, ay = abs(dx), abs(dy)
        if self is DistanceMetric.MANHATTAN:
            return float(ax + ay)
        if self is DistanceMetric.EUCLIDEAN:
            return math.sqrt(dx * dx + dy * dy)
        if self is DistanceMetric.EUCLIDEAN2:
            return float(dx * dx + dy * dy)
        if self is DistanceMetric.CHEBYSHEV:
            return float(max(ax, ay))
        if self is DistanceMetric.MIN_XY:
            return float(min(ax, ay))
        raise AssertionError(f"Unhandled metric: {self!r}")

    def field(self, dx: ArrayLike, dy: ArrayLike) -> np.ndarray:
        """Vectorized delta() over broadcastable displacement arrays."""
        dx = np.asarray(dx, dtype=np.float64)
        dy = np.asarray(dy, dtype=np.float64)
        if self is DistanceMetric.MANHATTAN:
            return np.abs(dx) + np.abs(dy)
        if self is DistanceMetric.EUCLIDEAN:
            return np.sqrt(dx * dx + dy * dy)
        if self is DistanceMetric.EUCLIDEAN2:
            return dx * dx + dy * dy
        if self is DistanceMetric.CHEBYSHEV:
            return np.maximum(np.abs(dx), np.abs(dy))
        if self is DistanceMetric.MIN_XY:
            return np.minimum(np.abs(dx), np.abs(dy))
        raise AssertionError(f"Unhandled metric: {self!r}")

    @classmethod
    def parse(cls, name: str) -> "DistanceMetric":
        """
        Look up a metric by member name or display name, case-insensitive.

        Example:
            DistanceMetric.parse("minxy") -> DistanceMetric.MIN_XY
            DistanceMetric.parse("min_xy") -> DistanceMetric.MIN_XY
        """
        key = name.strip().lower()
        for metric in cls:
            if key in (metric.name.lower(), metric.value.lower()):
                return metric
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown distance metric {name!r} (expected one of: {valid})")


ALL_METRICS = list(DistanceMetric)
