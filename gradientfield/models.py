"""
gradientfield/models.py
Core data models: Point and Source

A Source is one weighted distance contributor on the canvas. It is an
immutable value; animation replaces it each frame via moved_to().
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple

import numpy as np

from .config import MIN_CANVAS
from .metrics import DistanceMetric


class Point(NamedTuple):
    """Integer canvas coordinate or displacement."""
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":  # type: ignore[override]
        return Point(self.x + other[0], self.y + other[1])

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other[0], self.y - other[1])


def validate_canvas(width: int, height: int) -> None:
    """Reject canvases too small to normalize distances against."""
    if width < MIN_CANVAS or height < MIN_CANVAS:
        raise ValueError(
            f"Canvas must be at least {MIN_CANVAS}x{MIN_CANVAS}, got {width}x{height}"
        )


# =============================================================================
# Source
# =============================================================================

@dataclass(frozen=True)
class Source:
    """
    A single distance source.

    Attributes:
        width, height: Canvas bounds the source was built against
        metric: Distance metric
        anchor: Position, 0 <= x < width, 0 <= y < height
        rweight, gweight, bweight: Non-negative channel weights
        reverse: Invert the normalized distance (far = bright)
        wrap: Measure distance toroidally, per axis
        max_distance: Derived normalization constant
    """
    width: int
    height: int
    metric: DistanceMetric
    anchor: Point
    rweight: float
    gweight: float
    bweight: float
    reverse: bool = False
    wrap: bool = False
    max_distance: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        validate_canvas(self.width, self.height)
        x, y = self.anchor[0], self.anchor[1]
        if not (float(x).is_integer() and float(y).is_integer()):
            raise ValueError(f"Anchor must have integer coordinates, got ({x}, {y})")
        anchor = Point(int(x), int(y))
        if not (0 <= anchor.x < self.width and 0 <= anchor.y < self.height):
            raise ValueError(
                f"Anchor {tuple(anchor)} outside {self.width}x{self.height} canvas"
            )
        for name in ("rweight", "gweight", "bweight"):
            w = getattr(self, name)
            if not math.isfinite(w) or w < 0:
                raise ValueError(f"{name} must be finite and non-negative, got {w}")
        object.__setattr__(self, "anchor", anchor)
        object.__setattr__(self, "max_distance", self._compute_max_distance())

    def _compute_max_distance(self) -> float:
        if self.wrap:
            # Under wrap nothing is further than half the canvas on either axis
            return self.metric.delta(self.width // 2, self.height // 2)
        # Farthest corner, per axis; every metric is monotonic in |dx| and |dy|
        return self.metric.delta(
            max(self.anchor.x, self.width - self.anchor.x),
            max(self.anchor.y, self.height - self.anchor.y),
        )

    @property
    def weights(self) -> tuple:
        return (self.rweight, self.gweight, self.bweight)

    # -------------------------------------------------------------------------
    # Scalar queries
    # -------------------------------------------------------------------------

    def distance_to(self, p) -> float:
        """Raw metric distance from the anchor to pixel p."""
        d = self.anchor - Point(p[0], p[1])
        dx, dy = d.x, d.y
        if self.wrap:
            if dx < 0:
                dx = min(-dx, self.anchor.x - (p[0] - self.width))
            else:
                dx = min(dx, p[0] + self.width - self.anchor.x)
            if dy < 0:
                dy = min(-dy, self.anchor.y - (p[1] - self.height))
            else:
                dy = min(dy, p[1] + self.height - self.anchor.y)
        return self.metric.delta(dx, dy)

    def scaled_distance(self, p) -> float:
        """Distance normalized by max_distance, inverted when reverse is set."""
        raw = self.distance_to(p) / self.max_distance
        return 1.0 - raw if self.reverse else raw

    # -------------------------------------------------------------------------
    # Vectorized queries
    # -------------------------------------------------------------------------

    def distance_field(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        distance_to() over a grid.

        xs: 1-D pixel columns, ys: 1-D pixel rows.
        Returns float64 array of shape (len(ys), len(xs)).
        """
        dx = self.anchor.x - np.asarray(xs, dtype=np.int64)
        dy = self.anchor.y - np.asarray(ys, dtype=np.int64)
        if self.wrap:
            dx = _wrap_axis(dx, self.width)
            dy = _wrap_axis(dy, self.height)
        return self.metric.field(dx[np.newaxis, :], dy[:, np.newaxis])

    def scaled_field(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        raw = self.distance_field(xs, ys) / self.max_distance
        return 1.0 - raw if self.reverse else raw

    # -------------------------------------------------------------------------
    # Derivation / serialization
    # -------------------------------------------------------------------------

    def moved_to(self, anchor) -> "Source":
        """Same source at a new anchor, normalization recomputed."""
        return Source(
            width=self.width,
            height=self.height,
            metric=self.metric,
            anchor=Point(anchor[0], anchor[1]),
            rweight=self.rweight,
            gweight=self.gweight,
            bweight=self.bweight,
            reverse=self.reverse,
            wrap=self.wrap,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "metric": self.metric.value,
            "anchor": [self.anchor.x, self.anchor.y],
            "weights": [self.rweight, self.gweight, self.bweight],
            "reverse": self.reverse,
            "wrap": self.wrap,
            "max_distance": self.max_distance,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Source":
        rweight, gweight, bweight = (float(w) for w in d["weights"])
        return cls(
            width=int(d["width"]),
            height=int(d["height"]),
            metric=DistanceMetric.parse(d["metric"]),
            anchor=Point(*d["anchor"]),
            rweight=rweight,
            gweight=gweight,
            bweight=bweight,
            reverse=bool(d.get("reverse", False)),
            wrap=bool(d.get("wrap", False)),
        )


def _wrap_axis(d: np.ndarray, size: int) -> np.ndarray:
    # Same per-axis choice as Source.distance_to: shorter of direct and wrapped
    return np.where(d < 0, np.minimum(-d, d + size), np.minimum(d, size - d))
