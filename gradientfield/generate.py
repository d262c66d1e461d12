"""
gradientfield/generate.py
Randomized source and velocity generation

Draws the initial source list for a run from a GenerationContext.
Sources and velocities use separate random streams so changing one never
perturbs the other.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from .animate import Velocity
from .config import SAMPLING_CONFIG, SamplingConfig
from .metrics import ALL_METRICS, DistanceMetric
from .models import Point, Source, validate_canvas
from .seeds import GenerationContext

log = logging.getLogger(__name__)


def sample_source_count(rng: np.random.Generator,
                        config: SamplingConfig = SAMPLING_CONFIG) -> int:
    """Poisson-distributed source count, never below min_source_count."""
    count = int(rng.poisson(config.mean_source_count))
    return max(count, config.min_source_count)


def random_metric(rng: np.random.Generator) -> DistanceMetric:
    return ALL_METRICS[int(rng.integers(len(ALL_METRICS)))]


def random_source(
    rng: np.random.Generator,
    width: int,
    height: int,
    *,
    wrap: Optional[bool] = None,
) -> Source:
    """
    One source with uniformly random parameters.

    wrap=None draws the wrap flag; True/False forces it.
    """
    metric = random_metric(rng)
    x = int(rng.integers(width))
    y = int(rng.integers(height))
    reverse = bool(rng.random() < 0.5)
    drawn_wrap = bool(rng.random() < 0.5)
    rweight, gweight, bweight = (float(w) for w in rng.random(3))
    return Source(
        width=width,
        height=height,
        metric=metric,
        anchor=Point(x, y),
        rweight=rweight,
        gweight=gweight,
        bweight=bweight,
        reverse=reverse,
        wrap=drawn_wrap if wrap is None else wrap,
    )


def random_velocity(rng: np.random.Generator,
                    config: SamplingConfig = SAMPLING_CONFIG) -> Velocity:
    """Integer velocity with both components in [velocity_min, velocity_max], never (0, 0)."""
    if config.velocity_min == 0 and config.velocity_max == 0:
        raise ValueError("Velocity range [0, 0] cannot produce a moving source")
    while True:
        dx, dy = (int(v) for v in rng.integers(config.velocity_min, config.velocity_max + 1, size=2))
        v = Velocity(dx, dy)
        if not v.is_zero:
            return v


def _check_count(count: int, config: SamplingConfig) -> None:
    if count < config.min_source_count:
        raise ValueError(
            f"Need at least {config.min_source_count} sources, got {count}"
        )


def still_sources(
    ctx: GenerationContext,
    width: int,
    height: int,
    count: Optional[int] = None,
    config: SamplingConfig = SAMPLING_CONFIG,
) -> List[Source]:
    """Sources for a single still image."""
    validate_canvas(width, height)
    rng = ctx.rng("sources")
    if count is None:
        count = sample_source_count(rng, config)
    _check_count(count, config)
    sources = [random_source(rng, width, height) for _ in range(count)]
    log.debug("Sampled %d still sources (seed=%d)", len(sources), ctx.run_seed)
    return sources


def animated_sources(
    ctx: GenerationContext,
    width: int,
    height: int,
    count: Optional[int] = None,
    config: SamplingConfig = SAMPLING_CONFIG,
) -> Tuple[List[Source], List[Velocity]]:
    """
    Sources and per-source velocities for an animation.

    Wrap is forced on for every source so drifting sources re-enter from
    the opposite edge seamlessly.
    """
    validate_canvas(width, height)
    if count is None:
        count = config.video_source_count
    _check_count(count, config)
    src_rng = ctx.rng("sources")
    vel_rng = ctx.rng("velocities")
    sources = [random_source(src_rng, width, height, wrap=True) for _ in range(count)]
    velocities = [random_velocity(vel_rng, config) for _ in range(count)]
    log.debug("Sampled %d animated sources (seed=%d)", len(sources), ctx.run_seed)
    return sources, velocities
