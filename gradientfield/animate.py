"""
gradientfield/animate.py
Per-frame source motion

Every source drifts by a fixed integer velocity each frame and wraps
around the canvas edges. advance() is pure: it returns new Source values
and leaves its inputs untouched.
"""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Sequence

from .models import Point, Source


class Velocity(NamedTuple):
    """Per-frame anchor displacement."""
    dx: int
    dy: int

    @property
    def is_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0


def wrap_point(p, width: int, height: int) -> Point:
    """Fold a point into [0, width) x [0, height)."""
    # Python's % already returns a non-negative remainder for positive bounds
    return Point(p[0] % width, p[1] % height)


def advance_source(source: Source, velocity) -> Source:
    """Move one source by velocity, wrapping at the canvas edges."""
    new_anchor = wrap_point(
        (source.anchor.x + velocity[0], source.anchor.y + velocity[1]),
        source.width,
        source.height,
    )
    return source.moved_to(new_anchor)


def advance(sources: Sequence[Source], velocities: Sequence) -> List[Source]:
    """
    Advance every source by its velocity.

    Args:
        sources: Current frame's sources
        velocities: One (dx, dy) per source, none of them (0, 0)

    Returns:
        Next frame's sources, same order
    """
    if len(sources) != len(velocities):
        raise ValueError(
            f"Got {len(velocities)} velocities for {len(sources)} sources"
        )
    for v in velocities:
        if v[0] == 0 and v[1] == 0:
            raise ValueError("Velocity (0, 0) would leave a source stationary")
    return [advance_source(s, v) for s, v in zip(sources, velocities)]


def iter_source_states(
    sources: Sequence[Source],
    velocities: Sequence,
    n_frames: int,
) -> Iterator[List[Source]]:
    """
    Yield the source list for frames 0..n_frames-1.

    Frame 0 is the initial state. Collecting the states up front lets frames
    be composited in any order.
    """
    if n_frames < 1:
        raise ValueError(f"Frame count must be positive, got {n_frames}")
    current = list(sources)
    for i in range(n_frames):
        yield current
        if i + 1 < n_frames:
            current = advance(current, velocities)
