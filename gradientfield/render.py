"""
gradientfield/render.py
Still and video render pipelines

Wires the pieces together:
    GenerationContext -> sources (+ velocities) -> composite() -> export

render_frames() is the sink-free core loop; render_still() and
render_video() add file output and the optional report/GIF.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Union

import numpy as np

from .animate import Velocity, iter_source_states
from .composite import composite
from .config import BRIGHTNESS_SCALE, Settings
from .export import build_report, frame_path, save_frame, save_gif, write_report
from .generate import animated_sources, still_sources
from .models import Source
from .seeds import GenerationContext

log = logging.getLogger(__name__)

PathLike = Union[str, Path]
ProgressCallback = Callable[[int, int, Path], None]


@dataclass
class RenderResult:
    """Outcome of a render run."""
    run_seed: int
    width: int
    height: int
    sources: List[Source]                      # initial state
    outputs: List[Path] = field(default_factory=list)
    velocities: Optional[List[Velocity]] = None
    gif_path: Optional[Path] = None
    report_path: Optional[Path] = None
    elapsed_sec: float = 0.0

    @property
    def frame_count(self) -> int:
        return len(self.outputs)

    @property
    def is_video(self) -> bool:
        return self.velocities is not None


def render_frames(
    sources: Sequence[Source],
    velocities: Sequence,
    width: int,
    height: int,
    n_frames: int,
    *,
    scale: float = BRIGHTNESS_SCALE,
    workers: int = 1,
) -> Iterator[np.ndarray]:
    """Yield one composited frame per animation step."""
    for state in iter_source_states(sources, velocities, n_frames):
        yield composite(width, height, state, scale=scale, workers=workers)


def render_still(
    ctx: GenerationContext,
    width: int,
    height: int,
    output: PathLike,
    *,
    count: Optional[int] = None,
    settings: Optional[Settings] = None,
    workers: Optional[int] = None,
    report: Optional[PathLike] = None,
) -> RenderResult:
    """Sample sources, composite one frame and write it to output."""
    settings = settings or Settings()
    workers = workers or settings.render.workers
    start = time.perf_counter()

    sources = still_sources(ctx, width, height, count=count, config=settings.sampling)
    log.info("Rendering %dx%d still from %d sources", width, height, len(sources))
    frame = composite(width, height, sources, workers=workers)
    path = save_frame(frame, output)

    result = RenderResult(
        run_seed=ctx.run_seed,
        width=width,
        height=height,
        sources=sources,
        outputs=[path],
        elapsed_sec=time.perf_counter() - start,
    )
    if report is not None:
        result.report_path = write_report(report, build_report(
            ctx.run_seed, width, height, sources, result.outputs,
            elapsed_sec=result.elapsed_sec,
        ))
    return result


def render_video(
    ctx: GenerationContext,
    width: int,
    height: int,
    output_template: PathLike,
    n_frames: int,
    *,
    count: Optional[int] = None,
    settings: Optional[Settings] = None,
    workers: Optional[int] = None,
    gif: Optional[PathLike] = None,
    report: Optional[PathLike] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> RenderResult:
    """
    Render an animated sequence, one file per frame.

    Args:
        output_template: Per-frame path template, see export.frame_path()
        n_frames: Number of frames (>= 1)
        gif: Optional path for an animated GIF of the whole sequence
        progress_callback: Called as (index, total, path) after each frame
    """
    if n_frames < 1:
        raise ValueError(f"Frame count must be positive, got {n_frames}")
    settings = settings or Settings()
    workers = workers or settings.render.workers
    start = time.perf_counter()

    sources, velocities = animated_sources(
        ctx, width, height, count=count, config=settings.sampling
    )
    log.info("Rendering %d frames at %dx%d from %d sources",
             n_frames, width, height, len(sources))

    outputs: List[Path] = []
    gif_frames: List[np.ndarray] = []
    frames = render_frames(sources, velocities, width, height, n_frames, workers=workers)
    for i, frame in enumerate(frames):
        path = save_frame(frame, frame_path(output_template, i))
        outputs.append(path)
        if gif is not None:
            gif_frames.append(frame)
        if progress_callback:
            progress_callback(i, n_frames, path)

    result = RenderResult(
        run_seed=ctx.run_seed,
        width=width,
        height=height,
        sources=sources,
        outputs=outputs,
        velocities=velocities,
    )
    if gif is not None:
        result.gif_path = save_gif(gif_frames, gif, fps=settings.render.gif_fps)
    result.elapsed_sec = time.perf_counter() - start
    if report is not None:
        result.report_path = write_report(report, build_report(
            ctx.run_seed, width, height, sources, outputs,
            velocities=velocities, elapsed_sec=result.elapsed_sec,
        ))
    return result
