"""
gradientfield - Procedural distance-field gradient generator

Scatters distance sources over a canvas and blends each source's
normalized distance into the RGB channels with per-source weights.
Animations drift the sources across a wrapping canvas.

Usage:
    python -m gradientfield render out.png
    python -m gradientfield render "out_%04d.png" --frames 120
    python -m gradientfield list-metrics
"""

__version__ = "0.1.0"

from .metrics import DistanceMetric, ALL_METRICS
from .models import Point, Source, validate_canvas
from .composite import Accumulator, composite
from .animate import Velocity, advance, advance_source, iter_source_states, wrap_point
from .seeds import GenerationContext, stable_u32, run_seed_from_string
from .generate import still_sources, animated_sources, random_source, random_velocity
from .render import render_still, render_video, render_frames, RenderResult
from .config import BRIGHTNESS_SCALE, SAMPLING_CONFIG, RENDER_CONFIG, Settings, load_settings

__all__ = [
    # Version
    "__version__",
    # Metrics / models
    "DistanceMetric",
    "ALL_METRICS",
    "Point",
    "Source",
    "validate_canvas",
    # Compositing
    "Accumulator",
    "composite",
    # Animation
    "Velocity",
    "advance",
    "advance_source",
    "iter_source_states",
    "wrap_point",
    # Seeds / generation
    "GenerationContext",
    "stable_u32",
    "run_seed_from_string",
    "still_sources",
    "animated_sources",
    "random_source",
    "random_velocity",
    # Rendering
    "render_still",
    "render_video",
    "render_frames",
    "RenderResult",
    # Config
    "BRIGHTNESS_SCALE",
    "SAMPLING_CONFIG",
    "RENDER_CONFIG",
    "Settings",
    "load_settings",
]
