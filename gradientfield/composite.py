"""
gradientfield/composite.py
Multi-source compositing into an RGB frame

Each source contributes scaled_distance * channel_weight to every pixel.
The accumulated channels are divided by the total channel weight over all
sources, multiplied by BRIGHTNESS_SCALE and quantized to bytes.

Pure numpy. Rows can be split into bands and computed on a thread pool;
bands write disjoint slices of the accumulator.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import BRIGHTNESS_SCALE
from .models import Source, validate_canvas

log = logging.getLogger(__name__)

# (height, width, 3) uint8, row-major
Frame = np.ndarray


class Accumulator:
    """
    Per-pixel floating point RGB sums plus per-channel weight totals.

    Totals must be complete (add_weights for every source) before any
    pixels are accumulated; resolve() divides by them.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)
        self.total_rweight = 0.0
        self.total_gweight = 0.0
        self.total_bweight = 0.0

    @property
    def totals(self) -> Tuple[float, float, float]:
        return (self.total_rweight, self.total_gweight, self.total_bweight)

    def add_weights(self, rweight: float, gweight: float, bweight: float) -> None:
        self.total_rweight += rweight
        self.total_gweight += gweight
        self.total_bweight += bweight

    def add_sources(self, sources: Sequence[Source], row_start: int = 0,
                    row_stop: Optional[int] = None) -> None:
        """Accumulate every source's weighted field into rows [row_start, row_stop)."""
        if row_stop is None:
            row_stop = self.height
        xs = np.arange(self.width)
        ys = np.arange(row_start, row_stop)
        band = self.pixels[row_start:row_stop]
        for source in sources:
            dist = source.scaled_field(xs, ys)[:, :, np.newaxis]
            band += dist * np.asarray(source.weights, dtype=np.float64)

    def resolve(self, scale: float = BRIGHTNESS_SCALE) -> Frame:
        """Normalize, scale and quantize to uint8 RGB."""
        totals = np.asarray(self.totals, dtype=np.float64)
        safe = np.where(totals == 0.0, 1.0, totals)
        normalized = np.where(totals == 0.0, 0.0, self.pixels / safe)
        value = normalized * scale * 255.0
        # Round half away from zero, then clamp to the byte range
        rounded = np.sign(value) * np.floor(np.abs(value) + 0.5)
        return np.clip(rounded, 0, 255).astype(np.uint8)


def _row_bands(height: int, n_bands: int) -> List[Tuple[int, int]]:
    n_bands = max(1, min(n_bands, height))
    edges = np.linspace(0, height, n_bands + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def composite(
    width: int,
    height: int,
    sources: Sequence[Source],
    *,
    scale: float = BRIGHTNESS_SCALE,
    workers: int = 1,
) -> Frame:
    """
    Composite sources into a single frame.

    Args:
        width, height: Canvas size (at least 2x2)
        sources: Sources to blend; may be empty (black frame)
        scale: Brightness multiplier applied after normalization
        workers: Thread count for the per-pixel pass

    Returns:
        uint8 array of shape (height, width, 3)
    """
    validate_canvas(width, height)
    for source in sources:
        if (source.width, source.height) != (width, height):
            raise ValueError(
                f"Source built for {source.width}x{source.height} canvas, "
                f"compositing {width}x{height}"
            )

    acc = Accumulator(width, height)
    for source in sources:
        acc.add_weights(source.rweight, source.gweight, source.bweight)

    if workers <= 1:
        acc.add_sources(sources)
    else:
        bands = _row_bands(height, workers)
        log.debug("Compositing %d sources in %d bands", len(sources), len(bands))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = [ex.submit(acc.add_sources, sources, a, b) for a, b in bands]
            for fut in futures:
                fut.result()

    return acc.resolve(scale)
