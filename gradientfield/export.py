"""
gradientfield/export.py
Raster output and generation reports

- save_frame(): one frame to any format Pillow can write
- frame_path(): per-frame file name from an output template
- save_gif(): assemble frames into an animated GIF
- write_report(): JSON record of the run (seed, sources, velocities, files)
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
from PIL import Image

from . import __version__
from .config import FORMAT_VERSION
from .models import Source

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

# printf-style integer placeholder, e.g. %d, %04d, %i
_PRINTF_INT = re.compile(r"%[-+ 0#]*\d*[di]")
_BOOST_POS = "%1%"


def frame_path(template: PathLike, index: int) -> Path:
    """
    Resolve the output path for a frame.

    Accepted templates:
        "out_%1%.png"       boost::format positional
        "out_%04d.png"      printf-style
        "out_{:04d}.png"    str.format, positional
        "out_{frame}.png"   str.format, named
        "out.png"           no placeholder -> "out_<index>.png"

    Raises ValueError if the template has a placeholder that cannot be filled.
    """
    template = str(template)
    try:
        if _BOOST_POS in template:
            return Path(template.replace(_BOOST_POS, str(index)))
        if _PRINTF_INT.search(template):
            return Path(template % index)
        if "{" in template:
            return Path(template.format(index, frame=index))
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid output template {template!r}: {e}") from e
    p = Path(template)
    return p.with_name(f"{p.stem}_{index}{p.suffix}")


def frame_to_image(frame: np.ndarray) -> Image.Image:
    if frame.dtype != np.uint8 or frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"Expected (H, W, 3) uint8 frame, got {frame.shape} {frame.dtype}")
    return Image.fromarray(frame)


def save_frame(frame: np.ndarray, path: PathLike) -> Path:
    """Write one frame. Format follows the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame_to_image(frame).save(path)
    log.debug("Wrote %s", path)
    return path


def save_gif(frames: Sequence[np.ndarray], path: PathLike, fps: int = 30) -> Path:
    """Write frames as a looping animated GIF."""
    if len(frames) == 0:
        raise ValueError("No frames to write")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    images = [frame_to_image(f) for f in frames]
    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=max(1, round(1000 / fps)),
        loop=0,
        optimize=False,
    )
    log.debug("Wrote GIF %s (%d frames)", path, len(images))
    return path


def build_report(
    run_seed: int,
    width: int,
    height: int,
    sources: Sequence[Source],
    outputs: Sequence[PathLike],
    velocities: Optional[Sequence] = None,
    elapsed_sec: Optional[float] = None,
) -> Dict:
    report = {
        "format_version": FORMAT_VERSION,
        "generator_version": __version__,
        "created": datetime.now().isoformat(timespec="seconds"),
        "run_seed": run_seed,
        "canvas": {"width": width, "height": height},
        "mode": "video" if velocities is not None else "still",
        "sources": [s.to_dict() for s in sources],
        "outputs": [str(p) for p in outputs],
    }
    if velocities is not None:
        report["velocities"] = [[int(v[0]), int(v[1])] for v in velocities]
        report["frame_count"] = len(outputs)
    if elapsed_sec is not None:
        report["elapsed_sec"] = round(elapsed_sec, 3)
    return report


def write_report(path: PathLike, report: Dict) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    log.debug("Wrote report %s", path)
    return path


def load_report_sources(path: PathLike) -> List[Source]:
    """Rebuild the initial sources recorded in a report."""
    with open(path, encoding="utf-8") as f:
        report = json.load(f)
    return [Source.from_dict(d) for d in report["sources"]]
