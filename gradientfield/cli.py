"""
gradientfield/cli.py
Command-line interface for gradientfield

Usage:
    python -m gradientfield render out.png --seed 42
    python -m gradientfield render "frames/out_%04d.png" --frames 120 --gif out.gif
    python -m gradientfield list-metrics
    python -m gradientfield describe --seed 42 --width 640 --height 360
"""

import argparse
import sys
from typing import Optional, Tuple

from . import __version__
from .config import MIN_CANVAS, Settings, load_settings
from .logger import LogLevel, logger
from .seeds import GenerationContext, fresh_run_seed, run_seed_from_string

METRIC_FORMULAS = {
    "Manhattan": "|dx| + |dy|",
    "Euclidean": "sqrt(dx^2 + dy^2)",
    "Euclidean2": "dx^2 + dy^2",
    "Chebyshev": "max(|dx|, |dy|)",
    "MinXY": "min(|dx|, |dy|)",
}


def _parse_seed(value: Optional[str]) -> int:
    """Integer seeds are used as-is, anything else is hashed."""
    if value is None:
        return fresh_run_seed()
    try:
        return int(value)
    except ValueError:
        return run_seed_from_string(value)


def _resolve_canvas(args: argparse.Namespace, settings: Settings) -> Tuple[int, int]:
    """Canvas size: flags, then detected screen, then settings default."""
    if args.width is not None and args.height is not None:
        return args.width, args.height

    from .display import detect_screen_size

    detected = detect_screen_size()
    if detected is None:
        logger.info(
            "No screen detected, using default canvas",
            details=f"{settings.render.default_width}x{settings.render.default_height}",
        )
        detected = (settings.render.default_width, settings.render.default_height)
    width = args.width if args.width is not None else detected[0]
    height = args.height if args.height is not None else detected[1]
    return width, height


def _load_settings(args: argparse.Namespace) -> Optional[Settings]:
    try:
        return load_settings(args.config)
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not load settings: {e}")
        return None


def _validate_common(width: int, height: int, args: argparse.Namespace,
                     settings: Settings) -> bool:
    if width < MIN_CANVAS or height < MIN_CANVAS:
        print(f"ERROR: Invalid canvas size: {width}x{height} (minimum {MIN_CANVAS}x{MIN_CANVAS})")
        return False
    if args.sources is not None and args.sources < settings.sampling.min_source_count:
        print(f"ERROR: --sources must be at least {settings.sampling.min_source_count}")
        return False
    if args.frames is not None and args.frames < 1:
        print(f"ERROR: --frames must be positive, got {args.frames}")
        return False
    return True


def cmd_render(args: argparse.Namespace) -> int:
    """Render a still image or a frame sequence."""
    from .render import render_still, render_video

    settings = _load_settings(args)
    if settings is None:
        return 1
    width, height = _resolve_canvas(args, settings)
    if not _validate_common(width, height, args, settings):
        return 1
    if args.gif and args.frames is None:
        print("ERROR: --gif requires --frames")
        return 1
    if args.frames is not None:
        from .export import frame_path
        try:
            frame_path(args.output, 0)
        except ValueError as e:
            print(f"ERROR: {e}")
            return 1

    ctx = GenerationContext(run_seed=_parse_seed(args.seed))
    print(f"gradientfield {__version__}")
    print(f"Canvas:   {width}x{height}")
    print(f"Run seed: {ctx.run_seed}")

    if args.frames is None:
        result = render_still(
            ctx, width, height, args.output,
            count=args.sources,
            settings=settings,
            workers=args.workers,
            report=args.report,
        )
        print(f"Sources:  {len(result.sources)}")
        print(f"Output:   {result.outputs[0]}")
    else:
        def progress(i, total, path):
            if args.verbose:
                print(f"  [{i + 1}/{total}] {path}")

        result = render_video(
            ctx, width, height, args.output, args.frames,
            count=args.sources,
            settings=settings,
            workers=args.workers,
            gif=args.gif,
            report=args.report,
            progress_callback=progress,
        )
        print(f"Sources:  {len(result.sources)}")
        print(f"Frames:   {result.frame_count} ({result.outputs[0]} .. {result.outputs[-1]})")
        if result.gif_path:
            print(f"GIF:      {result.gif_path}")

    logger.render(f"Wrote {result.frame_count} frame(s)", details=f"seed={ctx.run_seed}")
    if result.report_path:
        print(f"Report:   {result.report_path}")
    print(f"Elapsed:  {result.elapsed_sec:.2f}s")
    return 0


def cmd_list_metrics(args: argparse.Namespace) -> int:
    """List available distance metrics."""
    from .metrics import DistanceMetric

    print("Distance metrics:")
    print()
    for metric in DistanceMetric:
        print(f"  {metric.display_name:12s} {METRIC_FORMULAS[metric.display_name]}")
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    """Print the sources a seed would produce, without rendering."""
    from .generate import animated_sources, still_sources

    settings = _load_settings(args)
    if settings is None:
        return 1
    width, height = _resolve_canvas(args, settings)
    if not _validate_common(width, height, args, settings):
        return 1

    ctx = GenerationContext(run_seed=_parse_seed(args.seed))
    print(f"Run seed: {ctx.run_seed}")
    print(f"Canvas:   {width}x{height}")
    print()

    velocities = None
    if args.frames is not None:
        sources, velocities = animated_sources(
            ctx, width, height, count=args.sources, config=settings.sampling
        )
    else:
        sources = still_sources(
            ctx, width, height, count=args.sources, config=settings.sampling
        )

    for i, s in enumerate(sources):
        flags = ", ".join(name for name, on in (("reverse", s.reverse), ("wrap", s.wrap)) if on)
        print(f"[{i + 1}] {s.metric.display_name} @ ({s.anchor.x}, {s.anchor.y})")
        print(f"    weights: r={s.rweight:.3f} g={s.gweight:.3f} b={s.bweight:.3f}")
        print(f"    max_distance: {s.max_distance:.3f}")
        if flags:
            print(f"    flags: {flags}")
        if velocities is not None:
            print(f"    velocity: ({velocities[i].dx}, {velocities[i].dy})")
    return 0


def _add_canvas_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--width", "-W", type=int, help="Canvas width (default: screen width)")
    p.add_argument("--height", "-H", type=int, help="Canvas height (default: screen height)")
    p.add_argument("--seed", "-s", type=str, help="Run seed (int or any string; random if omitted)")
    p.add_argument("--sources", "-n", type=int, help="Number of sources (default: random / video preset)")
    p.add_argument("--frames", "-f", type=int, help="Number of video frames")
    p.add_argument("--config", "-c", type=str, help="Settings YAML file")


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="gradientfield",
        description="Procedural distance-field gradient images and animations",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug info")
    parser.add_argument("--log-file", type=str, help="Also write a debug log to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # render command
    render_parser = subparsers.add_parser("render", help="Render an image or frame sequence")
    render_parser.add_argument("output", type=str,
                               help="Output file (per-frame template like out_%%04d.png with --frames)")
    _add_canvas_args(render_parser)
    render_parser.add_argument("--workers", "-j", type=int, help="Threads for compositing")
    render_parser.add_argument("--gif", type=str, help="Also write an animated GIF (video only)")
    render_parser.add_argument("--report", "-r", type=str, help="Write a JSON generation report")
    render_parser.set_defaults(func=cmd_render)

    # list-metrics command
    list_parser = subparsers.add_parser("list-metrics", help="List distance metrics")
    list_parser.set_defaults(func=cmd_list_metrics)

    # describe command
    describe_parser = subparsers.add_parser("describe", help="Show sampled sources for a seed")
    _add_canvas_args(describe_parser)
    describe_parser.set_defaults(func=cmd_describe)

    args = parser.parse_args(argv)

    logger.set_level(LogLevel.DEBUG if args.verbose else LogLevel.WARNING)
    if args.log_file:
        logger.enable_file_logging(args.log_file)
    try:
        return args.func(args)
    finally:
        if args.log_file:
            logger.disable_file_logging()


if __name__ == "__main__":
    sys.exit(main())
