"""Render the demo scene from the command line.

Usage:
    tilepath [-jN] [options]
    python -m tilepath [-jN] [options]

Options:
    -jN, --jobs N       Worker thread count (default: host CPU count)
    --width WIDTH       Image width in pixels (default: 400)
    --samples SAMPLES   Samples per pixel (default: 100)
    --depth DEPTH       Maximum bounce depth (default: 50)
    --tile-size SIZE    Tile edge length in pixels (default: 10)
    --output OUTPUT     Output file path; .png writes PNG (default: image.ppm)
    --seed SEED         Seed for the scene layout and sampling
    --quiet             Suppress progress output

Progress and diagnostics go to stderr.

Example:
    tilepath -j8 --width 320 --samples 20 --output weekend.png
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from tilepath.camera.thin_lens import Camera
from tilepath.core.scheduler import RenderSettings, TileRenderer, default_thread_count
from tilepath.preview.export import save_image
from tilepath.scene.weekend import WeekendSceneParams, create_weekend_scene

DEFAULT_WIDTH = 400
DEFAULT_SAMPLES = 100
DEFAULT_DEPTH = 50
DEFAULT_TILE_SIZE = 10
DEFAULT_OUTPUT = "image.ppm"
ASPECT_RATIO = 16.0 / 9.0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="tilepath",
        description="Render the demo sphere scene with the tile path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-j",
        "--jobs",
        dest="threads",
        type=int,
        default=None,
        help="Worker thread count, e.g. -j8 (default: host CPU count)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"Maximum bounce depth (default: {DEFAULT_DEPTH})",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=DEFAULT_TILE_SIZE,
        help=f"Tile edge length in pixels (default: {DEFAULT_TILE_SIZE})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output file path; a .png suffix writes PNG (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the scene layout and sampling",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_weekend(
    width: int = DEFAULT_WIDTH,
    num_samples: int = DEFAULT_SAMPLES,
    max_depth: int = DEFAULT_DEPTH,
    tile_size: int = DEFAULT_TILE_SIZE,
    threads: int | None = None,
    output_path: str = DEFAULT_OUTPUT,
    seed: int | None = None,
    scene_params: WeekendSceneParams | None = None,
    quiet: bool = False,
) -> Path:
    """Render the demo scene and save it to a file.

    Args:
        width: Image width in pixels.
        num_samples: Number of samples per pixel.
        max_depth: Maximum bounce depth.
        tile_size: Tile edge length in pixels.
        threads: Worker thread count. None uses the host CPU count.
        output_path: Output file path (PPM, or PNG for a .png suffix).
        seed: Seed for the scene layout and the sampling generator.
        scene_params: Optional scene customization.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    if threads is None:
        threads = default_thread_count()

    if seed is not None:
        random.seed(seed)

    if not quiet:
        print(f"Running on {threads} threads", file=sys.stderr)

    if scene_params is None:
        scene_params = WeekendSceneParams(aspect_ratio=ASPECT_RATIO)

    world, camera_config = create_weekend_scene(seed=seed, params=scene_params)
    camera = Camera.from_config(camera_config)

    settings = RenderSettings(
        width=width,
        aspect_ratio=scene_params.aspect_ratio,
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        tile_width=tile_size,
        tile_height=tile_size,
    )
    renderer = TileRenderer(settings, threads=threads)

    if not quiet:
        print(
            f"Rendering {renderer.width}x{renderer.height} at {num_samples} samples per pixel...",
            file=sys.stderr,
        )

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not quiet:
            progress_pct = (current / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {current}/{total} tiles ({progress_pct:.1f}%)",
                end="",
                file=sys.stderr,
                flush=True,
            )

    renderer.render(world, camera, callback=progress_callback)

    output_file = save_image(renderer, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(file=sys.stderr)  # Newline after progress
        print(f"Saved to: {output_file.absolute()}", file=sys.stderr)
        print(f"Total time: {total_time:.2f}s", file=sys.stderr)
        print("Done.", file=sys.stderr)

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        render_weekend(
            width=args.width,
            num_samples=args.samples,
            max_depth=args.depth,
            tile_size=args.tile_size,
            threads=args.threads,
            output_path=args.output,
            seed=args.seed,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
