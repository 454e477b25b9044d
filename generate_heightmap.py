#!/usr/bin/env python3
"""
Generate a terrain heightmap and save it as a grayscale PNG.

The terrain is built by the full pipeline (heightmap source, turbulence,
terraces, clamp/easing) and encoded with the heightmap codec, so the
output can be fed back in with ``--from-image``.

Usage:
    python generate_heightmap.py [--seed SEED] [--size 128x128] [--steps 6] out.png
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import structlog

from py_terrain.config import configure_logging, settings
from py_terrain.core import (
    ImageHeightmap,
    TerrainError,
    TerrainOptions,
    generate_terrain,
    to_heightmap,
)
from py_terrain.core.easing import EASINGS, get_easing
from py_terrain.io.images import load_raster, save_raster

logger = structlog.get_logger()


def parse_size(value: str):
    """Parse ``WIDTHxHEIGHT`` segment counts."""
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{value}'")
    if not (0 <= width <= settings.max_grid_segments and 0 <= height <= settings.max_grid_segments):
        raise argparse.ArgumentTypeError(
            f"Segment counts must lie in [0, {settings.max_grid_segments}]"
        )
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a terrain heightmap image")
    parser.add_argument("output", type=Path, help="Output image path (PNG recommended)")
    parser.add_argument("--seed", default=settings.default_seed, help="Random seed")
    parser.add_argument(
        "--size", type=parse_size, default=(127, 127), help="Segments as WIDTHxHEIGHT"
    )
    parser.add_argument("--min-height", type=float, default=-100.0)
    parser.add_argument("--max-height", type=float, default=100.0)
    parser.add_argument("--frequency", type=float, default=2.5)
    parser.add_argument("--roughness", type=float, default=1.0)
    parser.add_argument("--steps", type=int, default=1, help="Terrace count, <= 1 disables")
    parser.add_argument("--turbulent", action="store_true", help="Add turbulence")
    parser.add_argument("--no-stretch", action="store_true", help="Ease against the nominal range")
    parser.add_argument("--easing", choices=sorted(EASINGS), default="linear")
    parser.add_argument("--from-image", type=Path, help="Start from an existing heightmap image")
    return parser


def main(argv=None) -> int:
    """Generate and save a heightmap."""
    args = build_parser().parse_args(argv)
    configure_logging()

    width, height = args.size
    try:
        extra = {}
        if args.from_image:
            extra["heightmap"] = ImageHeightmap(load_raster(args.from_image))
        options = TerrainOptions(
            min_height=args.min_height,
            max_height=args.max_height,
            frequency=args.frequency,
            roughness=args.roughness,
            steps=args.steps,
            turbulent=args.turbulent,
            stretch=not args.no_stretch,
            easing=get_easing(args.easing),
            x_segments=width,
            y_segments=height,
            **extra,
        )
        field = generate_terrain(options, seed=args.seed)
    except TerrainError as e:
        logger.error("Heightmap generation failed", error=str(e))
        return 1

    image = to_heightmap(field, options.min_height, options.max_height)
    save_raster(image, args.output)

    values = field.values
    print(f"Heightmap saved to: {args.output}")
    print(f"  Samples: {field.width()}x{field.height()}")
    print(f"  Min height: {np.min(values):.2f}")
    print(f"  Max height: {np.max(values):.2f}")
    print(f"  Mean height: {np.mean(values):.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
