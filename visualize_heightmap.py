#!/usr/bin/env python3
"""
Visualize a generated terrain as a shaded height image with contours.

Usage:
    python visualize_heightmap.py [seed] [--steps N] [--turbulent]
"""

import argparse

import matplotlib.pyplot as plt
import numpy as np

from py_terrain.config import configure_logging
from py_terrain.core import HeightField, TerrainOptions, generate_terrain


def plot_heightfield(field: HeightField, options: TerrainOptions, title: str):
    """Draw a height field with the terrain colormap and contour lines."""
    values = field.values
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 8))

    im = ax1.imshow(
        values,
        origin="upper",
        cmap="terrain",
        vmin=options.min_height,
        vmax=options.max_height,
        aspect="equal",
    )
    plt.colorbar(im, ax=ax1, label="Height")
    contour_levels = np.linspace(options.min_height, options.max_height, 9)[1:-1]
    contours = ax1.contour(values, levels=contour_levels, colors="black", linewidths=0.5, alpha=0.5)
    ax1.clabel(contours, inline=True, fontsize=8)
    ax1.set_title(f"{field.width()}x{field.height()} samples")
    ax1.set_xlabel("X")
    ax1.set_ylabel("Y")

    # Height distribution
    ax2.hist(values.ravel(), bins=64, color="#996633")
    ax2.set_title("Height distribution")
    ax2.set_xlabel("Height")
    ax2.set_ylabel("Samples")

    fig.suptitle(title, fontsize=16)
    plt.tight_layout()
    return fig


def main():
    parser = argparse.ArgumentParser(description="Visualize a generated terrain")
    parser.add_argument("seed", nargs="?", default="visualize")
    parser.add_argument("--segments", type=int, default=128)
    parser.add_argument("--steps", type=int, default=1)
    parser.add_argument("--turbulent", action="store_true")
    args = parser.parse_args()

    configure_logging()
    options = TerrainOptions(
        x_segments=args.segments,
        y_segments=args.segments,
        steps=args.steps,
        turbulent=args.turbulent,
    )
    field = generate_terrain(options, seed=args.seed)

    print(f"\nHeightmap statistics:")
    print(f"  Min height: {field.min():.2f}")
    print(f"  Max height: {field.max():.2f}")
    print(f"  Mean height: {np.mean(field.values):.2f}")

    fig = plot_heightfield(field, options, f"Diamond-square terrain - Seed: {args.seed}")
    output_file = f"heightmap_{args.seed}.png"
    fig.savefig(output_file, dpi=150, bbox_inches="tight")
    print(f"\nVisualization saved to: {output_file}")
    plt.show()


if __name__ == "__main__":
    main()
