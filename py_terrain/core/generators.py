"""
Procedural height field generators.

Diamond-square midpoint displacement works on square grids of side
``2**n + 1``. Fields of any other shape are generated on the smallest such
grid that covers them and cropped to the top-left window, so no sample is
ever resampled and edge handling stays exact.
"""

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np
import structlog

from ..utils.random import RandomSource, uniform
from .errors import InvalidDimensions
from .height_field import HeightField

if TYPE_CHECKING:
    from .options import TerrainOptions

logger = structlog.get_logger()


def grid_size_for(cols: int, rows: int) -> int:
    """Side of the smallest ``2**n + 1`` square grid covering cols x rows samples."""
    if cols < 1 or rows < 1:
        raise InvalidDimensions(f"Grid must have at least one sample, got {cols}x{rows}")
    segments = 1
    while segments < max(cols - 1, rows - 1):
        segments *= 2
    return segments + 1


def _draw(rng: RandomSource, count: int, amplitude: float) -> np.ndarray:
    """``count`` displacements uniform in [-amplitude, amplitude)."""
    return np.array([uniform(rng, -amplitude, amplitude) for _ in range(count)], dtype=np.float64)


def _average_existing(padded: np.ndarray, rows: np.ndarray, cols: np.ndarray, half: int) -> np.ndarray:
    """
    Mean of the up/down/left/right neighbours at distance ``half``.

    ``padded`` is the grid padded by ``half`` NaNs on every side, so
    neighbours beyond the boundary are NaN and drop out of the mean.
    """
    r = rows[:, None] + half
    c = cols[None, :] + half
    neighbours = np.stack(
        [
            padded[r - half, c],
            padded[r + half, c],
            padded[r, c - half],
            padded[r, c + half],
        ]
    )
    present = ~np.isnan(neighbours)
    return np.where(present, neighbours, 0.0).sum(axis=0) / present.sum(axis=0)


def diamond_square_grid(
    size: int,
    amplitude: float,
    rng: RandomSource,
    roughness: float = 1.0,
    corners: Optional[Sequence[float]] = None,
    base: float = 0.0,
) -> np.ndarray:
    """
    Run diamond-square on a ``size`` x ``size`` grid.

    Args:
        size: Grid side, must be ``2**n + 1``
        amplitude: Corner displacement; each level scales it by ``2**-roughness``
        rng: Random source
        roughness: Decay exponent of the displacement per level
        corners: Optional (top-left, top-right, bottom-left, bottom-right)
            seeds, otherwise ``base`` plus a random displacement
        base: Centre value for random corners

    Returns:
        (size, size) array of elevations
    """
    if size < 2 or (size - 1) & (size - 2) != 0:
        raise InvalidDimensions(f"Diamond-square grid side must be 2**n + 1, got {size}")

    grid = np.full((size, size), np.nan, dtype=np.float64)
    last = size - 1
    if corners is None:
        corners = base + _draw(rng, 4, amplitude)
    elif len(corners) != 4:
        raise InvalidDimensions(f"Expected 4 corner values, got {len(corners)}")
    grid[0, 0], grid[0, last], grid[last, 0], grid[last, last] = corners

    step = last
    scale = 2.0 ** -roughness
    while step > 1:
        half = step // 2
        amplitude *= scale

        # Diamond step: square centres from their four corners
        centres = np.arange(half, size, step)
        tl = grid[np.ix_(centres - half, centres - half)]
        tr = grid[np.ix_(centres - half, centres + half)]
        bl = grid[np.ix_(centres + half, centres - half)]
        br = grid[np.ix_(centres + half, centres + half)]
        avg = (tl + tr + bl + br) * 0.25
        grid[np.ix_(centres, centres)] = avg + _draw(rng, avg.size, amplitude).reshape(avg.shape)

        # Square step: edge midpoints from the 3 or 4 neighbours that exist
        padded = np.pad(grid, half, mode="constant", constant_values=np.nan)
        on_grid_lines = np.arange(0, size, step)
        for rows, cols in ((on_grid_lines, centres), (centres, on_grid_lines)):
            avg = _average_existing(padded, rows, cols, half)
            grid[np.ix_(rows, cols)] = avg + _draw(rng, avg.size, amplitude).reshape(avg.shape)

        step = half

    return grid


def diamond_square(field: HeightField, options: "TerrainOptions", rng: RandomSource) -> None:
    """
    Add diamond-square noise to a field in place.

    The initial displacement is half the height range times
    ``options.frequency``; corners are centred on the middle of the range.
    """
    cols, rows = field.width(), field.height()
    size = grid_size_for(cols, rows)
    amplitude = options.height_range * options.frequency / 2
    base = (options.min_height + options.max_height) / 2

    logger.debug(
        "Running diamond-square",
        cols=cols,
        rows=rows,
        grid_size=size,
        amplitude=amplitude,
        roughness=options.roughness,
    )
    grid = diamond_square_grid(size, amplitude, rng, roughness=options.roughness, base=base)
    field.values += grid[:rows, :cols]


def generate_diamond_square(
    width_segments: int, height_segments: int, options: "TerrainOptions", rng: RandomSource
) -> HeightField:
    """Create a new field of the given size filled by diamond-square."""
    field = HeightField(width_segments, height_segments)
    diamond_square(field, options, rng)
    return field
