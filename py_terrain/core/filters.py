"""
In-place shaping filters for height fields.

The normalization pipeline applies them in a fixed order: turbulence,
step followed by smooth, then clamp. Every filter receives the field and
the options record and mutates ``field.values`` without reallocating it.
"""

import math

import numpy as np
import structlog
from scipy import ndimage

from ..utils.random import RandomSource
from .blur import blur
from .errors import OutOfRangeOption
from .height_field import HeightField
from .options import BlurParameters, TerrainOptions

logger = structlog.get_logger()

SMOOTH_PASSES = 3


def _value_noise_octave(
    rows: int, cols: int, cells: float, rng: RandomSource
) -> np.ndarray:
    """
    Absolute-valued value noise in [0, 1].

    A random lattice with ``cells`` cells across the longest side is
    interpolated bilinearly onto the rows x cols grid.
    """
    spacing = max(max(rows, cols) - 1, 1) / cells
    lattice_rows = int(math.floor((rows - 1) / spacing)) + 2
    lattice_cols = int(math.floor((cols - 1) / spacing)) + 2
    draws = np.array([rng.random() for _ in range(lattice_rows * lattice_cols)])
    lattice = np.abs(2 * draws - 1).reshape(lattice_rows, lattice_cols)

    ys = np.arange(rows) / spacing
    xs = np.arange(cols) / spacing
    yy, xx = np.meshgrid(ys, xs, indexing="ij")
    return ndimage.map_coordinates(lattice, [yy, xx], order=1, mode="nearest")


def turbulence(field: HeightField, options: TerrainOptions, rng: RandomSource) -> None:
    """
    Add fractal turbulence on top of the existing elevation.

    Octave ``o`` has ``frequency * 2**o`` lattice cells across the field and
    amplitude ``turbulence_amplitude * height_range / 2**o``. Each octave
    is non-negative, so no sample ever decreases.
    """
    rows, cols = field.shape
    amplitude = options.turbulence_amplitude * options.height_range
    # Lattice never finer than the grid itself
    max_cells = max(max(rows, cols) - 1, 1)

    logger.debug(
        "Applying turbulence",
        octaves=options.turbulence_octaves,
        amplitude=amplitude,
        frequency=options.frequency,
    )
    noise = np.zeros(field.shape, dtype=np.float64)
    for octave in range(options.turbulence_octaves):
        cells = min(options.frequency * 2 ** octave, max_cells)
        noise += _value_noise_octave(rows, cols, cells, rng) * (amplitude / 2 ** octave)

    field.values += noise


def step(field: HeightField, steps: int) -> None:
    """
    Quantize the field into ``steps`` terraces spanning its current range.

    A sample's band is ``floor(normalized * steps)`` clamped to
    ``[0, steps - 1]``; band ``i`` is written as
    ``low + i * (high - low) / (steps - 1)``.
    """
    if steps < 0:
        raise OutOfRangeOption(f"steps must be non-negative, got {steps}")
    if steps <= 1:
        return

    low, high = field.min(), field.max()
    spread = high - low
    if spread == 0:
        return

    normalized = (field.values - low) / spread
    bands = np.clip(np.floor(normalized * steps), 0, steps - 1)
    field.values[:] = low + bands * (spread / (steps - 1))


def smooth(field: HeightField, options: TerrainOptions) -> None:
    """
    Soften terrace edges with a small Gaussian blur.

    Terraces survive only while a band is wider than about twice
    ``options.smooth_radius`` cells; a larger radius blurs them away.
    """
    blur(field, BlurParameters(radius=options.smooth_radius, passes=SMOOTH_PASSES))


def smooth_neighbors(field: HeightField, weight: float = 0.0) -> None:
    """
    Replace each sample by the mean of its existing 3x3 neighbourhood.

    Args:
        field: Field to smooth
        weight: How much of the original sample to keep, 0 keeps none
    """
    if not math.isfinite(weight) or weight < 0:
        raise OutOfRangeOption(f"Smoothing weight must be finite and non-negative, got {weight}")

    kernel = np.ones((3, 3))
    sums = ndimage.convolve(field.values, kernel, mode="constant", cval=0.0)
    counts = ndimage.convolve(np.ones(field.shape), kernel, mode="constant", cval=0.0)
    averaged = sums / counts
    field.values[:] = (averaged + field.values * weight) / (1 + weight)


def clamp(field: HeightField, options: TerrainOptions) -> None:
    """
    Ease and rescale the field into ``[min_height, max_height]``.

    With ``stretch`` the observed min/max map onto the target range;
    otherwise samples are clipped to the nominal range first and
    normalized against it. A zero spread maps everything to ``min_height``.
    """
    if options.stretch:
        low, high = field.min(), field.max()
        values = field.values
    else:
        low, high = options.min_height, options.max_height
        values = np.clip(field.values, low, high)

    spread = high - low
    if spread == 0:
        normalized = np.zeros(field.shape, dtype=np.float64)
    else:
        normalized = (values - low) / spread

    eased = np.clip(np.asarray(options.easing(normalized), dtype=np.float64), 0.0, 1.0)
    rescaled = options.min_height + eased * options.height_range
    # Rounding in min + eased * range can overshoot max_height by an ulp
    field.values[:] = np.clip(rescaled, options.min_height, options.max_height)
