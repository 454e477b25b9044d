"""
Gaussian blur approximated by repeated box blurs.

Box widths are chosen so the summed variance of all passes matches the
target Gaussian (see http://blog.ivank.net/fastest-gaussian-blur.html).
Each box blur is separable and uses a running-sum window, so a pass costs
O(cols * rows) whatever the radius. Reads past the grid edge return the
nearest edge sample.
"""

import math
from typing import List, Optional

import numpy as np
import structlog

from .errors import InvalidDimensions, OutOfRangeOption
from .height_field import HeightField
from .options import BlurParameters

logger = structlog.get_logger()


def boxes_for_gauss(sigma: float, box_count: int) -> List[int]:
    """
    Odd box widths whose combined variance approximates ``sigma**2``.

    Args:
        sigma: Standard deviation of the target Gaussian
        box_count: Number of box blurs

    Returns:
        ``box_count`` widths: ``m`` of the lower width followed by the upper one
    """
    if sigma < 0:
        raise OutOfRangeOption(f"sigma must be non-negative, got {sigma}")
    if box_count < 1:
        raise OutOfRangeOption(f"box_count must be at least 1, got {box_count}")

    w_ideal = math.sqrt(12 * sigma * sigma / box_count + 1)
    wl = int(math.floor(w_ideal))
    if wl % 2 == 0:
        wl -= 1
    wu = wl + 2

    m_ideal = (12 * sigma * sigma - box_count * wl * wl - 4 * box_count * wl - 3 * box_count) / (
        -4 * wl - 4
    )
    m = int(math.floor(m_ideal + 0.5))

    return [wl if i < m else wu for i in range(box_count)]


def _box_blur_axis(values: np.ndarray, radius: int, axis: int) -> np.ndarray:
    """1-D moving average of width 2*radius+1 along ``axis`` with edge extension."""
    if radius == 0:
        return values.copy()

    pad = [(0, 0), (0, 0)]
    pad[axis] = (radius, radius)
    padded = np.pad(values, pad, mode="edge")

    # Offsets from each line's first sample keep constant lines exact
    reference = np.take(padded, [0], axis=axis)
    offsets = padded - reference

    # Running sum with a leading zero so window sums are a single subtraction
    zero_shape = list(padded.shape)
    zero_shape[axis] = 1
    sums = np.concatenate([np.zeros(zero_shape), np.cumsum(offsets, axis=axis)], axis=axis)

    width = 2 * radius + 1
    n = values.shape[axis]
    upper = np.take(sums, np.arange(width, width + n), axis=axis)
    lower = np.take(sums, np.arange(0, n), axis=axis)
    return reference + (upper - lower) / width


def box_blur(values: np.ndarray, radius: int) -> np.ndarray:
    """Separable box blur: horizontal pass then vertical pass."""
    if radius < 0:
        raise OutOfRangeOption(f"Box radius must be non-negative, got {radius}")
    horizontal = _box_blur_axis(values, radius, axis=1)
    return _box_blur_axis(horizontal, radius, axis=0)


def gaussian_box_blur(values: np.ndarray, radius: float = 1.0, passes: int = 3) -> np.ndarray:
    """
    Approximate a Gaussian blur of a 2-D array.

    Args:
        values: (rows, cols) array of samples
        radius: Standard deviation of the Gaussian, 0 is the identity
        passes: Number of box blurs

    Returns:
        New blurred array; ``values`` is left untouched
    """
    source = np.asarray(values, dtype=np.float64)
    if source.ndim != 2 or source.size == 0:
        raise InvalidDimensions(f"Expected a non-empty 2-D array, got shape {source.shape}")

    result = source.copy()
    for width in boxes_for_gauss(radius, passes):
        result = box_blur(result, (width - 1) // 2)
    return result


def blur(field: HeightField, params: Optional[BlurParameters] = None) -> HeightField:
    """
    Blur a height field in place.

    Args:
        field: Field to smooth
        params: Radius and pass count, defaults to radius 1 with 3 passes

    Returns:
        The same field, for chaining
    """
    params = params or BlurParameters()
    logger.debug(
        "Blurring height field",
        cols=field.width(),
        rows=field.height(),
        radius=params.radius,
        passes=params.passes,
    )
    field.values[:] = gaussian_box_blur(field.values, params.radius, params.passes)
    return field
