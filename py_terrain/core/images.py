"""
Conversion between height fields and 8-bit RGBA rasters.

Decoding reads R, G and B as one 24-bit integer, ``R << 16 | G << 8 | B``,
so a heightmap can carry 16.7 million levels; alpha is ignored.
Encoding writes grayscale (R = G = B), which decodes to exactly
``gray / 255`` of the range because ``0x010101 * 255 == 0xFFFFFF``.
This module never reads or writes files; see ``py_terrain.io.images``.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np
import structlog
from scipy import ndimage

from .errors import ImageDecodeFailure, OutOfRangeOption
from .height_field import HeightField

if TYPE_CHECKING:
    from .options import TerrainOptions

logger = structlog.get_logger()

MAX_PACKED_VALUE = 0xFFFFFF


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Row-major RGBA pixels, ``pixels.shape == (height, width, 4)``, dtype uint8."""

    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8:
            raise ImageDecodeFailure("Pixel buffer must be a uint8 NumPy array")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ImageDecodeFailure(f"Expected (height, width, 4) pixels, got {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ImageDecodeFailure("Image has zero area")

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RasterImage":
        """
        Wrap grayscale (h, w), RGB (h, w, 3) or RGBA (h, w, 4) uint8 data.

        Missing alpha is filled with 255. The data is copied.
        """
        data = np.asarray(array)
        if data.dtype != np.uint8:
            raise ImageDecodeFailure(f"Pixel data must be uint8, got {data.dtype}")
        if data.ndim == 2:
            data = np.repeat(data[:, :, None], 3, axis=2)
        if data.ndim != 3 or data.shape[2] not in (3, 4):
            raise ImageDecodeFailure(f"Unsupported pixel layout {np.asarray(array).shape}")
        if data.shape[2] == 3:
            alpha = np.full(data.shape[:2] + (1,), 255, dtype=np.uint8)
            data = np.concatenate([data, alpha], axis=2)
        return cls(np.ascontiguousarray(data).copy())

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def packed(self) -> np.ndarray:
        """24-bit ``R << 16 | G << 8 | B`` value per pixel, shape (height, width)."""
        rgb = self.pixels[:, :, :3].astype(np.uint32)
        return (rgb[:, :, 0] << 16) | (rgb[:, :, 1] << 8) | rgb[:, :, 2]


def _normalized_heights(image: RasterImage) -> np.ndarray:
    return image.packed().astype(np.float64) / MAX_PACKED_VALUE


def _resample(values: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """Bilinear resample of a 2-D array onto rows x cols, corners aligned."""
    if values.shape == (rows, cols):
        return values
    ys = np.linspace(0, values.shape[0] - 1, rows)
    xs = np.linspace(0, values.shape[1] - 1, cols)
    yy, xx = np.meshgrid(ys, xs, indexing="ij")
    return ndimage.map_coordinates(values, [yy, xx], order=1, mode="nearest")


def from_heightmap(field: HeightField, options: "TerrainOptions", image: RasterImage) -> None:
    """
    Set field elevations from an image.

    Packed pixel values are normalized to [0, 1] and scaled into
    ``[min_height, max_height]``. When the image and field sizes differ the
    image is resampled bilinearly onto the field grid.
    """
    if not isinstance(image, RasterImage):
        raise ImageDecodeFailure(f"Expected a RasterImage, got {type(image).__name__}")

    normalized = _normalized_heights(image)
    if normalized.shape != field.shape:
        logger.debug(
            "Resampling heightmap image",
            image_width=image.width,
            image_height=image.height,
            cols=field.width(),
            rows=field.height(),
        )
        normalized = _resample(normalized, field.height(), field.width())

    field.values[:] = normalized * options.height_range + options.min_height


def heightfield_from_image(image: RasterImage, options: "TerrainOptions") -> HeightField:
    """Create a field with one sample per image pixel."""
    if not isinstance(image, RasterImage):
        raise ImageDecodeFailure(f"Expected a RasterImage, got {type(image).__name__}")
    field = HeightField(image.width - 1, image.height - 1)
    from_heightmap(field, options, image)
    return field


def to_heightmap(
    field: HeightField,
    min_height: Optional[float] = None,
    max_height: Optional[float] = None,
) -> RasterImage:
    """
    Encode a field as a grayscale image.

    Args:
        field: Field to encode
        min_height: Elevation mapped to 0, defaults to the field minimum
        max_height: Elevation mapped to 255, defaults to the field maximum

    Returns:
        RasterImage with R = G = B and alpha 255
    """
    low = field.min() if min_height is None else float(min_height)
    high = field.max() if max_height is None else float(max_height)
    if not (np.isfinite(low) and np.isfinite(high)) or low > high:
        raise OutOfRangeOption(f"Invalid encoding range [{low}, {high}]")

    spread = high - low
    if spread == 0:
        gray = np.zeros(field.shape, dtype=np.uint8)
    else:
        scaled = np.round((field.values - low) / spread * 255)
        gray = np.clip(scaled, 0, 255).astype(np.uint8)

    pixels = np.empty(field.shape + (4,), dtype=np.uint8)
    pixels[:, :, 0] = gray
    pixels[:, :, 1] = gray
    pixels[:, :, 2] = gray
    pixels[:, :, 3] = 255
    return RasterImage(pixels)
