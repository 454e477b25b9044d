"""
Pillow adapter for raster heightmaps.

The core codec works on in-memory ``RasterImage`` buffers; this module is
the boundary that reads and writes image files.
"""

from pathlib import Path
from typing import Union

import numpy as np
import structlog
from PIL import Image

from ..core.errors import ImageDecodeFailure
from ..core.images import RasterImage

logger = structlog.get_logger()


def raster_from_pil(img: Image.Image) -> RasterImage:
    """Convert any Pillow image to an RGBA ``RasterImage``."""
    if img.width == 0 or img.height == 0:
        raise ImageDecodeFailure("Image has zero area")
    try:
        rgba = img.convert("RGBA")
    except (OSError, ValueError) as e:
        raise ImageDecodeFailure(f"Cannot convert {img.mode} image to RGBA: {e}") from e
    return RasterImage(np.array(rgba, dtype=np.uint8))


def raster_to_pil(image: RasterImage) -> Image.Image:
    """Wrap a ``RasterImage`` as a Pillow RGBA image."""
    return Image.fromarray(image.pixels)


def load_raster(path: Union[str, Path]) -> RasterImage:
    """
    Read an image file into a ``RasterImage``.

    Args:
        path: Any format Pillow can open

    Returns:
        RGBA raster of the image
    """
    try:
        with Image.open(path) as img:
            img.load()
            raster = raster_from_pil(img)
    except OSError as e:
        raise ImageDecodeFailure(f"Cannot read heightmap image {path}: {e}") from e

    logger.info("Loaded heightmap image", path=str(path), width=raster.width, height=raster.height)
    return raster


def save_raster(image: RasterImage, path: Union[str, Path]) -> Path:
    """Write a ``RasterImage`` to disk; the format follows the file extension."""
    path = Path(path)
    raster_to_pil(image).save(path)
    logger.info("Saved heightmap image", path=str(path), width=image.width, height=image.height)
    return path
