"""
Core heightmap engine.
"""

from .errors import (
    TerrainError,
    InvalidDimensions,
    OutOfRangeOption,
    ImageDecodeFailure,
    IndexOutOfBounds,
)
from .alea_prng import AleaPRNG
from .height_field import HeightField
from .generators import diamond_square, diamond_square_grid, generate_diamond_square
from .images import RasterImage, from_heightmap, heightfield_from_image, to_heightmap
from .options import (
    TerrainOptions,
    BlurParameters,
    HeightmapKind,
    ProceduralHeightmap,
    ImageHeightmap,
)
from .blur import blur, box_blur, boxes_for_gauss, gaussian_box_blur
from .filters import clamp, smooth, smooth_neighbors, step, turbulence
from .terrain import generate_terrain, normalize

__all__ = ['TerrainError', 'InvalidDimensions', 'OutOfRangeOption', 'ImageDecodeFailure',
           'IndexOutOfBounds', 'AleaPRNG', 'HeightField',
           'diamond_square', 'diamond_square_grid', 'generate_diamond_square',
           'RasterImage', 'from_heightmap', 'heightfield_from_image', 'to_heightmap',
           'TerrainOptions', 'BlurParameters', 'HeightmapKind', 'ProceduralHeightmap',
           'ImageHeightmap', 'blur', 'box_blur', 'boxes_for_gauss', 'gaussian_box_blur',
           'clamp', 'smooth', 'smooth_neighbors', 'step', 'turbulence',
           'generate_terrain', 'normalize']
