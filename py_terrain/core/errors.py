"""
Error kinds raised by the heightmap engine.

Validation happens before any computation so a failing call never leaves
a partially mutated field behind.
"""


class TerrainError(Exception):
    """Base class for all terrain engine errors."""


class InvalidDimensions(TerrainError):
    """Grid or image dimensions are zero, negative or malformed."""


class OutOfRangeOption(TerrainError):
    """A configuration value lies outside its accepted range."""


class ImageDecodeFailure(TerrainError):
    """A source image could not be turned into pixel data."""


class IndexOutOfBounds(TerrainError, IndexError):
    """A sample was addressed outside the field. Programming error."""
