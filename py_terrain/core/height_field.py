"""
Dense 2-D grid of elevation samples.

A field with ``width_segments`` x ``height_segments`` quads has
``cols = width_segments + 1`` and ``rows = height_segments + 1`` samples,
stored row-major in a float64 NumPy array of shape ``(rows, cols)``.
"""

import numbers

import numpy as np
from typing import Sequence, Tuple, Union

from .errors import IndexOutOfBounds, InvalidDimensions, OutOfRangeOption


def _segment_count(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
    return int(value)


class HeightField:
    """
    Owned elevation grid mutated in place by generators and filters.

    Filters work on ``values`` directly; external consumers should take
    ``to_array()`` (a copy) so the engine and the consumer never alias
    the same buffer.
    """

    def __init__(self, width_segments: int, height_segments: int):
        """
        Create a zero-initialized field.

        Args:
            width_segments: Number of quads along X (cols - 1)
            height_segments: Number of quads along Y (rows - 1)
        """
        width_segments = _segment_count(width_segments, "width_segments")
        height_segments = _segment_count(height_segments, "height_segments")
        if width_segments < 0 or height_segments < 0:
            raise InvalidDimensions(
                f"Segment counts must be non-negative, got "
                f"{width_segments}x{height_segments}"
            )
        self.values = np.zeros((height_segments + 1, width_segments + 1), dtype=np.float64)

    @classmethod
    def from_array(cls, array: Union[np.ndarray, Sequence[Sequence[float]]]) -> "HeightField":
        """Build a field from a 2-D array of shape (rows, cols), copying it."""
        data = np.array(array, dtype=np.float64)
        if data.ndim != 2 or data.size == 0:
            raise InvalidDimensions(f"Expected a non-empty 2-D array, got shape {data.shape}")
        if not np.all(np.isfinite(data)):
            raise OutOfRangeOption("Height samples must be finite")
        field = cls(data.shape[1] - 1, data.shape[0] - 1)
        field.values[:] = data
        return field

    @classmethod
    def from_array_1d(
        cls, flat: Union[np.ndarray, Sequence[float]], width_segments: int, height_segments: int
    ) -> "HeightField":
        """Build a field from samples in flat row-major vertex order."""
        width_segments = _segment_count(width_segments, "width_segments")
        height_segments = _segment_count(height_segments, "height_segments")
        data = np.asarray(flat, dtype=np.float64)
        expected = (width_segments + 1) * (height_segments + 1)
        if data.ndim != 1 or data.size != expected:
            raise InvalidDimensions(
                f"Expected {expected} samples for {width_segments}x{height_segments} "
                f"segments, got {data.size}"
            )
        return cls.from_array(data.reshape(height_segments + 1, width_segments + 1))

    # Geometry

    def width(self) -> int:
        """Number of columns (samples along X)."""
        return self.values.shape[1]

    def height(self) -> int:
        """Number of rows (samples along Y)."""
        return self.values.shape[0]

    @property
    def width_segments(self) -> int:
        return self.values.shape[1] - 1

    @property
    def height_segments(self) -> int:
        return self.values.shape[0] - 1

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    def __len__(self) -> int:
        return self.values.size

    def _check_index(self, col: int, row: int) -> None:
        cols, rows = self.width(), self.height()
        if not (0 <= col < cols and 0 <= row < rows):
            raise IndexOutOfBounds(
                f"Sample ({col}, {row}) outside field of {cols}x{rows} samples"
            )

    def index(self, col: int, row: int) -> int:
        """Flat row-major index of a sample."""
        self._check_index(col, row)
        return row * self.width() + col

    def get(self, col: int, row: int) -> float:
        """Elevation at (col, row)."""
        self._check_index(col, row)
        return float(self.values[row, col])

    def set(self, col: int, row: int, value: float) -> None:
        """Set the elevation at (col, row)."""
        self._check_index(col, row)
        self.values[row, col] = value

    # Statistics

    def min(self) -> float:
        return float(self.values.min())

    def max(self) -> float:
        return float(self.values.max())

    def is_finite(self) -> bool:
        """True when no sample is NaN or infinite."""
        return bool(np.all(np.isfinite(self.values)))

    # Hand-off

    def copy(self) -> "HeightField":
        field = HeightField(self.width_segments, self.height_segments)
        field.values[:] = self.values
        return field

    def to_array(self) -> np.ndarray:
        """Owned (rows, cols) copy of the samples."""
        return self.values.copy()

    def to_array_1d(self) -> np.ndarray:
        """Owned copy of the samples in flat row-major vertex order."""
        return self.values.ravel().copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeightField):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.values, other.values))

    def __repr__(self) -> str:
        return f"HeightField(cols={self.width()}, rows={self.height()})"
