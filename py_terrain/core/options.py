"""
Terrain configuration records.

Options are immutable and fully specified: every field has a default that
is resolved at construction, and range checks run before any field is
generated or filtered.
"""

import math
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .easing import linear
from .errors import InvalidDimensions, OutOfRangeOption
from .generators import diamond_square
from .images import RasterImage


class HeightmapKind(str, Enum):
    """How a terrain's initial elevation is produced."""

    PROCEDURAL = "procedural"
    IMAGE = "image"


class HeightmapSource:
    """Base of the heightmap source variants. Dispatch on ``kind``."""

    kind: HeightmapKind


class ProceduralHeightmap(HeightmapSource):
    """Elevation from a generator ``(field, options, rng) -> None``."""

    kind = HeightmapKind.PROCEDURAL

    def __init__(self, generator: Callable[..., None] = diamond_square):
        if not callable(generator):
            raise OutOfRangeOption(f"Heightmap generator must be callable, got {generator!r}")
        self.generator = generator

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProceduralHeightmap):
            return NotImplemented
        return self.generator is other.generator

    def __hash__(self) -> int:
        return hash((self.kind, self.generator))

    def __repr__(self) -> str:
        name = getattr(self.generator, "__name__", repr(self.generator))
        return f"ProceduralHeightmap({name})"


class ImageHeightmap(HeightmapSource):
    """Elevation decoded from a raster image."""

    kind = HeightmapKind.IMAGE

    def __init__(self, image: RasterImage):
        if not isinstance(image, RasterImage):
            raise OutOfRangeOption(f"Expected a RasterImage, got {type(image).__name__}")
        self.image = image

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageHeightmap):
            return NotImplemented
        return self.image is other.image

    def __hash__(self) -> int:
        return hash((self.kind, id(self.image)))

    def __repr__(self) -> str:
        return f"ImageHeightmap({self.image.width}x{self.image.height})"


class TerrainOptions(BaseModel):
    """Settings consumed by generators, filters and the normalization pipeline."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Elevation range
    min_height: float = Field(default=-100.0, description="Lowest elevation after clamping")
    max_height: float = Field(default=100.0, description="Highest elevation after clamping")

    # Fractal generation
    frequency: float = Field(default=2.5, description="Feature density / initial displacement scale")
    roughness: float = Field(
        default=1.0, description="Displacement decays by 2**-roughness per subdivision level"
    )

    # Shaping filters
    steps: int = Field(default=1, description="Number of terraces, <= 1 disables stepping")
    turbulent: bool = Field(default=False, description="Add absolute-valued noise octaves")
    turbulence_octaves: int = Field(default=4, description="Number of turbulence octaves")
    turbulence_amplitude: float = Field(
        default=0.25, description="First octave amplitude as a fraction of the height range"
    )
    smooth_radius: float = Field(default=1.0, description="Blur radius used after stepping")
    stretch: bool = Field(
        default=True, description="Ease relative to the observed range instead of the nominal one"
    )
    easing: Callable[..., Any] = Field(default=linear, description="Monotonic [0,1] -> [0,1] map")

    # Sources and hooks
    heightmap: HeightmapSource = Field(
        default_factory=ProceduralHeightmap, description="Initial elevation source"
    )
    after: Optional[Callable[..., Any]] = Field(
        default=None, description="Called with (field, options) at the end of the pipeline"
    )

    # Grid
    x_segments: int = Field(default=63, description="Quads along X")
    y_segments: int = Field(default=63, description="Quads along Y")

    @model_validator(mode="after")
    def _check_ranges(self) -> "TerrainOptions":
        for name in (
            "min_height",
            "max_height",
            "frequency",
            "roughness",
            "turbulence_amplitude",
            "smooth_radius",
        ):
            if not math.isfinite(getattr(self, name)):
                raise OutOfRangeOption(f"{name} must be finite, got {getattr(self, name)}")
        if self.min_height > self.max_height:
            raise OutOfRangeOption(
                f"min_height ({self.min_height}) exceeds max_height ({self.max_height})"
            )
        if self.frequency <= 0:
            raise OutOfRangeOption(f"frequency must be positive, got {self.frequency}")
        if self.roughness < 0:
            raise OutOfRangeOption(f"roughness must be non-negative, got {self.roughness}")
        if self.steps < 0:
            raise OutOfRangeOption(f"steps must be non-negative, got {self.steps}")
        if self.turbulence_octaves < 1:
            raise OutOfRangeOption(
                f"turbulence_octaves must be at least 1, got {self.turbulence_octaves}"
            )
        if self.turbulence_amplitude < 0:
            raise OutOfRangeOption(
                f"turbulence_amplitude must be non-negative, got {self.turbulence_amplitude}"
            )
        if self.smooth_radius < 0:
            raise OutOfRangeOption(f"smooth_radius must be non-negative, got {self.smooth_radius}")
        if self.x_segments < 0 or self.y_segments < 0:
            raise InvalidDimensions(
                f"Segment counts must be non-negative, got {self.x_segments}x{self.y_segments}"
            )
        return self

    @property
    def height_range(self) -> float:
        """Nominal spread between max_height and min_height."""
        return self.max_height - self.min_height


class BlurParameters(BaseModel):
    """Gaussian approximation settings for the box blur."""

    model_config = ConfigDict(frozen=True)

    radius: float = Field(default=1.0, description="Standard deviation of the target Gaussian")
    passes: int = Field(default=3, description="Number of box blurs")

    @model_validator(mode="after")
    def _check_ranges(self) -> "BlurParameters":
        if not math.isfinite(self.radius) or self.radius < 0:
            raise OutOfRangeOption(f"Blur radius must be finite and non-negative, got {self.radius}")
        if self.passes < 1:
            raise OutOfRangeOption(f"Blur passes must be at least 1, got {self.passes}")
        return self
