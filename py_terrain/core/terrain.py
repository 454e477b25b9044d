"""
Terrain pipeline: initial elevation followed by normalization.

``generate_terrain`` picks the heightmap source from the options, fills a
new field and runs ``normalize``: turbulence, step + smooth, clamp and
finally the caller's ``after`` hook. The returned field belongs to the
caller; the pipeline keeps no reference to it.
"""

from typing import Optional, Union

import structlog

from ..utils.random import RandomSource, create_prng
from .errors import OutOfRangeOption
from .filters import clamp, smooth, step, turbulence
from .height_field import HeightField
from .images import from_heightmap
from .options import HeightmapKind, TerrainOptions

logger = structlog.get_logger()


def _ensure_finite(field: HeightField, stage: str) -> None:
    if not field.is_finite():
        raise OutOfRangeOption(f"Non-finite heights after {stage}")


def normalize(
    field: HeightField, options: TerrainOptions, rng: Optional[RandomSource] = None
) -> HeightField:
    """
    Apply the shaping filters in pipeline order.

    Args:
        field: Field to shape in place
        options: Filter settings
        rng: Random source, required when ``options.turbulent`` is set

    Returns:
        The same field
    """
    if options.turbulent and rng is None:
        raise OutOfRangeOption("Turbulence needs a random source")

    if options.turbulent:
        turbulence(field, options, rng)
        _ensure_finite(field, "turbulence")

    if options.steps > 1:
        logger.debug("Stepping terrain", steps=options.steps, smooth_radius=options.smooth_radius)
        step(field, options.steps)
        smooth(field, options)
        _ensure_finite(field, "stepping")

    # Keep the terrain within the allotted height range and apply easing
    clamp(field, options)
    _ensure_finite(field, "clamping")

    if options.after is not None:
        options.after(field, options)
        _ensure_finite(field, "the after hook")

    return field


def generate_terrain(
    options: Optional[TerrainOptions] = None,
    rng: Optional[RandomSource] = None,
    seed: Optional[Union[str, int]] = None,
) -> HeightField:
    """
    Build a normalized height field.

    Args:
        options: Terrain settings, defaults to ``TerrainOptions()``
        rng: Random source; when omitted a fresh Alea PRNG is seeded with ``seed``
        seed: Seed for the fresh PRNG, ignored when ``rng`` is given

    Returns:
        New field of ``(x_segments + 1) x (y_segments + 1)`` samples
    """
    options = options or TerrainOptions()
    if rng is None:
        rng = create_prng(seed)

    source = options.heightmap
    field = HeightField(options.x_segments, options.y_segments)
    logger.info(
        "Generating terrain",
        cols=field.width(),
        rows=field.height(),
        source=source.kind.value,
    )

    if source.kind is HeightmapKind.IMAGE:
        from_heightmap(field, options, source.image)
    elif source.kind is HeightmapKind.PROCEDURAL:
        source.generator(field, options, rng)
    else:
        raise OutOfRangeOption(f"Unknown heightmap kind: {source.kind!r}")
    _ensure_finite(field, "heightmap generation")

    normalize(field, options, rng)

    logger.info(
        "Terrain generated",
        min_height=round(field.min(), 3),
        max_height=round(field.max(), 3),
    )
    return field
