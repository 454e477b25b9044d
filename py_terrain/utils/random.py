"""
Random number source utilities.

Terrain code never reaches for a module-level generator: callers own a
random source and pass it down explicitly. Anything with a ``random()``
method returning floats in [0, 1) qualifies, which includes
``AleaPRNG``, ``random.Random`` and ``numpy.random.Generator``.
"""

from typing import TYPE_CHECKING, Optional, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from ..core.alea_prng import AleaPRNG


@runtime_checkable
class RandomSource(Protocol):
    """Minimal interface consumed by generators and filters."""

    def random(self) -> float:
        ...


def create_prng(seed: Optional[Union[str, int]] = None) -> "AleaPRNG":
    """
    Create a fresh Alea PRNG.

    Args:
        seed: Seed string or number, "default" when omitted

    Returns:
        New AleaPRNG instance owned by the caller
    """
    from ..core.alea_prng import AleaPRNG

    return AleaPRNG("default" if seed is None else seed)


def uniform(rng: RandomSource, low: float, high: float) -> float:
    """Draw a float in [low, high) from ``rng``."""
    return low + rng.random() * (high - low)
