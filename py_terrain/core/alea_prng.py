"""
Alea pseudo-random number generator.

Johannes Baagøe's Alea algorithm: small state, string or numeric seeds,
and identical sequences for identical seeds. This is the default random
source for terrain generation; any object with a ``random()`` method can
be injected instead.
"""

from typing import Any, Iterable, Union

_MASH_SEED = 0xEFC8249D  # 4022871197
_TWO_POW_32 = 0x100000000
_TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n: float) -> int:
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Alea's string hashing helper, keeps its own running state."""

    def __init__(self):
        self.n = _MASH_SEED

    def __call__(self, data: Any) -> float:
        for char in str(data):
            self.n += ord(char)
            h = 0.02519603282416938 * self.n
            self.n = _uint32(h)
            h -= self.n
            h *= self.n
            self.n = _uint32(h)
            h -= self.n
            self.n += h * _TWO_POW_32
        return _uint32(self.n) * _TWO_POW_NEG_32


class AleaPRNG:
    """
    Seedable generator producing floats in [0, 1).

    Two instances built from the same seed yield the same sequence, which
    is what makes terrain generation reproducible.
    """

    def __init__(self, seed: Union[str, int, float, Iterable[Any]] = "default"):
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = _Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for part in parts:
            self.s0 = (self.s0 - mash(part)) % 1.0
            self.s1 = (self.s1 - mash(part)) % 1.0
            self.s2 = (self.s2 - mash(part)) % 1.0

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def __repr__(self) -> str:
        return f"AleaPRNG(seed={self.seed!r}, calls={self.call_count})"
