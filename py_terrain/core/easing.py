"""
Easing functions for the clamp filter.

Each maps normalized heights in [0, 1] monotonically onto [0, 1] and
accepts either a float or a NumPy array.
"""

import numpy as np

from .errors import OutOfRangeOption


def linear(x):
    """Identity."""
    return x


def ease_in(x):
    """Quadratic, flattens low ground."""
    return x * x


def ease_out(x):
    """Quadratic, flattens high ground."""
    return -x * (x - 2)


def ease_in_out(x):
    """Flat at both ends, steep in the middle."""
    return np.where(x < 0.5, 2 * x * x, -1 + (4 - 2 * x) * x)


def in_ease_out(x):
    """Steep at both ends, flat in the middle."""
    y = 2 * x - 1
    return 0.5 * y * y * y + 0.5


def ease_in_weak(x):
    return np.power(x, 1.55)


def ease_in_strong(x):
    return np.power(x, 7)


EASINGS = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
    "in_ease_out": in_ease_out,
    "ease_in_weak": ease_in_weak,
    "ease_in_strong": ease_in_strong,
}


def get_easing(name: str):
    """Look up an easing function by name."""
    if name not in EASINGS:
        raise OutOfRangeOption(f"Unknown easing '{name}'. Available: {', '.join(sorted(EASINGS))}")
    return EASINGS[name]
