"""Shared pytest fixtures for the terrain engine tests."""

import pytest
import numpy as np

from py_terrain.core import AleaPRNG, HeightField, TerrainOptions


class ConstantRandom:
    """Random source that always returns the same value and counts draws."""

    def __init__(self, value=0.5):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


@pytest.fixture
def rng():
    """Seeded Alea PRNG."""
    return AleaPRNG("test_seed")


@pytest.fixture
def zero_displacement():
    """Source whose draws produce zero displacement (0.5 maps to the middle)."""
    return ConstantRandom(0.5)


@pytest.fixture
def small_options():
    """Options for a small 32x16 segment terrain."""
    return TerrainOptions(x_segments=32, y_segments=16)


@pytest.fixture
def random_field():
    """17x33 field of reproducible random heights in [-50, 50)."""
    values = np.random.default_rng(1234).uniform(-50, 50, size=(17, 33))
    return HeightField.from_array(values)
