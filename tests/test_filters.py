"""Tests for the shaping filters."""

import pytest
import numpy as np
from py_terrain.core import (
    AleaPRNG,
    HeightField,
    OutOfRangeOption,
    TerrainOptions,
    clamp,
    smooth,
    smooth_neighbors,
    step,
    turbulence,
)
from py_terrain.core.easing import EASINGS, ease_in, get_easing


class TestTurbulence:
    """Test additive turbulence."""

    def test_never_lowers_a_sample(self, random_field):
        """Output is the input plus a non-negative perturbation."""
        before = random_field.to_array()
        turbulence(random_field, TerrainOptions(turbulent=True), AleaPRNG("turb"))

        perturbation = random_field.values - before
        assert np.all(perturbation >= 0)
        assert np.any(perturbation > 0)

    def test_perturbation_bounded_by_octave_amplitudes(self, random_field):
        options = TerrainOptions(turbulent=True, turbulence_octaves=4, turbulence_amplitude=0.25)
        before = random_field.to_array()
        turbulence(random_field, options, AleaPRNG("turb"))

        bound = 0.25 * options.height_range * (1 + 1 / 2 + 1 / 4 + 1 / 8)
        assert np.max(random_field.values - before) <= bound

    def test_zero_amplitude_no_op(self, random_field):
        before = random_field.to_array()
        turbulence(random_field, TerrainOptions(turbulence_amplitude=0), AleaPRNG("turb"))
        np.testing.assert_array_equal(random_field.values, before)

    def test_deterministic(self, random_field):
        other = random_field.copy()
        options = TerrainOptions(turbulent=True)
        turbulence(random_field, options, AleaPRNG("same"))
        turbulence(other, options, AleaPRNG("same"))

        np.testing.assert_array_equal(random_field.values, other.values)

    def test_tiny_fields(self):
        field = HeightField(0, 0)
        turbulence(field, TerrainOptions(turbulence_octaves=6), AleaPRNG("tiny"))
        assert field.is_finite()
        assert field.get(0, 0) >= 0


class TestStep:
    """Test terrace quantization."""

    @pytest.mark.parametrize("steps", [2, 3, 5, 12])
    def test_cardinality(self, random_field, steps):
        """At most ``steps`` distinct elevations remain."""
        step(random_field, steps)
        assert len(np.unique(random_field.values)) <= steps

    def test_range_preserved(self, random_field):
        """Lowest and highest samples keep their elevation."""
        low, high = random_field.min(), random_field.max()
        step(random_field, 4)

        assert random_field.min() == pytest.approx(low)
        assert random_field.max() == pytest.approx(high)

    def test_band_assignment(self):
        """Band index is floor(normalized * steps), clamped to steps - 1."""
        field = HeightField.from_array([[0.0, 0.2, 0.5, 0.99, 1.0]])
        step(field, 2)
        np.testing.assert_allclose(field.values, [[0.0, 0.0, 1.0, 1.0, 1.0]])

    def test_band_levels(self):
        field = HeightField.from_array([[0.0, 0.3, 0.6, 1.0]])
        step(field, 3)
        np.testing.assert_allclose(field.values, [[0.0, 0.0, 0.5, 1.0]])

    @pytest.mark.parametrize("steps", [0, 1])
    def test_disabled(self, random_field, steps):
        before = random_field.to_array()
        step(random_field, steps)
        np.testing.assert_array_equal(random_field.values, before)

    def test_flat_field_untouched(self):
        field = HeightField.from_array(np.full((3, 3), 4.0))
        step(field, 5)
        np.testing.assert_array_equal(field.values, 4.0)

    def test_negative_steps(self, random_field):
        with pytest.raises(OutOfRangeOption):
            step(random_field, -2)


class TestSmooth:
    """Test blur-based smoothing after stepping."""

    def test_terraces_survive_small_radius(self):
        """Wide bands keep their plateau away from the band edge."""
        values = np.zeros((10, 40))
        values[:, 20:] = 100.0
        field = HeightField.from_array(values)
        smooth(field, TerrainOptions(smooth_radius=1.0))

        np.testing.assert_allclose(field.values[:, :15], 0.0, atol=1e-9)
        np.testing.assert_allclose(field.values[:, 25:], 100.0)
        # The step edge itself is softened
        assert 0.0 < field.get(19, 5) < 100.0

    def test_zero_radius_no_op(self, random_field):
        before = random_field.to_array()
        smooth(random_field, TerrainOptions(smooth_radius=0))
        np.testing.assert_array_equal(random_field.values, before)


class TestSmoothNeighbors:
    """Test 3x3 neighbourhood averaging."""

    def test_spike(self):
        """Each sample averages the neighbours that exist."""
        values = np.zeros((3, 3))
        values[1, 1] = 9.0
        field = HeightField.from_array(values)
        smooth_neighbors(field)

        assert field.get(1, 1) == pytest.approx(1.0)
        # Corner has 4 neighbours including itself
        assert field.get(0, 0) == pytest.approx(9.0 / 4)
        # Edge midpoint has 6
        assert field.get(1, 0) == pytest.approx(9.0 / 6)

    def test_weight_keeps_original(self):
        values = np.zeros((3, 3))
        values[1, 1] = 9.0
        field = HeightField.from_array(values)
        smooth_neighbors(field, weight=1.0)

        assert field.get(1, 1) == pytest.approx((1.0 + 9.0) / 2)

    def test_constant_field(self):
        field = HeightField.from_array(np.full((4, 5), 2.5))
        smooth_neighbors(field)
        np.testing.assert_allclose(field.values, 2.5)

    def test_negative_weight(self, random_field):
        with pytest.raises(OutOfRangeOption):
            smooth_neighbors(random_field, weight=-1)


class TestClamp:
    """Test range clamping and easing."""

    @pytest.mark.parametrize("easing", sorted(EASINGS))
    @pytest.mark.parametrize("stretch", [True, False])
    def test_range_invariant(self, random_field, easing, stretch):
        """Every sample ends within [min_height, max_height]."""
        random_field.values *= 40
        options = TerrainOptions(
            min_height=-5.0, max_height=5.0, stretch=stretch, easing=EASINGS[easing]
        )
        clamp(random_field, options)

        assert random_field.min() >= -5.0
        assert random_field.max() <= 5.0

    def test_stretch_fills_range(self, random_field):
        """Observed min/max map onto the target range."""
        clamp(random_field, TerrainOptions(min_height=-5.0, max_height=5.0))

        assert random_field.min() == pytest.approx(-5.0)
        assert random_field.max() == pytest.approx(5.0)

    def test_stretch(self):
        field = HeightField.from_array([[-50.0, 0.0, 50.0]])
        clamp(field, TerrainOptions(stretch=True))
        np.testing.assert_allclose(field.values, [[-100.0, 0.0, 100.0]])

    def test_nominal_range_without_stretch(self):
        """Without stretch samples already in range stay put."""
        field = HeightField.from_array([[-50.0, 0.0, 50.0]])
        clamp(field, TerrainOptions(stretch=False))
        np.testing.assert_allclose(field.values, [[-50.0, 0.0, 50.0]])

    def test_nominal_range_clips(self):
        field = HeightField.from_array([[-500.0, 0.0, 500.0]])
        clamp(field, TerrainOptions(stretch=False))
        np.testing.assert_allclose(field.values, [[-100.0, 0.0, 100.0]])

    def test_easing_applied(self):
        field = HeightField.from_array([[0.0, 0.5, 1.0]])
        clamp(field, TerrainOptions(min_height=0, max_height=1, easing=ease_in))
        np.testing.assert_allclose(field.values, [[0.0, 0.25, 1.0]])

    def test_zero_target_range(self, random_field):
        """min_height == max_height maps everything to min_height."""
        clamp(random_field, TerrainOptions(min_height=7, max_height=7))
        np.testing.assert_array_equal(random_field.values, 7.0)

    def test_flat_field(self):
        """A field with no spread maps to min_height without NaN."""
        field = HeightField.from_array(np.full((3, 3), 12.0))
        clamp(field, TerrainOptions(min_height=-1, max_height=1))

        assert field.is_finite()
        np.testing.assert_array_equal(field.values, -1.0)


class TestEasing:
    """Test the easing library used by clamp."""

    @pytest.mark.parametrize("name", sorted(EASINGS))
    def test_endpoints_fixed(self, name):
        easing = get_easing(name)
        np.testing.assert_allclose(easing(np.array([0.0, 1.0])), [0.0, 1.0], atol=1e-12)

    @pytest.mark.parametrize("name", sorted(EASINGS))
    def test_monotonic(self, name):
        x = np.linspace(0, 1, 101)
        assert np.all(np.diff(get_easing(name)(x)) >= -1e-12)

    def test_unknown_name(self):
        with pytest.raises(OutOfRangeOption):
            get_easing("bounce")
