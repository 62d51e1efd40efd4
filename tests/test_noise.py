"""Tests for gradient noise, tileable noise and fBm"""
import numpy as np
import pytest

from texture_forge.core.noise import fbm, gradient_noise, tileable_noise


@pytest.fixture
def sample_points():
    rng = np.random.default_rng(0)
    return rng.uniform(-50.0, 50.0, size=(2, 4000))


def test_gradient_noise_is_half_at_lattice_points():
    xs, ys = np.meshgrid(np.arange(-5, 6), np.arange(-5, 6))
    assert np.all(gradient_noise(xs, ys) == 0.5)


def test_tileable_noise_matches_neighbours_at_lattice_points():
    for x in range(-3, 4):
        for y in range(-3, 4):
            value = tileable_noise(x, y, True)
            assert value == tileable_noise(x + 1, y, True)
            assert value == tileable_noise(x, y + 1, True)


def test_untiled_noise_is_plain_gradient_noise(sample_points):
    x, y = sample_points
    assert np.array_equal(tileable_noise(x, y, False), gradient_noise(x, y))


@pytest.mark.parametrize("tiling", [True, False])
def test_noise_range(sample_points, tiling):
    x, y = sample_points
    values = tileable_noise(x, y, tiling)
    assert values.min() >= 0.0
    assert values.max() <= 1.0
    # not a constant field
    assert values.std() > 0.01


@pytest.mark.parametrize("octaves", [1, 3, 5])
def test_fbm_range(sample_points, octaves):
    x, y = sample_points
    values = fbm(x * 0.1, y * 0.1, 2.0, octaves, True)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_fbm_single_octave_is_half_amplitude_noise():
    x = np.linspace(0.0, 3.0, 17)
    y = np.linspace(1.0, 2.0, 17)
    expected = tileable_noise(x * 2.5, y * 2.5, False) * 0.5
    assert np.allclose(fbm(x, y, 2.5, 1, False), expected)


def test_scalar_inputs_return_float():
    assert isinstance(gradient_noise(0.3, 0.7), float)
    assert isinstance(tileable_noise(0.3, 0.7, True), float)
    assert isinstance(fbm(0.3, 0.7, 2.0, 3, True), float)


def test_noise_is_deterministic(sample_points):
    x, y = sample_points
    assert np.array_equal(fbm(x, y, 1.5, 4, True), fbm(x, y, 1.5, 4, True))


def test_noise_is_continuous():
    x = np.linspace(0.0, 4.0, 4001)
    values = gradient_noise(x, np.full_like(x, 0.37))
    assert np.abs(np.diff(values)).max() < 0.01
