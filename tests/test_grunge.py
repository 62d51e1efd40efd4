"""Tests for the grunge overlay"""
import numpy as np
import pytest

from texture_forge.core.grunge_overlay import GrungeOverlay, apply_grunge


@pytest.fixture
def buffers():
    rng = np.random.default_rng(12)
    albedo = np.ones((128, 128, 4))
    albedo[..., :3] = rng.uniform(0.1, 0.9, size=(128, 128, 3))
    height = rng.uniform(0.0, 1.0, size=(128, 128))
    return albedo, height


@pytest.mark.parametrize("amount", [0.0, 0.001])
def test_no_op_below_epsilon(buffers, amount):
    albedo, height = buffers
    before = albedo.copy()
    result = apply_grunge(albedo, height, amount, True)
    assert result is albedo
    assert np.array_equal(albedo, before)


def test_grunge_only_darkens(buffers):
    albedo, height = buffers
    before = albedo.copy()
    height_before = height.copy()
    apply_grunge(albedo, height, 1.0, True)

    assert np.all(albedo[..., :3] <= before[..., :3])
    # dirt >= 0.8, crevice >= 0.925
    assert np.all(albedo[..., :3] >= before[..., :3] * 0.8 * 0.925 - 1e-12)
    assert np.all(albedo[..., 3] == 1.0)
    assert np.array_equal(height, height_before)


def test_recessed_areas_are_darker():
    albedo_low = np.full((128, 128, 4), 0.5)
    albedo_high = np.full((128, 128, 4), 0.5)
    apply_grunge(albedo_low, np.zeros((128, 128)), 1.0, True)
    apply_grunge(albedo_high, np.ones((128, 128)), 1.0, True)
    assert np.allclose(albedo_low[..., :3] / albedo_high[..., :3], 0.925)


def test_grime_range_and_determinism():
    overlay = GrungeOverlay(0.5, True)
    u, v = np.meshgrid(np.linspace(0.0, 1.0, 64), np.linspace(0.0, 1.0, 64))
    grime = overlay.grime(u, v)
    assert grime.min() >= 0.0 and grime.max() <= 1.0
    assert np.array_equal(grime, overlay.grime(u, v))
    assert overlay.is_active()
    assert not GrungeOverlay(0.0005, True).is_active()
