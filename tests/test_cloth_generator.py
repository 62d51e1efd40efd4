"""Tests for the woven cloth generator"""
import numpy as np
import pytest

from texture_forge.config.parameters import MaterialType, create_parameters
from texture_forge.core.cloth_generator import WovenClothGenerator, thread_profile
from texture_forge.core.shading import clamp01, frac, lerp


def cloth_params(**overrides):
    overrides.setdefault("size", 128)
    return create_parameters(MaterialType.WOVEN_CLOTH, **overrides)


def test_thread_profile_shape():
    t = np.linspace(0.0, 0.5, 51)
    profile = thread_profile(t, 0.6)
    assert profile[-1] == pytest.approx(1.0)
    assert profile[0] == pytest.approx(0.0)
    assert np.all(np.diff(profile) >= 0.0)
    assert np.allclose(thread_profile(1.0 - t, 0.6), profile)


def test_thread_profile_mixes_box_and_rounded_box():
    box = 1.0 - 0.25 / 0.5
    expected = 0.6 * box + 0.4 * np.sin(box * np.pi / 2.0)
    assert thread_profile(0.375, 0.5) == pytest.approx(expected)


def test_checkerboard_swaps_top_thread():
    params = cloth_params(weave_density=8, weave_contrast=0.8, thread_thickness=0.6)
    generator = WovenClothGenerator(params)
    u = np.array([0.5, 1.5]) / 8.0
    v = np.array([0.2, 0.2]) / 8.0

    warp = thread_profile(frac(u * 8.0), 0.6)
    weft = thread_profile(frac(v * 8.0), 0.6)
    weave = generator.weave_value(u, v)

    # thread cell (0, 0) is "over", thread cell (1, 0) is "under"
    assert weave[0] == pytest.approx(clamp01(lerp(weft[0], warp[0], 0.8)))
    assert weave[1] == pytest.approx(clamp01(lerp(warp[1], weft[1], 0.8)))


def test_high_contrast_is_clamped(run_generator):
    params = cloth_params(weave_contrast=1.5, color_variation=0.0)
    albedo, height, _ = run_generator(WovenClothGenerator, params)
    assert height.min() >= 0.35
    assert height.max() <= 1.0
    assert albedo.min() >= 0.0 and albedo.max() <= 1.0


def test_height_is_periodic_per_thread_pair(run_generator):
    """density 32 on 128 pixels repeats every 8 pixels, also across the wrap"""
    _, height, _ = run_generator(WovenClothGenerator, cloth_params(weave_density=32))
    assert np.array_equal(np.roll(height, 8, axis=1), height)
    assert np.array_equal(np.roll(height, 8, axis=0), height)


def test_jitter_is_halved(run_generator):
    params = cloth_params(color_variation=0.6)
    jittered, _, source = run_generator(WovenClothGenerator, params)
    plain, _, plain_source = run_generator(WovenClothGenerator, params.with_overrides(color_variation=0.0))

    assert source.draw_count == 128 * 128 * 3
    assert plain_source.draw_count == 0
    assert np.abs(jittered - plain).max() <= 0.3 + 1e-9
    assert np.abs(jittered - plain).max() > 0.2
