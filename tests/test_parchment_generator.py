"""Tests for the parchment generator"""
import numpy as np
import pytest

from texture_forge.config.parameters import MaterialType, create_parameters
from texture_forge.core.parchment_generator import ParchmentGenerator
from texture_forge.core.shading import PAPER_TINT


def parchment_params(**overrides):
    overrides.setdefault("size", 128)
    return create_parameters(MaterialType.PARCHMENT, **overrides)


def test_parchment_draws_nothing(run_generator):
    _, _, source = run_generator(ParchmentGenerator, parchment_params(color_variation=0.5))
    assert source.draw_count == 0


def test_color_variation_is_inert(run_generator):
    first, _, _ = run_generator(ParchmentGenerator, parchment_params(color_variation=0.0))
    second, _, _ = run_generator(ParchmentGenerator, parchment_params(color_variation=0.6))
    assert np.array_equal(first, second)


def test_height_floor(run_generator):
    _, height, _ = run_generator(ParchmentGenerator, parchment_params())
    assert height.min() >= 0.45
    assert height.max() <= 1.0


def test_albedo_is_pulled_toward_paper_tint(run_generator):
    params = parchment_params(edge_darken=0.0)
    albedo, _, _ = run_generator(ParchmentGenerator, params)

    stops = np.array([params.color_a, params.color_b, params.color_c])
    low = 0.4 * stops.min(axis=0) + 0.6 * PAPER_TINT
    high = 0.4 * stops.max(axis=0) + 0.6 * PAPER_TINT
    rgb = albedo[..., :3].reshape(-1, 3)
    assert np.all(rgb >= low - 1e-9)
    assert np.all(rgb <= high + 1e-9)


def test_edge_darkening_is_radial(run_generator):
    light, _, _ = run_generator(ParchmentGenerator, parchment_params(edge_darken=0.0))
    dark, _, _ = run_generator(ParchmentGenerator, parchment_params(edge_darken=1.0))

    # inside radius 0.2 nothing changes
    assert np.allclose(dark[60:68, 60:68], light[60:68, 60:68])
    # corners almost black
    assert np.all(dark[0, 0, :3] < 0.05 * light[0, 0, :3] + 1e-9)
    assert np.all(dark[..., 3] == 1.0)


def test_edge_mask_values():
    generator = ParchmentGenerator(parchment_params(edge_darken=0.4))
    mask = generator.edge_mask(np.array([0.5, 0.5, 0.5]), np.array([0.5, 0.75, 1.2]))
    assert mask[0] == 1.0
    assert 0.6 < mask[1] < 1.0
    assert mask[2] == pytest.approx(0.6)
