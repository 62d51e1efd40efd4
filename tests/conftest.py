import numpy as np
import pytest

from texture_forge.core.random_source import seed_random_source
from texture_forge.utils.error_handler import reset_error_statistics


@pytest.fixture(autouse=True)
def _fresh_error_statistics():
    reset_error_statistics()
    yield
    reset_error_statistics()


@pytest.fixture
def pixel_grid():
    """Returns a function building pixel-center coordinates (u, v) for a size x size buffer"""
    def build(size):
        coords = (np.arange(size, dtype=np.float64) + 0.5) / size
        return np.meshgrid(coords, coords)
    return build


@pytest.fixture
def run_generator():
    """Runs a generator class on fresh buffers, returns (albedo, height, random_source)"""
    def run(generator_class, params, progress=None):
        albedo = np.zeros((params.size, params.size, 4))
        height = np.zeros((params.size, params.size))
        random_source = seed_random_source(params.seed)
        generator_class(params).generate(albedo, height, random_source, progress=progress)
        return albedo, height, random_source
    return run
