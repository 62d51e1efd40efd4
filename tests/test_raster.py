"""Tests for RasterBuffer"""
import numpy as np
import pytest

from texture_forge.core.raster import RasterBuffer, is_valid_buffer_size


def test_from_scalar_replicates_into_rgb():
    values = np.linspace(0.0, 1.0, 128 * 128).reshape(128, 128)
    buffer = RasterBuffer.from_scalar(values)
    assert buffer.pixels.shape == (128, 128, 4)
    assert buffer.pixels.dtype == np.float32
    for channel in range(3):
        assert np.array_equal(buffer.pixels[..., channel], values.astype(np.float32))
    assert np.all(buffer.pixels[..., 3] == 1.0)
    assert np.array_equal(buffer.scalar(), values.astype(np.float32))


def test_pixels_are_read_only_copies():
    source = np.full((128, 128, 4), 0.25)
    buffer = RasterBuffer.from_rgba(source)
    source[...] = 0.75
    assert np.all(buffer.pixels == 0.25)
    with pytest.raises(ValueError):
        buffer.pixels[0, 0, 0] = 1.0


@pytest.mark.parametrize("shape", [(128, 128, 3), (128, 256, 4), (100, 100, 4), (4096, 4096, 4), (128, 128)])
def test_invalid_shapes(shape):
    with pytest.raises(ValueError):
        RasterBuffer(np.broadcast_to(np.float32(0.0), shape))


def test_valid_sizes():
    assert is_valid_buffer_size(128)
    assert is_valid_buffer_size(2048)
    assert not is_valid_buffer_size(64)
    assert not is_valid_buffer_size(384)


def test_to_rgba8_rounds():
    pixels = np.zeros((128, 128, 4))
    pixels[0, 0] = (1.0, 0.5, 0.0, 1.0)
    rgba8 = RasterBuffer.from_rgba(pixels).to_rgba8()
    assert rgba8.dtype == np.uint8
    assert tuple(rgba8[0, 0]) == (255, 128, 0, 255)


def test_statistics_and_equality():
    pixels = np.zeros((128, 128, 4))
    pixels[..., 0] = 0.5
    pixels[..., 3] = 1.0
    buffer = RasterBuffer.from_rgba(pixels)
    stats = buffer.statistics()
    assert stats["size"] == 128
    assert stats["mean"]["r"] == pytest.approx(0.5)
    assert stats["max"]["a"] == 1.0
    assert stats["nan_count"] == 0
    assert buffer == RasterBuffer.from_rgba(pixels.copy())
    assert buffer != RasterBuffer.from_rgba(np.ones((128, 128, 4)))
    assert buffer.width == buffer.height == 128
