"""
Path: texture_forge/core/raster.py

Funktionsweise: Unveränderlicher RGBA-Buffer als Ergebnis der Pipeline
- Quadratisch, Zweierpotenz zwischen 128 und 2048, 4 Kanäle float32 in [0, 1]
- from_rgba() für Farb-Buffer, from_scalar() für Höhen-Buffer (RGB repliziert, alpha = 1)
- Pixel-Array ist schreibgeschützt, sobald der Buffer an den Aufrufer geht
- to_rgba8() liefert uint8-Daten für externe Bild-Encoder
"""

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from texture_forge.config.value_default import GLOBAL


def is_valid_buffer_size(size: int) -> bool:
    return GLOBAL.SIZEMIN <= size <= GLOBAL.SIZEMAX and (size & (size - 1)) == 0


@dataclass(frozen=True, eq=False)
class RasterBuffer:
    """
    Funktionsweise: Container für genau eine Textur (Albedo, Height oder Normal)
    Attribute: pixels - numpy.ndarray (size, size, 4) float32, schreibgeschützt
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"RasterBuffer needs shape (size, size, 4), got {pixels.shape}")
        if pixels.shape[0] != pixels.shape[1]:
            raise ValueError(f"RasterBuffer must be square, got {pixels.shape[:2]}")
        if not is_valid_buffer_size(pixels.shape[0]):
            raise ValueError(f"RasterBuffer size must be a power of two in "
                             f"[{GLOBAL.SIZEMIN}, {GLOBAL.SIZEMAX}], got {pixels.shape[0]}")
        if pixels is not self.pixels or pixels.dtype != np.float32 or pixels.flags.writeable:
            pixels = np.array(pixels, dtype=np.float32)
            pixels.setflags(write=False)
            object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_rgba(cls, rgba: np.ndarray) -> "RasterBuffer":
        """Übernimmt ein (size, size, 4) Array als float32-Kopie"""
        return cls(np.asarray(rgba))

    @classmethod
    def from_scalar(cls, values: np.ndarray) -> "RasterBuffer":
        """Repliziert ein (size, size) Skalarfeld in RGB, alpha = 1"""
        values = np.asarray(values, dtype=np.float32)
        pixels = np.empty(values.shape + (4,), dtype=np.float32)
        pixels[..., 0] = values
        pixels[..., 1] = values
        pixels[..., 2] = values
        pixels[..., 3] = 1.0
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def scalar(self) -> np.ndarray:
        """Rot-Kanal als Skalarfeld (für Höhen-Buffer)"""
        return self.pixels[..., 0]

    def to_rgba8(self) -> np.ndarray:
        """Rundet auf uint8 (size, size, 4) für externe Encoder"""
        return np.round(np.clip(self.pixels, 0.0, 1.0) * 255.0).astype(np.uint8)

    def statistics(self) -> Dict[str, Any]:
        """
        Funktionsweise: Kennzahlen pro Kanal für Logging und Tests
        Returns: dict mit min/max/mean pro Kanal und nan_count
        """
        channels = "rgba"
        return {
            "size": self.width,
            "min": {c: float(self.pixels[..., i].min()) for i, c in enumerate(channels)},
            "max": {c: float(self.pixels[..., i].max()) for i, c in enumerate(channels)},
            "mean": {c: float(self.pixels[..., i].mean()) for i, c in enumerate(channels)},
            "nan_count": int(np.isnan(self.pixels).sum()),
        }

    def __eq__(self, other):
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and np.array_equal(self.pixels, other.pixels)
