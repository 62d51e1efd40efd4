"""
Path: texture_forge/core/grunge_overlay.py

Funktionsweise: Verwitterungs-Pass über dem fertigen Albedo-Buffer
- Schmutzwert g aus zwei fBm-Lagen (Skala 2.0 / 3 Oktaven und Skala 7.0 / 2 Oktaven, versetzt)
- Albedo *= lerp(1, 0.8, g * amount) * lerp(1, 0.85, (1 - height) * amount * 0.5)
- Bei amount <= GRUNGE_EPSILON bleibt der Buffer unverändert
- Height-Buffer wird nur gelesen, alpha bleibt 1
"""

import logging

import numpy as np

from texture_forge.core.noise import fbm
from texture_forge.core.shading import clamp01, lerp

GRUNGE_EPSILON = 0.001
ROW_BAND = 256

# Versatz der feinen Schmutz-Lage
_DETAIL_OFFSET = (13.12, 7.9)


class GrungeOverlay:
    """
    Funktionsweise: Dunkelt Albedo über Schmutz-Noise und Höhe ab
    Aufgabe: In-place Post-Pass zwischen Generator und Normal-Ableitung
    """

    def __init__(self, amount: float, tiling: bool):
        self.amount = amount
        self.tiling = tiling
        self.logger = logging.getLogger(self.__class__.__name__)

    def is_active(self) -> bool:
        return self.amount > GRUNGE_EPSILON

    def grime(self, u, v):
        """Schmutzwert in [0, 1] an (u, v)"""
        coarse = fbm(u, v, 2.0, 3, self.tiling)
        detail = fbm(u + _DETAIL_OFFSET[0], v + _DETAIL_OFFSET[1], 7.0, 2, self.tiling)
        return clamp01(coarse * 0.7 + detail * 0.3)

    def apply(self, albedo: np.ndarray, height: np.ndarray) -> np.ndarray:
        """
        Funktionsweise: Wendet die Verwitterung auf albedo an
        Parameter: albedo - (size, size, 4) float Array, wird in-place verändert
        Parameter: height - (size, size) float Array, nur gelesen
        Returns: albedo (dasselbe Array)
        """
        if not self.is_active():
            self.logger.debug(f"Grunge skipped (amount={self.amount})")
            return albedo

        size_y, size_x = height.shape
        coords_x = (np.arange(size_x, dtype=np.float64) + 0.5) / size_x
        coords_y = (np.arange(size_y, dtype=np.float64) + 0.5) / size_y

        for y0 in range(0, size_y, ROW_BAND):
            y1 = min(y0 + ROW_BAND, size_y)
            u, v = np.meshgrid(coords_x, coords_y[y0:y1])

            grime = self.grime(u, v)
            dirt = lerp(1.0, 0.8, grime * self.amount)
            crevice = lerp(1.0, 0.85, (1.0 - height[y0:y1]) * self.amount * 0.5)

            albedo[y0:y1, :, :3] *= (dirt * crevice)[..., np.newaxis]

        self.logger.debug(f"Grunge applied (amount={self.amount}, tiling={self.tiling})")
        return albedo


def apply_grunge(albedo: np.ndarray, height: np.ndarray, amount: float, tiling: bool) -> np.ndarray:
    """Convenience-Funktion für einen einzelnen Grunge-Pass"""
    return GrungeOverlay(amount, tiling).apply(albedo, height)
