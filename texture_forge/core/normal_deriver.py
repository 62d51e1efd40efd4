"""
Path: texture_forge/core/normal_deriver.py

Funktionsweise: Tangent-Space Normal-Map aus dem Height-Buffer
- Zentrale Differenzen über die vier direkten Nachbarn (kein Sobel)
- dx = rechts - links, dy = h[y + 1] - h[y - 1]
- Randbehandlung: bei tiling Wrap (modulo), sonst Clamp auf den Randwert
- n = normalize(-dx * intensity, -dy * intensity, 1), kodiert als n * 0.5 + 0.5, alpha = 1

Die Differenzen laufen über scipy.ndimage.correlate1d, dessen Modi 'wrap' und
'nearest' genau den beiden Randbehandlungen entsprechen.
"""

import logging
from typing import Any, Dict

import numpy as np
from scipy import ndimage

_CENTRAL_DIFFERENCE = np.array([-1.0, 0.0, 1.0])


class NormalDeriver:
    """
    Funktionsweise: Leitet Normalen aus Höhen ab und prüft das Ergebnis
    Aufgabe: Letzter Schritt der Pipeline, liest nur den Height-Buffer
    """

    def __init__(self, intensity: float, tiling: bool):
        self.intensity = intensity
        self.tiling = tiling
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def edge_mode(self) -> str:
        return 'wrap' if self.tiling else 'nearest'

    def gradients(self, height: np.ndarray):
        """
        Funktionsweise: Horizontale und vertikale zentrale Differenz
        Parameter: height - (size, size) Skalarfeld
        Returns: Tuple (dx, dy) gleicher Form
        """
        height = np.asarray(height, dtype=np.float64)
        dx = ndimage.correlate1d(height, _CENTRAL_DIFFERENCE, axis=1, mode=self.edge_mode)
        dy = ndimage.correlate1d(height, _CENTRAL_DIFFERENCE, axis=0, mode=self.edge_mode)
        return dx, dy

    def derive(self, height: np.ndarray) -> np.ndarray:
        """
        Funktionsweise: Berechnet die kodierte Normal-Map
        Parameter: height - (size, size) Skalarfeld in [0, 1]
        Returns: numpy.ndarray (size, size, 4) in [0, 1]
        """
        dx, dy = self.gradients(height)

        normal = np.empty(dx.shape + (3,))
        normal[..., 0] = -dx * self.intensity
        normal[..., 1] = -dy * self.intensity
        normal[..., 2] = 1.0
        normal /= np.linalg.norm(normal, axis=-1, keepdims=True)

        encoded = np.empty(dx.shape + (4,))
        encoded[..., :3] = normal * 0.5 + 0.5
        encoded[..., 3] = 1.0

        self.logger.debug(f"Normals derived (intensity={self.intensity}, mode={self.edge_mode})")
        return encoded

    def validate_normals(self, encoded: np.ndarray, tolerance: float = 1e-4) -> Dict[str, Any]:
        """
        Funktionsweise: Prüft dekodierte Normalen auf Einheitslänge
        Parameter: encoded - (size, size, 4) kodierte Normal-Map
        Returns: dict mit valid, max_length_error, nan_count
        """
        decoded = np.asarray(encoded[..., :3], dtype=np.float64) * 2.0 - 1.0
        length_error = np.abs(np.linalg.norm(decoded, axis=-1) - 1.0)
        nan_count = int(np.isnan(decoded).sum())
        max_error = float(np.nanmax(length_error)) if nan_count < decoded.size else float('nan')

        return {
            'valid': nan_count == 0 and max_error <= tolerance,
            'max_length_error': max_error,
            'nan_count': nan_count,
        }


def derive_normal_map(height: np.ndarray, intensity: float, tiling: bool) -> np.ndarray:
    """Convenience-Funktion: Height-Feld -> kodierte Normal-Map (size, size, 4)"""
    return NormalDeriver(intensity, tiling).derive(height)
