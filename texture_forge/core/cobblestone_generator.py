"""
Path: texture_forge/core/cobblestone_generator.py

Funktionsweise: Pflastersteine über Voronoi-Zellen eines gejitterten Gitters
- cobble_cells x cobble_cells Zellen, Zentrum jeder Zelle zufällig in [0.2, 0.8] der Zelle
- Pro Pixel nächstes und zweitnächstes Zentrum aus der 3x3-Nachbarschaft
- Bei tiling werden Abstände toroidal gemessen (Wrap um 1.0)
- Fugen-Maske aus dem Abstandsunterschied der beiden nächsten Zentren
- Steinhöhe aus Zell-Noise plus lokaler Variation, über stone_roundness geformt

Zufalls-Reihenfolge:
- prepare(): zwei Ziehungen (x, y) pro Zelle, Zeile j außen, Spalte i innen
- pro Pixel: R, G, B Farbvariation des Steins (entfällt bei color_variation = 0)
"""

import numpy as np

from texture_forge.core.base_generator import BaseGenerator
from texture_forge.core.noise import tileable_noise
from texture_forge.core.shading import apply_jitter, clamp01, lerp, smoothstep, tri_blend

# 50% Mischung aus 0.18 und 0.27 Grau
MORTAR_COLOR = np.full(3, lerp(0.18, 0.27, 0.5))

_NEIGHBOUR_OFFSETS = [(di, dj) for dj in (-1, 0, 1) for di in (-1, 0, 1)]


class CobblestoneGenerator(BaseGenerator):
    """
    Funktionsweise: Generator für MaterialType.COBBLESTONE
    Aufgabe: Zellzentren vorab ziehen, danach Voronoi-Fugen und Steinhöhe pro Pixel
    """

    def __init__(self, params):
        super().__init__(params)
        self.cell_centers = None

    def prepare(self, random_source):
        cells = self.material.cobble_cells
        offsets = random_source.uniform_block((cells, cells, 2)) * 0.6 + 0.2
        self.set_cell_layout(offsets)

    def set_cell_layout(self, offsets):
        """
        Funktionsweise: Setzt die Zellzentren aus relativen Offsets innerhalb der Zellen
        Parameter: offsets - Array (cells, cells, 2) indiziert [j, i, (x, y)], Werte in [0, 1]
        """
        offsets = np.asarray(offsets, dtype=np.float64)
        cells = offsets.shape[0]
        row_index, column_index = np.meshgrid(np.arange(cells), np.arange(cells), indexing='ij')

        centers = np.empty((cells, cells, 2))
        centers[..., 0] = (column_index + offsets[..., 0]) / cells
        centers[..., 1] = (row_index + offsets[..., 1]) / cells
        self.cell_centers = centers

    def draws_per_pixel(self) -> int:
        return 3 if self._jitter_amount() > 0.0 else 0

    def nearest_centers(self, u, v):
        """
        Funktionsweise: Sucht nächstes und zweitnächstes Zentrum in der 3x3-Nachbarschaft
        Parameter: u, v - Koordinaten-Arrays gleicher Form
        Returns: Tuple (best_center (..., 2), d1, d2) mit quadrierten Abständen
        """
        cells = self.cell_centers.shape[0]
        tiling = self.params.tiling
        cell_i = np.floor(u * cells).astype(np.int64)
        cell_j = np.floor(v * cells).astype(np.int64)

        candidates = []
        distances = []
        for di, dj in _NEIGHBOUR_OFFSETS:
            center = self.cell_centers[(cell_j + dj) % cells, (cell_i + di) % cells]
            delta_x = u - center[..., 0]
            delta_y = v - center[..., 1]
            if tiling:
                delta_x = np.where(delta_x > 0.5, delta_x - 1.0, delta_x)
                delta_x = np.where(delta_x < -0.5, delta_x + 1.0, delta_x)
                delta_y = np.where(delta_y > 0.5, delta_y - 1.0, delta_y)
                delta_y = np.where(delta_y < -0.5, delta_y + 1.0, delta_y)
            candidates.append(center)
            distances.append(delta_x * delta_x + delta_y * delta_y)

        candidates = np.stack(candidates)
        distances = np.stack(distances)

        # argmin nimmt bei Gleichstand das erste Zentrum in Nachbarschafts-Reihenfolge
        best_index = np.argmin(distances, axis=0)
        best_center = np.take_along_axis(candidates, best_index[np.newaxis, ..., np.newaxis], axis=0)[0]
        ordered = np.partition(distances, 1, axis=0)
        return best_center, ordered[0], ordered[1]

    def stone_mask(self, u, v):
        """1 im Steininneren, 0 auf der Voronoi-Grenze (Fuge)"""
        _, d1, d2 = self.nearest_centers(u, v)
        return self._mask_from_distances(d1, d2)

    def _mask_from_distances(self, d1, d2):
        cells = self.cell_centers.shape[0]
        border = clamp01((np.sqrt(d2) - np.sqrt(d1)) * (cells * 1.2))
        return smoothstep(0.0, self.material.mortar_width, border)

    def shade(self, u, v, draws):
        material = self.material
        tiling = self.params.tiling

        best_center, d1, d2 = self.nearest_centers(u, v)
        stone_mask = self._mask_from_distances(d1, d2)

        cell_noise = tileable_noise(best_center[..., 0] * 12.0, best_center[..., 1] * 12.0, tiling)
        height = lerp(0.35, 0.65, cell_noise)
        height = height + (tileable_noise(u * 8.0, v * 8.0, tiling) - 0.5) * material.stone_height_var
        height = clamp01(height) * stone_mask
        height = lerp(height, height ** (material.stone_roundness * 2.0 + 0.1), 0.5)

        stone_color = tri_blend(self.params.color_a, self.params.color_b, self.params.color_c, height)
        if draws is not None:
            stone_color = apply_jitter(stone_color, self._jitter_amount(), draws)

        color = lerp(MORTAR_COLOR, stone_color, stone_mask[..., np.newaxis])
        return color, height
