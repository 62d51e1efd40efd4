"""
Path: texture_forge/core/wood_generator.py

Funktionsweise: Holzdielen mit Fugen, verzogenen Jahresringen und Astlöchern
- u wird in plank_count gleich breite Dielen geteilt, jede Diele erhält eine Phase in [0, 10)
- Fugen-Maske über weiche Schwelle am Dielenrand (Breite plank_gap)
- Ringe aus Abstand zu einem pro Zeile wandernden Zentrum, mit Noise verzogen
- Astlöcher: pro Pixel eine Zufallsziehung, bei Treffer Noise hoch 6 als Blob

Zufalls-Reihenfolge:
- prepare(): plank_count Phasen in Dielen-Reihenfolge
- pro Pixel: Ast-Ziehung, danach R, G, B Farbvariation (entfällt bei color_variation = 0)
"""

import numpy as np

from texture_forge.core.base_generator import BaseGenerator
from texture_forge.core.noise import tileable_noise
from texture_forge.core.shading import GAP_COLOR, apply_jitter, lerp, smoothstep, tri_blend


class WoodPlankGenerator(BaseGenerator):
    """
    Funktionsweise: Generator für MaterialType.WOOD_PLANKS
    Aufgabe: Dielen-Phasen vorab ziehen, danach Ringe, Fugen und Äste pro Pixel
    """

    PHASE_SCALE = 10.0
    KNOT_FREQUENCY = 12.0
    WARP_FREQUENCY = 4.0

    def __init__(self, params):
        super().__init__(params)
        self.plank_shifts = None

    def prepare(self, random_source):
        """Zieht eine Phase pro Diele, in Dielen-Reihenfolge"""
        self.plank_shifts = random_source.uniform_block(self.material.plank_count) * self.PHASE_SCALE
        self.logger.debug(f"Plank phases: {np.round(self.plank_shifts, 3).tolist()}")

    def draws_per_pixel(self) -> int:
        return 4 if self._jitter_amount() > 0.0 else 1

    def gap_coverage(self, u_local):
        """
        Funktionsweise: Anteil der Fuge am Pixel, 1 direkt an der Dielenkante, 0 im Dielenkörper
        Parameter: u_local - Position innerhalb der Diele in [0, 1)
        Returns: numpy.ndarray in [0, 1]
        """
        plank_gap = self.material.plank_gap
        if plank_gap <= 0.0:
            return np.zeros(np.shape(u_local))
        # Abstand zur nächsten Dielenkante in Textur-Einheiten
        edge_distance = (0.5 - np.abs(u_local - 0.5)) / self.material.plank_count
        return 1.0 - smoothstep(plank_gap * 0.5, plank_gap, edge_distance)

    def shade(self, u, v, draws):
        material = self.material
        tiling = self.params.tiling
        plank_count = material.plank_count

        plank_position = u * plank_count
        plank_index = np.minimum(np.floor(plank_position).astype(np.int64), plank_count - 1)
        u_local = plank_position - plank_index
        shift = self.plank_shifts[plank_index]

        gap_mask = 1.0 - self.gap_coverage(u_local)

        # Ringe um ein pro Diele phasenverschobenes, wanderndes Zentrum
        center_x = 0.5 + 0.2 * np.sin((v + shift) * 3.1)
        center_y = 0.5 + 0.2 * np.cos((v + shift) * 2.7)
        dx = u_local - center_x + 0.5
        dy = v - center_y
        distance = np.sqrt(dx * dx + dy * dy)

        warp = material.wood_warp * tileable_noise(u * self.WARP_FREQUENCY, v * self.WARP_FREQUENCY, tiling)
        rings = np.sin((distance + warp) * material.wood_ring_freq * np.pi * 2.0) * 0.5 + 0.5

        knot_noise = tileable_noise(u * self.KNOT_FREQUENCY + shift, v * self.KNOT_FREQUENCY, tiling)
        knot = np.where(draws[..., 0] < material.wood_knot_chance, knot_noise ** 6, 0.0)

        height = (lerp(0.35, 0.65, rings) + knot * 0.25) * gap_mask

        color = tri_blend(self.params.color_a, self.params.color_b, self.params.color_c, rings)
        if draws.shape[-1] > 1:
            color = apply_jitter(color, self._jitter_amount(), draws[..., 1:4])
        color = color * lerp(0.9, 1.05, height)[..., np.newaxis]
        color = lerp(color, GAP_COLOR, ((1.0 - gap_mask) * 0.9)[..., np.newaxis])

        return color, height
