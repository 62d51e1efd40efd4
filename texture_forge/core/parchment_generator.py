"""
Path: texture_forge/core/parchment_generator.py

Funktionsweise: Pergament aus fBm-Wolken, gestreckten Fasern und radialer Randabdunklung
- Höhe = 0.45 + 0.35 * fBm(parchment_cloud, 4 Oktaven) + 0.2 * Faser-Noise^4
- Farbe 60% Richtung Papierton, danach radiale Abdunklung um edge_darken
- Keine Zufallsziehungen, color_variation wirkt hier nicht
"""

import numpy as np

from texture_forge.core.base_generator import BaseGenerator
from texture_forge.core.noise import fbm, tileable_noise
from texture_forge.core.shading import PAPER_TINT, clamp01, lerp, smoothstep, tri_blend


class ParchmentGenerator(BaseGenerator):
    """Generator für MaterialType.PARCHMENT"""

    CLOUD_OCTAVES = 4
    FIBER_STRETCH = 1.8

    def edge_mask(self, u, v):
        """Multiplikator 1.0 in der Mitte bis (1 - edge_darken) an den Ecken"""
        radius = np.sqrt((u - 0.5) ** 2 + (v - 0.5) ** 2)
        return lerp(1.0, 1.0 - self.material.edge_darken, smoothstep(0.2, 0.7, radius))

    def shade(self, u, v, draws):
        material = self.material
        tiling = self.params.tiling

        cloud = fbm(u, v, material.parchment_cloud, self.CLOUD_OCTAVES, tiling)
        fibers = tileable_noise(u * material.parchment_fibers,
                                v * material.parchment_fibers * self.FIBER_STRETCH, tiling) ** 4

        height = clamp01(0.45 + cloud * 0.35 + fibers * 0.2)

        color = tri_blend(self.params.color_a, self.params.color_b, self.params.color_c, height)
        color = lerp(color, PAPER_TINT, 0.6)
        color = color * self.edge_mask(u, v)[..., np.newaxis]

        return color, height
