"""
Path: texture_forge/core/cloth_generator.py

Funktionsweise: Leinwandbindung aus Kett- und Schussfäden
- (u, v) * weave_density ergibt Faden-Koordinaten (s, t)
- Nachkommaanteil jeder Achse bestimmt das Fadenprofil (60% Box + 40% Sinus-gerundete Box)
- Schachbrett auf den ganzzahligen Faden-Indizes entscheidet, welcher Faden oben liegt
- weave_contrast mischt die beiden Profile; Werte > 1 extrapolieren, das Ergebnis wird geclampt
- Farbvariation mit halber Stärke (color_variation * 0.5)
"""

import numpy as np

from texture_forge.core.base_generator import BaseGenerator
from texture_forge.core.shading import apply_jitter, clamp01, frac, lerp, tri_blend


def thread_profile(t, thickness: float):
    """
    Funktionsweise: Querschnitt eines Fadens als weiche, oben gerundete Box
    Parameter: t - Position quer zum Faden in [0, 1), Fadenmitte bei 0.5
    Parameter: thickness - halbe Fadenbreite relativ zur Fadenzelle
    Returns: numpy.ndarray in [0, 1]
    """
    center = np.abs(t - 0.5) * 2.0
    box = clamp01(1.0 - center / np.clip(thickness, 0.0001, 1.0))
    rounded = np.sin(box * np.pi * 0.5)
    return clamp01(box * 0.6 + rounded * 0.4)


class WovenClothGenerator(BaseGenerator):
    """Generator für MaterialType.WOVEN_CLOTH, ohne Vorab-Ziehungen"""

    def draws_per_pixel(self) -> int:
        return 3 if self._jitter_amount() > 0.0 else 0

    def _jitter_amount(self) -> float:
        return self.params.color_variation * 0.5

    def weave_value(self, u, v):
        """
        Funktionsweise: Sichtbares Fadenprofil an (u, v)
        Returns: numpy.ndarray in [0, 1]
        """
        material = self.material
        s = u * material.weave_density
        t = v * material.weave_density

        warp_profile = thread_profile(frac(s), material.thread_thickness)
        weft_profile = thread_profile(frac(t), material.thread_thickness)

        over = ((np.floor(s).astype(np.int64) + np.floor(t).astype(np.int64)) & 1) == 0
        weave = np.where(over,
                         lerp(weft_profile, warp_profile, material.weave_contrast),
                         lerp(warp_profile, weft_profile, material.weave_contrast))
        return clamp01(weave)

    def shade(self, u, v, draws):
        weave = self.weave_value(u, v)
        height = clamp01(0.35 + weave * 0.65)

        color = tri_blend(self.params.color_a, self.params.color_b, self.params.color_c, weave)
        if draws is not None:
            color = apply_jitter(color, self._jitter_amount(), draws)

        return color, height
