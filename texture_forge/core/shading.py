"""
Path: texture_forge/core/shading.py

Funktionsweise: Farb- und Interpolations-Hilfsfunktionen für alle Generatoren
- lerp, smoothstep, clamp01, frac als vektorisierte NumPy-Operationen
- tri_blend für den dreistufigen Farbverlauf (dunkel -> mittel -> hell)
- jitter_color / apply_jitter für die Farbvariation pro Pixel
Alle Funktionen arbeiten auf Skalaren und auf Arrays beliebiger Form.
"""

import numpy as np

PAPER_TINT = np.array([0.85, 0.78, 0.6])
GAP_COLOR = np.array([0.05, 0.05, 0.05])


def lerp(a, b, t):
    """Lineare Interpolation ohne Clamping von t"""
    return a + (b - a) * t


def clamp01(value):
    return np.clip(value, 0.0, 1.0)


def frac(value):
    """Nachkommaanteil in [0, 1), auch für negative Werte"""
    return value - np.floor(value)


def smoothstep(edge0, edge1, x):
    """
    Funktionsweise: Hermite-Schwelle zwischen edge0 und edge1
    Vertauschte Kanten (edge0 > edge1) ergeben die fallende Kurve.
    Bei edge0 == edge1 wird daraus eine harte Stufe bei edge0.
    """
    x = np.asarray(x, dtype=np.float64)
    if edge0 == edge1:
        return np.where(x < edge0, 0.0, 1.0)
    t = clamp01((x - edge0) / (edge1 - edge0))
    return t * t * (3.0 - 2.0 * t)


def tri_blend(color_a, color_b, color_c, t):
    """
    Funktionsweise: Dreistufiger Farbverlauf A -> B (t in [0, 0.5]) und B -> C (t in [0.5, 1])
    Parameter: color_a, color_b, color_c - RGB-Tripel
    Parameter: t - Skalar oder Array der Form (...)
    Returns: numpy.ndarray der Form (..., 3)
    """
    color_a = np.asarray(color_a, dtype=np.float64)
    color_b = np.asarray(color_b, dtype=np.float64)
    color_c = np.asarray(color_c, dtype=np.float64)
    t = np.asarray(t, dtype=np.float64)[..., np.newaxis]

    lower = lerp(color_a, color_b, t * 2.0)
    upper = lerp(color_b, color_c, (t - 0.5) * 2.0)
    return np.where(t < 0.5, lower, upper)


def apply_jitter(color, amount: float, offsets):
    """
    Funktionsweise: Addiert vorab gezogene Zufallswerte als Farbrauschen
    Parameter: color - Array der Form (..., 3)
    Parameter: amount - maximale Abweichung pro Kanal
    Parameter: offsets - gleichverteilte Werte in [0, 1) der Form (..., 3), Reihenfolge R, G, B
    Returns: numpy.ndarray (..., 3), auf [0, 1] geclampt
    """
    if amount <= 0.0:
        return np.asarray(color, dtype=np.float64)
    jitter = (np.asarray(offsets) * 2.0 - 1.0) * amount
    return clamp01(np.asarray(color, dtype=np.float64) + jitter)


def jitter_color(color, amount: float, random_source):
    """
    Funktionsweise: Farbvariation mit Ziehungen aus der gemeinsamen Zufallsquelle
    Aufgabe: Drei Ziehungen (R, G, B) pro Farbe, keine Ziehung bei amount <= 0
    Parameter: color - RGB oder RGBA, einzeln oder als Array (..., 3|4)
    Returns: numpy.ndarray (..., 4) mit alpha = 1
    """
    color = np.asarray(color, dtype=np.float64)
    rgb = color[..., :3]
    if amount > 0.0:
        rgb = apply_jitter(rgb, amount, random_source.uniform_block(rgb.shape))
    alpha = np.ones(rgb.shape[:-1] + (1,))
    return np.concatenate([rgb, alpha], axis=-1)
