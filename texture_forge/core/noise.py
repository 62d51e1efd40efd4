"""
Path: texture_forge/core/noise.py

Funktionsweise: Gradient-Noise und fBm für alle Generatoren und den Grunge-Pass
- gradient_noise(): klassisches 2D Perlin-Noise mit fester Referenz-Permutation, Wertebereich [0, 1]
- tileable_noise(): bilineare Mischung der vier Zell-Ecken (x, y), (x+1, y), (x, y+1), (x+1, y+1)
- fbm(): Oktaven-Summe über tileable_noise mit freq *= 2, amp *= 0.5

Das Noise ist nicht geseedet, es hängt nur von den Koordinaten ab. An jedem ganzzahligen
Gitterpunkt liefert gradient_noise exakt 0.5, dadurch stimmen die vier Ecken dort überein.

Alle Funktionen sind vektorisiert: x und y dürfen Skalare oder gleich geformte Arrays sein.
"""

import numpy as np

from texture_forge.core.shading import clamp01, frac, lerp

# Ken Perlins Referenz-Permutation
_PERMUTATION = np.array([
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
], dtype=np.int64)

_PERM = np.concatenate([_PERMUTATION, _PERMUTATION])

# Acht Gradienten-Richtungen (Diagonalen + Achsen)
_GRAD_X = np.array([1.0, -1.0, 1.0, -1.0, 1.0, -1.0, 0.0, 0.0])
_GRAD_Y = np.array([1.0, 1.0, -1.0, -1.0, 0.0, 0.0, 1.0, -1.0])


def _fade(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _gradient_dot(hashed, dx, dy):
    index = hashed & 7
    return _GRAD_X[index] * dx + _GRAD_Y[index] * dy


def _as_result(value, x, y):
    if np.ndim(x) == 0 and np.ndim(y) == 0:
        return float(value)
    return value


def gradient_noise(x, y):
    """
    Funktionsweise: Klassisches 2D Perlin-Noise, auf [0, 1] abgebildet
    Parameter: x, y - Koordinaten (Skalar oder Array)
    Returns: float oder numpy.ndarray - 0.5 + 0.5 * n, geclampt auf [0, 1]
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    x_floor = np.floor(x)
    y_floor = np.floor(y)
    xi = x_floor.astype(np.int64) & 255
    yi = y_floor.astype(np.int64) & 255
    fx = x - x_floor
    fy = y - y_floor

    u = _fade(fx)
    v = _fade(fy)

    row0 = _PERM[xi]
    row1 = _PERM[xi + 1]
    aa = _PERM[row0 + yi]
    ab = _PERM[row0 + yi + 1]
    ba = _PERM[row1 + yi]
    bb = _PERM[row1 + yi + 1]

    bottom = lerp(_gradient_dot(aa, fx, fy), _gradient_dot(ba, fx - 1.0, fy), u)
    top = lerp(_gradient_dot(ab, fx, fy - 1.0), _gradient_dot(bb, fx - 1.0, fy - 1.0), u)
    value = clamp01(0.5 + 0.5 * lerp(bottom, top, v))

    return _as_result(value, x, y)


def tileable_noise(x, y, tiling: bool):
    """
    Funktionsweise: Noise mit optionaler Wrap-Mischung für nahtlose Kacheln
    Aufgabe: Bei tiling werden die vier Zell-Ecken bilinear über frac(x), frac(y) gemischt
    Parameter: x, y - Koordinaten (Skalar oder Array)
    Parameter: tiling (bool) - Wrap-Mischung ein/aus
    Returns: float oder numpy.ndarray in [0, 1]
    """
    if not tiling:
        return gradient_noise(x, y)

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    n00 = gradient_noise(x, y)
    n10 = gradient_noise(x + 1.0, y)
    n01 = gradient_noise(x, y + 1.0)
    n11 = gradient_noise(x + 1.0, y + 1.0)

    fx = frac(x)
    fy = frac(y)

    n0 = lerp(n00, n10, fx)
    n1 = lerp(n01, n11, fx)
    return _as_result(lerp(n0, n1, fy), x, y)


def fbm(x, y, base_scale: float, octaves: int, tiling: bool):
    """
    Funktionsweise: Fraktale Oktaven-Summe (fractional Brownian motion)
    Parameter: x, y - Koordinaten (Skalar oder Array)
    Parameter: base_scale - Startfrequenz
    Parameter: octaves - Anzahl Oktaven
    Parameter: tiling - an tileable_noise durchgereicht
    Returns: float oder numpy.ndarray, geclampt auf [0, 1]
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    amplitude = 0.5
    frequency = base_scale
    total = np.zeros(np.broadcast(x, y).shape)

    for _ in range(octaves):
        total = total + tileable_noise(x * frequency, y * frequency, tiling) * amplitude
        frequency *= 2.0
        amplitude *= 0.5

    return _as_result(clamp01(total), x, y)
