"""
Path: texture_forge/core/random_source.py

Funktionsweise: Deterministische Zufallsquelle für genau einen Generierungs-Durchlauf
- numpy PCG64 als Bit-Generator, Seed wird auf u64 abgebildet (seed mod 2**64)
- next_uniform() für einzelne Werte in [0, 1)
- uniform_block(shape) für ganze Zeilenbänder, identisch zu Einzelziehungen in C-Reihenfolge
- draw_count zählt alle gezogenen Werte (Reihenfolge-Kontrolle in Tests)
"""

from typing import Tuple, Union

import numpy as np

_U64_MASK = (1 << 64) - 1


class SeededRandomSource:
    """
    Funktionsweise: Kapselt einen numpy Generator mit fester Zieh-Reihenfolge
    Aufgabe: Ein Handle pro Pipeline-Aufruf, wird explizit durch alle Generatoren gereicht
    """

    def __init__(self, seed: int):
        self.seed = int(seed) & _U64_MASK
        self._generator = np.random.Generator(np.random.PCG64(self.seed))
        self.draw_count = 0

    def next_uniform(self) -> float:
        """Einzelner Wert in [0, 1)"""
        self.draw_count += 1
        return float(self._generator.random())

    def uniform_block(self, shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
        """
        Funktionsweise: Zieht ein Array gleichverteilter Werte in [0, 1)
        Aufgabe: Werte liegen in C-Reihenfolge vor, d.h. block.ravel()[k] ist die k-te Ziehung
        Parameter: shape - Form des Ergebnis-Arrays
        Returns: numpy.ndarray (float64)
        """
        block = self._generator.random(shape)
        self.draw_count += block.size
        return block


def seed_random_source(seed: int) -> SeededRandomSource:
    """Factory-Funktion, wird zu Beginn jedes Durchlaufs neu aufgerufen"""
    return SeededRandomSource(seed)
