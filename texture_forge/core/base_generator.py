"""
Path: texture_forge/core/base_generator.py

Funktionsweise: Universelle Basis-Klasse für alle Material-Generatoren
- Einheitliches Interface mit generate() Methode
- Zeilenband-Schleife (ROW_BAND Zeilen pro Schritt) für begrenzten Speicherbedarf
- Zufallsziehungen pro Band in Zeilen-Reihenfolge, identisch zur Pixel-für-Pixel-Schleife
- Progress-Callback-System für Konsumenten
- Generator-Daten pro Durchlauf (Dielen-Phasen, Zellzentren) werden in prepare() gezogen

Verwendung:
class MyGenerator(BaseGenerator):
    def prepare(self, random_source): ...
    def draws_per_pixel(self): ...
    def shade(self, u, v, draws): ...
"""

import logging

import numpy as np

from texture_forge.core.shading import clamp01


class BaseGenerator:
    """
    Funktionsweise: Universelle Basis-Klasse für alle Material-Generatoren
    Aufgabe: Band-Schleife, Koordinaten, Zufalls-Reihenfolge, Progress-Callbacks
    """

    ROW_BAND = 256

    def __init__(self, params):
        """
        Funktionsweise: Initialisiert Generator mit validiertem Parameter-Satz
        Parameter: params (GenerationParameters) - wird nie verändert
        """
        self.params = params
        self.material = params.material
        self.is_calculating = False
        self.progress_callback = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def generate(self, albedo: np.ndarray, height: np.ndarray, random_source, progress=None):
        """
        Funktionsweise: Füllt Albedo- und Height-Array für jedes Pixel
        Aufgabe: prepare() -> Band-Schleife über shade() -> Clamping auf [0, 1]
        Parameter: albedo - (size, size, 4) float Array, wird in-place beschrieben
        Parameter: height - (size, size) float Array, wird in-place beschrieben
        Parameter: random_source - SeededRandomSource des laufenden Durchlaufs
        Parameter: progress (function) - Callback (step_name, percent, message)
        """
        self.progress_callback = progress
        self.is_calculating = True
        generator_name = self.__class__.__name__.replace('Generator', '')
        self._update_progress("Initialization", 0, f"Starting {generator_name} generation")

        try:
            self.prepare(random_source)

            size = height.shape[0]
            coords = (np.arange(size, dtype=np.float64) + 0.5) / size
            draws_per_pixel = self.draws_per_pixel()

            for y0 in range(0, size, self.ROW_BAND):
                y1 = min(y0 + self.ROW_BAND, size)
                u, v = np.meshgrid(coords, coords[y0:y1])

                draws = None
                if draws_per_pixel > 0:
                    draws = random_source.uniform_block(u.shape + (draws_per_pixel,))

                rgb, band_height = self.shade(u, v, draws)
                albedo[y0:y1, :, :3] = clamp01(rgb)
                albedo[y0:y1, :, 3] = 1.0
                height[y0:y1] = clamp01(band_height)

                self._update_progress("Generation", int(100 * y1 / size),
                                      f"{generator_name}: rows {y0}-{y1 - 1} of {size}")

            self._update_progress("Complete", 100, f"{generator_name} generation complete")

        except Exception as e:
            self.logger.error(f"Generation failed: {str(e)}")
            self._update_progress("Error", 0, f"Generation failed: {str(e)}")
            raise

        finally:
            self.is_calculating = False

    def prepare(self, random_source):
        """
        Funktionsweise: Zieht Hilfstabellen pro Durchlauf vor der Pixel-Schleife
        Hinweis: Standard ist keine Tabelle, kann in Subklasse überschrieben werden
        """

    def draws_per_pixel(self) -> int:
        """
        Funktionsweise: Anzahl Zufallswerte, die shade() pro Pixel verbraucht
        Hinweis: Kann in Subklasse überschrieben werden
        """
        return 0

    def shade(self, u: np.ndarray, v: np.ndarray, draws):
        """
        Funktionsweise: Berechnet Farbe und Höhe für ein Koordinaten-Band
        Parameter: u, v - normierte Pixelmitten, gleiche Form (rows, width)
        Parameter: draws - (rows, width, draws_per_pixel) Zufallswerte oder None
        Returns: Tuple (rgb (rows, width, 3), height (rows, width))
        Hinweis: MUSS in Subklasse implementiert werden
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement shade")

    def _jitter_amount(self) -> float:
        return self.params.color_variation

    def _update_progress(self, step_name, progress_percent, detail_message):
        """
        Funktionsweise: Sendet Progress-Update an Callback-Funktion
        Fehler im Callback werden geloggt und brechen die Generierung nicht ab
        """
        if self.progress_callback:
            try:
                self.progress_callback(step_name, progress_percent, detail_message)
            except Exception as e:
                self.logger.warning(f"Progress callback failed: {e}")

    def get_generator_info(self):
        """
        Funktionsweise: Gibt Informationen über den Generator zurück
        Returns: dict - Generator-Metadaten
        """
        return {
            'name': self.__class__.__name__,
            'seed': self.params.seed,
            'size': self.params.size,
            'draws_per_pixel': self.draws_per_pixel(),
            'is_calculating': self.is_calculating,
            'has_progress_callback': self.progress_callback is not None
        }
