"""
Path: texture_forge/core/texture_pipeline.py

Funktionsweise: Orchestrator für genau einen Generierungs-Durchlauf
- Validierung -> Zufallsquelle seeden -> Buffer allokieren -> Generator -> Grunge -> Normal-Map
- Registry MaterialType -> Generator-Klasse, erweiterbar über register_generator()
- Rückgabe als TextureSet(albedo, height, normal) aus drei RasterBuffern
- Progress-Callback (step_name, percent, message) über den gesamten Durchlauf

Parameter Input:
- params: GenerationParameters (wird nie verändert)
- progress: optionale Callback-Funktion

Output:
- TextureSet mit drei unveränderlichen RasterBuffern gleicher Größe, Kanäle in [0, 1]

Der Orchestrator berührt kein Dateisystem und hält keinen Zustand zwischen Aufrufen.
"""

import functools
import logging
import time
from typing import Any, Callable, Dict, NamedTuple, Optional, Type

import numpy as np

from texture_forge.config.parameters import GenerationParameters, MaterialType, validate_generation_parameters
from texture_forge.core.base_generator import BaseGenerator
from texture_forge.core.cloth_generator import WovenClothGenerator
from texture_forge.core.cobblestone_generator import CobblestoneGenerator
from texture_forge.core.grunge_overlay import GrungeOverlay
from texture_forge.core.normal_deriver import NormalDeriver
from texture_forge.core.parchment_generator import ParchmentGenerator
from texture_forge.core.random_source import seed_random_source
from texture_forge.core.raster import RasterBuffer
from texture_forge.core.wood_generator import WoodPlankGenerator
from texture_forge.utils.error_handler import core_generation_handler, memory_critical_handler

DEFAULT_GENERATORS = {
    MaterialType.WOOD_PLANKS: WoodPlankGenerator,
    MaterialType.COBBLESTONE: CobblestoneGenerator,
    MaterialType.WOVEN_CLOTH: WovenClothGenerator,
    MaterialType.PARCHMENT: ParchmentGenerator,
}

# Anteil des Generators am Gesamt-Fortschritt
_GENERATOR_PROGRESS_START = 10
_GENERATOR_PROGRESS_SPAN = 70


class TextureSet(NamedTuple):
    """Ergebnis eines Durchlaufs: drei gleich große RasterBuffer"""
    albedo: RasterBuffer
    height: RasterBuffer
    normal: RasterBuffer


class TexturePipeline:
    """
    Funktionsweise: Führt die vier Pässe strikt nacheinander aus
    Aufgabe: Generator-Auswahl, Buffer-Lebenszyklus, Logging und Progress
    """

    def __init__(self):
        self.generators: Dict[MaterialType, Type[BaseGenerator]] = dict(DEFAULT_GENERATORS)
        self.logger = logging.getLogger(self.__class__.__name__)

    def register_generator(self, material_type: MaterialType, generator_class: Type[BaseGenerator]):
        """
        Funktionsweise: Registriert oder ersetzt den Generator für einen Material-Typ
        Parameter: material_type - MaterialType
        Parameter: generator_class - Subklasse von BaseGenerator
        """
        if not isinstance(material_type, MaterialType):
            raise TypeError(f"material_type must be a MaterialType, got {type(material_type).__name__}")
        if not (isinstance(generator_class, type) and issubclass(generator_class, BaseGenerator)):
            raise TypeError(f"{generator_class!r} is not a BaseGenerator subclass")

        previous = self.generators.get(material_type)
        self.generators[material_type] = generator_class
        if previous is not None and previous is not generator_class:
            self.logger.info(f"Generator for {material_type.value} replaced: "
                             f"{previous.__name__} -> {generator_class.__name__}")

    def get_generator_class(self, material_type: MaterialType) -> Type[BaseGenerator]:
        try:
            return self.generators[material_type]
        except KeyError:
            raise KeyError(f"No generator registered for {material_type}") from None

    @core_generation_handler("pipeline")
    def generate(self, params: GenerationParameters, progress: Optional[Callable] = None) -> TextureSet:
        """
        Funktionsweise: Kompletter Durchlauf für einen Parameter-Satz
        Aufgabe: Validierung vor jeder Allokation, danach Generator -> Grunge -> Normal
        Parameter: params - GenerationParameters
        Parameter: progress - optionale Callback-Funktion (step_name, percent, message)
        Returns: TextureSet(albedo, height, normal)
        Raises: InvalidParameter bevor irgendein Buffer allokiert wird
        """
        start_time = time.time()

        self._update_progress(progress, "Validation", 0, "Validating parameters")
        params.validate()
        for warning in validate_generation_parameters(params)["warnings"]:
            self.logger.warning(warning)

        generator_class = self.get_generator_class(params.material_type)
        self.logger.info(f"Generating {params.material_type.value} "
                         f"(size={params.size}, seed={params.seed}, tiling={params.tiling})")

        random_source = seed_random_source(params.seed)

        self._update_progress(progress, "Allocation", 5, f"Allocating {params.size}x{params.size} buffers")
        albedo, height = self._allocate_buffers(params.size)

        generator = generator_class(params)
        generator_progress = functools.partial(self._generator_progress, progress)
        generator.generate(albedo, height, random_source, progress=generator_progress)
        self.logger.debug(f"{generator_class.__name__} consumed {random_source.draw_count} random values")

        self._update_progress(progress, "Grunge", 80, "Applying grunge overlay")
        GrungeOverlay(params.grunge_amount, params.tiling).apply(albedo, height)
        np.clip(albedo, 0.0, 1.0, out=albedo)

        self._update_progress(progress, "Normal", 90, "Deriving normal map")
        normal = NormalDeriver(params.normal_intensity, params.tiling).derive(height)

        texture_set = TextureSet(
            albedo=RasterBuffer.from_rgba(albedo),
            height=RasterBuffer.from_scalar(height),
            normal=RasterBuffer.from_rgba(normal),
        )

        elapsed = time.time() - start_time
        self.logger.info(f"{params.material_type.value} generated in {elapsed:.2f}s")
        self._update_progress(progress, "Complete", 100, f"Generation complete ({elapsed:.2f}s)")
        return texture_set

    @memory_critical_handler("buffer_allocation")
    def _allocate_buffers(self, size: int):
        """
        Funktionsweise: Frische Arbeits-Buffer für einen Durchlauf
        Returns: Tuple (albedo (size, size, 4), height (size, size)) als float64
        """
        albedo = np.zeros((size, size, 4), dtype=np.float64)
        albedo[..., 3] = 1.0
        height = np.zeros((size, size), dtype=np.float64)
        return albedo, height

    def estimate_memory_usage(self, size: int) -> Dict[str, Any]:
        """
        Funktionsweise: Schätzt Speicherbedarf eines Durchlaufs
        Parameter: size - Kantenlänge
        Returns: dict mit Bytes pro Ergebnis-Buffer, Arbeits-Buffern und Spitze
        """
        pixels = size * size
        output_buffer = pixels * 4 * np.dtype(np.float32).itemsize
        working = pixels * (4 + 1) * np.dtype(np.float64).itemsize
        # Normal-Ableitung: dx, dy, Vektor (3) und kodiertes Ergebnis (4)
        normal_working = pixels * (2 + 3 + 4) * np.dtype(np.float64).itemsize
        peak = working + normal_working + 3 * output_buffer

        return {
            'size': size,
            'bytes_per_output_buffer': output_buffer,
            'output_bytes': 3 * output_buffer,
            'working_bytes': working + normal_working,
            'peak_bytes': peak,
            'peak_mb': round(peak / (1024 * 1024), 1),
        }

    def _generator_progress(self, progress, step_name, progress_percent, detail_message):
        overall = _GENERATOR_PROGRESS_START + int(progress_percent * _GENERATOR_PROGRESS_SPAN / 100)
        self._update_progress(progress, step_name, overall, detail_message)

    def _update_progress(self, progress, step_name, progress_percent, detail_message):
        if progress:
            try:
                progress(step_name, progress_percent, detail_message)
            except Exception as e:
                self.logger.warning(f"Progress callback failed: {e}")


def generate_textures(params: GenerationParameters, progress: Optional[Callable] = None) -> TextureSet:
    """Convenience-Funktion: ein Durchlauf mit frischer TexturePipeline"""
    return TexturePipeline().generate(params, progress)
