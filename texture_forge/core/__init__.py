"""
Path: texture_forge/core/__init__.py

Funktionsweise: Core-Module Initialisierung für Texture Forge
Aufgabe: Stellt Generatoren, Post-Passes und Pipeline zur Verfügung
Imports: Alle Haupt-Klassen aus den einzelnen Core-Modulen
"""

# Primitive
from .random_source import SeededRandomSource, seed_random_source
from .noise import gradient_noise, tileable_noise, fbm
from .shading import tri_blend, jitter_color
from .raster import RasterBuffer

# Material Generation
from .base_generator import BaseGenerator
from .wood_generator import WoodPlankGenerator
from .cobblestone_generator import CobblestoneGenerator
from .cloth_generator import WovenClothGenerator
from .parchment_generator import ParchmentGenerator

# Post-Passes
from .grunge_overlay import GrungeOverlay, apply_grunge
from .normal_deriver import NormalDeriver, derive_normal_map

# Orchestrierung
from .texture_pipeline import TexturePipeline, TextureSet, generate_textures

__all__ = [
    # Primitive
    'SeededRandomSource',
    'seed_random_source',
    'gradient_noise',
    'tileable_noise',
    'fbm',
    'tri_blend',
    'jitter_color',
    'RasterBuffer',

    # Generatoren
    'BaseGenerator',
    'WoodPlankGenerator',
    'CobblestoneGenerator',
    'WovenClothGenerator',
    'ParchmentGenerator',

    # Post-Passes
    'GrungeOverlay',
    'apply_grunge',
    'NormalDeriver',
    'derive_normal_map',

    # Pipeline
    'TexturePipeline',
    'TextureSet',
    'generate_textures'
]


def get_material_generators():
    """
    Funktionsweise: Gibt die Standard-Zuordnung Material -> Generator-Klasse zurück
    Return: dict mit MaterialType-Werten als Schlüssel
    """
    from .texture_pipeline import DEFAULT_GENERATORS
    return {material_type.value: generator for material_type, generator in DEFAULT_GENERATORS.items()}
