"""
Path: texture_forge/__init__.py

Funktionsweise: Prozedurale Textur-Pipeline für mittelalterliche Materialien
Aufgabe: Stellt Parameter-Erzeugung und Pipeline-Einstiegspunkt zur Verfügung
"""

from .config.parameters import (
    GenerationParameters,
    InvalidParameter,
    MaterialType,
    create_parameters,
    validate_generation_parameters
)
from .core.texture_pipeline import TexturePipeline, TextureSet, generate_textures

__version__ = "1.0.0"

__all__ = [
    'GenerationParameters',
    'InvalidParameter',
    'MaterialType',
    'create_parameters',
    'validate_generation_parameters',
    'TexturePipeline',
    'TextureSet',
    'generate_textures'
]
