"""
Path: texture_forge/config/parameters.py

Funktionsweise: Unveränderlicher, validierter Parameter-Satz für genau einen Generierungs-Durchlauf
- MaterialType als Varianten-Tag für die vier Materialien
- Ein Parameter-Bündel pro Material (Wood, Cobble, Cloth, Parchment)
- GenerationParameters mit globalen Feldern + Material-Bündel
- InvalidParameter als einzige Fehlerart bei ungültigen Eingaben
- create_parameters() mischt Defaults aus value_default.py mit Overrides

Hinweis: roughness wird validiert und mitgeführt, aber von keinem Generator gelesen.
Der Wert ist für Konsumenten gedacht (Höhen-Amplitude beim Material-Setup).
"""

import logging
import numbers
from dataclasses import dataclass, fields, is_dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from texture_forge.config.value_default import (
    CLOTH, COBBLE, GLOBAL, PARCHMENT, VALIDATION_RULES, WOOD,
    get_default_parameters, get_parameter_config
)
from texture_forge.utils.error_handler import parameter_handler

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]


class MaterialType(Enum):
    """Material-Varianten der Pipeline"""
    WOOD_PLANKS = "wood_planks"
    COBBLESTONE = "cobblestone"
    WOVEN_CLOTH = "woven_cloth"
    PARCHMENT = "parchment"


class InvalidParameter(ValueError):
    """
    Funktionsweise: Einzige Fehlerart der Pipeline für ungültige Eingaben
    Attribute: field (str), value (Any), expected_range (str)
    """

    def __init__(self, field: str, value: Any, expected_range: str):
        self.field = field
        self.value = value
        self.expected_range = expected_range
        super().__init__(f"Invalid value for {field}: {value!r} (expected {expected_range})")


def next_power_of_two(value: int) -> int:
    """
    Funktionsweise: Rundet eine gewünschte Texturgröße auf die nächste Zweierpotenz auf
    Aufgabe: Hilfsfunktion für Konsumenten, die Größen frei eingeben lassen
    Parameter: value (int) - gewünschte Größe
    Returns: int - Zweierpotenz >= value, mindestens GLOBAL.SIZEMIN
    """
    size = GLOBAL.SIZEMIN
    while size < value:
        size <<= 1
    return size


def _range_text(config: Dict[str, Any]) -> str:
    return f"[{config['min']}, {config['max']}]"


def _check_number(name: str, value: Any, config: Dict[str, Any]) -> List[InvalidParameter]:
    """
    Funktionsweise: Prüft einen numerischen Wert gegen min/max aus value_default.py
    Ganzzahlige Grenzen erzwingen ganzzahlige Werte. NaN fällt durch den Bereichstest.
    """
    integer = isinstance(config["min"], int)
    expected = ("integer in " if integer else "") + _range_text(config)

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return [InvalidParameter(name, value, expected)]
    if integer and not isinstance(value, numbers.Integral):
        return [InvalidParameter(name, value, expected)]
    if not (config["min"] <= value <= config["max"]):
        return [InvalidParameter(name, value, expected)]
    return []


def _check_color(name: str, value: Any, config: Dict[str, Any]) -> List[InvalidParameter]:
    expected = f"RGB triple in {_range_text(config)}"
    try:
        channels = tuple(value)
    except TypeError:
        return [InvalidParameter(name, value, expected)]

    if len(channels) != 3:
        return [InvalidParameter(name, value, expected)]
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, numbers.Real):
            return [InvalidParameter(name, value, expected)]
        if not (config["min"] <= channel <= config["max"]):
            return [InvalidParameter(name, value, expected)]
    return []


class _MaterialBundle:
    """Gemeinsame Validation für alle Material-Bündel"""

    group = None

    def collect_errors(self) -> List[InvalidParameter]:
        errors = []
        for bundle_field in fields(self):
            config = get_parameter_config(self.group, bundle_field.name)
            errors.extend(_check_number(bundle_field.name, getattr(self, bundle_field.name), config))
        return errors


@dataclass(frozen=True)
class WoodParameters(_MaterialBundle):
    """Holzdielen: Anzahl, Fugen, Jahresringe, Maserung, Astlöcher"""
    group = MaterialType.WOOD_PLANKS.value

    plank_count: int = WOOD.PLANK_COUNT["default"]
    plank_gap: float = WOOD.PLANK_GAP["default"]
    wood_ring_freq: float = WOOD.WOOD_RING_FREQ["default"]
    wood_warp: float = WOOD.WOOD_WARP["default"]
    wood_knot_chance: float = WOOD.WOOD_KNOT_CHANCE["default"]


@dataclass(frozen=True)
class CobbleParameters(_MaterialBundle):
    """Kopfsteinpflaster: Voronoi-Zellen, Mörtel, Steinform"""
    group = MaterialType.COBBLESTONE.value

    cobble_cells: int = COBBLE.COBBLE_CELLS["default"]
    mortar_width: float = COBBLE.MORTAR_WIDTH["default"]
    stone_roundness: float = COBBLE.STONE_ROUNDNESS["default"]
    stone_height_var: float = COBBLE.STONE_HEIGHT_VAR["default"]


@dataclass(frozen=True)
class ClothParameters(_MaterialBundle):
    """Gewebe: Fadendichte, Kontrast, Fadenstärke"""
    group = MaterialType.WOVEN_CLOTH.value

    weave_density: int = CLOTH.WEAVE_DENSITY["default"]
    weave_contrast: float = CLOTH.WEAVE_CONTRAST["default"]
    thread_thickness: float = CLOTH.THREAD_THICKNESS["default"]


@dataclass(frozen=True)
class ParchmentParameters(_MaterialBundle):
    """Pergament: Fasern, Wolkigkeit, Randabdunklung"""
    group = MaterialType.PARCHMENT.value

    parchment_fibers: float = PARCHMENT.PARCHMENT_FIBERS["default"]
    parchment_cloud: float = PARCHMENT.PARCHMENT_CLOUD["default"]
    edge_darken: float = PARCHMENT.EDGE_DARKEN["default"]


MaterialParameters = Union[WoodParameters, CobbleParameters, ClothParameters, ParchmentParameters]

MATERIAL_BUNDLES = {
    MaterialType.WOOD_PLANKS: WoodParameters,
    MaterialType.COBBLESTONE: CobbleParameters,
    MaterialType.WOVEN_CLOTH: ClothParameters,
    MaterialType.PARCHMENT: ParchmentParameters,
}

_GLOBAL_NUMBERS = ("color_variation", "grunge_amount", "roughness", "normal_intensity")
_GLOBAL_COLORS = ("color_a", "color_b", "color_c")


@dataclass(frozen=True)
class GenerationParameters:
    """
    Funktionsweise: Unveränderlicher Parameter-Satz für einen Pipeline-Aufruf
    Aufgabe: Varianten-Tag, globale Felder und Material-Bündel an einer Stelle
    Validation: validate() wirft InvalidParameter, collect_errors() sammelt alle Fehler
    """
    material_type: MaterialType
    material: MaterialParameters
    size: int = GLOBAL.SIZE["default"]
    seed: int = GLOBAL.SEED["default"]
    tiling: bool = GLOBAL.TILING["default"]
    color_a: Color = GLOBAL.COLOR_A["default"]
    color_b: Color = GLOBAL.COLOR_B["default"]
    color_c: Color = GLOBAL.COLOR_C["default"]
    color_variation: float = GLOBAL.COLOR_VARIATION["default"]
    grunge_amount: float = GLOBAL.GRUNGE_AMOUNT["default"]
    roughness: float = GLOBAL.ROUGHNESS["default"]
    normal_intensity: float = GLOBAL.NORMAL_INTENSITY["default"]

    def __post_init__(self):
        # Farben immer als Tuple, auch bei direkter Konstruktion mit Listen
        for name in _GLOBAL_COLORS:
            value = getattr(self, name)
            if isinstance(value, str):
                continue
            try:
                object.__setattr__(self, name, tuple(value))
            except TypeError:
                pass

    def collect_errors(self) -> List[InvalidParameter]:
        """
        Funktionsweise: Prüft alle Felder gegen ihre dokumentierten Bereiche
        Returns: List[InvalidParameter] - leer wenn alles gültig ist
        """
        errors = []

        if not isinstance(self.material_type, MaterialType):
            errors.append(InvalidParameter("material_type", self.material_type,
                                           f"one of {[m.value for m in MaterialType]}"))
        else:
            bundle_class = MATERIAL_BUNDLES[self.material_type]
            if not isinstance(self.material, bundle_class):
                errors.append(InvalidParameter("material", type(self.material).__name__,
                                               bundle_class.__name__))
            else:
                errors.extend(self.material.collect_errors())

        size_errors = _check_number("size", self.size, GLOBAL.SIZE)
        if not size_errors and self.size & (self.size - 1):
            size_errors = [InvalidParameter("size", self.size,
                                            f"power of two in {_range_text(GLOBAL.SIZE)}")]
        errors.extend(size_errors)

        if isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral):
            errors.append(InvalidParameter("seed", self.seed, "any integer"))

        if not isinstance(self.tiling, bool):
            errors.append(InvalidParameter("tiling", self.tiling, "bool"))

        for name in _GLOBAL_COLORS:
            errors.extend(_check_color(name, getattr(self, name), get_parameter_config("global", name)))

        for name in _GLOBAL_NUMBERS:
            errors.extend(_check_number(name, getattr(self, name), get_parameter_config("global", name)))

        return errors

    @parameter_handler
    def validate(self) -> "GenerationParameters":
        """
        Funktionsweise: Validiert den Parameter-Satz vor jeder Allokation
        Returns: self, damit Aufrufe verkettet werden können
        Raises: InvalidParameter beim ersten ungültigen Feld
        """
        errors = self.collect_errors()
        if errors:
            raise errors[0]
        return self

    def with_overrides(self, **overrides) -> "GenerationParameters":
        """
        Funktionsweise: Erzeugt neuen validierten Parameter-Satz mit geänderten Feldern
        Parameter: **overrides - globale Felder oder Felder des Material-Bündels
        Returns: GenerationParameters - neue Instanz, self bleibt unverändert
        """
        global_changes, bundle_changes = _split_overrides(self.material_type, overrides)
        material = replace(self.material, **bundle_changes) if bundle_changes else self.material
        return replace(self, material=material, **global_changes).validate()

    def describe(self) -> Dict[str, Any]:
        """Flaches dict aller Felder für Logging und Fehlerkontext"""
        description = {
            "material_type": getattr(self.material_type, "value", self.material_type),
            "size": self.size,
            "seed": self.seed,
            "tiling": self.tiling,
        }
        for name in _GLOBAL_COLORS + _GLOBAL_NUMBERS:
            description[name] = getattr(self, name)
        if is_dataclass(self.material):
            for bundle_field in fields(self.material):
                description[bundle_field.name] = getattr(self.material, bundle_field.name)
        return description


def _coerce_material_type(material_type: Union[str, MaterialType]) -> MaterialType:
    if isinstance(material_type, MaterialType):
        return material_type
    try:
        return MaterialType(material_type)
    except ValueError:
        raise InvalidParameter("material_type", material_type,
                               f"one of {[m.value for m in MaterialType]}") from None


def _split_overrides(material_type: MaterialType, overrides: Dict[str, Any]):
    """Verteilt Overrides auf globale Felder und Felder des Material-Bündels"""
    global_names = {f.name for f in fields(GenerationParameters)} - {"material_type", "material"}
    bundle_names = {f.name for f in fields(MATERIAL_BUNDLES[material_type])}

    global_changes = {}
    bundle_changes = {}
    for name, value in overrides.items():
        if name in global_names:
            global_changes[name] = value
        elif name in bundle_names:
            bundle_changes[name] = value
        else:
            raise InvalidParameter(name, value, f"known parameter of {material_type.value}")
    return global_changes, bundle_changes


def create_parameters(material_type: Union[str, MaterialType] = MaterialType.WOOD_PLANKS,
                      **overrides) -> GenerationParameters:
    """
    Funktionsweise: Baut validierten Parameter-Satz aus Defaults und Overrides
    Aufgabe: Einziger bequemer Einstiegspunkt für Konsumenten der Pipeline
    Parameter: material_type (str oder MaterialType)
    Parameter: **overrides - überschreiben Defaults aus value_default.py
    Returns: GenerationParameters
    Raises: InvalidParameter bei unbekannten Namen oder ungültigen Werten
    """
    material_type = _coerce_material_type(material_type)

    defaults = {**get_default_parameters("global"), **get_default_parameters(material_type.value)}
    final_params = {**defaults, **overrides}
    logger.debug(f"Using parameters: {final_params}")

    global_values, bundle_values = _split_overrides(material_type, final_params)
    material = MATERIAL_BUNDLES[material_type](**bundle_values)
    return GenerationParameters(material_type=material_type, material=material, **global_values).validate()


def validate_generation_parameters(params: GenerationParameters) -> Dict[str, Any]:
    """
    Funktionsweise: Standalone Parameter-Validation ohne Exception
    Parameter: params - zu prüfender Parameter-Satz
    Returns: dict - {"valid": bool, "errors": List[str], "warnings": List[str]}
    """
    errors = params.collect_errors()
    result = {
        "valid": not errors,
        "errors": [str(error) for error in errors],
        "warnings": []
    }
    if errors:
        return result

    rules = VALIDATION_RULES.PERFORMANCE_WARNINGS
    if params.size >= 1024:
        result["warnings"].append(f"Large texture ({rules['large_texture']}) may take a while")
    if isinstance(params.material, ClothParameters) and params.material.weave_density > params.size / 4:
        result["warnings"].append(f"Weave finer than the pixel grid ({rules['dense_weave']})")
    if isinstance(params.material, CobbleParameters) and params.material.cobble_cells > params.size / 8:
        result["warnings"].append(f"Cobble cells very small ({rules['dense_cobble']})")

    return result
