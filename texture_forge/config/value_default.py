"""
Path: texture_forge/config/value_default.py

Funktionsweise: Zentrale Parameter-Defaults für alle Material-Generatoren
- Min/Max/Step/Default Werte für alle Generierungs-Parameter
- Organisiert nach Generator-Typen (GLOBAL, WOOD, COBBLE, CLOTH, PARCHMENT)
- Performance-Warnungen für teure Parameter-Kombinationen
- Ganzzahlige Parameter haben ganzzahlige Grenzen und step 1
"""


class GLOBAL:
    """Parameter für alle Materialien (Pipeline, Grunge, Normal-Map)"""
    SIZEMIN = 128
    SIZEMAX = 2048

    SIZE = {"min": SIZEMIN, "max": SIZEMAX, "default": 512, "step": 1, "suffix": "px"}
    SEED = {"default": 12345, "step": 1}
    TILING = {"default": True}

    # Farbverlauf dunkel / mittel / hell
    COLOR_A = {"min": 0.0, "max": 1.0, "default": (0.33, 0.26, 0.18)}
    COLOR_B = {"min": 0.0, "max": 1.0, "default": (0.55, 0.45, 0.32)}
    COLOR_C = {"min": 0.0, "max": 1.0, "default": (0.78, 0.68, 0.52)}

    COLOR_VARIATION = {"min": 0.0, "max": 0.6, "default": 0.15, "step": 0.01}
    GRUNGE_AMOUNT = {"min": 0.0, "max": 1.0, "default": 0.35, "step": 0.01}
    ROUGHNESS = {"min": 0.0, "max": 1.5, "default": 0.6, "step": 0.01}
    NORMAL_INTENSITY = {"min": 0.0, "max": 3.0, "default": 1.0, "step": 0.05}


class WOOD:
    """Parameter für core/wood_generator.py"""
    PLANK_COUNT = {"min": 2, "max": 20, "default": 6, "step": 1}
    PLANK_GAP = {"min": 0.0, "max": 0.03, "default": 0.008, "step": 0.001}
    WOOD_RING_FREQ = {"min": 0.5, "max": 12.0, "default": 5.0, "step": 0.1}
    WOOD_WARP = {"min": 0.0, "max": 0.3, "default": 0.08, "step": 0.01}
    WOOD_KNOT_CHANCE = {"min": 0.0, "max": 1.0, "default": 0.35, "step": 0.01}


class COBBLE:
    """Parameter für core/cobblestone_generator.py"""
    COBBLE_CELLS = {"min": 4, "max": 40, "default": 12, "step": 1}
    MORTAR_WIDTH = {"min": 0.005, "max": 0.08, "default": 0.035, "step": 0.001}
    STONE_ROUNDNESS = {"min": 0.0, "max": 1.0, "default": 0.75, "step": 0.01}
    STONE_HEIGHT_VAR = {"min": 0.0, "max": 1.0, "default": 0.35, "step": 0.01}


class CLOTH:
    """Parameter für core/cloth_generator.py"""
    WEAVE_DENSITY = {"min": 6, "max": 64, "default": 24, "step": 1, "suffix": "Fäden"}
    WEAVE_CONTRAST = {"min": 0.2, "max": 1.5, "default": 0.8, "step": 0.01}
    THREAD_THICKNESS = {"min": 0.2, "max": 1.0, "default": 0.6, "step": 0.01}


class PARCHMENT:
    """Parameter für core/parchment_generator.py"""
    PARCHMENT_FIBERS = {"min": 0.5, "max": 12.0, "default": 6.0, "step": 0.1}
    PARCHMENT_CLOUD = {"min": 0.5, "max": 6.0, "default": 2.5, "step": 0.1}
    EDGE_DARKEN = {"min": 0.0, "max": 1.0, "default": 0.4, "step": 0.01}


class VALIDATION_RULES:
    """
    Funktionsweise: Definiert Warnungen für Parameter-Kombinationen
    - Performance-Warnungen für große Texturen
    - Aliasing-Warnungen wenn Muster feiner als die Pixel-Auflösung werden
    """

    PERFORMANCE_WARNINGS = {
        "large_texture": "size >= 1024",
        "dense_weave": "weave_density > size / 4",
        "dense_cobble": "cobble_cells > size / 8",
    }


# Generator-Typ -> Parameter-Klasse
PARAMETER_GROUPS = {
    "global": GLOBAL,
    "wood_planks": WOOD,
    "cobblestone": COBBLE,
    "woven_cloth": CLOTH,
    "parchment": PARCHMENT,
}


def get_parameter_config(generator_type, parameter_name):
    """
    Funktionsweise: Holt Parameter-Konfiguration für spezifischen Generator und Parameter
    Aufgabe: Zentrale Zugriffsfunktion für Validation und Defaults
    Parameter: generator_type (str), parameter_name (str)
    Return: dict mit min/max/default/step/suffix
    """
    if generator_type not in PARAMETER_GROUPS:
        raise ValueError(f"Unknown generator type: {generator_type}")

    group = PARAMETER_GROUPS[generator_type]

    if not hasattr(group, parameter_name.upper()):
        raise ValueError(f"Unknown parameter {parameter_name} for {generator_type}")

    return getattr(group, parameter_name.upper())


def get_default_parameters(generator_type):
    """
    Funktionsweise: Sammelt alle Default-Werte einer Parameter-Gruppe
    Parameter: generator_type (str)
    Return: dict {parameter_name: default}
    """
    if generator_type not in PARAMETER_GROUPS:
        raise ValueError(f"Unknown generator type: {generator_type}")

    group = PARAMETER_GROUPS[generator_type]
    defaults = {}
    for name, config in vars(group).items():
        if isinstance(config, dict) and "default" in config:
            defaults[name.lower()] = config["default"]
    return defaults
