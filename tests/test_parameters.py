"""Tests for parameter defaults, validation and overrides"""
import dataclasses
import math

import pytest

from texture_forge.config.parameters import (
    CobbleParameters,
    GenerationParameters,
    InvalidParameter,
    MaterialType,
    WoodParameters,
    create_parameters,
    next_power_of_two,
    validate_generation_parameters,
)
from texture_forge.config.value_default import GLOBAL, get_default_parameters, get_parameter_config


def test_defaults_follow_value_default():
    params = create_parameters()
    assert params.material_type is MaterialType.WOOD_PLANKS
    assert params.size == GLOBAL.SIZE["default"]
    assert params.seed == GLOBAL.SEED["default"]
    assert params.tiling is True
    assert params.material == WoodParameters()
    assert params.material.plank_count == 6


@pytest.mark.parametrize("material_type", list(MaterialType))
def test_every_material_has_valid_defaults(material_type):
    params = create_parameters(material_type)
    assert params.collect_errors() == []
    assert validate_generation_parameters(params)["valid"]


def test_material_type_accepts_string():
    params = create_parameters("cobblestone", mortar_width=0.05)
    assert params.material_type is MaterialType.COBBLESTONE
    assert isinstance(params.material, CobbleParameters)
    assert params.material.mortar_width == 0.05


def test_unknown_material_type():
    with pytest.raises(InvalidParameter) as exc_info:
        create_parameters("marble")
    assert exc_info.value.field == "material_type"


def test_override_of_other_material_field_is_rejected():
    with pytest.raises(InvalidParameter) as exc_info:
        create_parameters(MaterialType.COBBLESTONE, plank_count=4)
    assert exc_info.value.field == "plank_count"


@pytest.mark.parametrize("field,value", [
    ("size", 300),
    ("size", 64),
    ("size", 4096),
    ("color_variation", 0.61),
    ("grunge_amount", -0.1),
    ("roughness", 1.6),
    ("normal_intensity", 3.5),
    ("color_variation", math.nan),
    ("normal_intensity", True),
    ("seed", 1.5),
    ("tiling", 1),
    ("plank_count", 21),
    ("plank_count", 2.5),
    ("plank_gap", 0.031),
    ("wood_knot_chance", 1.01),
])
def test_out_of_range_values_raise(field, value):
    with pytest.raises(InvalidParameter) as exc_info:
        create_parameters(MaterialType.WOOD_PLANKS, **{field: value})
    error = exc_info.value
    assert error.field == field
    assert error.expected_range
    assert isinstance(error, ValueError)


@pytest.mark.parametrize("color", [(0.1, 0.2), (0.1, 0.2, 1.2), "red", 0.5])
def test_invalid_colors_raise(color):
    with pytest.raises(InvalidParameter) as exc_info:
        create_parameters(color_a=color)
    assert exc_info.value.field == "color_a"


@pytest.mark.parametrize("material_type,overrides", [
    (MaterialType.COBBLESTONE, {"cobble_cells": 3}),
    (MaterialType.COBBLESTONE, {"mortar_width": 0.0}),
    (MaterialType.WOVEN_CLOTH, {"weave_density": 65}),
    (MaterialType.WOVEN_CLOTH, {"weave_contrast": 0.1}),
    (MaterialType.PARCHMENT, {"parchment_cloud": 6.5}),
    (MaterialType.PARCHMENT, {"edge_darken": -0.01}),
])
def test_material_ranges(material_type, overrides):
    with pytest.raises(InvalidParameter) as exc_info:
        create_parameters(material_type, **overrides)
    assert exc_info.value.field == next(iter(overrides))


def test_range_bounds_are_inclusive():
    params = create_parameters(MaterialType.WOVEN_CLOTH, size=2048, weave_density=64, weave_contrast=1.5,
                               color_variation=0.6, roughness=1.5, normal_intensity=0.0)
    assert params.size == 2048
    assert params.material.weave_contrast == 1.5


def test_any_integer_seed_is_valid():
    assert create_parameters(seed=-12).seed == -12
    assert create_parameters(seed=2 ** 70).seed == 2 ** 70


def test_colors_are_stored_as_tuples():
    params = create_parameters(color_b=[0.2, 0.3, 0.4])
    assert params.color_b == (0.2, 0.3, 0.4)


def test_direct_construction_copies_colors():
    color = [0.2, 0.2, 0.2]
    params = GenerationParameters(MaterialType.WOOD_PLANKS, WoodParameters(), color_a=color).validate()
    color[0] = 5.0

    assert params.color_a == (0.2, 0.2, 0.2)
    assert params.collect_errors() == []
    assert hash(params) == hash(dataclasses.replace(params))


def test_parameters_are_immutable():
    params = create_parameters()
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.size = 1024
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.material.plank_count = 3


def test_with_overrides_returns_new_validated_instance():
    params = create_parameters(MaterialType.PARCHMENT)
    changed = params.with_overrides(seed=9, edge_darken=0.9)
    assert changed.seed == 9
    assert changed.material.edge_darken == 0.9
    assert params.seed == GLOBAL.SEED["default"]
    with pytest.raises(InvalidParameter):
        params.with_overrides(edge_darken=2.0)


def test_validate_collects_without_raising():
    params = dataclasses.replace(create_parameters(), size=100, grunge_amount=5.0)
    result = validate_generation_parameters(params)
    assert not result["valid"]
    assert len(result["errors"]) == 2
    assert any("size" in error for error in result["errors"])


def test_validate_warns_about_expensive_combinations():
    assert validate_generation_parameters(create_parameters(size=1024))["warnings"]
    dense_cloth = create_parameters(MaterialType.WOVEN_CLOTH, size=128, weave_density=64)
    assert validate_generation_parameters(dense_cloth)["warnings"]
    dense_cobble = create_parameters(MaterialType.COBBLESTONE, size=128, cobble_cells=40)
    assert validate_generation_parameters(dense_cobble)["warnings"]
    assert validate_generation_parameters(create_parameters(size=256))["warnings"] == []


def test_mismatched_bundle_is_invalid():
    params = GenerationParameters(material_type=MaterialType.PARCHMENT, material=WoodParameters())
    with pytest.raises(InvalidParameter) as exc_info:
        params.validate()
    assert exc_info.value.field == "material"


def test_describe_flattens_all_fields():
    description = create_parameters(MaterialType.COBBLESTONE).describe()
    assert description["material_type"] == "cobblestone"
    assert description["cobble_cells"] == 12
    assert "roughness" in description


@pytest.mark.parametrize("value,expected", [(1, 128), (128, 128), (129, 256), (700, 1024), (2048, 2048)])
def test_next_power_of_two(value, expected):
    assert next_power_of_two(value) == expected


def test_value_default_lookup():
    assert get_parameter_config("cobblestone", "mortar_width")["max"] == 0.08
    assert get_default_parameters("woven_cloth") == {
        "weave_density": 24, "weave_contrast": 0.8, "thread_thickness": 0.6
    }
    with pytest.raises(ValueError):
        get_parameter_config("marble", "size")
