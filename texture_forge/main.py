#!/usr/bin/env python3
"""
Path: texture_forge/main.py

Texture Forge Command Line Consumer
===================================

Runs exactly one generation for the selected material and logs per-buffer
statistics. Parameters start from the defaults in config/value_default.py and
are overridden with --size, --seed, --no-tiling and repeated --set name=value.

The command never writes files; encoding the buffers is left to consumers.

Example:
    texture-forge --material cobblestone --size 256 --seed 7 --set mortar_width=0.05
"""

import argparse
import logging
import sys

import colorlog

from texture_forge.config.parameters import InvalidParameter, MaterialType, create_parameters
from texture_forge.config.value_default import get_default_parameters
from texture_forge.core.texture_pipeline import TexturePipeline

logger = logging.getLogger("texture_forge")


def setup_logging(level: str = "INFO"):
    """
    Configure application-wide logging with colored output
    ======================================================

    Replaces all root handlers with a single colorlog StreamHandler so repeated
    calls (tests, embedding) never duplicate output.
    """
    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        '%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s: %(message)s',
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))


def parse_value(text: str):
    """
    Converts a --set value: int, float, true/false or a comma separated colour
    """
    lowered = text.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if "," in text:
        return tuple(float(part) for part in text.split(","))
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Cannot parse value '{text}'") from None


def parse_override(text: str):
    """argparse type for --set name=value"""
    name, separator, value = text.partition("=")
    if not separator or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected name=value, got '{text}'")
    return name.strip(), parse_value(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texture-forge",
        description="Generate albedo, height and normal buffers for a medieval material"
    )
    parser.add_argument("--material", default=MaterialType.WOOD_PLANKS.value,
                        choices=[material.value for material in MaterialType],
                        help="material variant to generate")
    parser.add_argument("--size", type=int, help="edge length, power of two in [128, 2048]")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--no-tiling", action="store_true", help="disable seamless wraparound")
    parser.add_argument("--set", dest="overrides", action="append", default=[], type=parse_override,
                        metavar="NAME=VALUE", help="override any parameter (repeatable)")
    parser.add_argument("--show-defaults", action="store_true",
                        help="log the default parameters of the material and exit")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def collect_overrides(args: argparse.Namespace) -> dict:
    """Merges the dedicated flags and --set pairs; --set wins on conflicts"""
    overrides = {}
    if args.size is not None:
        overrides["size"] = args.size
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.no_tiling:
        overrides["tiling"] = False
    overrides.update(dict(args.overrides))
    return overrides


def _log_progress(step_name, progress_percent, detail_message):
    logger.debug(f"[{progress_percent:3d}%] {step_name}: {detail_message}")


def main(argv=None) -> int:
    """
    Application entry point
    =======================

    Returns 0 on success, 2 for invalid parameters and 1 for any other failure.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.show_defaults:
        defaults = {**get_default_parameters("global"), **get_default_parameters(args.material)}
        for name, value in defaults.items():
            logger.info(f"{name} = {value}")
        return 0

    try:
        params = create_parameters(args.material, **collect_overrides(args))
    except InvalidParameter as e:
        logger.error(str(e))
        return 2

    pipeline = TexturePipeline()
    estimate = pipeline.estimate_memory_usage(params.size)
    logger.info(f"Estimated peak memory: {estimate['peak_mb']} MB")

    try:
        texture_set = pipeline.generate(params, progress=_log_progress)
    except Exception as e:
        logger.critical(f"Generation failed: {e}")
        return 1

    for name, buffer in texture_set._asdict().items():
        stats = buffer.statistics()
        logger.info(
            f"{name:<7} {stats['size']}x{stats['size']} "
            f"min={tuple(round(v, 3) for v in stats['min'].values())} "
            f"max={tuple(round(v, 3) for v in stats['max'].values())} "
            f"mean={tuple(round(v, 3) for v in stats['mean'].values())} "
            f"nan={stats['nan_count']}"
        )
    return 0


if __name__ == '__main__':
    sys.exit(main())
