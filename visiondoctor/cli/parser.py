"""Argument parser for the Vision Doctor command-line interface."""

from __future__ import annotations

import argparse
from typing import Any, Dict, Tuple

from visiondoctor.types import (
    LensFilter,
    LightColor,
    LightConfig,
    LightFixture,
    LightPosition,
    ObjectOrientation,
    ObjectType,
    SensorFormat,
    ViewFocus,
)


# dest -> (flag, state field, type, help)
STATION_ARGUMENTS: Tuple[Tuple[str, str, Any, str], ...] = (
    ("--sensor", "sensor_format", str, f"Sensor format: {[m.value for m in SensorFormat]}"),
    ("--focal", "focal_length_mm", float, "Focal length [mm] (6, 8, 12, 16, 25, 35, 50, 75)"),
    ("--aperture", "aperture", float, "Aperture f-number (1.4 ... 16)"),
    ("--wd", "working_distance_mm", float, "Working distance [mm], 50-1000"),
    ("--angle", "camera_angle_deg", float, "Camera tilt [deg], 0-45"),
    ("--filter", "lens_filter", str, f"Lens filter: {[m.value for m in LensFilter]}"),
    ("--object", "object_type", str, f"Object: {[m.value for m in ObjectType]}"),
    ("--goal", "inspection_goal", str, "Inspection goal (must belong to the object)"),
    ("--orientation", "object_orientation", str,
     f"Orientation: {[m.value for m in ObjectOrientation]}"),
    ("--view", "view_focus", str, f"View focus: {[m.value for m in ViewFocus]}"),
    ("--light", "light_type", str, f"Fixture: {[m.value for m in LightFixture]}"),
    ("--position", "light_position", str, f"Mounting: {[m.value for m in LightPosition]}"),
    ("--config", "light_config", str, f"Fixture config: {[m.value for m in LightConfig]}"),
    ("--color", "light_color", str, f"Light colour: {[m.value for m in LightColor]}"),
    ("--intensity", "light_intensity", float, "Light intensity [%], 0-100"),
    ("--multiplier", "light_multiplier", int, "Intensity multiplier (1, 10, 100, 1000)"),
    ("--light-distance", "light_distance_mm", float, "Light distance [mm], 50-800"),
    ("--exposure", "exposure_time_us", float, "Exposure time [us], 100-20000"),
    ("--gain", "gain_db", float, "Gain [dB], 0-24"),
    ("--speed", "object_speed_mm_s", float, "Conveyor speed [mm/s], 0-2000"),
    ("--vibration", "vibration_level", int, "Vibration level, 0-10"),
)


def add_station_arguments(parser: argparse.ArgumentParser) -> None:
    """Add one optional flag per editable station field.

    Unset flags keep the session defaults.
    """
    group = parser.add_argument_group("station")
    for flag, dest, arg_type, help_text in STATION_ARGUMENTS:
        group.add_argument(flag, dest=dest, type=arg_type, default=None, help=help_text)


def station_update(args: argparse.Namespace) -> Dict[str, Any]:
    """Partial station update built from the flags that were given."""
    update = {}
    for _, dest, _, _ in STATION_ARGUMENTS:
        value = getattr(args, dest, None)
        if value is not None:
            update[dest] = value
    return update


def create_main_parser() -> argparse.ArgumentParser:
    """Create the top-level parser with its subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser for ``vision-doctor``
    """
    parser = argparse.ArgumentParser(
        prog="vision-doctor",
        description="Vision Doctor - optical metrics and lighting advisor for "
        "machine-vision inspection stations",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to the settings value",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="YAML settings file with an 'advisor:' section",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    metrics = subparsers.add_parser(
        "metrics", help="Compute optical metrics and the scenario check for a station"
    )
    add_station_arguments(metrics)

    presets = subparsers.add_parser("presets", help="List recommended presets")
    presets.add_argument("--object", dest="object_type", default=None, help="Filter by object")

    preset = subparsers.add_parser(
        "preset", help="Apply the recommended preset for an object and goal"
    )
    preset.add_argument("object_type", help="Object, e.g. 'PCB Board'")
    preset.add_argument("goal", help="Inspection goal, e.g. 'Check Solder Bridges (Shorts)'")

    subparsers.add_parser("fixtures", help="Show fixture positions and configurations")

    analyze = subparsers.add_parser("analyze", help="Ask the Vision Doctor AI for a critique")
    add_station_arguments(analyze)

    return parser
