"""Recommended station presets for (object, inspection goal) pairs.

Each preset is a partial configuration: only the fields that matter for the
goal (fixture, position, colour, camera geometry, exposure, ROI). Presets are
applied through the same path as manual edits, so they still pass through
lighting reconciliation.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional, Tuple

from loguru import logger
from rich.console import Console
from rich.table import Table

from visiondoctor.catalog import goals_for
from visiondoctor.config.base import SimulationState
from visiondoctor.types import (
    LightColor,
    LightFixture,
    LightPosition,
    ObjectOrientation,
    ObjectType,
    SensorFormat,
    ViewFocus,
)


PresetKey = Tuple[ObjectType, str]


RECOMMENDED_PRESETS: Dict[PresetKey, Dict[str, Any]] = {
    # --- PCB (80 x 60) ---
    (ObjectType.PCB, "Read Laser Etched Text (OCR)"): {
        "light_type": LightFixture.BAR,
        "light_position": LightPosition.LOW_ANGLE,
        "light_color": LightColor.RED,
        "light_intensity": 90,
        "light_distance_mm": 150,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.MIDDLE,
        "working_distance_mm": 300,
        "focal_length_mm": 25,
        "aperture": 4,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 0,
        "exposure_time_us": 8000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.5, "roi_h": 0.3,
    },
    (ObjectType.PCB, "Check Solder Bridges (Shorts)"): {
        "light_type": LightFixture.COAXIAL,
        "light_position": LightPosition.CAMERA_AXIS,
        "light_color": LightColor.WHITE,
        "light_intensity": 80,
        "light_distance_mm": 100,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.MIDDLE,
        "working_distance_mm": 400,
        "focal_length_mm": 35,
        "aperture": 5.6,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 6,
        "exposure_time_us": 12000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.4, "roi_h": 0.4,
    },
    (ObjectType.PCB, "Verify Component Presence"): {
        "light_type": LightFixture.RING,
        "light_position": LightPosition.CAMERA_AXIS,
        "light_color": LightColor.WHITE,
        "light_intensity": 70,
        "light_distance_mm": 200,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 450,
        "focal_length_mm": 25,
        "aperture": 4,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 0,
        "exposure_time_us": 5000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.8, "roi_h": 0.6,
    },
    # --- Glass bottle (60 x 180) ---
    (ObjectType.GLASS_BOTTLE, "Inspect Fill Level"): {
        "light_type": LightFixture.PANEL,
        "light_position": LightPosition.BACKLIGHT,
        "light_color": LightColor.RED,
        "light_intensity": 100,
        "light_distance_mm": 300,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.TOP,
        "working_distance_mm": 600,
        "focal_length_mm": 16,
        "aperture": 8,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 18,
        "exposure_time_us": 5000,
        "roi_x": 0.5, "roi_y": 0.75, "roi_w": 0.6, "roi_h": 0.3,
    },
    (ObjectType.GLASS_BOTTLE, "Read Label Text"): {
        "light_type": LightFixture.BAR,
        "light_position": LightPosition.SIDE,
        "light_color": LightColor.WHITE,
        "light_intensity": 80,
        "light_distance_mm": 400,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.BOTTOM,
        "working_distance_mm": 450,
        "focal_length_mm": 16,
        "aperture": 4,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 0,
        "exposure_time_us": 8000,
        "roi_x": 0.5, "roi_y": 0.35, "roi_w": 0.7, "roi_h": 0.4,
    },
    # --- Aluminum can (66 x 120) ---
    (ObjectType.ALUMINUM_CAN, "Read Bottom Dot Peen Code"): {
        "light_type": LightFixture.RING,
        "light_position": LightPosition.LOW_ANGLE,
        "light_color": LightColor.RED,
        "light_intensity": 100,
        "light_distance_mm": 100,
        "object_orientation": ObjectOrientation.BOTTOM,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 250,
        "focal_length_mm": 16,
        "aperture": 4,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 0,
        "exposure_time_us": 8000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.6, "roi_h": 0.6,
    },
    (ObjectType.ALUMINUM_CAN, "Inspect Pull Tab Integrity"): {
        "light_type": LightFixture.RING,
        "light_position": LightPosition.CAMERA_AXIS,
        "light_color": LightColor.WHITE,
        "light_intensity": 60,
        "light_distance_mm": 200,
        "object_orientation": ObjectOrientation.TOP,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 300,
        "focal_length_mm": 25,
        "aperture": 5.6,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 6,
        "exposure_time_us": 8000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.5, "roi_h": 0.5,
    },
    # --- Matte block (40 x 40) ---
    (ObjectType.MATTE_BLOCK, "Measure Dimensions (Backlight)"): {
        "light_type": LightFixture.PANEL,
        "light_position": LightPosition.BACKLIGHT,
        "light_color": LightColor.BLUE,
        "light_intensity": 100,
        "light_distance_mm": 200,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 500,
        "focal_length_mm": 50,
        "aperture": 11,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 12,
        "exposure_time_us": 8000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.6, "roi_h": 0.6,
    },
    (ObjectType.MATTE_BLOCK, "Check Surface Flatness"): {
        "light_type": LightFixture.BAR,
        "light_position": LightPosition.SIDE,
        "light_color": LightColor.RED,
        "light_intensity": 100,
        "light_distance_mm": 150,
        "object_orientation": ObjectOrientation.FRONT,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 300,
        "focal_length_mm": 35,
        "aperture": 4,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 0,
        "exposure_time_us": 7000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.6, "roi_h": 0.6,
    },
    # --- Bottle cap (28 x 6) ---
    (ObjectType.BOTTLE_CAP, "Read Top Print Code"): {
        "light_type": LightFixture.SPOT,
        "light_position": LightPosition.TOP,
        "light_color": LightColor.WHITE,
        "light_intensity": 90,
        "light_distance_mm": 300,
        "object_orientation": ObjectOrientation.TOP,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 300,
        "focal_length_mm": 35,
        "aperture": 5.6,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 6,
        "exposure_time_us": 8000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.4, "roi_h": 0.4,
    },
    (ObjectType.BOTTLE_CAP, "Inspect Liner Seal Integrity"): {
        "light_type": LightFixture.RING,
        "light_position": LightPosition.CAMERA_AXIS,
        "light_color": LightColor.WHITE,
        "light_intensity": 70,
        "light_distance_mm": 150,
        "object_orientation": ObjectOrientation.BOTTOM,
        "view_focus": ViewFocus.WHOLE,
        "working_distance_mm": 200,
        "focal_length_mm": 25,
        "aperture": 4,
        "sensor_format": SensorFormat.TYPE_2_3,
        "gain_db": 0,
        "exposure_time_us": 5000,
        "roi_x": 0.5, "roi_y": 0.5, "roi_w": 0.7, "roi_h": 0.7,
    },
}


def resolve(object_type: ObjectType | str, goal: str) -> Optional[Dict[str, Any]]:
    """Look up the recommended partial configuration for an (object, goal) pair.

    Args:
        object_type: ObjectType member or its display string
        goal: Inspection goal, matched literally

    Returns:
        A fresh copy of the preset, or None if no preset is registered.
        None means "leave the configuration unchanged", never an error.

    Example:
        >>> preset = resolve(ObjectType.PCB, "Check Solder Bridges (Shorts)")
        >>> preset["light_type"]
        <LightFixture.COAXIAL: 'Coaxial'>
    """
    try:
        key = (ObjectType(object_type), goal)
    except ValueError:
        return None
    preset = RECOMMENDED_PRESETS.get(key)
    if preset is None:
        return None
    return copy.deepcopy(preset)


def reconcile_goal(
    previous: SimulationState, merged: SimulationState, update: Mapping[str, Any]
) -> Dict[str, Any]:
    """Goal correction needed after merging ``update`` over ``previous``.

    Goals are not shared across objects: a change of ``object_type`` always
    resets the goal to the new object's first goal, even when the same
    update supplies a goal. Callers that want a specific goal apply it in a
    second update. A goal that is not registered for the current object is
    snapped to the first goal as well.

    Returns:
        ``{"inspection_goal": goal}`` if a correction is needed, else ``{}``
    """
    goals = goals_for(merged.object_type)
    object_changed = (
        "object_type" in update and update["object_type"] != previous.object_type
    )

    if not object_changed and merged.inspection_goal in goals:
        return {}
    goal = goals[0]

    if goal == merged.inspection_goal:
        return {}
    logger.debug(f"Inspection goal reset to '{goal}' for {merged.object_type.value}")
    return {"inspection_goal": goal}


def list_presets(object_type: Optional[ObjectType | str] = None) -> List[PresetKey]:
    """List available (object, goal) preset keys.

    Args:
        object_type: Restrict to one object. If None, returns all presets

    Returns:
        Keys in catalog goal order
    """
    keys = list(RECOMMENDED_PRESETS)
    if object_type is None:
        return keys
    obj = ObjectType(object_type)
    return [key for key in keys if key[0] is obj]


def get_preset_description(object_type: ObjectType | str, goal: str) -> str:
    """One-line summary of a preset, or empty string if not found."""
    preset = resolve(object_type, goal)
    if preset is None:
        return ""
    return (
        f"{preset['light_color'].value} {preset['light_type'].value} @ "
        f"{preset['light_position'].value}, {preset['focal_length_mm']}mm f/"
        f"{preset['aperture']} @ {preset['working_distance_mm']}mm"
    )


def print_all_presets(
    console: Optional[Console] = None, object_type: Optional[ObjectType | str] = None
) -> None:
    """Print presets with descriptions as a table, optionally for one object."""
    console = console or Console()
    keys = list_presets(object_type)

    table = Table(title="Recommended Presets", show_header=True)
    table.add_column("Object", style="cyan")
    table.add_column("Goal", style="yellow")
    table.add_column("Setup", style="green")

    for obj, goal in keys:
        table.add_row(obj.value, goal, get_preset_description(obj, goal))

    console.print(table)
    console.print(f"[dim]Total: {len(keys)} presets[/dim]")
