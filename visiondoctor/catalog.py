"""Equipment catalog: static lookup tables for sensors, objects and lenses.

The tables are read-only at runtime. Dimensions are in millimeters.

Main Functions:
    - get_sensor_spec(fmt): Sensor dimensions for a named format
    - get_object_dims(obj): Physical size of an inspection object
    - goals_for(obj): Ordered inspection goals registered for an object
    - default_goal(obj): First registered goal (used on object change)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from visiondoctor.types import ObjectType, SensorFormat


@dataclass(frozen=True)
class SensorSpec:
    """Active sensor area.

    Attributes:
        width_mm: Sensor width in millimeters
        height_mm: Sensor height in millimeters
    """

    width_mm: float
    height_mm: float


@dataclass(frozen=True)
class ObjectDims:
    """Bounding box of an inspection object in millimeters."""

    width_mm: float
    height_mm: float
    depth_mm: float


SENSOR_SPECS: Dict[SensorFormat, SensorSpec] = {
    SensorFormat.TYPE_1_3: SensorSpec(4.8, 3.6),
    SensorFormat.TYPE_1_2: SensorSpec(6.4, 4.8),
    SensorFormat.TYPE_1_1_8: SensorSpec(7.2, 5.4),
    SensorFormat.TYPE_2_3: SensorSpec(8.8, 6.6),
    SensorFormat.TYPE_1: SensorSpec(12.8, 9.6),
    SensorFormat.FULL_FRAME: SensorSpec(36.0, 24.0),
}

OBJECT_DIMS: Dict[ObjectType, ObjectDims] = {
    ObjectType.PCB: ObjectDims(80, 60, 5),
    ObjectType.GLASS_BOTTLE: ObjectDims(60, 180, 60),
    ObjectType.ALUMINUM_CAN: ObjectDims(66, 120, 66),
    ObjectType.MATTE_BLOCK: ObjectDims(40, 40, 40),
    ObjectType.BOTTLE_CAP: ObjectDims(28, 28, 6),
}

# Catalog lens grids; the state only accepts these values
STANDARD_FOCAL_LENGTHS: Tuple[float, ...] = (6, 8, 12, 16, 25, 35, 50, 75)
STANDARD_APERTURES: Tuple[float, ...] = (1.4, 2, 2.8, 4, 5.6, 8, 11, 16)

LIGHT_MULTIPLIERS: Tuple[int, ...] = (1, 10, 100, 1000)

# Goals are not shared across objects; the first entry is the default goal
OBJECT_GOALS: Dict[ObjectType, Tuple[str, ...]] = {
    ObjectType.PCB: (
        "Read Laser Etched Text (OCR)",
        "Check Solder Bridges (Shorts)",
        "Verify Component Presence",
    ),
    ObjectType.GLASS_BOTTLE: (
        "Inspect Fill Level",
        "Read Label Text",
    ),
    ObjectType.ALUMINUM_CAN: (
        "Read Bottom Dot Peen Code",
        "Inspect Pull Tab Integrity",
        "Detect Surface Scratches",
    ),
    ObjectType.MATTE_BLOCK: (
        "Measure Dimensions (Backlight)",
        "Check Surface Flatness",
    ),
    ObjectType.BOTTLE_CAP: (
        "Read Top Print Code",
        "Inspect Liner Seal Integrity",
    ),
}


def get_sensor_spec(fmt: SensorFormat | str) -> SensorSpec:
    """Get sensor dimensions by format.

    Args:
        fmt: SensorFormat member or its display string (e.g. '2/3"')

    Returns:
        SensorSpec instance

    Raises:
        ValueError: If the format is not in the catalog
    """
    try:
        return SENSOR_SPECS[SensorFormat(fmt)]
    except ValueError:
        available = [f.value for f in SENSOR_SPECS]
        raise ValueError(f"Unknown sensor format '{fmt}'. Available: {available}") from None


def get_object_dims(obj: ObjectType | str) -> ObjectDims:
    """Get physical dimensions of an inspection object.

    Raises:
        ValueError: If the object type is not in the catalog
    """
    try:
        return OBJECT_DIMS[ObjectType(obj)]
    except ValueError:
        available = [o.value for o in OBJECT_DIMS]
        raise ValueError(f"Unknown object type '{obj}'. Available: {available}") from None


def goals_for(obj: ObjectType | str) -> List[str]:
    """Ordered list of inspection goals registered for an object."""
    try:
        return list(OBJECT_GOALS[ObjectType(obj)])
    except ValueError:
        available = [o.value for o in OBJECT_GOALS]
        raise ValueError(f"Unknown object type '{obj}'. Available: {available}") from None


def default_goal(obj: ObjectType | str) -> str:
    """First registered goal for an object."""
    return goals_for(obj)[0]
