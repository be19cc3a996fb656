"""Simulation state of the virtual inspection station."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Type

from visiondoctor.catalog import (
    LIGHT_MULTIPLIERS,
    STANDARD_APERTURES,
    STANDARD_FOCAL_LENGTHS,
    default_goal,
    goals_for,
)
from visiondoctor.config.validation import ConfigValidator, ValidationError
from visiondoctor.types import (
    BackgroundPattern,
    GlobalEnv,
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


_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class SimulationState:
    """Complete configuration of the inspection station.

    The state is immutable: every edit produces a new instance through
    ``dataclasses.replace``. Invariants on lighting combinations are enforced
    by ``visiondoctor.core.lighting.reconcile``, ranges by ``validate()``.
    """

    # === Optics ===
    sensor_format: SensorFormat = SensorFormat.TYPE_2_3
    focal_length_mm: float = 16
    """Focal length [mm], one of STANDARD_FOCAL_LENGTHS"""

    aperture: float = 2.8
    """Aperture f-number, one of STANDARD_APERTURES"""

    working_distance_mm: float = 300
    """Lens to object plane distance [mm], 50-1000"""

    camera_angle_deg: float = 0
    """Camera tilt off the object-plane normal [deg], 0-45"""

    lens_filter: LensFilter = LensFilter.NONE

    # === Object & goal ===
    object_type: ObjectType = ObjectType.PCB
    inspection_goal: str = "Read Laser Etched Text (OCR)"
    view_focus: ViewFocus = ViewFocus.MIDDLE
    object_orientation: ObjectOrientation = ObjectOrientation.FRONT

    # Six-axis pose, only meaningful with ObjectOrientation.CUSTOM
    object_shift_x: float = 0.0
    object_shift_y: float = 0.0
    object_shift_z: float = 0.0
    object_rot_x: float = 0.0
    object_rot_y: float = 0.0
    object_rot_z: float = 0.0

    # === Lighting ===
    light_type: LightFixture = LightFixture.RING
    light_position: LightPosition = LightPosition.CAMERA_AXIS
    light_config: LightConfig = LightConfig.SINGLE
    light_color: LightColor = LightColor.WHITE
    light_intensity: float = 60
    """Fixture intensity [%], 0-100"""

    light_multiplier: int = 100
    """Intensity multiplier, one of 1, 10, 100, 1000"""

    light_distance_mm: float = 200
    """Fixture to object distance [mm], 50-800"""

    # === Camera settings ===
    exposure_time_us: float = 5000
    """Exposure time [µs], 100-20000"""

    gain_db: float = 0
    """Sensor gain [dB], 0-24"""

    # === Environment ===
    global_env: GlobalEnv = GlobalEnv.STUDIO
    global_intensity: float = 0
    """Ambient light [%], 0-100. Ignored in Studio"""

    background_color: str = "#050505"
    background_pattern: BackgroundPattern = BackgroundPattern.NONE

    # === Motion ===
    object_speed_mm_s: float = 0
    """Conveyor speed [mm/s], 0-2000"""

    vibration_level: int = 0
    """Vibration level, integer 0-10"""

    # === Region of interest (normalized to the FOV) ===
    roi_x: float = 0.5
    roi_y: float = 0.5
    roi_w: float = 0.6
    roi_h: float = 0.6

    @classmethod
    def default(cls) -> SimulationState:
        """Documented session default (2/3" sensor, PCB, ring light)."""
        return cls(inspection_goal=default_goal(ObjectType.PCB))

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @property
    def has_ambient_light(self) -> bool:
        """True if global intensity and background settings take effect."""
        return self.global_env is not GlobalEnv.STUDIO

    def validate(self) -> None:
        """Validate ranges, catalog grids and enum membership.

        Raises:
            ValidationError: If any field is out of its documented domain
        """
        v = ConfigValidator
        for name, enum_cls in ENUM_FIELDS.items():
            v.validate_enum(getattr(self, name), name, enum_cls)

        v.validate_grid(
            self.focal_length_mm, "focal_length_mm", STANDARD_FOCAL_LENGTHS
        )
        v.validate_grid(self.aperture, "aperture", STANDARD_APERTURES)
        v.validate_range(self.working_distance_mm, "working_distance_mm", 50, 1000)
        v.validate_range(self.camera_angle_deg, "camera_angle_deg", 0, 45)

        goals = goals_for(self.object_type)
        if self.inspection_goal not in goals:
            raise ValidationError(
                v.format_enum_error("inspection_goal", self.inspection_goal, goals)
            )

        for name in (
            "object_shift_x",
            "object_shift_y",
            "object_shift_z",
            "object_rot_x",
            "object_rot_y",
            "object_rot_z",
        ):
            v.validate_range(getattr(self, name), name, -1000, 1000)

        v.validate_range(self.light_intensity, "light_intensity", 0, 100)
        v.validate_grid(self.light_multiplier, "light_multiplier", LIGHT_MULTIPLIERS)
        v.validate_range(self.light_distance_mm, "light_distance_mm", 50, 800)
        v.validate_range(
            self.exposure_time_us, "exposure_time_us", 100, 20000, "1000-10000"
        )
        v.validate_range(self.gain_db, "gain_db", 0, 24)
        v.validate_range(self.global_intensity, "global_intensity", 0, 100)

        if not isinstance(self.background_color, str) or not _HEX_COLOR.match(
            self.background_color
        ):
            raise ValidationError(
                v.format_range_error(
                    "background_color", self.background_color, "a '#rrggbb' hex string"
                )
            )

        v.validate_range(self.object_speed_mm_s, "object_speed_mm_s", 0, 2000)
        v.validate_integer(self.vibration_level, "vibration_level", 0, 10)

        for name in ("roi_x", "roi_y", "roi_w", "roi_h"):
            v.validate_range(getattr(self, name), name, 0.0, 1.0)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary with enum members replaced by their values."""
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(self).items()
        }


ENUM_FIELDS: Dict[str, Type[Enum]] = {
    "sensor_format": SensorFormat,
    "lens_filter": LensFilter,
    "object_type": ObjectType,
    "view_focus": ViewFocus,
    "object_orientation": ObjectOrientation,
    "light_type": LightFixture,
    "light_position": LightPosition,
    "light_config": LightConfig,
    "light_color": LightColor,
    "global_env": GlobalEnv,
    "background_pattern": BackgroundPattern,
}


def coerce_update(update: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize a partial update before merging.

    Rejects unknown field names and converts enum display strings
    (``"Ring"``, ``'2/3"'``) or member names (``"RING"``) to members.

    Raises:
        ValidationError: On unknown fields or unknown enum values
    """
    ConfigValidator.validate_field_names(update.keys(), SimulationState.field_names())

    coerced: Dict[str, Any] = {}
    for name, value in update.items():
        enum_cls = ENUM_FIELDS.get(name)
        if enum_cls is not None and not isinstance(value, enum_cls):
            value = _to_enum(enum_cls, name, value)
        coerced[name] = value
    return coerced


def _to_enum(enum_cls: Type[Enum], name: str, value: Any) -> Enum:
    try:
        return enum_cls(value)
    except ValueError:
        pass
    if isinstance(value, str) and value.upper() in enum_cls.__members__:
        return enum_cls[value.upper()]
    raise ValidationError(
        ConfigValidator.format_enum_error(name, value, [m.value for m in enum_cls])
    )
