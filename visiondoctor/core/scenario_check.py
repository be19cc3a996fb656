"""Rule-based sanity check of a station against its inspection goal.

Complements the AI advisor with deterministic verdicts: framing, resolution,
exposure, focus, motion stability, glare risk and illumination technique.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from visiondoctor.catalog import get_object_dims
from visiondoctor.config.base import SimulationState
from visiondoctor.core.optics import OpticalMetrics
from visiondoctor.types import LightFixture, LightPosition, ObjectType


MIN_PIXEL_DENSITY = 2.0  # px/mm
DARK_EXPOSURE = 0.25
BRIGHT_EXPOSURE = 8.0
ROI_COVERAGE = 0.9  # ROI may cut up to 10% of the object's share of the FOV
GOOD_BLUR_PX = 1.0
ACCEPTABLE_BLUR_PX = 3.0

METAL_OBJECTS = frozenset({ObjectType.ALUMINUM_CAN, ObjectType.PCB})
GLARE_FREE_FIXTURES = frozenset({LightFixture.COAXIAL, LightFixture.DOME})

# Goal keywords per illumination technique
SILHOUETTE_GOALS = ("Fill Level", "Measure Dimensions")
DARK_FIELD_GOALS = ("Scratches", "Etched Text", "Dot Peen")
BRIGHT_FIELD_GOALS = ("Print Code", "Label Text")

# technique_reason codes
REQUIRES_BACKLIGHT = "requires_backlight"
REQUIRES_DARK_FIELD = "requires_dark_field"
BACKLIGHT_WASHOUT = "backlight_washout"


@dataclass(frozen=True)
class ScenarioCheck:
    """Verdicts for the current configuration.

    Attributes:
        roi: 'good' or 'poor' (object outside FOV, or ROI crops it)
        resolution: 'good' or 'poor' (< 2 px/mm)
        exposure: 'good', 'dark' or 'bright'
        focus: 'good' or 'poor' (DOF shallower than the object)
        stability: 'good', 'acceptable' or 'poor' by motion blur
        glare: 'none' or 'warning'
        technique: 'good' or 'wrong_geometry'
        technique_reason: Reason code when technique is 'wrong_geometry'
    """

    roi: str = "good"
    resolution: str = "good"
    exposure: str = "good"
    focus: str = "good"
    stability: str = "good"
    glare: str = "none"
    technique: str = "good"
    technique_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if no check reports a problem."""
        return (
            self.roi == "good"
            and self.resolution == "good"
            and self.exposure == "good"
            and self.focus == "good"
            and self.stability != "poor"
            and self.glare == "none"
            and self.technique == "good"
        )


def _matches(goal: str, keywords: tuple) -> bool:
    return any(keyword in goal for keyword in keywords)


def _check_technique(state: SimulationState) -> Optional[str]:
    goal = state.inspection_goal
    pos = state.light_position

    if _matches(goal, SILHOUETTE_GOALS):
        if pos is not LightPosition.BACKLIGHT:
            return REQUIRES_BACKLIGHT
    elif _matches(goal, DARK_FIELD_GOALS):
        # Diffuse surround works as dark field on curved metal
        metal_surround = (
            state.object_type in METAL_OBJECTS and pos is LightPosition.SURROUNDING
        )
        if pos is not LightPosition.LOW_ANGLE and not metal_surround:
            return REQUIRES_DARK_FIELD
    elif _matches(goal, BRIGHT_FIELD_GOALS):
        if pos is LightPosition.BACKLIGHT:
            return BACKLIGHT_WASHOUT
    return None


def check_scenario(state: SimulationState, metrics: OpticalMetrics) -> ScenarioCheck:
    """Evaluate the configuration against its object and inspection goal.

    Args:
        state: Current station configuration
        metrics: Metrics computed from ``state``

    Returns:
        ScenarioCheck with one verdict per aspect
    """
    dims = get_object_dims(state.object_type)

    share_w = dims.width_mm / metrics.fov_width_mm
    share_h = dims.height_mm / metrics.fov_height_mm
    if share_w > 1 or share_h > 1:
        roi = "poor"
    elif state.roi_w < share_w * ROI_COVERAGE or state.roi_h < share_h * ROI_COVERAGE:
        roi = "poor"
    else:
        roi = "good"

    resolution = "poor" if metrics.pixel_density_px_per_mm < MIN_PIXEL_DENSITY else "good"

    if metrics.exposure_value < DARK_EXPOSURE:
        exposure = "dark"
    elif metrics.exposure_value > BRIGHT_EXPOSURE:
        exposure = "bright"
    else:
        exposure = "good"

    focus = "poor" if metrics.dof_mm < dims.depth_mm else "good"

    if metrics.motion_blur_px < GOOD_BLUR_PX:
        stability = "good"
    elif metrics.motion_blur_px < ACCEPTABLE_BLUR_PX:
        stability = "acceptable"
    else:
        stability = "poor"

    glare = "none"
    if (
        state.object_type in METAL_OBJECTS
        and state.light_type not in GLARE_FREE_FIXTURES
        and state.light_position is LightPosition.CAMERA_AXIS
    ):
        glare = "warning"

    reason = _check_technique(state)

    return ScenarioCheck(
        roi=roi,
        resolution=resolution,
        exposure=exposure,
        focus=focus,
        stability=stability,
        glare=glare,
        technique="good" if reason is None else "wrong_geometry",
        technique_reason=reason,
    )
