"""
Module: visiondoctor.core.optics
Purpose: Closed-form optical metrics for a machine-vision station
Dependencies: math, loguru
Main Functions:
    - compute_metrics(state): FOV, magnification, DOF, pixel density, motion blur
    - compute_render_factors(state, metrics): Values the preview renderer consumes
    - scene_exposure_value(state): Relative scene brightness (1.0 = baseline)

Description:
    Thin-lens machine-vision approximations. Distortion and perspective are
    ignored, depth of field assumes a single nominal pixel pitch regardless of
    the selected sensor format, and motion blur adds translation and
    vibration contributions in pixel units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from loguru import logger

from visiondoctor.catalog import get_sensor_spec
from visiondoctor.config.base import SimulationState
from visiondoctor.types import LensFilter, LightFixture


# %% Constants

PIXEL_SIZE_MM = 0.00345  # nominal pixel pitch (3.45 µm)
COC_MM = 2 * PIXEL_SIZE_MM  # circle of confusion
REFERENCE_HORIZONTAL_PIXELS = 2448  # nominal 5 MP sensor width

VIBRATION_VELOCITY_MM_S = 20.0  # per vibration level
US_PER_S = 1_000_000

# Exposure baseline: 5000 µs at f/2.8 and 0 dB gives factor 1.0
BASELINE_EXPOSURE_US = 5000.0
BASELINE_APERTURE = 2.8
BASELINE_LIGHT_INTENSITY = 60.0
BASELINE_LIGHT_MULTIPLIER = 100.0
BASELINE_LIGHT_DISTANCE_MM = 200.0

MAX_NOISE_OPACITY = 0.6
MAX_BLUR_RADIUS_PX = 20.0

# Fixtures whose output falls off with distance (inverse square)
POINT_LIKE_FIXTURES = frozenset({LightFixture.BAR, LightFixture.RING, LightFixture.SPOT})


class OpticsDomainError(ValueError):
    """Raised when inputs fall outside the calculator's domain.

    Zero or negative focal length, working distance or aperture would
    otherwise propagate Infinity/NaN into every downstream metric.
    """

    pass


@dataclass(frozen=True)
class OpticalMetrics:
    """Derived optical metrics. Recomputed on every state change, never stored.

    Attributes:
        fov_width_mm: Field of view width at the object plane [mm]
        fov_height_mm: Field of view height at the object plane [mm]
        magnification: Sensor size / object-plane size
        dof_mm: Depth of field [mm]
        pixel_density_px_per_mm: Nominal pixels per millimeter on the object
        motion_blur_px: Total blur during exposure [px]
        linear_blur_px: Blur from conveyor translation [px]
        vibration_blur_px: Blur from vibration [px]
        exposure_value: Relative scene brightness (1.0 = baseline)
    """

    fov_width_mm: float
    fov_height_mm: float
    magnification: float
    dof_mm: float
    pixel_density_px_per_mm: float
    motion_blur_px: float
    linear_blur_px: float = 0.0
    vibration_blur_px: float = 0.0
    exposure_value: float = 1.0


@dataclass(frozen=True)
class RenderFactors:
    """Values the preview renderer applies to its image.

    Attributes:
        exposure_factor: Brightness scale from exposure, aperture and gain
        noise_opacity: Sensor noise overlay opacity, capped at 0.6
        blur_radius_px: Motion blur radius, capped at 20 px for display
    """

    exposure_factor: float
    noise_opacity: float
    blur_radius_px: float


def _require_positive(value: float, name: str) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise OpticsDomainError(f"{name} must be a finite positive number, got {value!r}")


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise OpticsDomainError(f"Derived {name} is not finite ({value!r})")


def exposure_factor(exposure_time_us: float, aperture: float, gain_db: float) -> float:
    """Sensor-side brightness relative to the baseline (5000 µs, f/2.8, 0 dB).

    factor = (t / 5000) * (2.8 / N)^2 * 10^(gain / 20)
    """
    _require_positive(aperture, "aperture")
    return (
        (exposure_time_us / BASELINE_EXPOSURE_US)
        * (BASELINE_APERTURE / aperture) ** 2
        * 10 ** (gain_db / 20)
    )


def scene_exposure_value(state: SimulationState) -> float:
    """Estimate relative image brightness including the lighting setup.

    Extends ``exposure_factor`` with ambient light, fixture intensity and
    multiplier, inverse-square fall-off for point-like fixtures and lens
    filter attenuation. Equals 1.0 at the documented defaults.
    """
    base = exposure_factor(state.exposure_time_us, state.aperture, state.gain_db)

    global_add = 0.0
    if state.has_ambient_light:
        global_add = (state.global_intensity / 100) * 0.5

    light_factor = (state.light_intensity / BASELINE_LIGHT_INTENSITY) * (
        (state.light_multiplier or 1) / BASELINE_LIGHT_MULTIPLIER
    )

    dist_factor = 1.0
    if state.light_type in POINT_LIKE_FIXTURES:
        dist_factor = (BASELINE_LIGHT_DISTANCE_MM / max(state.light_distance_mm, 1)) ** 2

    if state.lens_filter is LensFilter.POLARIZER:
        filter_factor = 0.4
    elif state.lens_filter is not LensFilter.NONE:
        filter_factor = 0.8
    else:
        filter_factor = 1.0

    return base * (1 + global_add) * light_factor * dist_factor * filter_factor


def compute_metrics(state: SimulationState) -> OpticalMetrics:
    """Derive optical metrics from a station configuration.

    fov = sensor * WD / f
    magnification = sensor_w / fov_w
    dof = 2 * N * coc / magnification^2
    pixel_density = 2448 / fov_w
    motion_blur = (speed + vibration * 20) * t_exp * pixel_density

    Args:
        state: Station configuration (ranges are assumed valid)

    Returns:
        OpticalMetrics instance

    Raises:
        OpticsDomainError: If focal length, working distance or aperture are
            not positive, or a derived value is not finite
    """
    _require_positive(state.focal_length_mm, "focal_length_mm")
    _require_positive(state.working_distance_mm, "working_distance_mm")
    _require_positive(state.aperture, "aperture")

    sensor = get_sensor_spec(state.sensor_format)

    fov_width = sensor.width_mm * state.working_distance_mm / state.focal_length_mm
    fov_height = sensor.height_mm * state.working_distance_mm / state.focal_length_mm

    # FOV ratio form avoids the WD ~= f singularity of f / (WD - f)
    magnification = sensor.width_mm / fov_width
    dof = 2 * state.aperture * COC_MM / magnification**2
    pixel_density = REFERENCE_HORIZONTAL_PIXELS / fov_width

    exposure_s = state.exposure_time_us / US_PER_S
    speed_shift_mm = state.object_speed_mm_s * exposure_s
    vibration_shift_mm = state.vibration_level * VIBRATION_VELOCITY_MM_S * exposure_s
    linear_blur = speed_shift_mm * pixel_density
    vibration_blur = vibration_shift_mm * pixel_density

    exposure_value = scene_exposure_value(state)

    _require_finite(
        fov_width=fov_width,
        fov_height=fov_height,
        magnification=magnification,
        dof=dof,
        pixel_density=pixel_density,
        motion_blur=linear_blur + vibration_blur,
        exposure_value=exposure_value,
    )

    metrics = OpticalMetrics(
        fov_width_mm=fov_width,
        fov_height_mm=fov_height,
        magnification=magnification,
        dof_mm=dof,
        pixel_density_px_per_mm=pixel_density,
        motion_blur_px=linear_blur + vibration_blur,
        linear_blur_px=linear_blur,
        vibration_blur_px=vibration_blur,
        exposure_value=exposure_value,
    )
    logger.debug(
        f"Metrics: FOV {fov_width:.1f}x{fov_height:.1f} mm, "
        f"mag {magnification:.4f}x, DOF {dof:.2f} mm"
    )
    return metrics


def compute_render_factors(state: SimulationState, metrics: OpticalMetrics) -> RenderFactors:
    """Compute the exposure, noise and blur values for the preview renderer.

    The engine exposes these values but does not apply them to an image.
    """
    return RenderFactors(
        exposure_factor=exposure_factor(state.exposure_time_us, state.aperture, state.gain_db),
        noise_opacity=min(max(state.gain_db / 40, 0.0), MAX_NOISE_OPACITY),
        blur_radius_px=min(metrics.motion_blur_px, MAX_BLUR_RADIUS_PX),
    )
