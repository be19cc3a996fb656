"""Core engine of the inspection station.

>>> from visiondoctor.core import ConfigurationStore
>>> store = ConfigurationStore()
>>> state, metrics = store.apply({"light_type": "Spot"})
>>> state.light_position, state.light_config
(<LightPosition.TOP: 'Top'>, <LightConfig.NARROW: 'Narrow'>)
"""

from __future__ import annotations

# Optics
from visiondoctor.core.optics import (
    OpticalMetrics,
    OpticsDomainError,
    RenderFactors,
    compute_metrics,
    compute_render_factors,
    exposure_factor,
    scene_exposure_value,
)

# Lighting
from visiondoctor.core.lighting import (
    classify_geometry,
    default_config,
    default_position,
    ensure_valid,
    reconcile,
    valid_configs,
    valid_positions,
)

# Checks and store
from visiondoctor.core.scenario_check import ScenarioCheck, check_scenario
from visiondoctor.core.store import ConfigurationStore


__all__ = [
    "OpticalMetrics",
    "OpticsDomainError",
    "RenderFactors",
    "compute_metrics",
    "compute_render_factors",
    "exposure_factor",
    "scene_exposure_value",
    "classify_geometry",
    "default_config",
    "default_position",
    "ensure_valid",
    "reconcile",
    "valid_configs",
    "valid_positions",
    "ScenarioCheck",
    "check_scenario",
    "ConfigurationStore",
]
