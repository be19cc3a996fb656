"""Station state, validation and service settings."""

from __future__ import annotations

from visiondoctor.config.base import ENUM_FIELDS, SimulationState, coerce_update
from visiondoctor.config.settings import AdvisorSettings, load_settings
from visiondoctor.config.validation import ConfigValidator, ValidationError


__all__ = [
    "ENUM_FIELDS",
    "SimulationState",
    "coerce_update",
    "AdvisorSettings",
    "load_settings",
    "ConfigValidator",
    "ValidationError",
]
