"""AI advisory client for station configurations."""

from __future__ import annotations

from .doctor import (
    ANALYSIS_FAILED_ADVICE,
    DEFAULT_ADVICE_TEXT,
    NOT_CONFIGURED_ADVICE,
    AdvisorSnapshot,
    DoctorAdvice,
    VisionDoctor,
    build_snapshot,
)


__all__ = [
    "ANALYSIS_FAILED_ADVICE",
    "DEFAULT_ADVICE_TEXT",
    "NOT_CONFIGURED_ADVICE",
    "AdvisorSnapshot",
    "DoctorAdvice",
    "VisionDoctor",
    "build_snapshot",
]
