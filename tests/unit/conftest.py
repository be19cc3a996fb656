"""Fixtures for unit tests."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real advisor credentials out of the tests."""
    for var in (
        "VISION_DOCTOR_API_KEY",
        "VISION_DOCTOR_HOST",
        "VISION_DOCTOR_MODEL",
        "VISION_DOCTOR_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
