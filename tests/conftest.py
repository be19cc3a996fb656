"""Shared test fixtures for Vision Doctor tests."""

from __future__ import annotations

import pytest

from visiondoctor.config.base import SimulationState
from visiondoctor.config.settings import AdvisorSettings
from visiondoctor.core.optics import compute_metrics
from visiondoctor.core.store import ConfigurationStore


@pytest.fixture
def default_state():
    """Documented session default configuration."""
    return SimulationState.default()


@pytest.fixture
def default_metrics(default_state):
    return compute_metrics(default_state)


@pytest.fixture
def store():
    """Configuration store at the session default, closed after the test."""
    store = ConfigurationStore()
    yield store
    store.close()


@pytest.fixture
def advisor_settings():
    """Settings with a credential so the advisor is enabled."""
    return AdvisorSettings(api_key="test-key", host="http://localhost:11434")
