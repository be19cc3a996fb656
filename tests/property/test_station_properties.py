"""
Property-based tests for the station engine using hypothesis.

These tests verify invariants that hold for every reachable configuration,
not just the worked examples: positive metrics, lighting closure under any
sequence of edits, and the reset rules on fixture and object changes.
"""

from __future__ import annotations

import math
from dataclasses import replace

from hypothesis import given, settings
from hypothesis import strategies as st

from visiondoctor.catalog import (
    LIGHT_MULTIPLIERS,
    OBJECT_GOALS,
    STANDARD_APERTURES,
    STANDARD_FOCAL_LENGTHS,
    default_goal,
    get_sensor_spec,
)
from visiondoctor.config.base import SimulationState
from visiondoctor.core.lighting import (
    default_config,
    default_position,
    ensure_valid,
    reconcile,
    valid_configs,
    valid_positions,
)
from visiondoctor.core.optics import compute_metrics
from visiondoctor.core.store import ConfigurationStore
from visiondoctor.scenarios.presets import RECOMMENDED_PRESETS, resolve
from visiondoctor.types import (
    LensFilter,
    LightColor,
    LightConfig,
    LightFixture,
    LightPosition,
    ObjectType,
    SensorFormat,
)


fixtures = st.sampled_from(list(LightFixture))
positions = st.sampled_from(list(LightPosition))
configs = st.sampled_from(list(LightConfig))

optics_states = st.builds(
    SimulationState,
    sensor_format=st.sampled_from(list(SensorFormat)),
    focal_length_mm=st.sampled_from(STANDARD_FOCAL_LENGTHS),
    aperture=st.sampled_from(STANDARD_APERTURES),
    working_distance_mm=st.floats(min_value=50, max_value=1000),
    exposure_time_us=st.floats(min_value=100, max_value=20000),
    gain_db=st.floats(min_value=0, max_value=24),
    object_speed_mm_s=st.floats(min_value=0, max_value=2000),
    vibration_level=st.integers(min_value=0, max_value=10),
    lens_filter=st.sampled_from(list(LensFilter)),
    light_multiplier=st.sampled_from(LIGHT_MULTIPLIERS),
)

raw_lighting = st.builds(
    SimulationState, light_type=fixtures, light_position=positions, light_config=configs
)

# One field edit per step; values within documented ranges
edits = st.one_of(
    st.fixed_dictionaries({"light_type": fixtures}),
    st.fixed_dictionaries({"light_position": positions}),
    st.fixed_dictionaries({"light_config": configs}),
    st.fixed_dictionaries({"light_type": fixtures, "light_position": positions}),
    st.fixed_dictionaries({"light_color": st.sampled_from(list(LightColor))}),
    st.fixed_dictionaries({"object_type": st.sampled_from(list(ObjectType))}),
    st.fixed_dictionaries({"focal_length_mm": st.sampled_from(STANDARD_FOCAL_LENGTHS)}),
    st.fixed_dictionaries({"gain_db": st.floats(min_value=0, max_value=24)}),
)


def assert_closed(state: SimulationState) -> None:
    assert state.light_position in valid_positions(state.light_type)
    assert state.light_config in valid_configs(state.light_type)


@given(state=optics_states)
@settings(max_examples=200, deadline=None)
def test_metrics_positive(state):
    """Property: FOV, magnification and DOF are positive for all valid states."""
    metrics = compute_metrics(state)
    assert metrics.fov_width_mm > 0
    assert metrics.fov_height_mm > 0
    assert metrics.magnification > 0
    assert metrics.dof_mm > 0
    assert metrics.motion_blur_px >= 0
    assert metrics.exposure_value > 0


@given(state=optics_states)
@settings(max_examples=100, deadline=None)
def test_magnification_is_sensor_over_fov(state):
    """Property: magnification * FOV width equals the sensor width."""
    metrics = compute_metrics(state)
    sensor = get_sensor_spec(state.sensor_format)
    assert math.isclose(metrics.magnification * metrics.fov_width_mm, sensor.width_mm)

    closer = compute_metrics(replace(state, working_distance_mm=state.working_distance_mm * 0.5))
    assert closer.magnification > metrics.magnification


@given(state=raw_lighting)
@settings(max_examples=200, deadline=None)
def test_reconcile_idempotent(state):
    """Property: repairing twice equals repairing once."""
    once = ensure_valid(state)
    assert_closed(once)
    assert ensure_valid(once) == once


@given(state=raw_lighting, update=edits)
@settings(max_examples=200, deadline=None)
def test_reconcile_idempotent_after_update(state, update):
    result = reconcile(ensure_valid(state), update)
    assert reconcile(result, {}) == result


@given(sequence=st.lists(edits, min_size=1, max_size=15))
@settings(max_examples=100, deadline=None)
def test_closure_under_any_edit_sequence(sequence):
    """Property: the fixture validity sets hold after every apply."""
    store = ConfigurationStore()
    for update in sequence:
        state, _ = store.apply(update)
        assert_closed(state)
        assert state.inspection_goal in OBJECT_GOALS[state.object_type]


@given(state=raw_lighting, fixture=fixtures)
@settings(max_examples=200, deadline=None)
def test_fixture_swap_resets(state, fixture):
    """Property: a fixture change snaps to its canonical position and config."""
    start = ensure_valid(state)
    if fixture is start.light_type:
        return
    result = reconcile(start, {"light_type": fixture})
    assert result.light_position is default_position(fixture)
    assert result.light_config is default_config(fixture)


@given(state=raw_lighting, fixture=fixtures, config=configs)
@settings(max_examples=200, deadline=None)
def test_fixture_swap_ignores_requested_config(state, fixture, config):
    """Property: a config sent along with a fixture change never survives it."""
    start = ensure_valid(state)
    if fixture is start.light_type:
        return
    result = reconcile(start, {"light_type": fixture, "light_config": config})
    assert result.light_config is default_config(fixture)


@given(
    first=st.sampled_from(list(ObjectType)),
    second=st.sampled_from(list(ObjectType)),
    goal_index=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=100, deadline=None)
def test_object_swap_resets_goal(first, second, goal_index):
    """Property: an object change selects the new object's first goal."""
    store = ConfigurationStore()
    store.apply({"object_type": first})
    goals = OBJECT_GOALS[first]
    store.apply({"inspection_goal": goals[goal_index % len(goals)]})

    state, _ = store.apply({"object_type": second})
    if second is not first:
        assert state.inspection_goal == default_goal(second)


@given(
    second=st.sampled_from(list(ObjectType)),
    goal_index=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=100, deadline=None)
def test_object_swap_ignores_requested_goal(second, goal_index):
    """Property: a goal sent along with an object change never survives it."""
    store = ConfigurationStore()
    goals = OBJECT_GOALS[second]
    state, _ = store.apply(
        {"object_type": second, "inspection_goal": goals[goal_index % len(goals)]}
    )
    if second is not ObjectType.PCB:
        assert state.inspection_goal == default_goal(second)


@given(key=st.sampled_from(list(RECOMMENDED_PRESETS)), start=edits)
@settings(max_examples=100, deadline=None)
def test_presets_never_violate_fixture_rules(key, start):
    """Property: applying any preset from any state keeps closure."""
    obj, goal = key
    store = ConfigurationStore()
    store.apply(start)
    store.apply({"object_type": obj})
    store.apply({"inspection_goal": goal})
    assert store.apply_preset()
    assert_closed(store.state)
    assert store.state.light_type is RECOMMENDED_PRESETS[key]["light_type"]
    assert store.state.light_position is RECOMMENDED_PRESETS[key]["light_position"]


@given(key=st.sampled_from(list(RECOMMENDED_PRESETS)))
@settings(max_examples=50, deadline=None)
def test_resolve_pure(key):
    assert resolve(*key) == resolve(*key) == RECOMMENDED_PRESETS[key]
