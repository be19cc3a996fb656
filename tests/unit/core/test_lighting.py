"""Tests for the lighting compatibility resolver."""

from __future__ import annotations

from dataclasses import replace

import pytest

from visiondoctor.config.validation import ValidationError
from visiondoctor.core.lighting import (
    classify_geometry,
    default_config,
    default_position,
    ensure_valid,
    fixtures_for_geometry,
    geometry_update,
    is_valid_combination,
    reconcile,
    valid_configs,
    valid_positions,
)
from visiondoctor.types import LightConfig, LightFixture, LightingGeometry, LightPosition

P = LightPosition
C = LightConfig
F = LightFixture


class TestValiditySets:
    @pytest.mark.parametrize(
        "fixture,positions",
        [
            (F.RING, {P.CAMERA_AXIS, P.LOW_ANGLE}),
            (F.BAR, {P.BACKLIGHT, P.TOP, P.SIDE, P.LOW_ANGLE}),
            (F.SPOT, {P.TOP, P.SIDE}),
            (F.PANEL, {P.BACKLIGHT, P.TOP, P.SIDE}),
            (F.COAXIAL, {P.CAMERA_AXIS}),
            (F.DOME, {P.SURROUNDING}),
            (F.TUNNEL, {P.SURROUNDING}),
        ],
    )
    def test_positions(self, fixture, positions):
        assert valid_positions(fixture) == positions

    @pytest.mark.parametrize(
        "fixture,configs",
        [
            (F.RING, {C.SINGLE}),
            (F.BAR, {C.SINGLE, C.DUAL, C.QUAD}),
            (F.SPOT, {C.NARROW, C.WIDE}),
            (F.PANEL, {C.SMALL, C.MEDIUM, C.LARGE}),
            (F.COAXIAL, {C.SINGLE}),
            (F.DOME, {C.SINGLE}),
            (F.TUNNEL, {C.SINGLE}),
        ],
    )
    def test_configs(self, fixture, configs):
        assert valid_configs(fixture) == configs

    def test_defaults_are_valid(self):
        for fixture in F:
            assert is_valid_combination(
                fixture, default_position(fixture), default_config(fixture)
            )

    def test_canonical_config(self):
        assert default_config(F.BAR) is C.SINGLE
        assert default_config(F.SPOT) is C.NARROW
        assert default_config(F.PANEL) is C.SMALL

    def test_default_positions(self):
        assert default_position(F.RING) is P.CAMERA_AXIS
        assert default_position(F.PANEL) is P.BACKLIGHT
        assert default_position(F.DOME) is P.SURROUNDING


class TestReconcile:
    def test_invalid_position_snaps_back(self, default_state):
        # Ring cannot be mounted as a backlight
        state = reconcile(default_state, {"light_position": P.BACKLIGHT})
        assert state.light_type is F.RING
        assert state.light_position is P.CAMERA_AXIS

    def test_valid_position_kept(self, default_state):
        state = reconcile(default_state, {"light_position": P.LOW_ANGLE})
        assert state.light_position is P.LOW_ANGLE

    def test_invalid_config_snaps(self, default_state):
        state = reconcile(default_state, {"light_config": C.QUAD})
        assert state.light_config is C.SINGLE

    def test_invalid_config_keeps_valid_position(self, default_state):
        bar = reconcile(default_state, {"light_type": F.BAR, "light_position": P.SIDE})
        state = reconcile(bar, {"light_config": C.SMALL})
        assert state.light_position is P.SIDE
        assert state.light_config is C.SINGLE

    def test_fixture_swap_resets_position_and_config(self, default_state):
        bar = reconcile(default_state, {"light_type": F.BAR})
        bar = reconcile(bar, {"light_position": P.SIDE, "light_config": C.QUAD})
        assert (bar.light_position, bar.light_config) == (P.SIDE, C.QUAD)

        panel = reconcile(bar, {"light_type": F.PANEL})
        # Side is valid for Panel but a swap still snaps to the default
        assert panel.light_position is P.BACKLIGHT
        assert panel.light_config is C.SMALL

    def test_swap_keeps_valid_position_from_same_update(self, default_state):
        state = reconcile(
            default_state, {"light_type": F.BAR, "light_position": P.LOW_ANGLE}
        )
        assert state.light_position is P.LOW_ANGLE
        assert state.light_config is C.SINGLE

    def test_swap_ignores_invalid_position_from_same_update(self, default_state):
        state = reconcile(
            default_state, {"light_type": F.COAXIAL, "light_position": P.SIDE}
        )
        assert state.light_position is P.CAMERA_AXIS

    def test_swap_resets_config_from_same_update(self, default_state):
        state = reconcile(default_state, {"light_type": F.BAR, "light_config": C.QUAD})
        assert state.light_type is F.BAR
        assert state.light_config is C.SINGLE

    def test_accepts_display_strings(self, default_state):
        state = reconcile(default_state, {"light_type": "Spot", "light_position": "SIDE"})
        assert state.light_type is F.SPOT
        assert state.light_position is P.SIDE
        assert state.light_config is C.NARROW

    def test_unknown_fixture_string_rejected(self, default_state):
        with pytest.raises(ValidationError, match="light_type"):
            reconcile(default_state, {"light_type": "Laser"})

    def test_same_fixture_not_a_swap(self, default_state):
        low = reconcile(default_state, {"light_position": P.LOW_ANGLE})
        state = reconcile(low, {"light_type": F.RING})
        assert state.light_position is P.LOW_ANGLE

    def test_other_fields_merged(self, default_state):
        state = reconcile(default_state, {"gain_db": 6, "light_type": F.DOME})
        assert state.gain_db == 6
        assert state.light_position is P.SURROUNDING

    def test_empty_update_on_valid_state_is_identity(self, default_state):
        assert reconcile(default_state, {}) == default_state

    def test_idempotent(self, default_state):
        once = reconcile(default_state, {"light_type": F.SPOT})
        assert reconcile(once, {}) == once

    def test_ensure_valid_repairs_raw_state(self, default_state):
        broken = replace(default_state, light_type=F.DOME)
        repaired = ensure_valid(broken)
        assert repaired.light_position is P.SURROUNDING
        assert repaired.light_config is C.SINGLE


class TestGeometry:
    @pytest.mark.parametrize(
        "fixture,position,geometry",
        [
            (F.PANEL, P.BACKLIGHT, LightingGeometry.SILHOUETTE),
            (F.RING, P.LOW_ANGLE, LightingGeometry.DARK_FIELD),
            (F.DOME, P.SURROUNDING, LightingGeometry.DIFFUSE),
            (F.BAR, P.SIDE, LightingGeometry.DIRECTIONAL),
            (F.SPOT, P.TOP, LightingGeometry.DIRECTIONAL),
            (F.COAXIAL, P.CAMERA_AXIS, LightingGeometry.BRIGHT_FIELD),
        ],
    )
    def test_classify(self, default_state, fixture, position, geometry):
        state = reconcile(default_state, {"light_type": fixture, "light_position": position})
        assert classify_geometry(state) is geometry

    def test_geometry_update_round_trips(self, default_state):
        for geometry in LightingGeometry:
            state = reconcile(default_state, geometry_update(geometry))
            assert classify_geometry(state) is geometry
            assert state.light_type in fixtures_for_geometry(geometry)
