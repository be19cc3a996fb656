"""Tests for the equipment catalog lookups."""

from __future__ import annotations

import pytest

from visiondoctor.catalog import (
    OBJECT_GOALS,
    STANDARD_APERTURES,
    STANDARD_FOCAL_LENGTHS,
    default_goal,
    get_object_dims,
    get_sensor_spec,
    goals_for,
)
from visiondoctor.types import ObjectType, SensorFormat


class TestSensorSpecs:
    def test_two_thirds_inch(self):
        spec = get_sensor_spec(SensorFormat.TYPE_2_3)
        assert spec.width_mm == 8.8
        assert spec.height_mm == 6.6

    def test_lookup_by_display_string(self):
        assert get_sensor_spec('1"') == get_sensor_spec(SensorFormat.TYPE_1)

    def test_every_format_has_spec(self):
        for fmt in SensorFormat:
            spec = get_sensor_spec(fmt)
            assert spec.width_mm > spec.height_mm > 0

    def test_unknown_format_lists_available(self):
        with pytest.raises(ValueError, match="Unknown sensor format"):
            get_sensor_spec("4/3 inch")


class TestObjects:
    def test_pcb_dims(self):
        dims = get_object_dims(ObjectType.PCB)
        assert (dims.width_mm, dims.height_mm) == (80, 60)

    def test_unknown_object(self):
        with pytest.raises(ValueError, match="Available"):
            get_object_dims("Banana")

    def test_every_object_has_goals(self):
        for obj in ObjectType:
            assert len(goals_for(obj)) >= 2

    def test_default_goal_is_first(self):
        assert default_goal(ObjectType.GLASS_BOTTLE) == "Inspect Fill Level"
        assert default_goal("Aluminum Can") == "Read Bottom Dot Peen Code"

    def test_goals_not_shared_across_objects(self):
        seen = set()
        for goals in OBJECT_GOALS.values():
            assert seen.isdisjoint(goals)
            seen.update(goals)

    def test_goals_for_returns_copy(self):
        goals = goals_for(ObjectType.PCB)
        goals.append("Something else")
        assert "Something else" not in goals_for(ObjectType.PCB)


class TestLensGrids:
    def test_focal_lengths_sorted(self):
        assert list(STANDARD_FOCAL_LENGTHS) == sorted(STANDARD_FOCAL_LENGTHS)
        assert 16 in STANDARD_FOCAL_LENGTHS

    def test_apertures_include_baseline(self):
        assert 2.8 in STANDARD_APERTURES
