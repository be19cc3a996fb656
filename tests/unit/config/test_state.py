"""Tests for SimulationState validation and update coercion."""

from __future__ import annotations

from dataclasses import replace

import pytest

from visiondoctor.config.base import SimulationState, coerce_update
from visiondoctor.config.validation import ConfigValidator, ValidationError
from visiondoctor.types import GlobalEnv, LightFixture, SensorFormat


class TestDefaults:
    def test_documented_defaults(self, default_state):
        assert default_state.sensor_format is SensorFormat.TYPE_2_3
        assert default_state.focal_length_mm == 16
        assert default_state.aperture == 2.8
        assert default_state.working_distance_mm == 300
        assert default_state.light_type is LightFixture.RING
        assert default_state.exposure_time_us == 5000

    def test_default_validates(self, default_state):
        default_state.validate()

    def test_immutable(self, default_state):
        with pytest.raises(AttributeError):
            default_state.gain_db = 6

    def test_ambient_flag(self, default_state):
        assert not default_state.has_ambient_light
        assert replace(default_state, global_env=GlobalEnv.SUNLIGHT).has_ambient_light

    def test_to_dict_uses_display_values(self, default_state):
        data = default_state.to_dict()
        assert data["sensor_format"] == '2/3"'
        assert data["light_type"] == "Ring"
        assert set(data) == set(SimulationState.field_names())


class TestValidate:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("working_distance_mm", 49),
            ("working_distance_mm", 1001),
            ("camera_angle_deg", 46),
            ("light_intensity", 101),
            ("light_distance_mm", 10),
            ("exposure_time_us", 50),
            ("gain_db", 25),
            ("global_intensity", -1),
            ("object_speed_mm_s", 2001),
            ("roi_w", 1.5),
            ("object_rot_x", 5000),
            ("light_multiplier", 5),
            ("aperture", 3.5),
            ("focal_length_mm", 20),
            ("vibration_level", 2.5),
            ("vibration_level", 11),
            ("gain_db", float("nan")),
            ("gain_db", True),
        ],
    )
    def test_out_of_domain(self, default_state, field, value):
        with pytest.raises(ValidationError, match=field):
            replace(default_state, **{field: value}).validate()

    def test_bad_background_color(self, default_state):
        with pytest.raises(ValidationError, match="background_color"):
            replace(default_state, background_color="black").validate()

    def test_goal_must_belong_to_object(self, default_state):
        with pytest.raises(ValidationError, match="inspection_goal"):
            replace(default_state, inspection_goal="Inspect Fill Level").validate()

    def test_raw_string_enum_rejected(self, default_state):
        with pytest.raises(ValidationError, match="light_type"):
            replace(default_state, light_type="Ring").validate()

    def test_boundaries_accepted(self, default_state):
        replace(
            default_state,
            working_distance_mm=50,
            exposure_time_us=20000,
            gain_db=24,
            vibration_level=10,
            roi_w=1.0,
        ).validate()


class TestCoerceUpdate:
    def test_display_string(self):
        assert coerce_update({"sensor_format": '1"'}) == {"sensor_format": SensorFormat.TYPE_1}

    def test_member_name(self):
        assert coerce_update({"light_type": "coaxial"})["light_type"] is LightFixture.COAXIAL

    def test_non_enum_fields_untouched(self):
        assert coerce_update({"gain_db": 6}) == {"gain_db": 6}

    def test_unknown_field(self):
        with pytest.raises(ValidationError, match="Unknown configuration field: 'gian_db'"):
            coerce_update({"gian_db": 6})

    def test_unknown_enum_value_suggests(self):
        with pytest.raises(ValidationError, match="Did you mean 'Coaxial'"):
            coerce_update({"light_type": "Coaxal"})


class TestConfigValidator:
    def test_suggest_correction(self):
        assert ConfigValidator.suggest_correction("Rign", ["Ring", "Bar"]) == "Ring"
        assert ConfigValidator.suggest_correction("xyz", ["Ring", "Bar"]) is None

    def test_range_error_lists_typical(self):
        msg = ConfigValidator.format_range_error("gain_db", 30, "in [0, 24]", "0-12")
        assert "Must be in [0, 24]" in msg
        assert "Typical values: 0-12" in msg

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)
