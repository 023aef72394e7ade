"""
Unit tests for EnumRule and the enum class registry.
"""

from enum import Enum

import pytest

from validation_engine.core.errors import InvalidRuleConfiguration
from validation_engine.core.models import ActiveStatus, DayOfWeek, TimeOfDay
from validation_engine.core.rule_kinds import EnumRule, register_enum, registered_enums
from validation_engine.core.rule_kinds.enum_rule import resolve_enum_class


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class Priority(Enum):
    LOW = 1
    HIGH = 2


@pytest.mark.unit
class TestEnumRule:
    """Tests for EnumRule"""

    def test_value_in_enum_passes(self):
        rule = EnumRule(ActiveStatus)
        assert rule.validate("status", "Active").passed
        assert rule.validate("status", "Inactive").passed

    def test_member_passes(self):
        assert EnumRule(ActiveStatus).validate("status", ActiveStatus.INACTIVE).passed

    def test_member_name_passes_case_insensitively(self):
        rule = EnumRule(ActiveStatus)
        assert rule.validate("status", "active").passed
        assert rule.validate("status", "INACTIVE").passed

    def test_value_not_in_enum_fails(self):
        outcome = EnumRule(ActiveStatus).validate("status", "Banana")

        assert not outcome.passed
        assert outcome.message == "The status is not a valid instance of ActiveStatus."

    def test_none_fails(self):
        assert not EnumRule(ActiveStatus).validate("status", None).passed

    def test_member_of_other_enum_fails(self):
        assert not EnumRule(ActiveStatus).validate("status", DayOfWeek.MONDAY).passed

    def test_allowed_values_restrict_members(self):
        rule = EnumRule(ActiveStatus, ["Active"])

        assert rule.validate("status", "Active").passed
        outcome = rule.validate("status", "Inactive")
        assert not outcome.passed
        assert outcome.message == "The status must be one of the allowed values."

    def test_allowed_values_by_member_name(self):
        rule = EnumRule(Color, ["red", "BLUE"])
        assert rule.allowed_values == (Color.RED, Color.BLUE)

    def test_integer_enum_values(self):
        rule = EnumRule(Priority, [2])
        assert rule.validate("priority", 2).passed
        assert not rule.validate("priority", 1).passed
        assert not rule.validate("priority", "2").passed

    def test_invalid_allowed_value_rejected(self):
        with pytest.raises(InvalidRuleConfiguration) as exc_info:
            EnumRule(DayOfWeek, ["NotADayOfWeek"])

        assert "At least one of [NotADayOfWeek] is not a valid instance of DayOfWeek." in str(exc_info.value)

    def test_allowed_values_must_be_a_list(self):
        with pytest.raises(InvalidRuleConfiguration):
            EnumRule(ActiveStatus, "Active")

    def test_unknown_enum_class_rejected(self):
        with pytest.raises(InvalidRuleConfiguration) as exc_info:
            EnumRule("NotAnEnum")

        assert "The class NotAnEnum is not a valid enum." in str(exc_info.value)

    def test_snapshot_uses_names_and_values(self):
        rule = EnumRule("ActiveStatus", [ActiveStatus.ACTIVE])
        assert rule.snapshot() == {"enumClass": "ActiveStatus", "allowedValues": ["Active"]}

    def test_equal_configuration_is_equal_rule(self):
        assert EnumRule(ActiveStatus, ["Active"]) == EnumRule("ActiveStatus", ["active"])
        assert EnumRule(ActiveStatus) != EnumRule(ActiveStatus, ["Active"])


@pytest.mark.unit
class TestEnumRegistry:
    """Tests for enum class resolution"""

    def test_builtin_enums_registered(self):
        enums = registered_enums()
        assert enums["ActiveStatus"] is ActiveStatus
        assert enums["DayOfWeek"] is DayOfWeek
        assert enums["TimeOfDay"] is TimeOfDay

    def test_namespaced_name_resolves_by_last_segment(self):
        assert resolve_enum_class("App\\Enums\\DayOfWeek") is DayOfWeek
        assert resolve_enum_class("app.enums.ActiveStatus") is ActiveStatus

    def test_register_enum_by_name(self):
        class Paint(Enum):
            RED = "red"
            GREEN = "green"

        register_enum(Paint, "PaintColor")

        rule = EnumRule("PaintColor", ["green"])
        assert rule.validate("color", "green").passed
        assert rule.snapshot()["enumClass"] == "PaintColor"

    def test_class_reference_does_not_register(self):
        class Shade(Enum):
            DARK = "dark"

        assert resolve_enum_class(Shade) is Shade
        assert "Shade" not in registered_enums()
        with pytest.raises(InvalidRuleConfiguration):
            resolve_enum_class("Shade")

    def test_register_rejects_non_enum(self):
        with pytest.raises(TypeError):
            register_enum(dict)

    def test_time_of_day_enum(self):
        rule = EnumRule("TimeOfDay")
        assert rule.validate("slot", "09:15").passed
        assert not rule.validate("slot", "09:10").passed
        assert len(TimeOfDay.hours()) == 24
        assert len(TimeOfDay.minutes30()) == 48
        assert len(TimeOfDay.minutes15()) == 96
