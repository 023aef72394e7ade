"""
DaysOfWeekRule - validates that a date falls on any of several day-specs.
"""

from datetime import datetime
from typing import Any

from ..errors import InvalidRuleConfiguration
from .base_rule import ParamSpec, ValidationOutcome
from .day_of_week_rule import DayOfWeekRule
from .temporal_rule import TIMEZONE_PARAM, TemporalRule


class DaysOfWeekRule(TemporalRule):
    """
    Logical OR of DayOfWeekRule over ``days``.

    Example:
        DaysOfWeekRule(["Monday", "Wednesday"], timezone="UTC")
    """

    kind = "DaysOfWeek"
    PARAMETERS = (
        ParamSpec("days", aliases=("daysOfWeek",)),
        TIMEZONE_PARAM,
    )

    def __init__(self, days: list | tuple, timezone: str = "UTC"):
        super().__init__(timezone)

        if isinstance(days, (str, bytes)) or not isinstance(days, (list, tuple)):
            raise InvalidRuleConfiguration(self.kind, "days must be a list")
        if not days:
            raise InvalidRuleConfiguration(self.kind, "The days array cannot be empty.")

        self.day_rules = [DayOfWeekRule(day, self.timezone) for day in days]

    def check_moment(self, attribute: str, moment: datetime) -> ValidationOutcome:
        if any(rule.matches(moment) for rule in self.day_rules):
            return ValidationOutcome.ok()
        return ValidationOutcome.fail(f"The {attribute} does not match any of the allowed days of the week.")

    def snapshot(self) -> dict[str, Any]:
        return {
            "days": [rule.day.value for rule in self.day_rules],
            "timezone": self.timezone,
        }
