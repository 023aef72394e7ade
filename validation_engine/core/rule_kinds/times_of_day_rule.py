"""
TimesOfDayRule - validates that a time falls within any of several windows.
"""

from datetime import datetime
from typing import Any

from ..errors import InvalidRuleConfiguration
from ._temporal import format_clock
from .base_rule import ParamSpec, ValidationOutcome
from .temporal_rule import TIMEZONE_PARAM, TemporalRule
from .time_of_day_rule import TimeOfDayRule


def _window_bounds(window: Any) -> tuple[Any, Any]:
    if isinstance(window, dict):
        start = window.get("start", window.get("startTime"))
        end = window.get("end", window.get("endTime"))
        if start is not None and end is not None:
            return start, end
    elif isinstance(window, (list, tuple)) and len(window) == 2:
        return window[0], window[1]
    raise InvalidRuleConfiguration(
        TimesOfDayRule.kind, f"Each time range must be a [start, end] pair, got {window!r}"
    )


class TimesOfDayRule(TemporalRule):
    """
    Logical OR of TimeOfDayRule over ``time_ranges``.

    Example:
        TimesOfDayRule([["09:00", "12:00"], ["14:00", "18:00"]], "UTC")
    """

    kind = "TimesOfDay"
    PARAMETERS = (
        ParamSpec("timeRanges", "time_ranges", aliases=("ranges",)),
        TIMEZONE_PARAM,
    )

    def __init__(self, time_ranges: list | tuple, timezone: str = "UTC"):
        super().__init__(timezone)

        if isinstance(time_ranges, (str, bytes)) or not isinstance(time_ranges, (list, tuple)):
            raise InvalidRuleConfiguration(self.kind, "timeRanges must be a list")
        if not time_ranges:
            raise InvalidRuleConfiguration(self.kind, "The time ranges array cannot be empty.")

        self.time_rules = [
            TimeOfDayRule(*_window_bounds(window), timezone=self.timezone) for window in time_ranges
        ]

    def check_moment(self, attribute: str, moment: datetime) -> ValidationOutcome:
        if any(rule.contains(moment) for rule in self.time_rules):
            return ValidationOutcome.ok()
        return ValidationOutcome.fail(f"The {attribute} is not within any of the allowed time ranges.")

    def snapshot(self) -> dict[str, Any]:
        return {
            "timeRanges": [[format_clock(rule.start), format_clock(rule.end)] for rule in self.time_rules],
            "timezone": self.timezone,
        }
