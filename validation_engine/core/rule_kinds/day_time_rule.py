"""
DayTimeRule - validates a day-spec and a daily time window together.
"""

from datetime import datetime, time
from typing import Any

from ..models.enums import DayOfWeek
from .base_rule import ParamSpec, ValidationOutcome
from .day_of_week_rule import DayOfWeekRule
from .temporal_rule import TIMEZONE_PARAM, TemporalRule
from .time_of_day_rule import TimeOfDayRule


class DayTimeRule(TemporalRule):
    """
    Logical AND of a DayOfWeekRule and a TimeOfDayRule in one timezone.

    Defaults make the rule always pass (all days, 00:00 to 23:59). When both
    sub-rules fail, both messages are reported.

    Example:
        DayTimeRule("Monday", "09:00", "17:00", "America/New_York")
    """

    kind = "DayTime"
    PARAMETERS = (
        ParamSpec("day", aliases=("dayOfWeek",), default=DayOfWeek.ALL.value),
        ParamSpec("start", aliases=("startTime",), default="00:00"),
        ParamSpec("end", aliases=("endTime",), default="23:59"),
        TIMEZONE_PARAM,
    )

    def __init__(
        self,
        day: DayOfWeek | str = DayOfWeek.ALL,
        start: str | time = "00:00",
        end: str | time = "23:59",
        timezone: str = "UTC",
    ):
        super().__init__(timezone)
        self.day_rule = DayOfWeekRule(day, self.timezone)
        self.time_rule = TimeOfDayRule(start, end, self.timezone)

    def check_moment(self, attribute: str, moment: datetime) -> ValidationOutcome:
        return ValidationOutcome.combine(
            self.day_rule.check_moment(attribute, moment),
            self.time_rule.check_moment(attribute, moment),
        )

    def snapshot(self) -> dict[str, Any]:
        return {**self.day_rule.snapshot(), **self.time_rule.snapshot()}
