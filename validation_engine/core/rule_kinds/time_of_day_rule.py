"""
TimeOfDayRule - validates that a time falls within a daily window.
"""

from datetime import datetime, time
from typing import Any

from ._temporal import clock_of, format_clock, in_window, parse_clock
from .base_rule import ParamSpec, ValidationOutcome
from .temporal_rule import TIMEZONE_PARAM, TemporalRule


class TimeOfDayRule(TemporalRule):
    """
    Passes when the value's time of day, in ``timezone``, is within
    [start, end]. Bounds are inclusive and compared to the minute; a window
    whose start is after its end spans midnight.

    Example:
        TimeOfDayRule("09:00", "17:00", "America/New_York")
    """

    kind = "TimeOfDay"
    PARAMETERS = (
        ParamSpec("start", aliases=("startTime",), default="00:00"),
        ParamSpec("end", aliases=("endTime",), default="23:59"),
        TIMEZONE_PARAM,
    )

    def __init__(self, start: str | time = "00:00", end: str | time = "23:59", timezone: str = "UTC"):
        self.start = parse_clock(self.kind, "start", start)
        self.end = parse_clock(self.kind, "end", end)
        super().__init__(timezone)

    def contains(self, moment: datetime) -> bool:
        return in_window(clock_of(moment), self.start, self.end)

    def check_moment(self, attribute: str, moment: datetime) -> ValidationOutcome:
        if self.contains(moment):
            return ValidationOutcome.ok()
        return ValidationOutcome.fail(
            f"The {attribute} is not within the allowed time window "
            f"from {format_clock(self.start)} to {format_clock(self.end)}."
        )

    def snapshot(self) -> dict[str, Any]:
        return {
            "start": format_clock(self.start),
            "end": format_clock(self.end),
            "timezone": self.timezone,
        }
