"""
DayOfWeekRule - validates that a date falls on a given day-spec.
"""

from datetime import datetime
from typing import Any

from ..models.enums import DayOfWeek
from ._temporal import parse_day_spec
from .base_rule import ParamSpec, ValidationOutcome
from .temporal_rule import TIMEZONE_PARAM, TemporalRule


class DayOfWeekRule(TemporalRule):
    """
    Passes when the value's weekday, in ``timezone``, matches ``day``.

    ``day`` is a weekday ("Monday"), "Weekend" (Saturday and Sunday),
    "Weekday" (Monday to Friday) or "All" (always passes).

    Example:
        DayOfWeekRule("Weekend", timezone="Europe/Paris")
    """

    kind = "DayOfWeek"
    PARAMETERS = (
        ParamSpec("day", aliases=("dayOfWeek",)),
        TIMEZONE_PARAM,
    )

    def __init__(self, day: DayOfWeek | str, timezone: str = "UTC"):
        self.day = parse_day_spec(self.kind, day)
        super().__init__(timezone)

    def matches(self, moment: datetime) -> bool:
        return self.day.matches(DayOfWeek.days()[moment.weekday()])

    def check_moment(self, attribute: str, moment: datetime) -> ValidationOutcome:
        if self.matches(moment):
            return ValidationOutcome.ok()
        return ValidationOutcome.fail(
            f"The {attribute} is not within the allowed day-of-week: {self.day.value}."
        )

    def snapshot(self) -> dict[str, Any]:
        return {"day": self.day.value, "timezone": self.timezone}
