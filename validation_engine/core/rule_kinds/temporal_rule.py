"""
TemporalRule - shared base for rules that check a moment in a timezone.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Any

from . import _temporal
from .base_rule import BaseRule, ParamSpec, ValidationOutcome

TIMEZONE_PARAM = ParamSpec("timezone", default_factory=_temporal.default_timezone)


class TemporalRule(BaseRule):
    """
    Parses the value into a moment in the rule's timezone, then delegates to
    ``check_moment()``.

    Empty values are checked against the current time in the timezone; a
    value that is not a readable date/time fails with a format message.
    """

    def __init__(self, timezone: str = "UTC"):
        self.tz = _temporal.load_timezone(self.kind, timezone)
        self.timezone = self.tz.key

    def validate(self, attribute: str, value: Any) -> ValidationOutcome:
        try:
            moment = _temporal.to_local_datetime(value, self.tz)
        except ValueError:
            return ValidationOutcome.fail(_temporal.INVALID_FORMAT_MESSAGE.format(attribute=attribute))
        return self.check_moment(attribute, moment)

    @abstractmethod
    def check_moment(self, attribute: str, moment: datetime) -> ValidationOutcome:
        """Check a moment already expressed in this rule's timezone."""
