"""
Rule kind implementations.

Provides the enumeration, membership and day/time rules that stored rule
definitions compile into.
"""

from .base_rule import BaseRule, ParamSpec, ValidationOutcome
from .day_of_week_rule import DayOfWeekRule
from .day_time_rule import DayTimeRule
from .days_of_week_rule import DaysOfWeekRule
from .enum_rule import EnumRule, register_enum, registered_enums
from .none_of_rule import NoneOfRule
from .one_of_rule import OneOfRule
from .temporal_rule import TemporalRule
from .time_of_day_rule import TimeOfDayRule
from .times_of_day_rule import TimesOfDayRule

__all__ = [
    "BaseRule",
    "ParamSpec",
    "ValidationOutcome",
    "TemporalRule",
    "EnumRule",
    "register_enum",
    "registered_enums",
    "OneOfRule",
    "NoneOfRule",
    "DayOfWeekRule",
    "DaysOfWeekRule",
    "TimeOfDayRule",
    "TimesOfDayRule",
    "DayTimeRule",
]
