"""
Enumerations shared by the models and the rule kinds.
"""

from enum import Enum


class ActiveStatus(str, Enum):
    """Active or inactive status of a validator or a validator/rule association."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class DayOfWeek(str, Enum):
    """
    A day of the week, or a group of days.

    Lookup by value is case-insensitive and also accepts three-letter
    abbreviations, so ``DayOfWeek("mon")`` is ``DayOfWeek.MONDAY``.
    """

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
    WEEKEND = "Weekend"
    WEEKDAY = "Weekday"
    ALL = "All"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        needle = value.strip().lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        if len(needle) == 3:
            for member in cls.days():
                if member.value.lower().startswith(needle):
                    return member
        return None

    @classmethod
    def days(cls) -> list["DayOfWeek"]:
        """The seven concrete days, Monday first (matches ``datetime.weekday()``)."""
        return [
            cls.MONDAY,
            cls.TUESDAY,
            cls.WEDNESDAY,
            cls.THURSDAY,
            cls.FRIDAY,
            cls.SATURDAY,
            cls.SUNDAY,
        ]

    @classmethod
    def weekend(cls) -> list["DayOfWeek"]:
        return [cls.SATURDAY, cls.SUNDAY]

    @classmethod
    def weekdays(cls) -> list["DayOfWeek"]:
        return cls.days()[:5]

    def matches(self, day: "DayOfWeek") -> bool:
        """True if the concrete ``day`` is selected by this day-spec."""
        if self is DayOfWeek.ALL:
            return True
        if self is DayOfWeek.WEEKEND:
            return day in DayOfWeek.weekend()
        if self is DayOfWeek.WEEKDAY:
            return day in DayOfWeek.weekdays()
        return day is self


class TimeOfDay(str, Enum):
    """Times of the day in 15-minute intervals."""

    T00_00 = "00:00"
    T00_15 = "00:15"
    T00_30 = "00:30"
    T00_45 = "00:45"
    T01_00 = "01:00"
    T01_15 = "01:15"
    T01_30 = "01:30"
    T01_45 = "01:45"
    T02_00 = "02:00"
    T02_15 = "02:15"
    T02_30 = "02:30"
    T02_45 = "02:45"
    T03_00 = "03:00"
    T03_15 = "03:15"
    T03_30 = "03:30"
    T03_45 = "03:45"
    T04_00 = "04:00"
    T04_15 = "04:15"
    T04_30 = "04:30"
    T04_45 = "04:45"
    T05_00 = "05:00"
    T05_15 = "05:15"
    T05_30 = "05:30"
    T05_45 = "05:45"
    T06_00 = "06:00"
    T06_15 = "06:15"
    T06_30 = "06:30"
    T06_45 = "06:45"
    T07_00 = "07:00"
    T07_15 = "07:15"
    T07_30 = "07:30"
    T07_45 = "07:45"
    T08_00 = "08:00"
    T08_15 = "08:15"
    T08_30 = "08:30"
    T08_45 = "08:45"
    T09_00 = "09:00"
    T09_15 = "09:15"
    T09_30 = "09:30"
    T09_45 = "09:45"
    T10_00 = "10:00"
    T10_15 = "10:15"
    T10_30 = "10:30"
    T10_45 = "10:45"
    T11_00 = "11:00"
    T11_15 = "11:15"
    T11_30 = "11:30"
    T11_45 = "11:45"
    T12_00 = "12:00"
    T12_15 = "12:15"
    T12_30 = "12:30"
    T12_45 = "12:45"
    T13_00 = "13:00"
    T13_15 = "13:15"
    T13_30 = "13:30"
    T13_45 = "13:45"
    T14_00 = "14:00"
    T14_15 = "14:15"
    T14_30 = "14:30"
    T14_45 = "14:45"
    T15_00 = "15:00"
    T15_15 = "15:15"
    T15_30 = "15:30"
    T15_45 = "15:45"
    T16_00 = "16:00"
    T16_15 = "16:15"
    T16_30 = "16:30"
    T16_45 = "16:45"
    T17_00 = "17:00"
    T17_15 = "17:15"
    T17_30 = "17:30"
    T17_45 = "17:45"
    T18_00 = "18:00"
    T18_15 = "18:15"
    T18_30 = "18:30"
    T18_45 = "18:45"
    T19_00 = "19:00"
    T19_15 = "19:15"
    T19_30 = "19:30"
    T19_45 = "19:45"
    T20_00 = "20:00"
    T20_15 = "20:15"
    T20_30 = "20:30"
    T20_45 = "20:45"
    T21_00 = "21:00"
    T21_15 = "21:15"
    T21_30 = "21:30"
    T21_45 = "21:45"
    T22_00 = "22:00"
    T22_15 = "22:15"
    T22_30 = "22:30"
    T22_45 = "22:45"
    T23_00 = "23:00"
    T23_15 = "23:15"
    T23_30 = "23:30"
    T23_45 = "23:45"

    @classmethod
    def _slots(cls, step: int) -> list["TimeOfDay"]:
        return [member for member in cls if int(member.value[3:]) % step == 0]

    @classmethod
    def hours(cls) -> list["TimeOfDay"]:
        """Whole-hour slots (00:00, 01:00, ...)."""
        return cls._slots(60)

    @classmethod
    def minutes30(cls) -> list["TimeOfDay"]:
        """Half-hour slots (00:00, 00:30, ...)."""
        return cls._slots(30)

    @classmethod
    def minutes15(cls) -> list["TimeOfDay"]:
        """Every quarter-hour slot."""
        return cls._slots(15)
