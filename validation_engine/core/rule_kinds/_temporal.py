"""
Date/time helpers shared by the day and time-of-day rule kinds.
"""

from datetime import date, datetime, time, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ...config import get_settings
from ..errors import InvalidRuleConfiguration
from ..models.enums import DayOfWeek

INVALID_FORMAT_MESSAGE = "The {attribute} is not in a valid time format."

_UTC_SUFFIXES = (" UTC", " GMT", "UTC", "GMT")


def default_timezone() -> str:
    """Timezone applied when a rule definition omits one."""
    return get_settings().default_timezone


def now(tz: ZoneInfo) -> datetime:
    """Current wall-clock time in ``tz``."""
    return datetime.now(tz)


def load_timezone(kind: str, name: Any) -> ZoneInfo:
    """
    Resolve an IANA timezone name.

    Raises:
        InvalidRuleConfiguration: If the name is not a known timezone
    """
    if isinstance(name, ZoneInfo):
        return name
    if not isinstance(name, str) or not name.strip():
        raise InvalidRuleConfiguration(kind, f"Invalid timezone: {name!r}")
    try:
        return ZoneInfo(name.strip())
    # A tz-database directory name ("America") surfaces as an OSError
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidRuleConfiguration(kind, f"Invalid timezone: {name!r}") from e


def parse_clock(kind: str, param: str, value: Any) -> time:
    """
    Parse a configured "HH:MM" bound into a minute-precision time.

    Raises:
        InvalidRuleConfiguration: If the value is not a valid clock time
    """
    if isinstance(value, time):
        return time(value.hour, value.minute)
    if isinstance(value, str):
        try:
            parsed = time.fromisoformat(value.strip())
        except ValueError:
            pass
        else:
            return time(parsed.hour, parsed.minute)
    raise InvalidRuleConfiguration(kind, f"{param} must be a time in HH:MM format, got {value!r}")


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


def parse_day_spec(kind: str, spec: Any) -> DayOfWeek:
    """
    Resolve a day-spec: a weekday, "Weekend", "Weekday" or "All".

    Raises:
        InvalidRuleConfiguration: If the value names no known day
    """
    if isinstance(spec, DayOfWeek):
        return spec
    if isinstance(spec, str):
        try:
            return DayOfWeek(spec)
        except ValueError:
            pass
    raise InvalidRuleConfiguration(kind, f"{spec!r} is not a valid day of the week.")


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_local_datetime(value: Any, tz: ZoneInfo) -> datetime:
    """
    Interpret an input value as a moment and express it in ``tz``.

    Empty values mean "now". Naive inputs are taken as UTC.

    Raises:
        ValueError: If the value cannot be read as a date/time
    """
    if is_empty(value):
        return now(tz)

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time(0, 0))
    elif isinstance(value, time):
        moment = datetime.combine(datetime.now(timezone.utc).date(), value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            moment = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value}") from e
    elif isinstance(value, str):
        moment = _parse_text(value)
    else:
        raise ValueError(f"Unsupported date/time value type: {type(value).__name__}")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        return moment.astimezone(tz)
    except OverflowError as e:
        raise ValueError(f"Date/time out of range in {tz.key}: {value!r}") from e


def _parse_text(text: str) -> datetime:
    text = text.strip()
    force_utc = False
    upper = text.upper()
    for suffix in _UTC_SUFFIXES:
        if upper.endswith(suffix) and len(text) > len(suffix):
            text = text[: -len(suffix)].strip()
            force_utc = True
            break

    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        # Time-only input ("08:30") is read as today
        parsed = time.fromisoformat(text)
        moment = datetime.combine(datetime.now(timezone.utc).date(), parsed)

    if force_utc:
        if moment.tzinfo is not None:
            raise ValueError(f"Conflicting timezone designators in {text!r}")
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def in_window(current: time, start: time, end: time) -> bool:
    """Inclusive window test; a window whose start is after its end wraps past midnight."""
    if start <= end:
        return start <= current <= end
    return current >= start or current <= end


def clock_of(moment: datetime) -> time:
    """Minute-precision time of day of a moment."""
    return time(moment.hour, moment.minute)
