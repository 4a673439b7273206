"""Immutable date value with per-unit get/set/shift and token formatting."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta

from dateutil import parser as dtparser
from dateutil.relativedelta import relativedelta

from datepicker_tui.models import Unit


class DateOutOfBounds(ValueError):
    """Raised when a date operation produces a value datetime cannot hold."""


_MONTH_NAMES = [
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_TIME_DELTAS: dict[Unit, str] = {
    Unit.DAY: "days",
    Unit.HOUR: "hours",
    Unit.MINUTE: "minutes",
    Unit.SECOND: "seconds",
}


def ordinal(number: int) -> str:
    """Return *number* with its English ordinal suffix (1st, 2nd, 11th...)."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


class DateValue:
    """A point in time that is never mutated in place.

    Every operation returns a new ``DateValue``.  Months are 1-based.
    """

    __slots__ = ("_dt",)

    def __init__(self, value: datetime) -> None:
        """Wrap a datetime, dropping microseconds and time zone."""
        self._dt = value.replace(microsecond=0, tzinfo=None)

    @classmethod
    def parse(cls, value: object | None, now: datetime | None = None) -> DateValue:
        """Build a DateValue from a datetime, a date string or None (now).

        Raises:
            ValueError: If a string cannot be parsed as a date.
        """
        if value is None:
            return cls(now or datetime.now())
        if isinstance(value, DateValue):
            return value
        if isinstance(value, datetime):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls(dtparser.parse(value))
            except (ValueError, OverflowError) as exc:
                raise ValueError(f"Cannot parse date: {value!r}") from exc
        # A plain date (datetime subclasses were handled above).
        return cls(datetime(value.year, value.month, value.day))

    @classmethod
    def from_units(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> DateValue:
        """Build a DateValue, clamping the day to the end of the month.

        Raises:
            DateOutOfBounds: If the units do not form a representable date.
        """
        try:
            day = max(1, min(day, days_in_month(year, month)))
            base = datetime(year, month, day)
            return cls(base + timedelta(hours=hour, minutes=minute, seconds=second))
        except (ValueError, OverflowError) as exc:
            raise DateOutOfBounds(str(exc)) from exc

    def to_datetime(self) -> datetime:
        """Return the wrapped datetime."""
        return self._dt

    def get(self, unit: Unit) -> int:
        """Return the value of a calendar unit."""
        if unit is Unit.MERIDIEM:
            return 1 if self._dt.hour >= 12 else 0
        return getattr(self._dt, unit.value)

    def with_unit(self, unit: Unit, value: int) -> DateValue:
        """Return a copy with one unit set.

        Year and month clamp the day to the new month's length.  Day, hour,
        minute and second overflow into the next larger unit (day 31 in
        April is May 1st, hour 24 is midnight of the next day).

        Raises:
            DateOutOfBounds: If the result cannot be represented.
        """
        dt = self._dt
        try:
            match unit:
                case Unit.YEAR:
                    return DateValue(dt + relativedelta(year=value))
                case Unit.MONTH:
                    if not 1 <= value <= 12:
                        raise DateOutOfBounds(f"month must be in 1..12, not {value}")
                    return DateValue(dt + relativedelta(month=value))
                case Unit.DAY:
                    return DateValue(dt.replace(day=1) + timedelta(days=value - 1))
                case Unit.HOUR:
                    return DateValue(dt.replace(hour=0) + timedelta(hours=value))
                case Unit.MINUTE:
                    return DateValue(dt.replace(minute=0) + timedelta(minutes=value))
                case Unit.SECOND:
                    return DateValue(dt.replace(second=0) + timedelta(seconds=value))
                case Unit.MERIDIEM:
                    raise DateOutOfBounds("meridiem has no numeric value")
        except DateOutOfBounds:
            raise
        except (ValueError, OverflowError) as exc:
            raise DateOutOfBounds(str(exc)) from exc

    def shifted(self, unit: Unit, amount: int) -> DateValue:
        """Return a copy moved by *amount* of *unit*.

        Month and year shifts clamp the day to the target month's length.

        Raises:
            DateOutOfBounds: If the result cannot be represented.
        """
        try:
            match unit:
                case Unit.YEAR:
                    return DateValue(self._dt + relativedelta(years=amount))
                case Unit.MONTH:
                    return DateValue(self._dt + relativedelta(months=amount))
                case Unit.MERIDIEM:
                    return DateValue(self._dt + timedelta(hours=12 * amount))
                case _:
                    delta = timedelta(**{_TIME_DELTAS[unit]: amount})
                    return DateValue(self._dt + delta)
        except (ValueError, OverflowError) as exc:
            raise DateOutOfBounds(str(exc)) from exc

    def format(self, token: str) -> str:
        """Render a single format token; unknown tokens are returned verbatim."""
        dt = self._dt
        hour12 = dt.hour % 12 or 12
        match token:
            case "Y" | "YYYY":
                return f"{dt.year:04d}"
            case "YY":
                return f"{dt.year % 100:02d}"
            case "M":
                return str(dt.month)
            case "Mo":
                return ordinal(dt.month)
            case "MM":
                return f"{dt.month:02d}"
            case "MMM":
                return _MONTH_NAMES[dt.month][:3]
            case "MMMM":
                return _MONTH_NAMES[dt.month]
            case "D":
                return str(dt.day)
            case "Do":
                return ordinal(dt.day)
            case "DD":
                return f"{dt.day:02d}"
            case "H":
                return str(dt.hour)
            case "HH":
                return f"{dt.hour:02d}"
            case "h":
                return str(hour12)
            case "hh":
                return f"{hour12:02d}"
            case "m":
                return str(dt.minute)
            case "mm":
                return f"{dt.minute:02d}"
            case "s":
                return str(dt.second)
            case "ss":
                return f"{dt.second:02d}"
            case "A":
                return "PM" if dt.hour >= 12 else "AM"
            case "a":
                return "pm" if dt.hour >= 12 else "am"
            case _:
                return token

    def is_before(self, other: DateValue) -> bool:
        """Whether this date is strictly earlier than *other*."""
        return self._dt < other._dt

    def is_after(self, other: DateValue) -> bool:
        """Whether this date is strictly later than *other*."""
        return self._dt > other._dt

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateValue):
            return NotImplemented
        return self._dt == other._dt

    def __lt__(self, other: DateValue) -> bool:
        return self._dt < other._dt

    def __le__(self, other: DateValue) -> bool:
        return self._dt <= other._dt

    def __hash__(self) -> int:
        return hash(self._dt)

    def __repr__(self) -> str:
        return f"DateValue({self._dt.isoformat()})"
