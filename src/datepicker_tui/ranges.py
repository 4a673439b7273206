"""Resolution of sparse min/max range specs into concrete date bounds.

A range spec such as ``{"hour": 6}`` constrains only the units it names.
To compare it with a candidate date, the missing units are filled in from
that candidate, so ``{"hour": 6}`` means "6 o'clock on the candidate's own
day".
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime

from datepicker_tui.dates import DateOutOfBounds, DateValue
from datepicker_tui.models import CALENDAR_UNITS, Unit

logger = logging.getLogger(__name__)

RangeSpec = Mapping[str, int]


def normalize_range(spec: Mapping[str, object] | None) -> dict[str, int] | None:
    """Coerce a user supplied range spec to ``{unit name: int}``.

    Keys that are not one of the six calendar units are dropped.

    Raises:
        ValueError: If a value cannot be converted to an int.
    """
    if spec is None:
        return None
    names = {unit.value for unit in CALENDAR_UNITS}
    return {key: int(value) for key, value in spec.items() if key in names}


def resolve_bound(reference: DateValue, spec: RangeSpec | None) -> DateValue | None:
    """Merge *spec* over *reference* into a concrete date.

    Returns None when *spec* is missing or names none of the calendar units.
    """
    if not spec:
        return None

    merged: dict[str, int] = {}
    count = 0
    for unit in CALENDAR_UNITS:
        if unit.value in spec:
            merged[unit.value] = int(spec[unit.value])
            count += 1
        else:
            merged[unit.value] = reference.get(unit)

    if not count:
        return None
    return DateValue.from_units(**merged)


def is_valid(candidate: DateValue, minimum: RangeSpec | None, maximum: RangeSpec | None) -> bool:
    """Return whether *candidate* lies within the bounds resolved against it."""
    low = resolve_bound(candidate, minimum)
    high = resolve_bound(candidate, maximum)
    if low is not None and candidate.is_before(low):
        return False
    if high is not None and candidate.is_after(high):
        return False
    return True


def bound_as_date(spec: RangeSpec | None, now: DateValue) -> DateValue | None:
    """Turn a range spec into a standalone date, without a candidate to merge with.

    Year, month and day are taken from *now* until the first one the spec
    names; the date units after it default to their lowest value and all
    time units default to 0.  ``{"month": 5}`` is May 1st of the current
    year at midnight, ``{"hour": 6}`` is today at 06:00.
    """
    if not spec or not any(unit.value in spec for unit in CALENDAR_UNITS):
        return None

    values: dict[str, int] = {}
    inherit = True
    for unit, lowest in ((Unit.YEAR, None), (Unit.MONTH, 1), (Unit.DAY, 1)):
        if unit.value in spec:
            inherit = False
            values[unit.value] = int(spec[unit.value])
        elif inherit:
            values[unit.value] = now.get(unit)
        else:
            values[unit.value] = lowest
    for unit in (Unit.HOUR, Unit.MINUTE, Unit.SECOND):
        values[unit.value] = int(spec.get(unit.value, 0))
    return DateValue.from_units(**values)


class DateRange:
    """The min/max constraint of one picker session."""

    def __init__(self, minimum: RangeSpec | None = None, maximum: RangeSpec | None = None) -> None:
        """Initialize the range.

        Args:
            minimum: Sparse lower bound, or None.
            maximum: Sparse upper bound, or None.
        """
        self.minimum = normalize_range(minimum)
        self.maximum = normalize_range(maximum)

    def resolve_min(self, reference: DateValue) -> DateValue | None:
        """Return the lower bound resolved against *reference*."""
        return resolve_bound(reference, self.minimum)

    def resolve_max(self, reference: DateValue) -> DateValue | None:
        """Return the upper bound resolved against *reference*."""
        return resolve_bound(reference, self.maximum)

    def contains(self, candidate: DateValue) -> bool:
        """Return whether *candidate* is inside the range."""
        return is_valid(candidate, self.minimum, self.maximum)

    def clamp(self, date: DateValue) -> DateValue:
        """Return *date*, or the bound it violates.

        A bound that cannot be represented against *date* is skipped.
        """
        for resolve, violates in (
            (self.resolve_min, date.is_before),
            (self.resolve_max, date.is_after),
        ):
            try:
                bound = resolve(date)
            except DateOutOfBounds:
                logger.warning("Skipping unrepresentable bound for %s", date)
                continue
            if bound is not None and violates(bound):
                return bound
        return date

    def initial_date(self, default: object | None = None, now: datetime | None = None) -> DateValue:
        """Pick the starting date of a session.

        The start is the earliest of *default*, the minimum bound and the
        maximum bound (each read as a standalone date), then clamped so it
        never starts out violating a bound.
        """
        today = DateValue.parse(None, now=now)
        candidates = [DateValue.parse(default, now=now)]
        for spec in (self.minimum, self.maximum):
            try:
                bound = bound_as_date(spec, today)
            except DateOutOfBounds:
                logger.warning("Ignoring unrepresentable range bound %r", spec)
                continue
            if bound is not None:
                candidates.append(bound)
        return self.clamp(min(candidates))

    def __repr__(self) -> str:
        return f"DateRange(minimum={self.minimum!r}, maximum={self.maximum!r})"
