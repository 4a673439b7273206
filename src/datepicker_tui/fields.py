"""Per-unit edit behaviour for the editable slots of a picker."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from datepicker_tui.dates import DateOutOfBounds, DateValue
from datepicker_tui.models import SelectionState, Unit
from datepicker_tui.ranges import DateRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DigitRule:
    """How typed digits are accepted for one unit.

    The accumulator is reset (so the next keystroke starts a new number)
    once it reaches ``reset_at`` or when its last digit is above
    ``last_digit_max``.  A value is applied only inside
    ``[lowest, highest]``; ``lowest`` of None means unbounded.
    """

    lowest: int | None
    highest: int
    reset_at: int
    last_digit_max: int | None = None

    def overflows(self, value: int) -> bool:
        """Whether the accumulator must restart after *value*."""
        if value >= self.reset_at:
            return True
        return self.last_digit_max is not None and value % 10 > self.last_digit_max

    def accepts(self, value: int) -> bool:
        """Whether *value* is inside the unit's domain."""
        if self.lowest is not None and value < self.lowest:
            return False
        return value <= self.highest


DIGIT_RULES: dict[Unit, DigitRule] = {
    Unit.YEAR: DigitRule(lowest=None, highest=9999, reset_at=1000),
    Unit.MONTH: DigitRule(lowest=1, highest=12, reset_at=10, last_digit_max=1),
    Unit.DAY: DigitRule(lowest=1, highest=31, reset_at=10, last_digit_max=3),
    Unit.HOUR: DigitRule(lowest=0, highest=24, reset_at=10, last_digit_max=2),
    Unit.MINUTE: DigitRule(lowest=0, highest=59, reset_at=10, last_digit_max=5),
    Unit.SECOND: DigitRule(lowest=0, highest=59, reset_at=10, last_digit_max=5),
}


class FieldEditor:
    """Step and digit-entry behaviour bound to one date unit."""

    def __init__(self, unit: Unit, step: int = 1) -> None:
        """Initialize the editor.

        Args:
            unit: The unit this editor changes.
            step: Amount moved by one arrow press (ignored for meridiem).
        """
        self.unit = unit
        self.step_size = max(int(step), 1)

    def step(self, selection: SelectionState, limits: DateRange, direction: int) -> bool:
        """Move the unit by one step in *direction* (+1 or -1).

        The meridiem toggles between AM and PM whatever the direction.

        Returns:
            True if the new date was committed, False if it was rejected.
        """
        date = selection.date
        try:
            if self.unit is Unit.MERIDIEM:
                candidate = date.shifted(Unit.HOUR, -12 if date.get(Unit.HOUR) >= 12 else 12)
            else:
                candidate = date.shifted(self.unit, direction * self.step_size)
        except DateOutOfBounds:
            logger.debug("Step on %s leaves the representable range", self.unit.value)
            return False
        return self._save(selection, limits, candidate)

    def set_digits(self, selection: SelectionState, limits: DateRange, accumulated: int) -> bool:
        """Apply the typed number *accumulated* to the unit.

        Resets ``selection.digits`` when the number cannot grow any further.

        Returns:
            True if the date was committed, False if the value was dropped.
        """
        if self.unit is Unit.MERIDIEM:
            return True

        rule = DIGIT_RULES[self.unit]
        if rule.overflows(accumulated):
            selection.digits = 0
        if not rule.accepts(accumulated):
            return False

        try:
            candidate = selection.date.with_unit(self.unit, accumulated)
        except DateOutOfBounds:
            logger.debug("Typed %s=%d is not a representable date", self.unit.value, accumulated)
            return False
        return self._save(selection, limits, candidate)

    def _save(self, selection: SelectionState, limits: DateRange, candidate: DateValue) -> bool:
        """Commit *candidate* if it lies inside *limits*.

        A bound that cannot be represented for this candidate rejects it.
        """
        try:
            inside = limits.contains(candidate)
        except DateOutOfBounds:
            logger.debug("Rejected %s: bound not representable", candidate)
            return False
        if not inside:
            logger.debug("Rejected %s: outside %r", candidate, limits)
            return False
        selection.commit(candidate)
        return True

    def __repr__(self) -> str:
        return f"FieldEditor({self.unit.value!r}, step={self.step_size})"
