"""Data models for picker units, slots, key events and selection state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datepicker_tui.dates import DateValue
    from datepicker_tui.fields import FieldEditor


class Unit(Enum):
    """A date unit a field slot is bound to."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MERIDIEM = "meridiem"

    @property
    def is_calendar(self) -> bool:
        """Whether this unit is a real date component (not the AM/PM toggle)."""
        return self is not Unit.MERIDIEM


# Fixed order used when merging range specs against a reference date.
CALENDAR_UNITS: tuple[Unit, ...] = (
    Unit.YEAR,
    Unit.MONTH,
    Unit.DAY,
    Unit.HOUR,
    Unit.MINUTE,
    Unit.SECOND,
)


class PickerStatus(Enum):
    """Lifecycle status of a picker session."""

    EDITING = "editing"
    ANSWERED = "answered"


@dataclass(frozen=True)
class KeyPress:
    """A decoded key event.

    ``name`` is the key name ("up", "left", "enter", "5", ...) and
    ``value`` the printable character, when the key produces one.
    """

    name: str
    value: str | None = None

    @property
    def digit(self) -> int | None:
        """Return the digit carried by this key, or None."""
        char = self.value if self.value is not None else self.name
        if len(char) == 1 and char in "0123456789":
            return int(char)
        return None


@dataclass(frozen=True)
class Slot:
    """One compiled position of a format pattern.

    Literal slots have no editor and are skipped by cursor movement.
    """

    text: str
    editor: FieldEditor | None = None

    @property
    def is_field(self) -> bool:
        """Whether the cursor may select this slot."""
        return self.editor is not None


@dataclass
class SelectionState:
    """The live state of one picker session."""

    date: DateValue
    cursor: int = 0
    digits: int = 0
    status: PickerStatus = PickerStatus.EDITING

    def commit(self, date: DateValue) -> None:
        """Replace the current date with an already validated value."""
        self.date = date


@dataclass
class PickerOptions:
    """Options accepted when a picker session is created.

    ``minimum`` / ``maximum`` are sparse unit-to-int mappings, ``steps``
    maps unit names to positive step sizes and ``default`` is the initial
    date (``None`` for now).
    """

    format: list[str] | None = None
    minimum: dict[str, int] | None = None
    maximum: dict[str, int] | None = None
    steps: dict[str, int] = field(default_factory=dict)
    default: object | None = None
    message: str = "Select a date time: "
