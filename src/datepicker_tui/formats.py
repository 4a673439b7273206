"""Compilation of display patterns into field and literal slots."""

from __future__ import annotations

from collections.abc import Mapping

from datepicker_tui.fields import FieldEditor
from datepicker_tui.models import Slot, Unit

DEFAULT_FORMAT: tuple[str, ...] = ("Y", "/", "MM", "/", "DD", " ", "HH", ":", "mm", ":", "ss")

# Upper and lower case hour tokens both edit the 24h hour.
TOKEN_UNITS: dict[str, Unit] = {
    "Y": Unit.YEAR,
    "YY": Unit.YEAR,
    "YYYY": Unit.YEAR,
    "M": Unit.MONTH,
    "Mo": Unit.MONTH,
    "MM": Unit.MONTH,
    "MMM": Unit.MONTH,
    "MMMM": Unit.MONTH,
    "D": Unit.DAY,
    "Do": Unit.DAY,
    "DD": Unit.DAY,
    "H": Unit.HOUR,
    "HH": Unit.HOUR,
    "h": Unit.HOUR,
    "hh": Unit.HOUR,
    "m": Unit.MINUTE,
    "mm": Unit.MINUTE,
    "s": Unit.SECOND,
    "ss": Unit.SECOND,
    "A": Unit.MERIDIEM,
    "a": Unit.MERIDIEM,
}


def normalize_steps(steps: Mapping[str, object] | None) -> dict[Unit, int]:
    """Return a step size for every calendar unit.

    Accepts singular ("minute") or plural ("minutes") keys.  Missing,
    zero or negative steps become 1.

    Raises:
        ValueError: If a step value is not an integer.
    """
    steps = steps or {}
    result: dict[Unit, int] = {}
    for unit in Unit:
        if unit is Unit.MERIDIEM:
            continue
        raw = steps.get(unit.value, steps.get(f"{unit.value}s", 1))
        result[unit] = max(int(raw), 1)
    return result


def compile_format(
    pattern: list[str] | tuple[str, ...] | None = None,
    steps: Mapping[str, object] | None = None,
) -> list[Slot]:
    """Compile a display pattern into slots.

    Anything that is not a list or tuple of tokens falls back to
    ``DEFAULT_FORMAT``.  The result has one slot per token, in order.
    """
    if not isinstance(pattern, (list, tuple)):
        pattern = DEFAULT_FORMAT
    step_sizes = normalize_steps(steps)

    slots: list[Slot] = []
    for token in pattern:
        token = str(token)
        unit = TOKEN_UNITS.get(token)
        if unit is None:
            slots.append(Slot(text=token))
        else:
            editor = FieldEditor(unit, step_sizes.get(unit, 1))
            slots.append(Slot(text=token, editor=editor))
    return slots


def first_field(slots: list[Slot]) -> int | None:
    """Return the index of the first selectable slot, or None."""
    return next((i for i, slot in enumerate(slots) if slot.is_field), None)
