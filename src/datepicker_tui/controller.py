"""Key-driven state machine of a picker session."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from datepicker_tui.dates import DateOutOfBounds
from datepicker_tui.formats import compile_format, first_field
from datepicker_tui.models import KeyPress, PickerOptions, PickerStatus, SelectionState, Slot
from datepicker_tui.ranges import DateRange

logger = logging.getLogger(__name__)

RenderCallback = Callable[[SelectionState], None]

CONFIRM_KEYS = frozenset({"enter", "return"})


class DatePickerController:
    """Route decoded key events to cursor moves and field edits.

    The controller owns the session's ``SelectionState``.  Keys are handled
    one at a time; after each one the optional ``render`` callback receives
    the state.  Once ``confirm`` has been called the state is frozen.
    """

    def __init__(
        self,
        options: PickerOptions | None = None,
        render: RenderCallback | None = None,
        now: datetime | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            options: Format, range, step and default settings.
            render: Called with the state after every handled key.
            now: Reference time used for a missing default and for
                range bounds read as standalone dates.
        """
        self.options = options or PickerOptions()
        self._render = render
        self._limits = DateRange(self.options.minimum, self.options.maximum)
        self._slots = compile_format(self.options.format, self.options.steps)

        start = first_field(self._slots)
        self._state = SelectionState(
            date=self._limits.initial_date(self.options.default, now=now),
            cursor=start if start is not None else 0,
        )
        if start is None:
            logger.warning("Format %r has no editable field", self.options.format)

    @property
    def state(self) -> SelectionState:
        """The live selection state."""
        return self._state

    @property
    def slots(self) -> list[Slot]:
        """The compiled slots, in pattern order."""
        return self._slots

    @property
    def limits(self) -> DateRange:
        """The session's min/max range."""
        return self._limits

    @property
    def answered(self) -> bool:
        """Whether the session has been confirmed."""
        return self._state.status is PickerStatus.ANSWERED

    @property
    def value(self) -> datetime:
        """The current date as a plain datetime."""
        return self._state.date.to_datetime()

    def handle_key(self, key: KeyPress) -> None:
        """Process one key event and trigger a render."""
        if self.answered:
            return
        if key.name in CONFIRM_KEYS:
            self.confirm()
            return

        state = self._state
        match key.name:
            case "right":
                state.cursor = self._next_field(state.cursor)
            case "left":
                state.cursor = self._previous_field(state.cursor)
            case "up":
                self._step(1)
            case "down":
                self._step(-1)

        digit = key.digit
        if digit is None:
            state.digits = 0
        else:
            state.digits = state.digits * 10 + digit
            slot = self._current_slot()
            if slot is not None:
                slot.editor.set_digits(state, self._limits, state.digits)

        self.render()

    def confirm(self) -> datetime:
        """Finish the session and return the picked date."""
        if not self.answered:
            self._state.status = PickerStatus.ANSWERED
            self._state.digits = 0
            logger.debug("Picked %s", self._state.date)
        return self.value

    def render(self) -> None:
        """Hand the current state to the render callback, if any."""
        if self._render is not None:
            self._render(self._state)

    def _current_slot(self) -> Slot | None:
        """Return the selected slot when it is a field."""
        if 0 <= self._state.cursor < len(self._slots):
            slot = self._slots[self._state.cursor]
            if slot.is_field:
                return slot
        return None

    def _next_field(self, cursor: int) -> int:
        """Index of the first field after *cursor*, or *cursor* itself."""
        for index in range(cursor + 1, len(self._slots)):
            if self._slots[index].is_field:
                return index
        return cursor

    def _previous_field(self, cursor: int) -> int:
        """Index of the last field at or before ``cursor - 1``, or *cursor* itself."""
        for index in range(min(cursor - 1, len(self._slots) - 1), -1, -1):
            if self._slots[index].is_field:
                return index
        return cursor

    def _step(self, direction: int) -> None:
        """Step the selected field, falling back to the violated bound."""
        slot = self._current_slot()
        if slot is None:
            return
        state = self._state
        if slot.editor.step(state, self._limits, direction):
            return

        try:
            if direction > 0:
                bound = self._limits.resolve_max(state.date)
            else:
                bound = self._limits.resolve_min(state.date)
        except DateOutOfBounds:
            logger.debug("Step %+d rejected, bound not representable", direction)
            return
        if bound is not None:
            logger.debug("Step %+d rejected, using bound %s", direction, bound)
            state.commit(bound)

