"""Projection of a selection state into display text."""

from __future__ import annotations

from rich.text import Text

from datepicker_tui.models import PickerStatus, SelectionState, Slot

ACTIVE_STYLE = "reverse"
ANSWERED_STYLE = "cyan"


def slot_text(state: SelectionState, slot: Slot) -> str:
    """Render one slot; literal slots render their text verbatim."""
    if slot.is_field:
        return state.date.format(slot.text)
    return slot.text


def render_plain(state: SelectionState, slots: list[Slot]) -> str:
    """Return the value as plain text, without any highlighting."""
    return "".join(slot_text(state, slot) for slot in slots)


def render_prompt(message: str, state: SelectionState, slots: list[Slot]) -> Text:
    """Build the prompt line for *state*.

    While editing, the slot under the cursor is shown reversed.  Once the
    session is answered the whole value is shown in cyan.
    """
    text = Text(message)
    if state.status is PickerStatus.ANSWERED:
        text.append(render_plain(state, slots), style=ANSWERED_STYLE)
        return text

    for index, slot in enumerate(slots):
        style = ACTIVE_STYLE if index == state.cursor and slot.is_field else ""
        text.append(slot_text(state, slot), style=style)
    return text
