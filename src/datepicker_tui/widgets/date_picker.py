"""Segmented date/time picker widget."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from datepicker_tui.controller import CONFIRM_KEYS, DatePickerController
from datepicker_tui.models import KeyPress, PickerOptions, SelectionState
from datepicker_tui.renderer import render_plain, render_prompt


class DatePicker(Widget, can_focus=True):
    """A one-line date editor driven by arrow and digit keys.

    Left/right move between fields, up/down step the selected field and
    digits type a value into it.  Enter confirms and posts ``Picked``;
    after that the widget ignores further keys.
    """

    DEFAULT_CSS = """
    DatePicker {
        height: 1;
        width: auto;
    }
    """

    # Keys left to the app and screen bindings.
    _PASSTHROUGH_KEYS = frozenset({"tab", "shift+tab", "escape"})

    class Picked(Message):
        """Posted when the user confirms a date."""

        def __init__(self, picker: DatePicker, value: datetime) -> None:
            super().__init__()
            self.picker = picker
            self.value = value

        @property
        def control(self) -> DatePicker:
            """The picker that was confirmed."""
            return self.picker

    def __init__(
        self,
        options: PickerOptions | None = None,
        *,
        now: datetime | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the picker.

        Args:
            options: Format, range, step and default settings.
            now: Reference time, mainly for tests.
            name: Widget name.
            id: Widget id.
            classes: CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.controller = DatePickerController(options, render=self._on_state_changed, now=now)

    @property
    def value(self) -> datetime:
        """The date currently shown."""
        return self.controller.value

    @property
    def text(self) -> str:
        """The date currently shown, as plain text."""
        return render_plain(self.controller.state, self.controller.slots)

    def render(self) -> Text:
        """Render the prompt message followed by the segmented value."""
        controller = self.controller
        return render_prompt(controller.options.message, controller.state, controller.slots)

    def _on_state_changed(self, state: SelectionState) -> None:
        """Redraw after the controller handled a key."""
        self.refresh()

    def on_key(self, event: events.Key) -> None:
        """Translate Textual key events for the controller."""
        if self.controller.answered or event.key in self._PASSTHROUGH_KEYS:
            return

        event.prevent_default()
        event.stop()

        if event.key in CONFIRM_KEYS:
            value = self.controller.confirm()
            self.refresh()
            self.post_message(self.Picked(self, value))
            return

        char = event.character if event.is_printable else None
        self.controller.handle_key(KeyPress(event.key, char))
