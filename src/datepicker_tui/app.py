"""Main Textual application for datepicker-tui."""

from __future__ import annotations

from datetime import datetime

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from datepicker_tui.config import load_theme
from datepicker_tui.models import PickerOptions
from datepicker_tui.widgets.date_picker import DatePicker

_FOOTER_TEXT = (
    "\\[←/→] Field  \\[↑/↓] Change  \\[0-9] Type  \\[Enter] Confirm  \\[Esc/q] Cancel"
)


class DatePickerApp(App[datetime | None]):
    """Ask for one date and exit with it, or with None when cancelled."""

    TITLE = "datepicker-tui"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("q", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, options: PickerOptions | None = None, now: datetime | None = None) -> None:
        """Initialize the app.

        Args:
            options: Picker settings.
            now: Reference time passed to the picker.
        """
        super().__init__()
        self.options = options or PickerOptions()
        self.now = now
        saved_theme = load_theme()
        if saved_theme:
            self.theme = saved_theme

    def compose(self) -> ComposeResult:
        """Create the app layout."""
        yield DatePicker(self.options, now=self.now, id="picker")
        yield Static(_FOOTER_TEXT, id="footer-bar")

    def on_mount(self) -> None:
        """Give the picker keyboard focus."""
        self.query_one("#picker", DatePicker).focus()

    def on_date_picker_picked(self, event: DatePicker.Picked) -> None:
        """Exit with the confirmed date."""
        self.exit(event.value)

    def action_cancel(self) -> None:
        """Exit without a date."""
        self.exit(None)
