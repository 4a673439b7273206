"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from datepicker_tui.controller import DatePickerController
from datepicker_tui.dates import DateValue
from datepicker_tui.models import KeyPress, PickerOptions, SelectionState

NOW = datetime(2020, 1, 1, 9, 30, 0)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Point the config file at an empty temporary location."""
    config_path = tmp_path / ".config" / "datepicker-tui" / "config.toml"
    monkeypatch.setattr("datepicker_tui.config._CONFIG_PATH", config_path)
    return config_path


@pytest.fixture
def now() -> datetime:
    """The fixed reference time used by picker sessions under test."""
    return NOW


@pytest.fixture
def selection() -> SelectionState:
    """A selection state at 2020-01-15 09:30:00."""
    return SelectionState(date=DateValue(datetime(2020, 1, 15, 9, 30, 0)))


def make_controller(**kwargs) -> DatePickerController:
    """Build a controller from PickerOptions keyword arguments at NOW."""
    return DatePickerController(PickerOptions(**kwargs), now=NOW)


def press(controller: DatePickerController, *keys: str) -> None:
    """Feed key names to *controller*; single characters carry themselves as value."""
    for key in keys:
        controller.handle_key(KeyPress(key, key if len(key) == 1 else None))
