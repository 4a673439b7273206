"""Configuration resolution for datepicker-tui.

Priority order (highest to lowest):
1. CLI arguments (--format, --min, --max, --step, --default, --message)
2. ~/.config/datepicker-tui/config.toml
3. Built-in defaults
"""

from __future__ import annotations

import argparse
import shlex
import sys
from datetime import datetime
from pathlib import Path

from dateutil import parser as dtparser

from datepicker_tui.models import PickerOptions

_CONFIG_PATH = Path.home() / ".config" / "datepicker-tui" / "config.toml"

_UNIT_NAMES = ("year", "month", "day", "hour", "minute", "second")


class ConfigError(Exception):
    """Raised when a configuration value cannot be understood."""


def _load_config_dict() -> dict:
    """Load the full config.toml as a dict, or return empty dict on failure."""
    if not _CONFIG_PATH.exists():
        return {}
    try:
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except Exception:
        return {}


def load_theme() -> str | None:
    """Return the saved theme name, or None if not set.

    Returns:
        Theme name string (e.g. 'textual-dark'), or None.
    """
    return _load_config_dict().get("theme")


def _unit_entry(key: str, value: object, option: str) -> tuple[str, int]:
    """Validate one ``unit=value`` pair and return it normalised.

    Raises:
        ConfigError: If the unit is unknown or the value is not an integer.
    """
    key = key.strip().lower()
    if key.endswith("s") and key[:-1] in _UNIT_NAMES:
        key = key[:-1]
    if key not in _UNIT_NAMES:
        raise ConfigError(f"{option}: unknown unit {key!r}")
    if isinstance(value, bool):
        raise ConfigError(f"{option}: {key} must be an integer, got {value!r}")
    try:
        return key, int(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"{option}: {key} must be an integer, got {value!r}") from exc


def parse_unit_map(raw: str, option: str) -> dict[str, int]:
    """Parse ``"hour=6,minute=30"`` into ``{"hour": 6, "minute": 30}``.

    Plural unit names ("minutes") are accepted.

    Args:
        raw: The comma separated ``unit=value`` pairs.
        option: Option name used in error messages.

    Raises:
        ConfigError: If a pair is malformed or names an unknown unit.
    """
    result: dict[str, int] = {}
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        if not sep:
            raise ConfigError(f"{option}: expected unit=value, got {part!r}")
        key, number = _unit_entry(key, value, option)
        result[key] = number
    return result


def _table_to_unit_map(table: object, option: str) -> dict[str, int] | None:
    """Validate a ``[min]``/``[max]``/``[steps]`` table from config.toml."""
    if table is None:
        return None
    if not isinstance(table, dict):
        raise ConfigError(f"config.toml: [{option}] must be a table")
    return dict(_unit_entry(str(key), value, option) for key, value in table.items())


def parse_format(raw: str) -> list[str]:
    """Split a format string into tokens.

    Tokens are separated by spaces; quote a literal to keep a space,
    e.g. ``YYYY - MM - DD " " HH : mm``.

    Raises:
        ConfigError: If the quoting is unbalanced.
    """
    try:
        tokens = shlex.split(raw)
    except ValueError as exc:
        raise ConfigError(f"--format: {exc}") from exc
    if not tokens:
        raise ConfigError("--format: no tokens given")
    return tokens


def parse_default(raw: str) -> datetime:
    """Parse the --default date.

    Raises:
        ConfigError: If the text is not a date.
    """
    try:
        return dtparser.parse(raw)
    except (ValueError, OverflowError) as exc:
        raise ConfigError(f"--default: cannot parse date {raw!r}") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed namespace.
    """
    parser = argparse.ArgumentParser(
        prog="datepicker-tui",
        description="Pick a date and time in the terminal and print it.",
    )
    parser.add_argument("-m", "--message", help="Question shown before the date.", default=None)
    parser.add_argument(
        "--format",
        help='Display tokens separated by spaces, e.g. "YYYY - MM - DD".',
        default=None,
    )
    parser.add_argument("--min", help="Lower bound, e.g. year=2016,month=3.", default=None)
    parser.add_argument("--max", help="Upper bound, e.g. hour=18.", default=None)
    parser.add_argument("--step", help="Arrow step sizes, e.g. minute=15.", default=None)
    parser.add_argument("--default", help="Initial date (defaults to now).", default=None)
    parser.add_argument(
        "--log-level",
        help="Logging level for the Textual devtools console.",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def resolve_options(args: argparse.Namespace | None = None) -> PickerOptions:
    """Merge CLI arguments over config.toml into picker options.

    Raises:
        ConfigError: If any value is malformed.
    """
    config = _load_config_dict()
    options = PickerOptions()

    fmt = config.get("format")
    if fmt is not None:
        if not isinstance(fmt, list):
            raise ConfigError("config.toml: format must be a list of tokens")
        options.format = [str(token) for token in fmt]
    if "message" in config:
        options.message = str(config["message"])
    options.minimum = _table_to_unit_map(config.get("min"), "min")
    options.maximum = _table_to_unit_map(config.get("max"), "max")
    options.steps = _table_to_unit_map(config.get("steps"), "steps") or {}
    if "default" in config:
        options.default = parse_default(str(config["default"]))

    if args is None:
        return options

    if args.message is not None:
        options.message = args.message
    if args.format is not None:
        options.format = parse_format(args.format)
    if args.min is not None:
        options.minimum = parse_unit_map(args.min, "--min")
    if args.max is not None:
        options.maximum = parse_unit_map(args.max, "--max")
    if args.step is not None:
        options.steps = {**options.steps, **parse_unit_map(args.step, "--step")}
    if args.default is not None:
        options.default = parse_default(args.default)
    return options
