"""Entry point for datepicker-tui."""

import sys

from datepicker_tui.app import DatePickerApp
from datepicker_tui.config import ConfigError, parse_args, resolve_options
from datepicker_tui.log import setup_logging


def main() -> None:
    """Run the picker and print the chosen date."""
    args = parse_args()
    setup_logging(args.log_level)
    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    app = DatePickerApp(options=options)
    picked = app.run()
    if picked is None:
        sys.exit(1)
    print(picked.isoformat())


if __name__ == "__main__":
    main()
