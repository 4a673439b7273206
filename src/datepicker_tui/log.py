"""Logging setup that does not write over the terminal UI."""

from __future__ import annotations

import logging

from textual.logging import TextualHandler


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Route the package's log records to the Textual devtools console.

    Args:
        level: Level name such as "DEBUG" or "WARNING".

    Returns:
        The package logger.
    """
    logger = logging.getLogger("datepicker_tui")
    logger.setLevel(getattr(logging, level.upper()))

    if not any(isinstance(h, TextualHandler) for h in logger.handlers):
        handler = TextualHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
