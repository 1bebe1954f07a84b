"""Logging setup shared by the CLI and library code."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> logging.Logger:
    """
    Route all package logging through a rich handler.

    Safe to call more than once; the previous handler is replaced.
    """
    handler = RichHandler(
        console=console,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("access_nav")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False

    return logger
