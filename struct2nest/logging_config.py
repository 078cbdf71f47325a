"""Logging setup shared by every struct2nest module.

Modules obtain their logger through :func:`get_logger`; the CLI calls
:func:`configure_logging` once to attach a rich console handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "struct2nest"


def get_logger(name: str) -> logging.Logger:
    """Return a logger placed under the package logger hierarchy."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    level: int | str = logging.INFO, console: Console | None = None
) -> logging.Logger:
    """Attach a RichHandler to the package logger.

    Calling it again replaces the previous handler instead of stacking a
    second one.

    Args:
        level: Logging level name or number.
        console: Console to log to (defaults to stderr).

    Returns:
        The package root logger.
    """
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    return root
