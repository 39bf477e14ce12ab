"""Logging setup shared by all xsdgen modules.

Modules obtain their logger through :func:`get_logger`; the command line
calls :func:`configure_logging` once to attach a rich handler on stderr.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "xsdgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the ``xsdgen`` hierarchy."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "WARNING") -> None:
    """Attach a RichHandler writing to stderr.

    Args:
        level: Logging level name or number.

    Raises:
        ValueError: If the level name is unknown.
    """
    global _configured

    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        _configured = True
