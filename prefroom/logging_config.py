"""Logging setup for prefroom.

Every module obtains its logger through :func:`get_logger`, which places it
under the ``prefroom`` namespace. :func:`setup_logging` is called once by the
command line entry point; library users configure logging themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "prefroom"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``prefroom`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure the ``prefroom`` logger hierarchy.

    Args:
        level: Log level name for console output.
        log_file: Optional file receiving full DEBUG detail.

    Returns:
        The configured package root logger.
    """
    numeric_level = _parse_level(level)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = False

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=numeric_level <= logging.DEBUG,
        rich_tracebacks=True,
    )
    console_handler.setLevel(numeric_level)
    root.addHandler(console_handler)

    effective_level = numeric_level
    if log_file:
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(file_handler)
        effective_level = logging.DEBUG

    root.setLevel(effective_level)
    return root


def _parse_level(level: str) -> int:
    """Convert a level name to its numeric value, defaulting to WARNING."""
    numeric = logging.getLevelName(str(level).upper())
    if isinstance(numeric, int):
        return numeric
    return logging.WARNING
