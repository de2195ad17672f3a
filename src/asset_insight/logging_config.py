"""
Logging for asset-insight.

All package loggers hang off the ``asset_insight`` namespace logger, which
gets a single rich handler on stderr. Verbosity names match the
``verbosity`` config field::

    quiet   -> ERROR
    normal  -> WARNING
    verbose -> DEBUG
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "asset_insight"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def verbosity_from_flags(verbose: bool = False, quiet: bool = False) -> str:
    """Map the CLI's ``--verbose``/``--quiet`` pair to a verbosity name."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def _console_handler(verbosity: str) -> logging.Handler:
    debug = verbosity == "verbose"
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
        markup=True,
        show_path=debug,
        log_time_format="[%X]",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger for the given verbosity.

    Safe to call again once the configuration is known: handlers from an
    earlier call are replaced, not stacked.

    Args:
        verbosity: One of ``quiet``, ``normal`` or ``verbose``
        log_file: Optional path that also receives every record, appended

    Returns:
        The ``asset_insight`` logger

    Raises:
        ValueError: If ``verbosity`` is not a known name
    """
    if verbosity not in LEVELS:
        raise ValueError(f"Unknown verbosity {verbosity!r}; expected one of {sorted(LEVELS)}")

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(verbosity))
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(LEVELS[verbosity])
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the package namespace; ``None`` gives the namespace logger."""
    if name is None or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
