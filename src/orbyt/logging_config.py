"""Logging for Orbyt.

Everything logs under the ``orbyt`` namespace. Records go to stderr through a
rich handler so that ``orbyt graph`` can keep stdout for the JSON payload.
Library callers who never call setup_logging get the stdlib defaults.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "orbyt"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    # quiet wins over verbose
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Route ``orbyt.*`` records to a rich stderr handler.

    Each call replaces the handlers installed by the previous one, so the CLI
    can call it once per command without duplicating output. With
    ``verbose`` the handler also shows source locations and traceback
    locals. ``log_file`` appends plain-text records to that file.
    """
    level = _level_for(verbose, quiet)
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Paths in messages may contain brackets, so no markup
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            show_path=verbose,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
        )
    )
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger inside the ``orbyt`` namespace; bare names are prefixed."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
