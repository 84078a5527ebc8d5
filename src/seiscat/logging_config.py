"""
Logging setup for the seiscat entry points.

Library modules only create ``logging.getLogger(__name__)``; the CLI and
the GUI call setup_logging() once to attach handlers to the package logger.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "seiscat"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Console output goes to stderr so stdout stays parseable for
    ``seiscat list --json`` and ``seiscat map``. With ``log_file`` the same
    records are also written to that file (truncated on each run).
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Repeated setup (tests, several CLI invocations in one process)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stderr), level)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(path, mode="w", encoding="utf-8"), level)
        logger.debug("Logging to file %s", path)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
