"""Logging for the taskboard namespace.

The TUI draws on the terminal, so nothing is logged unless ``-v`` or
``--log-file`` asks for it. At INFO the sync controller reports loads,
saves and store failures; DEBUG adds per-request timings and state changes.
"""

import logging
import sys
from pathlib import Path

from . import __version__

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handlers(verbose: int, log_file: Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if verbose > 0:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> logging.Logger | None:
    """Attach stderr and/or file handlers to the ``taskboard`` logger.

    Args:
        verbose: 0 keeps stderr quiet, 1 logs INFO, 2 or more logs DEBUG
        log_file: Also (or only) write the log to this file

    Returns:
        The configured logger, or None when logging stays off.
    """
    handlers = _handlers(verbose, log_file)
    if not handlers:
        return None

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logger = logging.getLogger("taskboard")
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("taskboard %s, log level %s", __version__, logging.getLevelName(level))
    return logger
