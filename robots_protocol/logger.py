# === FILE: robots_protocol/logger.py ===
"""Logging for **robots_protocol**.

Highlights
----------
* The library logs through one named logger and, until told otherwise, stays
  silent: importing it attaches only a :class:`logging.NullHandler`::

      from robots_protocol.logger import logger
      logger.debug("Loaded %d user-agent(s)", count)
* Applications (and the ``robots-protocol`` CLI) opt in with :func:`configure`.
  Records go to *stderr*, so the CLI's verdicts on *stdout* stay parseable.
* An optional rotating log file is added only when ``log_file`` is given.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "RobotsProtocol"

_LOG_FILE_MAX_BYTES: Final[int] = 1024 * 1024
_LOG_FILE_BACKUPS: Final[int] = 2

_LevelT = Union[int, str]


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _stderr_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _rotating_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=_LOG_FILE_MAX_BYTES,
        backupCount=_LOG_FILE_BACKUPS,
        encoding="utf-8",
        delay=True,
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _drop_handlers(lg: logging.Logger) -> None:
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Route parser diagnostics to *stderr* (and *log_file*, if given).

    Previously attached handlers are closed and replaced, so calling this
    twice never duplicates output. Records stop propagating to the root
    logger once the package has its own handlers.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    _drop_handlers(lg)

    lg.addHandler(_stderr_handler(log_format))
    if log_file is not None:
        lg.addHandler(_rotating_handler(log_file, log_format))

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Shortcut used by the CLI."""
    return configure(level=level, log_file=log_file, log_format=log_format)


# --------------------------------------------------------------------------- #
# Ready‑to‑use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())

__all__ = ["logger", "configure", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
