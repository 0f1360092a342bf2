# File: site_parity/logger.py
"""Logging setup shared by the CLI, the HTTP service and the library code.

Modules log through the ``SiteParity`` logger::

    from site_parity.logger import logger
    logger.warning("Invalid URL: %s", raw)

Records go to stderr, so JSON printed by the CLI on stdout stays clean.
A rotating log file is added only when one is requested.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "SiteParity"
DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

#: rotation of the optional log file
MAX_LOG_BYTES: Final[int] = 2 * 1024 * 1024
LOG_BACKUPS: Final[int] = 2

Level = Union[int, str]


def _handlers(log_file: Union[str, Path, None]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
            )
        )
    return handlers


def configure(
    *,
    level: Level = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach handlers to the ``SiteParity`` logger and set its level.

    With *replace_handlers* the previous handlers are closed first, so the
    CLI can call this once per invocation without duplicating output.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()
    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(
    level: Level = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "configure", "init_logging", "logger"]
