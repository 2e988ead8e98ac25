"""Logging setup for the mdpeek command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Library loggers that are chatty at DEBUG; only shown in trace mode
THIRD_PARTY_LOGGERS = ("watchdog", "mistune")

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PLAIN_FORMAT = "mdpeek: %(levelname)s: %(message)s"

_installed_handlers: list[logging.Handler] = []


def resolve_level(log_level: int | str) -> Optional[int]:
    """Return the numeric level for ``log_level``, or None if the name is unknown.

    Examples
    --------
        >>> resolve_level("debug")
        10
        >>> resolve_level("loud") is None
        True

    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else None


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the command line.

    Records go to stderr so that rendered output on stdout (and the redrawn
    screen in watch mode) stays clean. Calling this again replaces the
    handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO"). Unknown names
        fall back to WARNING with a warning.
    log_file : str, optional
        Path to a log file that receives a copy of every record.
    trace_mode : bool, default False
        Timestamps and logger names in every record, and DEBUG output from
        watchdog and mistune.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = resolve_level(log_level)

    root_logger = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(resolved_level if resolved_level is not None else logging.WARNING)

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_mode else logging.WARNING)

    if resolved_level is None:
        root_logger.warning("Unknown log level '%s', using WARNING", log_level)
    if file_error is not None:
        root_logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        root_logger.debug("Logging to file: %s", log_file)

    return root_logger
