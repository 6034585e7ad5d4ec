"""Logging setup for the gfmhost command line.

The library itself only creates module loggers under ``gfmhost`` and never
adds handlers; hosts decide where records go. The CLI calls
``configure_logging`` to attach a stderr handler (and optionally a log file)
to the ``gfmhost`` logger. The root logger is left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "gfmhost"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second call replaces them
_CLI_HANDLER_FLAG = "_gfmhost_cli_handler"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send gfmhost log records to stderr and, optionally, a file.

    Parameters
    ----------
    log_level : int | str
        Numeric level or level name ("DEBUG", "warning"). Unknown names
        mean INFO.
    log_file : str, optional
        File that also receives the records. A file that cannot be opened
        is reported as a warning and skipped.
    trace_mode : bool, default False
        Include timestamps and logger names.

    Returns
    -------
    logging.Logger
        The ``gfmhost`` package logger.

    """
    level = _resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        if getattr(handler, _CLI_HANDLER_FLAG, False):
            package_logger.removeHandler(handler)
            handler.close()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _CLI_HANDLER_FLAG, True)
        package_logger.addHandler(handler)

    if file_error is not None:
        package_logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        package_logger.info("Logging to file: %s", log_file)

    return package_logger
