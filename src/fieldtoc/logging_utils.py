"""Logging setup for the fieldtoc command line interface.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, by the CLI. BeautifulSoup reports suspicious fragments
(e.g. markup that looks like a file name) through :mod:`warnings`, so those
are routed into the same handlers via :func:`logging.captureWarnings`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value.

    Unknown names resolve to ``INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _build_handlers(level: int, formatter: logging.Formatter, log_file: Optional[str]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g. ``"INFO"``)
    log_file : str, optional
        Also append log records to this file. If it cannot be opened a
        warning is logged and only stderr is used.
    trace_mode : bool, default False
        Include timestamps and logger names in every record

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    level = resolve_log_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    log_file_error: Optional[OSError] = None
    try:
        handlers = _build_handlers(level, formatter, log_file)
    except OSError as exc:
        log_file_error = exc
        handlers = _build_handlers(level, formatter, None)

    for handler in handlers:
        root_logger.addHandler(handler)
    logging.captureWarnings(True)

    if log_file_error is not None:
        root_logger.warning("Could not open log file %s: %s", log_file, log_file_error)
    elif log_file:
        root_logger.debug("Logging to file: %s", log_file)

    return root_logger


__all__ = ["CONSOLE_FORMAT", "TRACE_FORMAT", "configure_logging", "resolve_log_level"]
