"""Logging setup for the fsynth package logger.

Library code only creates named loggers under ``fsynth``; handlers are
installed here, by the CLI or by an application that wants fsynth's output.

Environment:
    FSYNTH_LOG_LEVEL: Default level name (WARNING when unset).
    FSYNTH_LOG_FILE: Default log file path (no file handler when unset).
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = "WARNING"

# Marks handlers installed by configure_logging so reconfiguring replaces them
_HANDLER_FLAG = "_fsynth_handler"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach a stream handler (and optionally a file handler) to the ``fsynth`` logger.

    Calling it again replaces the handlers from the previous call.

    Parameters:
        level: Level name or number. Falls back to FSYNTH_LOG_LEVEL, then WARNING.
        log_file: File to append log records to. Falls back to FSYNTH_LOG_FILE.

    Returns:
        The configured ``fsynth`` logger.

    Raises:
        ValueError: If the level name is not recognised.
        OSError: If the log file cannot be opened.
    """
    if level is None:
        level = os.environ.get("FSYNTH_LOG_LEVEL", DEFAULT_LEVEL)
    if isinstance(level, str):
        level = level.upper()
    if log_file is None:
        log_file = os.environ.get("FSYNTH_LOG_FILE") or None

    package_logger = logging.getLogger("fsynth")
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
        package_logger.addHandler(handler)
    return package_logger
