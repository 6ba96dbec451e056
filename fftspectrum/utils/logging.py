"""
Logging helpers for the fftspectrum package.

Library modules only ever call :func:`get_logger`; applications that want to
see the transform's debug trace call :func:`setup_logging` once.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import LOG_FORMAT, LOG_DATEFMT, LOGGER_NAME


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: str = None,
    name: str = LOGGER_NAME,
    console_level: int = logging.WARNING
) -> logging.Logger:
    """
    Set up logging for the package (or any named logger).

    Args:
        log_file: Path to log file (if None, only console output)
        level: Logging level of the logger and the file handler
        format_string: Custom format string
        name: Logger name (defaults to the package logger)
        console_level: Level of the stdout handler

    Returns:
        Configured logger
    """
    if format_string is None:
        format_string = LOG_FORMAT

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string, datefmt=LOG_DATEFMT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Args:
        name: Module name (``__name__``). None returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(name)
