"""
Logging Configuration

Sets up the package logger. Library modules only create loggers with
``logging.getLogger(__name__)``; handlers are attached here, by the
application.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'scalp1020' logger.

    Parameters
    ----------
    level : int, optional
        Logging level (e.g. logging.DEBUG, logging.INFO).
    log_file : str, optional
        Path to also write logs to.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger("scalp1020")
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
