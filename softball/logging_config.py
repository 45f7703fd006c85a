"""Logging setup for the tournament engine and its report script."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

ROOT_LOGGER = 'softball'

FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(message)s'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``softball`` logger.

    Calling it again replaces the previous handlers. Console output goes to
    stderr unless ``stream`` is given, so report output on stdout stays
    clean.

    Args:
        log_dir: Directory for per-session log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Write a timestamped tournament_<ts>.log file
        log_to_console: Echo records to the console
        stream: Console stream override

    Returns:
        The configured ``softball`` logger

    Example:
        from softball.logging_config import setup_logging
        logger = setup_logging(log_to_file=False)
        logger.info("Loading tournament")
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'tournament_{datetime.now():%Y%m%d_%H%M%S}.log'

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def get_logger(module: Optional[str] = None) -> logging.Logger:
    """Return ``softball`` or the ``softball.<module>`` child logger."""
    return logging.getLogger(f'{ROOT_LOGGER}.{module}' if module else ROOT_LOGGER)
