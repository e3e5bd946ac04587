"""
Logging utility module for the HTML tree.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Iterator, Optional

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

PACKAGE_LOGGER = "html_tree"

_RESET = '\033[0m'


class LogFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1;31m'
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.colored = colored and sys.platform != 'win32'

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname) if self.colored else None
        if color is None:
            return super().formatMessage(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{_RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = levelname


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the HTML tree.

    The library never calls this itself; applications call it (or
    ``html_tree.configure_logging``) to get console and file output.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level
        file_level: File logging level
        component: Optional component name for the logger

    Returns:
        logging.Logger: Configured logger
    """
    logger_name = PACKAGE_LOGGER
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)

    # Already configured
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    console = LOG_LEVELS.get(console_level, logging.WARNING)
    level = console
    if log_file:
        level = min(console, LOG_LEVELS.get(file_level, logging.DEBUG))
    logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console)
    console_handler.setFormatter(LogFormatter(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                                              datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(LOG_LEVELS.get(file_level, logging.DEBUG))
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s",
            datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """Log an exception with its traceback at ERROR."""
    logger.error(f"{message}: {exception}",
                 exc_info=(type(exception), exception, exception.__traceback__))


class PerformanceLogger:
    """Times named operations of a component and logs their duration."""

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component

    @contextmanager
    def measure(self, name: str, level: int = logging.DEBUG) -> Iterator[None]:
        """
        Time the enclosed block and log how long it took.

        Args:
            name: Operation name
            level: Log level of the timing record
        """
        started = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - started
            self.logger.log(level, f"{self.component} {name} took {duration:.4f} seconds")
