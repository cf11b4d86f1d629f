"""Logging configuration for i18n_extraction_tools.

This module provides centralized logging configuration for the package.
It sets up a package-level logger with RichHandler for console output,
optional file output, and a separate channel for per-key data issues
(failed translations, pruned keys).

Usage:
    from i18n_extraction_tools.logging_config import setup_logging

    # In __main__.py or entry point:
    setup_logging(debug=False)
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

# Package-level logger name
PACKAGE_LOGGER_NAME = "i18n_extraction_tools"

# Custom log level for key-level data issues
DATA_ISSUE_LVL_NUM = 26
logging.addLevelName(DATA_ISSUE_LVL_NUM, "DATA_ISSUES")


class ExcludeLevelFilter(logging.Filter):
    """Filter that excludes log records at a specific level."""

    def __init__(self, level: int) -> None:
        """Initialize the filter.

        Args:
            level: The log level to exclude.
        """
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno != self.level


class IncludeLevelFilter(logging.Filter):
    """Filter that includes only log records at a specific level."""

    def __init__(self, level: int) -> None:
        """Initialize the filter.

        Args:
            level: The log level to include.
        """
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.level


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
    data_issues_file: Optional[Path] = None,
) -> logging.Logger:
    """Set up logging for the i18n_extraction_tools package.

    Configures a package-level logger with RichHandler for console output and
    attaches the same handlers to the root logger so third-party libraries
    (e.g., httpx) emit through them. Data issues are shown on the console
    unless a separate data issues file is given.

    Args:
        debug: Enable debug-level logging.
        log_file: Path to write general log output.
        data_issues_file: Path to write data issues (level 26) output.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    # Clear any existing handlers to avoid duplicates on re-initialization
    package_logger.handlers.clear()
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = True

    console_handler = RichHandler(
        show_level=False,
        show_time=False,
        omit_repeated_times=False,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    if data_issues_file:
        console_handler.addFilter(ExcludeLevelFilter(DATA_ISSUE_LVL_NUM))
    handlers = [console_handler]

    if log_file:
        file_formatter = logging.Formatter("%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s")
        file_handler = logging.FileHandler(filename=log_file, mode="w")
        file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        file_handler.setFormatter(file_formatter)
        file_handler.addFilter(ExcludeLevelFilter(DATA_ISSUE_LVL_NUM))
        handlers.append(file_handler)

    if data_issues_file:
        data_issues_handler = logging.FileHandler(filename=data_issues_file, mode="w")
        data_issues_handler.setLevel(DATA_ISSUE_LVL_NUM)
        data_issues_handler.addFilter(IncludeLevelFilter(DATA_ISSUE_LVL_NUM))
        data_issues_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(data_issues_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in handlers:
        root_logger.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module within the package.

    Args:
        name: The module's __name__.

    Returns:
        A logger for the module.
    """
    return logging.getLogger(name)


def _data_issues(self, message: str, *args, **kwargs) -> None:
    """Log a data issue at the custom DATA_ISSUES level (26).

    Args:
        self: The logger instance.
        message: The message to log.
        *args: Arguments to format into the message.
        **kwargs: Keyword arguments for the logging call.
    """
    if self.isEnabledFor(DATA_ISSUE_LVL_NUM):
        self._log(DATA_ISSUE_LVL_NUM, message, args, **kwargs)


# Monkey-patch the data_issues method onto Logger
logging.Logger.data_issues = _data_issues
