"""Logging configuration for CLI Sandbox.

Application logs go to stderr through rich so they never interleave with the
progress lines printed before the process is replaced.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER = "cli_sandbox"


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure application logging.

    Args:
        level: Level name for the cli_sandbox loggers
        log_file: Optional path that also receives plain-text records
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(log_level)
    app_logger.handlers.clear()
    app_logger.propagate = False

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(log_level)
    app_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        ))
        app_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name (typically __name__)."""
    return logging.getLogger(name)
