"""Logging utilities for vulnmatch."""

import logging
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_PREFIX = "vulnmatch"


class VulnMatchLogger:
    """Logger wrapper with rich console formatting."""

    def __init__(self, name: str, level: int = logging.NOTSET) -> None:
        self.logger = logging.getLogger(f"{LOGGER_PREFIX}.{name}")
        if level:
            self.logger.setLevel(level)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log error message with the active exception."""
        self.logger.exception(msg, extra=kwargs)


def _rich_handler() -> RichHandler:
    console = Console(stderr=True, theme=Theme({
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "critical": "red bold",
        "debug": "dim",
    }))
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging for vulnmatch.

    Library loggers propagate by default; call this from an application
    to get rich console output and, optionally, a log file.

    Args:
        level: Logging level
        log_file: Optional log file path
        verbose: Enable debug logging
    """
    if verbose:
        level = logging.DEBUG

    logger = logging.getLogger(LOGGER_PREFIX)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(_rich_handler())
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        logger.addHandler(file_handler)
    logger.propagate = False

    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def get_logger(name: str) -> VulnMatchLogger:
    """Get a vulnmatch logger instance.

    Args:
        name: Logger name, nested under "vulnmatch"

    Returns:
        Logger instance
    """
    return VulnMatchLogger(name)
