"""
Centralized logging configuration.

This module sets up application-wide logging with both file and console handlers.
Progress telemetry (chunk counts, generated strategy, final answer) flows
through this logger; it is advisory output, not a parseable contract.
Components log through get_logger(), which tags every record with a
``[Component]`` prefix.
"""

import logging
import sys
from typing import Any, MutableMapping, Tuple

from smart_rlm.config.settings import config


def setup_logger(name: str = "SmartRLM", level: str = None) -> logging.Logger:
    """
    Set up and configure the application logger.

    This function creates a logger with:
    - Console handler (streams to stdout)
    - File handler (writes to app.log)
    - Consistent formatting with timestamps, log level, and messages

    Args:
        name: Name of the logger (default: "SmartRLM")
        level: Logging level (default: from config, or INFO)

    Returns:
        logging.Logger: Configured logger instance
    """
    log_level = level or config.LOG_LEVEL
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    config.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(config.LOG_FILE, encoding='utf-8')
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    return logger


# Create default logger instance
logger = setup_logger()


class ComponentLogger(logging.LoggerAdapter):
    """Prefixes every message with the emitting component, e.g. ``[KeywordFilter]``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['component']}] {msg}", kwargs


def get_logger(component: str) -> ComponentLogger:
    """Return the application logger tagged with ``component``."""
    return ComponentLogger(logger, {"component": component})
