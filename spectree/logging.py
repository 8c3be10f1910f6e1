"""
Centralized logging configuration for spectree.

Usage:
    from spectree.logging import setup_logging, get_logger

    # Once, when the host application starts
    setup_logging(level='DEBUG', log_file='/tmp/spectree.log')

    # In any module
    logger = get_logger(__name__)
    logger.debug("Some debug message")
"""

import logging
import sys
from typing import Optional

# Set when a file handler is installed
_log_file: Optional[str] = None


def setup_logging(
    level: str = 'WARNING',
    log_file: Optional[str] = None,
    console: bool = False
) -> None:
    """
    Configure logging for spectree.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_file: Path to log file (only used if level is DEBUG or INFO)
        console: If True, also log to console (stderr)
    """
    global _log_file

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger('spectree')
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    formatter = logging.Formatter(fmt)

    _log_file = None
    if numeric_level <= logging.INFO and log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        _log_file = log_file

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Prevents "no handler" warnings
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug(f"Logging configured: level={level}, log_file={log_file}, console={console}")


def log_file_path() -> Optional[str]:
    """Path of the active log file, or None when logging only to console."""
    return _log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    # Ensure all spectree loggers are children of 'spectree'
    if name.startswith('spectree'):
        return logging.getLogger(name)
    return logging.getLogger(f'spectree.{name}')
