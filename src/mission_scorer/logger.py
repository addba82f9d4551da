"""
Logging utilities for the mission scorer.

Provides a package logger hierarchy and token sanitization for credentials.
"""

import logging
import sys
from typing import Optional


# Root logger for the package
ROOT_LOGGER_NAME = 'mission_scorer'


def setup_logging(level: str = 'INFO', log_format: Optional[str] = None) -> None:
    """
    Setup logging for the mission scorer.

    Configures the package logger level and only adds a handler when no
    app-level handlers are present.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom format string. If None, uses default format.
    """
    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    # NullHandler does not count as a real handler
    real_handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    if not real_handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(getattr(logging, level.upper()))
        handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(handler)

    logger.propagate = False


def sanitize_token(token: Optional[str], show_chars: int = 4) -> str:
    """
    Sanitize a token for logging by showing only first and last few characters.

    Args:
        token: Token string to sanitize
        show_chars: Number of characters to show from start and end

    Returns:
        Sanitized token string (e.g., "abcd...xyz9")
    """
    if not token:
        return "<empty>"

    if len(token) <= show_chars * 2:
        return "***"

    return f"{token[:show_chars]}...{token[-show_chars:]}"


# Create root logger on module import
_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())
