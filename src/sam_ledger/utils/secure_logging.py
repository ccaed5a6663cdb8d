"""Secure logging utilities to keep personal data out of log output."""

import logging
import re
from functools import lru_cache
from typing import Any

from sam_ledger.config import get_settings

EMAIL_LOG_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    settings = get_settings()
    return settings.debug


def redact(text: str) -> str:
    """Remove emails, file paths and token-like strings from text.

    Args:
        text: Free text that may contain personal data

    Returns:
        Redacted text, truncated to 200 characters
    """
    # Remove file paths (Unix and Windows)
    text = re.sub(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?", "[PATH]", text)

    # Remove email addresses
    text = EMAIL_LOG_PATTERN.sub("[EMAIL]", text)

    # Remove potential keys/tokens (long alphanumeric strings)
    text = re.sub(r"[a-zA-Z0-9_\-]{32,}", "[TOKEN]", text)

    if len(text) > 200:
        text = text[:197] + "..."

    return text


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logging outside debug mode."""
    return redact(str(error))


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details. Otherwise logs a redacted
    message without extra context.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no personal data)
        error: Optional exception to include
        **kwargs: Additional context, logged only in debug mode
    """
    if is_debug_mode():
        if error:
            logger.error("%s: %s", message, error, exc_info=True, extra=kwargs)
        else:
            logger.error(message, extra=kwargs)
    elif error:
        logger.error("%s: %s", message, sanitize_exception_message(error))
    else:
        logger.error(message)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log a warning with appropriate detail level based on environment.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no personal data)
        error: Optional exception to include
        **kwargs: Additional context, logged only in debug mode
    """
    if is_debug_mode():
        if error:
            logger.warning("%s: %s", message, error, extra=kwargs)
        else:
            logger.warning(message, extra=kwargs)
    elif error:
        logger.warning("%s: %s", message, sanitize_exception_message(error))
    else:
        logger.warning(message)
