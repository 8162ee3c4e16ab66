"""Secure logging utilities to prevent information disclosure."""

import logging
import re

from directory_api.config import get_settings

_PATH_PATTERN = re.compile(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?")
_URL_PATTERN = re.compile(r"(postgresql|postgres|redis|rediss|http|https)(\+\w+)?://[^\s]+")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
# bcrypt hashes and long tokens
_SECRET_PATTERN = re.compile(r"\$2[aby]?\$\d{2}\$[./A-Za-z0-9]{53}|[a-zA-Z0-9_\-]{32,}")


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logging in production.

    Removes file paths, connection strings, email addresses, password
    hashes and tokens, then truncates.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production logs
    """
    error_msg = str(error)
    error_msg = _URL_PATTERN.sub("[URL]", error_msg)
    error_msg = _PATH_PATTERN.sub("[PATH]", error_msg)
    error_msg = _EMAIL_PATTERN.sub("[EMAIL]", error_msg)
    error_msg = _SECRET_PATTERN.sub("[SECRET]", error_msg)

    if len(error_msg) > 200:
        error_msg = error_msg[:197] + "..."

    return error_msg


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details.
    In production, logs sanitized message without sensitive details.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
    """
    if get_settings().debug:
        if error:
            logger.error("%s: %s", message, error, exc_info=error)
        else:
            logger.error(message)
        return

    if error:
        logger.error("%s: %s (%s)", message, sanitize_exception_message(error), type(error).__name__)
    else:
        logger.error(message)
