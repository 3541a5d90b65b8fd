"""
Logging for the Ecobank Express client.

ContextAwareLogger renders `extra` data as pipe-delimited key=value pairs in the
message so request/response traces stay readable in plain text sinks, while
still attaching the extras to the record for structured handlers.
"""

import logging
import os
import sys
from typing import Optional, Union

from ..config import get_config

_client_logger = None


class ContextAwareLogger:
    """Logger wrapper that formats extra attributes in message while preserving them."""

    def __init__(self, logger):
        """Initialize with an existing logger."""
        self.logger = logger

    def _log_with_formatted_extra(self, level, msg, **kwargs):
        """
        Log with extra data formatted into the message.

        Args:
            level: Logging level method to use
            msg: Log message
            **kwargs: Additional arguments including 'extra'
        """
        extra = kwargs.pop("extra", {})

        if extra:
            extra_str = " | ".join([f"{k}={v}" for k, v in extra.items()])
            full_msg = f"{msg} | {extra_str}"
        else:
            full_msg = msg

        log_method = getattr(self.logger, level)
        log_method(full_msg, extra=extra, **kwargs)

    def set_level(self, level):
        """Set the logging level of the underlying logger."""
        self.logger.setLevel(level)

    def info(self, msg, **kwargs):
        """Log at INFO level with formatted extra."""
        self._log_with_formatted_extra("info", msg, **kwargs)

    def error(self, msg, **kwargs):
        """Log at ERROR level with formatted extra."""
        self._log_with_formatted_extra("error", msg, **kwargs)

    def warning(self, msg, **kwargs):
        """Log at WARNING level with formatted extra."""
        self._log_with_formatted_extra("warning", msg, **kwargs)

    def debug(self, msg, **kwargs):
        """Log at DEBUG level with formatted extra."""
        self._log_with_formatted_extra("debug", msg, **kwargs)

    def exception(self, msg, **kwargs):
        """Log exception with formatted extra."""
        self._log_with_formatted_extra("exception", msg, **kwargs)


class CorrelationIdFilter(logging.Filter):
    """Adds the current thread's correlation id to log records."""

    def filter(self, record):
        # Lazy import to avoid circular dependency
        from ..exceptions import get_correlation_id

        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id

        return True


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, str):
        return getattr(logging, log_level.upper(), logging.INFO)
    return log_level


def configure_logging(
    name: str = "ecobank_express",
    log_level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
) -> ContextAwareLogger:
    """
    Configure console and optional file logging.

    Args:
        name: Logger name
        log_level: Logging level (default: from config)
        log_file: Path of the trace file (default: from config, empty disables it)

    Returns:
        The configured logger wrapped with ContextAwareLogger
    """
    global _client_logger

    app_config = get_config()

    if log_level is None:
        log_level = app_config.logging.level
    if log_file is None:
        log_file = app_config.logging.log_file

    level = _resolve_level(log_level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    correlation_filter = CorrelationIdFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.addFilter(correlation_filter)
    logger.addHandler(console_handler)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(app_config.logging.format))
        file_handler.addFilter(correlation_filter)
        logger.addHandler(file_handler)

    wrapped_logger = ContextAwareLogger(logger)
    wrapped_logger.debug(
        "Client logger configured",
        extra={"logger_name": name, "log_file": log_file or None},
    )
    _client_logger = wrapped_logger
    return wrapped_logger


def get_logger(log_level: Optional[Union[int, str]] = None) -> ContextAwareLogger:
    """
    Get the client logger.

    Falls back to the `ecobank_express` stdlib logger (no handlers of its own)
    when configure_logging has not been called.

    Args:
        log_level: Optional log level to set on the fallback logger

    Returns:
        Logger instance
    """
    if _client_logger is not None:
        return _client_logger

    logger = logging.getLogger("ecobank_express")

    if log_level is None:
        log_level = get_config().logging.level

    logger.setLevel(_resolve_level(log_level))

    return ContextAwareLogger(logger)


def reset_logging() -> None:
    """Detach configured handlers and fall back to the bare logger again."""
    global _client_logger
    if _client_logger is not None:
        logger = _client_logger.logger
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
    _client_logger = None
