"""
Exception hierarchy for the Ecobank Express client.

Every error carries an error code, an HTTP-style status, an optional cause and
free-form context, and logs itself when raised. Transient network failures are
never surfaced directly: they are retried and, once exhausted, become either an
ApiTimeoutError (token acquisition) or a sentinel response (business calls).
"""

import threading
import traceback
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .constants import SERVICE_NAME

_thread_local = threading.local()


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # System errors (1xxx)
    INTERNAL_ERROR = "1000"
    CONFIGURATION_ERROR = "1003"
    TIMEOUT_ERROR = "1004"

    # Validation errors (2xxx)
    VALIDATION_FAILED = "2000"
    INVALID_FORMAT = "2001"
    MISSING_REQUIRED = "2002"
    TYPE_MISMATCH = "2003"

    # External service errors (5xxx)
    EXTERNAL_API_ERROR = "5002"


class BaseError(Exception):
    """Base exception with context, error codes, logging, and error chaining."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        cause: Optional[Exception] = None,
        **context: Any,
    ):
        """
        Initialize base error with rich context.

        Args:
            message: Human-readable error message
            error_code: Standardized error code from ErrorCode enum
            status_code: HTTP-style status used to pick the log level
            cause: Original exception that caused this error
            **context: Additional context information
        """
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.error_id = str(uuid.uuid4())
        self.context = context

        correlation_id = get_correlation_id()
        if correlation_id:
            self.context["correlation_id"] = correlation_id

        self.context["error_id"] = self.error_id

        if cause:
            self.context["cause"] = {
                "type": type(cause).__name__,
                "message": str(cause),
                "traceback": traceback.format_exception(type(cause), cause, cause.__traceback__),
            }

        self._log_error()

        super().__init__(message)

    def _log_error(self) -> None:
        """Log error with appropriate level based on status code."""
        # Lazy import: the logger reads configuration, which imports this module
        from .utils.logger import get_logger

        logger = get_logger()

        log_data = {
            "error_id": self.error_id,
            "error_code": self.error_code.value,
            "status_code": self.status_code,
            "error_message": self.message,
            "context": {k: v for k, v in self.context.items() if k not in ["cause", "traceback"]},
        }

        if self.status_code >= 500:
            logger.error(f"Error {self.error_code.value}: {self.message}", extra=log_data)
        elif self.status_code >= 400:
            logger.warning(f"Client error {self.error_code.value}: {self.message}", extra=log_data)
        else:
            logger.info(f"Error {self.error_code.value}: {self.message}", extra=log_data)

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        """
        Convert to a JSON-serialisable dict.

        Args:
            include_cause: Include type and message of the underlying exception

        Returns:
            Dictionary representation of the error
        """
        result: Dict[str, Any] = {
            "error": {
                "id": self.error_id,
                "code": self.error_code.value,
                "message": self.message,
                "timestamp": self.timestamp,
                "context": {
                    k: v
                    for k, v in self.context.items()
                    if k not in ["cause", "error_id", "correlation_id"]
                },
            }
        }

        if "correlation_id" in self.context:
            result["error"]["correlation_id"] = self.context["correlation_id"]

        if include_cause and "cause" in self.context:
            result["error"]["cause"] = {
                "type": self.context["cause"]["type"],
                "message": self.context["cause"]["message"],
            }

        return result

    @property
    def error_chain(self) -> List[Exception]:
        """Get the full chain of errors."""
        chain: List[Exception] = [self]
        current = self.cause
        while current:
            chain.append(current)
            current = getattr(current, "cause", None)
        return chain


class ValidationError(BaseError):
    """Invalid caller input, never retried."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        cause: Optional[Exception] = None,
        **context,
    ):
        if field:
            context["field"] = field
        super().__init__(message, error_code, 400, cause, **context)


class ConfigurationError(BaseError):
    """Missing or invalid client configuration."""

    def __init__(self, message: str, cause: Optional[Exception] = None, **context):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, 500, cause, **context)


class ExternalServiceError(BaseError):
    """External service integration errors."""

    def __init__(
        self,
        message: str,
        service_name: str = SERVICE_NAME,
        error_code: ErrorCode = ErrorCode.EXTERNAL_API_ERROR,
        status_code: int = 502,
        cause: Optional[Exception] = None,
        **context,
    ):
        context["service_name"] = service_name
        super().__init__(message, error_code, status_code, cause, **context)


class ApiError(ExternalServiceError):
    """A non-retryable failure while talking to the upstream API."""

    def __init__(self, message: str, cause: Optional[Exception] = None, **context):
        super().__init__(
            message,
            error_code=ErrorCode.EXTERNAL_API_ERROR,
            status_code=502,
            cause=cause,
            **context,
        )


class ApiTimeoutError(ExternalServiceError):
    """Transient failures persisted through every attempt of a token request."""

    def __init__(
        self,
        message: str = "ecobank express api timeout",
        attempts: Optional[int] = None,
        cause: Optional[Exception] = None,
        **context,
    ):
        if attempts is not None:
            context["attempts"] = attempts
        super().__init__(
            message,
            error_code=ErrorCode.TIMEOUT_ERROR,
            status_code=504,
            cause=cause,
            **context,
        )


def validation_failed(
    field: str, value: Any, reason: str, cause: Optional[Exception] = None
) -> ValidationError:
    """
    Factory for validation errors.

    Args:
        field: Field that failed validation
        value: The invalid value
        reason: Why validation failed
        cause: Original exception if any

    Returns:
        Configured ValidationError instance
    """
    return ValidationError(
        f"Validation failed for {field}: {reason}",
        field=field,
        error_code=ErrorCode.INVALID_FORMAT,
        cause=cause,
        value=repr(value),
        reason=reason,
    )


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current thread."""
    _thread_local.correlation_id = correlation_id


def get_correlation_id() -> Optional[str]:
    """Get the current thread's correlation ID."""
    return getattr(_thread_local, "correlation_id", None)


def clear_correlation_id() -> None:
    """Clear the current thread's correlation ID."""
    if hasattr(_thread_local, "correlation_id"):
        delattr(_thread_local, "correlation_id")
