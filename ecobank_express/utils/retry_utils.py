"""
Bounded retry for single HTTP calls.

`call_with_retry` runs an operation up to `max_attempts` times. Errors are
classified as transient (retried) or fatal (returned at once); the outcome is
a RetryOutcome value rather than an exception so each caller can decide what
exhaustion means for it.
"""

import http.client
import random
import socket
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterator, Optional, Tuple, Type, TypeVar

import requests
from urllib3.exceptions import NewConnectionError, ProtocolError
from urllib3.exceptions import ProxyError as Urllib3ProxyError
from urllib3.exceptions import SSLError as Urllib3SSLError

from ..constants import Limits

T = TypeVar("T")

# Network and protocol failures that are safe to retry: connection reset,
# premature end of stream, malformed status line or headers, timeouts.
TRANSIENT_HTTP_ERRORS: Tuple[Type[BaseException], ...] = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
    ProtocolError,
    http.client.HTTPException,
    ConnectionResetError,
    EOFError,
    TimeoutError,
)

# Checked before the transient whitelist: subclasses of ConnectionError that
# retrying cannot fix.
FATAL_HTTP_ERRORS: Tuple[Type[BaseException], ...] = (
    requests.exceptions.SSLError,
    requests.exceptions.ProxyError,
)

# Wrapped causes that mean the host was never reached
_UNREACHABLE_HOST_ERRORS: Tuple[Type[BaseException], ...] = (
    NewConnectionError,
    Urllib3SSLError,
    Urllib3ProxyError,
    socket.gaierror,
)

_NAME_RESOLUTION_MARKERS = (
    "Failed to resolve",
    "Name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "Temporary failure in name resolution",
)


class RetryStatus(str, Enum):
    """Final state of a retried operation."""

    SUCCESS = "success"
    EXHAUSTED = "exhausted"  # every attempt failed with a transient error
    FATAL = "fatal"  # a non-transient error stopped the loop


@dataclass
class RetryOutcome(Generic[T]):
    """Result of call_with_retry."""

    status: RetryStatus
    attempts: int
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.status is RetryStatus.SUCCESS


def calculate_retry_delay(
    attempt: int,
    base_delay: float = Limits.DEFAULT_BACKOFF_SECONDS,
    max_delay: float = Limits.MAX_BACKOFF_SECONDS,
    multiplier: float = 2.0,
    jitter: bool = False,
) -> float:
    """
    Calculate the delay before the next attempt.

    Args:
        attempt: Number of attempts already made (1-based)
        base_delay: Delay after the first failure; 0 disables waiting
        max_delay: Upper bound of the delay
        multiplier: Exponential multiplier
        jitter: Add +/-25% randomization

    Returns:
        Delay in seconds
    """
    if base_delay <= 0:
        return 0.0

    delay = min(base_delay * (multiplier ** max(attempt - 1, 0)), max_delay)

    if jitter:
        jitter_range = delay * 0.25
        delay = delay + random.uniform(-jitter_range, jitter_range)

    return max(delay, 0.0)


def _wrapped_errors(error: BaseException) -> Iterator[BaseException]:
    """Yield an error and every exception it wraps (args, urllib3 `reason`, chaining)."""
    pending = [error]
    seen = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        for linked in (getattr(current, "reason", None), current.__cause__, current.__context__):
            if isinstance(linked, BaseException):
                pending.append(linked)


def _is_unreachable_host(error: BaseException) -> bool:
    for wrapped in _wrapped_errors(error):
        if isinstance(wrapped, _UNREACHABLE_HOST_ERRORS):
            return True
        text = str(wrapped)
        if any(marker in text for marker in _NAME_RESOLUTION_MARKERS):
            return True
    return False


def is_transient(
    error: BaseException,
    retryable: Tuple[Type[BaseException], ...] = TRANSIENT_HTTP_ERRORS,
    fatal: Tuple[Type[BaseException], ...] = FATAL_HTTP_ERRORS,
) -> bool:
    """
    Whether an error is worth another attempt.

    `fatal` wins over `retryable`. A requests ConnectionError that is not a
    timeout is judged by what it wraps: a reset or protocol error is
    transient, while a refused connection or a failed name lookup is not.
    """
    if isinstance(error, fatal) or not isinstance(error, retryable):
        return False
    if isinstance(error, requests.exceptions.ConnectionError) and not isinstance(
        error, requests.exceptions.Timeout
    ):
        return not _is_unreachable_host(error)
    return True


def call_with_retry(
    operation: Callable[[], T],
    max_attempts: int = Limits.MAX_RETRY_ATTEMPTS,
    retryable: Tuple[Type[BaseException], ...] = TRANSIENT_HTTP_ERRORS,
    fatal: Tuple[Type[BaseException], ...] = FATAL_HTTP_ERRORS,
    base_delay: float = Limits.DEFAULT_BACKOFF_SECONDS,
    max_delay: float = Limits.MAX_BACKOFF_SECONDS,
    on_retry: Optional[Callable[[int, BaseException], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RetryOutcome[T]:
    """
    Run an operation with bounded retry on transient errors.

    Args:
        operation: Zero-argument callable performing one attempt
        max_attempts: Total number of attempts, at least 1
        retryable: Exception types treated as transient
        fatal: Exception types never retried, even if also in `retryable`
        base_delay: Backoff base in seconds (0 retries immediately)
        max_delay: Backoff cap in seconds
        on_retry: Called with (attempt, error) after each transient failure
            that will be followed by another attempt
        sleep: Sleep function

    Returns:
        RetryOutcome with the operation's value, or the last error
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Optional[BaseException] = None
    for attempt in range(1, max_attempts + 1):
        try:
            value = operation()
        except Exception as e:
            if not is_transient(e, retryable, fatal):
                return RetryOutcome(status=RetryStatus.FATAL, attempts=attempt, error=e)
            last_error = e
            if attempt < max_attempts:
                if on_retry is not None:
                    on_retry(attempt, e)
                delay = calculate_retry_delay(attempt, base_delay, max_delay)
                if delay:
                    sleep(delay)
            continue
        return RetryOutcome(status=RetryStatus.SUCCESS, attempts=attempt, value=value)

    return RetryOutcome(status=RetryStatus.EXHAUSTED, attempts=max_attempts, error=last_error)
