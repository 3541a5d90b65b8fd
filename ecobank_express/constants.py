"""
Constants and enums for the Ecobank Express API client.

This module centralizes the magic strings and numbers shared by the token,
transport and dispatch layers.
"""

from enum import Enum


class LogLevel(str, Enum):
    """Standard logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentVariable(str, Enum):
    """Standard environment variable names."""

    APP_ENV = "APP_ENV"
    LOG_LEVEL = "LOG_LEVEL"
    LOG_FILE = "ECOBANK_LOG_FILE"
    BASE_URL = "ECOBANK_BASE_URL"
    ORIGIN = "ECOBANK_ORIGIN"
    USER_ID = "ECOBANK_USER_ID"
    PASSWORD = "ECOBANK_PASSWORD"
    LAB_KEY = "ECOBANK_LAB_KEY"
    REDIS_URL = "REDIS_URL"
    CACHE_NAMESPACE = "ECOBANK_CACHE_NAMESPACE"


class HashField(str, Enum):
    """Body field names under which the upstream expects the secure hash."""

    CAMEL = "secureHash"
    SNAKE = "secure_hash"


class Header(str, Enum):
    """HTTP header names sent to the upstream."""

    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"
    ORIGIN = "Origin"
    AUTHORIZATION = "Authorization"


class LogContextKey(str, Enum):
    """Standard keys for logging context."""

    TRACE_ID = "trace_id"
    PATH = "path"
    ATTEMPT = "attempt"
    MAX_ATTEMPTS = "max_attempts"
    STATUS_CODE = "status_code"
    ERROR_TYPE = "error_type"


# Every hash field name the upstream accepts, excluded from hash computation
HASH_FIELD_NAMES = frozenset(field.value for field in HashField)

JSON_CONTENT_TYPE = "application/json"
DEFAULT_BASE_URL = "https://developer.ecobank.com"
DEFAULT_ORIGIN = "developer.ecobank.com"
TOKEN_PATH = "/corporateapi/user/token"
TOKEN_CACHE_KEY = "ecobank_express_api_token"
SERVICE_NAME = "ecobank_express"
DEFAULT_LOG_FILE = "./log/ecobank_express_api.log"

# Upstream marker for a rejected bearer token
FORBIDDEN_MARKER = "Forbidden"
TIMEOUT_SENTINEL_MESSAGE = "Timeout"


class Limits:
    """Retry limits."""

    MAX_RETRY_ATTEMPTS = 3
    DEFAULT_BACKOFF_SECONDS = 0.0
    MAX_BACKOFF_SECONDS = 10.0


class Timeouts:
    """Timeout values in seconds."""

    TOKEN_REQUEST = 10
    API_REQUEST = 10
