"""Utility modules for the Ecobank Express client."""

from .hash_config import SecureHashConfig
from .hash_utils import compute_secure_hash, sign_body, stringify_value, verify_secure_hash
from .logger import configure_logging, get_logger
from .retry_utils import TRANSIENT_HTTP_ERRORS, RetryOutcome, RetryStatus, call_with_retry
