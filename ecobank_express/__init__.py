"""Resilient client for the Ecobank Express corporate banking API."""

from .api import EcobankExpressAPI, build_token_cache
from .config import AppConfig, get_config, reset_config, set_config
from .endpoints import Endpoint
from .exceptions import ApiError, ApiTimeoutError, BaseError, ConfigurationError, ValidationError
from .schemas import ApiResponse, Credentials, RequestEnvelope
from .utils.hash_utils import compute_secure_hash, sign_body

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ApiResponse",
    "ApiTimeoutError",
    "AppConfig",
    "BaseError",
    "ConfigurationError",
    "Credentials",
    "EcobankExpressAPI",
    "Endpoint",
    "RequestEnvelope",
    "ValidationError",
    "build_token_cache",
    "compute_secure_hash",
    "get_config",
    "reset_config",
    "set_config",
    "sign_body",
]
