"""
Ecobank Express API facade.

Builds the collaborators once (cache, transport, token manager, dispatcher)
and exposes one method per business endpoint. Bodies are supplied by the
caller; signed endpoints get their secure hash appended before dispatch.
"""

from typing import Any, Dict, Optional

import requests

from .config import AppConfig, get_config
from .endpoints import Endpoint
from .repositories.token_repository import InMemoryTokenCache, RedisTokenCache, TokenCache
from .schemas.credential_schemas import Credentials
from .schemas.response_schemas import ApiResponse
from .services.http_transport import HTTPTransport
from .services.request_dispatcher import RequestDispatcher
from .services.token_service import TokenManager
from .type_definitions import RequestBody
from .utils.hash_config import SecureHashConfig
from .utils.hash_utils import compute_secure_hash, sign_body
from .utils.logger import get_logger


def build_token_cache(config: AppConfig) -> TokenCache:
    """Redis cache when a URL is configured, process memory otherwise."""
    if config.cache.redis_url:
        return RedisTokenCache.from_url(
            config.cache.redis_url, key=config.cache.token_key, namespace=config.cache.namespace
        )
    return InMemoryTokenCache(key=config.cache.token_key)


class EcobankExpressAPI:
    """Client for the Ecobank Express corporate API."""

    def __init__(
        self,
        credentials: Credentials,
        dispatcher: RequestDispatcher,
        token_manager: TokenManager,
        logger=None,
    ):
        self.credentials = credentials
        self.dispatcher = dispatcher
        self.token_manager = token_manager
        self.logger = logger or get_logger()

    @classmethod
    def from_config(
        cls,
        config: Optional[AppConfig] = None,
        cache: Optional[TokenCache] = None,
        session: Optional[requests.Session] = None,
        logger=None,
    ) -> "EcobankExpressAPI":
        """
        Wire a client from configuration.

        Args:
            config: Configuration (default: global configuration)
            cache: Token cache (default: built from config.cache)
            session: requests session shared by token and business calls
            logger: Logger collaborator (default: client logger)

        Raises:
            ConfigurationError: If credentials are missing
        """
        config = config or get_config()
        logger = logger or get_logger()
        credentials = config.require_credentials()
        cache = cache if cache is not None else build_token_cache(config)

        transport = HTTPTransport.from_config(config.api, config.retry, session=session, logger=logger)
        token_manager = TokenManager.from_config(config, cache, transport, logger=logger)
        dispatcher = RequestDispatcher(token_manager, transport, origin=config.api.origin, logger=logger)
        return cls(credentials, dispatcher, token_manager, logger=logger)

    @property
    def shared_secret(self) -> str:
        return self.credentials.shared_secret.get_secret_value()

    # Token and hashing

    def generate_token(self) -> str:
        return self.token_manager.generate_token()

    def get_token(self) -> str:
        return self.token_manager.get_token()

    def generate_secure_hash(self, fields: RequestBody) -> str:
        """Secure hash of a body (or body section) with the configured secret."""
        return compute_secure_hash(fields, self.shared_secret)

    def sign(
        self, body: RequestBody, hash_config: SecureHashConfig, overwrite: bool = False
    ) -> Dict[str, Any]:
        return sign_body(body, hash_config, self.shared_secret, overwrite=overwrite)

    # Dispatch

    def request_api(self, path: str, body: RequestBody) -> ApiResponse:
        """Send a body as-is to any path."""
        return self.dispatcher.send(path, body)

    def call(
        self, endpoint: Endpoint, body: RequestBody, sign: bool = True, overwrite_hash: bool = False
    ) -> ApiResponse:
        """
        Send a body to a catalogued endpoint.

        Args:
            endpoint: Target endpoint
            body: Request body in wire order
            sign: Append the endpoint's secure hash when the body lacks one
            overwrite_hash: Recompute the hash even if the body carries one
        """
        if sign:
            body = self.sign(body, endpoint.hash_config, overwrite=overwrite_hash)
        return self.dispatcher.send(endpoint.path, body)

    def check_secure_hash(self, body: RequestBody, **kwargs) -> ApiResponse:
        """Ask the upstream to validate our secure hash computation."""
        return self.call(Endpoint.SECURE_HASH_CHECK, body, **kwargs)

    def create_account_opening(self, body: RequestBody, **kwargs) -> ApiResponse:
        return self.call(Endpoint.CREATE_EXPRESS_ACCOUNT, body, **kwargs)

    def get_merchant_category_code(self, body: RequestBody, **kwargs) -> ApiResponse:
        return self.call(Endpoint.MERCHANT_CATEGORY_CODE, body, **kwargs)

    def create_merchant_qrcode(self, body: RequestBody, **kwargs) -> ApiResponse:
        return self.call(Endpoint.CREATE_MERCHANT_QR, body, **kwargs)

    def dynamic_qr_payment(self, body: RequestBody, **kwargs) -> ApiResponse:
        return self.call(Endpoint.DYNAMIC_QR_PAYMENT, body, **kwargs)

    def payment(self, body: RequestBody, **kwargs) -> ApiResponse:
        """Batched payment; the hash covers the paymentHeader section."""
        return self.call(Endpoint.PAYMENT, body, **kwargs)

    def transaction_enquiry(self, body: RequestBody, **kwargs) -> ApiResponse:
        """Transaction status; the hash covers requestId only."""
        return self.call(Endpoint.TRANSACTION_ENQUIRY, body, **kwargs)

    def get_account_balance(self, body: RequestBody, **kwargs) -> ApiResponse:
        return self.call(Endpoint.ACCOUNT_BALANCE, body, **kwargs)

    def get_account_enquiry(self, body: RequestBody, **kwargs) -> ApiResponse:
        return self.call(Endpoint.ACCOUNT_ENQUIRY, body, **kwargs)
