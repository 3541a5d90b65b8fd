"""
Bearer token lifecycle.

Tokens are created lazily on first use, reused from the cache for as long as
the upstream accepts them and dropped when it rejects one. The TokenManager
is the only writer of the cache.
"""

from typing import Optional

from ..config import AppConfig
from ..constants import DEFAULT_ORIGIN, TOKEN_PATH, LogContextKey, Timeouts
from ..exceptions import ApiError, ApiTimeoutError
from ..repositories.token_repository import TokenCache
from ..schemas.credential_schemas import Credentials
from ..utils.logger import get_logger
from ..utils.retry_utils import RetryStatus
from .http_transport import HTTPTransport, default_headers


class TokenManager:
    """Acquires, caches and invalidates the upstream bearer token."""

    def __init__(
        self,
        credentials: Credentials,
        cache: TokenCache,
        transport: HTTPTransport,
        origin: str = DEFAULT_ORIGIN,
        token_path: str = TOKEN_PATH,
        timeout: float = Timeouts.TOKEN_REQUEST,
        logger=None,
    ):
        """
        Initialize the token manager.

        Args:
            credentials: User id and password posted to the token endpoint
            cache: Shared token cache
            transport: Transport used for the token request
            origin: Origin header value
            token_path: Token endpoint path
            timeout: Client-side timeout of each token request attempt
            logger: Logger collaborator (default: client logger)
        """
        self.credentials = credentials
        self.cache = cache
        self.transport = transport
        self.origin = origin
        self.token_path = token_path
        self.timeout = timeout
        self.logger = logger or get_logger()

    @classmethod
    def from_config(
        cls, config: AppConfig, cache: TokenCache, transport: HTTPTransport, logger=None
    ) -> "TokenManager":
        return cls(
            credentials=config.require_credentials(),
            cache=cache,
            transport=transport,
            origin=config.api.origin,
            token_path=config.api.token_path,
            timeout=config.api.token_timeout,
            logger=logger,
        )

    def get_token(self) -> str:
        """Return the cached token, generating one if the cache is empty."""
        token = self.cache.get()
        if token:
            return token
        return self.generate_token()

    def generate_token(self) -> str:
        """
        Request a new token and store it in the cache.

        Returns:
            The new bearer token

        Raises:
            ApiTimeoutError: If every attempt failed with a transient error
            ApiError: On any other failure, or if the response carries no token
        """
        outcome = self.transport.post_with_retry(
            self.token_path,
            self.credentials.token_request_body(),
            default_headers(self.origin),
            timeout=self.timeout,
        )

        if outcome.status is RetryStatus.EXHAUSTED:
            raise ApiTimeoutError(
                attempts=outcome.attempts,
                cause=outcome.error,
                path=self.token_path,
            ) from outcome.error

        if outcome.status is RetryStatus.FATAL:
            raise ApiError(
                f"ecobank express api error: {outcome.error}",
                cause=outcome.error,
                path=self.token_path,
                attempts=outcome.attempts,
            ) from outcome.error

        response = outcome.value
        token: Optional[str] = response.get("token")
        if not token or not isinstance(token, str):
            raise ApiError(
                "ecobank express api error: token endpoint returned no token",
                path=self.token_path,
                http_status=response.status_code,
                upstream_error=response.error,
            )

        self.cache.set(token)
        self.logger.info(
            "Bearer token generated",
            extra={
                LogContextKey.PATH.value: self.token_path,
                LogContextKey.ATTEMPT.value: outcome.attempts,
            },
        )
        return token

    def invalidate(self) -> None:
        """Drop the cached token. Safe to call when no token is cached."""
        self.cache.delete()
        self.logger.info("Bearer token invalidated")
