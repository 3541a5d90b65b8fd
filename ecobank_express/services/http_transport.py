"""
HTTP transport: one JSON POST with bounded retry.

Transient network errors are retried up to `max_attempts` times. What happens
when they never stop depends on the caller:

- `post` (business endpoints) returns the timeout sentinel response;
- `post_with_retry` hands back the raw RetryOutcome so the token service can
  turn exhaustion into a hard ApiTimeoutError.

Any other failure is wrapped in ApiError and raised at once.
"""

from typing import Any, Dict, Mapping, Optional

import requests

from ..config import ApiConfig, RetryConfig
from ..constants import (
    DEFAULT_ORIGIN,
    JSON_CONTENT_TYPE,
    Header,
    Limits,
    LogContextKey,
    Timeouts,
)
from ..exceptions import ApiError
from ..schemas.response_schemas import ApiResponse
from ..utils.json_utils import dumps
from ..utils.logger import get_logger
from ..utils.retry_utils import RetryOutcome, RetryStatus, call_with_retry


def default_headers(origin: str = DEFAULT_ORIGIN, bearer_token: Optional[str] = None) -> Dict[str, str]:
    """Headers sent with every request; Authorization only when a token is given."""
    headers = {
        Header.CONTENT_TYPE.value: JSON_CONTENT_TYPE,
        Header.ACCEPT.value: JSON_CONTENT_TYPE,
        Header.ORIGIN.value: origin,
    }
    if bearer_token is not None:
        headers[Header.AUTHORIZATION.value] = f"Bearer {bearer_token}"
    return headers


class HTTPTransport:
    """Posts JSON bodies to the upstream with bounded retry."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = Timeouts.API_REQUEST,
        max_attempts: int = Limits.MAX_RETRY_ATTEMPTS,
        backoff_base: float = Limits.DEFAULT_BACKOFF_SECONDS,
        backoff_max: float = Limits.MAX_BACKOFF_SECONDS,
        verify_ssl: bool = True,
        logger=None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Scheme and host, without trailing slash
            session: requests session to reuse connections (created if omitted)
            timeout: Default per-attempt timeout in seconds
            max_attempts: Total attempts per call
            backoff_base: Delay after the first transient failure (0 = immediate)
            backoff_max: Delay cap
            verify_ssl: Verify TLS certificates
            logger: Logger collaborator (default: client logger)
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max
        self.verify_ssl = verify_ssl
        self.logger = logger or get_logger()

    @classmethod
    def from_config(
        cls,
        api_config: ApiConfig,
        retry_config: RetryConfig,
        session: Optional[requests.Session] = None,
        logger=None,
    ) -> "HTTPTransport":
        return cls(
            base_url=api_config.base_url,
            session=session,
            timeout=api_config.request_timeout,
            max_attempts=retry_config.max_attempts,
            backoff_base=retry_config.backoff_base,
            backoff_max=retry_config.backoff_max,
            verify_ssl=api_config.verify_ssl,
            logger=logger,
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _to_response(self, resp: requests.Response) -> ApiResponse:
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        return ApiResponse(
            status_code=resp.status_code,
            payload=payload,
            text=resp.text or "",
            headers=dict(resp.headers or {}),
        )

    def _post_once(
        self, path: str, body: Mapping[str, Any], headers: Mapping[str, str], timeout: float
    ) -> ApiResponse:
        resp = self.session.post(
            self.url_for(path),
            data=dumps(body).encode("utf-8"),
            headers=dict(headers),
            timeout=timeout,
            verify=self.verify_ssl,
        )
        return self._to_response(resp)

    def post_with_retry(
        self,
        path: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> RetryOutcome[ApiResponse]:
        """
        POST with retry, returning the outcome without interpreting it.

        Args:
            path: Endpoint path
            body: JSON body
            headers: Request headers
            timeout: Per-attempt timeout (default: transport timeout)

        Returns:
            RetryOutcome whose value is the ApiResponse on success
        """
        effective_timeout = timeout if timeout is not None else self.timeout

        def log_retry(attempt: int, error: BaseException) -> None:
            self.logger.warning(
                "Transient error, retrying",
                extra={
                    LogContextKey.PATH.value: path,
                    LogContextKey.ATTEMPT.value: attempt,
                    LogContextKey.MAX_ATTEMPTS.value: self.max_attempts,
                    LogContextKey.ERROR_TYPE.value: type(error).__name__,
                },
            )

        outcome = call_with_retry(
            lambda: self._post_once(path, body, headers, effective_timeout),
            max_attempts=self.max_attempts,
            base_delay=self.backoff_base,
            max_delay=self.backoff_max,
            on_retry=log_retry,
        )
        if outcome.succeeded and outcome.value is not None:
            outcome.value.attempts = outcome.attempts
        return outcome

    def post(
        self,
        path: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        """
        POST a business request.

        Returns:
            The upstream response, or the timeout sentinel when every attempt
            failed with a transient error

        Raises:
            ApiError: On any non-transient failure
        """
        outcome = self.post_with_retry(path, body, headers, timeout)

        if outcome.status is RetryStatus.SUCCESS:
            return outcome.value

        if outcome.status is RetryStatus.EXHAUSTED:
            self.logger.warning(
                "Retries exhausted, returning timeout sentinel",
                extra={
                    LogContextKey.PATH.value: path,
                    LogContextKey.ATTEMPT.value: outcome.attempts,
                    LogContextKey.ERROR_TYPE.value: type(outcome.error).__name__,
                },
            )
            return ApiResponse.timeout_sentinel(outcome.attempts)

        raise ApiError(
            f"ecobank express api error: {outcome.error}",
            cause=outcome.error,
            path=path,
            attempts=outcome.attempts,
        ) from outcome.error
