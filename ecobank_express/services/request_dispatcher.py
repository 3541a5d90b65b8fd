"""
Authenticated request dispatch with one re-authentication retry.

`send` runs a two-state machine. In FIRST_ATTEMPT the request goes out with
the current token; a Forbidden-class answer moves it to RETRIED_AFTER_REAUTH,
which invalidates the token and sends the request once more with a fresh one.
Whatever that second attempt returns is final.
"""

import uuid
from enum import Enum
from typing import Any, Mapping

from ..constants import DEFAULT_ORIGIN, LogContextKey
from ..schemas.request_schemas import RequestEnvelope
from ..schemas.response_schemas import ApiResponse
from ..utils.logger import get_logger
from .http_transport import HTTPTransport, default_headers
from .token_service import TokenManager


class DispatchState(str, Enum):
    """Position of a send call in the re-authentication cycle."""

    FIRST_ATTEMPT = "first_attempt"
    RETRIED_AFTER_REAUTH = "retried_after_reauth"


class RequestDispatcher:
    """Entry point for business calls."""

    def __init__(
        self,
        token_manager: TokenManager,
        transport: HTTPTransport,
        origin: str = DEFAULT_ORIGIN,
        logger=None,
    ):
        self.token_manager = token_manager
        self.transport = transport
        self.origin = origin
        self.logger = logger or get_logger()

    def _build_headers(self) -> dict:
        return default_headers(self.origin, self.token_manager.get_token())

    def send(self, path: str, body: Mapping[str, Any]) -> ApiResponse:
        """
        POST a body to a business endpoint.

        Args:
            path: Endpoint path
            body: Request body in wire order

        Returns:
            The upstream response (possibly an error payload) or the timeout sentinel

        Raises:
            ApiError: On a non-transient transport failure
            ApiTimeoutError: If a token could not be obtained
        """
        trace_id = str(uuid.uuid4())
        state = DispatchState.FIRST_ATTEMPT

        while True:
            headers = self._build_headers()
            self.logger.debug(
                f"request: method: post, url: {path}",
                extra={
                    LogContextKey.TRACE_ID.value: trace_id,
                    "dispatch_state": state.value,
                    "body": dict(body),
                },
            )

            response = self.transport.post(path, body, headers)

            self.logger.debug(
                "response",
                extra={
                    LogContextKey.TRACE_ID.value: trace_id,
                    "dispatch_state": state.value,
                    LogContextKey.STATUS_CODE.value: response.status_code,
                    "timed_out": response.timed_out,
                    "payload": response.payload,
                },
            )

            if state is DispatchState.FIRST_ATTEMPT and response.is_forbidden:
                self.logger.info(
                    "Bearer token rejected, re-authenticating once",
                    extra={
                        LogContextKey.TRACE_ID.value: trace_id,
                        LogContextKey.PATH.value: path,
                    },
                )
                self.token_manager.invalidate()
                state = DispatchState.RETRIED_AFTER_REAUTH
                continue

            return response

    def send_envelope(self, envelope: RequestEnvelope) -> ApiResponse:
        """Send a prepared RequestEnvelope."""
        return self.send(envelope.path, envelope.body)
