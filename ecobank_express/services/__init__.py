"""Token, transport and dispatch services."""

from .http_transport import HTTPTransport, default_headers
from .request_dispatcher import DispatchState, RequestDispatcher
from .token_service import TokenManager

__all__ = ["DispatchState", "HTTPTransport", "RequestDispatcher", "TokenManager", "default_headers"]
