"""
Shared test fixtures.

HTTP is never performed: the transport receives a Mock session whose `post`
side effects script each test's network behaviour.
"""

import json
import os
from typing import Any, Optional
from unittest.mock import Mock, patch

import pytest

from ecobank_express.config import reset_config
from ecobank_express.constants import EnvironmentVariable
from ecobank_express.repositories.token_repository import InMemoryTokenCache
from ecobank_express.schemas.credential_schemas import Credentials
from ecobank_express.services.http_transport import HTTPTransport
from ecobank_express.services.request_dispatcher import RequestDispatcher
from ecobank_express.services.token_service import TokenManager
from ecobank_express.utils.logger import reset_logging

BASE_URL = "https://developer.ecobank.com"


def make_http_response(
    status_code: int = 200, json_data: Any = None, text: Optional[str] = None
) -> Mock:
    """Build a stand-in for requests.Response."""
    resp = Mock()
    resp.status_code = status_code
    resp.headers = {"Content-Type": "application/json"}
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
        resp.text = text or ""
    else:
        resp.json.return_value = json_data
        resp.text = text if text is not None else json.dumps(json_data)
    return resp


@pytest.fixture(autouse=True)
def clean_environment():
    """Isolate every test from the developer's environment and global state."""
    cleared = {var.value: "" for var in EnvironmentVariable}
    cleared[EnvironmentVariable.LOG_LEVEL.value] = "DEBUG"
    with patch.dict(os.environ, cleared):
        reset_config()
        reset_logging()
        yield
    reset_config()
    reset_logging()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(user_id="merchant-user", password="s3cret", shared_secret="K1")


@pytest.fixture
def token_cache() -> InMemoryTokenCache:
    return InMemoryTokenCache()


@pytest.fixture
def session() -> Mock:
    return Mock()


@pytest.fixture
def logger() -> Mock:
    return Mock()


@pytest.fixture
def transport(session: Mock, logger: Mock) -> HTTPTransport:
    return HTTPTransport(base_url=BASE_URL, session=session, logger=logger)


@pytest.fixture
def token_manager(
    credentials: Credentials, token_cache: InMemoryTokenCache, transport: HTTPTransport, logger: Mock
) -> TokenManager:
    return TokenManager(credentials, token_cache, transport, logger=logger)


@pytest.fixture
def dispatcher(token_manager: TokenManager, transport: HTTPTransport, logger: Mock) -> RequestDispatcher:
    return RequestDispatcher(token_manager, transport, logger=logger)


@pytest.fixture
def http_response():
    """Factory fixture for Response stand-ins."""
    return make_http_response
