"""Pydantic schemas for credentials, requests and responses."""

from .credential_schemas import Credentials
from .request_schemas import RequestEnvelope
from .response_schemas import ApiResponse

__all__ = ["ApiResponse", "Credentials", "RequestEnvelope"]
