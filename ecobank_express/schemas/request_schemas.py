"""Outbound request envelope."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequestEnvelope(BaseModel):
    """Path and body of one business request. Body order is preserved."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Endpoint path, e.g. /corporateapi/merchant/qr")
    body: Dict[str, Any] = Field(default_factory=dict, description="Body fields in wire order")

    @field_validator("path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"
