"""
Pydantic schema for the upstream credentials.

Credentials are supplied by the hosting application and never change for the
lifetime of the process, so the model is frozen. Secrets are kept exactly as
given: the shared secret is part of the secure hash input byte for byte.
"""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from ..type_definitions import TokenRequestBody


class Credentials(BaseModel):
    """User id, password and shared secret ("lab key") issued by the bank."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    user_id: str = Field(..., min_length=1, description="API user id")
    password: SecretStr = Field(..., description="API password")
    shared_secret: SecretStr = Field(..., description="Secret appended to secure hash input")

    @field_validator("user_id")
    @classmethod
    def strip_user_id(cls, v: str) -> str:
        """Trim surrounding whitespace from the user id."""
        v = v.strip()
        if not v:
            raise ValueError("User id cannot be blank")
        return v

    @field_validator("password", "shared_secret")
    @classmethod
    def validate_not_empty(cls, v: SecretStr) -> SecretStr:
        """Reject empty secrets."""
        if not v.get_secret_value():
            raise ValueError("Secret values cannot be empty")
        return v

    def token_request_body(self) -> TokenRequestBody:
        """Body posted to the token endpoint."""
        return {"userId": self.user_id, "password": self.password.get_secret_value()}
