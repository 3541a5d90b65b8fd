"""
Secure hash configuration.

Endpoints differ in which field carries the hash and in which part of the body
the hash is computed over; this class captures that per-endpoint policy.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import HashField


class SecureHashConfig(BaseModel):
    """
    How a request body is signed.

    With neither `source_section` nor `source_fields` set the hash covers the
    whole body (minus any existing hash field).
    """

    model_config = ConfigDict(frozen=True)

    hash_field: Optional[HashField] = Field(
        default=None, description="Body field receiving the hash; None means unsigned"
    )
    source_section: Optional[str] = Field(
        default=None, description="Nested mapping the hash is computed over"
    )
    source_fields: Optional[List[str]] = Field(
        default=None, description="Top-level fields the hash is computed over, in this order"
    )

    @model_validator(mode="after")
    def check_single_source(self) -> "SecureHashConfig":
        if self.source_section and self.source_fields:
            raise ValueError("source_section and source_fields are mutually exclusive")
        if self.hash_field is None and (self.source_section or self.source_fields):
            raise ValueError("a hash source requires a hash_field")
        return self

    @property
    def is_signed(self) -> bool:
        return self.hash_field is not None

    @classmethod
    def unsigned(cls) -> "SecureHashConfig":
        return cls()

    @classmethod
    def whole_body(cls, hash_field: HashField = HashField.CAMEL) -> "SecureHashConfig":
        return cls(hash_field=hash_field)

    @classmethod
    def section(cls, name: str, hash_field: HashField = HashField.CAMEL) -> "SecureHashConfig":
        return cls(hash_field=hash_field, source_section=name)

    @classmethod
    def fields(cls, names: List[str], hash_field: HashField = HashField.CAMEL) -> "SecureHashConfig":
        return cls(hash_field=hash_field, source_fields=list(names))
