"""
Secure hash computation and request signing.

The upstream verifies every signed request with

    hex(SHA512(value_1 + value_2 + ... + value_n + shared_secret))

where the values are the body's fields in the order the caller built the body,
skipping any `secureHash`/`secure_hash` field. Fields are never sorted: the
upstream concatenates them in wire order, so reordering changes the digest.
"""

import hashlib
import hmac
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from ..constants import HASH_FIELD_NAMES
from ..exceptions import ErrorCode, ValidationError, validation_failed
from ..type_definitions import RequestBody
from .hash_config import SecureHashConfig
from .json_utils import compact_dumps, decimal_to_str
from .logger import get_logger


def stringify_value(value: Any) -> str:
    """
    Render one body value the way it is concatenated into the hash input.

    Sequences are flattened and joined without separator, nested mappings are
    rendered as compact JSON, booleans in lowercase and None as empty string.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return decimal_to_str(value)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Enum):
        return stringify_value(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return compact_dumps(dict(value))
    if isinstance(value, (list, tuple)):
        return "".join(stringify_value(item) for item in value)
    return str(value)


def compute_secure_hash(fields: Mapping, secret: str) -> str:
    """
    Calculate the secure hash of an ordered mapping.

    Args:
        fields: Body fields in wire order; hash fields are skipped wherever they appear
        secret: Shared secret appended after the concatenated values

    Returns:
        128 character lowercase hex SHA-512 digest

    Raises:
        ValidationError: If fields is not a mapping or the input cannot be UTF-8 encoded
    """
    if not isinstance(fields, Mapping):
        raise ValidationError(
            "Cannot calculate secure hash of a non-mapping body",
            error_code=ErrorCode.TYPE_MISMATCH,
            field="body",
            value_type=type(fields).__name__,
        )

    payload = "".join(
        stringify_value(value) for key, value in fields.items() if key not in HASH_FIELD_NAMES
    )

    try:
        data = (payload + secret).encode("utf-8")
    except UnicodeEncodeError as e:
        raise validation_failed("body", payload[:64], "not encodable as UTF-8", cause=e) from e

    return hashlib.sha512(data).hexdigest()


def select_hash_source(body: Mapping, config: SecureHashConfig) -> Mapping:
    """
    Extract the part of the body a hash config signs.

    Raises:
        ValidationError: If the configured section or fields are missing
    """
    if config.source_section:
        section = body.get(config.source_section)
        if not isinstance(section, Mapping):
            raise validation_failed(
                config.source_section, section, "hash source section must be a mapping"
            )
        return section

    if config.source_fields:
        missing = [name for name in config.source_fields if name not in body]
        if missing:
            raise ValidationError(
                f"Hash source fields missing from body: {', '.join(missing)}",
                error_code=ErrorCode.MISSING_REQUIRED,
                missing=missing,
            )
        return {name: body[name] for name in config.source_fields}

    return body


def sign_body(
    body: RequestBody,
    config: SecureHashConfig,
    secret: str,
    overwrite: bool = False,
) -> Dict[str, Any]:
    """
    Return a copy of the body carrying its secure hash.

    The hash is appended after the existing fields. A hash already present in
    the body is kept unless `overwrite` is set, in which case it is replaced in
    place. The caller's mapping is never modified.

    Args:
        body: Request body in wire order
        config: Signing policy of the target endpoint
        secret: Shared secret
        overwrite: Recompute even if the body already carries a hash

    Returns:
        New dict with the hash field set (or an unchanged copy if unsigned)
    """
    signed = dict(body)
    if not config.is_signed:
        return signed

    hash_field = config.hash_field.value
    if hash_field in signed and signed[hash_field] and not overwrite:
        get_logger().debug(
            "Keeping caller supplied secure hash", extra={"hash_field": hash_field}
        )
        return signed

    signed[hash_field] = compute_secure_hash(select_hash_source(body, config), secret)
    return signed


def verify_secure_hash(body: Mapping, config: SecureHashConfig, secret: str) -> bool:
    """Check the hash a body carries against a freshly computed one."""
    if not config.is_signed:
        return True
    supplied: Optional[str] = body.get(config.hash_field.value)
    if not supplied:
        return False
    expected = compute_secure_hash(select_hash_source(body, config), secret)
    return hmac.compare_digest(supplied.lower(), expected)
