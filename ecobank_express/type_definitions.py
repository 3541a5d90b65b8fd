"""
Type definitions for request bodies.

Bodies are plain dicts: insertion order is the order the caller built them in,
and that order is significant for the secure hash.
"""

from decimal import Decimal
from typing import Any, Dict, List, Union

from typing_extensions import TypeAlias, TypedDict

# Closed variant of values accepted in a request body
JsonScalar: TypeAlias = Union[str, int, float, Decimal, bool, None]
JsonValue: TypeAlias = Union[JsonScalar, List[Any], Dict[str, Any]]

# Ordered mapping of field name -> value
RequestBody: TypeAlias = Dict[str, JsonValue]


class TokenRequestBody(TypedDict):
    """Body of the token endpoint request."""

    userId: str
    password: str
