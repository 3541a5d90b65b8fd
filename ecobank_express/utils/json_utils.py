import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def decimal_to_str(value: Decimal) -> str:
    """Plain, exact rendering of a Decimal, e.g. Decimal("40.50") -> "40.50"."""
    return format(value, "f")


class EnhancedJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            # Sent as a string so the wire value matches the hash input digit for digit
            return decimal_to_str(obj)
        elif isinstance(obj, (datetime, date)):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def dumps(obj: Any, **kwargs) -> str:
    """JSON dumps with Decimal, datetime and Enum support."""
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(obj, cls=EnhancedJSONEncoder, **kwargs)


def compact_dumps(obj: Any) -> str:
    """Single-line JSON without whitespace between tokens."""
    return dumps(obj, separators=(",", ":"))
