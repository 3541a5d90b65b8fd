"""
Response model returned by the transport and the dispatcher.

A business call whose transient failures outlast every retry does not raise;
it yields the timeout sentinel instead, a response tagged `timed_out=True`
whose payload is `{"msg": "Timeout"}`. Callers must check `timed_out` (or
`is_sentinel`) before trusting the payload.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..constants import FORBIDDEN_MARKER, TIMEOUT_SENTINEL_MESSAGE


class ApiResponse(BaseModel):
    """Upstream response, or the retry-exhausted sentinel."""

    status_code: Optional[int] = Field(default=None, description="HTTP status; None for the sentinel")
    payload: Any = Field(default=None, description="Decoded JSON body, None if not JSON")
    text: str = Field(default="", description="Raw response body")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")
    attempts: int = Field(default=1, ge=1, description="Network attempts made")
    timed_out: bool = Field(default=False, description="True only for the sentinel")

    @classmethod
    def timeout_sentinel(cls, attempts: int) -> "ApiResponse":
        """Build the response returned when every attempt failed transiently."""
        return cls(
            payload={"msg": TIMEOUT_SENTINEL_MESSAGE},
            text="",
            attempts=attempts,
            timed_out=True,
        )

    @property
    def is_sentinel(self) -> bool:
        return self.timed_out

    @property
    def ok(self) -> bool:
        return not self.timed_out and self.status_code is not None and 200 <= self.status_code < 300

    @property
    def error(self) -> Optional[str]:
        """The upstream `error` field, if the body has one."""
        if not isinstance(self.payload, dict):
            return None
        value = self.payload.get("error")
        return None if value is None else str(value)

    @property
    def is_forbidden(self) -> bool:
        """Whether the upstream rejected the bearer token."""
        error = self.error
        return error is not None and FORBIDDEN_MARKER in error

    def get(self, key: str, default: Any = None) -> Any:
        """Read a top-level payload field."""
        if isinstance(self.payload, dict):
            return self.payload.get(key, default)
        return default

    def __getitem__(self, key: str) -> Any:
        if not isinstance(self.payload, dict):
            raise KeyError(key)
        return self.payload[key]
