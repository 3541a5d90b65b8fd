"""
Bearer token storage.

The upstream token carries no expiry, so the cache simply holds the current
value under one fixed key until it is rejected. The Redis backend shares the
token across processes; the in-memory backend is for single-process use and
tests. Neither holds a lock across a get/set pair: two callers regenerating
concurrently just overwrite each other with equally valid tokens.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

import redis

from ..constants import TOKEN_CACHE_KEY
from ..utils.logger import get_logger


class TokenCache(ABC):
    """Key-value store holding the current bearer token."""

    def __init__(self, key: str = TOKEN_CACHE_KEY):
        self.key = key

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the cached token, or None."""

    @abstractmethod
    def set(self, token: str) -> None:
        """Store a token, replacing any previous value."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the token; no error if absent."""


class InMemoryTokenCache(TokenCache):
    """Process-local token cache."""

    def __init__(self, key: str = TOKEN_CACHE_KEY, token: Optional[str] = None):
        super().__init__(key)
        self._lock = threading.Lock()
        self._token = token

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token

    def delete(self) -> None:
        with self._lock:
            self._token = None


class RedisTokenCache(TokenCache):
    """
    Token cache backed by a Redis client.

    When a namespace is given the key is stored as "<namespace>:<key>" so several
    applications and environments can share one Redis database.
    """

    def __init__(self, client: Any, key: str = TOKEN_CACHE_KEY, namespace: str = ""):
        super().__init__(key)
        self.client = client
        self.namespace = namespace
        self.logger = get_logger()

    @classmethod
    def from_url(cls, url: str, key: str = TOKEN_CACHE_KEY, namespace: str = "") -> "RedisTokenCache":
        """Create a cache with a client connected to `url`."""
        return cls(redis.Redis.from_url(url), key=key, namespace=namespace)

    @property
    def storage_key(self) -> str:
        return f"{self.namespace}:{self.key}" if self.namespace else self.key

    def get(self) -> Optional[str]:
        value = self.client.get(self.storage_key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, token: str) -> None:
        self.client.set(self.storage_key, token)

    def delete(self) -> None:
        deleted = self.client.delete(self.storage_key)
        self.logger.debug(
            "Token cache entry deleted",
            extra={"cache_key": self.storage_key, "existed": bool(deleted)},
        )
