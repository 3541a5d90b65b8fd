from .token_repository import InMemoryTokenCache, RedisTokenCache, TokenCache

__all__ = ["InMemoryTokenCache", "RedisTokenCache", "TokenCache"]
