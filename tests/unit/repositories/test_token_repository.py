"""Test the token cache backends."""

from unittest.mock import Mock, patch

import pytest

from ecobank_express.repositories.token_repository import (
    InMemoryTokenCache,
    RedisTokenCache,
    TokenCache,
)


class TestInMemoryTokenCache:
    """Test InMemoryTokenCache."""

    def test_empty_by_default(self):
        assert InMemoryTokenCache().get() is None

    def test_set_get_delete(self):
        cache = InMemoryTokenCache()

        cache.set("abc")
        assert cache.get() == "abc"

        cache.delete()
        assert cache.get() is None

    def test_delete_when_absent(self):
        cache = InMemoryTokenCache()

        cache.delete()

        assert cache.get() is None

    def test_initial_token(self):
        assert InMemoryTokenCache(token="seed").get() == "seed"

    def test_is_token_cache(self):
        assert isinstance(InMemoryTokenCache(), TokenCache)


class TestRedisTokenCache:
    """Test RedisTokenCache against a mocked client."""

    @pytest.fixture
    def client(self):
        return Mock()

    def test_default_key(self, client):
        cache = RedisTokenCache(client)

        assert cache.storage_key == "ecobank_express_api_token"

    def test_namespaced_key(self, client):
        cache = RedisTokenCache(client, namespace="payments_production")

        assert cache.storage_key == "payments_production:ecobank_express_api_token"

    def test_get_decodes_bytes(self, client):
        client.get.return_value = b"abc"

        assert RedisTokenCache(client).get() == "abc"
        client.get.assert_called_once_with("ecobank_express_api_token")

    def test_get_missing(self, client):
        client.get.return_value = None

        assert RedisTokenCache(client).get() is None

    def test_get_already_decoded(self, client):
        client.get.return_value = "abc"

        assert RedisTokenCache(client).get() == "abc"

    def test_set(self, client):
        RedisTokenCache(client, namespace="ns").set("abc")

        client.set.assert_called_once_with("ns:ecobank_express_api_token", "abc")

    def test_delete(self, client):
        client.delete.return_value = 0

        RedisTokenCache(client).delete()

        client.delete.assert_called_once_with("ecobank_express_api_token")

    def test_from_url(self):
        with patch("redis.Redis.from_url") as from_url:
            cache = RedisTokenCache.from_url("redis://localhost:6379/0", namespace="ns")

        from_url.assert_called_once_with("redis://localhost:6379/0")
        assert cache.client is from_url.return_value
        assert cache.namespace == "ns"
