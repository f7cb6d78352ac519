"""Unit tests for RedisRoleMembershipStore."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from karaoke.config import RedisSettings
from karaoke.infrastructure.roles import RedisRoleMembershipStore


class TestRedisRoleMembershipStore:
    """Test RedisRoleMembershipStore with a mocked client."""

    @pytest.fixture
    def client(self) -> AsyncMock:
        client = AsyncMock()
        client.sismember.return_value = 1
        client.ping.return_value = True
        return client

    @pytest.fixture
    def store(self, client: AsyncMock) -> RedisRoleMembershipStore:
        return RedisRoleMembershipStore(client)

    @pytest.mark.asyncio
    async def test_is_member_uses_sismember(self, store, client):
        assert await store.is_member("user-1", "KaraokeSongManagers") is True
        client.sismember.assert_awaited_once_with("KaraokeSongManagers", "user-1")

    @pytest.mark.asyncio
    async def test_not_a_member(self, store, client):
        client.sismember.return_value = 0

        assert await store.is_member("user-1", "KaraokeSongManagers") is False

    @pytest.mark.asyncio
    async def test_no_caching_between_calls(self, store, client):
        await store.is_member("user-1", "KaraokeSongManagers")
        client.sismember.return_value = 0

        assert await store.is_member("user-1", "KaraokeSongManagers") is False
        assert client.sismember.await_count == 2

    @pytest.mark.asyncio
    async def test_redis_errors_propagate(self, store, client):
        client.sismember.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(RedisConnectionError):
            await store.is_member("user-1", "KaraokeSongManagers")

    @pytest.mark.asyncio
    async def test_ping(self, store, client):
        assert await store.ping() is True

        client.ping.side_effect = RedisConnectionError("down")
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, store, client):
        await store.close()
        client.aclose.assert_awaited_once()

    def test_from_settings_does_not_connect(self):
        store = RedisRoleMembershipStore.from_settings(
            RedisSettings(url="redis://localhost:6399/3", socket_timeout=1.5)
        )
        assert isinstance(store, RedisRoleMembershipStore)
