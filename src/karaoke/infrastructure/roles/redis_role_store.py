"""Redis-backed role membership store."""

import logging

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from karaoke.config import RedisSettings
from karaoke.domain.ports import IRoleMembershipStore

logger = logging.getLogger(__name__)


# Hey future me - role sets are managed by the admin side of the backend (SADD/SREM on
# "KaraokeSongManagers"). We only ever READ them, and we never cache the answer: a manager who
# gets removed mid-shift must lose access on the very next request. One SISMEMBER is cheap.
# RedisError is NOT caught here - if Redis is down the request fails, it does not silently
# degrade to "not a manager".
class RedisRoleMembershipStore(IRoleMembershipStore):
    """IRoleMembershipStore over a Redis set per role."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: RedisSettings) -> "RedisRoleMembershipStore":
        """Create a store with its own connection pool."""
        client = aioredis.Redis.from_url(
            settings.url,
            decode_responses=True,
            socket_timeout=settings.socket_timeout,
            socket_connect_timeout=settings.socket_timeout,
        )
        return cls(client)

    async def is_member(self, user_id: str, role_set: str) -> bool:
        """Check whether user_id is a member of the Redis set role_set."""
        return bool(await self._client.sismember(role_set, user_id))

    async def ping(self) -> bool:
        """Check Redis reachability."""
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis ping failed: %s", e)
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
