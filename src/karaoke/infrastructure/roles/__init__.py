"""Role membership store adapters."""

from .redis_role_store import RedisRoleMembershipStore

__all__ = ["RedisRoleMembershipStore"]
