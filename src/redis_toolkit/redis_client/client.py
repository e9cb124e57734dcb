"""String-valued Redis command wrappers.

Every method forwards to a single redis-py command. Values are returned as
``str`` because the underlying client is created with
``decode_responses=True``. Serialization lives in RedisBaseService.

Empty batch arguments (no values, empty mapping) short-circuit instead of
sending a command Redis would reject.
"""

from collections.abc import AsyncIterator, Iterable, Mapping
from datetime import timedelta

import redis.asyncio as redis

from redis_toolkit.config import DEFAULT_TTL_SECONDS
from redis_toolkit.models import ScoredMember

Timeout = int | timedelta


class RedisCacheClient:
    """Thin async wrapper over ``redis.asyncio.Redis``.

    The wrapper does not own the connection; whoever created the client
    (usually RedisRegistry) closes it.
    """

    def __init__(self, client: redis.Redis, default_ttl: Timeout = DEFAULT_TTL_SECONDS):
        """Initialize cache client.

        Args:
            client: redis-py async client created with decode_responses=True
            default_ttl: Expiration used when callers do not pass one
        """
        self._client = client
        self._default_ttl = default_ttl

    @property
    def client(self) -> redis.Redis:
        """Underlying redis-py client."""
        return self._client

    @property
    def default_ttl(self) -> Timeout:
        return self._default_ttl

    def _ttl(self, timeout: Timeout | None) -> Timeout:
        return self._default_ttl if timeout is None else timeout

    # =========================================================================
    # Keys
    # =========================================================================

    async def get_ttl(self, key: str) -> int:
        """Remaining time to live in seconds (-1 no expiry, -2 missing key)."""
        return await self._client.ttl(key)

    async def expire(self, key: str, timeout: Timeout | None = None) -> bool:
        """Set key expiration.

        Args:
            key: Redis key
            timeout: Seconds or timedelta (defaults to the client default TTL)

        Returns:
            True if the timeout was set
        """
        return bool(await self._client.expire(key, self._ttl(timeout)))

    async def get_keys(self, pattern: str) -> set[str]:
        """Keys matching a glob-style pattern."""
        return set(await self._client.keys(pattern))

    async def delete(self, key: str) -> bool:
        return await self._client.delete(key) > 0

    async def delete_all(self, keys: Iterable[str]) -> int:
        """Delete several keys. Returns the number removed."""
        keys = list(keys)
        if not keys:
            return 0
        return await self._client.delete(*keys)

    # =========================================================================
    # Value
    # =========================================================================

    async def get_for_value(self, key: str) -> str | None:
        return await self._client.get(key)

    async def set_for_value(self, key: str, value: str | int | float) -> None:
        await self._client.set(key, value)

    async def set_for_value_ttl(
        self,
        key: str,
        value: str | int | float,
        timeout: Timeout | None = None,
    ) -> None:
        """Set a value together with its expiration (defaults to the client TTL)."""
        await self._client.set(key, value, ex=self._ttl(timeout))

    async def increment_for_value(self, key: str, delta: int = 1) -> int:
        """Increment an integer value. Returns the value after the increment."""
        return await self._client.incrby(key, delta)

    # =========================================================================
    # Hash
    # =========================================================================

    async def get_for_hash(self, key: str, hash_key: str) -> str | None:
        return await self._client.hget(key, hash_key)

    async def put_for_hash(self, key: str, hash_key: str, value: str | int | float) -> None:
        await self._client.hset(key, hash_key, value)

    async def increment_for_hash(self, key: str, hash_key: str, delta: int = 1) -> int:
        return await self._client.hincrby(key, hash_key, delta)

    async def multi_get_for_hash(self, key: str, hash_keys: Iterable[str]) -> list[str | None]:
        """Values for several fields, positionally aligned with ``hash_keys``."""
        hash_keys = list(hash_keys)
        if not hash_keys:
            return []
        return await self._client.hmget(key, hash_keys)

    async def multi_put_for_hash(self, key: str, values: Mapping[str, str | int | float]) -> None:
        if not values:
            return
        await self._client.hset(key, mapping=dict(values))

    async def keys_for_hash(self, key: str) -> set[str]:
        return set(await self._client.hkeys(key))

    async def values_for_hash(self, key: str) -> list[str]:
        return await self._client.hvals(key)

    async def entries_for_hash(self, key: str) -> dict[str, str]:
        return await self._client.hgetall(key)

    async def scan_for_hash(
        self,
        key: str,
        match: str | None = None,
        count: int | None = None,
    ) -> AsyncIterator[tuple[str, str]]:
        """Incrementally iterate hash entries with HSCAN."""
        async for field, value in self._client.hscan_iter(key, match=match, count=count):
            yield field, value

    async def delete_for_hash(self, key: str, *hash_keys: str) -> int:
        if not hash_keys:
            return 0
        return await self._client.hdel(key, *hash_keys)

    # =========================================================================
    # List
    # =========================================================================

    async def left_pop_for_list(self, key: str) -> str | None:
        return await self._client.lpop(key)

    async def right_pop_for_list(self, key: str) -> str | None:
        return await self._client.rpop(key)

    async def left_push_for_list(self, key: str, value: str) -> int:
        """Push onto the head of the list. Returns the new length."""
        return await self._client.lpush(key, value)

    async def right_push_for_list(self, key: str, value: str) -> int:
        """Push onto the tail of the list. Returns the new length."""
        return await self._client.rpush(key, value)

    async def left_push_all_for_list(self, key: str, values: Iterable[str]) -> int:
        values = list(values)
        if not values:
            return await self.size_for_list(key)
        return await self._client.lpush(key, *values)

    async def right_push_all_for_list(self, key: str, values: Iterable[str]) -> int:
        values = list(values)
        if not values:
            return await self.size_for_list(key)
        return await self._client.rpush(key, *values)

    async def size_for_list(self, key: str) -> int:
        return await self._client.llen(key)

    async def range_for_list(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        """Elements from ``start`` to ``end`` inclusive (negative indexes count from the tail)."""
        return await self._client.lrange(key, start, end)

    # =========================================================================
    # Set
    # =========================================================================

    async def add_for_set(self, key: str, *values: str) -> int:
        """Add members. Returns the number of members that were new."""
        if not values:
            return 0
        return await self._client.sadd(key, *values)

    async def pop_for_set(self, key: str, count: int | None = None) -> str | list[str] | None:
        """Pop one random member, or a list of up to ``count`` members."""
        return await self._client.spop(key, count)

    async def members_for_set(self, key: str) -> set[str]:
        return set(await self._client.smembers(key))

    async def exist_member_in_set(self, key: str, value: str) -> bool:
        return bool(await self._client.sismember(key, value))

    async def intersect_for_sets(self, key_alpha: str, key_beta: str) -> set[str]:
        return set(await self._client.sinter(key_alpha, key_beta))

    async def remove_for_set(self, key: str, *values: str) -> int:
        if not values:
            return 0
        return await self._client.srem(key, *values)

    async def size_for_set(self, key: str) -> int:
        return await self._client.scard(key)

    # =========================================================================
    # Sorted set
    # =========================================================================

    async def increment_score_for_zset(self, key: str, member: str, delta: float = 1) -> float:
        """Increment a member's score. Returns the new score."""
        return await self._client.zincrby(key, delta, member)

    async def add_members_for_zset(self, key: str, members: Iterable[ScoredMember]) -> int:
        mapping: dict[str, float] = {}
        for scored in members:
            mapping.update(scored.as_mapping())
        return await self.add_map_for_zset(key, mapping)

    async def add_map_for_zset(self, key: str, scores: Mapping[str, float]) -> int:
        """Add or update members from ``{member: score}``. Returns the number added."""
        if not scores:
            return 0
        return await self._client.zadd(key, dict(scores))

    async def get_score_for_zset(self, key: str, member: str) -> float | None:
        return await self._client.zscore(key, member)

    async def get_rank_for_zset(self, key: str, member: str) -> int | None:
        """Zero-based rank, lowest score first."""
        return await self._client.zrank(key, member)

    async def reverse_range_with_scores_for_zset(
        self,
        key: str,
        start: int = 0,
        end: int = -1,
    ) -> list[ScoredMember]:
        """Members from highest to lowest score, with their scores."""
        rows = await self._client.zrevrange(key, start, end, withscores=True)
        return [ScoredMember(member=member, score=score) for member, score in rows]

    async def reverse_range_for_zset(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        return await self._client.zrevrange(key, start, end)

    async def size_for_zset(self, key: str) -> int:
        return await self._client.zcard(key)
