"""JSON (de)serialization on top of RedisCacheClient.

Writers accept Pydantic models, JSON-compatible values or plain strings:
- ``None`` is stored as the empty string
- strings are stored verbatim
- models use ``model_dump_json``, everything else ``pydantic_core.to_json``

Readers return raw strings unless a ``target`` type is given, in which case
values are validated through a cached ``TypeAdapter``. Missing or empty
values decode to ``None`` (scalars), ``[]`` (lists) or ``{}`` (maps).
"""

from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_json

from redis_toolkit.errors import DeserializationError
from redis_toolkit.observability import get_logger

from .client import RedisCacheClient, Timeout

logger = get_logger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def serialize(value: Any) -> str:
    """Encode a value for storage."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return to_json(value).decode()


def deserialize(key: str, raw: str | None, target: Any) -> Any:
    """Decode a stored value into ``target``.

    Raises:
        DeserializationError: If the value does not validate against target
    """
    if raw is None or raw == "":
        return None
    if target is str:
        return raw
    try:
        return _adapter(target).validate_json(raw)
    except ValidationError as e:
        logger.warning(
            "Failed to decode cached value",
            key=key,
            target=repr(target),
            error_count=e.error_count(),
        )
        raise DeserializationError(key, target, raw) from e


class RedisBaseService:
    """Typed get/set helpers for strings, hashes, lists and sets.

    Commands without a serialization concern (TTL lookups, sorted sets,
    intersections) are reached through ``service.cache``.
    """

    def __init__(self, cache: RedisCacheClient):
        self._cache = cache

    @property
    def cache(self) -> RedisCacheClient:
        """Raw string-valued command wrapper."""
        return self._cache

    def _decode_all(self, key: str, raws: Iterable[str | None], target: Any) -> list[Any]:
        return [deserialize(key, raw, target) for raw in raws]

    # =========================================================================
    # Expiration
    # =========================================================================

    async def expire(self, key: str, timeout: Timeout | None = None) -> bool:
        """Set key expiration (defaults to three days)."""
        return await self._cache.expire(key, timeout)

    # =========================================================================
    # Value
    # =========================================================================

    async def set_for_value(self, key: str, data: Any) -> None:
        await self._cache.set_for_value(key, serialize(data))

    async def set_for_value_ttl(self, key: str, data: Any, timeout: Timeout | None = None) -> None:
        """Store a value and set its expiration in one command."""
        await self._cache.set_for_value_ttl(key, serialize(data), timeout)

    async def increment_for_value(self, key: str, delta: int = 1) -> int:
        return await self._cache.increment_for_value(key, delta)

    async def get_for_value(self, key: str, target: type[T] | Any = None) -> T | str | None:
        """Read a value, decoding it into ``target`` when given.

        Args:
            key: Redis key
            target: Type to validate the stored JSON against

        Returns:
            Raw string, decoded value, or None if missing/empty
        """
        raw = await self._cache.get_for_value(key)
        if target is None:
            return raw
        return deserialize(key, raw, target)

    async def list_for_value(self, key: str, target: type[T] | Any) -> list[T]:
        """Read a JSON array stored under a single key."""
        raw = await self._cache.get_for_value(key)
        return deserialize(key, raw, list[target]) or []

    # =========================================================================
    # Hash
    # =========================================================================

    async def put_for_hash(self, key: str, hash_key: str, data: Any) -> None:
        await self._cache.put_for_hash(key, hash_key, serialize(data))

    async def multi_put_for_hash(self, key: str, values: Mapping[str, Any]) -> None:
        await self._cache.multi_put_for_hash(
            key, {hash_key: serialize(data) for hash_key, data in values.items()}
        )

    async def get_for_hash(self, key: str, hash_key: str, target: type[T] | Any = None) -> T | str | None:
        raw = await self._cache.get_for_hash(key, hash_key)
        if target is None:
            return raw
        return deserialize(key, raw, target)

    async def multi_get_for_hash(
        self,
        key: str,
        hash_keys: Iterable[str],
        target: type[T] | Any = None,
    ) -> list[T | str | None]:
        """Read several fields. Missing fields come back as None in place."""
        raws = await self._cache.multi_get_for_hash(key, hash_keys)
        if target is None:
            return raws
        return self._decode_all(key, raws, target)

    async def keys_for_hash(self, key: str) -> set[str]:
        return await self._cache.keys_for_hash(key)

    async def values_for_hash(self, key: str, target: type[T] | Any = None) -> list[T | str | None]:
        raws = await self._cache.values_for_hash(key)
        if target is None:
            return raws
        return self._decode_all(key, raws, target)

    async def entries_for_hash(self, key: str, target: type[T] | Any = None) -> dict[str, T | str | None]:
        entries = await self._cache.entries_for_hash(key)
        if target is None:
            return entries
        return {hash_key: deserialize(key, raw, target) for hash_key, raw in entries.items()}

    # =========================================================================
    # List
    # =========================================================================

    async def left_push_for_list(self, key: str, data: Any) -> int:
        return await self._cache.left_push_for_list(key, serialize(data))

    async def right_push_for_list(self, key: str, data: Any) -> int:
        return await self._cache.right_push_for_list(key, serialize(data))

    async def left_pop_for_list(self, key: str, target: type[T] | Any = None) -> T | str | None:
        raw = await self._cache.left_pop_for_list(key)
        if target is None:
            return raw
        return deserialize(key, raw, target)

    async def right_pop_for_list(self, key: str, target: type[T] | Any = None) -> T | str | None:
        raw = await self._cache.right_pop_for_list(key)
        if target is None:
            return raw
        return deserialize(key, raw, target)

    async def range_for_list(
        self,
        key: str,
        start: int = 0,
        end: int = -1,
        target: type[T] | Any = None,
    ) -> list[T | str | None]:
        raws = await self._cache.range_for_list(key, start, end)
        if target is None:
            return raws
        return self._decode_all(key, raws, target)

    # =========================================================================
    # Set
    # =========================================================================

    async def add_for_set(self, key: str, *data: Any) -> int:
        return await self._cache.add_for_set(key, *(serialize(item) for item in data))

    async def pop_for_set(
        self,
        key: str,
        count: int | None = None,
        target: type[T] | Any = None,
    ) -> T | str | list[T | str | None] | None:
        """Pop one member, or a list of up to ``count`` members."""
        popped = await self._cache.pop_for_set(key, count)
        if count is None:
            return popped if target is None else deserialize(key, popped, target)
        popped = popped or []
        if target is None:
            return popped
        return self._decode_all(key, popped, target)

    async def members_for_set(self, key: str, target: type[T] | Any = None) -> set[str] | list[T | None]:
        """All members. Decoded members are returned as a list since models are unhashable."""
        members = await self._cache.members_for_set(key)
        if target is None:
            return members
        return self._decode_all(key, members, target)
