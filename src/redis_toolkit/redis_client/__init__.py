"""Redis client wrappers.

- client: string-valued command wrappers (RedisCacheClient)
- service: JSON/Pydantic serialization layer (RedisBaseService)
- registry: per data-source client stacks (RedisRegistry)
"""

from .client import RedisCacheClient
from .registry import RedisRegistry
from .service import RedisBaseService, deserialize, serialize

__all__ = [
    "RedisCacheClient",
    "RedisBaseService",
    "RedisRegistry",
    "serialize",
    "deserialize",
]
