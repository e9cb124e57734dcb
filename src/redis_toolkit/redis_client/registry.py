"""Multi data-source Redis wiring.

For the primary connection and every named data source in the settings, the
registry builds a connection pool, a redis-py client, a RedisCacheClient and
a RedisBaseService, and registers them under

- ``{name}Template``    -> redis.asyncio.Redis
- ``{name}CacheUtils``  -> RedisCacheClient
- ``{name}BaseService`` -> RedisBaseService

The primary connection is registered as ``default``.
"""

import time
from typing import Any

import redis.asyncio as redis

from redis_toolkit.config import DEFAULT_DATA_SOURCE, RedisSettings, Settings, get_settings
from redis_toolkit.errors import DataSourceNotFoundError
from redis_toolkit.observability import (
    DataSourceContext,
    get_logger,
    log_external_call_end,
    log_external_call_start,
)

from .client import RedisCacheClient
from .service import RedisBaseService

logger = get_logger(__name__)

TEMPLATE_NAME = "Template"
UTIL_NAME = "CacheUtils"
SERVICE_NAME = "BaseService"


class RedisRegistry:
    """Registry of per data-source Redis clients.

    Usage:
        async with RedisRegistry() as registry:
            service = registry.get_service("orders")
            await service.set_for_value("order:1", order)
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize registry.

        Args:
            settings: Settings to read data sources from (defaults to get_settings())
        """
        self._settings = settings or get_settings()
        self._pools: dict[str, redis.ConnectionPool] = {}
        self._clients: dict[str, redis.Redis] = {}
        self._singletons: dict[str, Any] = {}

    async def __aenter__(self) -> "RedisRegistry":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def connect(self) -> None:
        """Create connection pools and register client stacks for all data sources."""
        for name, data_source in self._settings.all_data_sources().items():
            if name in self._clients:
                continue
            self._register(name, data_source)

        logger.info("Redis data sources registered", datasources=self.names())

    def _register(self, name: str, data_source: RedisSettings) -> None:
        connection_class = redis.SSLConnection if data_source.ssl else redis.Connection
        pool = redis.ConnectionPool(
            connection_class=connection_class,
            **data_source.connection_kwargs(),
        )
        client = redis.Redis(connection_pool=pool)
        cache = RedisCacheClient(client, default_ttl=self._settings.default_ttl_seconds)
        service = RedisBaseService(cache)

        self._pools[name] = pool
        self._clients[name] = client
        self._singletons[name + TEMPLATE_NAME] = client
        self._singletons[name + UTIL_NAME] = cache
        self._singletons[name + SERVICE_NAME] = service

        logger.debug(
            "Redis data source registered",
            datasource=name,
            host=data_source.host,
            port=data_source.port,
            database=data_source.database,
        )

    async def close(self) -> None:
        """Close all clients and disconnect all pools."""
        for client in self._clients.values():
            await client.aclose()
        for pool in self._pools.values():
            await pool.disconnect()
        self._clients.clear()
        self._pools.clear()
        self._singletons.clear()

    def names(self) -> list[str]:
        """Registered data source names, primary first."""
        return list(self._clients)

    def get(self, bean_name: str) -> Any:
        """Look up a registered object by its full name (e.g. ``ordersBaseService``)."""
        try:
            return self._singletons[bean_name]
        except KeyError:
            raise DataSourceNotFoundError(bean_name) from None

    def get_client(self, name: str = DEFAULT_DATA_SOURCE) -> redis.Redis:
        """Get redis-py client for a data source."""
        return self.get(name + TEMPLATE_NAME)

    def get_cache(self, name: str = DEFAULT_DATA_SOURCE) -> RedisCacheClient:
        """Get cache client for a data source."""
        return self.get(name + UTIL_NAME)

    def get_service(self, name: str = DEFAULT_DATA_SOURCE) -> RedisBaseService:
        """Get base service for a data source."""
        return self.get(name + SERVICE_NAME)

    # =========================================================================
    # Health Check
    # =========================================================================

    async def health_check(self) -> dict[str, Any]:
        """Ping every registered data source.

        Returns:
            Health status dict keyed by data source name
        """
        results: dict[str, Any] = {}
        for name, client in self._clients.items():
            with DataSourceContext(name):
                log_external_call_start(logger, "redis", "ping")
                started = time.perf_counter()
                try:
                    await client.ping()
                except redis.RedisError as e:
                    results[name] = {"status": "unhealthy", "error": str(e)}
                    log_external_call_end(
                        logger,
                        "redis",
                        "ping",
                        success=False,
                        duration_ms=(time.perf_counter() - started) * 1000,
                        error=str(e),
                    )
                else:
                    results[name] = {"status": "healthy"}
                    log_external_call_end(
                        logger,
                        "redis",
                        "ping",
                        success=True,
                        duration_ms=(time.perf_counter() - started) * 1000,
                    )
        return results
