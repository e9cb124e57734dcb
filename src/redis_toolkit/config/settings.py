"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

Named data sources are read from ``REDIS_DATA_SOURCES`` as JSON, or through
nested variables such as ``REDIS_DATA_SOURCES__ORDERS__HOST``.
"""

from enum import Enum
from functools import lru_cache
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Three days, in seconds
DEFAULT_TTL_SECONDS = 3 * 24 * 60 * 60

DEFAULT_DATA_SOURCE = "default"


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class RedisPoolSettings(BaseModel):
    """Connection pool options handed to redis-py."""

    max_connections: int = Field(default=8, description="Maximum pooled connections")
    socket_timeout: float | None = Field(default=None, description="Socket timeout in seconds")
    socket_connect_timeout: float | None = Field(
        default=None,
        description="Connect timeout in seconds",
    )
    health_check_interval: int = Field(
        default=0,
        description="Seconds between connection health checks (0 disables)",
    )

    @field_validator("max_connections")
    @classmethod
    def validate_max_connections(cls, v: int) -> int:
        """Ensure the pool holds at least one connection."""
        return max(1, v)


class RedisSettings(BaseSettings):
    """Redis connection configuration."""

    model_config = SettingsConfigDict(env_prefix="REDIS_", extra="ignore")

    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    username: str | None = Field(default=None, description="Redis ACL username")
    password: str | None = Field(default=None, description="Redis password")
    database: int = Field(default=0, ge=0, description="Redis logical database")
    ssl: bool = Field(default=False, description="Use TLS (rediss://)")
    pool: RedisPoolSettings = Field(default_factory=RedisPoolSettings)

    @property
    def url(self) -> str:
        """Build Redis URL with percent-encoded credentials."""
        scheme = "rediss" if self.ssl else "redis"
        if self.password:
            user = quote(self.username or "", safe="")
            password = quote(self.password, safe="")
            return f"{scheme}://{user}:{password}@{self.host}:{self.port}/{self.database}"
        return f"{scheme}://{self.host}:{self.port}/{self.database}"

    def connection_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``redis.asyncio.ConnectionPool``.

        Credentials are passed as-is, never through a URL. TLS is selected by
        the caller through ``connection_class``.
        """
        kwargs: dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "db": self.database,
            "username": self.username,
            "password": self.password,
            "max_connections": self.pool.max_connections,
            "health_check_interval": self.pool.health_check_interval,
            "decode_responses": True,
        }
        if self.pool.socket_timeout is not None:
            kwargs["socket_timeout"] = self.pool.socket_timeout
        if self.pool.socket_connect_timeout is not None:
            kwargs["socket_connect_timeout"] = self.pool.socket_connect_timeout
        return kwargs


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For the default connection, use the ``REDIS_`` prefix (e.g., REDIS_HOST).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="redis-toolkit", description="Application name")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Expiration applied when callers do not pass one
    default_ttl_seconds: int = Field(
        default=DEFAULT_TTL_SECONDS,
        gt=0,
        description="Default key expiration in seconds",
    )

    # Nested settings
    redis: RedisSettings = Field(default_factory=RedisSettings)
    data_sources: dict[str, RedisSettings] = Field(
        default_factory=dict,
        alias="REDIS_DATA_SOURCES",
        description="Additional named Redis connections",
    )

    @field_validator("data_sources")
    @classmethod
    def validate_data_sources(cls, v: dict[str, RedisSettings]) -> dict[str, RedisSettings]:
        """Reject a named data source that shadows the default one."""
        if DEFAULT_DATA_SOURCE in v:
            raise ValueError(f"'{DEFAULT_DATA_SOURCE}' is reserved for the primary connection")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    def all_data_sources(self) -> dict[str, RedisSettings]:
        """Return the primary connection followed by every named data source."""
        return {DEFAULT_DATA_SOURCE: self.redis, **self.data_sources}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
