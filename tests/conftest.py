"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest
from fakeredis import FakeAsyncRedis, FakeServer

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from redis_toolkit.config import get_settings  # noqa: E402
from redis_toolkit.redis_client import RedisBaseService, RedisCacheClient  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Re-read settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_redis() -> FakeAsyncRedis:
    """Isolated in-memory Redis."""
    return FakeAsyncRedis(server=FakeServer(), decode_responses=True)


@pytest.fixture
def cache(fake_redis) -> RedisCacheClient:
    return RedisCacheClient(fake_redis, default_ttl=60)


@pytest.fixture
def service(cache) -> RedisBaseService:
    return RedisBaseService(cache)


@pytest.fixture
def sample_profile_data() -> dict[str, Any]:
    return {"user_id": 7, "name": "ada", "tags": ["admin", "ops"]}


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
