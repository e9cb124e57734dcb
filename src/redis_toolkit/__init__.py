"""Redis Toolkit.

Convenience layer over redis-py plus generic collection utilities:
- collection: keyed reducer, grouping, top-N and transform helpers
- redis_client: cache client, JSON base service, multi data-source registry
- models: Pydantic value types
- config: Configuration management
- observability: Structured logging
"""

__version__ = "0.1.0"
