"""Exception hierarchy for redis_toolkit."""


class RedisToolkitError(Exception):
    """Base class for all redis_toolkit errors."""


class UnsupportedTypeError(RedisToolkitError, ValueError):
    """Raised when an ordering or tie-break mode is not recognized."""

    def __init__(self, value: object, expected: type):
        self.value = value
        self.expected = expected
        super().__init__(f"Unsupported {expected.__name__}: {value!r}")


class DeserializationError(RedisToolkitError):
    """Raised when a stored value cannot be decoded into the target type."""

    def __init__(self, key: str, target: object, raw: str):
        self.key = key
        self.target = target
        self.raw = raw
        super().__init__(f"Cannot decode value at {key!r} into {target!r}")


class DataSourceNotFoundError(RedisToolkitError, KeyError):
    """Raised when a data source or registered name is unknown."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Redis data source not registered: {self.name!r}"
