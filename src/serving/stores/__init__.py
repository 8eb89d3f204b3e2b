"""Store type registry and built-in handlers."""

from .handlers import (
    RedisClusterHandler,
    RedisHandler,
    StoreTypeHandler,
    format_iso_duration,
    parse_bool,
    parse_iso_duration,
    parse_positive_int,
    require,
)
from .registry import StoreTypeRegistry, builtin_registry, default_registry

__all__ = [
    # Registry
    "StoreTypeRegistry",
    "default_registry",
    "builtin_registry",
    # Handlers
    "StoreTypeHandler",
    "RedisHandler",
    "RedisClusterHandler",
    # Key parsers
    "require",
    "parse_bool",
    "parse_positive_int",
    "parse_iso_duration",
    "format_iso_duration",
]
