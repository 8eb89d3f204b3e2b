"""Configuration data models.

All models are frozen pydantic models:
- Store and tracing records read from the raw configuration tree
- Typed connection configs decoded from store settings
"""

from .base import ServingBaseModel
from .connection import ReadFrom, RedisClusterStoreConfig, RedisStoreConfig
from .store import StoreSpec, StoreType, TracerName, TracingConfig

__all__ = [
    "ServingBaseModel",
    # Raw records
    "StoreSpec",
    "StoreType",
    "TracerName",
    "TracingConfig",
    # Typed connection configs
    "ReadFrom",
    "RedisClusterStoreConfig",
    "RedisStoreConfig",
]
