"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["FEAST_ENVIRONMENT"] = "development"
os.environ["FEAST_LOG_LEVEL"] = "DEBUG"
os.environ["FEAST_LOG_FORMAT"] = "text"
os.environ.pop("FEAST_BUILD_VERSION", None)


@pytest.fixture
def redis_store_data() -> dict[str, Any]:
    """Single-node Redis store entry."""
    return {
        "name": "online",
        "type": "REDIS",
        "config": {"host": "localhost", "port": 6379},
    }


@pytest.fixture
def redis_cluster_store_data() -> dict[str, Any]:
    """Redis cluster store entry."""
    return {
        "name": "online_cluster",
        "type": "REDIS_CLUSTER",
        "config": {
            "connection_string": "redis-0:6379,redis-1:6379",
            "read_from": "MASTER",
            "timeout": "PT0.5S",
        },
    }


@pytest.fixture
def serving_config_data(
    redis_store_data: dict[str, Any],
    redis_cluster_store_data: dict[str, Any],
) -> dict[str, Any]:
    """Raw serving configuration tree as produced by the config loader."""
    return {
        "registry": "gs://feast-test/registry.db",
        "registryRefreshInterval": 60,
        "gcpProject": "feast-test",
        "activeStore": "online",
        "stores": [redis_store_data, redis_cluster_store_data],
        "tracing": {
            "enabled": True,
            "tracerName": "jaeger",
            "serviceName": "feast-serving-test",
        },
        "logging": {
            "audit": {
                "enabled": True,
                "messageLogging": {"enabled": False, "destination": "console"},
            }
        },
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
