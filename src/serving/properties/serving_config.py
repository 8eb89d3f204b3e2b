"""Serving configuration aggregate.

Built once at startup by ``load_serving_config`` and read-only afterwards,
so it can be shared between request handlers without locking. Store
settings and the top level of ``logging`` are read-only views; values nested
inside ``logging`` are shared and must not be modified.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import Field, field_serializer, field_validator

from serving.errors import ActiveStoreNotFoundError
from serving.models import ServingBaseModel, StoreSpec, TracingConfig
from serving.stores import StoreTypeRegistry, builtin_registry


class ServingConfig(ServingBaseModel):
    """Top-level serving configuration.

    Only one store is active at a time; it is selected from ``stores`` by
    ``active_store_name``.
    """

    version: str | None = Field(default="unknown", description="Serving build version")
    registry: str | None = Field(
        default=None,
        description="URI or path of the feature registry",
    )
    registry_refresh_interval: int = Field(
        default=0,
        ge=0,
        alias="registryRefreshInterval",
        description="Seconds between registry reloads (0 disables)",
    )
    gcp_project: str | None = Field(default=None, alias="gcpProject")
    aws_region: str | None = Field(default=None, alias="awsRegion")
    transformation_service_endpoint: str | None = Field(
        default=None,
        alias="transformationServiceEndpoint",
    )
    active_store_name: str | None = Field(
        default=None,
        alias="activeStore",
        description="Name of the active store",
    )
    stores: tuple[StoreSpec, ...] = Field(default=(), description="Configured stores")
    tracing: TracingConfig | None = None
    logging: Mapping[str, Any] | None = Field(
        default=None,
        description="Audit logging properties, passed through untouched",
    )

    @field_validator("stores", mode="before")
    @classmethod
    def default_stores(cls, v: Any) -> Any:
        """Treat a null store list as empty."""
        return () if v is None else v

    @field_validator("logging")
    @classmethod
    def freeze_logging(cls, v: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        """Expose the top level of the logging properties read-only."""
        return None if v is None else MappingProxyType(dict(v))

    @field_serializer("logging")
    def serialize_logging(self, v: Mapping[str, Any] | None) -> dict[str, Any] | None:
        return None if v is None else dict(v)

    def active_store(self) -> StoreSpec:
        """Find the active store.

        Returns:
            First store, in declared order, named ``active_store_name``

        Raises:
            ActiveStoreNotFoundError: If no store has that name
        """
        if self.active_store_name:
            for store in self.stores:
                if store.name == self.active_store_name:
                    return store
        raise ActiveStoreNotFoundError(self.active_store_name)

    def active_store_config(self, registry: StoreTypeRegistry | None = None) -> Any:
        """Decode the active store's settings into its typed connection config.

        Args:
            registry: Store type registry (defaults to the shared built-in registry)
        """
        registry = registry or builtin_registry()
        return registry.decode(self.active_store())

    def store(self, name: str) -> StoreSpec | None:
        """Look up any configured store by name."""
        for store in self.stores:
            if store.name == name:
                return store
        return None
