"""Store and tracing configuration models."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import Field, field_serializer, field_validator

from .base import ServingBaseModel


class StoreType(str, Enum):
    """Built-in store type tags."""

    REDIS = "REDIS"
    REDIS_CLUSTER = "REDIS_CLUSTER"


class TracerName(str, Enum):
    """Recognised tracer implementations."""

    JAEGER = "jaeger"


class StoreSpec(ServingBaseModel):
    """A named store with its type tag and free-form settings.

    The type tag is not checked here. An unknown tag or a malformed settings
    map only fails once the typed connection config is requested.
    """

    name: str | None = Field(default=None, description="Unique store name")
    type: str | None = Field(default=None, description="Store type tag, e.g. REDIS")
    config: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Type-specific settings (read-only)",
    )

    @field_validator("config", mode="before")
    @classmethod
    def stringify_settings(cls, v: Any) -> Any:
        """Coerce scalar setting values to strings."""
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            return v
        coerced: dict[Any, Any] = {}
        for key, value in v.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, (int, float)):
                value = str(value)
            coerced[str(key)] = value
        return coerced

    @field_validator("config")
    @classmethod
    def freeze_settings(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Expose settings as a read-only view."""
        return MappingProxyType(dict(v))

    @field_serializer("config")
    def serialize_settings(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)


class TracingConfig(ServingBaseModel):
    """Request tracing settings."""

    enabled: bool = False
    tracer_name: str | None = Field(
        default=None,
        alias="tracerName",
        description="Tracer implementation (only 'jaeger')",
    )
    service_name: str | None = Field(
        default=None,
        alias="serviceName",
        description="Identifies this serving deployment",
    )
