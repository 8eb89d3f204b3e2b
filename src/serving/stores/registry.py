"""Store type registry.

Maps a store type tag to the handler that decodes its settings. New store
types are supported by registering a handler; lookup and validation code
never needs to change.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from serving.errors import DecodeFailureError, UnknownStoreTypeError
from serving.models import StoreSpec, StoreType
from serving.observability import get_logger

from .handlers import RedisClusterHandler, RedisHandler, StoreTypeHandler

logger = get_logger(__name__)


class StoreTypeRegistry:
    """Type tag to handler mapping.

    Registration happens during startup. Lookups and decoding are read-only
    and safe to run from many threads once registration is done.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, StoreTypeHandler] = {}

    def register(
        self,
        store_type: str,
        handler: StoreTypeHandler,
        replace: bool = False,
    ) -> None:
        """Register a handler for a store type tag.

        Args:
            store_type: Type tag as written in the configuration
            handler: Handler for stores of that type
            replace: Allow overriding an existing registration

        Raises:
            ValueError: If the tag is blank or already registered
        """
        tag = str(store_type.value if isinstance(store_type, StoreType) else store_type)
        if not tag.strip():
            raise ValueError("Store type tag must not be blank")
        if tag in self._handlers and not replace:
            raise ValueError(f"Store type '{tag}' is already registered")

        self._handlers[tag] = handler
        logger.debug(
            "Store type registered",
            store_type=tag,
            handler=type(handler).__name__,
        )

    def get(self, store_type: str | None) -> StoreTypeHandler:
        """Get the handler for a tag.

        Raises:
            UnknownStoreTypeError: If no handler is registered for the tag
        """
        handler = self._handlers.get(store_type or "")
        if handler is None:
            raise UnknownStoreTypeError(store_type or "")
        return handler

    def decode(self, store: StoreSpec) -> Any:
        """Decode a store's settings into its typed connection config.

        Raises:
            UnknownStoreTypeError: If the store's type has no handler
            DecodeFailureError: On the first missing or malformed key
        """
        handler = self._handlers.get(store.type or "")
        if handler is None:
            raise UnknownStoreTypeError(store.type or "", store_name=store.name)

        try:
            return handler.decode(store.config)
        except DecodeFailureError as e:
            raise e.for_store(store.name) from e

    def types(self) -> list[str]:
        """Registered type tags, sorted."""
        return sorted(self._handlers)

    def __contains__(self, store_type: object) -> bool:
        return store_type in self._handlers


def default_registry() -> StoreTypeRegistry:
    """Create a registry preloaded with the built-in store types."""
    registry = StoreTypeRegistry()
    registry.register(StoreType.REDIS, RedisHandler())
    registry.register(StoreType.REDIS_CLUSTER, RedisClusterHandler())
    return registry


@lru_cache
def builtin_registry() -> StoreTypeRegistry:
    """Shared registry of the built-in store types.

    Built once per process. Register custom types on a registry from
    ``default_registry()`` instead of on this one.
    """
    return default_registry()
