"""Periodic registry reloading.

The refresher only re-reads the registry document named by
``ServingConfig.registry``. Stores and the active store are fixed for the
lifetime of the process and are never touched here.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from serving.observability import get_logger
from serving.properties import ServingConfig

logger = get_logger(__name__)

RegistryFetcher = Callable[[str], Awaitable[Any]]


class RegistryRefresher:
    """Reloads the registry document every ``registry_refresh_interval`` seconds."""

    def __init__(self, config: ServingConfig, fetch: RegistryFetcher):
        self.config = config
        self.fetch = fetch
        self.document: Any = None
        self.last_refreshed_at: datetime | None = None
        self._running = False

    @property
    def interval_seconds(self) -> int:
        return self.config.registry_refresh_interval

    async def refresh(self) -> bool:
        """Fetch the registry once.

        Returns:
            True if the document was replaced, False if the fetch failed
            (the previous document is kept)
        """
        try:
            document = await self.fetch(self.config.registry)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                "Registry refresh failed",
                registry=self.config.registry,
                error=str(e),
            )
            return False

        self.document = document
        self.last_refreshed_at = datetime.now(timezone.utc)
        logger.debug("Registry refreshed", registry=self.config.registry)
        return True

    async def run(self) -> None:
        """Refresh in a loop until cancelled or stopped.

        With an interval of 0 the registry is loaded once and the loop
        does not start.
        """
        await self.refresh()
        if self.interval_seconds <= 0:
            logger.info("Registry refresh disabled", registry=self.config.registry)
            return

        self._running = True
        logger.info(
            "Starting periodic registry refresh",
            interval_seconds=self.interval_seconds,
        )
        while self._running:
            try:
                await asyncio.sleep(self.interval_seconds)
                if self._running:
                    await self.refresh()
            except asyncio.CancelledError:
                logger.info("Periodic registry refresh cancelled")
                break

        self._running = False

    def stop(self) -> None:
        """Ask the loop to exit after the current sleep."""
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running
