"""Unit tests for periodic registry refresh."""

import asyncio
from typing import Any

import pytest

from serving.properties import load_serving_config
from serving.registry_refresh import RegistryRefresher


class FakeRegistrySource:
    """Registry fetcher returning numbered documents."""

    def __init__(self, fail_on: set[int] | None = None):
        self.calls: list[str] = []
        self.fail_on = fail_on or set()

    async def __call__(self, registry: str) -> dict[str, Any]:
        self.calls.append(registry)
        if len(self.calls) in self.fail_on:
            raise ConnectionError("registry unavailable")
        return {"revision": len(self.calls)}


@pytest.fixture
def config(serving_config_data):
    return load_serving_config(serving_config_data)


class TestRefresh:
    async def test_refresh_loads_document(self, config):
        """Test a refresh stores the fetched document."""
        source = FakeRegistrySource()
        refresher = RegistryRefresher(config, source)

        assert await refresher.refresh() is True

        assert source.calls == ["gs://feast-test/registry.db"]
        assert refresher.document == {"revision": 1}
        assert refresher.last_refreshed_at is not None

    async def test_failed_refresh_keeps_previous_document(self, config):
        """Test a fetch error keeps the last good document."""
        source = FakeRegistrySource(fail_on={2})
        refresher = RegistryRefresher(config, source)

        await refresher.refresh()
        assert await refresher.refresh() is False

        assert refresher.document == {"revision": 1}

    async def test_refresh_leaves_stores_untouched(self, config):
        """Test refreshing never changes the store selection."""
        stores = config.stores
        refresher = RegistryRefresher(config, FakeRegistrySource())

        await refresher.refresh()

        assert config.stores is stores
        assert config.active_store().name == "online"


class TestRun:
    async def test_zero_interval_loads_once(self, serving_config_data):
        """Test an interval of 0 loads the registry once and returns."""
        serving_config_data["registryRefreshInterval"] = 0
        source = FakeRegistrySource()
        refresher = RegistryRefresher(load_serving_config(serving_config_data), source)

        await refresher.run()

        assert len(source.calls) == 1
        assert refresher.is_running is False

    async def test_periodic_refresh_until_stopped(self, config, monkeypatch):
        """Test the loop sleeps for the configured interval between refreshes."""
        source = FakeRegistrySource()
        refresher = RegistryRefresher(config, source)
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)
            if len(sleeps) >= 3:
                refresher.stop()

        monkeypatch.setattr("serving.registry_refresh.asyncio.sleep", fake_sleep)

        await refresher.run()

        assert sleeps == [60, 60, 60]
        assert len(source.calls) == 3
        assert refresher.document == {"revision": 3}

    async def test_loop_survives_fetch_errors(self, config, monkeypatch):
        """Test a failing fetch does not end the loop."""
        source = FakeRegistrySource(fail_on={2})
        refresher = RegistryRefresher(config, source)
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)
            if len(sleeps) >= 3:
                refresher.stop()

        monkeypatch.setattr("serving.registry_refresh.asyncio.sleep", fake_sleep)

        await refresher.run()

        assert len(source.calls) == 3
        assert refresher.document == {"revision": 3}

    async def test_cancel(self, config):
        """Test cancelling the task ends the loop."""
        refresher = RegistryRefresher(config, FakeRegistrySource())
        task = asyncio.create_task(refresher.run())

        await asyncio.sleep(0)
        assert refresher.is_running is True

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

        assert refresher.is_running is False
