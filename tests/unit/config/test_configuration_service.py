"""
Unit tests for ConfigurationService and the in-memory key-value store.
"""
import logging

import pytest

from apiclients.config.configuration_service import ConfigurationService
from apiclients.config.constants.service import config_node_constants
from apiclients.config.key_value_store import InMemoryKeyValueStore, KeyValueStore

ZOOM_KEY = config_node_constants.ZOOM.value


class FailingStore(KeyValueStore):
    async def create_key(self, key, value, overwrite=True):
        raise ConnectionError("store offline")

    async def get_key(self, key):
        raise ConnectionError("store offline")

    async def update_value(self, key, value):
        raise ConnectionError("store offline")

    async def delete_key(self, key):
        raise ConnectionError("store offline")


class CountingStore(InMemoryKeyValueStore):
    def __init__(self, initial=None):
        super().__init__(initial)
        self.reads = 0

    async def get_key(self, key):
        self.reads += 1
        return await super().get_key(key)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.config")


@pytest.mark.unit
class TestInMemoryKeyValueStore:

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        store = InMemoryKeyValueStore()
        value = {"auth": {"token": "a"}}
        await store.create_key("k", value)
        value["auth"]["token"] = "mutated"

        assert await store.get_key("k") == {"auth": {"token": "a"}}

    @pytest.mark.asyncio
    async def test_create_without_overwrite_rejects_existing(self):
        store = InMemoryKeyValueStore({"k": 1})
        with pytest.raises(KeyError):
            await store.create_key("k", 2, overwrite=False)

    @pytest.mark.asyncio
    async def test_update_missing_key_raises(self):
        with pytest.raises(KeyError):
            await InMemoryKeyValueStore().update_value("missing", 1)

    @pytest.mark.asyncio
    async def test_delete_reports_presence(self):
        store = InMemoryKeyValueStore({"k": None})
        assert await store.delete_key("k") is True
        assert await store.delete_key("k") is False


@pytest.mark.unit
class TestConfigurationService:

    @pytest.mark.asyncio
    async def test_reads_from_store(self, logger, faker_instance):
        token = faker_instance.sha256()
        store = InMemoryKeyValueStore({ZOOM_KEY: {"auth": {"authType": "TOKEN", "token": token}}})
        service = ConfigurationService(logger, store)

        config = await service.get_config(ZOOM_KEY)

        assert config["auth"]["token"] == token

    @pytest.mark.asyncio
    async def test_cache_avoids_second_store_read(self, logger):
        store = CountingStore({"k": {"v": 1}})
        service = ConfigurationService(logger, store)

        await service.get_config("k")
        await service.get_config("k")
        assert store.reads == 1

        await service.get_config("k", use_cache=False)
        assert store.reads == 2

    @pytest.mark.asyncio
    async def test_missing_key_returns_default(self, logger):
        service = ConfigurationService(logger, InMemoryKeyValueStore())
        assert await service.get_config("/nope", default={"x": 1}) == {"x": 1}

    @pytest.mark.asyncio
    async def test_environment_fallback(self, logger, monkeypatch):
        monkeypatch.setenv("ZOOM_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("ZOOM_BASE_URL", "https://zoom.internal/v2")
        service = ConfigurationService(logger, InMemoryKeyValueStore())

        assert await service.get_config(ZOOM_KEY) == {
            "auth": {"authType": "TOKEN", "token": "env-token", "baseUrl": "https://zoom.internal/v2"}
        }

    @pytest.mark.asyncio
    async def test_store_failure_falls_back_to_environment(self, logger, monkeypatch):
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.key")
        service = ConfigurationService(logger, FailingStore())

        config = await service.get_config(config_node_constants.SENDGRID.value)

        assert config == {"auth": {"authType": "TOKEN", "token": "SG.key"}}

    @pytest.mark.asyncio
    async def test_set_config_updates_cache(self, logger):
        service = ConfigurationService(logger, InMemoryKeyValueStore())

        assert await service.set_config("k", {"v": 2}) is True
        assert service.cache["k"] == {"v": 2}
        assert await service.get_config("k") == {"v": 2}

    @pytest.mark.asyncio
    async def test_set_config_failure_returns_false(self, logger):
        service = ConfigurationService(logger, FailingStore())
        assert await service.set_config("k", 1) is False
        assert "k" not in service.cache

    @pytest.mark.asyncio
    async def test_delete_config_evicts_cache(self, logger):
        service = ConfigurationService(logger, InMemoryKeyValueStore({"k": 1}))
        await service.get_config("k")

        assert await service.delete_config("k") is True
        assert "k" not in service.cache
        assert await service.get_config("k") is None

    @pytest.mark.asyncio
    async def test_delete_config_store_failure_returns_false(self, logger):
        service = ConfigurationService(logger, FailingStore())
        service.cache["k"] = 1

        assert await service.delete_config("k") is False
        assert "k" not in service.cache

    @pytest.mark.asyncio
    async def test_clear_cache(self, logger):
        service = ConfigurationService(logger, InMemoryKeyValueStore({"k": 1}))
        await service.get_config("k")
        service.clear_cache()
        assert len(service.cache) == 0
