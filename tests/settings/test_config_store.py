"""Tests for the single-assignment configuration store."""

import threading

import pytest

from partman.errors import ArityMismatchError, ConfigStateError
from partman.settings.config import Config, Grid, ServerKind
from partman.settings.store import ConfigStore


class TestLoad:
    def test_load_user_file(self, write_config, sample_config_text):
        store = ConfigStore()
        path = write_config(sample_config_text)
        config = store.load(path)
        assert store.is_loaded
        assert store.get() is config
        assert store.source == str(path)
        assert config.server_kind is ServerKind.DEVELOPMENT

    def test_load_default(self):
        store = ConfigStore()
        assert store.load() == Config.default()
        assert store.source == "<default>"

    def test_failed_load_installs_nothing(self, write_config):
        store = ConfigStore()
        with pytest.raises(ArityMismatchError):
            store.load(write_config("Grid 1\n"))
        assert not store.is_loaded

    def test_fallback_to_default(self, write_config, caplog):
        store = ConfigStore()
        config = store.load(write_config("Grid 1\n"), fallback_to_default=True)
        assert config == Config.default()
        assert store.source == "<default>"
        assert "Falling back to default configuration" in caplog.text


class TestSingleAssignment:
    def test_second_install_is_rejected(self):
        store = ConfigStore(Config.new())
        with pytest.raises(ConfigStateError):
            store.install(Config.new())
        with pytest.raises(ConfigStateError):
            store.load()

    def test_get_loads_default_lazily(self):
        store = ConfigStore()
        assert not store.is_loaded
        config = store.get()
        assert store.is_loaded
        assert store.get() is config
        with pytest.raises(ConfigStateError):
            store.install(Config.new())

    def test_concurrent_readers_share_one_config(self):
        store = ConfigStore()
        seen = []

        def read():
            seen.append(store.get())

        threads = [threading.Thread(target=read) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len({id(config) for config in seen}) == 1

    def test_provided_config(self):
        config = Config(grid=Grid(2, 2, 2))
        assert ConfigStore(config).get().grid == Grid(2, 2, 2)
