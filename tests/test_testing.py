"""Tests for _testing.py: override_config context manager."""

import pytest

from tomlstack._config import Config
from tomlstack._reader import get_config, set_config, setting
from tomlstack._testing import override_config


@pytest.fixture(autouse=True)
def _reset_active_config():
    set_config(None)
    yield
    set_config(None)


class TestOverrideConfig:
    def test_installs_inline_toml(self):
        with override_config('[app]\nname = "overridden"'):
            assert setting("app.name") == "overridden"

    def test_restores_previous_config(self):
        original = Config({"key": "original"})
        set_config(original)

        with override_config('key = "temp"'):
            assert setting("key") == "temp"

        assert get_config() is original
        assert setting("key") == "original"

    def test_restores_after_exception(self):
        original = Config({"key": "original"})
        set_config(original)

        with pytest.raises(RuntimeError):
            with override_config('key = "temp"'):
                raise RuntimeError("boom")

        assert get_config() is original

    def test_nested_overrides(self):
        with override_config('key = "outer"'):
            assert setting("key") == "outer"
            with override_config('key = "inner"'):
                assert setting("key") == "inner"
            assert setting("key") == "outer"

    def test_sections_merged_over_toml(self):
        toml = '[db]\nhost = "localhost"\nport = 5432'
        with override_config(toml, sections={"db": {"port": 6543}}) as config:
            assert config.select("db.host") == "localhost"
            assert config.select("db.port") == 6543

    def test_sections_only(self):
        with override_config(sections={"cache": {"ttl": 60}}) as config:
            assert get_config() is config
            assert setting("cache.ttl") == 60

    def test_toml_is_interpolated(self, monkeypatch):
        monkeypatch.setenv("TS_OVERRIDE_NAME", "from-env")
        with override_config('name = "${TS_OVERRIDE_NAME}"'):
            assert setting("name") == "from-env"
