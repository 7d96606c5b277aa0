"""
Tests for Settings
==================
Tests for the YAML settings loader in wordchain/settings.py.
"""

import pytest

from wordchain import settings
from wordchain.chain import GenerationConfig


@pytest.fixture(autouse=True)
def clear_settings_cache():
    settings.load_app_config.cache_clear()
    yield
    settings.load_app_config.cache_clear()


class TestGetSetting:
    """Tests for get_setting()."""

    def test_packaged_defaults(self):
        assert settings.get_setting('generation.halt_on_dead_end') is False
        assert settings.get_setting('ingest.chunk_lines') == 500
        assert settings.get_setting('logging.level') == 'WARNING'

    def test_missing_key_returns_default(self):
        assert settings.get_setting('nope.missing', 42) == 42
        assert settings.get_setting('generation.halt_on_dead_end.deeper', 'x') == 'x'

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / 'custom.yaml'
        path.write_text("generation:\n  halt_on_dead_end: true\n")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))

        assert settings.config_path() == path
        assert settings.get_setting('generation.halt_on_dead_end') is True
        assert GenerationConfig().halt_on_dead_end is True

    def test_missing_override_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(tmp_path / 'absent.yaml'))
        with pytest.raises(FileNotFoundError):
            settings.load_app_config()

    def test_empty_config_file(self, tmp_path, monkeypatch):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))
        assert settings.load_app_config() == {}
        assert GenerationConfig().halt_on_dead_end is False


class TestConfigPath:
    """Tests for config_path()."""

    def test_packaged_default(self, monkeypatch):
        monkeypatch.delenv(settings.CONFIG_ENV_VAR, raising=False)
        assert settings.config_path() == settings.APP_CONFIG_PATH
        assert settings.APP_CONFIG_PATH.name == 'app.yaml'

    def test_expands_user(self, monkeypatch):
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, '~/wordchain.yaml')
        assert '~' not in str(settings.config_path())
