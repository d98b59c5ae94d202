# Tests for settings loading.
# Created: 2026-10-19

import json
from pathlib import Path

import pytest

from latestview.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("ROOT_DIR", "EXTENSIONS", "SHOW_HIDDEN", "POLL_INTERVAL", "PORT"):
        monkeypatch.delenv(f"LATESTVIEW_{key}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = Settings()
        assert settings.root_dir == tmp_path
        assert settings.extensions == []
        assert settings.show_hidden is True
        assert settings.port == 8888
        assert settings.poll_interval == 2.0

    def test_poll_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(poll_interval=0)


class TestEnvironment:
    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LATESTVIEW_ROOT_DIR", str(tmp_path))
        monkeypatch.setenv("LATESTVIEW_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("LATESTVIEW_EXTENSIONS", '["json", ".TXT"]')

        settings = Settings()
        assert settings.root_dir == tmp_path
        assert settings.poll_interval == 0.5
        assert settings.extensions == [".json", ".txt"]

    def test_root_dir_expands_user(self, monkeypatch):
        monkeypatch.setenv("LATESTVIEW_ROOT_DIR", "~")
        assert Settings().root_dir == Path.home()


class TestLoad:
    def test_load_missing_file_uses_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "config.json")
        assert settings.port == 8888

    def test_load_from_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"port": 9000, "show_hidden": False, "unknown": 1}))

        settings = Settings.load(config)
        assert settings.port == 9000
        assert settings.show_hidden is False

    def test_env_beats_file(self, monkeypatch, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"port": 9000}))
        monkeypatch.setenv("LATESTVIEW_PORT", "9100")

        assert Settings.load(config).port == 9100

    def test_invalid_json_ignored(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("{not json")
        assert Settings.load(config).port == 8888

    def test_non_object_ignored(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("[1, 2]")
        assert Settings.load(config).port == 8888


class TestGetSettings:
    def test_cached(self, monkeypatch, tmp_path):
        monkeypatch.setattr("latestview.config.get_config_path", lambda: tmp_path / "none.json")
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch, tmp_path):
        monkeypatch.setattr("latestview.config.get_config_path", lambda: tmp_path / "none.json")
        first = get_settings()
        monkeypatch.setenv("LATESTVIEW_PORT", "7777")
        get_settings.cache_clear()
        assert get_settings() is not first
        assert get_settings().port == 7777
