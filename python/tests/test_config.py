"""Tests for the config module."""

import json

import pytest

from cidian import config as cfg
from cidian.exceptions import ConfigError


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch, tmp_path):
    """Run each test from an empty directory with no cached config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(cfg.ENV_DICTIONARY, raising=False)
    monkeypatch.setattr(cfg, "_find_config", lambda: None)
    cfg.reset()
    yield
    cfg.reset()


class TestConfig:
    """Tests for configuration loading."""

    def test_fallback_defaults(self):
        """Test defaults when no config.json exists."""
        assert cfg.default_mode() == "map"
        assert cfg.default_transcriber() == "pinyin"

    def test_load_from_file(self, monkeypatch, tmp_path):
        """Test values from config.json."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "defaults": {"dictionary_path": "/data/cedict_ts.u8", "mode": "check"}
        }))
        monkeypatch.setattr(cfg, "_find_config", lambda: path)
        cfg.reset()

        assert cfg.default_mode() == "check"
        assert str(cfg.dictionary_path()) == "/data/cedict_ts.u8"

    def test_unreadable_file_falls_back(self, monkeypatch, tmp_path):
        """Test invalid JSON uses the fallbacks."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        monkeypatch.setattr(cfg, "_find_config", lambda: path)
        cfg.reset()

        assert cfg.default_mode() == "map"

    def test_env_overrides(self, monkeypatch):
        """Test the environment variable wins."""
        monkeypatch.setenv(cfg.ENV_DICTIONARY, "/env/cedict.u8")
        assert str(cfg.dictionary_path()) == "/env/cedict.u8"

    def test_missing_dictionary(self):
        """Test no configured dictionary is an error."""
        with pytest.raises(ConfigError):
            cfg.dictionary_path()
