"""Tests for configuration loading."""

import pydantic
import pytest

import settings
from settings import AppConfig, load_config


def _yaml(tmp_path, text):
    path = tmp_path / "app.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:

    def test_defaults(self):
        cfg = AppConfig()

        assert cfg.clock.timezone == "UTC"
        assert cfg.server.port == 8001
        assert cfg.payments_path() == settings.PROJECT_ROOT / "data" / "payments.json"

    def test_reads_yaml(self, tmp_path):
        path = _yaml(tmp_path, "data:\n  payments_file: /srv/payments.json\nclock:\n  timezone: Europe/Warsaw\n")

        cfg = load_config(path)

        assert cfg.data.payments_file == "/srv/payments.json"
        assert cfg.clock.timezone == "Europe/Warsaw"
        assert cfg.server.host == "127.0.0.1"

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        with caplog.at_level("WARNING"):
            cfg = load_config(tmp_path / "absent.yaml")

        assert cfg == AppConfig()
        assert "using defaults" in caplog.text

    def test_empty_file(self, tmp_path):
        assert load_config(_yaml(tmp_path, "")) == AppConfig()

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = _yaml(tmp_path, "clock:\n  timezone: UTC\n")
        monkeypatch.setenv("PAYMENTS_DATA_FILE", str(tmp_path / "other.json"))
        monkeypatch.setenv("PAYMENTS_TIMEZONE", "Asia/Tokyo")

        cfg = load_config(path)

        assert cfg.payments_path() == (tmp_path / "other.json").resolve()
        assert cfg.clock.timezone == "Asia/Tokyo"

    def test_config_file_from_env(self, tmp_path, monkeypatch):
        path = _yaml(tmp_path, "server:\n  port: 9000\n")
        monkeypatch.setenv("PAYMENTS_CONFIG_FILE", str(path))

        assert load_config().server.port == 9000

    def test_config_file_env_missing_falls_back(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("PAYMENTS_CONFIG_FILE", str(tmp_path / "absent.yaml"))

        with caplog.at_level("WARNING"):
            assert settings.config_file() == settings.DEFAULT_CONFIG_FILE

        assert "falling back" in caplog.text

    def test_unknown_timezone(self, tmp_path):
        with pytest.raises(pydantic.ValidationError, match="unknown timezone"):
            load_config(_yaml(tmp_path, "clock:\n  timezone: Mars/Olympus\n"))

    def test_relative_paths_resolve_against_project_root(self):
        assert settings.resolve_path("data/x.json") == settings.PROJECT_ROOT / "data" / "x.json"
