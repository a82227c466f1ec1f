"""Tests for Config loading from environment and YAML."""

import logging

import pytest

from cutout.config import Config, LoggingConfig, configure_logging


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CUTOUT_TELEMETRY__INSTRUMENT", raising=False)

        config = Config(_env_file=None)

        assert config.identity.cookie_name == "uid"
        assert config.identity.max_age == 31_536_000
        assert config.identity.same_site == "lax"
        assert config.storage.backend == "local"
        assert config.removal.api_url == "https://api.remove.bg/v1.0/removebg"
        assert config.telemetry.instrument is True

    def test_nested_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CUTOUT_REMOVAL__API_KEY", "secret")
        monkeypatch.setenv("CUTOUT_STORAGE__BACKEND", "vercel")
        monkeypatch.setenv("CUTOUT_STORAGE__VERCEL__TOKEN", "blob-token")

        config = Config(_env_file=None)

        assert config.removal.api_key == "secret"
        assert config.storage.backend == "vercel"
        assert config.storage.vercel.token == "blob-token"

    def test_yaml_file(self, monkeypatch, tmp_path):
        path = tmp_path / "cutout.yaml"
        path.write_text("identity:\n  cookie_name: anon\nremoval:\n  size: preview\n")
        monkeypatch.setenv("CUTOUT_CONFIG_FILE", str(path))

        config = Config(_env_file=None)

        assert config.identity.cookie_name == "anon"
        assert config.removal.size == "preview"

    def test_env_beats_yaml(self, monkeypatch, tmp_path):
        path = tmp_path / "cutout.yaml"
        path.write_text("removal:\n  size: preview\n")
        monkeypatch.setenv("CUTOUT_CONFIG_FILE", str(path))
        monkeypatch.setenv("CUTOUT_REMOVAL__SIZE", "full")

        config = Config(_env_file=None)

        assert config.removal.size == "full"

    def test_rejects_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("CUTOUT_STORAGE__BACKEND", "s3")

        with pytest.raises(ValueError):
            Config(_env_file=None)


class TestConfigureLogging:
    def test_file_handler_from_env(self, monkeypatch, tmp_path):
        log_file = tmp_path / "logs" / "cutout.log"
        monkeypatch.setenv("CUTOUT_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="DEBUG"))
        logging.getLogger("cutout.test").info("hello")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        assert logging.getLogger("httpx").level == logging.WARNING
        for handler in root.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
