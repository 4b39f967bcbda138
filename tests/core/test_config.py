# tests/core/test_config.py
"""
Tests for the Config class: defaults, environment overrides and validation.
"""

import logging

import pytest

from volume_stats_exporter import __version__
from volume_stats_exporter.core.config import Config


class TestDefaults:
    def test_defaults(self):
        settings = Config()

        assert settings.KUBELET_ENDPOINT == "https://127.0.0.1:10250"
        assert settings.METRICS_HOST == "0.0.0.0"
        assert settings.METRICS_PORT == 8080
        assert settings.SCRAPE_INTERVAL == "30s"
        assert settings.SCRAPE_INTERVAL_SECONDS == 30.0
        assert settings.TOKEN_PATH == "/var/run/secrets/kubernetes.io/serviceaccount/token"
        assert settings.INSECURE_SKIP_TLS_VERIFY is False
        assert settings.DEBUG is False
        assert settings.READY_REQUIRES_SUCCESSFUL_SCRAPE is False
        assert settings.EFFECTIVE_LOG_LEVEL == "INFO"

    def test_defaults_are_valid(self):
        Config().validate_instance()

    def test_stats_summary_url(self):
        assert Config().STATS_SUMMARY_URL == "https://127.0.0.1:10250/stats/summary"

    def test_user_agent_carries_version(self):
        assert Config().USER_AGENT == f"kubelet-volume-stats-exporter/{__version__}"


class TestEnvironmentOverrides:
    def test_env_values_are_read(self, monkeypatch):
        monkeypatch.setenv("KUBELET_ENDPOINT", "http://10.0.0.5:10255")
        monkeypatch.setenv("METRICS_HOST", "127.0.0.1")
        monkeypatch.setenv("METRICS_PORT", "9100")
        monkeypatch.setenv("SCRAPE_INTERVAL", "1m30s")
        monkeypatch.setenv("TOKEN_PATH", "/tmp/token")
        monkeypatch.setenv("INSECURE_SKIP_TLS_VERIFY", "true")
        monkeypatch.setenv("READY_REQUIRES_SUCCESSFUL_SCRAPE", "yes")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")

        settings = Config()

        assert settings.KUBELET_ENDPOINT == "http://10.0.0.5:10255"
        assert settings.METRICS_HOST == "127.0.0.1"
        assert settings.METRICS_PORT == 9100
        assert settings.SCRAPE_INTERVAL_SECONDS == 90.0
        assert settings.TOKEN_PATH == "/tmp/token"
        assert settings.INSECURE_SKIP_TLS_VERIFY is True
        assert settings.READY_REQUIRES_SUCCESSFUL_SCRAPE is True
        assert settings.REQUEST_TIMEOUT_SECONDS == 2.5

    @pytest.mark.parametrize("value, expected", [("1", True), ("on", True), ("TRUE", True), ("false", False), ("0", False), ("", False)])
    def test_boolean_parsing(self, monkeypatch, value, expected):
        monkeypatch.setenv("DEBUG", value)
        assert Config().DEBUG is expected

    def test_trailing_slash_in_endpoint(self, monkeypatch):
        monkeypatch.setenv("KUBELET_ENDPOINT", "https://node:10250/")
        assert Config().STATS_SUMMARY_URL == "https://node:10250/stats/summary"

    def test_debug_forces_debug_log_level(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert Config().EFFECTIVE_LOG_LEVEL == "DEBUG"

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert Config().EFFECTIVE_LOG_LEVEL == "WARNING"

    def test_invalid_port_value(self, monkeypatch):
        monkeypatch.setenv("METRICS_PORT", "eighty")
        with pytest.raises(ValueError, match="METRICS_PORT"):
            Config()

    def test_invalid_float_value(self, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValueError, match="REQUEST_TIMEOUT_SECONDS"):
            Config()


class TestValidation:
    @pytest.mark.parametrize(
        "attribute, value, message",
        [
            ("KUBELET_ENDPOINT", "ftp://node:10250", "KUBELET_ENDPOINT"),
            ("KUBELET_ENDPOINT", "node:10250", "KUBELET_ENDPOINT"),
            ("METRICS_PORT", 0, "METRICS_PORT"),
            ("METRICS_PORT", 70000, "METRICS_PORT"),
            ("SCRAPE_INTERVAL", "0s", "SCRAPE_INTERVAL"),
            ("REQUEST_TIMEOUT_SECONDS", 0, "REQUEST_TIMEOUT_SECONDS"),
            ("SHUTDOWN_GRACE_SECONDS", -1, "SHUTDOWN_GRACE_SECONDS"),
            ("LOG_LEVEL", "chatty", "LOG_LEVEL"),
        ],
    )
    def test_invalid_values_are_rejected(self, attribute, value, message):
        settings = Config()
        setattr(settings, attribute, value)

        with pytest.raises(ValueError, match=message):
            settings.validate_instance()

    def test_unparseable_interval_is_rejected(self):
        settings = Config()
        settings.SCRAPE_INTERVAL = "often"

        with pytest.raises(ValueError, match="Invalid duration"):
            settings.validate_instance()

    def test_insecure_mode_logs_warning(self, caplog):
        settings = Config()
        settings.INSECURE_SKIP_TLS_VERIFY = True

        with caplog.at_level(logging.WARNING):
            settings.validate_instance()

        assert "verification" in caplog.text
