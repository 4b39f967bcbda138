# tests/conftest.py

import copy
import json

import pytest

from tests.helpers import KUBELET_ENDPOINT, SAMPLE_SUMMARY
from volume_stats_exporter.core.config import Config
from volume_stats_exporter.core.registry import VolumeStatsRegistry
from volume_stats_exporter.models.summary import StatsSummary


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to isolate the config from the real environment.

    Runs for every test so Config() always starts from predictable values.
    """
    for key in (
        "KUBELET_ENDPOINT",
        "TOKEN_PATH",
        "INSECURE_SKIP_TLS_VERIFY",
        "REQUEST_TIMEOUT_SECONDS",
        "SCRAPE_INTERVAL",
        "METRICS_HOST",
        "METRICS_PORT",
        "SHUTDOWN_GRACE_SECONDS",
        "READY_REQUIRES_SUCCESSFUL_SCRAPE",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def token_file(tmp_path):
    """Path of a service account token file; the test decides whether to create it."""
    return tmp_path / "token"


@pytest.fixture
def settings(monkeypatch, token_file) -> Config:
    """Config pointing at a fake kubelet and a temporary token path."""
    monkeypatch.setenv("KUBELET_ENDPOINT", KUBELET_ENDPOINT)
    monkeypatch.setenv("TOKEN_PATH", str(token_file))
    return Config()


@pytest.fixture
def registry() -> VolumeStatsRegistry:
    return VolumeStatsRegistry()


@pytest.fixture
def sample_summary_dict() -> dict:
    return copy.deepcopy(SAMPLE_SUMMARY)


@pytest.fixture
def sample_summary_json(sample_summary_dict) -> str:
    return json.dumps(sample_summary_dict)


@pytest.fixture
def sample_summary(sample_summary_json) -> StatsSummary:
    return StatsSummary.model_validate_json(sample_summary_json)
