# src/volume_stats_exporter/core/config.py

import logging
import os
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from volume_stats_exporter.utils.date_utils import parse_duration

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

logger = logging.getLogger(__name__)

DEFAULT_KUBELET_ENDPOINT = "https://127.0.0.1:10250"
DEFAULT_METRICS_HOST = "0.0.0.0"
DEFAULT_METRICS_PORT = 8080
DEFAULT_SCRAPE_INTERVAL = "30s"
DEFAULT_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_SHUTDOWN_GRACE_SECONDS = 5.0

_TRUE_VALUES = ("true", "1", "t", "y", "yes", "on")


def _get_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _get_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid integer for {key}: {value}") from e


def _get_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"Invalid float for {key}: {value}") from e


class Config:
    """
    Handles the exporter's configuration by loading values from environment variables.

    Values are resolved when the instance is created so that command line
    options can override them afterwards on a per-run copy.
    """

    USER_AGENT_NAME = "kubelet-volume-stats-exporter"
    METRIC_PREFIX = "kubelet_volume_stats"

    def __init__(self):
        # --- Kubelet variables ---
        self.KUBELET_ENDPOINT = os.getenv("KUBELET_ENDPOINT", DEFAULT_KUBELET_ENDPOINT)
        self.TOKEN_PATH: Optional[str] = os.getenv("TOKEN_PATH", DEFAULT_TOKEN_PATH)
        self.INSECURE_SKIP_TLS_VERIFY = _get_bool("INSECURE_SKIP_TLS_VERIFY", False)
        self.REQUEST_TIMEOUT_SECONDS = _get_float("REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS)
        self.SCRAPE_INTERVAL = os.getenv("SCRAPE_INTERVAL", DEFAULT_SCRAPE_INTERVAL)

        # --- Metrics server variables ---
        self.METRICS_HOST = os.getenv("METRICS_HOST", DEFAULT_METRICS_HOST)
        self.METRICS_PORT = _get_int("METRICS_PORT", DEFAULT_METRICS_PORT)
        self.SHUTDOWN_GRACE_SECONDS = _get_float("SHUTDOWN_GRACE_SECONDS", DEFAULT_SHUTDOWN_GRACE_SECONDS)
        self.READY_REQUIRES_SUCCESSFUL_SCRAPE = _get_bool("READY_REQUIRES_SUCCESSFUL_SCRAPE", False)

        # --- Logging variables ---
        self.DEBUG = _get_bool("DEBUG", False)
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @property
    def SCRAPE_INTERVAL_SECONDS(self) -> float:
        return parse_duration(self.SCRAPE_INTERVAL)

    @property
    def EFFECTIVE_LOG_LEVEL(self) -> str:
        # Debug mode always wins so raw kubelet responses become visible.
        if self.DEBUG:
            return "DEBUG"
        return self.LOG_LEVEL.upper()

    @property
    def USER_AGENT(self) -> str:
        from volume_stats_exporter import __version__

        return f"{self.USER_AGENT_NAME}/{__version__}"

    @property
    def STATS_SUMMARY_URL(self) -> str:
        return f"{self.KUBELET_ENDPOINT.rstrip('/')}/stats/summary"

    def validate_instance(self):
        parsed = urlparse(self.KUBELET_ENDPOINT)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"KUBELET_ENDPOINT must be an http(s) URL, got '{self.KUBELET_ENDPOINT}'."
            )
        if not 1 <= self.METRICS_PORT <= 65535:
            raise ValueError(f"METRICS_PORT must be between 1 and 65535, got {self.METRICS_PORT}.")
        if self.SCRAPE_INTERVAL_SECONDS <= 0:
            raise ValueError(f"SCRAPE_INTERVAL must be positive, got '{self.SCRAPE_INTERVAL}'.")
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive.")
        if self.SHUTDOWN_GRACE_SECONDS < 0:
            raise ValueError("SHUTDOWN_GRACE_SECONDS must not be negative.")
        if not isinstance(logging.getLevelName(self.LOG_LEVEL.upper()), int):
            raise ValueError(f"LOG_LEVEL '{self.LOG_LEVEL}' is not a valid logging level.")
        if self.INSECURE_SKIP_TLS_VERIFY:
            logger.warning("TLS certificate verification for the kubelet endpoint is disabled.")


# Instantiate the config to be imported by other modules
config = Config()
