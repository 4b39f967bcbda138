# src/volume_stats_exporter/core/registry.py
"""
In-memory registry holding the latest volume observations and the two
operational counters, exposed in the Prometheus text format.

The registry is an owned object: process wiring creates one instance and
hands it to both the collection loop (single writer) and the API (readers).
"""

import logging
import threading
import time
from typing import NamedTuple, Optional

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

from volume_stats_exporter.core.config import Config
from volume_stats_exporter.models.observation import LABEL_NAMES, MetricKind, ObservationSet

logger = logging.getLogger(__name__)


class RegistryState(NamedTuple):
    """One consistent view of the registry contents."""

    observations: ObservationSet
    scrape_errors_total: int
    last_scrape_timestamp_seconds: Optional[float]


class VolumeStatsRegistry:
    """
    Holds the current ObservationSet plus scrape_errors_total and
    last_scrape_timestamp_seconds.

    Writers swap the whole observation set at once; readers always get
    either the previous or the next complete set.
    """

    def __init__(self, prefix: str = Config.METRIC_PREFIX):
        self.prefix = prefix
        self._lock = threading.Lock()
        self._observations = ObservationSet()
        self._scrape_errors_total = 0
        self._last_scrape_timestamp: Optional[float] = None

        self.collector_registry = CollectorRegistry(auto_describe=False)
        self.collector_registry.register(_VolumeStatsCollector(self))

    def replace(self, observations: ObservationSet) -> None:
        """Publishes a new observation set, dropping every series not in it."""
        with self._lock:
            self._observations = observations

    def record_error(self) -> None:
        with self._lock:
            self._scrape_errors_total += 1

    def record_success(self, timestamp: Optional[float] = None) -> None:
        with self._lock:
            self._last_scrape_timestamp = time.time() if timestamp is None else timestamp

    def state(self) -> RegistryState:
        with self._lock:
            return RegistryState(
                observations=self._observations,
                scrape_errors_total=self._scrape_errors_total,
                last_scrape_timestamp_seconds=self._last_scrape_timestamp,
            )

    @property
    def observations(self) -> ObservationSet:
        return self.state().observations

    @property
    def scrape_errors_total(self) -> int:
        return self.state().scrape_errors_total

    @property
    def last_scrape_timestamp_seconds(self) -> Optional[float]:
        return self.state().last_scrape_timestamp_seconds

    @property
    def has_succeeded(self) -> bool:
        return self.last_scrape_timestamp_seconds is not None

    def render(self) -> bytes:
        """Returns the registry contents in the Prometheus text exposition format."""
        return generate_latest(self.collector_registry)


class _VolumeStatsCollector:
    """prometheus_client custom collector reading one RegistryState per scrape."""

    def __init__(self, registry: VolumeStatsRegistry):
        self._registry = registry

    def collect(self):
        state = self._registry.state()
        prefix = self._registry.prefix

        for kind in MetricKind:
            family = GaugeMetricFamily(kind.metric_name(prefix), kind.help_text, labels=LABEL_NAMES)
            for key, value in state.observations.series(kind).items():
                family.add_metric(list(key), value)
            yield family

        # No created= argument, so no _created sample is emitted.
        yield CounterMetricFamily(
            f"{prefix}_scrape_errors",
            "Total number of errors while scraping kubelet stats",
            value=state.scrape_errors_total,
        )
        yield GaugeMetricFamily(
            f"{prefix}_last_scrape_timestamp_seconds",
            "Timestamp of the last successful scrape",
            value=state.last_scrape_timestamp_seconds or 0.0,
        )
